"""
Rendering of documentation models.
"""

from .render import TEMPLATES_DIR, builtin_templates, inject, render

__all__ = ["TEMPLATES_DIR", "builtin_templates", "inject", "render"]
