"""
CLI command modules.
"""

from . import core_commands, utility_commands

__all__ = [
    "core_commands",
    "utility_commands",
]
