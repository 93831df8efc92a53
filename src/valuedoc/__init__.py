"""
valuedoc - Reference documentation from annotated YAML values files

Comments in a values file carry ``docs:`` directives; valuedoc walks the
file, builds a documentation model of its sections and properties, and
renders it into an existing README between two markers.
"""

__version__ = "0.1.0"
__author__ = "valuedoc Team"
__description__ = "Reference documentation from annotated YAML values files"
