"""
Core components of valuedoc.
"""
