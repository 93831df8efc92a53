#!/usr/bin/env python3
"""
valuedoc - Reference documentation from annotated YAML values files

Main entry point for the command line interface.
"""

from valuedoc.cli import app

if __name__ == "__main__":
    app()
