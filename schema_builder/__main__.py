"""
Entry point for running the schema builder as a module.

Usage: python -m schema_builder <command> [options]
"""

from schema_builder.cli import app

if __name__ == "__main__":
    app()
