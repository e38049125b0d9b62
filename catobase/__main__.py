"""Main entry point for catobase.

This allows the package to be run as:
    python -m catobase
"""

from .cli.main import cli

if __name__ == "__main__":
    cli()
