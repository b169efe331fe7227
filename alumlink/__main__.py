"""Main entry point when executing alumlink as a package.

This allows running the package using python -m alumlink.
"""

from alumlink.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
