"""
Package entry point.

Allows running the application via:

    python -m coursetable

This simply forwards execution to coursetable.cli.main().
"""

from coursetable.cli import main

if __name__ == "__main__":
    main()
