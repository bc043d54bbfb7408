"""
Package entry point.

Allows running the application via:

    python -m proftafla

This simply forwards execution to proftafla.cli.main().
"""

from proftafla.cli import main

if __name__ == "__main__":
    main()
