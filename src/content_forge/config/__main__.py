"""CLI entry point for configuration introspection.

Usage:
    python -m content_forge.config
    python -m content_forge.config --json
"""

import sys

from .introspection import main

if __name__ == "__main__":
    sys.exit(main())
