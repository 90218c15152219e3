"""
Main entry point for the cache_warmer package.

Allows running the warmer as: python -m cache_warmer
"""

import sys

from cache_warmer.cli import main

if __name__ == "__main__":
    sys.exit(main())
