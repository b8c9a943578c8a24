"""
Entry point for running docsynth as a module.

Usage:
    python -m docsynth render blocks.json -o report.pdf
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
