"""
Entry point for running letterquill as a module.

Usage:
    python -m letterquill render letter.html --recipient anna.json
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main() or 0)
