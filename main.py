# main.py
"""
The main entry point for generating a game report from a source checkout.

Installed copies use the `chess-reporter` console script instead.
"""
import sys

from chess_reporter.cli import main

if __name__ == "__main__":
    sys.exit(main())
