#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four game and analysis tools

Examples:
    python run.py play --difficulty easy
    python run.py analyze --moves 3,3,4,4,5
    python run.py --debug benchmark --moves 5
"""

import sys

from connectfour.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
