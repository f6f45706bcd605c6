#!/usr/bin/env python3
"""
Convenience entry point for headless runs.

Usage:
    python run.py                       # Default preset
    python run.py --list                # List presets
    python run.py --preset "Book 3"     # Run a specific preset
"""

import sys

from boidsim.tools.run import main

if __name__ == "__main__":
    sys.exit(main())
