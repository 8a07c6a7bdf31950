#!/usr/bin/env python3
"""Wrapped CLI entry point.

This file allows running wrapped directly:
    python wrapped.py gen

For installed usage, use:
    wrapped gen
"""

import sys
from wrapped.cli import main

if __name__ == "__main__":
    sys.exit(main())
