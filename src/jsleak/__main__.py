#!/usr/bin/env python3
"""
Allow running jsleak as a module: python -m jsleak
"""

from jsleak.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
