#!/usr/bin/env python3
"""
puppy-engine - Main entry point when run from a source checkout.
"""

import sys

from puppy_engine.main import main

if __name__ == "__main__":
    sys.exit(main())
