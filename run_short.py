#!/usr/bin/env python3
"""
Main CLI entrypoint for Short Factory.

This is a convenience wrapper that imports and runs the short video pipeline.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from short_factory.pipelines.run_short import main

if __name__ == "__main__":
    sys.exit(main())
