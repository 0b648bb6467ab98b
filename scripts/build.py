#!/usr/bin/env python3
"""
Build script for the book.

Usage:
    python scripts/build.py build pdf        Build the PDF
    python scripts/build.py all              Build css, js, pdf, html, epub
    python scripts/build.py watch            Rebuild on change, serve dist/
    python scripts/build.py zip              Build all and package for release

Requires: pandoc, PyYAML
"""

import os
import sys
import traceback

# Ensure bookpipe is importable from the scripts/ directory
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from bookpipe.cli import main


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)
    except Exception as e:
        log_path = "build_error.log"
        with open(log_path, "w") as f:
            traceback.print_exc(file=f)
        print(f"\nUnexpected error: {e}")
        print(f"Full traceback written to {log_path}")
        sys.exit(1)
