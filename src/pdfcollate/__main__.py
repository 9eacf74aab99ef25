#!/usr/bin/env python3
"""
PdfCollate - Entry point for python -m pdfcollate

This module allows the package to be run as a module:
    python -m pdfcollate
"""

import sys

from pdfcollate.cli import main

if __name__ == "__main__":
    sys.exit(main())
