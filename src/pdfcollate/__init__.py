"""
PdfCollate - Python package for combining and splitting PDF pages

This package keeps an ordered collection of pages drawn from several PDF
documents, lets them be selected, rotated, deleted and reordered, and
exports the result as one composed PDF or as a ZIP of single-page PDFs.
"""

__version__ = "1.0.0"
__license__ = "GPL-3.0"

__all__ = ["__version__", "__license__"]
