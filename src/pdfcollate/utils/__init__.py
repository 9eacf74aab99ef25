"""
PdfCollate - Utils Package

Logging, configuration, exceptions and translation helpers.
"""
