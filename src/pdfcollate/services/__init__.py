"""
PdfCollate - Services Package

PDF codec, archive writer, source loading and export services.
"""
