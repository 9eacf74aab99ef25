"""
PdfCollate - Rotation helpers

Shared by the page model and the PDF codec.
"""

from pdfcollate.config import VALID_ROTATIONS


def normalize_rotation(degrees: int) -> int:
    """Normalize an angle to one of 0, 90, 180 or 270."""
    rotation = degrees % 360
    if rotation not in VALID_ROTATIONS:
        # Round to nearest valid rotation
        rotation = round(rotation / 90) * 90 % 360
    return rotation
