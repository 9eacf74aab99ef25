#!/usr/bin/env python3
"""
PdfCollate - Configuration Module

This module contains all configuration constants and paths used by the application.
"""

import logging
import os
from typing import Final

from pdfcollate.utils.i18n import _

# ============================================================================
# Application Constants
# ============================================================================

APP_NAME: Final[str] = "PdfCollate"
APP_ID: Final[str] = "pdfcollate"
APP_VERSION: Final[str] = "1.0.0"
APP_DESCRIPTION: Final[str] = _(
    "Combine, reorder, rotate and split pages from several PDF documents"
)


# ============================================================================
# Input / Output Constants
# ============================================================================

PDF_MEDIA_TYPE: Final[str] = "application/pdf"
ZIP_MEDIA_TYPE: Final[str] = "application/zip"

DEFAULT_DOCUMENT_NAME: Final[str] = "documento-organizado"
DEFAULT_ARCHIVE_NAME: Final[str] = "paginas-separadas"
DEFAULT_PAGE_ENTRY_TEMPLATE: Final[str] = "pagina-{position}.pdf"

VALID_ROTATIONS: Final[tuple[int, ...]] = (0, 90, 180, 270)
VIEW_MODES: Final[tuple[str, ...]] = ("blocks", "list")


# ============================================================================
# Configuration Directory
# ============================================================================

CONFIG_DIR: Final[str] = os.path.expanduser("~/.config/pdfcollate")
CONFIG_FILE_PATH: Final[str] = os.path.join(CONFIG_DIR, "settings.json")


# ============================================================================
# Logging Configuration
# ============================================================================

LOG_LEVEL: int = logging.INFO
LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGER_NAME: Final[str] = "PdfCollate"
