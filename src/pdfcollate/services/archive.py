"""
PdfCollate - Archive Writer

In-memory ZIP archive used by the split export.
"""

import logging
import zipfile
from io import BytesIO

logger = logging.getLogger(__name__)


class ZipArchive:
    """Collects named entries and produces the archive bytes once."""

    def __init__(self) -> None:
        self._buffer = BytesIO()
        self._zip: zipfile.ZipFile | None = zipfile.ZipFile(
            self._buffer, "w", compression=zipfile.ZIP_DEFLATED
        )
        self._names: list[str] = []

    @property
    def entry_names(self) -> list[str]:
        return list(self._names)

    def add_entry(self, name: str, data: bytes) -> None:
        """Add one file to the archive.

        Raises:
            ValueError: If the name is already used or the archive is finalized
        """
        if self._zip is None:
            raise ValueError("Archive already finalized")
        if name in self._names:
            raise ValueError(f"Duplicate archive entry: {name}")
        self._zip.writestr(name, data)
        self._names.append(name)

    def finalize(self) -> bytes:
        """Close the archive and return its bytes."""
        if self._zip is not None:
            self._zip.close()
            self._zip = None
            logger.debug("Archive finalized with %d entries", len(self._names))
        return self._buffer.getvalue()

    def __len__(self) -> int:
        return len(self._names)
