"""
PdfCollate - Custom Exceptions Module

This module defines custom exception classes for specific error cases
in the PdfCollate application.
"""


class PdfCollateError(Exception):
    """Base exception for all PdfCollate errors.

    All custom exceptions should inherit from this class to allow
    catching any PdfCollate-specific error.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional technical details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class LoadError(PdfCollateError):
    """Raised when a selected file is not a loadable PDF document."""

    def __init__(self, file_name: str, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            file_name: Display name of the file that failed to load
            reason: Optional reason why loading failed
        """
        self.file_name = file_name
        self.reason = reason
        msg = f"Could not load {file_name}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg, details=f"file={file_name}")


class DocumentParseError(PdfCollateError):
    """Raised by the codec when bytes cannot be parsed as a PDF document."""

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason
        msg = "Invalid PDF document"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class DocumentWriteError(PdfCollateError):
    """Raised by the codec when a page or document cannot be modified or saved."""

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason
        msg = "Could not write PDF document"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class PageCopyError(PdfCollateError):
    """Raised by the codec when a page cannot be copied between documents."""

    def __init__(self, page_index: int, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            page_index: Zero-based index of the page in its source document
            reason: Optional reason for the failure
        """
        self.page_index = page_index
        self.reason = reason
        msg = f"Could not copy page {page_index}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg, details=f"page_index={page_index}")


class ExportPageError(PdfCollateError):
    """Raised when a single page is skipped during compose or split."""

    def __init__(self, page_id: object, reason: str | None = None) -> None:
        self.page_id = page_id
        self.reason = reason
        msg = f"Page {page_id} could not be exported"
        if reason:
            msg += f": {reason}"
        super().__init__(msg, details=f"page={page_id}")


class ExportFatalError(PdfCollateError):
    """Raised when an export produced no page at all and was aborted."""

    def __init__(self, operation: str, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            operation: Export operation name ("compose" or "split")
            reason: Optional reason for the failure
        """
        self.operation = operation
        self.reason = reason
        msg = f"Export '{operation}' failed"
        if reason:
            msg += f": {reason}"
        super().__init__(msg, details=f"operation={operation}")


class ExportInProgressError(PdfCollateError):
    """Raised when an export is requested while another one is running."""

    def __init__(self, operation: str, running: str | None = None) -> None:
        self.operation = operation
        self.running = running
        msg = f"Cannot start '{operation}': an export is already in progress"
        details = f"running={running}" if running else None
        super().__init__(msg, details=details)


class PageNotFoundError(PdfCollateError):
    """Raised when an operation references a page id that is not in the collection."""

    def __init__(self, page_id: object) -> None:
        self.page_id = page_id
        super().__init__(f"Page not found: {page_id}", details=f"page={page_id}")


class ConfigurationError(PdfCollateError):
    """Raised when there's a configuration-related error."""

    def __init__(self, setting_name: str | None = None, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            setting_name: Optional name of the problematic setting
            reason: Optional reason for the error
        """
        self.setting_name = setting_name
        self.reason = reason

        if setting_name:
            msg = f"Configuration error for '{setting_name}'"
        else:
            msg = "Configuration error"

        if reason:
            msg += f": {reason}"

        super().__init__(msg)


# Exception hierarchy summary:
# PdfCollateError (base)
# ├── LoadError
# ├── DocumentParseError
# ├── DocumentWriteError
# ├── PageCopyError
# ├── ExportPageError
# ├── ExportFatalError
# ├── ExportInProgressError
# ├── PageNotFoundError
# └── ConfigurationError
