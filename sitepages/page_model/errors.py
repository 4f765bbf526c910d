"""Typed exception hierarchy for page model errors.

This module defines all custom exceptions raised by the page registry and
membership manager. All exceptions inherit from SitePagesError so callers
can catch any application-level error in one place, and carry the offending
page id or argument as attributes to help with debugging.
"""

from typing import Optional


class SitePagesError(Exception):
    """Base exception for all site-pages errors.

    Use this to catch any application-level error from the tool.
    """
    pass


class PageModelError(SitePagesError):
    """Base exception for all page model errors."""
    pass


class NotFoundError(PageModelError):
    """Raised when an operation references something that does not exist."""
    pass


class PageNotFoundError(NotFoundError):
    """Raised when a page id is absent from the page registry."""

    def __init__(self, page_id: str):
        super().__init__(f"Page '{page_id}' not found")
        self.page_id = page_id


class DocumentNotAttachedError(NotFoundError):
    """Raised when the document root is unavailable (host not yet attached)."""

    def __init__(self, message: str = "Document root is not available"):
        super().__init__(message)


class InvalidPageArgumentError(PageModelError):
    """Raised when a page id or display name is malformed or empty."""

    def __init__(self, message: str, argument: Optional[str] = None):
        if argument:
            full_message = f"Invalid argument '{argument}': {message}"
        else:
            full_message = f"Invalid argument: {message}"
        super().__init__(full_message)
        self.argument = argument
        self.original_message = message


class DuplicatePageIdError(PageModelError):
    """Raised when creating or renaming a page would collide with an existing id."""

    def __init__(self, page_id: str):
        super().__init__(f"Page '{page_id}' already exists")
        self.page_id = page_id


class DocumentFilesystemError(SitePagesError):
    """Raised when reading or writing an HTML document fails."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Document operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason
