"""Page registry and membership model.

This package keeps the page registry, the per-element membership markers
and the links pointing at pages consistent while a document is edited.

Key classes:
    PageManager: Enumerates, activates, creates, renames and removes pages
    MarkerVocabulary: Names of the markers encoding pages in a document
    PageInfo: Registry entry summary for views and the CLI
"""

from .errors import (
    SitePagesError,
    PageModelError,
    NotFoundError,
    PageNotFoundError,
    DocumentNotAttachedError,
    InvalidPageArgumentError,
    DuplicatePageIdError,
    DocumentFilesystemError,
)
from .models import DEFAULT_VOCABULARY, MarkerVocabulary, PageInfo
from .protocols import MarkableElement, PageDocument, RedrawListener
from .page_manager import PageManager

__all__ = [
    # Main interface
    "PageManager",
    # Data models
    "MarkerVocabulary",
    "DEFAULT_VOCABULARY",
    "PageInfo",
    # Capabilities
    "MarkableElement",
    "PageDocument",
    "RedrawListener",
    # Errors
    "SitePagesError",
    "PageModelError",
    "NotFoundError",
    "PageNotFoundError",
    "DocumentNotAttachedError",
    "InvalidPageArgumentError",
    "DuplicatePageIdError",
    "DocumentFilesystemError",
]
