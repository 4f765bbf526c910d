"""Test fixtures for the page model and the CLI.

This module provides sample HTML documents with page registries,
paged elements and page links.
"""

from .sample_documents import (
    SAMPLE_SITE,
    SAMPLE_SITE_NO_CURRENT,
    SAMPLE_EMPTY_SITE,
    SAMPLE_FRAGMENT,
    SAMPLE_CUSTOM_VOCABULARY,
    SAMPLE_SITE_CLASS_COLLISION,
    SAMPLE_SITE_STALE_CURRENT,
)

__all__ = [
    "SAMPLE_SITE",
    "SAMPLE_SITE_NO_CURRENT",
    "SAMPLE_EMPTY_SITE",
    "SAMPLE_FRAGMENT",
    "SAMPLE_CUSTOM_VOCABULARY",
    "SAMPLE_SITE_CLASS_COLLISION",
    "SAMPLE_SITE_STALE_CURRENT",
]
