"""Data models for CLI operations.

This module defines the exit codes and the configuration model used by
the `site-pages` command.
"""

from dataclasses import dataclass, field
from enum import IntEnum

from sitepages.page_model.models import DEFAULT_VOCABULARY, MarkerVocabulary


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): Config, filesystem or unexpected failure
    - INVALID_ARGUMENT (2): Malformed or duplicate page id, bad selector
    - NOT_FOUND (3): Page or document root not found

    Example:
        >>> raise typer.Exit(ExitCode.NOT_FOUND)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_ARGUMENT = 2
    NOT_FOUND = 3


@dataclass
class SitePagesConfig:
    """Settings loaded from .site-pages/config.yaml.

    Attributes:
        vocabulary: Marker and attribute names used to encode pages
        delete_orphans: Delete elements left on no page by `remove`
        encoding: Encoding of the HTML files read and written

    Example:
        >>> config = SitePagesConfig()
        >>> config.vocabulary.link_prefix
        '#!'
    """
    vocabulary: MarkerVocabulary = field(default_factory=lambda: DEFAULT_VOCABULARY)
    delete_orphans: bool = False
    encoding: str = "utf-8"
