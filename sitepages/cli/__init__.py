"""Command-line interface for editing the pages of an HTML document.

This package provides the `site-pages` CLI tool that loads an HTML file,
applies page registry and membership operations through PageManager, and
saves the result.
"""

from .config import ConfigLoader
from .models import ExitCode, SitePagesConfig
from .errors import (
    CLIError,
    ConfigError,
    ConfigFilesystemError,
    SelectorError,
)

__all__ = [
    'ConfigLoader',
    'ExitCode',
    'SitePagesConfig',
    'CLIError',
    'ConfigError',
    'ConfigFilesystemError',
    'SelectorError',
]
