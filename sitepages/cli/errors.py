"""Typed exception hierarchy for CLI-related errors.

All exceptions inherit from CLIError and include descriptive messages with
context to help with debugging.
"""

from typing import Optional

from sitepages.page_model.errors import SitePagesError


class CLIError(SitePagesError):
    """Base exception for all CLI-related errors."""
    pass


class ConfigError(CLIError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class ConfigFilesystemError(CLIError):
    """Raised when the configuration file cannot be read."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Config file operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class SelectorError(CLIError):
    """Raised when a CSS selector is invalid or matches nothing."""

    def __init__(self, selector: str, reason: str):
        super().__init__(f"Selector '{selector}' {reason}")
        self.selector = selector
        self.reason = reason
