"""YAML configuration loading and validation.

This module loads the `site-pages` configuration from a YAML file. The
configuration lets a project override the marker vocabulary (for documents
produced by other tools) and set defaults for the CLI commands.

Configuration file structure:
    vocabulary:
      link_attribute: "data-silex-href"
      link_prefix: "#!"
    delete_orphans: false
    encoding: "utf-8"

A missing file is not an error: the defaults are used.
"""

import codecs
import logging
import os
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from sitepages.page_model.models import MarkerVocabulary

from .errors import ConfigError, ConfigFilesystemError
from .models import SitePagesConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Handles configuration file discovery, loading and validation."""

    DEFAULT_CONFIG_DIR = '.site-pages'
    DEFAULT_CONFIG_FILE = 'config.yaml'
    ENV_VAR = 'SITE_PAGES_CONFIG'

    KNOWN_FIELDS = {'vocabulary', 'delete_orphans', 'encoding'}

    @classmethod
    def default_path(cls) -> str:
        return os.path.join(cls.DEFAULT_CONFIG_DIR, cls.DEFAULT_CONFIG_FILE)

    @classmethod
    def resolve_path(cls, config_path: Optional[str] = None) -> str:
        """Pick the config file: explicit path, then $SITE_PAGES_CONFIG, then default.

        The environment may be provided through a .env file.
        """
        if config_path:
            return config_path
        load_dotenv()
        return os.getenv(cls.ENV_VAR) or cls.default_path()

    @classmethod
    def load(cls, config_path: str) -> SitePagesConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            SitePagesConfig with parsed configuration (defaults if file missing)

        Raises:
            ConfigFilesystemError: If file exists but cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            logger.debug(f"No configuration at {config_path}, using defaults")
            return SitePagesConfig()
        except PermissionError:
            raise ConfigFilesystemError(config_path, 'read', 'Permission denied')
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigFilesystemError(config_path, 'read', str(e))

        if not content.strip():
            return SitePagesConfig()

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            return SitePagesConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        logger.info(f"Loaded configuration from {config_path}")
        return cls._parse_config(config_dict)

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> SitePagesConfig:
        """Parse and validate a configuration dictionary.

        Raises:
            ConfigError: If configuration is invalid
        """
        unknown = set(config_dict) - cls.KNOWN_FIELDS
        if unknown:
            raise ConfigError(
                f"Unknown field(s): {', '.join(sorted(str(k) for k in unknown))}"
            )

        vocabulary = cls._parse_vocabulary(config_dict.get('vocabulary'))

        delete_orphans = config_dict.get('delete_orphans', False)
        if not isinstance(delete_orphans, bool):
            raise ConfigError(
                f"Field 'delete_orphans' must be a boolean, got {type(delete_orphans).__name__}",
                'delete_orphans'
            )

        encoding = config_dict.get('encoding', 'utf-8')
        if not isinstance(encoding, str) or not encoding.strip():
            raise ConfigError("Field 'encoding' must be a non-empty string", 'encoding')
        try:
            codecs.lookup(encoding)
        except LookupError:
            raise ConfigError(f"Unknown encoding '{encoding}'", 'encoding')

        return SitePagesConfig(
            vocabulary=vocabulary,
            delete_orphans=delete_orphans,
            encoding=encoding.strip(),
        )

    @classmethod
    def _parse_vocabulary(cls, vocabulary_dict: Any) -> MarkerVocabulary:
        if vocabulary_dict is None:
            return MarkerVocabulary()

        if not isinstance(vocabulary_dict, dict):
            raise ConfigError(
                f"Field 'vocabulary' must be a dictionary, got {type(vocabulary_dict).__name__}",
                'vocabulary'
            )

        allowed = MarkerVocabulary.field_names()
        overrides = {}
        for key, value in vocabulary_dict.items():
            if key not in allowed:
                raise ConfigError(f"Unknown marker '{key}'", 'vocabulary')
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(
                    f"Marker '{key}' must be a non-empty string",
                    f'vocabulary.{key}'
                )
            if any(char.isspace() for char in value):
                raise ConfigError(
                    f"Marker '{key}' cannot contain whitespace",
                    f'vocabulary.{key}'
                )
            overrides[key] = value

        return MarkerVocabulary(**overrides)
