"""Configuration management for temporary fixtures."""

import codecs
import copy
import os
import logging
from typing import Dict, Any

import yaml

from temporary_fixture.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = ".tempfixture.yml"


class Config:
    """Configuration management for temporary fixtures."""

    DEFAULT_CONFIG = {
        'fixtures': {
            'keep_fixture': False,        # Keep created directories after the test ends
            'temp_prefix': 'tmpfixture_',  # Name prefix for allocated temporary roots
            'encoding': 'utf-8',          # Encoding for text file content
        }
    }

    def __init__(self, config_file: str = DEFAULT_CONFIG_FILE):
        self.config_file = config_file
        self.config = self.load_config()

    def load_config(self) -> Dict[str, Any]:
        """Load configuration from file or use defaults."""
        # When config_file is None or falsy, skip file I/O and return defaults
        if not self.config_file:
            return copy.deepcopy(self.DEFAULT_CONFIG)
        if os.path.exists(self.config_file):
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    user_config = yaml.safe_load(f)
                    # yaml.safe_load returns None for an empty file
                    if not user_config:
                        return copy.deepcopy(self.DEFAULT_CONFIG)
                    if not isinstance(user_config, dict):
                        logger.warning(f"Ignoring {self.config_file}: top level must be a mapping")
                        return copy.deepcopy(self.DEFAULT_CONFIG)
                    return self._deep_merge(self.DEFAULT_CONFIG, user_config)
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {self.config_file}: {e}")
        return copy.deepcopy(self.DEFAULT_CONFIG)

    def validate(self) -> None:
        """
        Check the fixture settings.

        Raises:
            ConfigurationError: If a setting has an unusable value
        """
        prefix = self.get('fixtures.temp_prefix')
        if not isinstance(prefix, str) or os.sep in prefix or '/' in prefix:
            raise ConfigurationError(
                f"Invalid fixtures.temp_prefix: {prefix!r}",
                suggestion="Use a plain file name prefix such as 'tmpfixture_'."
            )

        encoding = self.get('fixtures.encoding')
        try:
            codecs.lookup(encoding)
        except (LookupError, TypeError):
            raise ConfigurationError(
                f"Unknown fixtures.encoding: {encoding!r}",
                suggestion="Use a codec name such as 'utf-8' or 'latin-1'."
            ) from None

        if not isinstance(self.get('fixtures.keep_fixture'), bool):
            raise ConfigurationError(
                "fixtures.keep_fixture must be true or false",
                suggestion="Set 'keep_fixture: false' in the configuration file."
            )

    def create_sample_config(self, filepath: str = DEFAULT_CONFIG_FILE) -> None:
        """Create a configuration file with all options and explanations."""
        config_content = """# Temporary fixture configuration

fixtures:
  # Keep fixture directories after the test finishes (useful for debugging).
  # The pytest option --keep-fixtures overrides this for a single run.
  keep_fixture: false

  # Prefix for the directories allocated under the OS temp directory
  temp_prefix: 'tmpfixture_'

  # Encoding used when a file fixture is given as text
  encoding: 'utf-8'
"""

        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(config_content)

        logger.info(f"Configuration created at {filepath}")

    def get(self, key: str, default=None):
        """Get configuration value using dot notation."""
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def _deep_merge(self, default: Dict, user: Dict) -> Dict:
        """Deeply merge user config with defaults."""
        result = copy.deepcopy(default)

        for key, value in user.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
