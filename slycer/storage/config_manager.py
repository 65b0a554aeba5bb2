"""
Manages loading and saving of the optional INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from slycer.exceptions import ConfigurationError
from slycer.models.config import SlycerConfig

log = logging.getLogger(__name__)

BOOL_KEYS = {"yes", "keep", "numbers", "prefix_name", "tag_tracks"}
INT_KEYS = {"log_lines"}
FLOAT_KEYS = {"min_chapter_seconds"}
OPTIONAL_KEYS = {"dest", "prefix"}


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_config(self, cli_options: dict[str, Any] | None = None) -> SlycerConfig:
        """
        Loads configuration from the INI file (if present), applies CLI
        overrides, and validates it.

        Args:
            cli_options: A dictionary of options provided via the command line.
                Keys whose value is None are ignored.

        Returns:
            A validated SlycerConfig object.

        Raises:
            ConfigurationError: If the file cannot be parsed or validation fails.
        """
        config_data: dict[str, Any] = {}
        if self.config_file_path.is_file():
            try:
                self._parser.read(self.config_file_path, encoding="utf-8")
            except configparser.Error as e:
                raise ConfigurationError(
                    f"Error parsing configuration file: {e}"
                ) from e
            config_data = self._get_config_as_dict()
        else:
            log.debug(f"No config file at '{self.config_file_path}', using defaults")

        if cli_options:
            config_data.update(
                {key: value for key, value in cli_options.items() if value is not None}
            )

        try:
            return SlycerConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def save_new_config(self, settings: dict[str, Any] | None = None) -> None:
        """
        Creates and saves a new configuration file with every known key.

        Args:
            settings: Values to write instead of the model defaults.
        """
        settings = settings or {}
        config = configparser.ConfigParser(interpolation=None)
        config["DEFAULT"] = {}
        defaults = SlycerConfig()

        for key in sorted(SlycerConfig.get_ini_keys()):
            value = settings.get(key, getattr(defaults, key))
            if isinstance(value, bool):
                config["DEFAULT"][key] = "true" if value else "false"
            elif value is None:
                config["DEFAULT"][key] = ""
            else:
                config["DEFAULT"][key] = str(value)

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                config.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the known keys of the 'DEFAULT' section into a dictionary."""
        section = self._parser["DEFAULT"]
        known_keys = SlycerConfig.get_ini_keys()
        data: dict[str, Any] = {}
        for key in section:
            if key not in known_keys:
                log.warning(f"[yellow]Ignoring unknown config key '{key}'.[/yellow]")
                continue
            try:
                if key in BOOL_KEYS:
                    data[key] = section.getboolean(key)
                elif key in INT_KEYS:
                    data[key] = section.getint(key)
                elif key in FLOAT_KEYS:
                    data[key] = section.getfloat(key)
                elif key in OPTIONAL_KEYS:
                    data[key] = section.get(key) or None
                else:
                    data[key] = section.get(key)
            except ValueError as e:
                raise ConfigurationError(f"Invalid value for '{key}': {e}") from e
        return data
