"""
PdfCollate - Configuration Manager

This module provides centralized JSON-based configuration management
and the immutable EditorSettings snapshot handed to an editor session.
"""

import copy
import json
import os
from dataclasses import dataclass
from typing import Any, Final

from pdfcollate.config import (
    CONFIG_FILE_PATH,
    DEFAULT_ARCHIVE_NAME,
    DEFAULT_DOCUMENT_NAME,
    DEFAULT_PAGE_ENTRY_TEMPLATE,
    PDF_MEDIA_TYPE,
    VIEW_MODES,
)
from pdfcollate.utils.exceptions import ConfigurationError
from pdfcollate.utils.logger import logger

# Default configuration values
DEFAULT_CONFIG: Final[dict[str, Any]] = {
    "version": 1,
    "export": {
        "document_name": DEFAULT_DOCUMENT_NAME,
        "archive_name": DEFAULT_ARCHIVE_NAME,
        "page_entry_template": DEFAULT_PAGE_ENTRY_TEMPLATE,
        "output_dir": "",
    },
    "input": {
        "accepted_media_types": [PDF_MEDIA_TYPE],
    },
    "editor": {
        "view_mode": "blocks",
    },
    "logging": {
        "level": "INFO",
    },
}


class ConfigManager:
    """Manages application configuration in JSON format.

    Missing keys are filled from DEFAULT_CONFIG when an older file is
    loaded, and a corrupt file falls back to the defaults.
    """

    def __init__(self, config_path: str | None = None) -> None:
        """Initialize the configuration manager.

        Args:
            config_path: Optional path to the configuration file.
                        Defaults to CONFIG_FILE_PATH.
        """
        self.config_path = config_path or CONFIG_FILE_PATH
        self._config: dict[str, Any] = {}

        # Ensure config directory exists
        os.makedirs(os.path.dirname(os.path.abspath(self.config_path)), exist_ok=True)

        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file or create default."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, encoding="utf-8") as f:
                    self._config = json.load(f)
                logger.info("Configuration loaded from JSON")

                self._upgrade_config()

            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Error loading config: {e}")
                self._config = self._get_default_config()
        else:
            self._config = self._get_default_config()
            self.save()

    def _get_default_config(self) -> dict[str, Any]:
        """Get a deep copy of the default configuration."""
        return copy.deepcopy(DEFAULT_CONFIG)

    def _upgrade_config(self) -> None:
        """Upgrade configuration to latest version if needed."""
        current_version = self._config.get("version", 0)

        if current_version < DEFAULT_CONFIG["version"]:
            self._merge_defaults(self._config, DEFAULT_CONFIG)
            self._config["version"] = DEFAULT_CONFIG["version"]
            logger.info(f"Configuration upgraded to version {DEFAULT_CONFIG['version']}")

    def _merge_defaults(self, config: dict, defaults: dict) -> None:
        """Merge default values into config for missing keys.

        Args:
            config: Current configuration dictionary.
            defaults: Default configuration dictionary.
        """
        for key, value in defaults.items():
            if key not in config:
                config[key] = copy.deepcopy(value)
            elif isinstance(value, dict) and isinstance(config.get(key), dict):
                self._merge_defaults(config[key], value)

    def save(self) -> bool:
        """Save configuration to file.

        Returns:
            True if save was successful, False otherwise.
        """
        try:
            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=2, ensure_ascii=False)
            logger.debug("Configuration saved to JSON")
            return True
        except OSError as e:
            logger.error(f"Error saving config: {e}")
            return False

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get a configuration value by dot-separated path.

        Args:
            key_path: Dot-separated path to the config value (e.g., "export.archive_name")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self._config
        for key in key_path.split("."):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set(self, key_path: str, value: Any, save_immediately: bool = True) -> None:
        """Set a configuration value by dot-separated path.

        Args:
            key_path: Dot-separated path to the config value
            value: Value to set
            save_immediately: Whether to save to file immediately
        """
        keys = key_path.split(".")
        config = self._config

        for key in keys[:-1]:
            if key not in config:
                config[key] = {}
            config = config[key]

        config[keys[-1]] = value

        if save_immediately:
            self.save()


@dataclass(frozen=True)
class EditorSettings:
    """Settings snapshot passed explicitly into an EditorSession.

    Attributes:
        document_name: Default base name for the composed PDF
        archive_name: Default base name for the split archive
        page_entry_template: Archive entry name, formatted with ``position``
        output_dir: Directory where artifacts are written ("" = current dir)
        accepted_media_types: Media types accepted at the input boundary
        view_mode: Preview layout, "blocks" or "list"
        log_level: Logging level name
    """

    document_name: str = DEFAULT_DOCUMENT_NAME
    archive_name: str = DEFAULT_ARCHIVE_NAME
    page_entry_template: str = DEFAULT_PAGE_ENTRY_TEMPLATE
    output_dir: str = ""
    accepted_media_types: tuple[str, ...] = (PDF_MEDIA_TYPE,)
    view_mode: str = "blocks"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate values that would break exports or previews."""
        if self.view_mode not in VIEW_MODES:
            raise ConfigurationError(
                "editor.view_mode", f"expected one of {', '.join(VIEW_MODES)}"
            )
        if "{position}" not in self.page_entry_template:
            raise ConfigurationError(
                "export.page_entry_template", "template must contain '{position}'"
            )
        if not self.accepted_media_types:
            raise ConfigurationError("input.accepted_media_types", "list must not be empty")
        if not self.document_name or not self.archive_name:
            raise ConfigurationError("export", "artifact names must not be empty")

    @classmethod
    def from_config(cls, manager: ConfigManager) -> "EditorSettings":
        """Build settings from a ConfigManager, falling back to defaults.

        Raises:
            ConfigurationError: If a stored value is invalid.
        """
        defaults = cls()
        return cls(
            document_name=manager.get("export.document_name", defaults.document_name),
            archive_name=manager.get("export.archive_name", defaults.archive_name),
            page_entry_template=manager.get(
                "export.page_entry_template", defaults.page_entry_template
            ),
            output_dir=manager.get("export.output_dir", defaults.output_dir) or "",
            accepted_media_types=tuple(
                manager.get("input.accepted_media_types", defaults.accepted_media_types)
            ),
            view_mode=manager.get("editor.view_mode", defaults.view_mode),
            log_level=manager.get("logging.level", defaults.log_level),
        )


# Singleton instance for global access
_config_manager: ConfigManager | None = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance.

    Returns:
        The singleton ConfigManager instance
    """
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager
