"""Configuration loaded from an INI file."""

from configparser import ConfigParser
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

DEFAULT_CONFIG_PATH = Path("modbus_decode.ini")


@dataclass(frozen=True)
class DecoderSettings:
    """Resolved settings for a decode run."""

    swapped_word_order: bool = True
    log_level: str = "INFO"
    log_dir: Optional[Path] = None


class ConfigManager:
    """Manages decoder configuration from INI file."""

    def __init__(self, config_path: Union[str, Path, None] = None):
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self.config = ConfigParser()

    def load(self) -> ConfigParser:
        """Load config file; a missing file leaves every value at its default."""
        self.config.read(self.config_path)
        return self.config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> str:
        """Get config value with fallback."""
        return self.config.get(section, key, fallback=fallback or "")

    def getbool(self, section: str, key: str, fallback: bool = False) -> bool:
        """Get boolean config value."""
        return self.config.getboolean(section, key, fallback=fallback)

    def settings(self) -> DecoderSettings:
        """
        Resolve the decoder settings.

        Returns:
            Settings with defaults for anything the file does not set.

        Raises:
            ValueError: If a boolean option holds something other than a
                boolean literal.
        """
        defaults = DecoderSettings()
        log_dir = self.get("logging", "log_dir").strip()
        return DecoderSettings(
            swapped_word_order=self.getbool(
                "decoder", "swapped_word_order", defaults.swapped_word_order
            ),
            log_level=self.get("logging", "level", defaults.log_level).strip().upper(),
            log_dir=Path(log_dir) if log_dir else None,
        )


def load_settings(config_path: Union[str, Path, None] = None) -> DecoderSettings:
    """Load settings from `config_path` (default: ./modbus_decode.ini)."""
    manager = ConfigManager(config_path)
    manager.load()
    return manager.settings()
