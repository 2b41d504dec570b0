"""Configuration persistence for Stamp Maker.

This module handles loading and saving of the tunable settings to/from JSON files.
"""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from SM_Libs.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_JSON_INDENT,
    DEFAULT_ROW_CHUNK,
    LETTER_LINE_MIN_SPACING,
    MAX_UPLOAD_BYTES,
)

logger = logging.getLogger(__name__)

# Configuration file path
CONFIG_FILE = Path.home() / CONFIG_FILE_NAME


@dataclass
class StampMakerConfig:
    """Tunable settings."""

    max_upload_bytes: int = MAX_UPLOAD_BYTES  # largest accepted source PNG
    row_chunk: int = DEFAULT_ROW_CHUNK  # rows per color-to-alpha block
    letter_line_min_spacing: int = LETTER_LINE_MIN_SPACING  # px
    embed_data_url: bool = True  # imageData as data:image/png;base64,...
    json_indent: int = DEFAULT_JSON_INDENT
    strict_ordering: bool = False  # reject header/footer/baseline ordering issues on export
    output_dir: str = "."

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StampMakerConfig":
        """Create from dictionary, ignoring unknown keys and keeping defaults for bad values."""
        config = cls()
        for field in fields(cls):
            if field.name not in data:
                continue
            value = data[field.name]
            default = getattr(config, field.name)
            if isinstance(default, bool):
                valid = isinstance(value, bool)
            elif isinstance(default, int):
                valid = isinstance(value, int) and not isinstance(value, bool) and value >= 0
            else:
                valid = isinstance(value, type(default))
            if valid:
                setattr(config, field.name, value)
            else:
                logger.warning(f"Ignoring invalid config value {field.name}={value!r}")

        if config.row_chunk < 1:
            logger.warning(f"row_chunk must be >= 1, using {DEFAULT_ROW_CHUNK}")
            config.row_chunk = DEFAULT_ROW_CHUNK
        return config


class ConfigManager:
    """Handles loading and saving of Stamp Maker configuration."""

    def __init__(self, config_path: Path = CONFIG_FILE):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file (defaults to ~/.stamp_maker.json)
        """
        self.config_path = Path(config_path)

    def load(self) -> StampMakerConfig:
        """Load configuration from file, returning defaults if not found or unreadable.

        Returns:
            StampMakerConfig with loaded or default values
        """
        if not self.config_path.exists():
            return StampMakerConfig()

        try:
            data = json.loads(self.config_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not load config file {self.config_path}: {e}")
            return StampMakerConfig()

        if not isinstance(data, dict):
            logger.warning(f"Config file {self.config_path} does not contain a JSON object")
            return StampMakerConfig()

        logger.info(f"Loaded configuration from {self.config_path}")
        return StampMakerConfig.from_dict(data)

    def save(self, config: StampMakerConfig) -> Optional[str]:
        """Save configuration to file.

        Args:
            config: StampMakerConfig to save

        Returns:
            None on success, otherwise the error message
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            logger.error(f"Could not save config file {self.config_path}: {e}")
            return str(e)
        return None
