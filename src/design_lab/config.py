"""Configuration management for Design Lab."""

import os
from pathlib import Path
from dataclasses import dataclass, asdict
from typing import Optional
import logging

import yaml

from .token_engine import Selection

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "DESIGN_LAB_HOME"
DEFAULT_DATA_DIR = "~/.design_lab"


def default_data_dir() -> str:
    return os.environ.get(HOME_ENV_VAR, DEFAULT_DATA_DIR)


@dataclass
class ConfigModel:
    """Global configuration model for Design Lab."""

    # Starting selection
    default_theme: str = "flat-modern"
    default_palette: str = "default"
    default_font: str = "inter"
    base_font_size: float = 16
    type_scale: float = 1.25
    spacing_unit: float = 4
    animation_speed: str = "normal"

    # Export and sharing
    default_export_format: str = "css"
    share_base_url: str = "http://localhost:5173/"
    stylesheet_path: str = ""

    # History
    history_capacity: int = 10

    # File paths
    data_dir: str = ""

    def __post_init__(self):
        """Post-initialization setup."""
        self.data_dir = os.path.expanduser(self.data_dir or default_data_dir())
        if not self.stylesheet_path:
            self.stylesheet_path = str(Path(self.data_dir) / "tokens.css")
        self.stylesheet_path = os.path.expanduser(self.stylesheet_path)

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        return yaml.dump(asdict(self), default_flow_style=False, sort_keys=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML, ignoring unknown keys."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a mapping")

        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**{key: value for key, value in data.items() if key in known})

    def default_selection(self, dark_mode: bool = False) -> Selection:
        """Selection the application starts from."""
        return Selection(
            theme=self.default_theme,
            palette=self.default_palette,
            font=self.default_font,
            dark_mode=dark_mode,
            base_font_size=self.base_font_size,
            type_scale=self.type_scale,
            spacing_unit=self.spacing_unit,
            animation_speed=self.animation_speed,
        )

    def get_config_path(self) -> Path:
        """Get the config file path."""
        return Path(self.data_dir) / "config.yaml"

    def get_preferences_path(self) -> Path:
        """Get the preference store path."""
        return Path(self.data_dir) / "preferences.yaml"


class Config:
    """Configuration manager for Design Lab."""

    _instance: Optional[ConfigModel] = None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Load configuration from file or fall back to defaults."""
        if cls._instance is not None:
            return cls._instance

        config = ConfigModel()

        if config_path is None:
            config_path = config.get_config_path()

        if config_path.exists():
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    yaml_content = f.read()
                config = ConfigModel.from_yaml(yaml_content)
                logger.debug(f"Loaded configuration from {config_path}")
            except Exception as e:
                logger.warning(f"Failed to load config from {config_path}: {e}; using defaults")
        else:
            logger.debug(f"No configuration at {config_path}; using defaults")

        cls._instance = config
        return config

    @classmethod
    def get(cls) -> ConfigModel:
        """Get the current configuration instance."""
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reload(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Reload configuration from file."""
        cls._instance = None
        return cls.load(config_path)


def get_config() -> ConfigModel:
    """Get the current configuration."""
    return Config.get()


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file."""
    return Config.load(config_path)
