"""Configuration management for the Primo assistant."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml


logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PRIMO_CONFIG"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ConfigModel:
    """Global configuration model for the assistant."""

    # File paths
    data_dir: str = "./data"
    data_file: str = "data.txt"
    backup_dir: str = "./data/backups"
    backup_on_start: bool = False

    # Conversation
    assistant_name: str = "El Primo"
    user_name: str = "Me"
    show_banner: bool = True

    # UI and diagnostics
    no_color: bool = False
    log_level: str = "WARNING"

    def __post_init__(self):
        """Post-initialization setup."""
        self.data_dir = os.path.expanduser(str(self.data_dir))
        self.backup_dir = os.path.expanduser(str(self.backup_dir))
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            logger.warning(f"Unknown log level {self.log_level!r}, using WARNING")
            self.log_level = "WARNING"

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {
            "data_dir": self.data_dir,
            "data_file": self.data_file,
            "backup_dir": self.backup_dir,
            "backup_on_start": self.backup_on_start,
            "assistant_name": self.assistant_name,
            "user_name": self.user_name,
            "show_banner": self.show_banner,
            "no_color": self.no_color,
            "log_level": self.log_level,
        }
        return yaml.dump(data, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML, ignoring keys this version does not know."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("Configuration file must contain a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")

        return cls(**{key: value for key, value in data.items() if key in known})

    def get_data_path(self) -> Path:
        """Get the task file path."""
        return Path(self.data_dir) / self.data_file

    def get_config_path(self) -> Path:
        """Get the default config file path."""
        return Path(self.data_dir) / "config.yaml"

    def get_backup_path(self, timestamp: Optional[str] = None) -> Path:
        """Get backup directory path, or a backup file path for ``timestamp``."""
        if timestamp:
            return Path(self.backup_dir) / f"{Path(self.data_file).stem}-{timestamp}.txt"
        return Path(self.backup_dir)


class Config:
    """Configuration manager for the assistant."""

    _instance: Optional[ConfigModel] = None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Load configuration from file, falling back to defaults."""
        if cls._instance is not None and config_path is None:
            return cls._instance

        config = ConfigModel()

        if config_path is None and os.environ.get(CONFIG_ENV_VAR):
            config_path = Path(os.environ[CONFIG_ENV_VAR])
        if config_path is None:
            config_path = config.get_config_path()

        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    config = ConfigModel.from_yaml(f.read())
                logger.info(f"Loaded configuration from {config_path}")
            except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {config_path}: {e}")
                logger.warning("Using default configuration.")
                config = ConfigModel()
        else:
            logger.debug(f"No configuration at {config_path}, using defaults")

        cls._instance = config
        return config

    @classmethod
    def save(cls, config: ConfigModel, config_path: Optional[Path] = None) -> Path:
        """Save configuration to file and return where it was written."""
        if config_path is None:
            config_path = config.get_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(config.to_yaml())
        logger.info(f"Configuration saved to {config_path}")
        return config_path

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

    @classmethod
    def reset(cls) -> None:
        """Forget the cached configuration (useful for testing)."""
        cls._instance = None


def get_config() -> ConfigModel:
    """Get the current configuration."""
    return Config.get()


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file."""
    return Config.load(config_path)


def save_config(config: ConfigModel, config_path: Optional[Path] = None) -> Path:
    """Save configuration to file."""
    return Config.save(config, config_path)
