"""Configuration management for the Taskpal application."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml


logger = logging.getLogger(__name__)

HOME_ENV_VAR = "TASKPAL_HOME"


def default_data_dir() -> str:
    """Data directory, overridable with the TASKPAL_HOME environment variable."""
    return os.getenv(HOME_ENV_VAR) or "~/.taskpal"


@dataclass
class ConfigModel:
    """Global configuration model for Taskpal."""

    # File paths
    data_dir: str = ""
    data_file: str = "tasks.md"
    backup_dir: str = ""
    backup_on_start: bool = False

    # Logging
    log_file: str = "taskpal.log"
    log_level: str = "INFO"

    # UI and accessibility
    no_color: bool = False
    use_emoji: bool = True
    user_name: str = ""

    def __post_init__(self):
        """Fill in and expand paths."""
        self.data_dir = os.path.expanduser(str(self.data_dir or default_data_dir()))
        self.backup_dir = os.path.expanduser(str(self.backup_dir or Path(self.data_dir, "backups")))
        self.log_level = str(self.log_level).upper()

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML. Unknown keys are ignored."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("configuration must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")

        return cls(**{key: value for key, value in data.items() if key in known})

    def get_data_path(self) -> Path:
        """Get the task file path. A relative data_file lives in data_dir."""
        return Path(self.data_dir) / Path(self.data_file).expanduser()

    def get_log_path(self) -> Path:
        return Path(self.data_dir) / Path(self.log_file).expanduser()

    def get_config_path(self) -> Path:
        """Get the config file path."""
        return Path(self.data_dir) / "config.yaml"

    def get_backup_path(self, timestamp: Optional[str] = None) -> Path:
        """Get backup directory path."""
        if timestamp:
            return Path(self.backup_dir) / timestamp
        return Path(self.backup_dir)


class Config:
    """Configuration manager for Taskpal."""

    _instance: Optional[ConfigModel] = None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Load configuration from file, or use defaults if there is none."""
        if cls._instance is not None and config_path is None:
            return cls._instance

        config = ConfigModel()

        if config_path is None:
            config_path = config.get_config_path()

        if config_path.exists():
            try:
                config = ConfigModel.from_yaml(config_path.read_text(encoding="utf-8"))
                logger.info(f"Loaded configuration from {config_path}")
            except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {config_path}: {e}. Using default configuration.")
        else:
            logger.debug(f"No configuration at {config_path}, using defaults")

        cls._instance = config
        return config

    @classmethod
    def save(cls, config: ConfigModel, config_path: Optional[Path] = None) -> None:
        """Save configuration to file."""
        if config_path is None:
            config_path = config.get_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(config.to_yaml(), encoding="utf-8")
        logger.info(f"Configuration saved to {config_path}")

    @classmethod
    def get(cls) -> ConfigModel:
        """Get the current configuration instance."""
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reload(cls) -> ConfigModel:
        """Reload configuration from file."""
        cls._instance = None
        return cls.load()


def get_config() -> ConfigModel:
    """Get the current configuration."""
    return Config.get()


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file."""
    return Config.load(config_path)


def save_config(config: ConfigModel, config_path: Optional[Path] = None) -> None:
    """Save configuration to file."""
    Config.save(config, config_path)
