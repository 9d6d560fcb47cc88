# src/importorder/core/config.py
import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .classifier import DEFAULT_STDLIB_MODULES
from .discovery import DEFAULT_ENV_DIRS
from .errors import ConfigError

CONFIG_FILENAME = "config.yaml"


class Config(BaseModel):
    """Settings for an importorder run."""

    threads: int = Field(default=4, ge=1)
    extension: str = ".py"
    stdlib_modules: List[str] = Field(default_factory=lambda: list(DEFAULT_STDLIB_MODULES))
    env_dirs: List[str] = Field(default_factory=lambda: list(DEFAULT_ENV_DIRS))
    skip_env_dirs: bool = True
    respect_gitignore: bool = True
    backup: bool = False
    backup_dir: Optional[str] = None
    log_dir: Optional[str] = None

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        """Load settings from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    def to_dict(self) -> dict:
        """Convert settings to a plain dictionary."""
        return self.model_dump()


def get_config_dir() -> Path:
    """Get the importorder configuration directory."""
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", "~/.config")
    return Path(xdg_config_home).expanduser() / "importorder"


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return get_config_dir() / CONFIG_FILENAME


def apply_env_overrides(config: Config) -> Config:
    """Apply IMPORTORDER_* environment variables on top of ``config``."""
    updates = {}

    threads = os.environ.get("IMPORTORDER_THREADS")
    if threads is not None:
        try:
            updates["threads"] = int(threads)
        except ValueError as e:
            raise ConfigError(f"IMPORTORDER_THREADS must be an integer, got {threads!r}") from e

    for field_name, env_name in (
        ("extension", "IMPORTORDER_EXTENSION"),
        ("backup_dir", "IMPORTORDER_BACKUP_DIR"),
        ("log_dir", "IMPORTORDER_LOG_DIR"),
    ):
        value = os.environ.get(env_name)
        if value is not None:
            updates[field_name] = value

    if not updates:
        return config

    try:
        return Config(**{**config.to_dict(), **updates})
    except ValidationError as e:
        raise ConfigError(f"Invalid environment override: {e}") from e


def get_default_config() -> Config:
    """Get default configuration with environment variable overrides."""
    return apply_env_overrides(Config())


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from YAML file.

    Without an explicit path the user config file is used when it exists,
    otherwise the defaults. Environment overrides apply in both cases.
    """
    if config_path is None:
        config_path = get_config_path()
        if not config_path.exists():
            return get_default_config()
    elif not Path(config_path).exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        config = Config.from_yaml(Path(config_path))
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse {config_path}: {e}") from e

    return apply_env_overrides(config)


def save_config(config: Config, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(config.to_dict(), f, sort_keys=False)
