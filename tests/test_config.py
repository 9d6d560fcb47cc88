"""Tests for configuration handling."""

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from importorder.core.classifier import DEFAULT_STDLIB_MODULES
from importorder.core.config import (
    Config,
    get_config_path,
    get_default_config,
    load_config,
    save_config,
)
from importorder.core.discovery import DEFAULT_ENV_DIRS
from importorder.core.errors import ConfigError


@pytest.fixture
def config_dir():
    """Create a temporary configuration directory."""
    with tempfile.TemporaryDirectory() as tmp:
        yield Path(tmp)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep IMPORTORDER_* variables from the outer environment out of the tests."""
    for name in (
        "IMPORTORDER_THREADS",
        "IMPORTORDER_EXTENSION",
        "IMPORTORDER_BACKUP_DIR",
        "IMPORTORDER_LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


def test_config_defaults():
    """Test Config default values."""
    config = Config()
    assert config.threads == 4
    assert config.extension == ".py"
    assert config.stdlib_modules == list(DEFAULT_STDLIB_MODULES)
    assert config.env_dirs == list(DEFAULT_ENV_DIRS)
    assert config.skip_env_dirs
    assert config.respect_gitignore
    assert not config.backup
    assert config.backup_dir is None
    assert config.log_dir is None


def test_load_config(config_dir):
    """Test loading configuration from file."""
    config_path = config_dir / "config.yaml"
    config_path.write_text(
        """
        threads: 8
        backup: true
        stdlib_modules:
          - os
          - subprocess
        """
    )

    config = load_config(config_path)
    assert config.threads == 8
    assert config.backup
    assert config.stdlib_modules == ["os", "subprocess"]
    assert config.extension == ".py"


def test_load_empty_config(config_dir):
    """Test that an empty file means defaults."""
    config_path = config_dir / "config.yaml"
    config_path.write_text("")

    assert load_config(config_path) == Config()


def test_invalid_thread_count(config_dir):
    """Test that a zero-sized pool is rejected."""
    config_path = config_dir / "config.yaml"
    config_path.write_text("threads: 0\n")

    with pytest.raises(ConfigError):
        load_config(config_path)


def test_non_mapping_config(config_dir):
    """Test that a YAML list is rejected."""
    config_path = config_dir / "config.yaml"
    config_path.write_text("- a\n- b\n")

    with pytest.raises(ConfigError):
        load_config(config_path)


def test_unparseable_config(config_dir):
    """Test that broken YAML is reported as ConfigError."""
    config_path = config_dir / "config.yaml"
    config_path.write_text("threads: [1,\n")

    with pytest.raises(ConfigError):
        load_config(config_path)


def test_missing_explicit_config(config_dir):
    """Test that an explicit path must exist."""
    with pytest.raises(ConfigError):
        load_config(config_dir / "nope.yaml")


def test_missing_default_config_uses_defaults(config_dir):
    """Test falling back to defaults when no user config exists."""
    with patch.dict("os.environ", {"XDG_CONFIG_HOME": str(config_dir)}):
        assert get_config_path() == config_dir / "importorder" / "config.yaml"
        assert load_config() == Config()


def test_save_config(config_dir):
    """Test saving configuration to file."""
    config_path = config_dir / "nested" / "config.yaml"
    save_config(Config(threads=2, backup_dir="/tmp/bak"), config_path)

    data = yaml.safe_load(config_path.read_text())
    assert data["threads"] == 2
    assert data["backup_dir"] == "/tmp/bak"
    assert load_config(config_path).threads == 2


def test_env_override():
    """Test environment variable overrides."""
    with patch.dict(
        "os.environ",
        {"IMPORTORDER_THREADS": "16", "IMPORTORDER_LOG_DIR": "/var/log/importorder"},
    ):
        config = get_default_config()
        assert config.threads == 16
        assert config.log_dir == "/var/log/importorder"


def test_env_override_applies_to_file(config_dir):
    """Test that environment variables win over the file."""
    config_path = config_dir / "config.yaml"
    config_path.write_text("threads: 2\nextension: .pyi\n")

    with patch.dict("os.environ", {"IMPORTORDER_EXTENSION": ".py"}):
        config = load_config(config_path)
        assert config.threads == 2
        assert config.extension == ".py"


@pytest.mark.parametrize("value", ["many", "0"])
def test_bad_env_threads(value):
    """Test that invalid thread overrides are rejected."""
    with patch.dict("os.environ", {"IMPORTORDER_THREADS": value}):
        with pytest.raises(ConfigError):
            get_default_config()
