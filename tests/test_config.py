"""Tests for config parsing."""

import logging

import pytest

from tracklayout.config import (
    CheckConfig,
    Config,
    LoggingConfig,
    OutputConfig,
    load_config,
)


def test_config_defaults():
    """Config.from_dict with empty dict uses all defaults."""
    config = Config.from_dict({})
    assert config.output.indent == 2
    assert config.check.require_complete is True
    assert config.check.require_correct is True
    assert config.check.show_warnings is True
    assert config.logging.level == "WARNING"
    assert config.logging.file is None


def test_config_from_toml(tmp_path):
    """Config.from_toml parses TOML file correctly."""
    config_file = tmp_path / "config.toml"
    config_file.write_text("""
[output]
indent = 4

[check]
require_correct = false
""")
    config = Config.from_toml(config_file)
    assert config.output.indent == 4
    assert config.check.require_correct is False
    # Defaults for unspecified values
    assert config.check.require_complete is True
    assert config.logging.level == "WARNING"


def test_config_full_toml(tmp_path):
    """load_config parses all sections correctly."""
    config_file = tmp_path / "config.toml"
    config_file.write_text("""
[output]
indent = 0

[check]
require_complete = false
require_correct = false
show_warnings = false

[logging]
level = "debug"
file = "tracklayout.log"
""")
    config = load_config(config_file)
    assert config.output == OutputConfig(indent=0)
    assert config.check == CheckConfig(
        require_complete=False, require_correct=False, show_warnings=False
    )
    assert config.logging.level == "DEBUG"
    assert config.logging.level_number == logging.DEBUG
    assert config.logging.file == "tracklayout.log"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.toml")


def test_negative_indent_rejected():
    with pytest.raises(ValueError):
        OutputConfig(indent=-1)


def test_unknown_log_level_rejected():
    with pytest.raises(ValueError):
        LoggingConfig(level="LOUD")
