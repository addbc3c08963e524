"""Tests for shell configuration loading."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from linecmd.lib.config_parser import Config, ConfigParser, ShellConfig, load_config


class TestShellConfig:
    """Test configuration models."""

    def test_defaults(self):
        """Test default values."""
        config = ShellConfig()
        assert config.prompt == "> "
        assert config.history_file is None
        assert config.history_length == 1000
        assert config.prompt_on_replay is True
        assert config.script is None

    def test_paths_expand_user(self):
        """Test ~ is expanded in configured paths."""
        config = ShellConfig(history_file="~/.linecmd_history")
        assert config.history_file == Path.home() / ".linecmd_history"

    def test_numeric_prompt(self):
        """Test prompts parsed as numbers by YAML become strings."""
        assert ShellConfig(prompt=42).prompt == "42"

    def test_invalid_history_length(self):
        """Test history length must be -1 or more."""
        with pytest.raises(ValidationError):
            ShellConfig(history_length=-5)


class TestConfigParser:
    """Test parsing YAML files."""

    def test_load_config(self, tmp_path):
        """Test loading a complete configuration."""
        config_file = tmp_path / "linecmd.yaml"
        config_file.write_text(
            "shell:\n"
            "  prompt: 'lwm2m> '\n"
            "  prompt_on_replay: false\n"
            "  script: commands.txt\n"
            "server:\n"
            "  port: 5683\n"
        )
        parser = load_config(config_file)
        shell = parser.get_shell_config()
        assert shell.prompt == "lwm2m> "
        assert shell.prompt_on_replay is False
        assert shell.script == Path("commands.txt")
        assert parser.get_sections()["server"] == {"port": 5683}

    def test_empty_file_uses_defaults(self, tmp_path):
        """Test an empty file gives the default configuration."""
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        assert load_config(config_file).config == Config()

    def test_missing_file(self, tmp_path):
        """Test a missing file is reported."""
        with pytest.raises(FileNotFoundError):
            ConfigParser(tmp_path / "missing.yaml")

    def test_not_a_mapping(self, tmp_path):
        """Test a YAML list is rejected."""
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config(config_file)

    def test_invalid_yaml(self, tmp_path):
        """Test malformed YAML raises a YAML error."""
        config_file = tmp_path / "broken.yaml"
        config_file.write_text("shell: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_config(config_file)

    def test_access_before_parse(self, tmp_path):
        """Test accessors require parse()."""
        config_file = tmp_path / "linecmd.yaml"
        config_file.write_text("shell: {}\n")
        parser = ConfigParser(config_file)
        with pytest.raises(ValueError, match="not parsed"):
            parser.get_shell_config()
