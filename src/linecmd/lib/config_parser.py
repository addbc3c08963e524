"""Configuration parser for the interactive shell.

Parses and validates a YAML configuration such as:

    shell:
      prompt: "linecmd> "
      history_file: ~/.linecmd_history
      script: commands.txt
"""

from __future__ import annotations

import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ShellConfig(BaseModel):
    """Interactive session configuration."""
    prompt: str = "> "
    history_file: Optional[Path] = None
    history_length: int = Field(default=1000, ge=-1)
    prompt_on_replay: bool = True
    script: Optional[Path] = None

    @field_validator('prompt', mode='before')
    @classmethod
    def prompt_to_string(cls, v: Any) -> str:
        """Convert prompt to string (handles YAML parsing numbers)."""
        return str(v)

    @field_validator('history_file', 'script')
    @classmethod
    def expand_user(cls, v: Optional[Path]) -> Optional[Path]:
        """Expand a leading ~ in paths."""
        if v is None:
            return v
        return v.expanduser()


class Config(BaseModel):
    """Top-level configuration.

    Sections other than ``shell`` are kept as-is so commands can display them.
    """
    model_config = ConfigDict(extra='allow')

    shell: ShellConfig = Field(default_factory=ShellConfig)


class ConfigParser:
    """Parse and validate shell configuration."""

    def __init__(self, config_path: Union[str, Path]):
        """Initialize parser with config file path.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        self.config: Optional[Config] = None
        self._raw_config: Optional[Dict[str, Any]] = None

    def parse(self) -> Config:
        """Parse and validate configuration.

        Returns:
            Validated configuration object

        Raises:
            yaml.YAMLError: If YAML parsing fails
            pydantic.ValidationError: If validation fails
        """
        with open(self.config_path) as f:
            self._raw_config = yaml.safe_load(f) or {}

        if not isinstance(self._raw_config, dict):
            raise ValueError(f"Configuration must be a mapping: {self.config_path}")

        self.config = Config(**self._raw_config)
        return self.config

    def get_shell_config(self) -> ShellConfig:
        """Get shell configuration.

        Returns:
            Shell configuration object
        """
        if not self.config:
            raise ValueError("Configuration not parsed. Call parse() first.")
        return self.config.shell

    def get_sections(self) -> Dict[str, Any]:
        """Get every configuration section as plain data.

        Returns:
            Dictionary mapping section names to their contents
        """
        if not self.config:
            raise ValueError("Configuration not parsed. Call parse() first.")
        return self.config.model_dump(mode='json')


def load_config(config_path: Union[str, Path]) -> ConfigParser:
    """Load and parse configuration file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Parsed configuration

    Example:
        >>> parser = load_config("linecmd.yaml")
        >>> parser.get_shell_config().prompt
        'linecmd> '
    """
    parser = ConfigParser(config_path)
    parser.parse()
    return parser
