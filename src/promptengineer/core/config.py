"""Configuration management for Prompt Engineer."""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-3.5-turbo"
API_KEY_ENV_VAR = "OPENAI_API_KEY"

CONFIG_DIR_NAME = ".promptengineer"
PROJECT_CONFIG_NAME = ".promptengineer.yaml"


def user_config_file() -> Path:
    """Location of the per-user config file."""
    return Path.home() / CONFIG_DIR_NAME / "config.yaml"


class Config:
    """Configuration manager with hierarchy: CLI args > project config > user config > defaults."""

    def __init__(self):
        """Initialize configuration with default values."""
        self.model: str = DEFAULT_MODEL
        self.api_key: Optional[str] = None
        self.base_url: Optional[str] = None
        self.timeout: Optional[float] = None
        self.temperature: Optional[float] = None
        self.log_level: str = "WARNING"
        self.json_logging: bool = False
        self.log_file: Optional[str] = None
        self.color: Optional[bool] = None

    @classmethod
    def load(
        cls,
        cli_args: Optional[dict[str, Any]] = None,
        user_config_path: Optional[Path] = None,
        project_config_path: Optional[Path] = None,
        config_file: Optional[Path] = None,
    ) -> "Config":
        """
        Load configuration from hierarchy: CLI args > explicit file > project config > user config > defaults.

        Args:
            cli_args: Dictionary of CLI arguments to override config
            user_config_path: User config file (default: ~/.promptengineer/config.yaml)
            project_config_path: Project config file (default: ./.promptengineer.yaml)
            config_file: Explicit config file, applied after project config

        Returns:
            Config instance with loaded values
        """
        config = cls()

        user_config_path = user_config_path or user_config_file()
        if user_config_path.exists():
            config.load_file(user_config_path)

        project_config_path = project_config_path or Path.cwd() / PROJECT_CONFIG_NAME
        if project_config_path.exists():
            config.load_file(project_config_path)

        if config_file is not None:
            config.load_file(config_file)

        if cli_args:
            for key, value in cli_args.items():
                if value is not None and hasattr(config, key):
                    setattr(config, key, value)

        return config

    def load_file(self, config_path: Path) -> None:
        """Load configuration from a YAML or JSON file, skipping unreadable ones."""
        try:
            content = config_path.read_text(encoding="utf-8")
            if config_path.suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(content)
            elif config_path.suffix == ".json":
                data = json.loads(content)
            else:
                logger.warning(f"Unknown config format, skipping: {config_path}")
                return
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read config file {config_path}: {e}")
            return

        if not isinstance(data, dict):
            logger.warning(f"Config file {config_path} is not a mapping, skipping")
            return

        for key, value in data.items():
            if hasattr(self, key) and value is not None:
                setattr(self, key, value)

    def apply_environment(self) -> None:
        """Fill the API key from the environment when nothing else set it."""
        if not self.api_key:
            env_key = os.getenv(API_KEY_ENV_VAR)
            if env_key:
                self.api_key = env_key

    def to_dict(self, redact: bool = False) -> dict[str, Any]:
        """Convert config to dictionary."""
        api_key = self.api_key
        if redact and api_key:
            api_key = api_key[:3] + "..." + api_key[-4:] if len(api_key) > 8 else "***"
        return {
            "model": self.model,
            "api_key": api_key,
            "base_url": self.base_url,
            "timeout": self.timeout,
            "temperature": self.temperature,
            "log_level": self.log_level,
            "json_logging": self.json_logging,
            "log_file": self.log_file,
            "color": self.color,
        }

    def save(self, path: Path, format: str = "yaml") -> None:
        """
        Save configuration to file.

        Args:
            path: Path to save config file
            format: Format to save as ('yaml' or 'json')
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Remove None values for cleaner config
        data = {k: v for k, v in self.to_dict().items() if v is not None}

        if format == "yaml":
            content = yaml.dump(data, default_flow_style=False, sort_keys=False)
        else:
            content = json.dumps(data, indent=2)

        path.write_text(content, encoding="utf-8")
