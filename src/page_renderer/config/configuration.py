"""
Configuration management for the page renderer.
"""
import codecs
import logging
import os
import yaml
import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from ..error.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = [
    "renderer_config.yaml",
    "renderer_config.yml",
    "renderer_config.json",
]

class Environment(str, Enum):
    """Deployment environments the renderer knows about."""
    LOCAL = "local"
    TEST = "test"
    DEVELOP = "dev"
    STAGING = "staging"
    QA = "qa"
    PRODUCTION = "prod"

class RendererConfiguration(BaseModel):
    """Configuration for template parsing and rendering."""

    model_config = ConfigDict(
        extra="allow",
        validate_assignment=True,
    )

    environment: Environment = Field(default=Environment.LOCAL, description="Current environment")
    base_path: Path = Field(default_factory=Path.cwd, validate_default=True, description="Directory holding the templates directory")
    template_dir: str = Field(default="templates", description="Templates directory name under base_path")
    template_ext: str = Field(default=".html", description="Template file extension")
    autoescape: bool = Field(default=True, description="Escape HTML in rendered values")
    encoding: str = Field(default="utf-8", description="Template source and output encoding")

    # Logging settings
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_max_bytes: int = Field(default=10 * 1024 * 1024, description="Log file size before rotation", ge=1)
    log_backup_count: int = Field(default=5, description="Rotated log files to keep", ge=0)
    json_logging: bool = False

    @field_validator("environment", mode="before")
    @classmethod
    def normalize_environment(cls, value: Any) -> Any:
        """Accept environment names in any case."""
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("base_path")
    @classmethod
    def resolve_base_path(cls, value: Path) -> Path:
        """Resolve the base path to an absolute path."""
        return value.expanduser().resolve()

    @field_validator("template_ext")
    @classmethod
    def validate_template_ext(cls, value: str) -> str:
        """Validate template extension."""
        if not value.startswith(".") or len(value) < 2:
            raise ValueError(f"Invalid template extension '{value}'. Must start with '.'")
        return value

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, value: str) -> str:
        """Validate that the encoding names a known codec."""
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"Unknown encoding '{value}'")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        value_upper = value.upper()
        if value_upper not in valid_levels:
            raise ValueError(f"Invalid log level '{value}'. Must be one of: {valid_levels}")
        return value_upper

    @property
    def hot_reload(self) -> bool:
        """Whether templates are re-parsed on every request."""
        return self.environment == Environment.LOCAL

    @property
    def templates_path(self) -> Path:
        return self.base_path / self.template_dir


def ensure_renderer_config(config: Optional[Dict[str, Any]] = None) -> RendererConfiguration:
    """Ensure a valid renderer configuration."""
    if isinstance(config, RendererConfiguration):
        return config

    if config is None:
        config = {}

    try:
        return RendererConfiguration(**config)
    except Exception as e:
        raise ConfigurationError(f"Invalid configuration: {str(e)}") from e


def find_default_config(search_dir: Optional[Path] = None) -> Optional[str]:
    """
    Find the default configuration file.

    Args:
        search_dir: Directory to search, defaults to the working directory

    Returns:
        Path of the first configuration file found, or None
    """
    search_dir = search_dir or Path.cwd()
    for filename in CONFIG_FILENAMES:
        path = search_dir / filename
        if path.exists():
            return str(path)
    return None


def load_config_file(file_path: str) -> Dict[str, Any]:
    """
    Load configuration from a file (YAML or JSON).

    Args:
        file_path: Path to the configuration file

    Returns:
        Dictionary with configuration

    Raises:
        ConfigurationError: If the file is not found or cannot be parsed
    """
    path = Path(file_path).expanduser()

    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {file_path}")

    if not file_path.endswith((".yaml", ".yml", ".json")):
        raise ConfigurationError(f"Unsupported config file format: {file_path}")

    try:
        content = path.read_text(encoding='utf-8')

        if file_path.endswith((".yaml", ".yml")):
            loaded_config = yaml.safe_load(content) or {}
        else:
            loaded_config = json.loads(content) or {}

    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML format in {file_path}: {str(e)}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON format in {file_path}: {str(e)}") from e
    except OSError as e:
        raise ConfigurationError(f"Error reading config file {file_path}: {str(e)}") from e

    if not isinstance(loaded_config, dict):
        raise ConfigurationError(f"Configuration in {file_path} must be a mapping")

    logger.debug(f"Loaded configuration from {file_path}")
    return loaded_config


def load_configuration_from_env(prefix: str = "RENDERER_") -> Dict[str, Any]:
    """
    Collect configuration values from environment variables.

    Only variables named after a configuration field are picked up, so
    RENDERER_TEMPLATE_DIR sets template_dir.
    """
    config = {}
    for field_name in RendererConfiguration.model_fields:
        value = os.environ.get(f"{prefix}{field_name.upper()}")
        if value is not None:
            config[field_name] = value
    return config


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if isinstance(value, dict) and key in result and isinstance(result[key], dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result
