"""
Centralized configuration loading for the page renderer.
Configuration comes from defaults, an optional file and environment variables,
in increasing order of precedence.
"""
import logging
from pathlib import Path
from typing import Dict, Any, Optional

from .configuration import (
    RendererConfiguration,
    ensure_renderer_config,
    find_default_config,
    load_config_file,
    load_configuration_from_env,
    merge_configs,
)

logger = logging.getLogger(__name__)

def load_config(
    config_path: Optional[str] = None,
    env_prefix: str = "RENDERER_",
    defaults: Optional[Dict[str, Any]] = None,
    search_dir: Optional[Path] = None
) -> RendererConfiguration:
    """
    Load configuration from files and environment.

    Args:
        config_path: Path to the configuration file (optional)
        env_prefix: Prefix for environment variables to consider
        defaults: Default configuration values
        search_dir: Directory searched for a config file when no path is given

    Returns:
        RendererConfiguration object with loaded configuration
    """
    config = dict(defaults or {})

    if config_path:
        logger.info(f"Loading configuration from specified file: {config_path}")
        config = merge_configs(config, load_config_file(config_path))
    else:
        discovered = find_default_config(search_dir)
        if discovered:
            logger.info(f"Loading configuration from discovered file: {discovered}")
            config = merge_configs(config, load_config_file(discovered))
        else:
            logger.debug("No configuration file found, using defaults and environment variables")

    # Environment variables take precedence
    config = merge_configs(config, load_configuration_from_env(env_prefix))

    return ensure_renderer_config(config)
