"""
Configuration components for the page renderer.
"""
from .configuration import (
    Environment,
    RendererConfiguration,
    ensure_renderer_config,
    find_default_config,
    load_config_file,
    load_configuration_from_env,
    merge_configs,
)
from .loader import load_config

__all__ = [
    "Environment",
    "RendererConfiguration",
    "ensure_renderer_config",
    "find_default_config",
    "load_config_file",
    "load_configuration_from_env",
    "merge_configs",
    "load_config",
]
