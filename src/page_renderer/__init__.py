"""
Page Renderer: cached Jinja2 template rendering with hot reload for local development.
"""

__version__ = "0.1.0"

from .config import RendererConfiguration, Environment, load_config
from .templates import TemplateRenderer, CompiledTemplate, get_func_map
from .error import (
    RendererError,
    ParseError,
    NotFoundError,
    ExecutionError,
    CacheTypeError,
    ConfigurationError,
)

__all__ = [
    "TemplateRenderer",
    "CompiledTemplate",
    "get_func_map",
    "RendererConfiguration",
    "Environment",
    "load_config",
    "RendererError",
    "ParseError",
    "NotFoundError",
    "ExecutionError",
    "CacheTypeError",
    "ConfigurationError",
    "__version__",
]
