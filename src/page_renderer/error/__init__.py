"""
Error types raised by the page renderer.
"""
from .exceptions import (
    ErrorContext,
    RendererError,
    ConfigurationError,
    ParseError,
    NotFoundError,
    ExecutionError,
    CacheTypeError,
)

__all__ = [
    'ErrorContext',
    'RendererError',
    'ConfigurationError',
    'ParseError',
    'NotFoundError',
    'ExecutionError',
    'CacheTypeError',
]
