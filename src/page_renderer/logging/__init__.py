"""Logging setup for the page renderer."""
from .config import LogConfig, JsonFormatter

__all__ = ["LogConfig", "JsonFormatter"]
