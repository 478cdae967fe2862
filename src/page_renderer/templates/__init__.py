"""
Cached template parsing and rendering.
"""

from .renderer import TemplateRenderer, CompiledTemplate
from .funcmap import get_func_map

__all__ = [
    'TemplateRenderer',
    'CompiledTemplate',
    'get_func_map',
]
