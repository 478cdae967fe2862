"""
Centralized exception definitions for the page renderer.
"""

class ErrorContext:
    """Context information for errors."""
    
    def __init__(self, component: str = None, operation: str = None, **kwargs):
        self.component = component
        self.operation = operation
        self.details = kwargs

class RendererError(Exception):
    """Base class for all renderer errors."""
    
    def __init__(self, message: str, context: ErrorContext = None):
        super().__init__(message)
        self.context = context or ErrorContext()
        
    def __str__(self):
        base_str = super().__str__()
        if self.context.component and self.context.operation:
            return f"{base_str} [in {self.context.component}.{self.context.operation}]"
        return base_str

class ConfigurationError(RendererError):
    """Error in configuration."""
    pass

class ParseError(RendererError):
    """A template file or directory could not be loaded or compiled."""
    pass

class NotFoundError(RendererError):
    """No compiled template is cached for the requested key."""
    pass

class ExecutionError(RendererError):
    """Rendering a compiled template failed."""
    pass

class CacheTypeError(RendererError, TypeError):
    """A cache entry is not a compiled template."""
    pass
