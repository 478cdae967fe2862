"""Default functions made available inside templates."""
import json
import uuid
from base64 import b64encode, b64decode
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Callable, Dict

import yaml
from markupsafe import Markup, escape

# Appended to static file URLs so browsers refetch them after a restart
CACHE_BUSTER = uuid.uuid4().hex[:10]

def has_field(obj: Any, name: str) -> bool:
    """Check whether a mapping has a key or an object has an attribute."""
    if isinstance(obj, Mapping):
        return name in obj
    return hasattr(obj, name)

def file(path: str) -> str:
    """Build a static file URL with the cache buster attached."""
    return f"/files/{path.lstrip('/')}?v={CACHE_BUSTER}"

def link(url: str, text: str, current_path: str, *classes: str) -> Markup:
    """Build an anchor tag, marked active when it points at the current path."""
    classes = list(classes)
    if url == current_path:
        classes.append("is-active")
    return Markup('<a class="{}" href="{}">{}</a>').format(
        " ".join(classes), url, escape(text)
    )

def get_func_map() -> Dict[str, Callable[..., Any]]:
    """
    Get the default template function map.

    Returns:
        A new dict of function name to callable
    """
    return {
        'has_field': has_field,
        'file': file,
        'link': link,
        'to_json': lambda obj: json.dumps(obj, indent=2),
        'to_yaml': lambda obj: yaml.dump(obj, default_flow_style=False),
        'base64_encode': lambda s: b64encode(s.encode()).decode() if s else '',
        'base64_decode': lambda s: b64decode(s.encode()).decode() if s else '',
        'now': datetime.now,
        'uuid': lambda: str(uuid.uuid4()),
    }
