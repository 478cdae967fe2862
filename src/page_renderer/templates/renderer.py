"""
Cached template rendering.

Templates are parsed once per (group, id) key and reused across requests. In
the local environment every parse request re-reads the files from disk, so
template edits show up without restarting the process.
"""
import dataclasses
import io
import logging
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Sequence

from jinja2 import DictLoader, Environment, StrictUndefined, Template, TemplateSyntaxError
from pydantic import BaseModel

from ..config.configuration import RendererConfiguration
from ..error.exceptions import (
    CacheTypeError,
    ErrorContext,
    ExecutionError,
    NotFoundError,
    ParseError,
)
from .funcmap import get_func_map

logger = logging.getLogger(__name__)

class CompiledTemplate:
    """
    A set of parsed templates sharing one Jinja2 environment.

    Templates are named by file basename, so any template in the set can
    include or extend another by that name.
    """

    def __init__(self, name: str, func_map: Dict[str, Callable[..., Any]], autoescape: bool = True):
        self.name = name
        self.sources: Dict[str, str] = {}
        self.templates: Dict[str, Template] = {}
        self.env = Environment(
            loader=DictLoader(self.sources),
            undefined=StrictUndefined,
            autoescape=autoescape,
            auto_reload=False,
        )
        self.env.globals.update(func_map)
        self.env.filters.update(func_map)

    def parse_files(self, paths: Sequence[Path], encoding: str = "utf-8") -> None:
        """Read template files; a later file replaces an earlier one of the same name."""
        for path in paths:
            try:
                source = path.read_text(encoding=encoding)
            except (OSError, UnicodeDecodeError) as e:
                raise ParseError(
                    f"Unable to read template file {path}: {e}",
                    ErrorContext("CompiledTemplate", "parse_files", path=str(path)),
                ) from e
            self.sources[path.name] = source

    def parse_glob(self, directory: Path, pattern: str, encoding: str = "utf-8") -> None:
        """Read every file in a directory matching a glob pattern."""
        matches = sorted(p for p in directory.glob(pattern) if p.is_file())
        if not matches:
            raise ParseError(
                f"Pattern matches no files: {directory / pattern}",
                ErrorContext("CompiledTemplate", "parse_glob", directory=str(directory)),
            )
        self.parse_files(matches, encoding)

    def compile(self) -> None:
        """Compile all loaded sources."""
        for template_name in self.sources:
            try:
                self.templates[template_name] = self.env.get_template(template_name)
            except TemplateSyntaxError as e:
                raise ParseError(
                    f"Syntax error in template {template_name} line {e.lineno}: {e.message}",
                    ErrorContext("CompiledTemplate", "compile", template=template_name),
                ) from e

    def lookup(self, template_name: str) -> Optional[Template]:
        return self.templates.get(template_name)


class TemplateRenderer:
    """
    Renders simple templates or sets of templates, caching the parsed result
    per (group, id) key. In the local environment templates are re-parsed on
    every request.
    """

    def __init__(
        self,
        config: RendererConfiguration,
        func_map: Optional[Dict[str, Callable[..., Any]]] = None
    ):
        """
        Initialize the renderer.

        Args:
            config: Renderer configuration
            func_map: Functions available inside templates, defaults to get_func_map()
        """
        self.config = config
        self.func_map = dict(func_map) if func_map is not None else get_func_map()
        self._templates_path = config.templates_path
        self._cache: Dict[str, Any] = {}
        self._lock = threading.Lock()

    @property
    def templates_path(self) -> Path:
        """Complete path to the templates directory."""
        return self._templates_path

    @staticmethod
    def cache_key(group: str, id: str) -> str:
        """
        Join group and id with ':'.

        Backslashes and colons in the group are escaped so that ("a:b", "c")
        and ("a", "b:c") map to different keys.
        """
        group = group.replace("\\", "\\\\").replace(":", "\\:")
        return f"{group}:{id}"

    def is_cached(self, group: str, id: str) -> bool:
        with self._lock:
            return self.cache_key(group, id) in self._cache

    def parse_and_execute(
        self,
        group: str,
        id: str,
        name: str,
        files: Sequence[str],
        directories: Sequence[str],
        data: Any
    ) -> io.BytesIO:
        """Parse a template set if needed, then render the named template."""
        self.parse(group, id, name, files, directories)
        return self.execute(group, id, name, data)

    def parse(
        self,
        group: str,
        id: str,
        name: str,
        files: Sequence[str],
        directories: Sequence[str]
    ) -> None:
        """
        Parse and cache a set of templates.

        Parsing is skipped when the key is already cached, unless hot reload
        is enabled for the current environment.

        Args:
            group: Cache key group
            id: Cache key id
            name: Name of the root template, without extension
            files: Template files relative to the templates path, without extension
            directories: Directories whose templates are all parsed

        Raises:
            ParseError: If a file cannot be read or a template fails to compile
        """
        if self.is_cached(group, id) and not self.config.hot_reload:
            return

        ext = self.config.template_ext
        parsed = CompiledTemplate(name + ext, self.func_map, self.config.autoescape)

        parsed.parse_files(
            [self._templates_path / f"{f}{ext}" for f in files],
            self.config.encoding
        )
        for directory in directories:
            parsed.parse_glob(self._templates_path / directory, f"*{ext}", self.config.encoding)
        parsed.compile()

        key = self.cache_key(group, id)
        with self._lock:
            self._cache[key] = parsed
        logger.debug(f"Parsed {len(parsed.templates)} templates", extra={"cache_key": key})

    def execute(self, group: str, id: str, name: str, data: Any) -> io.BytesIO:
        """
        Render a named template from a cached set.

        Args:
            group: Cache key group
            id: Cache key id
            name: Template name, without extension
            data: Mapping, pydantic model or dataclass exposed to the template

        Returns:
            Buffer holding the rendered output, positioned at the start

        Raises:
            NotFoundError: If the key has not been parsed
            ExecutionError: If the template is missing or rendering fails
        """
        parsed = self.load(group, id)
        template_name = name + self.config.template_ext
        context = ErrorContext("TemplateRenderer", "execute", template=template_name)

        template = parsed.lookup(template_name)
        if template is None:
            raise ExecutionError(
                f"Template {template_name} is not defined in {self.cache_key(group, id)}",
                context,
            )

        variables = self._build_context(data, context)
        buf = io.BytesIO()
        try:
            for chunk in template.generate(variables):
                buf.write(chunk.encode(self.config.encoding))
        except Exception as e:
            raise ExecutionError(f"Error rendering template {template_name}: {e}", context) from e

        buf.seek(0)
        return buf

    def load(self, group: str, id: str) -> CompiledTemplate:
        """
        Get a cached template set.

        Raises:
            NotFoundError: If the key has not been parsed
            CacheTypeError: If the cached value is not a CompiledTemplate
        """
        key = self.cache_key(group, id)
        with self._lock:
            cached = self._cache.get(key)

        if cached is None:
            raise NotFoundError(
                f"Uncached page template requested: {key}",
                ErrorContext("TemplateRenderer", "load", key=key),
            )
        if not isinstance(cached, CompiledTemplate):
            raise CacheTypeError(
                f"Unable to cast cached template: {key}",
                ErrorContext("TemplateRenderer", "load", key=key),
            )
        return cached

    @staticmethod
    def _build_context(data: Any, context: ErrorContext) -> Dict[str, Any]:
        if data is None:
            return {}
        if isinstance(data, Mapping):
            return dict(data)
        if isinstance(data, BaseModel):
            return data.model_dump()
        if dataclasses.is_dataclass(data) and not isinstance(data, type):
            return dataclasses.asdict(data)
        raise ExecutionError(
            f"Unsupported render data type: {type(data).__name__}",
            context,
        )
