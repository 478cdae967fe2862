import json
import sys
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config.loader import load_config
from .error.exceptions import ConfigurationError, RendererError
from .logging.config import LogConfig
from .templates.renderer import TemplateRenderer

app = typer.Typer(help="Page Renderer CLI")

console = Console(stderr=True)
logger = logging.getLogger("page-renderer-cli")

def _load_renderer(config_path: Optional[Path]) -> TemplateRenderer:
    load_dotenv()
    config = load_config(str(config_path) if config_path else None)
    LogConfig(config).configure()
    return TemplateRenderer(config)

def _load_data(data_path: Optional[Path]) -> Dict[str, Any]:
    """Read render data from a JSON or YAML file."""
    if data_path is None:
        return {}
    try:
        content = data_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Unable to read data file {data_path}: {e}") from e
    try:
        if data_path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        else:
            data = json.loads(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Invalid data file {data_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Data file {data_path} must contain a mapping")
    return data

@app.command("render")
def render(
    name: str = typer.Argument(..., help="Template to render, without extension"),
    files: List[str] = typer.Option([], "--file", "-f", help="Template file to parse, without extension"),
    directories: List[str] = typer.Option([], "--dir", "-d", help="Directory whose templates are all parsed"),
    data_path: Optional[Path] = typer.Option(None, "--data", help="JSON or YAML file with render data"),
    group: str = typer.Option("cli", "--group", help="Cache key group"),
    id: Optional[str] = typer.Option(None, "--id", help="Cache key id, defaults to the template name"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write output to a file instead of stdout"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config file")
):
    """Render a template to stdout or a file."""
    try:
        renderer = _load_renderer(config_path)
        data = _load_data(data_path)
        buf = renderer.parse_and_execute(group, id or name, name, files, directories, data)
    except RendererError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    if output:
        try:
            output.write_bytes(buf.getvalue())
        except OSError as e:
            console.print(f"[red]Error:[/red] {escape(f'Unable to write {output}: {e}')}")
            raise typer.Exit(code=1)
        logger.info(f"Wrote {output}")
    else:
        sys.stdout.buffer.write(buf.getvalue())
        sys.stdout.flush()

@app.command("path")
def path(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config file")
):
    """Show the resolved templates directory."""
    try:
        renderer = _load_renderer(config_path)
    except RendererError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    typer.echo(str(renderer.templates_path))

@app.command("version")
def version():
    """Display version information."""
    typer.echo(f"page-renderer {__version__}")

if __name__ == "__main__":
    app()
