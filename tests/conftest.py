"""Pytest configuration and fixtures."""
import pytest
from pathlib import Path
from page_renderer.config import RendererConfiguration
from page_renderer.templates import TemplateRenderer

@pytest.fixture
def base_path(tmp_path: Path) -> Path:
    """Create a templates tree with a page, a layout and shared partials."""
    templates = tmp_path / "templates"
    (templates / "pages").mkdir(parents=True)
    (templates / "layouts").mkdir()
    (templates / "partials").mkdir()

    (templates / "index.html").write_text("<h1>{{ Title }}</h1>")
    (templates / "layouts" / "main.html").write_text(
        "<html><body>{% include 'nav.html' %}{% block content %}{% endblock %}</body></html>"
    )
    (templates / "pages" / "about.html").write_text(
        "{% extends 'main.html' %}{% block content %}<p>{{ Body }}</p>{% endblock %}"
    )
    (templates / "partials" / "nav.html").write_text("<nav>{{ link('/about', 'About', Path) }}</nav>")
    (templates / "partials" / "footer.html").write_text("<footer>{{ Year }}</footer>")
    return tmp_path

@pytest.fixture
def config(base_path: Path) -> RendererConfiguration:
    """Create a production configuration."""
    return RendererConfiguration(environment="prod", base_path=base_path)

@pytest.fixture
def local_config(base_path: Path) -> RendererConfiguration:
    """Create a local development configuration."""
    return RendererConfiguration(environment="local", base_path=base_path)

@pytest.fixture
def renderer(config: RendererConfiguration) -> TemplateRenderer:
    return TemplateRenderer(config)

@pytest.fixture
def local_renderer(local_config: RendererConfiguration) -> TemplateRenderer:
    return TemplateRenderer(local_config)
