import json
from pathlib import Path

import pytest

from page_renderer.config import (
    Environment,
    RendererConfiguration,
    ensure_renderer_config,
    load_config,
    load_config_file,
    load_configuration_from_env,
    merge_configs,
)
from page_renderer.error.exceptions import ConfigurationError


def test_defaults():
    config = RendererConfiguration()
    assert config.environment == Environment.LOCAL
    assert config.hot_reload
    assert config.template_dir == "templates"
    assert config.template_ext == ".html"
    assert config.base_path == Path.cwd().resolve()
    assert config.templates_path == Path.cwd().resolve() / "templates"


def test_environment_is_case_insensitive():
    config = RendererConfiguration(environment="PROD")
    assert config.environment == Environment.PRODUCTION
    assert not config.hot_reload


@pytest.mark.parametrize("environment", ["test", "dev", "staging", "qa", "prod"])
def test_only_local_hot_reloads(environment):
    assert not RendererConfiguration(environment=environment).hot_reload


def test_invalid_values():
    with pytest.raises(ConfigurationError):
        ensure_renderer_config({"environment": "moon"})
    with pytest.raises(ConfigurationError):
        ensure_renderer_config({"template_ext": "html"})
    with pytest.raises(ConfigurationError):
        ensure_renderer_config({"log_level": "LOUD"})


def test_ensure_renderer_config_passthrough():
    config = RendererConfiguration()
    assert ensure_renderer_config(config) is config


def test_load_config_file_yaml(tmp_path: Path):
    path = tmp_path / "renderer_config.yaml"
    path.write_text("environment: staging\ntemplate_dir: views\n")
    assert load_config_file(str(path)) == {"environment": "staging", "template_dir": "views"}


def test_load_config_file_errors(tmp_path: Path):
    with pytest.raises(ConfigurationError):
        load_config_file(str(tmp_path / "missing.yaml"))

    bad_json = tmp_path / "config.json"
    bad_json.write_text("{not json")
    with pytest.raises(ConfigurationError):
        load_config_file(str(bad_json))

    unsupported = tmp_path / "config.toml"
    unsupported.write_text("a = 1")
    with pytest.raises(ConfigurationError):
        load_config_file(str(unsupported))


def test_load_configuration_from_env(monkeypatch):
    monkeypatch.setenv("RENDERER_ENVIRONMENT", "qa")
    monkeypatch.setenv("RENDERER_TEMPLATE_EXT", ".j2")
    monkeypatch.setenv("RENDERER_UNRELATED", "x")
    assert load_configuration_from_env() == {"environment": "qa", "template_ext": ".j2"}


def test_load_config_precedence(tmp_path: Path, monkeypatch):
    """Environment variables override the config file, which overrides defaults."""
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"environment": "staging", "template_dir": "views"}))
    monkeypatch.setenv("RENDERER_ENVIRONMENT", "prod")

    config = load_config(str(path), defaults={"template_dir": "other", "encoding": "latin-1"})
    assert config.environment == Environment.PRODUCTION
    assert config.template_dir == "views"
    assert config.encoding == "latin-1"


def test_load_config_discovers_file(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("RENDERER_ENVIRONMENT", raising=False)
    (tmp_path / "renderer_config.yml").write_text("environment: test\n")
    config = load_config(search_dir=tmp_path)
    assert config.environment == Environment.TEST


def test_merge_configs():
    base = {"a": 1, "nested": {"x": 1, "y": 2}}
    override = {"b": 2, "nested": {"y": 3}}
    assert merge_configs(base, override) == {"a": 1, "b": 2, "nested": {"x": 1, "y": 3}}
    assert base == {"a": 1, "nested": {"x": 1, "y": 2}}


def test_encoding_must_be_known_codec():
    assert RendererConfiguration(encoding="latin-1").encoding == "latin-1"
    with pytest.raises(ConfigurationError):
        ensure_renderer_config({"encoding": "no-such-codec"})


def test_log_rotation_settings():
    config = RendererConfiguration(log_format="%(message)s", log_max_bytes=1024, log_backup_count=2)
    assert config.log_format == "%(message)s"
    assert config.log_max_bytes == 1024
    assert config.log_backup_count == 2
    with pytest.raises(ConfigurationError):
        ensure_renderer_config({"log_max_bytes": 0})
