from page_renderer.templates import funcmap
from page_renderer.templates.funcmap import file, get_func_map, has_field, link


class Obj:
    name = "x"


def test_get_func_map_returns_fresh_dict():
    first = get_func_map()
    first["extra"] = len
    assert "extra" not in get_func_map()
    assert {"has_field", "file", "link", "to_json", "to_yaml", "now", "uuid"} <= set(first)


def test_has_field():
    assert has_field({"a": 1}, "a")
    assert not has_field({"a": 1}, "b")
    assert has_field(Obj(), "name")
    assert not has_field(Obj(), "other")


def test_file():
    assert file("css/main.css") == f"/files/css/main.css?v={funcmap.CACHE_BUSTER}"
    assert file("/img.png").startswith("/files/img.png?v=")


def test_link():
    assert link("/about", "About", "/about", "nav") == '<a class="nav is-active" href="/about">About</a>'
    assert link("/", "<Home>", "/about") == '<a class="" href="/">&lt;Home&gt;</a>'


def test_encoding_helpers():
    funcs = get_func_map()
    assert funcs["base64_decode"](funcs["base64_encode"]("hello")) == "hello"
    assert funcs["base64_encode"]("") == ""
    assert funcs["to_json"]({"a": 1}) == '{\n  "a": 1\n}'
    assert funcs["to_yaml"]({"a": 1}) == "a: 1\n"
