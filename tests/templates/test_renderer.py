"""Tests for TemplateRenderer."""

from pathlib import Path

import pytest
from jinja2 import TemplateSyntaxError, UndefinedError

from promptdeck.templates.errors import RenderError
from promptdeck.templates.renderer import TemplateRenderer

pytestmark = pytest.mark.unit


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


class TestTemplateRenderer:
    def test_render_file_success(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "user.txt.jinja", "Hello {{ name }}!\n")
        assert TemplateRenderer().render(path, {"name": "World"}) == "Hello World!"

    def test_render_with_conditionals_and_loops(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path / "user.txt.jinja",
            "Items:\n{% for item in items %}\n- {{ item | upper }}\n{% endfor %}\n"
            "{% if urgent %}\nURGENT\n{% endif %}\n",
        )

        result = TemplateRenderer().render(path, {"items": ["a", "b"], "urgent": True})

        assert result == "Items:\n- A\n- B\nURGENT"

    def test_no_autoescape(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "t.jinja", "{{ text }}")
        assert TemplateRenderer().render(path, {"text": "<b>it's</b>"}) == "<b>it's</b>"

    def test_undefined_variable_is_render_error(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "t.jinja", "Hello {{ missing }}")

        with pytest.raises(RenderError) as exc_info:
            TemplateRenderer().render(path, {})

        assert exc_info.value.path == str(path)
        assert str(path) in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, UndefinedError)

    def test_syntax_error_is_render_error(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "t.jinja", "{% if %}")

        with pytest.raises(RenderError) as exc_info:
            TemplateRenderer().render(path, {})

        assert isinstance(exc_info.value.__cause__, TemplateSyntaxError)

    def test_runtime_error_is_render_error(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "t.jinja", "{{ x + 1 }}")

        with pytest.raises(RenderError) as exc_info:
            TemplateRenderer().render(path, {"x": "string"})

        assert isinstance(exc_info.value.__cause__, TypeError)

    def test_missing_file_is_render_error(self, tmp_path: Path) -> None:
        with pytest.raises(RenderError):
            TemplateRenderer().render(tmp_path / "gone.jinja", {})

    def test_rereads_file_each_call(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "t.jinja", "first {{ n }}")
        renderer = TemplateRenderer()

        assert renderer.render(path, {"n": 1}) == "first 1"
        _write(path, "second {{ n }}")
        assert renderer.render(path, {"n": 1}) == "second 1"

    def test_include_from_search_path(self, tmp_path: Path) -> None:
        _write(tmp_path / "_rules.jinja", "Be brief, {{ name }}.")
        path = _write(tmp_path / "t.jinja", "Hi. {% include '_rules.jinja' %}")

        renderer = TemplateRenderer(search_path=tmp_path)

        assert renderer.render(path, {"name": "Ada"}) == "Hi. Be brief, Ada."

    def test_custom_filters(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "t.jinja", "{{ name | shout }}")
        renderer = TemplateRenderer(filters={"shout": lambda v: f"{v}!"})
        assert renderer.render(path, {"name": "hey"}) == "hey!"

    def test_render_string(self) -> None:
        assert TemplateRenderer().render_string("  {{ a }}-{{ b }}  ", {"a": 1, "b": 2}) == "1-2"

    def test_render_string_error(self) -> None:
        with pytest.raises(RenderError, match="<string>"):
            TemplateRenderer().render_string("{{ nope }}", {})
