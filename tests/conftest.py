"""Pytest configuration and shared fixtures for promptdeck tests."""

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from promptdeck.config import reset_config
from promptdeck.templates import composer as composer_module


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Give every test a fresh process-wide config and default composer."""
    monkeypatch.delenv("PROMPTDECK_APP_ROOT", raising=False)
    reset_config()
    monkeypatch.setattr(composer_module, "_default_composer", None)
    monkeypatch.setattr(composer_module, "_default_config", None)
    yield
    reset_config()


@pytest.fixture
def prompts_dir(tmp_path: Path) -> Path:
    """Create an empty template root."""
    d = tmp_path / "prompts"
    d.mkdir()
    return d


@pytest.fixture
def make_template(prompts_dir: Path) -> Callable[..., Path]:
    """Create a template directory with the given role files.

    Usage:
        make_template("greet", system="Hi", user="Hello {{ name }}")
    """

    filenames = {
        "system": "system.txt.jinja",
        "user": "user.txt.jinja",
        "assistant": "assistant.txt.jinja",
        "schema": "schema.py",
    }

    def _make(name: str, **files: str) -> Path:
        template_dir = prompts_dir / name
        template_dir.mkdir(parents=True, exist_ok=True)
        for role, content in files.items():
            (template_dir / filenames[role]).write_text(content, encoding="utf-8")
        return template_dir

    return _make


CATEGORY_SCHEMA = '''
def build_schema(schema, context):
    return schema.model(
        "DocumentMetadata",
        title=(str, schema.field(description="Document title")),
        category=schema.enum(*context["categories"]),
    )
'''


@pytest.fixture
def category_schema() -> str:
    """schema.py source whose enum comes from context['categories']."""
    return CATEGORY_SCHEMA
