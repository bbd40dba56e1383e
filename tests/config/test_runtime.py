"""Tests for process-wide configuration state."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from promptdeck.config import PromptdeckConfig, configure, get_config, template_directory
from promptdeck.templates.composer import get_default_composer

pytestmark = pytest.mark.unit


def test_get_config_defaults() -> None:
    config = get_config()
    assert isinstance(config, PromptdeckConfig)
    assert config is get_config()


def test_configure_options(tmp_path: Path) -> None:
    configure(template_directory=str(tmp_path))
    assert template_directory() == tmp_path.resolve()


def test_last_write_wins(tmp_path: Path) -> None:
    configure(template_directory=str(tmp_path / "first"))
    configure(template_directory=str(tmp_path / "second"))
    assert template_directory() == (tmp_path / "second").resolve()


def test_configure_keeps_other_fields(tmp_path: Path) -> None:
    configure(schemas_enabled=False)
    configure(template_directory=str(tmp_path))

    config = get_config()
    assert config.schemas_enabled is False
    assert config.template_directory == str(tmp_path)


def test_configure_rejects_unknown_option(tmp_path: Path) -> None:
    configure(template_directory=str(tmp_path))

    with pytest.raises(ValidationError, match="templates_directory"):
        configure(templates_directory=str(tmp_path / "other"))

    assert template_directory() == tmp_path.resolve()


def test_configure_with_config_object(tmp_path: Path) -> None:
    installed = configure(PromptdeckConfig(template_directory=str(tmp_path)))
    assert get_config() is installed


def test_configure_does_not_validate_paths(tmp_path: Path) -> None:
    missing = tmp_path / "does-not-exist"
    configure(template_directory=str(missing))
    assert template_directory() == missing.resolve()


def test_default_composer_follows_configure(tmp_path: Path) -> None:
    configure(template_directory=str(tmp_path / "a"))
    first = get_default_composer()
    assert get_default_composer() is first

    configure(template_directory=str(tmp_path / "b"))
    second = get_default_composer()

    assert second is not first
    assert second.template_directory == (tmp_path / "b").resolve()


def test_default_composer_without_schemas(tmp_path: Path) -> None:
    configure(template_directory=str(tmp_path), schemas_enabled=False)
    assert get_default_composer().schema_evaluator.available is False
