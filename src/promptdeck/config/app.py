"""
Configuration management for promptdeck.

Provides YAML-based configuration with CLI overrides,
configuration hierarchy (CLI > YAML > Defaults), and validation.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_CONFIG_FILE = "~/.promptdeck/config.yaml"

# Conventional template directory name under the application root
DEFAULT_TEMPLATE_SUBDIR = "prompts"

# Environment variable that pins the application root
APP_ROOT_ENV = "PROMPTDECK_APP_ROOT"

_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")


class LoggingSettings(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")

    level: Literal["debug", "info", "warning", "error"] = Field(
        default="info",
        description="Log level",
    )
    format: Literal["text", "json"] = Field(
        default="text",
        description="Log format (text or json)",
    )


class PromptdeckConfig(BaseModel):
    """Top-level promptdeck configuration."""

    model_config = ConfigDict(extra="forbid")

    template_directory: str | None = Field(
        default=None,
        description="Directory holding named templates. Relative paths resolve "
        "against app_root (or the working directory when no root is known).",
    )
    app_root: str | None = Field(
        default=None,
        description="Application root used for the default template directory",
    )
    schemas_enabled: bool = Field(
        default=True,
        description="Evaluate schema.py files with the pydantic schema builder",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    @field_validator("template_directory", "app_root")
    @classmethod
    def validate_not_blank(cls, v: str | None) -> str | None:
        """Treat blank strings as unset."""
        if v is not None and not v.strip():
            return None
        return v

    def get_app_root(self) -> Path | None:
        """Return the explicit app root, or discover one."""
        if self.app_root:
            return Path(self.app_root).expanduser().resolve()
        return discover_app_root()

    def resolved_template_directory(self) -> Path | None:
        """Resolve the template directory to an absolute path.

        Explicit values win (relative ones are anchored at the app root or the
        working directory). Without one, falls back to ``<app root>/prompts``
        when an app root is discoverable. Existence is not checked here.

        Returns:
            Absolute path, or None when nothing is configured or discoverable
        """
        root = self.get_app_root()
        if self.template_directory:
            path = Path(self.template_directory).expanduser()
            if not path.is_absolute():
                path = (root or Path.cwd()) / path
            return path.resolve()
        if root is not None:
            return root / DEFAULT_TEMPLATE_SUBDIR
        return None


def discover_app_root(start: Path | None = None) -> Path | None:
    """Find the application root.

    Checks the PROMPTDECK_APP_ROOT environment variable first, then walks up
    from ``start`` (default: cwd) looking for a ``pyproject.toml``.

    Returns:
        Path to the app root, or None if none is found
    """
    env_root = os.environ.get(APP_ROOT_ENV)
    if env_root:
        return Path(env_root).expanduser().resolve()

    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / "pyproject.toml").is_file():
            return candidate
    return None


def expand_env_vars(content: str) -> str:
    """
    Expand ``${VAR}`` and ``${VAR:-default}`` references in config text.

    Unset variables without a default are left untouched.
    """

    def _replace(match: re.Match[str]) -> str:
        name, default = match.group(1), match.group(2)
        value = os.environ.get(name)
        if value is not None:
            return value
        if default is not None:
            return default
        return match.group(0)

    return _ENV_VAR_PATTERN.sub(_replace, content)


def read_config_file(config_file: str | Path) -> dict[str, Any]:
    """Parse a YAML config file after environment expansion.

    A missing or empty file yields an empty dict.

    Raises:
        ValueError: If the file is not valid YAML or is not a mapping
    """
    config_path = Path(config_file).expanduser()
    if not config_path.is_file():
        return {}

    try:
        data = yaml.safe_load(expand_env_vars(config_path.read_text(encoding="utf-8")))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{config_path} must contain a mapping, got {type(data).__name__}")
    return data


def load_config(
    config_file: str | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> PromptdeckConfig:
    """
    Load configuration with hierarchy: CLI > YAML > Defaults.

    Args:
        config_file: Path to YAML config file (default: ~/.promptdeck/config.yaml)
        cli_overrides: Top-level fields that replace the file's values

    Returns:
        Validated PromptdeckConfig instance

    Raises:
        ValueError: If configuration is invalid
    """
    if config_file is None:
        config_file = DEFAULT_CONFIG_FILE

    config_dict = {**read_config_file(config_file), **(cli_overrides or {})}

    try:
        return PromptdeckConfig(**config_dict)
    except ValidationError as e:
        raise ValueError(
            f"Configuration validation failed: {e}\n"
            f"Please check your configuration file at {config_file}"
        ) from e
