"""
Shared utilities for CLI commands.
"""

import logging
from pathlib import Path
from typing import Any

import click
import yaml

from promptdeck.config.app import LoggingSettings
from promptdeck.templates.composer import TemplateComposer


def setup_logging(settings: LoggingSettings | None = None, verbose: bool = False) -> None:
    """
    Configure logging for CLI.

    Args:
        settings: Logging section of the loaded config
        verbose: If True, enable DEBUG level logging regardless of settings
    """
    level_name = "debug" if verbose else (settings.level if settings else "info")
    if settings is not None and settings.format == "json":
        fmt = '{"time": "%(asctime)s", "logger": "%(name)s", "level": "%(levelname)s", "message": "%(message)s"}'
    else:
        fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    logging.basicConfig(
        level=getattr(logging, level_name.upper()),
        format=fmt,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def get_composer(ctx: click.Context) -> TemplateComposer:
    """Get the composer stored on the root command context."""
    composer: TemplateComposer = ctx.obj["composer"]
    return composer


def parse_variables(pairs: tuple[str, ...], vars_file: str | None = None) -> dict[str, Any]:
    """
    Build a render context from --vars-file and --var options.

    Values are parsed as YAML scalars/collections, so ``count=3`` yields an
    int and ``tags=[a, b]`` a list. --var entries override the file.

    Raises:
        click.BadParameter: If a pair is not KEY=VALUE or the file is not a mapping
    """
    context: dict[str, Any] = {}

    if vars_file:
        with open(Path(vars_file), encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise click.BadParameter(
                f"{vars_file} must contain a mapping", param_hint="--vars-file"
            )
        context.update(data)

    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected KEY=VALUE, got '{pair}'", param_hint="--var")
        try:
            value = yaml.safe_load(raw) if raw else ""
        except yaml.YAMLError:
            value = raw
        context[key.strip()] = value

    return context
