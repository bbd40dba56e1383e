"""
promptdeck CLI entry point.
"""

from pathlib import Path

import click

from promptdeck.config.app import load_config
from promptdeck.templates.composer import TemplateComposer

from .templates import list_templates, render_template, show_template
from .utils import setup_logging


@click.group()
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to custom configuration file",
)
@click.option(
    "--templates",
    "templates_dir",
    type=click.Path(file_okay=False),
    help="Template directory (overrides the config file)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config: str | None, templates_dir: str | None, verbose: bool) -> None:
    """promptdeck - file-backed prompt templates."""
    overrides = None
    if templates_dir:
        overrides = {"template_directory": str(Path(templates_dir).resolve())}
    try:
        app_config = load_config(config, cli_overrides=overrides)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    setup_logging(app_config.logging, verbose=verbose)

    ctx.ensure_object(dict)
    ctx.obj["config"] = app_config
    ctx.obj["composer"] = TemplateComposer.from_config(app_config)


cli.add_command(list_templates)
cli.add_command(show_template)
cli.add_command(render_template)
