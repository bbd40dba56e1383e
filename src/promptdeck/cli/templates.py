"""Template commands: list, show, render."""

import json

import click

from promptdeck.templates.errors import TemplateError
from promptdeck.templates.locator import ROLE_FILES
from promptdeck.templates.schema import SchemaBuilder

from .utils import get_composer, parse_variables


@click.command("list")
@click.option("--json", "json_format", is_flag=True, help="Output as JSON")
@click.pass_context
def list_templates(ctx: click.Context, json_format: bool) -> None:
    """List available templates."""
    composer = get_composer(ctx)
    try:
        names = composer.list_templates()
    except TemplateError as e:
        raise click.ClickException(str(e)) from e

    if json_format:
        click.echo(json.dumps({"templates": names, "count": len(names)}, indent=2))
        return

    if not names:
        click.echo("No templates found.")
        click.echo(f"Template directory: {composer.template_directory}")
        return

    click.echo(f"Found {len(names)} template(s):\n")
    for name in names:
        click.echo(f"  {name}")


@click.command("show")
@click.argument("name")
@click.option("--json", "json_format", is_flag=True, help="Output as JSON")
@click.pass_context
def show_template(ctx: click.Context, name: str, json_format: bool) -> None:
    """Show which role files a template has."""
    composer = get_composer(ctx)
    try:
        files = composer.locator.locate(name)
    except TemplateError as e:
        raise click.ClickException(str(e)) from e

    if json_format:
        payload = {"template": name, "files": {role: str(path) for role, path in files.items()}}
        click.echo(json.dumps(payload, indent=2))
        return

    click.echo(f"Template: {name}")
    for role in ROLE_FILES:
        path = files.get(role)
        marker = str(path) if path else "(missing)"
        click.echo(f"  {role:<10} {marker}")


@click.command("render")
@click.argument("name")
@click.option("--var", "variables", multiple=True, metavar="KEY=VALUE", help="Context variable")
@click.option(
    "--vars-file",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML/JSON file with context variables",
)
@click.option("--json", "json_format", is_flag=True, help="Output as JSON")
@click.pass_context
def render_template(
    ctx: click.Context,
    name: str,
    variables: tuple[str, ...],
    vars_file: str | None,
    json_format: bool,
) -> None:
    """Render a template and print its messages."""
    composer = get_composer(ctx)
    context = parse_variables(variables, vars_file)

    try:
        result = composer.compose(name, context)
        schema = SchemaBuilder().json_schema(result.schema) if result.has_schema else None
    except TemplateError as e:
        raise click.ClickException(str(e)) from e
    except TypeError as e:
        raise click.ClickException(f"Template '{name}': {e}") from e

    if json_format:
        payload = {"template": name, "messages": result.to_dicts(), "schema": schema}
        click.echo(json.dumps(payload, indent=2, default=str))
        return

    for message in result.messages:
        click.echo(f"[{message.role}]")
        click.echo(message.content)
        click.echo()
    if schema is not None:
        click.echo("[schema]")
        click.echo(json.dumps(schema, indent=2, default=str))
