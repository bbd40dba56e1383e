"""Jinja2 rendering of template files."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .errors import RenderError

logger = logging.getLogger(__name__)


class TemplateRenderer:
    """
    Renders template files with Jinja2.

    Files are read from disk on every call so edits show up without a
    restart. Undefined variables are errors rather than empty strings.
    """

    def __init__(
        self,
        search_path: str | Path | None = None,
        filters: Mapping[str, Callable[..., Any]] | None = None,
    ):
        """Initialize the renderer.

        Args:
            search_path: Root for {% include %} / {% import %} lookups
                (usually the template directory)
            filters: Extra Jinja2 filters available to every template
        """
        loader = FileSystemLoader(str(search_path)) if search_path else None

        self.env = Environment(  # nosec B701 - generating raw text prompts, not HTML
            loader=loader,
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            # Included partials are re-read on every render too
            cache_size=0,
        )
        if filters:
            self.env.filters.update(filters)

    def render(self, path: str | Path, context: Mapping[str, Any]) -> str:
        """
        Render a template file with the given context.

        Args:
            path: Template file to read
            context: Variables visible to the template

        Returns:
            Rendered text with surrounding whitespace stripped

        Raises:
            RenderError: If the file cannot be read or fails to render
        """
        path = Path(path)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise RenderError(path, e) from e

        try:
            template = self.env.from_string(source)
            rendered = template.render(dict(context))
        except Exception as e:
            raise RenderError(path, e) from e

        logger.debug(f"Rendered {path} ({len(rendered)} chars)")
        return rendered.strip()

    def render_string(self, source: str, context: Mapping[str, Any]) -> str:
        """
        Render a template string with the given context.

        Raises:
            RenderError: If the string fails to render
        """
        try:
            return self.env.from_string(source).render(dict(context)).strip()
        except Exception as e:
            raise RenderError("<string>", e) from e
