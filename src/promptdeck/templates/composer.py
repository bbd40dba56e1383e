"""
Template composition.

Resolves a template name, renders its message files in fixed order
(system, user, assistant), evaluates its schema file if present, and returns
the result as a single CompositionResult. Composition is all-or-nothing:
the first error propagates and nothing partial is returned.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .errors import TemplateError
from .locator import MESSAGE_ROLES, MessageRole, TemplateLocator
from .renderer import TemplateRenderer
from .schema import SchemaBuilder, SchemaEvaluator

if TYPE_CHECKING:
    from promptdeck.config.app import PromptdeckConfig

logger = logging.getLogger(__name__)

# Module-level default composer and the config it was built from
_default_composer: TemplateComposer | None = None
_default_config: PromptdeckConfig | None = None


@dataclass(frozen=True)
class ComposedMessage:
    """A rendered message for one role."""

    role: MessageRole
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class CompositionResult:
    """Output of composing one template."""

    name: str
    """Template name that was composed."""

    messages: list[ComposedMessage] = field(default_factory=list)
    """Rendered messages in system, user, assistant order."""

    schema: Any = None
    """Schema artifact from schema.py, or None when the template has none."""

    @property
    def has_schema(self) -> bool:
        return self.schema is not None

    def to_dicts(self) -> list[dict[str, str]]:
        """Messages as chat-completion style dicts."""
        return [message.to_dict() for message in self.messages]


class TemplateComposer:
    """Composes named templates into messages and an optional schema.

    Usage:
        composer = TemplateComposer("app/prompts")
        result = composer.compose("extract_metadata", {"document": "report.pdf"})
        result.messages  # [ComposedMessage("system", ...), ComposedMessage("user", ...)]
    """

    def __init__(
        self,
        template_directory: str | Path | None = None,
        *,
        renderer: TemplateRenderer | None = None,
        schema_evaluator: SchemaEvaluator | None = None,
    ):
        """Initialize the composer.

        Args:
            template_directory: Template root. When omitted, the process-wide
                configured directory is read at compose time.
            renderer: Renderer for message files (defaults to one whose
                include path is the template root)
            schema_evaluator: Evaluator for schema files. Defaults to one
                backed by SchemaBuilder; pass SchemaEvaluator(None) to run
                without schema support.
        """
        self._template_directory = Path(template_directory) if template_directory else None
        self._config: PromptdeckConfig | None = None
        self._renderer = renderer
        self._renderer_owned = renderer is None
        self._renderer_root: Path | None = None
        self.schema_evaluator = schema_evaluator or SchemaEvaluator(SchemaBuilder())

    @classmethod
    def from_config(cls, config: PromptdeckConfig) -> TemplateComposer:
        """Build a composer from an explicit config.

        The config's template directory is resolved at compose time, so
        relative paths and the discovered app root follow the current
        working directory and environment.
        """
        builder = SchemaBuilder() if config.schemas_enabled else None
        composer = cls(schema_evaluator=SchemaEvaluator(builder))
        composer._config = config
        return composer

    @property
    def template_directory(self) -> Path | None:
        if self._template_directory is not None:
            return self._template_directory
        if self._config is not None:
            return self._config.resolved_template_directory()
        from promptdeck.config.runtime import template_directory

        return template_directory()

    @property
    def locator(self) -> TemplateLocator:
        return TemplateLocator(self.template_directory)

    @property
    def renderer(self) -> TemplateRenderer:
        root = self.template_directory
        if self._renderer is None or (self._renderer_owned and self._renderer_root != root):
            self._renderer = TemplateRenderer(search_path=root)
            self._renderer_root = root
        return self._renderer

    def compose(self, name: str, context: Mapping[str, Any] | None = None) -> CompositionResult:
        """Compose a template.

        Args:
            name: Template name
            context: Variables for message files and the schema file. The
                mapping is copied shallowly and exposed read-only; mutable
                values inside it are the caller's own objects.

        Returns:
            CompositionResult with messages in system, user, assistant order

        Raises:
            TemplateNotFoundError: If the template has no recognized files
            RenderError: If any message file fails to render
            SchemaDependencyMissingError: If schema.py exists without a builder
            SchemaEvaluationError: If schema.py fails
        """
        # Top-level keys are frozen; values are shared with the caller
        ctx = MappingProxyType(dict(context or {}))

        try:
            files = self.locator.locate(name)
            result = CompositionResult(name=name)

            for role in MESSAGE_ROLES:
                path = files.get(role)
                if path is None:
                    continue
                result.messages.append(ComposedMessage(role, self.renderer.render(path, ctx)))

            schema_path = files.get("schema")
            if schema_path is not None:
                result.schema = self.schema_evaluator.evaluate(schema_path, ctx, name)
        except TemplateError as e:
            logger.warning(f"Failed to compose template '{name}': {e}")
            raise

        logger.debug(
            f"Composed template '{name}': {len(result.messages)} message(s), "
            f"schema={'yes' if result.has_schema else 'no'}"
        )
        return result

    def exists(self, name: str) -> bool:
        """Check if a template exists."""
        return self.locator.exists(name)

    def list_templates(self) -> list[str]:
        """List available template names."""
        return self.locator.list_templates()


def get_default_composer() -> TemplateComposer:
    """Get the composer built from the process-wide configuration.

    Rebuilt whenever configure() installs a new config.
    """
    global _default_composer, _default_config
    from promptdeck.config.runtime import get_config

    config = get_config()
    if _default_composer is None or _default_config is not config:
        _default_composer = TemplateComposer.from_config(config)
        _default_config = config
    return _default_composer


def compose_template(name: str, context: Mapping[str, Any] | None = None) -> CompositionResult:
    """Convenience function to compose a template using the default composer."""
    return get_default_composer().compose(name, context)
