"""
Named, file-backed prompt templates.

Provides:
- Template lookup by name (system/user/assistant/schema role files)
- Jinja2 rendering against a per-call context
- Structured-output schemas built with pydantic from schema.py files
"""

from .composer import (
    ComposedMessage,
    CompositionResult,
    TemplateComposer,
    compose_template,
    get_default_composer,
)
from .errors import (
    InvalidTemplateNameError,
    RenderError,
    SchemaDependencyMissingError,
    SchemaEvaluationError,
    TemplateDirectoryNotConfiguredError,
    TemplateError,
    TemplateNotFoundError,
)
from .locator import MESSAGE_ROLES, ROLE_FILES, TemplateLocator, validate_template_name
from .renderer import TemplateRenderer
from .schema import SchemaBuilder, SchemaEvaluator

__all__ = [
    "MESSAGE_ROLES",
    "ROLE_FILES",
    "ComposedMessage",
    "CompositionResult",
    "InvalidTemplateNameError",
    "RenderError",
    "SchemaBuilder",
    "SchemaDependencyMissingError",
    "SchemaEvaluationError",
    "SchemaEvaluator",
    "TemplateComposer",
    "TemplateDirectoryNotConfiguredError",
    "TemplateError",
    "TemplateLocator",
    "TemplateNotFoundError",
    "TemplateRenderer",
    "compose_template",
    "get_default_composer",
    "validate_template_name",
]
