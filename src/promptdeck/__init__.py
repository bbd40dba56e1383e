"""promptdeck - file-backed, multi-role prompt templates."""

from promptdeck.chat import ChatProtocol, Conversation, apply_template
from promptdeck.config import configure, get_config, template_directory
from promptdeck.templates import (
    CompositionResult,
    RenderError,
    SchemaDependencyMissingError,
    SchemaEvaluationError,
    TemplateComposer,
    TemplateError,
    TemplateNotFoundError,
    compose_template,
)

__version__ = "0.1.0"

__all__ = [
    "ChatProtocol",
    "CompositionResult",
    "Conversation",
    "RenderError",
    "SchemaDependencyMissingError",
    "SchemaEvaluationError",
    "TemplateComposer",
    "TemplateError",
    "TemplateNotFoundError",
    "apply_template",
    "compose_template",
    "configure",
    "get_config",
    "template_directory",
]
