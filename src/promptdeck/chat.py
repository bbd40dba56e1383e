"""
Hand-off of composed templates to conversation objects.

Any object with ``add_message(role, content)`` and ``with_schema(schema)``
can receive a template. Conversation is a minimal in-process implementation
that accumulates messages and builds a chat-completions style payload.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol, TypeVar, runtime_checkable

from promptdeck.templates.composer import TemplateComposer, get_default_composer
from promptdeck.templates.schema import SchemaBuilder

logger = logging.getLogger(__name__)


@runtime_checkable
class ChatProtocol(Protocol):
    """Protocol for objects that can receive composed templates."""

    def add_message(self, role: str, content: str) -> Any: ...

    def with_schema(self, schema: Any) -> Any: ...


ChatT = TypeVar("ChatT", bound=ChatProtocol)


def apply_template(
    chat: ChatT,
    name: str,
    context: Mapping[str, Any] | None = None,
    *,
    composer: TemplateComposer | None = None,
) -> ChatT:
    """Compose a template and append it to a conversation.

    Messages are added in system, user, assistant order; the schema, if any,
    is attached afterwards. Nothing is added when composition fails.

    Args:
        chat: Conversation receiving the messages
        name: Template name
        context: Variables for rendering
        composer: Composer to use (defaults to the configured one)

    Returns:
        The same chat object, for chaining
    """
    result = (composer or get_default_composer()).compose(name, context)

    for message in result.messages:
        chat.add_message(message.role, message.content)
    if result.has_schema:
        chat.with_schema(result.schema)

    logger.debug(f"Applied template '{name}' ({len(result.messages)} message(s))")
    return chat


class Conversation:
    """Accumulates messages and a structured-output schema.

    Usage:
        convo = (
            Conversation()
            .with_template("extract_metadata", document="report.pdf")
            .with_template("follow_up")
        )
        payload = convo.to_request(model="gpt-4o-mini")
    """

    def __init__(self, composer: TemplateComposer | None = None):
        self.composer = composer
        self.messages: list[dict[str, str]] = []
        self.schema: Any = None

    def add_message(self, role: str, content: str) -> Conversation:
        self.messages.append({"role": role, "content": content})
        return self

    def with_schema(self, schema: Any) -> Conversation:
        self.schema = schema
        return self

    def with_template(
        self,
        template_name: str,
        context: Mapping[str, Any] | None = None,
        /,
        **variables: Any,
    ) -> Conversation:
        """Apply a template; keyword arguments extend ``context``."""
        merged = {**(context or {}), **variables}
        return apply_template(self, template_name, merged, composer=self.composer)

    def to_request(self, model: str | None = None) -> dict[str, Any]:
        """Build a chat-completions request body.

        The schema is converted to JSON schema and sent as a ``json_schema``
        response format.
        """
        payload: dict[str, Any] = {"messages": [dict(m) for m in self.messages]}
        if model:
            payload["model"] = model
        if self.schema is not None:
            json_schema = SchemaBuilder().json_schema(self.schema)
            payload["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": json_schema.get("title", "response"),
                    "schema": json_schema,
                },
            }
        return payload
