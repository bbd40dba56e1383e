"""
Structured-output schemas for templates.

A template may ship a ``schema.py`` defining::

    def build_schema(schema, context):
        return schema.model(
            "Metadata",
            title=str,
            category=schema.enum(*context["categories"]),
        )

``schema`` is the SchemaBuilder capability and ``context`` is the same
mapping the message files were rendered with. Whatever
build_schema returns is passed through untouched.
"""

from __future__ import annotations

import logging
import runpy
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, create_model

from .errors import SchemaDependencyMissingError, SchemaEvaluationError

logger = logging.getLogger(__name__)

# Entry point every schema.py must define
SCHEMA_ENTRY_POINT = "build_schema"

SCHEMA_CAPABILITY = "pydantic schema builder"


class SchemaBuilder:
    """Builds structured-output schemas as pydantic models."""

    name = SCHEMA_CAPABILITY

    def model(self, model_name: str, /, **fields: Any) -> type[BaseModel]:
        """Create a pydantic model class.

        Each field is either a bare type (required field) or a
        ``(type, default_or_field)`` tuple as accepted by ``create_model``.
        """
        definitions = {
            key: value if isinstance(value, tuple) else (value, ...)
            for key, value in fields.items()
        }
        return create_model(model_name, **definitions)

    def field(self, default: Any = ..., **kwargs: Any) -> Any:
        """Return a pydantic Field (description, ge/le, etc.)."""
        return Field(default, **kwargs)

    def enum(self, *values: Any) -> Any:
        """Return a Literal type restricted to ``values``."""
        if not values:
            raise ValueError("enum() requires at least one value")
        return Literal[values]

    def array(self, item_type: Any) -> Any:
        """Return a list type of ``item_type``."""
        return list[item_type]

    def optional(self, item_type: Any) -> Any:
        """Return an Optional type of ``item_type``."""
        return Optional[item_type]

    def json_schema(self, artifact: Any) -> dict[str, Any]:
        """Convert a schema artifact to a JSON schema dict.

        Raises:
            TypeError: If the artifact is neither a model class nor a dict
        """
        if isinstance(artifact, type) and issubclass(artifact, BaseModel):
            return artifact.model_json_schema()
        if isinstance(artifact, Mapping):
            return dict(artifact)
        raise TypeError(f"Cannot convert {type(artifact).__name__} to a JSON schema")


class SchemaEvaluator:
    """Evaluates schema.py files against a SchemaBuilder.

    A None builder stands for "schema support unavailable": templates without
    a schema still work, templates with one fail with
    SchemaDependencyMissingError.
    """

    def __init__(self, builder: SchemaBuilder | None = None):
        self.builder = builder

    @property
    def available(self) -> bool:
        """Whether schema files can be evaluated."""
        return self.builder is not None

    def _load_entry_point(self, path: Path, template_name: str) -> Any:
        # Run from source on every call; the module is only registered while it executes
        run_name = f"promptdeck_schema_{template_name.replace('/', '_').replace('-', '_')}"
        try:
            namespace = runpy.run_path(str(path), run_name=run_name)
        except Exception as e:
            raise SchemaEvaluationError(template_name, path, f"{type(e).__name__}: {e}") from e

        entry = namespace.get(SCHEMA_ENTRY_POINT)
        if not callable(entry):
            raise SchemaEvaluationError(
                template_name, path, f"schema file must define {SCHEMA_ENTRY_POINT}(schema, context)"
            )
        return entry

    def evaluate(self, path: str | Path, context: Mapping[str, Any], template_name: str) -> Any:
        """Evaluate a schema file.

        Args:
            path: Path to schema.py
            context: Render context, passed explicitly to build_schema
            template_name: Template the schema belongs to (for error messages)

        Returns:
            The artifact returned by build_schema

        Raises:
            SchemaDependencyMissingError: If no schema builder is available
            SchemaEvaluationError: If the file fails to load or build a schema
        """
        path = Path(path)
        if self.builder is None:
            raise SchemaDependencyMissingError(template_name, path, SCHEMA_CAPABILITY)

        entry = self._load_entry_point(path, template_name)
        try:
            artifact = entry(self.builder, context)
        except Exception as e:
            raise SchemaEvaluationError(template_name, path, f"{type(e).__name__}: {e}") from e

        if artifact is None:
            raise SchemaEvaluationError(template_name, path, f"{SCHEMA_ENTRY_POINT}() returned None")

        logger.debug(f"Evaluated schema for template '{template_name}' from {path}")
        return artifact
