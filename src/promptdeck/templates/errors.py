"""Exception types raised while resolving and rendering prompt templates.

Every error derives from TemplateError so hosts can catch the whole family,
while the subclasses keep the remediation paths apart:

- TemplateNotFoundError: nothing to render under that name
- RenderError: a message file failed to render
- SchemaDependencyMissingError: schema.py exists but no schema builder
- SchemaEvaluationError: schema.py itself is broken
"""

from __future__ import annotations

from pathlib import Path


class TemplateError(Exception):
    """Base exception for template errors."""

    pass


class TemplateDirectoryNotConfiguredError(TemplateError):
    """Raised when a template is requested but no template directory is set."""

    def __init__(self, name: str | None = None):
        self.name = name
        target = f"template '{name}'" if name else "templates"
        super().__init__(
            f"Cannot resolve {target}: no template directory configured. "
            "Call promptdeck.configure(template_directory=...) or set "
            "template_directory in the config file."
        )


class TemplateNotFoundError(TemplateError):
    """Raised when a template name resolves to no recognized files."""

    def __init__(self, name: str, directory: str | Path | None, reason: str | None = None):
        self.name = name
        self.directory = str(directory) if directory is not None else None
        message = f"Template '{name}' not found in {self.directory}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidTemplateNameError(TemplateNotFoundError):
    """Raised when a template name is not a safe relative identifier."""

    def __init__(self, name: str, directory: str | Path | None = None):
        super().__init__(
            name,
            directory,
            reason="names must be segments of letters, digits, '_' or '-' joined by '/'",
        )


class RenderError(TemplateError):
    """Raised when a template file fails to render."""

    def __init__(self, path: str | Path, cause: BaseException):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Failed to render {self.path}: {type(cause).__name__}: {cause}")


class SchemaDependencyMissingError(TemplateError):
    """Raised when a template has a schema file but no schema builder is available."""

    def __init__(self, name: str, path: str | Path, capability: str):
        self.name = name
        self.path = str(path)
        self.capability = capability
        super().__init__(
            f"Template '{name}' defines a schema ({self.path}) but the {capability} "
            "is not available. Install pydantic and build the composer with a "
            "SchemaBuilder (or set schemas_enabled: true) to use schema files."
        )


class SchemaEvaluationError(TemplateError):
    """Raised when a schema file exists but fails to produce a schema."""

    def __init__(self, name: str, path: str | Path, reason: str):
        self.name = name
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Schema for template '{name}' failed ({self.path}): {reason}")
