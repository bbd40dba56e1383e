"""
Template locator.

A template is a directory under the template root. Each recognized role maps
to a fixed filename inside it; every file is optional but at least one must
exist:

    {root}/{name}/system.txt.jinja
    {root}/{name}/user.txt.jinja
    {root}/{name}/assistant.txt.jinja
    {root}/{name}/schema.py
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Literal

from .errors import (
    InvalidTemplateNameError,
    TemplateDirectoryNotConfiguredError,
    TemplateNotFoundError,
)

logger = logging.getLogger(__name__)

Role = Literal["system", "user", "assistant", "schema"]
MessageRole = Literal["system", "user", "assistant"]

# Message roles in composition order
MESSAGE_ROLES: tuple[MessageRole, ...] = ("system", "user", "assistant")

ROLE_FILES: dict[Role, str] = {
    "system": "system.txt.jinja",
    "user": "user.txt.jinja",
    "assistant": "assistant.txt.jinja",
    "schema": "schema.py",
}

# One or more [A-Za-z0-9_-] segments joined by "/"; rules out "..", "." and absolute paths
TEMPLATE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+(?:/[A-Za-z0-9_-]+)*$")


def validate_template_name(name: str, directory: Path | None = None) -> str:
    """Check that a template name is safe to join onto the template root.

    Raises:
        InvalidTemplateNameError: If the name is empty or not a relative identifier
    """
    if not isinstance(name, str) or not TEMPLATE_NAME_PATTERN.match(name):
        raise InvalidTemplateNameError(str(name), directory)
    return name


class TemplateLocator:
    """Finds the role files of named templates under a template root."""

    def __init__(self, template_directory: str | Path | None):
        self.template_directory = Path(template_directory) if template_directory else None

    def _root(self, name: str | None = None) -> Path:
        if self.template_directory is None:
            raise TemplateDirectoryNotConfiguredError(name)
        return self.template_directory

    def template_path(self, name: str) -> Path:
        """Return the directory a template name maps to (may not exist)."""
        root = self._root(name)
        validate_template_name(name, root)
        return root / name

    def locate(self, name: str) -> dict[Role, Path]:
        """Resolve a template name to its existing role files.

        Args:
            name: Template name (e.g., "extract_metadata" or "reports/summary")

        Returns:
            Mapping of role to file path, containing only files that exist

        Raises:
            TemplateDirectoryNotConfiguredError: If no template root is set
            TemplateNotFoundError: If no recognized file exists for the name
        """
        root = self._root(name)
        template_dir = self.template_path(name)

        if not root.is_dir():
            raise TemplateNotFoundError(name, root, reason="template directory does not exist")

        found: dict[Role, Path] = {}
        if template_dir.is_dir():
            for role, filename in ROLE_FILES.items():
                path = template_dir / filename
                if path.is_file():
                    found[role] = path

        if not found:
            raise TemplateNotFoundError(name, root)

        logger.debug(f"Located template '{name}' with roles {sorted(found)}")
        return found

    def exists(self, name: str) -> bool:
        """Check whether a template has at least one recognized file."""
        try:
            self.locate(name)
        except TemplateNotFoundError:
            return False
        return True

    def list_templates(self) -> list[str]:
        """List template names available under the template root.

        Returns:
            Sorted names; nested templates are joined with "/"
        """
        root = self._root()
        if not root.is_dir():
            return []

        names: set[str] = set()
        for filename in ROLE_FILES.values():
            for path in root.rglob(filename):
                rel = path.parent.relative_to(root).as_posix()
                if rel != "." and TEMPLATE_NAME_PATTERN.match(rel):
                    names.add(rel)
        return sorted(names)
