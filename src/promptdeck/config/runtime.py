"""
Process-wide configuration state.

configure() is meant to run once while the host application starts up;
afterwards the config is only read. Writes are serialized, but re-configuring
while other threads are composing templates is not supported.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any

from promptdeck.config.app import PromptdeckConfig

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_config: PromptdeckConfig | None = None


def configure(config: PromptdeckConfig | None = None, **options: Any) -> PromptdeckConfig:
    """Set the process-wide configuration.

    May be called more than once; the last call wins. Options are validated
    but paths are not checked until a template is resolved.

    Args:
        config: Full config to install. When omitted, the current config is
            updated with ``options``.
        **options: Individual fields, e.g. ``template_directory="prompts"``

    Returns:
        The installed PromptdeckConfig

    Raises:
        pydantic.ValidationError: If an option is unknown or invalid
    """
    global _config
    with _lock:
        base = config if config is not None else (_config or PromptdeckConfig())
        if options:
            base = PromptdeckConfig(**{**base.model_dump(), **options})
        _config = base
    logger.debug(f"Configured promptdeck (template_directory={base.template_directory})")
    return base


def get_config() -> PromptdeckConfig:
    """Get the process-wide configuration, creating defaults on first use."""
    global _config
    if _config is None:
        with _lock:
            if _config is None:
                _config = PromptdeckConfig()
    return _config


def template_directory() -> Path | None:
    """Return the resolved template directory of the current configuration."""
    return get_config().resolved_template_directory()


def reset_config() -> None:
    """Drop the process-wide configuration (used by tests)."""
    global _config
    with _lock:
        _config = None
