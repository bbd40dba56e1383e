"""
Configuration package for promptdeck.

Module structure:
- app.py: PromptdeckConfig, LoggingSettings and YAML loading helpers
- runtime.py: process-wide configure() / get_config() state
"""

from promptdeck.config.app import (
    LoggingSettings,
    PromptdeckConfig,
    discover_app_root,
    expand_env_vars,
    load_config,
    read_config_file,
)
from promptdeck.config.runtime import configure, get_config, reset_config, template_directory

__all__ = [
    "LoggingSettings",
    "PromptdeckConfig",
    "configure",
    "discover_app_root",
    "expand_env_vars",
    "get_config",
    "load_config",
    "read_config_file",
    "reset_config",
    "template_directory",
]
