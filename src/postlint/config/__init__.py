"""Configuration for postlint."""

from postlint.config.exceptions import ConfigError, ConfigValidationError, ConfigWriteError, PostsDirectoryNotFoundError
from postlint.config.loader import CONFIG_FILENAME, find_config, load_config, resolve_posts_dir, save_config
from postlint.config.schema import (
    AuthoringSettings,
    CheckSettings,
    FrontMatterSettings,
    PostlintConfig,
)

__all__ = [
    "CONFIG_FILENAME",
    "AuthoringSettings",
    "CheckSettings",
    "ConfigError",
    "ConfigValidationError",
    "ConfigWriteError",
    "FrontMatterSettings",
    "PostlintConfig",
    "PostsDirectoryNotFoundError",
    "find_config",
    "load_config",
    "resolve_posts_dir",
    "save_config",
]
