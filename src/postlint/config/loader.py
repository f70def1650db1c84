"""Configuration loader for ``.postlint.yml``.

Unlike a build pipeline, a linter must not quietly substitute defaults for a
broken configuration, so parse and validation failures raise.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from postlint.config.exceptions import ConfigValidationError, ConfigWriteError
from postlint.config.schema import PostlintConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".postlint.yml"


def find_config(start_dir: Path) -> Path | None:
    """Search upward for ``.postlint.yml``.

    Args:
        start_dir: Starting directory for upward search

    Returns:
        Path to the config file if found, else None

    """
    current = start_dir.expanduser().resolve()
    for candidate in (current, *current.parents):
        config_path = candidate / CONFIG_FILENAME
        if config_path.is_file():
            return config_path
    return None


def load_config(config_path: Path | None) -> PostlintConfig:
    """Load and validate a configuration file.

    Args:
        config_path: Path to the YAML file, or None for defaults

    Returns:
        Validated PostlintConfig instance

    Raises:
        ConfigValidationError: If the file cannot be read, is not valid YAML or
            fails validation

    """
    if config_path is None:
        logger.debug("No %s found, using defaults", CONFIG_FILENAME)
        return PostlintConfig()

    logger.info("Loading config from %s", config_path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigValidationError(config_path, detail=f"cannot read file: {e}") from e

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigValidationError(config_path, detail=str(e)) from e

    if not isinstance(data, dict):
        raise ConfigValidationError(config_path, detail="top level must be a mapping")

    try:
        return PostlintConfig(**data)
    except ValidationError as e:
        raise ConfigValidationError(config_path, errors=e.errors()) from e


def save_config(config: PostlintConfig, site_root: Path) -> Path:
    """Save a configuration to ``<site_root>/.postlint.yml``.

    Args:
        config: PostlintConfig instance to save
        site_root: Root directory of the site

    Returns:
        Path to the saved config file

    Raises:
        ConfigWriteError: If the directory or file cannot be written

    """
    config_path = site_root / CONFIG_FILENAME

    data = config.model_dump(exclude_none=True, mode="json")
    yaml_str = yaml.dump(
        data,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
    try:
        site_root.mkdir(parents=True, exist_ok=True)
        config_path.write_text(yaml_str, encoding="utf-8")
    except OSError as e:
        raise ConfigWriteError(config_path, e) from e
    logger.info("Saved config to %s", config_path)
    return config_path


def resolve_posts_dir(config: PostlintConfig, config_path: Path | None, fallback_root: Path) -> Path:
    """Resolve the configured posts directory against the config's location."""
    if config.posts_dir.is_absolute():
        return config.posts_dir
    root = config_path.parent if config_path is not None else fallback_root
    return (root / config.posts_dir).resolve()
