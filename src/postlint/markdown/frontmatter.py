"""Helpers for parsing YAML front-matter from post markdown."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import frontmatter
import yaml

from postlint.markdown.exceptions import FrontMatterError, UnterminatedFrontMatterError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

DELIMITER = "---"
_BOM = "\ufeff"
_yaml_handler = frontmatter.YAMLHandler()


def _has_opening_delimiter(lines: list[str]) -> bool:
    return bool(lines) and lines[0].lstrip(_BOM).rstrip() == DELIMITER


def split_frontmatter(text: str) -> tuple[dict[str, Any], str, int]:
    """Split a post into front-matter metadata and body.

    The block must start on the very first line, as static-site generators
    only recognise front-matter there.

    Args:
        text: Full post content.

    Returns:
        Tuple of (metadata dict, body string, body_offset) where body_offset is
        the number of lines preceding the body. A post without front-matter
        returns ``({}, text, 0)``.

    Raises:
        FrontMatterError: If the block is unterminated, is not valid YAML or
            does not hold a key/value mapping.

    """
    lines = text.splitlines(keepends=True)
    if not _has_opening_delimiter(lines):
        return {}, text, 0

    closing = next(
        (index for index in range(1, len(lines)) if lines[index].rstrip() == DELIMITER),
        None,
    )
    if closing is None:
        raise UnterminatedFrontMatterError

    block = "".join(lines[1:closing])
    try:
        raw_metadata = _yaml_handler.load(block)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line = mark.line + 2 if mark is not None else 1
        problem = getattr(exc, "problem", None) or str(exc)
        raise FrontMatterError(problem, line=line) from exc

    if raw_metadata is None:
        metadata: dict[str, Any] = {}
    elif isinstance(raw_metadata, dict):
        metadata = {str(key): value for key, value in raw_metadata.items()}
    else:
        raise FrontMatterError(f"expected key/value pairs, got {type(raw_metadata).__name__}", line=2)

    body_offset = closing + 1
    return metadata, "".join(lines[body_offset:]), body_offset


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse front-matter, never raising.

    Args:
        content: Markdown content that may include front-matter.

    Returns:
        Tuple of (metadata dict, body string). If parsing fails, metadata will
        be an empty dict and the original content is returned.

    """
    try:
        metadata, body, _ = split_frontmatter(content)
    except FrontMatterError as exc:
        logger.warning("Failed to parse front-matter content: %s", exc)
        return {}, content
    return metadata, body


def parse_frontmatter_file(path: Path, *, encoding: str = "utf-8") -> tuple[dict[str, Any], str]:
    """Read a markdown file and parse its front-matter.

    Raises:
        OSError: If the file cannot be read.

    """
    return parse_frontmatter(path.read_text(encoding=encoding))


def read_frontmatter_only(path: Path, *, encoding: str = "utf-8") -> dict[str, Any]:
    """Read only the front-matter of a file, stopping at the closing delimiter.

    Returns an empty dict when there is no front-matter or it cannot be parsed.
    """
    try:
        with path.open("r", encoding=encoding) as f:
            first_line = f.readline()
            if first_line.lstrip(_BOM).rstrip() != DELIMITER:
                return {}

            lines = []
            for line in f:
                if line.rstrip() == DELIMITER:
                    break
                lines.append(line)
            else:
                return {}

            data = _yaml_handler.load("".join(lines))
            if isinstance(data, dict):
                return data
            return {}

    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        logger.debug("Failed to read front-matter from %s: %s", path, exc)
        return {}


def dump_post(metadata: dict[str, Any], body: str) -> str:
    """Render a post from its metadata and body."""
    yaml_front = yaml.dump(metadata, default_flow_style=False, allow_unicode=True, sort_keys=False)
    body = body if body.endswith("\n") or not body else f"{body}\n"
    return f"{DELIMITER}\n{yaml_front}{DELIMITER}\n\n{body}"
