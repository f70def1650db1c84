"""Title extraction from post bodies."""

from __future__ import annotations

import re

from postlint.markdown.fences import strip_code_blocks

_ATX_H1 = re.compile(r"^ {0,3}#[ \t]+(?P<title>.+?)(?:[ \t]+#+)?[ \t]*$")
_SETEXT_H1_UNDERLINE = re.compile(r"^ {0,3}=+[ \t]*$")


def find_title_heading(text: str) -> str | None:
    """Return the first level-1 heading outside fenced code blocks.

    Both ATX (``# Title``) and setext (``Title`` over ``=====``) headings count.
    """
    lines = strip_code_blocks(text).splitlines()
    for index, line in enumerate(lines):
        match = _ATX_H1.match(line)
        if match:
            return match.group("title").strip()
        if (
            line.strip()
            and index + 1 < len(lines)
            and _SETEXT_H1_UNDERLINE.match(lines[index + 1])
            and not line.startswith("    ")
        ):
            return line.strip()
    return None


def humanize_slug(slug: str) -> str:
    """Turn ``rust-guessing_game`` into ``Rust guessing game``."""
    words = re.sub(r"[-_]+", " ", slug).strip()
    if not words:
        return ""
    return words[0].upper() + words[1:]
