"""Locate fenced code blocks in post bodies.

Code inside a block is opaque: only the delimiters and the info string carry
meaning here. A fence opened with backticks is closed only by backticks (and
likewise for tildes), with a run at least as long as the opener, so a
three-backtick line inside a four-tilde block is plain content.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

_OPENING_FENCE = re.compile(r"^(?P<indent>[ \t]*)(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
_CLOSING_FENCE = re.compile(r"^[ \t]*(?P<fence>`{3,}|~{3,})[ \t]*$")


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """A fenced code block found in a post.

    Attributes:
        fence: The opening delimiter run, e.g. ``"```"`` or ``"~~~~"``
        info: Info string following the opening fence (may be empty)
        start_line: 1-based line of the opening fence
        end_line: 1-based line of the closing fence, or the last line of the
            document when the block is unclosed
        content: Text between the delimiters
        closed: Whether a matching closing fence was found

    """

    fence: str
    info: str
    start_line: int
    end_line: int
    content: str
    closed: bool

    @property
    def language(self) -> str | None:
        """First word of the info string, e.g. ``rust`` for ``rust,ignore``."""
        if not self.info:
            return None
        word = self.info.split()[0]
        word = word.strip("{}.").split(",")[0]
        return word.lower() or None


def _match_opening(line: str) -> tuple[str, str, int] | None:
    match = _OPENING_FENCE.match(line)
    if match is None:
        return None
    fence = match.group("fence")
    info = match.group("info").strip()
    if fence[0] == "`" and "`" in info:
        # inline code such as ```foo``` rather than a fence
        return None
    return fence, info, len(match.group("indent"))


def _closes(line: str, fence: str) -> bool:
    match = _CLOSING_FENCE.match(line)
    if match is None:
        return False
    candidate = match.group("fence")
    return candidate[0] == fence[0] and len(candidate) >= len(fence)


def _dedent(line: str, width: int) -> str:
    stripped = 0
    while stripped < width and stripped < len(line) and line[stripped] in " \t":
        stripped += 1
    return line[stripped:]


def scan_code_blocks(text: str, *, line_offset: int = 0) -> list[CodeBlock]:
    """Return every fenced code block in ``text`` in document order.

    Args:
        text: Markdown body.
        line_offset: Lines preceding ``text`` in its file (e.g. the
            front-matter), added to reported line numbers.

    Returns:
        List of CodeBlock. An opener without a matching closer yields a block
        running to the end of the document with ``closed=False``.

    """
    lines = text.splitlines()
    blocks: list[CodeBlock] = []
    index = 0
    while index < len(lines):
        opening = _match_opening(lines[index])
        if opening is None:
            index += 1
            continue

        fence, info, indent = opening
        start = index
        index += 1
        content: list[str] = []
        closed = False
        while index < len(lines):
            if _closes(lines[index], fence):
                closed = True
                break
            content.append(_dedent(lines[index], indent))
            index += 1

        end = index if closed else len(lines) - 1
        blocks.append(
            CodeBlock(
                fence=fence,
                info=info,
                start_line=start + 1 + line_offset,
                end_line=end + 1 + line_offset,
                content="\n".join(content),
                closed=closed,
            )
        )
        index += 1
    return blocks


def unclosed_blocks(blocks: Iterable[CodeBlock]) -> list[CodeBlock]:
    """Blocks whose opening delimiter has no matching closing delimiter."""
    return [block for block in blocks if not block.closed]


def strip_code_blocks(text: str) -> str:
    """Blank out fenced code blocks, keeping the line count unchanged."""
    lines = text.splitlines()
    for block in scan_code_blocks(text):
        for index in range(block.start_line - 1, block.end_line):
            lines[index] = ""
    return "\n".join(lines)


__all__ = ["CodeBlock", "scan_code_blocks", "strip_code_blocks", "unclosed_blocks"]
