"""Tests for the fenced code block scanner."""

from __future__ import annotations

from textwrap import dedent

from postlint.markdown.fences import scan_code_blocks, strip_code_blocks, unclosed_blocks


def test_scan_finds_closed_block_with_language():
    text = "intro\n```rust\nfn main() {}\n```\n"
    [block] = scan_code_blocks(text)

    assert block.language == "rust"
    assert block.closed
    assert block.start_line == 2
    assert block.end_line == 4
    assert block.content == "fn main() {}"


def test_scan_applies_line_offset():
    [block] = scan_code_blocks("```\nx\n```\n", line_offset=5)
    assert block.start_line == 6
    assert block.end_line == 8


def test_unclosed_block_runs_to_end_of_document():
    text = "```python\nimport bcrypt\nmore\n"
    [block] = scan_code_blocks(text)

    assert not block.closed
    assert block.end_line == 3
    assert unclosed_blocks([block]) == [block]


def test_backticks_inside_tilde_block_are_content():
    text = dedent(
        """\
        ~~~~markdown
        ```js
        console.log(1)
        ```
        ~~~~
        """
    )
    blocks = scan_code_blocks(text)

    assert len(blocks) == 1
    assert blocks[0].closed
    assert "```js" in blocks[0].content


def test_closing_fence_must_be_at_least_as_long():
    text = "````\n```\nstill inside\n````\n"
    [block] = scan_code_blocks(text)
    assert block.closed
    assert block.end_line == 4


def test_closing_fence_cannot_carry_info_string():
    text = "```\ncode\n```python\n"
    [block] = scan_code_blocks(text)
    assert not block.closed


def test_inline_triple_backticks_are_not_a_fence():
    assert scan_code_blocks("```inline``` code\n") == []


def test_fences_nested_in_list_items_are_recognised():
    text = "1. Install:\n\n    ```bash\n    pip install alembic\n    ```\n"
    [block] = scan_code_blocks(text)
    assert block.closed
    assert block.content == "pip install alembic"


def test_language_is_first_word_of_info_string():
    blocks = scan_code_blocks("```rust,ignore extra\n```\n```{.python}\n```\n```\n```\n")
    assert [block.language for block in blocks] == ["rust", "python", None]


def test_multiple_blocks_in_order():
    text = "```js\na\n```\ntext\n~~~yaml\nb\n~~~\n"
    blocks = scan_code_blocks(text)
    assert [(b.language, b.start_line) for b in blocks] == [("js", 1), ("yaml", 5)]


def test_strip_code_blocks_keeps_line_count():
    text = "before\n```\n# not a heading\n```\nafter"
    stripped = strip_code_blocks(text)
    assert stripped.splitlines() == ["before", "", "", "", "after"]


def test_scan_with_crlf_line_endings():
    text = "intro\r\n```rust\r\nfn main() {}\r\n```\r\n~~~\r\nopen\r\n"
    closed, unclosed = scan_code_blocks(text, line_offset=4)

    assert closed.language == "rust"
    assert closed.closed
    assert closed.content == "fn main() {}"
    assert (closed.start_line, closed.end_line) == (6, 8)
    assert not unclosed.closed
    assert unclosed.start_line == 9
