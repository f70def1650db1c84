"""Markdown parsing for posts: front-matter, fenced code blocks and headings."""

from postlint.markdown.exceptions import FrontMatterError, MarkdownError, UnterminatedFrontMatterError
from postlint.markdown.fences import CodeBlock, scan_code_blocks, strip_code_blocks, unclosed_blocks
from postlint.markdown.frontmatter import (
    dump_post,
    parse_frontmatter,
    parse_frontmatter_file,
    read_frontmatter_only,
    split_frontmatter,
)
from postlint.markdown.headings import find_title_heading, humanize_slug

__all__ = [
    "CodeBlock",
    "FrontMatterError",
    "MarkdownError",
    "UnterminatedFrontMatterError",
    "dump_post",
    "find_title_heading",
    "humanize_slug",
    "parse_frontmatter",
    "parse_frontmatter_file",
    "read_frontmatter_only",
    "scan_code_blocks",
    "split_frontmatter",
    "strip_code_blocks",
    "unclosed_blocks",
]
