"""Loading a directory of posts."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from postlint.config.exceptions import PostsDirectoryNotFoundError
from postlint.config.schema import DEFAULT_EXCLUDE, DEFAULT_EXTENSIONS, PostlintConfig
from postlint.exceptions import PostNotFoundError, PostReadError
from postlint.markdown.exceptions import FrontMatterError
from postlint.markdown.fences import scan_code_blocks
from postlint.markdown.frontmatter import split_frontmatter
from postlint.models import FrontMatter, Post
from postlint.naming import NamingError, parse_post_filename

logger = logging.getLogger(__name__)

UNCATEGORIZED = "(uncategorized)"


def discover_posts(
    posts_dir: Path,
    *,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    exclude: Iterable[str] = DEFAULT_EXCLUDE,
) -> list[Path]:
    """Find post files below ``posts_dir``, sorted by relative path.

    Hidden files and anything inside hidden directories are skipped.
    """
    if not posts_dir.is_dir():
        raise PostsDirectoryNotFoundError(posts_dir)

    suffixes = {ext.lower() for ext in extensions}
    exclude_names = set(exclude)
    found: list[Path] = []
    for path in posts_dir.rglob("*"):
        if not path.is_file() or path.suffix.lower() not in suffixes:
            continue
        relative = path.relative_to(posts_dir)
        if any(part.startswith(".") for part in relative.parts):
            continue
        if path.name in exclude_names:
            continue
        found.append(path)
    return sorted(found, key=lambda p: p.relative_to(posts_dir).as_posix())


def load_post(path: Path, *, encoding: str = "utf-8") -> Post:
    """Read and parse a single post.

    Raises:
        PostReadError: If the file cannot be read or decoded.

    """
    try:
        text = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise PostReadError(str(path), e) from e

    filename = None
    filename_error: NamingError | None = None
    try:
        filename = parse_post_filename(path.name)
    except NamingError as e:
        filename_error = e

    frontmatter_error: FrontMatterError | None = None
    try:
        metadata, body, body_offset = split_frontmatter(text)
        has_frontmatter = body_offset > 0
    except FrontMatterError as e:
        logger.debug("Front-matter of %s unusable: %s", path, e)
        frontmatter_error = e
        metadata, body, body_offset = {}, text, 0
        has_frontmatter = True

    return Post(
        path=path,
        metadata=metadata,
        body=body,
        body_offset=body_offset,
        has_frontmatter=has_frontmatter,
        code_blocks=tuple(scan_code_blocks(body, line_offset=body_offset)),
        filename=filename,
        filename_error=filename_error,
        front_matter=FrontMatter.from_metadata(metadata) if frontmatter_error is None else None,
        frontmatter_error=frontmatter_error,
    )


@dataclass(slots=True)
class PostCorpus:
    """All posts found under one directory.

    Posts are independent of each other; the corpus only offers set-level
    views (grouping, counting, lookup).
    """

    root: Path
    posts: list[Post] = field(default_factory=list)
    unreadable: list[PostReadError] = field(default_factory=list)

    @classmethod
    def load(cls, posts_dir: Path, config: PostlintConfig | None = None) -> PostCorpus:
        """Discover and load every post under ``posts_dir``.

        Files that cannot be read or decoded are kept in ``unreadable`` rather
        than aborting the load.
        """
        config = config or PostlintConfig()
        paths = discover_posts(posts_dir, extensions=config.extensions, exclude=config.exclude)
        posts: list[Post] = []
        unreadable: list[PostReadError] = []
        for path in paths:
            try:
                posts.append(load_post(path))
            except PostReadError as e:
                logger.warning("Skipping %s: %s", path, e.original_exception)
                unreadable.append(e)
        logger.info("Loaded %d post(s) from %s", len(posts), posts_dir)
        return cls(root=posts_dir, posts=posts, unreadable=unreadable)

    def __iter__(self) -> Iterator[Post]:
        return iter(self.posts)

    def __len__(self) -> int:
        return len(self.posts)

    def relative(self, post: Post) -> str:
        """Path of ``post`` relative to the corpus root, POSIX style."""
        return self.relative_path(post.path)

    def relative_path(self, path: Path) -> str:
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()

    def by_category(self) -> dict[str, list[Post]]:
        """Group posts by category, ordered by publish date then filename."""
        groups: dict[str, list[Post]] = {}
        for post in self.posts:
            groups.setdefault(post.category or UNCATEGORIZED, []).append(post)
        return {name: sorted(groups[name], key=Post.sort_key) for name in sorted(groups)}

    def languages(self) -> Counter[str | None]:
        """Count fenced code blocks per language (None for untagged blocks)."""
        counts: Counter[str | None] = Counter()
        for post in self.posts:
            counts.update(block.language for block in post.code_blocks)
        return counts

    def filter(self, *, category: str | None = None) -> list[Post]:
        posts: Sequence[Post] = self.posts
        if category is not None:
            posts = [post for post in posts if (post.category or "").casefold() == category.casefold()]
        return sorted(posts, key=Post.sort_key)

    def get(self, key: str) -> Post:
        """Find a post by filename, relative path or slug.

        Raises:
            PostNotFoundError: If nothing matches, or a slug matches several
                posts.

        """
        for post in self.posts:
            if key in (post.name, self.relative(post)):
                return post
        matches = [post for post in self.posts if post.slug == key]
        if len(matches) == 1:
            return matches[0]
        raise PostNotFoundError(key)
