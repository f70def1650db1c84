"""postlint: structural checks and tooling for a markdown blog-post corpus."""

from postlint.checks import CheckReport, Issue, Rule, Severity, run_checks
from postlint.corpus import PostCorpus, discover_posts, load_post
from postlint.models import FrontMatter, Post

__version__ = "0.1.0"
__all__ = [
    "CheckReport",
    "FrontMatter",
    "Issue",
    "Post",
    "PostCorpus",
    "Rule",
    "Severity",
    "discover_posts",
    "load_post",
    "run_checks",
]
