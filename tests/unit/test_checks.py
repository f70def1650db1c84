"""Tests for the structural checks."""

from __future__ import annotations

from postlint.checks import CheckReport, Issue, Rule, Severity, run_checks
from postlint.config import CheckSettings, FrontMatterSettings, PostlintConfig
from postlint.corpus import PostCorpus

VALID = "---\nlayout: post\ncategory: rust\n---\n\nbody\n"


def _rules(report: CheckReport) -> list[tuple[str, str]]:
    return [(issue.path, issue.rule.value) for issue in report.issues]


def test_valid_corpus_has_no_issues(sample_posts):
    report = run_checks(PostCorpus.load(sample_posts))
    assert report.issues == []
    assert report.ok
    assert report.summary() == {"posts": 3, "errors": 0, "warnings": 0, "info": 0}


def test_missing_and_empty_required_fields(posts_dir, write_post):
    write_post("2023-01-01-missing.md", "---\nlayout: post\n---\n")
    write_post("2023-01-02-empty.md", "---\nlayout: ''\ncategory: rust\n---\n")
    report = run_checks(PostCorpus.load(posts_dir))

    assert _rules(report) == [
        ("2023-01-01-missing.md", "field-missing"),
        ("2023-01-02-empty.md", "field-missing"),
    ]
    assert "'category' is missing" in report.issues[0].message
    assert "'layout' is empty" in report.issues[1].message
    assert not report.ok


def test_non_string_fields(posts_dir, write_post):
    write_post("2023-01-01-types.md", "---\nlayout: 3\ncategory: rust\ncustom_js: [a, b]\n---\n")
    report = run_checks(PostCorpus.load(posts_dir))
    messages = [issue.message for issue in report.issues]
    assert [issue.rule for issue in report.issues] == [Rule.FIELD_TYPE, Rule.FIELD_TYPE]
    assert any("'layout'" in message for message in messages)
    assert any("'custom_js'" in message for message in messages)


def test_missing_and_invalid_frontmatter(posts_dir, write_post):
    write_post("2023-01-01-bare.md", "# No front-matter\n")
    write_post("2023-01-02-broken.md", "---\nlayout: [\n---\n")
    write_post("2023-01-03-open.md", "---\nlayout: post\ncategory: x\n")
    report = run_checks(PostCorpus.load(posts_dir))

    assert _rules(report) == [
        ("2023-01-01-bare.md", "frontmatter-missing"),
        ("2023-01-02-broken.md", "frontmatter-invalid"),
        ("2023-01-03-open.md", "frontmatter-invalid"),
    ]


def test_filename_rules(posts_dir, write_post):
    write_post("2023-02-30-impossible.md", VALID)
    write_post("rust-notes.md", VALID)
    report = run_checks(PostCorpus.load(posts_dir))

    assert _rules(report) == [
        ("2023-02-30-impossible.md", "filename-date"),
        ("rust-notes.md", "filename-format"),
    ]
    assert "2023-02-30" in report.issues[0].message


def test_unclosed_fence_reports_opening_line(posts_dir, write_post):
    write_post("2023-01-01-fence.md", VALID + "\n```rust\nfn main() {}\n")
    report = run_checks(PostCorpus.load(posts_dir))

    [issue] = report.issues
    assert issue.rule is Rule.FENCE_UNCLOSED
    assert issue.line == 8
    assert issue.severity is Severity.ERROR


def test_unlabeled_fence_only_when_enabled(posts_dir, write_post):
    write_post("2023-01-01-fence.md", VALID + "\n```\nplain\n```\n")
    corpus = PostCorpus.load(posts_dir)

    assert run_checks(corpus).issues == []
    config = PostlintConfig(checks=CheckSettings(require_fence_language=True))
    report = run_checks(corpus, config)
    assert [issue.rule for issue in report.issues] == [Rule.FENCE_UNLABELED]
    assert report.ok


def test_duplicate_filenames_across_directories(posts_dir, write_post):
    write_post("2023-01-01-same.md", VALID)
    write_post("archive/2023-01-01-SAME.md", VALID)
    report = run_checks(PostCorpus.load(posts_dir))

    assert sorted(_rules(report)) == [
        ("2023-01-01-same.md", "filename-duplicate"),
        ("archive/2023-01-01-SAME.md", "filename-duplicate"),
    ]
    assert "archive/2023-01-01-SAME.md" in report.issues[0].message


def test_duplicate_date_and_slug_with_different_extensions(posts_dir, write_post):
    write_post("2023-01-01-same.md", VALID)
    write_post("2023-01-01-same.markdown", VALID)
    write_post("2023-01-02-same.md", VALID)
    report = run_checks(PostCorpus.load(posts_dir))

    assert _rules(report) == [
        ("2023-01-01-same.markdown", "filename-duplicate"),
        ("2023-01-01-same.md", "filename-duplicate"),
    ]


def test_unreadable_post_is_reported_with_the_rest(posts_dir, write_post):
    write_post("2023-01-01-fine.md", VALID)
    (posts_dir / "2023-05-05-latin1.md").write_bytes(b"---\nlayout: post\ncategory: caf\xe9\n---\n")
    report = run_checks(PostCorpus.load(posts_dir))

    assert _rules(report) == [("2023-05-05-latin1.md", "post-unreadable")]
    assert report.issues[0].severity is Severity.ERROR
    assert report.posts_checked == 2
    assert not report.ok


def test_allow_lists_produce_warnings(posts_dir, write_post):
    write_post("2023-01-01-a.md", "---\nlayout: page\ncategory: golang\n---\n")
    config = PostlintConfig(frontmatter=FrontMatterSettings(layouts=["post"], categories=["rust"]))
    report = run_checks(PostCorpus.load(posts_dir), config)

    assert [issue.rule for issue in report.issues] == [Rule.CATEGORY_UNKNOWN, Rule.LAYOUT_UNKNOWN]
    assert report.warnings == report.issues
    assert report.ok


def test_strict_mode_fails_on_warnings(posts_dir, write_post):
    write_post("2023-01-01-a.md", "---\nlayout: page\ncategory: rust\n---\n")
    config = PostlintConfig(
        frontmatter=FrontMatterSettings(layouts=["post"]),
        checks=CheckSettings(strict=True),
    )
    assert not run_checks(PostCorpus.load(posts_dir), config).ok


def test_disabled_rules_are_skipped(posts_dir, write_post):
    write_post("notes.md", VALID)
    config = PostlintConfig(checks=CheckSettings(disabled=["filename-format", "not-a-rule"]))
    assert run_checks(PostCorpus.load(posts_dir), config).issues == []


def test_custom_required_fields(posts_dir, write_post):
    write_post("2023-01-01-a.md", VALID)
    config = PostlintConfig(frontmatter=FrontMatterSettings(required=["layout", "category", "title"]))
    [issue] = run_checks(PostCorpus.load(posts_dir), config).issues
    assert issue.rule is Rule.FIELD_MISSING
    assert "'title'" in issue.message


def test_posts_are_checked_independently(posts_dir, write_post):
    write_post("2023-01-01-bad.md", "---\nlayout: post\n---\n")
    write_post("2023-01-02-good.md", VALID)
    report = run_checks(PostCorpus.load(posts_dir))
    assert {issue.path for issue in report.issues} == {"2023-01-01-bad.md"}


def test_report_to_dict():
    report = CheckReport(
        posts_checked=1,
        issues=[Issue(rule=Rule.FIELD_MISSING, path="a.md", message="m", line=1)],
    )
    assert report.to_dict() == {
        "posts": 1,
        "ok": False,
        "summary": {"posts": 1, "errors": 1, "warnings": 0, "info": 0},
        "issues": [{"rule": "field-missing", "severity": "error", "path": "a.md", "line": 1, "message": "m"}],
    }
