import json

from typer.testing import CliRunner

from postlint.cli.main import app

runner = CliRunner()


def test_check_passes_on_valid_corpus(sample_posts):
    result = runner.invoke(app, ["check", str(sample_posts)])
    assert result.exit_code == 0, result.output
    assert "3 post(s) checked: 0 error(s)" in result.output


def test_check_fails_on_errors(sample_posts):
    (sample_posts / "2023-04-01-open-fence.md").write_text(
        "---\nlayout: post\ncategory: rust\n---\n```rust\nfn main() {}\n", encoding="utf-8"
    )
    result = runner.invoke(app, ["check", str(sample_posts)])
    assert result.exit_code == 1
    assert "fence-unclosed" in result.output
    assert "2023-04-01-open-fence.md:5" in result.output


def test_check_json_output(sample_posts):
    (sample_posts / "notes.md").write_text("no front-matter\n", encoding="utf-8")
    result = runner.invoke(app, ["check", str(sample_posts), "--format", "json"])
    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data["posts"] == 4
    assert {issue["rule"] for issue in data["issues"]} == {"frontmatter-missing", "filename-format"}


def test_check_uses_config_from_working_directory(tmp_path, monkeypatch):
    (tmp_path / ".postlint.yml").write_text(
        "posts_dir: content\nfrontmatter:\n  categories: [rust]\n", encoding="utf-8"
    )
    content = tmp_path / "content"
    content.mkdir()
    (content / "2023-01-01-go.md").write_text("---\nlayout: post\ncategory: go\n---\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["check"])
    assert result.exit_code == 0, result.output
    assert "category-unknown" in result.output

    strict = runner.invoke(app, ["check", "--strict"])
    assert strict.exit_code == 1


def test_check_missing_directory(tmp_path):
    result = runner.invoke(app, ["check", str(tmp_path / "nope")])
    assert result.exit_code == 2
    assert "Posts directory not found" in result.output


def test_check_invalid_config(tmp_path, sample_posts):
    config = tmp_path / "bad.yml"
    config.write_text("checks:\n  strict: maybe\n", encoding="utf-8")
    result = runner.invoke(app, ["check", str(sample_posts), "--config", str(config)])
    assert result.exit_code == 2
    assert "Configuration Error" in result.output


def test_check_missing_config_file(tmp_path, sample_posts):
    result = runner.invoke(app, ["check", str(sample_posts), "--config", str(tmp_path / "nope.yml")])
    assert result.exit_code == 2
    assert "Configuration Error" in result.output


def test_check_reports_unreadable_post_alongside_others(sample_posts):
    (sample_posts / "2023-05-05-latin1.md").write_bytes(b"---\nlayout: post\ncategory: caf\xe9\n---\n")
    sample_posts.joinpath("2023-04-01-open-fence.md").write_text(
        "---\nlayout: post\ncategory: rust\n---\n```rust\n", encoding="utf-8"
    )
    result = runner.invoke(app, ["check", str(sample_posts)])

    assert result.exit_code == 1
    assert "fence-unclosed" in result.output
    assert "post-unreadable" in result.output
    assert "5 post(s) checked: 2 error(s)" in result.output
