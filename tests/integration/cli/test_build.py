"""Integration tests for the CLI commands"""

from typer.testing import CliRunner

from mdsite.cli.cli import app


runner = CliRunner()


def test_build_cmd_writes_site(tmp_path, monkeypatch):
    """build renders every valid document and exits 0."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "content").mkdir()
    (tmp_path / "content" / "hello.md").write_text("---\ntitle: Hello\ntags: [a]\n---\n# Hello\n\nWorld\n")

    result = runner.invoke(app, ["build", "--out-dir", str(tmp_path / "dist")])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "dist" / "hello.html").is_file()
    assert (tmp_path / "dist" / "tags" / "a.html").is_file()
    assert "1 succeeded, 0 failed" in result.output


def test_build_cmd_exits_1_on_document_failure(content_dir, tmp_path):
    """A failed document is reported and makes the run exit 1."""
    result = runner.invoke(app, ["build", str(content_dir), "--out-dir", str(tmp_path / "dist")])

    assert result.exit_code == 1
    assert "broken.md" in result.output
    assert "3 succeeded, 1 failed" in result.output
    assert (tmp_path / "dist" / "kinds.html").is_file()


def test_build_cmd_missing_content(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["build", "nope"])
    assert result.exit_code == 1
    assert "Cannot read content" in result.output


def test_build_cmd_invalid_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("workers: 0\n")
    result = runner.invoke(app, ["build"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_list_cmd(content_dir):
    """list prints documents newest first and exits 1 because one fails to parse."""
    result = runner.invoke(app, ["list", str(content_dir)])
    assert result.exit_code == 1
    assert "2020-03-01  Functors  [haskell]" in result.output
    assert result.output.index("Functors") < result.output.index("Notes")
    assert "MalformedFrontMatter" in result.output


def test_serve_cmd_requires_built_site(tmp_path):
    result = runner.invoke(app, ["serve", "--out-dir", str(tmp_path / "missing")])
    assert result.exit_code == 1
    assert "mdsite build" in result.output
