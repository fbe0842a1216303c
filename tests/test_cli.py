from pathlib import Path

from click.testing import CliRunner

from postpress import __version__
from postpress.build import BuildError, BuildResult
from postpress.cli import cli


def create_project(root: Path) -> Path:
    (root / "posts").mkdir()
    (root / "templates").mkdir()
    (root / "styles").mkdir()
    (root / "templates" / "post.html").write_text("{{ markdown_html }}", encoding="utf-8")
    (root / "templates" / "home.html").write_text(
        "{% for p in post_excerpts %}{{ p.title }}{% endfor %}", encoding="utf-8"
    )
    (root / "styles" / "main.css").write_text("", encoding="utf-8")
    (root / "posts" / "2020-01-01-one.md").write_text(
        "---\ntitle: One\n---\nBody", encoding="utf-8"
    )
    (root / "posts" / "2020-01-02-two.md").write_text(
        "---\ntitle: Two\n---\nBody", encoding="utf-8"
    )
    return root


def test_cli_builds_current_directory(monkeypatch, tmp_path):
    project = create_project(tmp_path)
    monkeypatch.chdir(project)
    runner = CliRunner()
    result = runner.invoke(cli, [], catch_exceptions=False)
    assert result.exit_code == 0
    assert "Built 2 posts into" in result.output
    assert (project / "gh-pages" / "index.html").read_text(encoding="utf-8") == "TwoOne"


def test_cli_reports_build_errors(monkeypatch, tmp_path):
    project = create_project(tmp_path)
    (project / "posts" / "2020-01-03-bad.md").write_text(
        "---\ntitle: [oops\n---\n", encoding="utf-8"
    )
    monkeypatch.chdir(project)
    result = CliRunner().invoke(cli, [])
    assert result.exit_code == 1
    assert "Build failed:" in result.output
    assert "posts/2020-01-03-bad.md" in result.output
    assert "Invalid front matter" in result.output


def test_cli_shows_paths_outside_project(monkeypatch, tmp_path):
    outside = tmp_path / "elsewhere" / "post.html"
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)

    def fake_build_site(root):
        raise BuildError(outside, "Template not found")

    monkeypatch.setattr("postpress.build.build_site", fake_build_site)
    result = CliRunner().invoke(cli, [])
    assert result.exit_code == 1
    assert str(outside) in result.output


def test_cli_uses_build_result(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)

    def fake_build_site(root):
        assert root == Path.cwd()
        return BuildResult(posts=[], output_dir=root / "gh-pages")

    monkeypatch.setattr("postpress.build.build_site", fake_build_site)
    result = CliRunner().invoke(cli, [], catch_exceptions=False)
    assert result.exit_code == 0
    assert "Built 0 posts" in result.output


def test_cli_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert f"postpress, version {__version__}" in result.output


def test_module_main_entrypoint():
    from postpress.__main__ import main

    assert callable(main)


def test_main_invokes_cli(monkeypatch):
    import postpress.cli as cli_mod

    called = {}

    def fake_cli():
        called["ran"] = True

    monkeypatch.setattr(cli_mod, "cli", fake_cli)
    cli_mod.main()
    assert called["ran"] is True
