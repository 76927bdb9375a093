"""Tests for the CLI commands."""

import json
import subprocess
from pathlib import Path

from typer.testing import CliRunner

from gitstatus.cli import app

runner = CliRunner()


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "gitstatus" in result.output


class TestParse:
    def test_parse_file_json(self, tmp_path: Path, monkeypatch, classic_full_output):
        monkeypatch.chdir(tmp_path)
        captured = tmp_path / "status.txt"
        captured.write_text(classic_full_output, encoding="utf-8")
        result = runner.invoke(app, ["parse", str(captured), "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["branch"] == "master"
        assert data["untracked_files"] == ["notes.txt", "build/"]

    def test_parse_stdin(self, tmp_path: Path, monkeypatch, modern_full_output):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["parse", "-", "-f", "json"], input=modern_full_output)
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["grammar"] == "modern"
        assert data["modified_files_not_updated"] == ["main.c"]

    def test_parse_terminal(self, tmp_path: Path, monkeypatch, classic_staged_add):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["parse", "-"], input="\n".join(classic_staged_add))
        assert result.exit_code == 0
        assert "foo.txt" in result.output

    def test_strict_exits_1_on_errors(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        text = "# On branch main\n# what is this\n"
        result = runner.invoke(app, ["parse", "-", "--strict", "-f", "json"], input=text)
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["errors"] == [{"line": 2, "error": "# what is this"}]

    def test_errors_without_strict_exit_0(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["parse", "-", "-f", "json"], input="fatal: nope\n")
        assert result.exit_code == 0

    def test_output_file(self, tmp_path: Path, monkeypatch, classic_staged_add):
        monkeypatch.chdir(tmp_path)
        report = tmp_path / "report.json"
        result = runner.invoke(
            app, ["parse", "-", "--output", str(report)], input="\n".join(classic_staged_add)
        )
        assert result.exit_code == 0
        assert json.loads(report.read_text())["new_files_to_commit"] == ["foo.txt"]

    def test_missing_file_exit_2(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["parse", str(tmp_path / "absent.txt")])
        assert result.exit_code == 2

    def test_bad_format_exit_2(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["parse", "-", "--format", "xml"], input="")
        assert result.exit_code == 2

    def test_unknown_grammar_exit_2(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["parse", "-", "--grammar", "klingon"], input="")
        assert result.exit_code == 2

    def test_custom_grammar_from_config_dir(self, tmp_path: Path, monkeypatch, custom_grammar_yaml):
        monkeypatch.chdir(tmp_path)
        grammars = tmp_path / ".gitstatus" / "grammars"
        grammars.mkdir(parents=True)
        (grammars / "de.yaml").write_text(custom_grammar_yaml, encoding="utf-8")
        text = "Auf Branch dev\nUnversionierte Dateien:\n\tneu.txt\n"
        result = runner.invoke(app, ["parse", "-", "-f", "json"], input=text)
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["grammar"] == "deutsch"
        assert data["untracked_files"] == ["neu.txt"]


class TestGrammars:
    def test_lists_builtins(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["grammars"])
        assert result.exit_code == 0
        assert "classic" in result.output
        assert "modern" in result.output


class TestInit:
    def test_creates_config(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0
        assert (tmp_git_repo / ".gitstatus.toml").exists()

    def test_grammar_example(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        result = runner.invoke(app, ["init", "--grammar-example"])
        assert result.exit_code == 0
        assert (tmp_git_repo / ".gitstatus" / "grammars" / "example.yaml").exists()
        listed = runner.invoke(app, ["grammars"])
        assert "example" in listed.output

    def test_refuses_overwrite(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        (tmp_git_repo / ".gitstatus.toml").write_text("existing")
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 1


class TestStatus:
    def test_staged_file_reported(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        (tmp_git_repo / "clean.py").write_text("x = 1\n")
        subprocess.run(["git", "add", "clean.py"], cwd=tmp_git_repo, capture_output=True)
        (tmp_git_repo / "loose.txt").write_text("loose\n")
        result = runner.invoke(app, ["status", "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["new_files_to_commit"] == ["clean.py"]
        assert data["untracked_files"] == ["loose.txt"]
        assert data["branch"] is not None

    def test_modified_file_reported(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        (tmp_git_repo / "README.md").write_text("# Changed\n")
        result = runner.invoke(app, ["status", "-f", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["modified_files_not_updated"] == ["README.md"]

    def test_short_status_config_ignored(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        subprocess.run(
            ["git", "config", "status.short", "true"],
            cwd=tmp_git_repo, capture_output=True, check=True,
        )
        (tmp_git_repo / "new.txt").write_text("new\n")
        subprocess.run(["git", "add", "new.txt"], cwd=tmp_git_repo, capture_output=True)
        result = runner.invoke(app, ["status", "-f", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["new_files_to_commit"] == ["new.txt"]
        assert data["error_count"] == 0

    def test_spaced_and_non_ascii_paths(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        (tmp_git_repo / "a b.txt").write_text("spaced\n", encoding="utf-8")
        (tmp_git_repo / "ä.txt").write_text("umlaut\n", encoding="utf-8")
        result = runner.invoke(app, ["status", "-f", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert set(data["untracked_files"]) == {"a b.txt", "ä.txt"}
        assert data["error_count"] == 0

    def test_outside_repo_exit_2(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 2
