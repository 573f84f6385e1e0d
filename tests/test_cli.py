"""Tests for the argparse driver (claude_bootstrap.cli)."""

from __future__ import annotations

import json

import pytest

from claude_bootstrap.cli import build_parser, main


@pytest.fixture
def runners(monkeypatch, runner_factory):
    """Patch the orchestrator's runner; returns the list of runners it built."""
    built = []

    def _install(fail_on=None):
        def _factory(timeout=900):
            runner = runner_factory(timeout=timeout, fail_on=fail_on)
            built.append(runner)
            return runner

        monkeypatch.setattr("claude_bootstrap.orchestrator.CommandRunner", _factory)
        return built

    return _install


class TestParser:
    @pytest.mark.unit
    def test_defaults(self):
        args = build_parser().parse_args(["proj"])
        assert args.name == "proj"
        assert args.description == ""
        assert args.variant == "python3.12"
        assert args.output_dir == "."
        assert args.config is None

    @pytest.mark.unit
    def test_short_options(self):
        args = build_parser().parse_args(
            ["proj", "-d", "text", "-t", "dotnet-console", "-o", "out", "-c", "cfg.json"]
        )
        assert (args.description, args.variant, args.output_dir) == ("text", "dotnet-console", "out")
        assert str(args.config) == "cfg.json"


class TestMain:
    @pytest.mark.unit
    def test_help_exits_zero_without_side_effects(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        assert main(["--help"]) == 0
        assert "usage: claude-bootstrap" in capsys.readouterr().out
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.unit
    def test_missing_name_is_usage_error(self, capsys):
        assert main([]) == 1
        assert "usage:" in capsys.readouterr().err

    @pytest.mark.unit
    def test_unknown_option_is_usage_error(self):
        assert main(["proj", "--bogus"]) == 1

    @pytest.mark.unit
    def test_invalid_name(self, tmp_path, tools_available, capsys):
        assert main(["Sample-Lib", "-o", str(tmp_path)]) == 1
        assert "[invalid-name]" in capsys.readouterr().out
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.unit
    def test_invalid_variant(self, tmp_path, tools_available, capsys):
        assert main(["proj", "-t", "cobol", "-o", str(tmp_path)]) == 1
        assert "[invalid-variant]" in capsys.readouterr().out

    @pytest.mark.unit
    def test_existing_directory(self, tmp_path, tools_available, capsys):
        (tmp_path / "proj").mkdir()
        assert main(["proj", "-o", str(tmp_path)]) == 1
        assert "[directory-exists]" in capsys.readouterr().out

    @pytest.mark.unit
    def test_missing_prerequisite(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr("claude_bootstrap.validator.shutil.which", lambda tool: None)
        assert main(["proj", "-o", str(tmp_path)]) == 1
        out = capsys.readouterr().out
        assert "[missing-prerequisite]" in out
        assert "python3" in out
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.unit
    def test_success(self, tmp_path, tools_available, fixed_today, runners):
        built = runners()
        assert main(["sample-lib", "-d", "demo", "-o", str(tmp_path)]) == 0
        assert (tmp_path / "sample-lib" / "CLAUDE.md").is_file()
        assert len(built) == 1

    @pytest.mark.unit
    def test_module_failure(self, tmp_path, tools_available, fixed_today, runners, capsys):
        runners(fail_on="-m venv")
        assert main(["sample-lib", "-o", str(tmp_path)]) == 1
        out = capsys.readouterr().out
        assert "BOOTSTRAP FAILED" in out
        assert "'language-environment'" in out

    @pytest.mark.unit
    def test_verification_warning_still_succeeds(self, tmp_path, tools_available, fixed_today, runners):
        runners(fail_on="-m pytest tests/")
        assert main(["sample-lib", "-o", str(tmp_path)]) == 0

    @pytest.mark.unit
    def test_second_run_fails(self, tmp_path, tools_available, fixed_today, runners):
        runners()
        assert main(["sample-lib", "-o", str(tmp_path)]) == 0
        assert main(["sample-lib", "-o", str(tmp_path)]) == 1

    @pytest.mark.unit
    def test_config_file(self, tmp_path, tools_available, fixed_today, runners):
        built = runners()
        config_path = tmp_path / "bootstrap.json"
        config_path.write_text(json.dumps({"initial_branch": "trunk"}), encoding="utf-8")

        assert main(["proj", "-o", str(tmp_path / "out"), "-c", str(config_path)]) == 0
        assert "git init --initial-branch=trunk" in built[0].command_lines()

    @pytest.mark.unit
    def test_unreadable_config(self, tmp_path, capsys):
        assert main(["proj", "-o", str(tmp_path), "-c", str(tmp_path / "absent.json")]) == 1
        assert "Could not load configuration" in capsys.readouterr().out
