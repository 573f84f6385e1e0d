"""Tests for the click driver (claude_bootstrap.click_cli)."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from claude_bootstrap.click_cli import bootstrap, main


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


class TestCommand:
    @pytest.mark.unit
    def test_help_lists_options(self):
        result = CliRunner().invoke(bootstrap, ["--help"])
        assert result.exit_code == 0
        for option in ("--description", "--variant", "--output-dir", "--config", "-h"):
            assert option in result.output

    @pytest.mark.unit
    def test_short_help_flag(self):
        result = CliRunner().invoke(bootstrap, ["-h"])
        assert result.exit_code == 0
        assert "Usage:" in result.output


class TestMain:
    @pytest.mark.unit
    def test_help_exits_zero_without_side_effects(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert main(["--help"]) == 0
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.unit
    def test_missing_name_is_usage_error(self, capsys):
        assert main([]) == 1
        assert "Missing argument" in capsys.readouterr().err

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
        assert main(["proj", "--variant", "cobol", "-o", str(tmp_path)]) == 1
        assert "[invalid-variant]" in capsys.readouterr().out

    @pytest.mark.unit
    def test_existing_directory(self, tmp_path, tools_available, capsys):
        (tmp_path / "proj").mkdir()
        assert main(["proj", "-o", str(tmp_path)]) == 1
        assert "[directory-exists]" in capsys.readouterr().out

    @pytest.mark.unit
    def test_success(self, tmp_path, tools_available, fixed_today, runners):
        runners()
        assert main(["sample-lib", "-d", "demo", "-o", str(tmp_path)]) == 0
        assert (tmp_path / "sample-lib" / "README.md").is_file()

    @pytest.mark.unit
    def test_module_failure(self, tmp_path, tools_available, fixed_today, runners):
        runners(fail_on="git init")
        assert main(["sample-lib", "-o", str(tmp_path)]) == 1
        assert not (tmp_path / "sample-lib" / "CLAUDE.md").exists()

    @pytest.mark.unit
    def test_verification_warning_still_succeeds(self, tmp_path, tools_available, fixed_today, runners):
        runners(fail_on="-m pytest tests/")
        assert main(["sample-lib", "-o", str(tmp_path)]) == 0

    @pytest.mark.unit
    def test_config_file(self, tmp_path, tools_available, fixed_today, runners):
        built = runners()
        config_path = tmp_path / "bootstrap.json"
        config_path.write_text(json.dumps({"run_smoke_checks": False}), encoding="utf-8")

        assert main(["proj", "-o", str(tmp_path / "out"), "-c", str(config_path)]) == 0
        assert "verify" not in built[0].modules()

    @pytest.mark.unit
    def test_invalid_config(self, tmp_path, capsys):
        config_path = tmp_path / "bad.json"
        config_path.write_text("{not json", encoding="utf-8")
        assert main(["proj", "-o", str(tmp_path), "-c", str(config_path)]) == 1
        assert "Could not load configuration" in capsys.readouterr().out
