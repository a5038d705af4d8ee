"""Tests for the CLI via click.testing.CliRunner."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from xenv import __version__
from xenv.cli import cli


@pytest.fixture()
def workdir(tmp_path, monkeypatch):
    """Run from an empty directory with a known login shell."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("xenv.config.find_config_file", lambda start=None: None)
    monkeypatch.setenv("SHELL", "/bin/bash")
    monkeypatch.delenv("PSModulePath", raising=False)
    return tmp_path


def test_version():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_help():
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "--shell" in result.output


def test_export_bash(workdir, sample_env):
    runner = CliRunner()
    result = runner.invoke(cli, [str(sample_env), "--shell", "bash"])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "export TWILIO_API_SID=ACxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxx;"
    assert "export TWILIO_AUTH_TOKEN='my secret token';" in lines
    assert "export EMPTY_VALUE='';" in lines
    assert len(lines) == 7


def test_export_powershell(workdir, sample_env):
    runner = CliRunner()
    result = runner.invoke(cli, [str(sample_env), "-s", "pwsh"])
    assert result.exit_code == 0
    assert "$env:SINGLE_QUOTED = 'hello world';" in result.output


def test_detected_shell(workdir, sample_env, monkeypatch):
    monkeypatch.setenv("SHELL", "/usr/bin/fish")
    runner = CliRunner()
    result = runner.invoke(cli, [str(sample_env)])
    assert result.exit_code == 0
    assert "set -gx MESSAGING_PROVIDER 'twilio';" in result.output


def test_shell_from_env_var(workdir, sample_env, monkeypatch):
    monkeypatch.setenv("XENV_SHELL", "elvish")
    runner = CliRunner()
    result = runner.invoke(cli, [str(sample_env)])
    assert result.exit_code == 0
    assert "set-env MESSAGING_PROVIDER 'twilio'" in result.output


def test_substitution_from_process_env(workdir, monkeypatch):
    monkeypatch.setenv("XENV_T_HOST", "api.example.com")
    env = workdir / ".env"
    env.write_text("URL=https://$XENV_T_HOST/v1\n")
    runner = CliRunner()
    result = runner.invoke(cli, [str(env), "--shell", "zsh"])
    assert result.exit_code == 0
    assert result.output == "export URL=https://api.example.com/v1;\n"


def test_default_env_file(workdir):
    (workdir / ".env").write_text("A=1\n")
    runner = CliRunner()
    result = runner.invoke(cli, ["--shell", "bash"])
    assert result.exit_code == 0
    assert result.output == "export A=1;\n"


def test_env_file_from_env_var(workdir, monkeypatch):
    (workdir / "other.env").write_text("B=2\n")
    monkeypatch.setenv("XENV_FILE", str(workdir / "other.env"))
    runner = CliRunner()
    result = runner.invoke(cli, ["--shell", "bash"])
    assert result.exit_code == 0
    assert result.output == "export B=2;\n"


def test_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SHELL", raising=False)
    (tmp_path / ".xenv.toml").write_text('[xenv]\nenv_file = "conf/dev.env"\nshell = "fish"\n')
    (tmp_path / "conf").mkdir()
    (tmp_path / "conf" / "dev.env").write_text("C=3\n")
    runner = CliRunner()
    result = runner.invoke(cli, [])
    assert result.exit_code == 0
    assert result.output == "set -gx C '3';\n"


def test_parse_error_exits_1(workdir):
    env = workdir / ".env"
    env.write_text("GOOD=1\nKEY=value extra\n")
    runner = CliRunner()
    result = runner.invoke(cli, [str(env), "--shell", "bash"])
    assert result.exit_code == 1
    assert "Failed to read env file" in result.output
    assert "export GOOD" not in result.output


def test_missing_file_exits_1(workdir):
    runner = CliRunner()
    result = runner.invoke(cli, [str(workdir / "nope.env"), "--shell", "bash"])
    assert result.exit_code == 1
    assert "Failed to read env file" in result.output


def test_unsupported_shell(workdir, sample_env):
    runner = CliRunner()
    result = runner.invoke(cli, [str(sample_env), "--shell", "csh"])
    assert result.exit_code == 2
    assert "Unsupported shell" in result.output


def test_undetectable_shell(workdir, sample_env, monkeypatch):
    monkeypatch.delenv("SHELL", raising=False)
    runner = CliRunner()
    result = runner.invoke(cli, [str(sample_env)])
    assert result.exit_code == 1
    assert "Failed to detect shell" in result.output


def test_dotted_key_fails_for_bash(workdir):
    env = workdir / ".env"
    env.write_text("app.port=8080\n")
    runner = CliRunner()
    result = runner.invoke(cli, [str(env), "--shell", "bash"])
    assert result.exit_code == 1
    assert "not a valid bash variable name" in result.output


def test_dotted_key_for_powershell(workdir):
    env = workdir / ".env"
    env.write_text("app.port=8080\n")
    runner = CliRunner()
    result = runner.invoke(cli, [str(env), "--shell", "powershell"])
    assert result.exit_code == 0
    assert result.output == "${env:app.port} = '8080';\n"


def test_main_runs_cli(monkeypatch):
    from xenv.__main__ import main

    monkeypatch.setattr("sys.argv", ["xenv", "--version"])
    with pytest.raises(SystemExit) as exc_info:
        main()
    assert exc_info.value.code == 0
