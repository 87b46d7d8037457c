"""Tests for the command-line interface."""

from click.testing import CliRunner

from cli import cli


def test_eval_prints_display():
    runner = CliRunner()
    result = runner.invoke(cli, ["eval", "6+4="])
    assert result.exit_code == 0
    assert result.output.strip() == "10"


def test_eval_division_by_zero():
    result = CliRunner().invoke(cli, ["eval", "5/0="])
    assert result.exit_code == 0
    assert result.output.strip() == "Error"


def test_eval_trace():
    result = CliRunner().invoke(cli, ["eval", "--trace", "2+3*4="])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert len(lines) == 6
    assert lines[3].split() == ["*", "5"]
    assert lines[-1].split() == ["=", "20"]


def test_eval_unknown_symbol():
    result = CliRunner().invoke(cli, ["eval", "2^3"])
    assert result.exit_code == 1
    assert "Unknown keypad symbol" in result.output


def test_list_apps():
    result = CliRunner().invoke(cli, ["list-apps"])
    assert result.exit_code == 0
    assert "plain" in result.output
    assert "iphone" in result.output


def test_info():
    result = CliRunner().invoke(cli, ["info", "plain"])
    assert result.exit_code == 0
    assert "Application: plain" in result.output
    assert "C / * -" in result.output


def test_unknown_app():
    runner = CliRunner()
    assert runner.invoke(cli, ["info", "scientific"]).exit_code == 1
    assert runner.invoke(cli, ["run", "scientific"]).exit_code == 1
