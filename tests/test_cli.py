import json

from typer.testing import CliRunner

from sieve import __version__
from sieve.__main__ import main
from sieve.cli import app, parse_rule_option

runner = CliRunner()


def test_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "composable input validation" in result.stdout
    assert callable(main)


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_parse_rule_option():
    assert parse_rule_option("isEmail") == ("isEmail", [])
    assert parse_rule_option("length:1,16") == ("length", [1, 16])
    assert parse_rule_option("endsWith:.net") == ("endsWith", [".net"])
    assert parse_rule_option("oneOf:{isInt: [], isEmail: []}") == (
        "oneOf",
        [{"isInt": [], "isEmail": []}],
    )


def test_check_passes():
    result = runner.invoke(app, ["check", "john.doe@gmail.com", "-r", "isEmail", "-r", "!isPhone"])
    assert result.exit_code == 0
    assert "isEmail" in result.stdout


def test_check_json_failures():
    result = runner.invoke(
        app,
        ["check", "john.doe@gmail.com", "-r", "isEmail", "-r", "length:1,16", "-r", "endsWith:.net", "--json"],
    )
    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["valid"] is False
    assert payload["failures"] == {"1": {"length": [1, 16]}, "2": {"endsWith": [".net"]}}


def test_check_with_key():
    result = runner.invoke(app, ["check", "x", "-r", "isInt", "--key", "age", "--json"])
    assert result.exit_code == 1
    assert json.loads(result.stdout)["failures"] == {"age": {"isInt": []}}


def test_check_unknown_rule():
    result = runner.invoke(app, ["check", "x", "-r", "isNothing"])
    assert result.exit_code == 2
    assert "isNothing" in result.stdout


def test_check_bad_arguments():
    result = runner.invoke(app, ["check", "x", "-r", "length:[1,"])
    assert result.exit_code == 2


def test_check_with_config(tmp_path):
    cfg = tmp_path / "sieve.yaml"
    cfg.write_text("formats:\n  date: '%d/%m/%Y'\n")
    result = runner.invoke(app, ["--config", str(cfg), "check", "01/03/1922", "-r", "isDate"])
    assert result.exit_code == 0


def test_rules_listing():
    result = runner.invoke(app, ["rules", "--filter", "socialnumber"])
    assert result.exit_code == 0
    assert "isSocialNumber" in result.stdout
    assert "isEmail" not in result.stdout


def test_check_reads_config_from_context():
    result = runner.invoke(app, ["check", "42", "-r", "isInt", "--json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"valid": True, "failures": {}}


def test_check_missing_argument():
    result = runner.invoke(app, ["check", "abc", "-r", "length"])
    assert result.exit_code == 2
    assert "min_length" in result.stdout


def test_check_wrong_argument_type():
    result = runner.invoke(app, ["check", "abc", "-r", "length:abc"])
    assert result.exit_code == 2


def test_check_unknown_dns_type():
    result = runner.invoke(app, ["check", "example.se", "-r", "dnsRecord:FOO"])
    assert result.exit_code == 2
    assert "FOO" in result.stdout
