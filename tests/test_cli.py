"""Tests for ruleforge CLI commands."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from ruleforge.cli.main import cli


@pytest.fixture
def runner(monkeypatch):
    for name in ("RULEFORGE_LOCALE", "RULEFORGE_FALLBACK_LOCALE", "RULEFORGE_LOCALE_PATH"):
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


@pytest.fixture
def rules_file(tmp_path: Path) -> Path:
    path = tmp_path / "rules.yaml"
    path.write_text("name: required|between:3,10\nemail: required\n")
    return path


def write(path: Path, content: str) -> Path:
    path.write_text(content)
    return path


class TestCheck:
    def test_valid_record(self, runner, rules_file, tmp_path):
        data = write(tmp_path / "data.yaml", "name: Andrew\nemail: a@example.com\n")

        result = runner.invoke(cli, ["check", str(data), str(rules_file)])

        assert result.exit_code == 0
        assert "Validation passed" in result.output

    def test_invalid_record(self, runner, rules_file, tmp_path):
        data = write(tmp_path / "data.json", '{"name": "as"}')

        result = runner.invoke(cli, ["check", str(data), str(rules_file)])

        assert result.exit_code == 1
        assert "name: The name must be between 3 and 10 characters." in result.output
        assert "email: The email address field is required." in result.output
        assert "2 error(s) in 2 field(s)" in result.output

    def test_custom_messages_and_attributes(self, runner, rules_file, tmp_path):
        data = write(tmp_path / "data.yaml", "name: Andrew\n")
        messages = write(tmp_path / "messages.yaml", "email.required: 'Please fill in :attribute.'\n")
        attributes = write(tmp_path / "attributes.yaml", "email: contact e-mail\n")

        result = runner.invoke(
            cli,
            [
                "check",
                str(data),
                str(rules_file),
                "--messages",
                str(messages),
                "--attributes",
                str(attributes),
            ],
        )

        assert result.exit_code == 1
        assert "email: Please fill in contact e-mail." in result.output

    def test_locale_path(self, runner, rules_file, tmp_path):
        locales = tmp_path / "locales"
        locales.mkdir()
        write(locales / "de.yaml", "required: 'Das Feld :attribute ist erforderlich.'\n")
        data = write(tmp_path / "data.yaml", "name: Andrew\n")

        result = runner.invoke(
            cli,
            ["check", str(data), str(rules_file), "--locale", "de", "--locale-path", str(locales)],
        )

        assert result.exit_code == 1
        assert "email: Das Feld email address ist erforderlich." in result.output

    def test_unknown_rule_exits_2(self, runner, tmp_path):
        data = write(tmp_path / "data.yaml", "name: Andrew\n")
        rules = write(tmp_path / "rules.yaml", "name: shiny\n")

        result = runner.invoke(cli, ["check", str(data), str(rules)])

        assert result.exit_code == 2
        assert "Shiny" in result.output

    def test_invalid_data_file_exits_2(self, runner, rules_file, tmp_path):
        data = write(tmp_path / "data.yaml", "- not\n- a mapping\n")

        result = runner.invoke(cli, ["check", str(data), str(rules_file)])

        assert result.exit_code == 2
        assert "invalid data file" in result.output
        assert "locale" not in result.output


class TestRules:
    def test_lists_builtin_rules(self, runner):
        result = runner.invoke(cli, ["rules"])

        assert result.exit_code == 0
        names = result.output.split()
        assert "Required" in names
        assert "RequiredWithoutAll" in names
        assert names == sorted(names)


class TestCLIEntryPoint:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "check" in result.output
        assert "rules" in result.output

    def test_verbose_flag(self, runner):
        result = runner.invoke(cli, ["-v", "rules"])
        assert result.exit_code == 0
