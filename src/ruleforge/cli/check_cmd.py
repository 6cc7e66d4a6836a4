"""Validation CLI commands: check and rules."""

from pathlib import Path
from typing import Any

import click

from ruleforge.exceptions import LocaleLoadError, MappingLoadError, RuleError
from ruleforge.translation.config import LocaleConfig
from ruleforge.translation.loader import load_mapping
from ruleforge.translation.translator import Translator
from ruleforge.validation.validator import ValidatorFactory

_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


def _load_mapping(path: Path | None, what: str) -> dict[str, Any]:
    """Load a YAML/JSON mapping, exiting with status 2 when it is unusable."""
    if path is None:
        return {}
    try:
        return load_mapping(path)
    except MappingLoadError as e:
        click.echo(f"Error: invalid {what} file: {e.reason}", err=True)
        raise SystemExit(2)


def _build_translator(locale: str | None, locale_path: Path | None) -> Translator:
    config = LocaleConfig.from_env()
    if locale:
        config.locale = locale
    if locale_path is not None:
        config.locale_path = locale_path
    return Translator.from_config(config)


@click.command()
@click.argument("data_file", type=_FILE)
@click.argument("rules_file", type=_FILE)
@click.option("--messages", "messages_file", type=_FILE, default=None, help="Custom messages file.")
@click.option("--attributes", "attributes_file", type=_FILE, default=None, help="Custom field labels file.")
@click.option("--locale", default=None, help="Locale to resolve messages in.")
@click.option(
    "--locale-path",
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory of <locale>.yaml files merged over the bundled messages.",
)
def check(
    data_file: Path,
    rules_file: Path,
    messages_file: Path | None,
    attributes_file: Path | None,
    locale: str | None,
    locale_path: Path | None,
):
    """Validate the record in DATA_FILE against RULES_FILE (YAML or JSON)."""
    data = _load_mapping(data_file, "data")
    rule_spec = _load_mapping(rules_file, "rules")
    custom_messages = _load_mapping(messages_file, "messages")
    custom_attributes = _load_mapping(attributes_file, "attributes")

    try:
        translator = _build_translator(locale, locale_path)
    except LocaleLoadError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(2)

    factory = ValidatorFactory(translator=translator)
    validator = factory.make(data, rule_spec, custom_messages, custom_attributes)

    try:
        failed = validator.fails()
    except RuleError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(2)

    if not failed:
        click.echo(click.style("Validation passed", fg="green"))
        return

    errors = validator.errors()
    for field, messages in errors.all().items():
        for message in messages:
            click.echo(click.style(f"{field}: {message}", fg="red"))

    click.echo(
        click.style(f"\n{len(errors)} error(s) in {len(errors.keys())} field(s)", fg="red", bold=True)
    )
    raise SystemExit(1)


@click.command()
def rules():
    """List the registered validation rules."""
    factory = ValidatorFactory()
    for name in factory.registry.list_registered():
        click.echo(name)
