"""ruleforge CLI entry point."""

import logging

import click


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log rule evaluation.")
def cli(verbose: bool):
    """ruleforge: declarative record validation CLI."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Register subcommands
from ruleforge.cli.check_cmd import check, rules  # noqa: E402

cli.add_command(check)
cli.add_command(rules)
