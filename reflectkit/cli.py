"""CLI entrypoint for reflectkit."""

import logging
import sys

import click

from . import __version__


@click.group()
@click.version_option(__version__, prog_name="reflectkit")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Log elevation and injection steps to stderr",
)
def cli(verbose: bool) -> None:
    """reflectkit - inspect classes and their hidden members.

    TYPE arguments are fully qualified class names, e.g. package.module.Class
    or package.module:Outer.Inner. The current directory is importable.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if "" not in sys.path:
        sys.path.insert(0, "")


@cli.command()
@click.argument("type_name")
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output results as JSON",
)
def members(type_name: str, output_json: bool) -> None:
    """List fields and methods of TYPE and its parents, private ones included.

    Examples:

        reflectkit members collections.OrderedDict

        reflectkit members myapp.models:Account --json
    """
    from .commands.inspect_cmd import run_members

    sys.exit(run_members(type_name, output_json))


@cli.command()
@click.argument("type_name")
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output results as JSON",
)
def constants(type_name: str, output_json: bool) -> None:
    """List the constants of an enumerated TYPE in ordinal order."""
    from .commands.inspect_cmd import run_constants

    sys.exit(run_constants(type_name, output_json))


@cli.command()
@click.argument("type_name")
@click.argument("field_name")
def get(type_name: str, field_name: str) -> None:
    """Print the value of static FIELD_NAME of TYPE, bypassing its visibility.

    Examples:

        reflectkit get myapp.settings:Defaults __secret_salt
    """
    from .commands.inspect_cmd import run_get

    sys.exit(run_get(type_name, field_name))


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
