"""
Main CLI entry point for vue-code-order
"""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from . import __version__
from .commands.check import CheckCommand
from .core.config import PROJECT_CONFIG_NAME, LintConfig, available_presets
from .core.hover import format_hover, lookup_category
from .core.order_checker import STRATEGIES

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@click.group()
@click.version_option(
    version=__version__,
    prog_name="vue-code-order",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help="Configuration file path",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Suppress output",
)
@click.pass_context
def cli(
    ctx,
    config: str | None,
    verbose: bool,
    quiet: bool,
):
    """Order checker for Vue script setup blocks

    Verifies that the top-level statements of a <script setup> block
    follow the configured category order:
    - imports and types first
    - stores, libraries and variables before the code using them
    - watchers and lifecycle hooks last
    """
    ctx.ensure_object(dict)

    # Load configuration
    if config:
        ctx.obj["config"] = LintConfig.from_file(Path(config))
    else:
        ctx.obj["config"] = LintConfig.load_hierarchy(Path.cwd())

    # Apply CLI flags
    if verbose:
        ctx.obj["config"].verbose = True
        logging.getLogger().setLevel(logging.DEBUG)

    if quiet:
        ctx.obj["config"].quiet = True
        logging.getLogger().setLevel(logging.WARNING)


@cli.command()
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True),
)
@click.option(
    "--recursive",
    "-r",
    is_flag=True,
    help="Process directories recursively",
)
@click.option(
    "--strategy",
    type=click.Choice(sorted(STRATEGIES)),
    help="Order checking strategy",
)
@click.option(
    "--allow-cyclic",
    is_flag=True,
    help="Do not report statements involved in a cyclic dependency",
)
@click.option(
    "--skip",
    multiple=True,
    help="Category exempt from order checks (repeatable)",
)
@click.option(
    "--preset",
    type=click.Choice(available_presets()),
    help="Use a predefined category order",
)
@click.pass_context
def check(
    ctx,
    paths: tuple[str, ...],
    recursive: bool,
    strategy: str | None,
    allow_cyclic: bool,
    skip: tuple[str, ...],
    preset: str | None,
):
    """Check the statement order of ESTree JSON dumps

    Each file holds either a Program node or an object with "filename",
    "source" and "ast" keys, as produced by a Vue SFC parser.

    Examples:
        vue-code-order check dumps/ --recursive
        vue-code-order check App.json --allow-cyclic --skip stores
    """
    config = ctx.obj["config"]

    if preset:
        config.apply_preset(preset)
    if strategy:
        config.strategy = strategy
    if allow_cyclic:
        config.allow_cyclic_dependencies = True
    if skip:
        config.skip_dependency_check = [*config.skip_dependency_check, *skip]

    errors = config.validate()
    if errors:
        for error in errors:
            click.echo(f"Configuration error: {error}", err=True)
        sys.exit(1)

    command = CheckCommand(config)
    results = command.execute([Path(p) for p in paths], recursive)

    sys.exit(0 if all(r.is_success for r in results) else 1)


@cli.command()
@click.argument("identifier")
@click.option(
    "--line",
    "line_text",
    default="",
    help="Full text of the line holding the identifier",
)
@click.option(
    "--no-description",
    is_flag=True,
    help="Hide the category description",
)
@click.pass_context
def lookup(ctx, identifier: str, line_text: str, no_description: bool):
    """Show the category an identifier falls into

    Examples:
        vue-code-order lookup useUserStore
        vue-code-order lookup events --line "const { data: events } = await useFetch('/api')"
    """
    result = lookup_category(identifier, line_text, ctx.obj["config"])
    if result is None:
        click.echo("Nothing to look up.", err=True)
        sys.exit(1)

    click.echo(format_hover(result, show_description=not no_description))


@cli.command()
@click.pass_context
def categories(ctx):
    """List the category order and the patterns of each category"""
    config = ctx.obj["config"]
    rules = config.build_rules()

    table = Table(title="Script setup categories")
    table.add_column("#", justify="right")
    table.add_column("Category", no_wrap=True)
    table.add_column("Description")
    table.add_column("Patterns", justify="right")

    for rank, name in enumerate(config.order, start=1):
        rule = rules.get(name)
        table.add_row(
            str(rank),
            name,
            rule.description if rule else "",
            str(len(rule.patterns)) if rule else "0",
        )

    unordered = [name for name in rules if name not in config.order]
    for name in unordered:
        table.add_row("-", name, rules[name].description, str(len(rules[name].patterns)))

    Console(highlight=False).print(table)


@cli.command()
@click.option(
    "--preset",
    type=click.Choice(available_presets()),
    help="Start from a predefined category order",
)
def init(preset: str | None):
    """Initialize configuration in current directory

    Creates a default .vue-code-order.yaml configuration file in the
    current directory.
    """
    config_path = Path.cwd() / PROJECT_CONFIG_NAME

    if config_path.exists():
        click.confirm(f"{config_path} already exists. Overwrite?", abort=True)

    default_config = LintConfig()
    if preset:
        default_config.apply_preset(preset)
    default_config.save(config_path)

    click.echo(f"Created configuration file: {config_path}")
    click.echo("Edit this file to customize your settings.")


def main():
    """Main entry point"""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user.", err=True)
        sys.exit(130)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        if "--verbose" in sys.argv or "-v" in sys.argv:
            import traceback

            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
