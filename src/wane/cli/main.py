"""Main CLI entry point."""
import logging
import sys
from pathlib import Path

import click

from wane.compiler.codegen.wrap_async_code import (
    DEFAULT_INJECT_STATEMENT,
    RewriteOptions,
    statement_injector,
    wrap_async_source,
)
from wane.compiler.exceptions import WaneCompilerError
from wane.compiler.parser import TemplateParser
from wane.config import load_config


@click.group()
@click.version_option(package_name="wane-compiler")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--config", "config_path", default=None, type=click.Path(dir_okay=False),
              help="Config file (default: ./wane.config.py)")
@click.pass_context
def cli(ctx, verbose, config_path):
    """Wane compiler CLI.

    Run 'wane validate' to check every template of a project.
    Run 'wane instrument FILE...' to instrument promise callbacks.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = load_config(config_path)


@cli.command()
@click.argument("path", required=False, type=click.Path(file_okay=False, path_type=Path))
@click.pass_obj
def validate(config, path):
    """Parse all templates under PATH."""
    from wane.cli.validate import validate_project

    if path is None:
        path = Path(config.get("templates_dir", "."))

    errors = validate_project(path)
    for error in errors:
        click.echo(error, err=True)

    if errors:
        click.echo(f"❌ {len(errors)} template error(s)", err=True)
        sys.exit(1)
    click.echo("✅ All templates are valid")


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def parse(file):
    """Print the view tree of a template file."""
    try:
        forest = TemplateParser().parse_file(file)
    except WaneCompilerError as e:
        raise click.ClickException(str(e))
    click.echo(forest.pretty())


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--in-place", is_flag=True, help="Overwrite the files instead of printing")
@click.option("--inject", "inject_statement", default=None, help="Statement injected after each callback")
@click.option("--factory-type", default=None, help="Type of the injected constructor parameter")
@click.pass_obj
def instrument(config, files, in_place, inject_statement, factory_type):
    """Instrument .then/.catch callbacks in TypeScript FILES."""
    options = RewriteOptions(
        indent_text=config.get("indent_text", "  "),
        factory_type=factory_type or config.get("factory_type", "any"),
    )
    injector = statement_injector(inject_statement or config.get("inject_statement", DEFAULT_INJECT_STATEMENT))

    for file in files:
        source = file.read_text(encoding="utf-8")
        try:
            result = wrap_async_source(source, injector, options, str(file))
        except WaneCompilerError as e:
            raise click.ClickException(f"{file}: {e}")

        if in_place:
            if result != source:
                file.write_text(result, encoding="utf-8")
                click.echo(f"✏️  {file}")
        else:
            click.echo(result, nl=False)


if __name__ == "__main__":
    cli()
