"""
Renumbers every numbered list in a markdown file.
The file is rewritten in place unless `--check` or `--stdout` is given.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .changes import ChangeAccumulator
from .config import ConfigError, build_config
from .editor import LineDocument
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    get_max_file_size,
    normalize_filepath,
    read_document,
    write_document,
)
from .renumberer import Renumberer
from .strategy import NumberingStrategy

__all__ = ["cli"]

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(package_name="auto-renumber")
@click.option(
    "--strategy",
    type=click.Choice([strategy.value for strategy in NumberingStrategy]),
    help="Where a list that continues no sibling starts.",
)
@click.option("--check", is_flag=True, help="Report whether renumbering is needed; do not write.")
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the result instead of writing it.")
@click.option("--verbose", "-v", is_flag=True, help="Log what the engine does.")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    strategy: str | None = None,
    check: bool = False,
    to_stdout: bool = False,
    verbose: bool = False,
):
    """
    Renumber the numbered lists of a markdown file.

    Args:
        filepath: Path to the Markdown file to process.
        strategy: Override for the numbering strategy.
        check: Exit with status 1 when the file needs renumbering, without
            writing it.
        to_stdout: Print the renumbered document instead of rewriting the file.
        verbose: Enable debug logging.

    Raises:
        click.BadParameter: If the path or the configuration is invalid.
        click.ClickException: If the file is too large, unreadable, or
            changes while being processed.

    Examples:
        auto-renumber notes/todo.md --strategy start-from-one
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    base_dir = Path.cwd().resolve()
    try:
        path = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = build_config(path.parent, numbering_strategy=strategy)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
        initial_stat = collect_file_stat(path)
        enforce_file_size(initial_stat, max_file_size, path)
        document = LineDocument.from_text(read_document(path))
    except (ValueError, IOError) as error:
        raise click.ClickException(str(error)) from error

    pending = Renumberer(config.numbering_strategy).renumber_all(document.lines)
    changed = len(pending.changes)
    ChangeAccumulator(pending.changes).apply(document)
    logger.debug("%d line(s) need a new number in %s", changed, path)

    if check:
        if changed:
            click.echo(f"{filepath}: {changed} line(s) would be renumbered", err=True)
            raise SystemExit(1)
        return

    if to_stdout:
        click.echo(document.to_text(), nl=False)
        return

    if changed:
        try:
            write_document(path, document.to_text(), initial_stat)
        except IOError as error:
            raise click.ClickException(str(error)) from error
        click.echo(f"{filepath}: renumbered {changed} line(s)")


if __name__ == "__main__":
    cli()
