"""Main CLI entry point and application setup."""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import click
from click.exceptions import Exit
from rich.console import Console
from rich.markup import escape

from zotfind import __version__
from zotfind.cli.commands import find
from zotfind.cli.config import get_data_dir, load_config
from zotfind.search import Library
from zotfind.storage import (
    RowSource,
    SQLiteRowSource,
    database_path,
    snapshot_database,
)

logger = logging.getLogger(__name__)

CONSOLE_WIDTH = 120

LOG_FORMAT = "%(levelname)s: %(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


@dataclass
class Context:
    """CLI context that holds shared resources."""

    console: Console
    data_dir: Path
    config: dict[str, Any] = field(default_factory=dict)
    debug: bool = False
    source: RowSource | None = None
    library: Library | None = None

    def load_library(self) -> Library:
        """Snapshot the database and build the library index, once."""
        if self.library is None:
            if self.config.get("snapshot", True):
                db_path = snapshot_database(self.data_dir)
            else:
                db_path = database_path(self.data_dir)

            logger.debug(f"Loading library from {db_path}")
            self.source = SQLiteRowSource(db_path)
            self.library = Library.build(self.source)
        return self.library

    def close(self) -> None:
        """Close the row source."""
        if self.source is not None:
            self.source.close()
            self.source = None


def setup_logging(
    verbose: bool = False, quiet: bool = False, debug: bool = False
) -> None:
    """Send zotfind's log records to stderr at the level the flags ask for.

    ``--quiet`` keeps warnings only, ``--verbose`` and ``--debug`` show
    debug records; ``--debug`` also adds timestamps and logger names.
    """
    if quiet:
        level = logging.WARNING
    elif verbose or debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            DEBUG_LOG_FORMAT if debug else LOG_FORMAT, datefmt="%H:%M:%S"
        )
    )

    package_logger = logging.getLogger("zotfind")
    package_logger.handlers = [handler]
    package_logger.setLevel(level)


def create_console(no_color: bool = False) -> Console:
    """Create the console the picker and status output are printed on."""
    if no_color:
        return Console(
            width=CONSOLE_WIDTH, no_color=True, highlight=False, color_system=None
        )
    return Console(width=CONSOLE_WIDTH)


class ZotfindGroup(click.Group):
    """Custom group that reports errors and handles KeyboardInterrupt."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except KeyboardInterrupt:
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print("[yellow]Interrupted[/yellow]")
            ctx.exit(130)
        except (click.ClickException, click.Abort, Exit, SystemExit):
            # Let Click exceptions and exits propagate with their exit codes
            raise
        except Exception as e:
            debug = getattr(ctx.obj, "debug", False) if ctx.obj else False
            if debug:
                raise
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print(f"[red]Error:[/red] {escape(str(e))}")
            else:
                click.echo(f"Error: {e}", err=True)
            ctx.exit(1)


@click.group(cls=ZotfindGroup)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--debug", is_flag=True, help="Enable debug mode with full tracebacks")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--data-dir",
    "-d",
    type=click.Path(path_type=Path),
    help="Zotero data directory (contains zotero.sqlite)",
)
@click.version_option(
    version=__version__, prog_name="zotfind", message="zotfind version %(version)s"
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    debug: bool,
    config: Path | None,
    data_dir: Path | None,
) -> None:
    """Find items in a Zotero library.

    Filter by author, publication year and date added, then pick a match
    to select it in Zotero or open its PDF.
    """
    setup_logging(verbose=verbose, quiet=quiet, debug=debug)

    try:
        config_data = load_config(config)
    except ValueError as e:
        if debug:
            raise
        click.echo(f"Error loading config file: {e}", err=True)
        ctx.exit(1)

    ctx.obj = Context(
        console=create_console(no_color=no_color),
        data_dir=get_data_dir(data_dir, config_data),
        config=config_data,
        debug=debug,
    )
    ctx.call_on_close(ctx.obj.close)


# Command: status
@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show database location and library statistics."""
    console = ctx.obj.console

    console.print("\n[bold]Library Status[/bold]\n")
    console.print(f"Data directory: {ctx.obj.data_dir}")
    console.print(f"Database: {database_path(ctx.obj.data_dir)}")

    stats = ctx.obj.load_library().statistics()
    console.print(f"Items: {stats['total_items']}")
    console.print(f"Authors: {stats['total_authors']}")
    console.print(f"Author associations: {stats['total_associations']}")
    console.print(f"Items with authors: {stats['items_with_authors']}")
    console.print(f"Items with dates: {stats['items_with_dates']}")


cli.add_command(find.find)


def main() -> None:
    """Main entry point for the CLI application."""
    try:
        cli()
    except KeyboardInterrupt:
        # Exit gracefully on Ctrl+C
        sys.exit(130)
    except Exception as e:
        if "--debug" in sys.argv:
            raise
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
