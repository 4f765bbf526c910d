"""Main CLI entry point for the site-pages command.

This module provides the Typer application that edits the pages of an HTML
document: listing, creating, renaming, removing and opening pages, and
attaching elements to pages. Every mutating command saves the document
unless --dry-run is given.
"""

import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional

import typer
from soupsieve import SelectorSyntaxError

from sitepages import __version__
from sitepages.cli.config import ConfigLoader
from sitepages.cli.errors import SelectorError
from sitepages.cli.models import ExitCode, SitePagesConfig
from sitepages.cli.output import OutputHandler
from sitepages.document import HtmlDocument, HtmlElement
from sitepages.page_model import (
    DuplicatePageIdError,
    InvalidPageArgumentError,
    NotFoundError,
    PageManager,
    SitePagesError,
)
from sitepages.view import PagePane

app = typer.Typer(
    name="site-pages",
    help="""Manage the pages of a single-document website.

QUICK START:
  site-pages list index.html                          # Show pages
  site-pages create index.html contact "Contact"      # Add a page
  site-pages add index.html "#form" contact           # Show #form on contact only
  site-pages rename index.html contact reach "Reach"  # Rename, links follow
  site-pages remove index.html reach                  # Remove the page""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

# Module logger
logger = logging.getLogger(__name__)


@dataclass
class CliContext:
    """Options shared by all commands."""
    output: OutputHandler
    config_path: Optional[str] = None
    dry_run: bool = False


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'sitepages' namespace logger to avoid affecting
    third-party libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("sitepages")
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"site-pages_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"site-pages version {__version__}")
        raise typer.Exit()


@contextmanager
def _handle_errors(output: OutputHandler) -> Iterator[None]:
    """Map application errors to messages and exit codes."""
    try:
        yield
    except typer.Exit:
        raise
    except NotFoundError as e:
        logger.error(str(e))
        output.error(str(e))
        raise typer.Exit(ExitCode.NOT_FOUND)
    except (InvalidPageArgumentError, DuplicatePageIdError, SelectorError) as e:
        logger.error(str(e))
        output.error(str(e))
        raise typer.Exit(ExitCode.INVALID_ARGUMENT)
    except SitePagesError as e:
        logger.error(str(e))
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except Exception as e:
        logger.exception("Unexpected error")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)


class _Session:
    """A loaded document, its page manager and the settings used to save it."""

    def __init__(self, ctx: CliContext, file: str, redraw: bool = True):
        self.ctx = ctx
        self.file = file
        self.config: SitePagesConfig = ConfigLoader.load(
            ConfigLoader.resolve_path(ctx.config_path)
        )
        self.document = HtmlDocument.load(
            file, encoding=self.config.encoding, vocabulary=self.config.vocabulary
        )
        self.manager = PageManager(self.document, self.config.vocabulary)
        if redraw:
            self.manager.subscribe(
                PagePane(
                    console=ctx.output.console,
                    name_resolver=self.manager.get_display_name,
                )
            )

    def select(self, selector: str) -> List[HtmlElement]:
        try:
            elements = self.document.select(selector)
        except SelectorSyntaxError as e:
            raise SelectorError(selector, f"is invalid: {e}")
        if not elements:
            raise SelectorError(selector, "matched no element")
        return elements

    def save(self) -> None:
        if self.ctx.dry_run:
            self.ctx.output.warning("Dry run: document not saved")
            return
        self.document.save(self.file, encoding=self.config.encoding)
        self.ctx.output.info(f"Saved {self.file}")


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None,
        "--config",
        help="Configuration file (default: $SITE_PAGES_CONFIG or .site-pages/config.yaml)",
        metavar="PATH",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Apply changes in memory only, do not save the document",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Manage the pages of a single-document website."""
    _configure_logging(verbosity, logdir)
    ctx.obj = CliContext(
        output=OutputHandler(verbosity=verbosity, no_color=no_color),
        config_path=config,
        dry_run=dry_run,
    )


@app.command("list")
def list_pages(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="HTML document"),
) -> None:
    """List the pages of a document, marking the current one."""
    cli: CliContext = ctx.obj
    with _handle_errors(cli.output):
        session = _Session(cli, file, redraw=False)
        cli.output.print_pages(session.manager.describe_pages())


@app.command("create")
def create_page(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="HTML document"),
    page_id: str = typer.Argument(..., help="Id of the new page"),
    display_name: str = typer.Argument(..., help="Display name of the new page"),
) -> None:
    """Create a page and make it the current page."""
    cli: CliContext = ctx.obj
    with _handle_errors(cli.output):
        session = _Session(cli, file)
        session.manager.create_page(page_id, display_name)
        session.save()
        cli.output.success(f"Created page '{page_id}'")


@app.command("rename")
def rename_page(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="HTML document"),
    old_id: str = typer.Argument(..., help="Id of the page to rename"),
    new_id: str = typer.Argument(..., help="New page id"),
    display_name: str = typer.Argument(..., help="New display name"),
) -> None:
    """Rename a page; links and element memberships follow."""
    cli: CliContext = ctx.obj
    with _handle_errors(cli.output):
        session = _Session(cli, file)
        session.manager.rename_page(old_id, new_id, display_name)
        session.save()
        cli.output.success(f"Renamed page '{old_id}' to '{new_id}'")


@app.command("remove")
def remove_page(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="HTML document"),
    page_id: str = typer.Argument(..., help="Id of the page to remove"),
    delete_orphans: Optional[bool] = typer.Option(
        None,
        "--delete-orphans/--keep-orphans",
        help="Delete elements that were visible only on this page (default from config)",
    ),
) -> None:
    """Remove a page; links to it are cleared."""
    cli: CliContext = ctx.obj
    with _handle_errors(cli.output):
        session = _Session(cli, file)
        if delete_orphans is None:
            delete_orphans = session.config.delete_orphans

        orphans = session.manager.remove_page(page_id)
        if delete_orphans:
            for element in orphans:
                session.document.remove_element(element)

        session.save()
        cli.output.success(f"Removed page '{page_id}'")
        cli.output.print_orphans(page_id, orphans, deleted=delete_orphans)


@app.command("open")
def open_page(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="HTML document"),
    page_id: str = typer.Argument(..., help="Id of the page to open"),
) -> None:
    """Make a page the current page."""
    cli: CliContext = ctx.obj
    with _handle_errors(cli.output):
        session = _Session(cli, file)
        session.manager.set_current_page(page_id)
        session.save()
        cli.output.success(f"Opened page '{page_id}'")


@app.command("add")
def add_to_page(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="HTML document"),
    selector: str = typer.Argument(..., help="CSS selector of the elements"),
    page_id: str = typer.Argument(..., help="Page to show the elements on"),
) -> None:
    """Show the selected elements on a page."""
    cli: CliContext = ctx.obj
    with _handle_errors(cli.output):
        session = _Session(cli, file, redraw=False)
        elements = session.select(selector)
        for element in elements:
            session.manager.add_to_page(element, page_id)
        session.save()
        cli.output.success(f"Added {len(elements)} element(s) to page '{page_id}'")


@app.command("detach")
def detach(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="HTML document"),
    selector: str = typer.Argument(..., help="CSS selector of the elements"),
    page_id: Optional[str] = typer.Argument(
        None, help="Page to hide the elements from (default: all pages)"
    ),
) -> None:
    """Hide the selected elements from a page, or from all pages."""
    cli: CliContext = ctx.obj
    with _handle_errors(cli.output):
        session = _Session(cli, file, redraw=False)
        elements = session.select(selector)
        for element in elements:
            if page_id:
                session.manager.remove_from_page(element, page_id)
            else:
                session.manager.remove_from_all_pages(element)
        session.save()
        target = f"page '{page_id}'" if page_id else "all pages"
        cli.output.success(f"Detached {len(elements)} element(s) from {target}")


@app.command("link")
def link(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="HTML document"),
    selector: str = typer.Argument(..., help="CSS selector of the elements"),
    page_id: Optional[str] = typer.Argument(
        None, help="Page the elements link to (default: clear the link)"
    ),
) -> None:
    """Point the selected elements at a page, or clear their link."""
    cli: CliContext = ctx.obj
    with _handle_errors(cli.output):
        session = _Session(cli, file, redraw=False)
        elements = session.select(selector)
        for element in elements:
            if page_id:
                session.manager.set_link(element, page_id)
            else:
                session.manager.clear_link(element)
        session.save()
        if page_id:
            cli.output.success(f"Linked {len(elements)} element(s) to page '{page_id}'")
        else:
            cli.output.success(f"Cleared the link of {len(elements)} element(s)")


@app.command("show")
def show(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="HTML document"),
    selector: str = typer.Argument(..., help="CSS selector of the elements"),
) -> None:
    """Show the pages the selected elements belong to."""
    cli: CliContext = ctx.obj
    with _handle_errors(cli.output):
        session = _Session(cli, file, redraw=False)
        for element in session.select(selector):
            cli.output.print_element_pages(
                element,
                session.manager.get_pages_for_element(element),
                session.manager.get_parent_page(element),
            )


def main() -> None:
    """Main entry point for the CLI application."""
    app()


# Allow running as: python -m sitepages.cli.main
if __name__ == "__main__":
    main()
