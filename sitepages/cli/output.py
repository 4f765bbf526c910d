"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Supports verbosity levels and the --no-color flag.
"""

from typing import List, Optional, Sequence

from rich.console import Console
from rich.table import Table

from sitepages.page_model.models import PageInfo


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Page created")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    def print(self, message: str) -> None:
        """Display message without formatting."""
        self.console.print(message)

    def print_pages(self, pages: List[PageInfo]) -> None:
        """Display the page registry as a table.

        Args:
            pages: Registry entries in document order
        """
        if not pages:
            self.console.print("[yellow]No pages in this document[/yellow]")
            return

        table = Table(title="Pages")
        table.add_column("", width=1)
        table.add_column("Id", style="bold")
        table.add_column("Display name")
        table.add_column("Elements", justify="right")
        for page in pages:
            table.add_row(
                "[green]●[/green]" if page.is_current else "",
                page.page_id,
                page.display_name,
                str(page.element_count),
            )
        self.console.print(table)

    def print_orphans(self, page_id: str, orphans: Sequence, deleted: bool) -> None:
        """Display the elements left on no page after a removal.

        Args:
            page_id: Id of the removed page
            orphans: Elements that were only visible on the page
            deleted: Whether the elements were deleted
        """
        if not orphans:
            return
        action = "Deleted" if deleted else "Now visible on every page"
        self.console.print(
            f"\n[bold]{action} ({len(orphans)} element(s) only on '{page_id}'):[/bold]"
        )
        for element in orphans:
            self.console.print(f"  • {element!r}")

    def print_element_pages(
        self,
        element,
        page_ids: List[str],
        parent_page: Optional[object] = None,
    ) -> None:
        """Display the pages an element belongs to.

        Args:
            element: Element described
            page_ids: Pages the element belongs to
            parent_page: Nearest paged ancestor, if any
        """
        pages = ", ".join(page_ids) if page_ids else "[dim]all pages[/dim]"
        self.console.print(f"{element!r}: {pages}")
        if parent_page is not None:
            self.console.print(f"  inherits paging from {parent_page!r}")
