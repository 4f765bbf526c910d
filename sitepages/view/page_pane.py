"""Terminal pane listing the pages of a document."""

import logging
from typing import Any, List, Optional, Sequence

from rich.console import Console
from rich.table import Table

from .pane_base import PaneBase

logger = logging.getLogger(__name__)


class PagePane(PaneBase):
    """Renders the page registry as a Rich table on every redraw.

    The pane keeps the last state it was given, so callers can inspect
    what was displayed. Display names are read from the document through
    an optional name resolver (typically PageManager.get_display_name).
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        name_resolver=None,
        controller=None,
    ):
        super().__init__(controller)
        self.console = console or Console()
        self.name_resolver = name_resolver
        self.page_ids: List[str] = []
        self.current_page: Optional[str] = None
        self.redraw_count = 0

    def _render(
        self,
        selection: Sequence[Any],
        document: Any,
        page_ids: List[str],
        current_page: Optional[str],
    ) -> None:
        self.page_ids = list(page_ids)
        self.current_page = current_page
        self.redraw_count += 1
        logger.debug(f"Redrawing page pane: {len(page_ids)} page(s), current={current_page}")
        self.console.print(self.build_table())

    def build_table(self) -> Table:
        """Build the table for the last known page state."""
        table = Table(title="Pages", show_lines=False)
        table.add_column("", width=1)
        table.add_column("Id", style="bold")
        table.add_column("Display name")

        if not self.page_ids:
            table.add_row("", "[dim]no pages[/dim]", "")
            return table

        for page_id in self.page_ids:
            marker = "[green]●[/green]" if page_id == self.current_page else ""
            name = self.name_resolver(page_id) if self.name_resolver else ""
            table.add_row(marker, page_id, name)
        return table
