"""Unit tests for cli.output module."""

import pytest
from rich.console import Console

from sitepages.cli.output import OutputHandler
from sitepages.document import HtmlDocument
from sitepages.page_model import PageInfo
from tests.fixtures.sample_documents import SAMPLE_SITE


@pytest.fixture
def handler():
    """OutputHandler writing to a recording console."""
    handler = OutputHandler(verbosity=0, no_color=True)
    handler.console = Console(record=True, width=120, no_color=True)
    return handler


class TestOutputHandlerInit:
    """Test cases for OutputHandler initialization."""

    def test_init_defaults(self):
        handler = OutputHandler()

        assert handler.verbosity == 0
        assert handler.console.no_color is False

    def test_init_no_color(self):
        assert OutputHandler(no_color=True).console.no_color is True


class TestMessages:
    """Test cases for message methods."""

    def test_info_hidden_at_verbosity_0(self, handler):
        handler.info("Saved index.html")

        assert handler.console.export_text() == ""

    def test_info_shown_at_verbosity_1(self, handler):
        handler.verbosity = 1

        handler.info("Saved index.html")

        assert "Saved index.html" in handler.console.export_text()

    def test_debug_requires_verbosity_2(self, handler):
        handler.verbosity = 1
        handler.debug("details")
        assert handler.console.export_text() == ""

        handler.verbosity = 2
        handler.debug("details")
        assert "details" in handler.console.export_text()

    def test_success_and_error(self, handler):
        handler.success("Created page 'contact'")
        handler.error("Page 'x' not found")

        text = handler.console.export_text()
        assert "✓ Created page 'contact'" in text
        assert "✗ Page 'x' not found" in text


class TestPrintPages:
    """Test cases for print_pages."""

    def test_empty_registry(self, handler):
        handler.print_pages([])

        assert "No pages in this document" in handler.console.export_text()

    def test_table(self, handler):
        handler.print_pages([
            PageInfo("home", "Home", is_current=True, element_count=2),
            PageInfo("about", "About us", element_count=3),
        ])

        text = handler.console.export_text()
        assert "Pages" in text
        assert "●" in text
        assert "About us" in text
        assert "3" in text


class TestPrintOrphans:
    """Test cases for print_orphans."""

    def test_nothing_printed_without_orphans(self, handler):
        handler.print_orphans("about", [], deleted=False)

        assert handler.console.export_text() == ""

    def test_kept_orphans(self, handler):
        document = HtmlDocument.from_html(SAMPLE_SITE)

        handler.print_orphans("about", [document.find_by_id("bio")], deleted=False)

        text = handler.console.export_text()
        assert "Now visible on every page (1 element(s) only on 'about')" in text
        assert "<HtmlElement div#bio>" in text

    def test_deleted_orphans(self, handler):
        document = HtmlDocument.from_html(SAMPLE_SITE)

        handler.print_orphans("about", [document.find_by_id("bio")], deleted=True)

        assert "Deleted" in handler.console.export_text()


class TestPrintElementPages:
    """Test cases for print_element_pages."""

    def test_element_on_all_pages(self, handler):
        document = HtmlDocument.from_html(SAMPLE_SITE)

        handler.print_element_pages(document.find_by_id("header"), [])

        assert "<HtmlElement div#header>: all pages" in handler.console.export_text()

    def test_inherited_paging(self, handler):
        document = HtmlDocument.from_html(SAMPLE_SITE)

        handler.print_element_pages(
            document.find_by_id("nested"), [], document.find_by_id("section")
        )

        assert "inherits paging from <HtmlElement div#section>" in handler.console.export_text()
