"""Multi-page visibility model for single-document website editing.

Subpackages:
    page_model: Page registry and membership manager (the core)
    document: BeautifulSoup-backed HTML host document
    view: Redraw listeners (panes) consuming page state
    cli: The `site-pages` command-line tool
"""

__version__ = "0.1.0"
