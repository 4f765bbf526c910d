"""HTML host document for the page model.

Key classes:
    HtmlDocument: PageDocument backed by a BeautifulSoup tree
    HtmlElement: MarkableElement wrapping a BeautifulSoup tag
"""

from .html_document import HtmlDocument, HtmlElement

__all__ = [
    "HtmlDocument",
    "HtmlElement",
]
