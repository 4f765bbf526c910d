"""BeautifulSoup-backed host document.

This module provides HtmlDocument and HtmlElement, which implement the
PageDocument and MarkableElement capabilities on top of an HTML file
parsed with BeautifulSoup. Membership markers are CSS classes, page
entries are typed anchors appended to <body>, and the current page is
persisted on <body> when the document is serialized.
"""

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from sitepages.page_model.errors import (
    DocumentFilesystemError,
    DocumentNotAttachedError,
)
from sitepages.page_model.models import DEFAULT_VOCABULARY, MarkerVocabulary

logger = logging.getLogger(__name__)


class HtmlElement:
    """A markable view over a BeautifulSoup tag.

    Two wrappers are equal when they wrap the same tag, so elements
    returned by different queries can be compared and hashed.
    """

    def __init__(self, tag: Tag):
        self.tag = tag

    def __eq__(self, other) -> bool:
        return isinstance(other, HtmlElement) and self.tag is other.tag

    def __hash__(self) -> int:
        return id(self.tag)

    def __repr__(self) -> str:
        element_id = self.element_id
        if element_id:
            return f"<HtmlElement {self.tag.name}#{element_id}>"
        return f"<HtmlElement {self.tag.name}>"

    @property
    def name(self) -> str:
        return self.tag.name

    @property
    def element_id(self) -> Optional[str]:
        return self.get_attribute("id")

    @property
    def parent(self) -> Optional["HtmlElement"]:
        parent = self.tag.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return HtmlElement(parent)

    @property
    def text(self) -> str:
        return self.tag.get_text()

    def markers(self) -> List[str]:
        classes = self.tag.get("class") or []
        if isinstance(classes, str):
            classes = classes.split()
        return list(classes)

    def has_marker(self, token: str) -> bool:
        return token in self.markers()

    def add_marker(self, token: str) -> None:
        classes = self.markers()
        if token not in classes:
            classes.append(token)
            self.tag["class"] = classes

    def remove_marker(self, token: str) -> None:
        classes = self.markers()
        if token not in classes:
            return
        classes = [c for c in classes if c != token]
        if classes:
            self.tag["class"] = classes
        else:
            del self.tag["class"]

    def get_attribute(self, name: str) -> Optional[str]:
        value = self.tag.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def set_attribute(self, name: str, value: str) -> None:
        self.tag[name] = value

    def remove_attribute(self, name: str) -> None:
        if name in self.tag.attrs:
            del self.tag[name]


class HtmlDocument:
    """An HTML page being edited, seen as a PageDocument.

    A document created without a soup is detached: every query raises
    DocumentNotAttachedError until a soup is attached.

    Attributes:
        soup: Parsed document, or None while detached
        vocabulary: Marker and attribute names used to encode pages
        current_page: Id of the active page (document-wide state)

    Example:
        >>> document = HtmlDocument.load("site/index.html")
        >>> [m.element_id for m in document.page_markers()]
        ['home', 'about']
        >>> document.save("site/index.html")
    """

    def __init__(
        self,
        soup: Optional[BeautifulSoup] = None,
        vocabulary: MarkerVocabulary = DEFAULT_VOCABULARY,
        current_page: Optional[str] = None,
    ):
        self.soup = soup
        self.vocabulary = vocabulary
        self.current_page = current_page
        # Python's built-in parser keeps unknown attributes and avoids XXE
        self.parser = "html.parser"

    @classmethod
    def from_html(
        cls, markup: str, vocabulary: MarkerVocabulary = DEFAULT_VOCABULARY
    ) -> "HtmlDocument":
        """Parse markup and restore the persisted current page, if any."""
        document = cls(vocabulary=vocabulary)
        document.attach(BeautifulSoup(markup, document.parser))
        return document

    def attach(self, soup: BeautifulSoup) -> None:
        """Attach a parsed tree and read its persisted current page."""
        self.soup = soup
        body = soup.find("body")
        if body is not None:
            current = body.get(self.vocabulary.current_page_attribute)
            if current and current in [m.element_id for m in self.page_markers()]:
                self.current_page = current
            elif current:
                logger.warning(f"Ignoring current page '{current}': no such page in the document")
        logger.debug(f"Attached document, current page: {self.current_page}")

    @classmethod
    def load(
        cls,
        path: str,
        encoding: str = "utf-8",
        vocabulary: MarkerVocabulary = DEFAULT_VOCABULARY,
    ) -> "HtmlDocument":
        """Read and parse an HTML file.

        Raises:
            DocumentFilesystemError: If the file cannot be read
        """
        try:
            with open(path, "r", encoding=encoding) as f:
                markup = f.read()
        except FileNotFoundError:
            raise DocumentFilesystemError(path, "read", "File not found")
        except PermissionError:
            raise DocumentFilesystemError(path, "read", "Permission denied")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentFilesystemError(path, "read", str(e))

        logger.info(f"Loaded document {path}")
        return cls.from_html(markup, vocabulary)

    def save(self, path: str, encoding: str = "utf-8") -> None:
        """Serialize the document to an HTML file.

        Raises:
            DocumentFilesystemError: If the file cannot be written
        """
        html = self.to_html()
        try:
            with open(path, "w", encoding=encoding) as f:
                f.write(html)
        except PermissionError:
            raise DocumentFilesystemError(path, "write", "Permission denied")
        except OSError as e:
            raise DocumentFilesystemError(path, "write", str(e))

        logger.info(f"Saved document {path}")

    def to_html(self) -> str:
        """Serialize the document, persisting the current page on <body>."""
        soup = self._require_soup()
        body = soup.find("body")
        if body is not None:
            attribute = self.vocabulary.current_page_attribute
            if self.current_page:
                body[attribute] = self.current_page
            elif attribute in body.attrs:
                del body[attribute]
        return str(soup)

    def _require_soup(self) -> BeautifulSoup:
        if self.soup is None:
            raise DocumentNotAttachedError()
        return self.soup

    def _container(self) -> Tag:
        soup = self._require_soup()
        return soup.find("body") or soup

    @property
    def root(self) -> HtmlElement:
        return HtmlElement(self._container())

    def page_markers(self) -> List[HtmlElement]:
        soup = self._require_soup()
        attrs = {self.vocabulary.type_attribute: self.vocabulary.page_type}
        return [HtmlElement(tag) for tag in soup.find_all(attrs=attrs)]

    def find_by_marker(self, token: str) -> List[HtmlElement]:
        soup = self._require_soup()
        return [HtmlElement(tag) for tag in soup.find_all(class_=token)]

    def find_by_attribute(self, name: str, value: Optional[str] = None) -> List[HtmlElement]:
        soup = self._require_soup()
        attrs = {name: True if value is None else value}
        return [HtmlElement(tag) for tag in soup.find_all(attrs=attrs)]

    def find_by_id(self, element_id: str) -> Optional[HtmlElement]:
        tag = self._require_soup().find(id=element_id)
        if tag is None:
            return None
        return HtmlElement(tag)

    def select(self, selector: str) -> List[HtmlElement]:
        """Return the elements matching a CSS selector, in document order."""
        return [HtmlElement(tag) for tag in self._require_soup().select(selector)]

    def create_page_marker(self, page_id: str, display_name: str) -> HtmlElement:
        soup = self._require_soup()
        tag = soup.new_tag("a")
        tag["id"] = page_id
        tag[self.vocabulary.type_attribute] = self.vocabulary.page_type
        tag.string = display_name
        self._container().append(tag)
        return HtmlElement(tag)

    def set_text(self, element: HtmlElement, text: str) -> None:
        element.tag.string = text

    def set_element_id(self, element: HtmlElement, element_id: str) -> None:
        element.tag["id"] = element_id

    def remove_element(self, element: HtmlElement) -> None:
        element.tag.extract()
