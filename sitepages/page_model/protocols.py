"""Capability interfaces consumed by the page manager.

The page manager never touches a concrete document engine. It works through
these protocols, implemented by the BeautifulSoup host in
sitepages.document and by lightweight in-memory trees in tests.
"""

from typing import Any, List, Optional, Protocol, Sequence


class MarkableElement(Protocol):
    """An element of the edited document that can carry markers.

    Markers are class-like string tokens. Attributes hold plain strings.
    """

    @property
    def element_id(self) -> Optional[str]:
        ...

    @property
    def parent(self) -> Optional["MarkableElement"]:
        ...

    @property
    def text(self) -> str:
        ...

    def markers(self) -> List[str]:
        ...

    def has_marker(self, token: str) -> bool:
        ...

    def add_marker(self, token: str) -> None:
        ...

    def remove_marker(self, token: str) -> None:
        ...

    def get_attribute(self, name: str) -> Optional[str]:
        ...

    def set_attribute(self, name: str, value: str) -> None:
        ...

    def remove_attribute(self, name: str) -> None:
        ...


class PageDocument(Protocol):
    """The host document the page manager operates on.

    All finders return elements in document order. The current page is
    document-wide state owned by the document object.
    """

    current_page: Optional[str]

    @property
    def root(self) -> MarkableElement:
        ...

    def page_markers(self) -> List[MarkableElement]:
        ...

    def find_by_marker(self, token: str) -> List[MarkableElement]:
        ...

    def find_by_attribute(self, name: str, value: Optional[str] = None) -> List[MarkableElement]:
        ...

    def find_by_id(self, element_id: str) -> Optional[MarkableElement]:
        ...

    def create_page_marker(self, page_id: str, display_name: str) -> MarkableElement:
        ...

    def set_text(self, element: MarkableElement, text: str) -> None:
        ...

    def set_element_id(self, element: MarkableElement, element_id: str) -> None:
        ...

    def remove_element(self, element: MarkableElement) -> None:
        ...


class RedrawListener(Protocol):
    """A page-aware UI collaborator notified when the current page changes."""

    def redraw(
        self,
        selection: Sequence[Any],
        document: Any,
        page_ids: List[str],
        current_page: Optional[str],
    ) -> None:
        ...
