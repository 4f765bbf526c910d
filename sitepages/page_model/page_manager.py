"""Page registry and membership manager.

This module provides the PageManager class which keeps three collections of
an edited document mutually consistent:

- the page registry (page marker elements with an id and a display name),
- the per-element membership markers (one class-like token per page),
- the link targets pointing at pages (``#!<page id>``).

Every mutation validates its arguments before touching the document, so a
failed call never leaves the registry, the markers and the links out of
sync. Redraw listeners are notified after the mutation completes.
"""

import logging
from typing import List, Optional

from .errors import (
    DuplicatePageIdError,
    InvalidPageArgumentError,
    PageNotFoundError,
)
from .models import DEFAULT_VOCABULARY, MarkerVocabulary, PageInfo
from .protocols import MarkableElement, PageDocument, RedrawListener

logger = logging.getLogger(__name__)


class PageManager:
    """Manages the pages of one edited document.

    The manager owns no page state of its own: the registry lives in the
    document as page marker elements, memberships live on the content
    elements, and the current page is a field of the document object.

    Attributes:
        document: Host document implementing PageDocument
        vocabulary: Marker and attribute names used to encode pages

    Example:
        >>> manager = PageManager(HtmlDocument.from_html(markup))
        >>> manager.subscribe(pane)
        >>> manager.create_page("contact", "Contact")
        >>> manager.get_current_page()
        'contact'
    """

    def __init__(
        self,
        document: PageDocument,
        vocabulary: MarkerVocabulary = DEFAULT_VOCABULARY,
    ):
        self.document = document
        self.vocabulary = vocabulary
        self._listeners: List[RedrawListener] = []

    # ===== Redraw listeners =====

    def subscribe(self, listener: RedrawListener) -> None:
        """Register a listener redrawn every time the current page changes."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: RedrawListener) -> None:
        """Stop notifying a listener. Unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listeners(self) -> List[RedrawListener]:
        return list(self._listeners)

    def _notify(self, page_ids: List[str], current_page: Optional[str]) -> None:
        for listener in list(self._listeners):
            listener.redraw([], self.document, list(page_ids), current_page)

    # ===== Registry queries =====

    def get_pages(self) -> List[str]:
        """Return the ids of all pages, in document order.

        Raises:
            DocumentNotAttachedError: If the document root is unavailable
        """
        return [
            marker.element_id
            for marker in self.document.page_markers()
            if marker.element_id
        ]

    def get_current_page(self) -> Optional[str]:
        """Return the id of the active page, or None if none was ever set."""
        return self.document.current_page

    def get_display_name(self, page_id: str) -> str:
        """Return the display name of a page, or "" if there is no such page."""
        marker = self._find_page_marker(page_id)
        if marker is None:
            return ""
        return marker.text

    def describe_pages(self) -> List[PageInfo]:
        """Return a PageInfo for every page, in registry order."""
        current = self.get_current_page()
        return [
            PageInfo(
                page_id=page_id,
                display_name=self.get_display_name(page_id),
                is_current=page_id == current,
                element_count=len(self.get_page_elements(page_id)),
            )
            for page_id in self.get_pages()
        ]

    def _find_page_marker(self, page_id: str) -> Optional[MarkableElement]:
        for marker in self.document.page_markers():
            if marker.element_id == page_id:
                return marker
        return None

    # ===== Registry mutations =====

    def set_current_page(self, page_id: str) -> None:
        """Activate a page and redraw every listener.

        Args:
            page_id: Id of an existing page

        Raises:
            InvalidPageArgumentError: If page_id is not a page of the document
        """
        pages = self.get_pages()
        if page_id not in pages:
            raise InvalidPageArgumentError(
                f"'{page_id}' is not a page of this document", "page_id"
            )
        self.document.current_page = page_id
        logger.debug(f"Current page set to '{page_id}'")
        self._notify(pages, page_id)

    def create_page(self, page_id: str, display_name: str) -> None:
        """Append a page to the registry and activate it.

        Args:
            page_id: Unique id of the new page
            display_name: Human-readable name of the new page

        Raises:
            InvalidPageArgumentError: If page_id or display_name is malformed,
                or page_id is already a class of elements that are not paged
            DuplicatePageIdError: If a page with page_id already exists
        """
        self._validate_page_id(page_id, "page_id")
        self._validate_display_name(display_name)
        if page_id in self.get_pages():
            raise DuplicatePageIdError(page_id)
        self._validate_unused_class(page_id, "page_id")

        marker = self.document.create_page_marker(page_id, display_name)
        marker.add_marker(self.vocabulary.page_class)
        logger.info(f"Created page '{page_id}' ({display_name})")

        self.set_current_page(page_id)

    def rename_page(self, old_id: str, new_id: str, new_display_name: str) -> None:
        """Rename a page and retarget everything that references it.

        The page marker, the links pointing at the page and the membership
        markers of its elements are all updated before the renamed page is
        activated. Afterwards nothing in the document references old_id.

        Args:
            old_id: Id of the page to rename
            new_id: New page id (may equal old_id to change only the name)
            new_display_name: New display name

        Raises:
            PageNotFoundError: If old_id is not a page of the document
            InvalidPageArgumentError: If new_id or new_display_name is malformed,
                or new_id is already a class of elements that are not paged
            DuplicatePageIdError: If new_id names another existing page
        """
        marker = self._find_page_marker(old_id)
        if marker is None:
            raise PageNotFoundError(old_id)
        self._validate_page_id(new_id, "new_id")
        self._validate_display_name(new_display_name)
        if new_id != old_id:
            if new_id in self.get_pages():
                raise DuplicatePageIdError(new_id)
            self._validate_unused_class(new_id, "new_id")

        self.document.set_element_id(marker, new_id)
        self.document.set_text(marker, new_display_name)

        link_attribute = self.vocabulary.link_attribute
        links = self.document.find_by_attribute(
            link_attribute, self.vocabulary.link_to(old_id)
        )
        for element in links:
            element.set_attribute(link_attribute, self.vocabulary.link_to(new_id))

        members: List[MarkableElement] = []
        if new_id != old_id:
            members = self._paged_members(old_id)
            for element in members:
                element.add_marker(new_id)
                element.remove_marker(old_id)

        logger.info(
            f"Renamed page '{old_id}' to '{new_id}' "
            f"({len(links)} link(s), {len(members)} element(s) updated)"
        )
        self.set_current_page(new_id)

    def remove_page(self, page_id: str) -> List[MarkableElement]:
        """Remove a page and clean every reference to it.

        Links pointing at the page lose their target but are kept. Paged
        elements lose the page's membership marker; those left on no page at all lose
        their paged flag and are returned so the caller can decide whether to
        delete them. The first remaining page is activated afterwards.

        Args:
            page_id: Id of the page to remove

        Returns:
            Elements that were visible only on this page, in document order

        Raises:
            PageNotFoundError: If page_id is not a page of the document
        """
        marker = self._find_page_marker(page_id)
        if marker is None:
            raise PageNotFoundError(page_id)

        self.document.remove_element(marker)

        link_attribute = self.vocabulary.link_attribute
        for element in self.document.find_by_attribute(
            link_attribute, self.vocabulary.link_to(page_id)
        ):
            element.remove_attribute(link_attribute)

        remaining = self.get_pages()
        orphans: List[MarkableElement] = []
        for element in self._paged_members(page_id):
            element.remove_marker(page_id)
            if not any(element.has_marker(other) for other in remaining):
                element.remove_marker(self.vocabulary.paged_class)
                orphans.append(element)

        logger.info(f"Removed page '{page_id}'")
        if orphans:
            logger.warning(
                f"{len(orphans)} element(s) were only visible on page '{page_id}'"
            )

        if remaining:
            self.set_current_page(remaining[0])
        else:
            self.document.current_page = None
            logger.debug("No page left, current page cleared")
            self._notify(remaining, None)

        return orphans

    # ===== Element membership =====

    def add_to_page(self, element: MarkableElement, page_id: str) -> None:
        """Make an element visible on a page. Idempotent.

        Raises:
            PageNotFoundError: If page_id is not a page of the document
        """
        if page_id not in self.get_pages():
            raise PageNotFoundError(page_id)
        element.add_marker(page_id)
        element.add_marker(self.vocabulary.paged_class)
        logger.debug(f"Added element {element.element_id or '<anonymous>'} to page '{page_id}'")

    def remove_from_page(self, element: MarkableElement, page_id: str) -> None:
        """Hide an element from a page. Idempotent.

        The paged flag is cleared once the element belongs to no page.
        """
        element.remove_marker(page_id)
        if not self.get_pages_for_element(element):
            element.remove_marker(self.vocabulary.paged_class)
        logger.debug(f"Removed element {element.element_id or '<anonymous>'} from page '{page_id}'")

    def remove_from_all_pages(self, element: MarkableElement) -> None:
        """Make an element visible on every page again."""
        for page_id in self.get_pages_for_element(element):
            element.remove_marker(page_id)
        element.remove_marker(self.vocabulary.paged_class)
        logger.debug(f"Removed element {element.element_id or '<anonymous>'} from all pages")

    def get_pages_for_element(self, element: MarkableElement) -> List[str]:
        """Return the pages an element belongs to, in registry order."""
        return [page_id for page_id in self.get_pages() if element.has_marker(page_id)]

    def is_in_page(self, element: MarkableElement, page_id: Optional[str] = None) -> bool:
        """Check whether an element belongs to a page (current page by default)."""
        if page_id is None:
            page_id = self.get_current_page()
        if not page_id:
            return False
        return element.has_marker(page_id)

    def get_parent_page(self, element: MarkableElement) -> Optional[MarkableElement]:
        """Return the nearest ancestor visible only on some pages, or None."""
        parent = element.parent
        while parent is not None and not parent.has_marker(self.vocabulary.paged_class):
            parent = parent.parent
        return parent

    def get_page_elements(self, page_id: str) -> List[MarkableElement]:
        """Return the elements carrying a page's membership marker."""
        return self.document.find_by_marker(page_id)

    def _paged_members(self, page_id: str) -> List[MarkableElement]:
        paged_class = self.vocabulary.paged_class
        return [e for e in self.document.find_by_marker(page_id) if e.has_marker(paged_class)]

    # ===== Links =====

    def get_link_target(self, element: MarkableElement) -> Optional[str]:
        """Return the page id an element links to, or None."""
        return self.vocabulary.page_from_link(
            element.get_attribute(self.vocabulary.link_attribute)
        )

    def set_link(self, element: MarkableElement, page_id: str) -> None:
        """Point an element at a page.

        Raises:
            PageNotFoundError: If page_id is not a page of the document
        """
        if page_id not in self.get_pages():
            raise PageNotFoundError(page_id)
        element.set_attribute(self.vocabulary.link_attribute, self.vocabulary.link_to(page_id))

    def clear_link(self, element: MarkableElement) -> None:
        """Remove an element's link target, if any."""
        element.remove_attribute(self.vocabulary.link_attribute)

    # ===== Visibility =====

    def apply_visibility(self, page_id: Optional[str] = None) -> List[MarkableElement]:
        """Flag the paged elements and links of a page (current page by default).

        Paged elements of the page get the visible class, other paged
        elements lose it. Links targeting the page get the active class,
        other links lose it. Listeners are not notified.

        Returns:
            Paged elements visible on the page, in document order

        Raises:
            PageNotFoundError: If an explicit page_id is not a page of the document
        """
        if page_id is None:
            page_id = self.get_current_page()
        elif page_id not in self.get_pages():
            raise PageNotFoundError(page_id)

        visible_class = self.vocabulary.paged_visible_class
        visible: List[MarkableElement] = []
        for element in self.document.find_by_marker(self.vocabulary.paged_class):
            if page_id and element.has_marker(page_id):
                element.add_marker(visible_class)
                visible.append(element)
            else:
                element.remove_marker(visible_class)

        active_class = self.vocabulary.page_link_active_class
        for element in self.document.find_by_attribute(self.vocabulary.link_attribute):
            if page_id and self.get_link_target(element) == page_id:
                element.add_marker(active_class)
            else:
                element.remove_marker(active_class)

        return visible

    # ===== Validation =====

    def _validate_page_id(self, page_id: str, argument: str) -> None:
        if not isinstance(page_id, str) or not page_id.strip():
            raise InvalidPageArgumentError("page id cannot be empty", argument)
        if any(char.isspace() for char in page_id):
            raise InvalidPageArgumentError(
                f"page id '{page_id}' cannot contain whitespace", argument
            )
        if page_id.startswith(self.vocabulary.link_prefix):
            raise InvalidPageArgumentError(
                f"page id '{page_id}' cannot start with '{self.vocabulary.link_prefix}'",
                argument,
            )
        if page_id in self.vocabulary.reserved_classes():
            raise InvalidPageArgumentError(
                f"page id '{page_id}' is a reserved marker", argument
            )

    def _validate_unused_class(self, page_id: str, argument: str) -> None:
        styled = [
            e for e in self.document.find_by_marker(page_id)
            if not e.has_marker(self.vocabulary.paged_class)
        ]
        if styled:
            raise InvalidPageArgumentError(
                f"page id '{page_id}' is already a class of {len(styled)} element(s)",
                argument,
            )

    def _validate_display_name(self, display_name: str) -> None:
        if not isinstance(display_name, str) or not display_name.strip():
            raise InvalidPageArgumentError(
                "display name cannot be empty", "display_name"
            )
