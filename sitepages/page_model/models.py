"""Data models for the page model.

This module defines the marker vocabulary shared by the page manager and
the host document, and the small value objects returned by queries.
"""

from dataclasses import dataclass, fields
from typing import Optional


@dataclass(frozen=True)
class MarkerVocabulary:
    """Names of the markers and attributes that encode pages in a document.

    Defaults are bit-exact with documents produced by the legacy editor, so
    files created there keep working without configuration.

    Attributes:
        page_class: Class set on page registry entries
        paged_class: Class set on elements visible only on some pages
        paged_visible_class: Class set on paged elements of the current page
        page_link_active_class: Class set on links targeting the current page
        type_attribute: Attribute that types an element as a page entry
        page_type: Value of type_attribute for page entries
        link_attribute: Attribute holding a link target
        link_prefix: Adornment wrapped around the page id in a link target
        current_page_attribute: Root attribute persisting the current page
    """

    page_class: str = "page-element"
    paged_class: str = "paged-element"
    paged_visible_class: str = "paged-element-visible"
    page_link_active_class: str = "page-link-active"
    type_attribute: str = "data-silex-type"
    page_type: str = "page"
    link_attribute: str = "data-silex-href"
    link_prefix: str = "#!"
    current_page_attribute: str = "data-current-page"

    @classmethod
    def field_names(cls) -> set:
        """Return the names of all overridable fields."""
        return {f.name for f in fields(cls)}

    def reserved_classes(self) -> set:
        """Classes that can never be used as page ids."""
        return {
            self.page_class,
            self.paged_class,
            self.paged_visible_class,
            self.page_link_active_class,
        }

    def link_to(self, page_id: str) -> str:
        """Build the link-target value pointing at a page."""
        return f"{self.link_prefix}{page_id}"

    def page_from_link(self, value: Optional[str]) -> Optional[str]:
        """Extract the page id from a link-target value.

        Returns:
            The page id, or None when the value does not point at a page
        """
        if not value or not value.startswith(self.link_prefix):
            return None
        page_id = value[len(self.link_prefix):]
        return page_id or None


DEFAULT_VOCABULARY = MarkerVocabulary()


@dataclass
class PageInfo:
    """A page registry entry as seen by views and the CLI.

    Attributes:
        page_id: Unique page identifier
        display_name: Human-readable page name
        is_current: Whether this page is the active one
        element_count: Number of elements carrying the page's marker
    """

    page_id: str
    display_name: str
    is_current: bool = False
    element_count: int = 0
