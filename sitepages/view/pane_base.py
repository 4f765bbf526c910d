"""Base class for page-aware panes.

A pane is a UI collaborator that redraws itself whenever the current page
changes. PageManager calls redraw() on every subscribed pane with the
selection, the document, the page ids and the current page id.
"""

import logging
from typing import Any, Callable, List, Optional, Sequence

logger = logging.getLogger(__name__)

# Signature: controller(property_name, value, elements)
PropertyController = Callable[[str, Any, Sequence[Any]], None]


class PaneBase:
    """Base redraw listener.

    Subclasses override _render() to display page state. The
    is_setting_value flag is raised while the pane pushes a value to its
    controller, so the redraw triggered by that change is skipped.

    Attributes:
        controller: Optional callback notified of property changes
        is_setting_value: True while the pane is notifying its controller
        is_redrawing: True while the pane is redrawing
    """

    def __init__(self, controller: Optional[PropertyController] = None):
        self.controller = controller
        self.is_setting_value = False
        self.is_redrawing = False

    def redraw(
        self,
        selection: Sequence[Any],
        document: Any,
        page_ids: List[str],
        current_page: Optional[str],
    ) -> None:
        """Refresh the displayed data.

        Args:
            selection: Elements currently selected (may be empty, never None)
            document: Document being edited
            page_ids: Ids of the pages of the document
            current_page: Id of the active page

        Raises:
            ValueError: If selection is None
        """
        if selection is None:
            raise ValueError("selection array is undefined")
        if self.is_setting_value:
            return
        self.is_redrawing = True
        try:
            self._render(selection, document, page_ids, current_page)
        finally:
            self.is_redrawing = False

    def _render(
        self,
        selection: Sequence[Any],
        document: Any,
        page_ids: List[str],
        current_page: Optional[str],
    ) -> None:
        pass

    def property_changed(
        self,
        property_name: str,
        value: Any = None,
        elements: Sequence[Any] = (),
    ) -> None:
        """Notify the controller that a property was edited in this pane.

        Ignored while redrawing, since setting an input's value during a
        redraw fires a change event of its own. Controller failures are
        logged so the setting-value flag is always reset.
        """
        if self.is_redrawing or self.controller is None:
            return
        self.is_setting_value = True
        try:
            self.controller(property_name, value, elements)
        except Exception:
            logger.exception(f"An error occurred while editing '{property_name}'")
        finally:
            self.is_setting_value = False

    @staticmethod
    def get_common_property(
        elements: Sequence[Any], getter: Callable[[Any], Any]
    ) -> Any:
        """Return the value shared by all elements, or None if they differ."""
        value = None
        is_first = True
        for element in elements:
            element_value = getter(element)
            if is_first:
                value = element_value
                is_first = False
            elif element_value != value:
                return None
        return value
