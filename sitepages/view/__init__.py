"""Page-aware panes notified by the page manager."""

from .pane_base import PaneBase
from .page_pane import PagePane

__all__ = [
    "PaneBase",
    "PagePane",
]
