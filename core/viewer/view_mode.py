# core/viewer/view_mode.py
"""Viewer layout state: default, theater and fullscreen.

- default: module list and viewer side by side
- theater: enlarged viewer with module tabs and a topic playlist below
- fullscreen: viewer only
"""

from core.resources.types import Topic, ViewMode
from .catalog import TopicCatalog


CYCLE_ORDER: tuple[ViewMode, ...] = ("default", "theater", "fullscreen")

# Shortcuts are ignored while the user is typing.
TEXT_ENTRY_TAGS = frozenset({"input", "textarea"})


class ViewModeController:
    """Tracks the view mode, the selected topic and the browsing module."""

    def __init__(self, catalog: TopicCatalog | None = None):
        self._catalog = catalog
        self.mode: ViewMode = "default"
        self.selected: tuple[int, int] | None = None  # (module_id, topic_id)
        self.browsing_module_id: int | None = None  # Active tab in theater mode
        self.expanded_modules: frozenset[int] = frozenset()  # Default-view accordion
        self._browsing_synced = False

    def _enter(self, mode: ViewMode) -> ViewMode:
        if mode == "theater" and self.selected and not self._browsing_synced:
            self.browsing_module_id = self.selected[0]
            self._browsing_synced = True
        self.mode = mode
        return self.mode

    def cycle(self) -> ViewMode:
        """Advance default -> theater -> fullscreen -> default."""
        next_index = (CYCLE_ORDER.index(self.mode) + 1) % len(CYCLE_ORDER)
        return self._enter(CYCLE_ORDER[next_index])

    def handle_key(self, key: str, focus: str | None = None) -> bool:
        """
        Apply a keyboard shortcut.

        Args:
            key: Key name as reported by the browser ("f", "T", "Escape", ...)
            focus: Tag name of the focused element, if any

        Returns:
            True if the key changed the view mode
        """
        if focus and focus.lower() in TEXT_ENTRY_TAGS:
            return False

        if key in ("f", "F"):
            self._enter("default" if self.mode == "fullscreen" else "fullscreen")
            return True
        if key in ("t", "T"):
            self._enter("default" if self.mode == "theater" else "theater")
            return True
        if key == "Escape" and self.mode != "default":
            self._enter("default")
            return True
        return False

    def select_topic(self, module_id: int, topic_id: int) -> None:
        """Select a topic; the next theater entry will browse its module."""
        self.selected = (module_id, topic_id)
        self._browsing_synced = False

    async def switch_tab(self, module_id: int) -> list[Topic]:
        """Show a module's topics in the theater playlist. Accordion state is untouched."""
        self.browsing_module_id = module_id
        if self._catalog is None:
            return []
        return await self._catalog.get_topics(module_id)

    async def toggle_module(self, module_id: int) -> list[Topic] | None:
        """Expand or collapse a module in the default view, loading topics on expand."""
        if module_id in self.expanded_modules:
            self.expanded_modules = self.expanded_modules - {module_id}
            return None

        self.expanded_modules = self.expanded_modules | {module_id}
        if self._catalog is None:
            return []
        return await self._catalog.get_topics(module_id)

    def reset(self) -> None:
        """Back to initial state, e.g. after navigating away."""
        self.mode = "default"
        self.selected = None
        self.browsing_module_id = None
        self.expanded_modules = frozenset()
        self._browsing_synced = False
