"""Light/dark display mode, persisted in the key-value store."""
import logging

from notes_api.adapters.local import KeyValueStore
from notes_api.errors import KeyValueStoreError

logger = logging.getLogger(__name__)

DARK = "dark"
LIGHT = "light"


class ThemeToggle:
    """Tracks the page's display mode. The page root carries the ``dark`` class when dark."""

    def __init__(self, kv_store: KeyValueStore, key: str = "theme"):
        self.kv_store = kv_store
        self.key = key
        try:
            self.is_dark = self.kv_store.get(self.key, LIGHT) == DARK
        except KeyValueStoreError as e:
            logger.error(f"Could not read theme, using {LIGHT}: {e}")
            self.is_dark = False

    @property
    def marker(self) -> str:
        return DARK if self.is_dark else ""

    def toggle(self) -> bool:
        """Flip the mode, persist it and return whether it is now dark."""
        is_dark = not self.is_dark
        self.kv_store.set(self.key, DARK if is_dark else LIGHT)
        self.is_dark = is_dark
        logger.info(f"Theme switched to {DARK if is_dark else LIGHT}")
        return self.is_dark
