import threading

from contentflow.domain.entities import Content
from contentflow.domain.errors import NotFound


class InMemoryContentStore:
    """
    Dict-backed content store.
    Safe to share across the batch worker threads.
    """

    def __init__(self, items: list[Content] | None = None) -> None:
        self._items: dict[str, Content] = {}
        self._lock = threading.Lock()
        self.save_calls: list[str] = []
        for item in items or []:
            self._items[item.id] = item

    def load(self, content_id: str) -> Content:
        with self._lock:
            item = self._items.get(content_id)
        if item is None:
            raise NotFound(content_id)
        # Callers mutate copies, never the stored instance
        return item.model_copy()

    def save(self, content: Content) -> Content:
        with self._lock:
            self._items[content.id] = content.model_copy()
            self.save_calls.append(content.id)
        return content

    def get(self, content_id: str) -> Content | None:
        with self._lock:
            return self._items.get(content_id)

    def all(self) -> list[Content]:
        with self._lock:
            return list(self._items.values())
