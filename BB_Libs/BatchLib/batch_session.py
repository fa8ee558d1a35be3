"""
Batch session: the ordered collection of items queued for processing.

Classes:
    BatchSession: Insertion-ordered BatchItem collection
"""

import logging
import threading
from typing import Any, Iterable, List, Optional, Tuple, Union

from BB_Libs.BatchLib.batch_intake import create_batch_item
from BB_Libs.BatchLib.batch_models import BatchItem, BatchStatus

logger = logging.getLogger(__name__)

SourceEntry = Union[Any, Tuple[str, Any]]


class BatchSession:
    """
    Holds the batch items in insertion order.

    Removing an item or clearing the session releases the items' encoded
    outputs. The sources themselves belong to the intake and are left alone.
    """

    def __init__(self):
        self._items: List[BatchItem] = []
        self._lock = threading.Lock()

    @property
    def items(self) -> List[BatchItem]:
        """Snapshot of the items in insertion order."""
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def add_item(self, item: BatchItem) -> BatchItem:
        with self._lock:
            self._items.append(item)
        return item

    def add_sources(self, sources: Iterable[SourceEntry]) -> List[BatchItem]:
        """
        Create and append items for the given sources.

        Args:
            sources: Paths, bytes or file objects, or (name, source) pairs

        Returns:
            The newly created items
        """
        created = []
        for entry in sources:
            if isinstance(entry, tuple) and len(entry) == 2:
                name, source = entry
                item = create_batch_item(source, name=str(name))
            else:
                item = create_batch_item(entry)
            created.append(item)

        with self._lock:
            self._items.extend(created)
        logger.debug(f"Added {len(created)} item(s) to batch")
        return created

    def get_item(self, item_id: str) -> Optional[BatchItem]:
        with self._lock:
            for item in self._items:
                if item.id == item_id:
                    return item
        return None

    def remove_item(self, item_id: str) -> bool:
        """
        Remove an item and release its output.

        Returns:
            True if the item was found
        """
        with self._lock:
            for index, item in enumerate(self._items):
                if item.id == item_id:
                    del self._items[index]
                    break
            else:
                return False
        item.release()
        return True

    def clear(self) -> None:
        with self._lock:
            removed, self._items = self._items, []
        for item in removed:
            item.release()

    def items_with_status(self, status: BatchStatus) -> List[BatchItem]:
        return [item for item in self.items if item.status == status]

    @property
    def completed_items(self) -> List[BatchItem]:
        return self.items_with_status(BatchStatus.DONE)

    @property
    def failed_items(self) -> List[BatchItem]:
        return self.items_with_status(BatchStatus.FAILED)
