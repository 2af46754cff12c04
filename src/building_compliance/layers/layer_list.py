# File: src/building_compliance/layers/layer_list.py

"""Paginated layer list with delete and drag-reorder.

Layers are shown in pages of page_size. Drag indices are relative to the
page being viewed and are turned into absolute indices with

    absolute = (page - 1) * page_size + in_page_index

A reorder updates the local sequence first, then persists it; if the
update fails the previous sequence is restored exactly.
"""

import math
from typing import List, Optional

from building_compliance.layers.errors import EditorStateError, LayerEditingError
from building_compliance.layers.layer import ElementConfiguration, Layer
from building_compliance.layers.session import ElementSession
from building_compliance.utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 5


def move_item(items: List, source: int, destination: int) -> List:
    """Return a copy of items with the item at source moved to destination."""
    moved = list(items)
    item = moved.pop(source)
    moved.insert(destination, item)
    return moved


class LayerList:
    """Paged view of a session's layers.

    Attributes:
        session: Element session holding the layers.
        page_size: Layers per page.
        page: Current page, 1-based.
    """

    def __init__(self, session: ElementSession, page_size: int = DEFAULT_PAGE_SIZE, page: int = 1):
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.session = session
        self.page_size = page_size
        self.page = 1
        self.set_page(page)

    @property
    def layers(self) -> List[Layer]:
        return list(self.session.element.layers)

    @property
    def page_count(self) -> int:
        """Number of pages; an empty list still has one (empty) page."""
        return max(1, math.ceil(len(self.session.element.layers) / self.page_size))

    def set_page(self, page: int) -> int:
        """Go to a page, clamped to the valid range."""
        self.page = min(max(1, page), self.page_count)
        return self.page

    def page_of(self, index: int) -> int:
        """Page showing the layer at an absolute index."""
        return index // self.page_size + 1

    def absolute_index(self, in_page_index: int, page: Optional[int] = None) -> int:
        """Absolute index of a position on a page (the current page by default)."""
        return ((page or self.page) - 1) * self.page_size + in_page_index

    def page_items(self) -> List[Layer]:
        """Layers shown on the current page."""
        start = self.absolute_index(0)
        return self.layers[start:start + self.page_size]

    def layer_label(self, index: int) -> str:
        """Display name of the layer at an absolute index."""
        return self.session.element.layers[index].display_name(index)

    def _check_index(self, index: int, allow_end: bool = False) -> None:
        size = len(self.session.element.layers)
        upper = size if allow_end else size - 1
        if not 0 <= index <= upper:
            raise EditorStateError(f"No layer at index {index}")

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    def delete(self, index: int) -> ElementConfiguration:
        """Delete the layer at an absolute index and persist the element.

        Raises:
            EditorStateError: If the index is out of range.
            PersistenceError: If the update fails; nothing changes.
        """
        self._check_index(index)
        layers = self.layers
        removed = layers.pop(index)
        stored = self.session.commit(layers, action="delete")
        self.set_page(self.page)
        logger.info(f"Deleted layer {removed.id}; now on page {self.page} of {self.page_count}")
        return stored

    def delete_in_page(self, in_page_index: int) -> ElementConfiguration:
        """Delete a layer by its position on the current page."""
        return self.delete(self.absolute_index(in_page_index))

    # -------------------------------------------------------------------------
    # Reorder
    # -------------------------------------------------------------------------

    def reorder(self, source: int, destination: int) -> Optional[ElementConfiguration]:
        """Move a layer using drag indices on the current page."""
        return self.move(self.absolute_index(source), self.absolute_index(destination))

    def move(self, source: int, destination: int) -> Optional[ElementConfiguration]:
        """Move a layer between absolute indices and persist the new order.

        The local sequence changes before the update is sent. On failure
        it is rolled back and PersistenceError is raised. After success
        the current page follows the moved layer.

        Returns:
            The stored element, or None when source == destination.
        """
        if source == destination:
            return None
        self._check_index(source)
        self._check_index(destination)

        previous = self.session.element
        reordered = move_item(previous.layers, source, destination)
        # Optimistic local update
        self.session.element = previous.with_layers(reordered)

        try:
            stored = self.session.commit(reordered, action="reorder")
        except LayerEditingError as e:
            logger.warning(f"Reorder {source}->{destination} failed, restoring previous order: {str(e)}")
            self.session.element = previous
            raise

        target_page = self.page_of(destination)
        if target_page != self.page:
            self.set_page(target_page)
        logger.info(f"Moved layer {source}->{destination}; showing page {self.page}")
        return stored
