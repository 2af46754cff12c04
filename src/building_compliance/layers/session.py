# File: src/building_compliance/layers/session.py

"""Editing session of one element.

The session owns the local copy of the element shared by the layer
editor and the layer list, and is the only place that calls the
persistence collaborator. One request at a time: a second commit while
the first is outstanding is refused.
"""

import traceback
from typing import Optional, Sequence

from building_compliance.layers.errors import OperationInProgressError, PersistenceError
from building_compliance.layers.layer import ElementConfiguration, Layer
from building_compliance.persistence.updater import ElementLocation, ElementUpdater
from building_compliance.utils.logging_config import get_logger

logger = get_logger(__name__)


class ElementSession:
    """Local element state plus the collaborator that persists it.

    Attributes:
        element: Last known-good element (replaced by server data on success).
        location: Ids addressing the element.
        updater: Persistence collaborator.
    """

    def __init__(
        self,
        element: ElementConfiguration,
        location: ElementLocation,
        updater: ElementUpdater,
    ):
        self.element = element
        self.location = location
        self.updater = updater
        self._busy = False

    @property
    def busy(self) -> bool:
        """True while a request is outstanding."""
        return self._busy

    @property
    def layers(self) -> Sequence[Layer]:
        return self.element.layers

    def commit(self, layers: Sequence[Layer], action: str = "update") -> ElementConfiguration:
        """Persist the element with a new layer sequence.

        Args:
            layers: Complete new layer sequence.
            action: Label used in log messages.

        Returns:
            The element as stored by the collaborator, now also held in
            self.element.

        Raises:
            OperationInProgressError: If another commit is running.
            PersistenceError: If the collaborator fails; self.element is
                left untouched.
        """
        if self._busy:
            raise OperationInProgressError(
                f"Cannot {action} layers: a request is already in progress"
            )

        candidate = self.element.with_layers(layers)
        loc = self.location
        self._busy = True
        try:
            logger.info(f"Persisting element {loc.element_id} ({action}, {len(candidate.layers)} layers)")
            try:
                result = self.updater.update_element(
                    loc.project_id, loc.type_id, loc.space_id, loc.element_id,
                    candidate.to_dict(),
                )
            except Exception as e:
                logger.error(f"Element update raised during {action}: {str(e)}\n{traceback.format_exc()}")
                raise PersistenceError(f"Failed to {action} layers: {str(e)}") from e

            if not result.success:
                message = result.message or "Element update failed"
                logger.warning(f"Element update rejected during {action}: {message}")
                raise PersistenceError(message)

            self.element = self._stored_element(result.data, candidate)
            return self.element
        finally:
            self._busy = False

    @staticmethod
    def _stored_element(data: Optional[dict], fallback: ElementConfiguration) -> ElementConfiguration:
        # The server is the source of truth; keep the sent element if it echoed nothing
        if not data:
            return fallback
        return ElementConfiguration.from_dict(data)
