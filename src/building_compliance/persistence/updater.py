# File: src/building_compliance/persistence/updater.py

"""Contract of the element persistence collaborator.

The layer editor never talks to storage directly. It hands the complete
element (never a delta) to an ElementUpdater and gets back an
UpdateResult: on success the returned data is the new source of truth.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol


@dataclass(frozen=True)
class ElementLocation:
    """Where an element lives: project / building type / space / element ids."""

    project_id: str
    type_id: str
    space_id: str
    element_id: str

    @property
    def path(self) -> str:
        """REST path of the element."""
        return (
            f"/projects/{self.project_id}/types/{self.type_id}"
            f"/spaces/{self.space_id}/elements/{self.element_id}"
        )


@dataclass
class UpdateResult:
    """Outcome of an element update.

    Attributes:
        success: Whether the update was stored.
        data: The stored element as returned by the server.
        message: Error description when success is False.
    """

    success: bool
    data: Optional[Dict[str, Any]] = None
    message: Optional[str] = None

    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> "UpdateResult":
        """Build from a {success, data, message} response body."""
        return cls(
            success=bool(payload.get("success")),
            data=payload.get("data"),
            message=payload.get("message"),
        )


class ElementUpdater(Protocol):
    """Anything that can store a full element."""

    def update_element(
        self,
        project_id: str,
        type_id: str,
        space_id: str,
        element_id: str,
        element_data: Dict[str, Any],
    ) -> UpdateResult:
        ...
