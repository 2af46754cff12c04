# File: src/building_compliance/layers/errors.py

"""Errors raised while editing an element's layers.

Every error is raised after the state of the editor or layer list has
been restored, so callers only need to report it.
"""

from typing import Optional


class LayerEditingError(Exception):
    """Base class for layer editing failures."""


class LayerValidationError(LayerEditingError):
    """A layer cannot be saved as entered.

    Attributes:
        field: Layer field the problem belongs to ("product", "thickness").
        code: Short machine-readable reason.
    """

    def __init__(self, field: str, message: str, code: Optional[str] = None):
        self.field = field
        self.code = code or f"invalid_{field}"
        super().__init__(message)


class PersistenceError(LayerEditingError):
    """The element update collaborator rejected or failed the update."""


class OperationInProgressError(LayerEditingError):
    """A request is already outstanding for this element."""


class EditorStateError(LayerEditingError):
    """The operation is not valid in the editor's current state."""
