# File: src/building_compliance/layers/__init__.py
"""
Layer build-up of building elements.

This package contains the layer data models, the editing session that
persists an element, the layer editor state machine and the paginated
layer list.

Usage:
    from building_compliance.layers import ElementSession, LayerEditor, LayerList

    session = ElementSession(element, location, api_client)
    editor = LayerEditor(session)
    layer_list = LayerList(session)
"""

from building_compliance.layers.editor import EditMode, EditorState, LayerEditor, parse_thickness
from building_compliance.layers.errors import (
    EditorStateError,
    LayerEditingError,
    LayerValidationError,
    OperationInProgressError,
    PersistenceError,
)
from building_compliance.layers.layer import ElementConfiguration, Layer, LayerGroup
from building_compliance.layers.layer_list import DEFAULT_PAGE_SIZE, LayerList, move_item
from building_compliance.layers.session import ElementSession

__all__ = [
    "EditMode",
    "EditorState",
    "LayerEditor",
    "parse_thickness",
    "EditorStateError",
    "LayerEditingError",
    "LayerValidationError",
    "OperationInProgressError",
    "PersistenceError",
    "ElementConfiguration",
    "Layer",
    "LayerGroup",
    "DEFAULT_PAGE_SIZE",
    "LayerList",
    "move_item",
    "ElementSession",
]
