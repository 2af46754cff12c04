# File: src/building_compliance/layers/editor.py

"""Layer editing state machine.

The editor is either IDLE or EDITING one layer, in "add" or "edit" mode.
While editing, every field change re-derives the fields below it:

    substance -> maker -> product -> thickness / conductivity / mass

Changing the substance or maker clears everything downstream; choosing a
product resolves the catalog entry and fills in its minimum thickness,
conductivity and mass. The layer name is never touched by these resets.

Saving validates the selection and the thickness range, then persists the
whole element through the session. Validation and persistence failures
leave the editor EDITING with its data intact.

Usage:
    editor = LayerEditor(session)
    editor.open_add()
    editor.set_substance("polystyrene")
    editor.set_maker("Kalkar")
    editor.set_product("EPS facade board")
    editor.set_thickness("4")
    element = editor.save()
"""

import uuid
from dataclasses import replace
from enum import Enum
from typing import Any, Callable, List, Optional

from building_compliance.catalog.entries import LayerCatalogEntry
from building_compliance.catalog.queries import (
    available_makers,
    available_products,
    available_substances,
    resolve_entry,
    thickness_in_range,
)
from building_compliance.layers.errors import EditorStateError, LayerValidationError
from building_compliance.layers.layer import ElementConfiguration, Layer, LayerGroup
from building_compliance.layers.session import ElementSession
from building_compliance.utils.logging_config import get_logger

logger = get_logger(__name__)


class EditorState(Enum):
    """Whether a layer dialog is open."""

    IDLE = "idle"
    EDITING = "editing"


class EditMode(Enum):
    """What saving an edited layer does to the layer sequence."""

    ADD = "add"
    """Append a new layer."""

    EDIT = "edit"
    """Replace the edited layer in place, found by its id."""


def parse_thickness(raw: Any) -> float:
    """Parse a user-entered thickness, 0.0 when it is not a number."""
    try:
        return float(raw)
    except (TypeError, ValueError):
        return 0.0


def _new_layer_id() -> str:
    return str(uuid.uuid4())


class LayerEditor:
    """Editing buffer for one layer of a session's element.

    Attributes:
        session: Element session the edited layer belongs to.
        state: IDLE or EDITING.
        mode: ADD or EDIT while editing, None when idle.
        edit_index: Index of the edited layer in EDIT mode.
        data: Layer being edited.
        selected_entry: Catalog entry resolved from the current selection.
    """

    def __init__(self, session: ElementSession, id_factory: Optional[Callable[[], str]] = None):
        self.session = session
        self._id_factory = id_factory or _new_layer_id
        self._reset()

    def _reset(self) -> None:
        self.state = EditorState.IDLE
        self.mode: Optional[EditMode] = None
        self.edit_index: Optional[int] = None
        self.data: Optional[Layer] = None
        self.selected_entry: Optional[LayerCatalogEntry] = None

    @property
    def element(self) -> ElementConfiguration:
        return self.session.element

    @property
    def is_open(self) -> bool:
        return self.state is EditorState.EDITING

    def _require_editing(self) -> Layer:
        if self.state is not EditorState.EDITING or self.data is None:
            raise EditorStateError("No layer is being edited")
        return self.data

    # -------------------------------------------------------------------------
    # Opening and closing
    # -------------------------------------------------------------------------

    def open_add(self) -> Layer:
        """Start a new layer with a generated id and a positional name."""
        if self.is_open:
            raise EditorStateError("A layer is already being edited")
        position = len(self.element.layers)
        self.state = EditorState.EDITING
        self.mode = EditMode.ADD
        self.edit_index = None
        self.data = Layer(
            id=self._id_factory(),
            name=f"Layer {position + 1}",
            group=LayerGroup.OUTER_COVER.value,
        )
        self.selected_entry = None
        logger.debug(f"Adding layer {self.data.id} to element {self.session.location.element_id}")
        return self.data

    def open_edit(self, index: int) -> Layer:
        """Start editing the layer at an absolute index."""
        if self.is_open:
            raise EditorStateError("A layer is already being edited")
        layers = self.element.layers
        if not 0 <= index < len(layers):
            raise EditorStateError(f"No layer at index {index}")
        layer = replace(layers[index])
        if not layer.group:
            layer.group = LayerGroup.OUTER_COVER.value
        self.state = EditorState.EDITING
        self.mode = EditMode.EDIT
        self.edit_index = index
        self.data = layer
        self.selected_entry = resolve_entry(layer.substance, layer.maker, layer.product, self.element)
        logger.debug(f"Editing layer {layer.id} at index {index}")
        return self.data

    def cancel(self) -> None:
        """Close the dialog without saving."""
        self._reset()

    # -------------------------------------------------------------------------
    # Derived option lists
    # -------------------------------------------------------------------------

    @property
    def available_substances(self) -> List[str]:
        return available_substances(self.element)

    @property
    def available_makers(self) -> List[str]:
        if self.data is None:
            return []
        return available_makers(self.data.substance, self.element)

    @property
    def available_products(self) -> List[str]:
        if self.data is None:
            return []
        return available_products(self.data.substance, self.data.maker, self.element)

    # -------------------------------------------------------------------------
    # Field changes
    # -------------------------------------------------------------------------

    def set_name(self, name: str) -> Layer:
        data = self._require_editing()
        self.data = replace(data, name=name or "")
        return self.data

    def set_group(self, group: int) -> Layer:
        data = self._require_editing()
        self.data = replace(data, group=LayerGroup(int(group)).value)
        return self.data

    def set_substance(self, substance: Optional[str]) -> Layer:
        """Choose a substance; clears maker, product and the derived values."""
        data = self._require_editing()
        self.selected_entry = None
        self.data = replace(
            data,
            substance=substance or "",
            maker="",
            product="",
            thickness=0.0,
            thermal_conductivity=0.0,
            mass=0.0,
        )
        logger.trace(f"substance={self.data.substance!r}")
        return self.data

    def set_maker(self, maker: Optional[str]) -> Layer:
        """Choose a maker; clears product and the derived values."""
        data = self._require_editing()
        self.selected_entry = None
        self.data = replace(
            data,
            maker=maker or "",
            product="",
            thickness=0.0,
            thermal_conductivity=0.0,
            mass=0.0,
        )
        logger.trace(f"maker={self.data.maker!r}")
        return self.data

    def set_product(self, product: Optional[str]) -> Layer:
        """Choose a product and take over the catalog entry's values."""
        data = self._require_editing()
        product = product or ""
        entry = resolve_entry(data.substance, data.maker, product, self.element) if product else None
        self.selected_entry = entry
        self.data = replace(
            data,
            product=product,
            thickness=entry.min_thickness if entry else 0.0,
            thermal_conductivity=entry.thermal_conductivity if entry else 0.0,
            mass=entry.mass if entry else 0.0,
        )
        logger.trace(f"product={product!r} resolved={entry.id if entry else None}")
        return self.data

    def set_thickness(self, raw: Any) -> Layer:
        """Set the thickness from raw input; unparsable input becomes 0."""
        data = self._require_editing()
        self.data = replace(data, thickness=parse_thickness(raw))
        return self.data

    # -------------------------------------------------------------------------
    # Validation and saving
    # -------------------------------------------------------------------------

    def validate(self) -> LayerCatalogEntry:
        """Check the current data can be saved.

        Returns:
            The resolved catalog entry.

        Raises:
            LayerValidationError: For an unresolved selection, a missing or
                non-positive thickness, or a thickness outside the entry's range.
        """
        data = self._require_editing()
        entry = resolve_entry(data.substance, data.maker, data.product, self.element)
        self.selected_entry = entry

        if entry is None:
            raise LayerValidationError(
                "product",
                "Select a valid substance, maker and product",
                code="invalid_selection",
            )
        if not data.thickness > 0:
            raise LayerValidationError("thickness", "Thickness is required", code="thickness_required")
        if not thickness_in_range(entry, data.thickness):
            raise LayerValidationError(
                "thickness",
                f"Thickness must be between {entry.min_thickness} and {entry.max_thickness} cm",
                code="thickness_range",
            )
        return entry

    def build_layer(self) -> Layer:
        """The layer as it would be persisted (validated, values from the catalog)."""
        entry = self.validate()
        return replace(
            self.data,
            thermal_conductivity=entry.thermal_conductivity,
            mass=entry.mass,
        )

    def save(self) -> ElementConfiguration:
        """Validate, splice the layer into the sequence and persist the element.

        Returns:
            The stored element.

        Raises:
            LayerValidationError: The layer is not valid; nothing changes.
            PersistenceError: The update failed; the editor stays open.
            OperationInProgressError: Another request is outstanding.
            EditorStateError: The edited layer was removed from the element.
        """
        try:
            layer = self.build_layer()
        except LayerValidationError as e:
            logger.warning(f"Layer not saved ({e.code}): {str(e)}")
            raise

        layers = list(self.element.layers)
        if self.mode is EditMode.EDIT:
            # the list may have moved or deleted layers since open_edit
            index = next((i for i, existing in enumerate(layers) if existing.id == layer.id), None)
            if index is None:
                raise EditorStateError(f"Layer {layer.id} is no longer part of the element")
            self.edit_index = index
            layers[index] = layer
        else:
            if not layer.id:
                layer.id = self._id_factory()
            layers.append(layer)

        stored = self.session.commit(layers, action=self.mode.value)
        logger.info(f"Layer {layer.id} saved ({self.mode.value})")
        self._reset()
        return stored
