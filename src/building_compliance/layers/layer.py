# File: src/building_compliance/layers/layer.py

"""Data models for elements and their layer build-up.

Key Types:
    LayerGroup: Which part of the build-up a layer belongs to
    Layer: One material course, resolved against the catalog
    ElementConfiguration: A building element with its ordered layers

Thickness is in cm, thermal conductivity in W/(m*K), mass is the
density of the material in kg/m3.
"""

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence


class LayerGroup(Enum):
    """Part of the wall a layer belongs to."""

    OUTER_COVER = 1
    """Outside cladding and its substrate."""

    CORE = 2
    """Structural core and insulation."""

    INNER_COVER = 3
    """Inside finishes."""


@dataclass
class Layer:
    """One layer of an element's build-up.

    Attributes:
        id: Unique identifier, stable across edits and reorders.
        name: Display label; "Layer N" is used when empty.
        substance: Catalog substance.
        maker: Catalog maker.
        product: Catalog product.
        thickness: Thickness in cm.
        thermal_conductivity: Copied from the catalog entry at save time.
        mass: Copied from the catalog entry at save time.
        group: LayerGroup value (1..3).
    """

    id: str = ""
    name: str = ""
    substance: str = ""
    maker: str = ""
    product: str = ""
    thickness: float = 0.0
    thermal_conductivity: float = 0.0
    mass: float = 0.0
    group: int = LayerGroup.OUTER_COVER.value

    def display_name(self, position: int) -> str:
        """Name to show for the layer at a 0-based position."""
        return self.name or f"Layer {position + 1}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            "id": self.id,
            "name": self.name,
            "substance": self.substance,
            "maker": self.maker,
            "product": self.product,
            "thickness": self.thickness,
            "thermal_conductivity": self.thermal_conductivity,
            "mass": self.mass,
            "group": self.group,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Layer":
        """Build a Layer from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        kwargs = {key: value for key, value in data.items() if key in known and value is not None}
        for numeric in ("thickness", "thermal_conductivity", "mass"):
            if numeric in kwargs:
                kwargs[numeric] = float(kwargs[numeric])
        if "group" in kwargs:
            kwargs["group"] = int(kwargs["group"])
        return cls(**kwargs)


@dataclass
class ElementConfiguration:
    """A building element and its layer build-up.

    The outside wall fields (outside_cover through isolation_coverage)
    are only meaningful for a Wall of sub-type Outside Wall. Layer
    order is the physical order of the build-up.
    """

    type: str = "Wall"
    sub_type: Optional[str] = None
    outside_cover: Optional[str] = None
    build_method: Optional[str] = None
    build_method_isolation: Optional[str] = None
    isolation_coverage: Optional[str] = None
    layers: List[Layer] = field(default_factory=list)
    name: str = ""
    parameters: Dict[str, Any] = field(default_factory=dict)
    element_id: Optional[str] = None
    project_id: Optional[str] = None
    type_id: Optional[str] = None
    space_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def with_layers(self, layers: Sequence[Layer]) -> "ElementConfiguration":
        """Copy of this element with another layer sequence."""
        return replace(self, layers=[replace(layer) for layer in layers])

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the full element, layers included."""
        data = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "layers"}
        data["parameters"] = dict(self.parameters)
        data["layers"] = [layer.to_dict() for layer in self.layers]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ElementConfiguration":
        """Build an element from a dict such as an API response."""
        known = {f.name for f in fields(cls)}
        kwargs = {key: value for key, value in data.items() if key in known and key != "layers"}
        for key in ("created_at", "updated_at"):
            if kwargs.get(key) is not None and not isinstance(kwargs[key], str):
                kwargs[key] = kwargs[key].isoformat()
        if kwargs.get("parameters") is None:
            kwargs["parameters"] = {}
        kwargs["layers"] = [Layer.from_dict(layer) for layer in data.get("layers") or []]
        return cls(**kwargs)
