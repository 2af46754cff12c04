# File: src/building_compliance/catalog/entries.py

"""Static material catalog for element layers.

Each entry describes one purchasable material product: the substance
category it belongs to, its maker and product line, its thermal
properties and the thickness range it is sold in. The catalog is
reference data: it is built once at import and never mutated.

Units:
    thermal_conductivity: W/(m*K)
    mass: density in kg/m3
    min_thickness / max_thickness: cm

Usage:
    from building_compliance.catalog.entries import LAYER_CATALOG, CATALOG_BY_ID

    entry = CATALOG_BY_ID["27"]
    entry.min_thickness  # 3.0
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class LayerCatalogEntry:
    """One material product that a layer can be built from.

    Attributes:
        id: Unique catalog identifier.
        substance: Material category (e.g. "polystyrene").
        maker: Manufacturer.
        product: Product line of the maker.
        thermal_conductivity: Lambda value in W/(m*K).
        mass: Density in kg/m3.
        min_thickness: Smallest thickness sold, in cm.
        max_thickness: Largest thickness sold, in cm.
    """

    id: str
    substance: str
    maker: str
    product: str
    thermal_conductivity: float
    mass: float
    min_thickness: float
    max_thickness: float

    @property
    def key(self) -> Tuple[str, str, str]:
        """The (substance, maker, product) triple identifying this entry."""
        return (self.substance, self.maker, self.product)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            "id": self.id,
            "substance": self.substance,
            "maker": self.maker,
            "product": self.product,
            "thermal_conductivity": self.thermal_conductivity,
            "mass": self.mass,
            "min_thickness": self.min_thickness,
            "max_thickness": self.max_thickness,
        }


def _entry(id, substance, maker, product, conductivity, mass, min_t, max_t) -> LayerCatalogEntry:
    return LayerCatalogEntry(
        id=id,
        substance=substance,
        maker=maker,
        product=product,
        thermal_conductivity=conductivity,
        mass=mass,
        min_thickness=min_t,
        max_thickness=max_t,
    )


# =============================================================================
# Catalog
# =============================================================================

# Order matters: option lists are presented in order of first occurrence.
LAYER_CATALOG: Tuple[LayerCatalogEntry, ...] = (
    # Structure
    _entry("1", "concrete", "Generic", "Reinforced concrete", 2.5, 2400, 10, 40),
    _entry("2", "concrete", "Generic", "Lightweight concrete", 0.8, 1600, 10, 30),
    _entry("3", "concrete", "Readymix", "Insulating concrete", 0.35, 1000, 5, 20),
    _entry("4", "blocks", "Ytong", "Autoclaved aerated block", 0.12, 500, 10, 30),
    _entry("5", "blocks", "Tikva", "Hollow concrete block", 1.0, 1300, 10, 25),
    _entry("6", "blocks", "Tikva", "Pumice block", 0.45, 1000, 10, 25),
    _entry("7", "blocks", "Ytong", "Thermo block", 0.09, 400, 15, 36.5),
    # Plasters
    _entry("8", "plaster", "Tambour", "Cement plaster", 1.0, 1800, 1, 3),
    _entry("9", "plaster", "Tambour", "Gypsum plaster", 0.5, 1200, 0.5, 2),
    _entry("10", "plaster", "Nirlat", "Thermal plaster", 0.08, 350, 2, 6),
    # Boards
    _entry("11", "gypsum board", "Knauf", "Standard board", 0.25, 900, 1.25, 2.5),
    _entry("12", "gypsum board", "Knauf", "Fire board", 0.25, 900, 1.25, 2.5),
    _entry("13", "gypsum board", "Gyproc", "Moisture board", 0.21, 800, 1.25, 2.5),
    # Insulation
    _entry("14", "rock wool", "Rockwool", "Rockwool slab 60", 0.035, 60, 3, 15),
    _entry("15", "rock wool", "Rockwool", "Rockwool slab 100", 0.037, 100, 3, 15),
    _entry("16", "rock wool", "Isover", "Glass wool roll", 0.04, 20, 5, 20),
    _entry("17", "polystyrene", "Kalkar", "EPS 15", 0.038, 15, 2, 10),
    _entry("18", "polystyrene", "Kalkar", "EPS 20", 0.035, 20, 2, 10),
    _entry("19", "polystyrene", "Isopan", "XPS 30", 0.033, 30, 2, 10),
    _entry("20", "polyurethane", "Polyon", "PUR panel", 0.025, 40, 3, 12),
    # Claddings and finishes
    _entry("21", "stone", "Even Hagalil", "Limestone cladding", 1.7, 2600, 2, 5),
    _entry("22", "stone", "Even Hagalil", "Marble cladding", 2.5, 2700, 2, 4),
    _entry("23", "wood", "Generic", "Pine boards", 0.13, 500, 1.8, 4),
    _entry("24", "wood", "Generic", "OSB board", 0.13, 650, 1.1, 2.5),
    _entry("25", "ceramic", "Negev", "Ceramic tiles", 1.3, 2300, 0.8, 1.5),
    _entry("26", "membrane", "Bitum", "Bituminous membrane", 0.23, 1100, 0.3, 1),
    # External thermal insulation composite system (concrete + outside isolation)
    _entry("27", "polystyrene", "Kalkar", "EPS facade board", 0.04, 12, 3, 6),
    _entry("28", "polystyrene", "Isopan", "XPS facade board", 0.032, 32, 3, 8),
    _entry("29", "rock wool", "Rockwool", "Facade slab", 0.036, 110, 4, 12),
    _entry("30", "plaster", "Nirlat", "Facade base coat", 0.9, 1500, 0.3, 1),
    _entry("31", "plaster", "Nirlat", "Silicone finish coat", 0.7, 1600, 0.15, 0.5),
    # Misc
    _entry("32", "concrete", "Readymix", "Foam concrete", 0.2, 600, 5, 20),
    _entry("33", "blocks", "Ashkelit", "Silicate block", 0.9, 1800, 10, 25),
    _entry("34", "aluminium", "Klil", "Aluminium sheet", 160.0, 2700, 0.1, 0.3),
)


def _index_catalog(entries: Tuple[LayerCatalogEntry, ...]) -> Dict[str, LayerCatalogEntry]:
    """Build the id index and check the catalog invariants."""
    by_id: Dict[str, LayerCatalogEntry] = {}
    seen_keys = set()
    for entry in entries:
        if entry.id in by_id:
            raise ValueError(f"Duplicate catalog id: {entry.id}")
        if entry.key in seen_keys:
            raise ValueError(f"Duplicate catalog entry for {entry.key}")
        if entry.min_thickness > entry.max_thickness:
            raise ValueError(
                f"Catalog entry {entry.id}: min_thickness {entry.min_thickness} "
                f"exceeds max_thickness {entry.max_thickness}"
            )
        by_id[entry.id] = entry
        seen_keys.add(entry.key)
    return by_id


CATALOG_BY_ID: Dict[str, LayerCatalogEntry] = _index_catalog(LAYER_CATALOG)
