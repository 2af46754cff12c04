# File: src/building_compliance/catalog/queries.py

"""Catalog query functions for the cascading layer selection.

Given the choices made so far for a layer (substance, then maker, then
product) these functions derive the options still available. They are
pure: the same arguments always give the same answer, in catalog order.

Element context:
    A wall built as concrete with outside isolation only supports the
    products of an external insulation system. For that context the
    catalog is narrowed to CONCRETE_OUTSIDE_ISOLATION_IDS before any
    other filtering. The context can be an ElementConfiguration, a
    mapping with "build_method" / "build_method_isolation" keys, or None.

Usage:
    from building_compliance.catalog.queries import available_makers, resolve_entry

    makers = available_makers("rock wool", {"build_method": "concrete",
                                            "build_method_isolation": "outside isolation"})
    entry = resolve_entry("polystyrene", "Kalkar", "EPS facade board")
"""

from typing import Any, Iterable, List, Optional, Sequence

from building_compliance.catalog.entries import (
    CATALOG_BY_ID,
    LAYER_CATALOG,
    LayerCatalogEntry,
)

# Entry ids usable for concrete walls with outside isolation.
# TODO: replace with a compatibility attribute on the entries once the
# catalog is re-seeded; ids break if the catalog is renumbered.
CONCRETE_OUTSIDE_ISOLATION_IDS = ("27", "28", "29", "30", "31")

RESTRICTED_BUILD_METHOD = "concrete"
RESTRICTED_ISOLATION = "outside isolation"


def _context_value(context: Any, key: str) -> Optional[str]:
    """Read a field from a mapping or an object, unwrapping enums."""
    if context is None:
        return None
    if hasattr(context, "get"):
        value = context.get(key)
    else:
        value = getattr(context, key, None)
    return getattr(value, "value", value)


def requires_allow_list(context: Any) -> bool:
    """True when the element context restricts the catalog."""
    return (
        _context_value(context, "build_method") == RESTRICTED_BUILD_METHOD
        and _context_value(context, "build_method_isolation") == RESTRICTED_ISOLATION
    )


def catalog_for_context(
    context: Any = None,
    catalog: Sequence[LayerCatalogEntry] = LAYER_CATALOG,
) -> List[LayerCatalogEntry]:
    """Return the catalog entries usable in the given element context."""
    if requires_allow_list(context):
        return [entry for entry in catalog if entry.id in CONCRETE_OUTSIDE_ISOLATION_IDS]
    return list(catalog)


def _unique(values: Iterable[str]) -> List[str]:
    """De-duplicate, keeping the order of first occurrence."""
    return list(dict.fromkeys(values))


def available_substances(
    context: Any = None,
    catalog: Sequence[LayerCatalogEntry] = LAYER_CATALOG,
) -> List[str]:
    """List the substances selectable in the given context."""
    return _unique(entry.substance for entry in catalog_for_context(context, catalog))


def available_makers(
    substance: Optional[str],
    context: Any = None,
    catalog: Sequence[LayerCatalogEntry] = LAYER_CATALOG,
) -> List[str]:
    """List the makers offering a substance.

    Args:
        substance: Selected substance; empty or None gives no makers.
        context: Element context (see module docstring).
        catalog: Catalog to query, defaults to LAYER_CATALOG.

    Returns:
        Distinct makers in catalog order.
    """
    if not substance:
        return []
    return _unique(
        entry.maker
        for entry in catalog_for_context(context, catalog)
        if entry.substance == substance
    )


def available_products(
    substance: Optional[str],
    maker: Optional[str],
    context: Any = None,
    catalog: Sequence[LayerCatalogEntry] = LAYER_CATALOG,
) -> List[str]:
    """List the products of a maker for a substance.

    Args:
        substance: Selected substance.
        maker: Selected maker; empty or None gives no products.
        context: Element context (see module docstring).
        catalog: Catalog to query, defaults to LAYER_CATALOG.

    Returns:
        Distinct products in catalog order.
    """
    if not substance or not maker:
        return []
    return _unique(
        entry.product
        for entry in catalog_for_context(context, catalog)
        if entry.substance == substance and entry.maker == maker
    )


def resolve_entry(
    substance: Optional[str],
    maker: Optional[str],
    product: Optional[str],
    context: Any = None,
    catalog: Sequence[LayerCatalogEntry] = LAYER_CATALOG,
) -> Optional[LayerCatalogEntry]:
    """Find the catalog entry for a full selection.

    Returns:
        The matching entry, or None when the triple is incomplete or
        matches nothing in the (context-restricted) catalog.
    """
    if not (substance and maker and product):
        return None
    for entry in catalog_for_context(context, catalog):
        if entry.key == (substance, maker, product):
            return entry
    return None


def get_entry(entry_id: str) -> Optional[LayerCatalogEntry]:
    """Look up a catalog entry by id."""
    return CATALOG_BY_ID.get(str(entry_id))


def thickness_in_range(entry: LayerCatalogEntry, thickness: float) -> bool:
    """Check a thickness against the entry's inclusive range."""
    return entry.min_thickness <= thickness <= entry.max_thickness
