# File: src/building_compliance/catalog/__init__.py
"""
Material catalog and the queries behind the cascading layer selection.

Usage:
    from building_compliance.catalog import available_makers, resolve_entry
"""

from building_compliance.catalog.entries import (
    CATALOG_BY_ID,
    LAYER_CATALOG,
    LayerCatalogEntry,
)
from building_compliance.catalog.queries import (
    CONCRETE_OUTSIDE_ISOLATION_IDS,
    available_makers,
    available_products,
    available_substances,
    catalog_for_context,
    get_entry,
    requires_allow_list,
    resolve_entry,
    thickness_in_range,
)

__all__ = [
    "CATALOG_BY_ID",
    "LAYER_CATALOG",
    "LayerCatalogEntry",
    "CONCRETE_OUTSIDE_ISOLATION_IDS",
    "available_makers",
    "available_products",
    "available_substances",
    "catalog_for_context",
    "get_entry",
    "requires_allow_list",
    "resolve_entry",
    "thickness_in_range",
]
