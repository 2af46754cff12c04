# File: api/endpoints/catalog.py
from fastapi import APIRouter
from typing import Dict, List, Any, Optional

from building_compliance.catalog import (
    available_makers,
    available_products,
    available_substances,
    catalog_for_context,
    resolve_entry,
)
from api.utils.errors import ResourceNotFoundError
from api.utils.logging import api_logger as logger

router = APIRouter()

def _context(build_method: Optional[str], build_method_isolation: Optional[str]) -> Dict[str, Optional[str]]:
    return {"build_method": build_method, "build_method_isolation": build_method_isolation}

@router.get("/entries", response_model=List[Dict[str, Any]])
async def list_entries(
    build_method: Optional[str] = None,
    build_method_isolation: Optional[str] = None
):
    """List the catalog entries usable for an element context."""
    entries = catalog_for_context(_context(build_method, build_method_isolation))
    return [entry.to_dict() for entry in entries]

@router.get("/substances", response_model=List[str])
async def list_substances(
    build_method: Optional[str] = None,
    build_method_isolation: Optional[str] = None
):
    """Substances selectable for an element context."""
    return available_substances(_context(build_method, build_method_isolation))

@router.get("/makers", response_model=List[str])
async def list_makers(
    substance: str,
    build_method: Optional[str] = None,
    build_method_isolation: Optional[str] = None
):
    """Makers offering a substance."""
    return available_makers(substance, _context(build_method, build_method_isolation))

@router.get("/products", response_model=List[str])
async def list_products(
    substance: str,
    maker: str,
    build_method: Optional[str] = None,
    build_method_isolation: Optional[str] = None
):
    """Products of a maker for a substance."""
    return available_products(substance, maker, _context(build_method, build_method_isolation))

@router.get("/entry", response_model=Dict[str, Any])
async def get_catalog_entry(
    substance: str,
    maker: str,
    product: str,
    build_method: Optional[str] = None,
    build_method_isolation: Optional[str] = None
):
    """
    Resolve a full selection to its catalog entry.
    
    Returns 404 when the triple is unknown or not usable in the context.
    """
    entry = resolve_entry(substance, maker, product, _context(build_method, build_method_isolation))
    if entry is None:
        logger.info(f"Catalog entry not resolved: {substance} / {maker} / {product}")
        raise ResourceNotFoundError(
            "catalog entry", f"{substance}/{maker}/{product}"
        ).to_http_exception()
    return entry.to_dict()
