# File: api/endpoints/rules.py
from fastapi import APIRouter
from typing import Dict, List

from building_compliance.config import (
    BuildMethod,
    ELEMENT_CASCADE,
    InvalidSelectionError,
    apply_change,
    available_options,
    build_methods_for,
    configuration_values,
    element_types,
    isolation_methods_for,
    missing_fields,
    outside_covers,
    sub_types_for,
)
from api.models.element_models import TransitionRequest, TransitionResponse
from api.utils.config import Config
from api.utils.errors import ResourceNotFoundError, ValidationError, handle_exception
from api.utils.logging import api_logger as logger

router = APIRouter()

@router.get("/element-types", response_model=List[str])
async def list_element_types():
    return element_types()

@router.get("/sub-types/{element_type}", response_model=List[str])
async def list_sub_types(element_type: str):
    """Sub-types of an element type (empty for a thermal bridge)."""
    if element_type not in element_types():
        raise ResourceNotFoundError("element type", element_type).to_http_exception()
    return sub_types_for(element_type)

@router.get("/outside-covers", response_model=List[str])
async def list_outside_covers():
    return outside_covers()

@router.get("/build-methods", response_model=Dict[str, List[str]])
async def list_build_methods():
    """Build methods allowed with each outside cover."""
    return {cover: build_methods_for(cover) for cover in outside_covers()}

@router.get("/isolation-methods", response_model=Dict[str, List[str]])
async def list_isolation_methods():
    """Isolation methods of each build method; an empty list means the step is skipped."""
    return {method.value: isolation_methods_for(method) for method in BuildMethod}

@router.get("/layer-settings", response_model=Dict[str, int])
async def layer_settings():
    """Layer list settings clients page with."""
    return {"page_size": Config.LAYER_PAGE_SIZE}

@router.post("/transition", response_model=TransitionResponse)
async def apply_transition(request: TransitionRequest):
    """
    Apply one configuration change.
    
    Stale values are reset before the change is applied. Fields below the
    changed one are re-derived: the sub-type jumps to the
    first option of a new type, a new cover clears the build method, and a
    build method with a single isolation method selects it.
    """
    if request.field not in ELEMENT_CASCADE.fields:
        raise ValidationError(
            f"Unknown configuration field: {request.field}", field=request.field
        ).to_http_exception()
    
    try:
        current = ELEMENT_CASCADE.normalize(configuration_values(request.values))
        values = apply_change(current, request.field, request.value)
    except InvalidSelectionError as e:
        logger.info(f"Rejected transition {request.field}={request.value!r}: {e}")
        raise handle_exception(e, "configuration")
    
    values = {field: values.get(field) for field in ELEMENT_CASCADE.fields}
    return TransitionResponse(
        values=values,
        options=available_options(values),
        missing=missing_fields(values),
    )
