# File: api/endpoints/elements.py
from fastapi import APIRouter, status
from datetime import datetime
import uuid

from building_compliance.compliance import check_compliance
from building_compliance.config import ElementConfigurationError, validate_element
from building_compliance.layers import ElementConfiguration
from api.models.element_models import ElementInput, ElementResponse
from api.utils.db import (
    clear_elements,
    create_element,
    delete_element,
    get_element,
    list_elements,
    update_element,
)
from api.utils.errors import (
    DatabaseError,
    ResourceNotFoundError,
    ValidationError,
    handle_exception,
)
from api.utils.logging import api_logger as logger

router = APIRouter()

def _check_configuration(element: ElementInput) -> None:
    """Reject elements that break the configuration rules with their message."""
    try:
        validate_element(element.model_dump())
    except ElementConfigurationError as e:
        logger.info(f"Element rejected: {e}")
        raise ValidationError(str(e), field=e.field).to_http_exception()

def _get_or_404(project_id: str, type_id: str, space_id: str, element_id: str):
    stored = get_element(project_id, type_id, space_id, element_id)
    if not stored:
        raise ResourceNotFoundError("element", element_id).to_http_exception()
    return stored

@router.get("", response_model=ElementResponse)
async def get_space_elements(project_id: str, type_id: str, space_id: str):
    """List all elements of a space."""
    try:
        elements = list_elements(project_id, type_id, space_id)
    except RuntimeError as e:
        raise DatabaseError("list", str(e)).to_http_exception()
    return ElementResponse(success=True, data=elements, message=f"{len(elements)} elements")

@router.post("/create", response_model=ElementResponse, status_code=status.HTTP_201_CREATED)
async def create_space_element(
    project_id: str, type_id: str, space_id: str, element: ElementInput
):
    """
    Create an element in a space.

    Outside walls need their cover, build method, isolation method (when
    the build method has any) and coverage.
    """
    _check_configuration(element)

    now = datetime.now().isoformat()
    record = element.model_dump()
    record.update({
        "element_id": str(uuid.uuid4()),
        "project_id": project_id,
        "type_id": type_id,
        "space_id": space_id,
        "created_at": now,
        "updated_at": now,
    })

    stored = create_element(record)
    if not stored:
        raise DatabaseError("create", "no row returned").to_http_exception()

    logger.info(f"Created element {record['element_id']} with {len(element.layers)} layers")
    return ElementResponse(success=True, data=stored, message="Element created successfully")

@router.delete("/clear", response_model=ElementResponse)
async def clear_space_elements(project_id: str, type_id: str, space_id: str):
    """Delete every element of a space."""
    try:
        deleted = clear_elements(project_id, type_id, space_id)
    except RuntimeError as e:
        raise DatabaseError("clear", str(e)).to_http_exception()
    return ElementResponse(
        success=True, data={"deleted": deleted}, message="All elements cleared successfully"
    )

@router.get("/{element_id}", response_model=ElementResponse)
async def get_space_element(project_id: str, type_id: str, space_id: str, element_id: str):
    """Get one element, layers included."""
    stored = _get_or_404(project_id, type_id, space_id, element_id)
    return ElementResponse(success=True, data=stored)

@router.put("/{element_id}", response_model=ElementResponse)
async def update_space_element(
    project_id: str, type_id: str, space_id: str, element_id: str, element: ElementInput
):
    """
    Replace an element with the full data sent.

    This is the endpoint behind every layer save, delete and reorder;
    the response carries the stored element.
    """
    _check_configuration(element)
    _get_or_404(project_id, type_id, space_id, element_id)

    stored = update_element(project_id, type_id, space_id, element_id, element.model_dump())
    if not stored:
        raise DatabaseError("update", f"no row returned for {element_id}").to_http_exception()

    return ElementResponse(success=True, data=stored, message="Element updated successfully")

@router.delete("/{element_id}", response_model=ElementResponse)
async def delete_space_element(project_id: str, type_id: str, space_id: str, element_id: str):
    """Delete one element."""
    _get_or_404(project_id, type_id, space_id, element_id)
    if not delete_element(project_id, type_id, space_id, element_id):
        raise DatabaseError("delete", f"no row removed for {element_id}").to_http_exception()
    return ElementResponse(success=True, message="Element deleted successfully")

@router.post("/{element_id}/compliance-check", response_model=ElementResponse)
async def run_compliance_check(project_id: str, type_id: str, space_id: str, element_id: str):
    """Check the thermal compliance of an element's build-up."""
    stored = _get_or_404(project_id, type_id, space_id, element_id)

    try:
        result = check_compliance(ElementConfiguration.from_dict(stored))
    except Exception as e:
        raise handle_exception(e, "element", element_id)

    return ElementResponse(success=True, data=result.to_dict())
