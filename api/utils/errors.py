# api/utils/errors.py
"""
Error responses of the compliance API.

Every error body has the shape {"detail": {"detail", "code", "extra"}} so
clients can show the message and branch on the code. Rule violations from
building_compliance.config become 400 responses with their message intact.
"""
from fastapi import HTTPException, status
from typing import Optional, Dict, Any
import traceback

from building_compliance.config import ElementConfigurationError, InvalidSelectionError
from api.utils.logging import api_logger as logger

class APIError(Exception):
    """An error with an HTTP status and a machine-readable code."""
    def __init__(
        self,
        status_code: int,
        detail: str,
        internal_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None
    ):
        self.status_code = status_code
        self.detail = detail
        self.internal_code = internal_code
        self.extra = extra or {}
        super().__init__(detail)

    def to_http_exception(self) -> HTTPException:
        body: Dict[str, Any] = {"detail": self.detail}
        if self.internal_code:
            body["code"] = self.internal_code
        if self.extra:
            body["extra"] = self.extra
        return HTTPException(status_code=self.status_code, detail=body)

class ResourceNotFoundError(APIError):
    """404 for an unknown element, element type or catalog entry."""
    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        extra: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource_type.capitalize()} with ID '{resource_id}' not found",
            internal_code="resource_not_found",
            extra=extra
        )

class DatabaseError(APIError):
    """500 for a failed read or write of the elements table."""
    def __init__(
        self,
        operation: str,
        detail: str,
        extra: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Element {operation} failed: {detail}",
            internal_code="database_error",
            extra=extra
        )

class ValidationError(APIError):
    """
    400 for an element that breaks the configuration rules.

    The message is shown to the user as is; the offending field goes
    into extra.
    """
    def __init__(
        self,
        detail: str,
        field: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None
    ):
        extra = dict(extra or {})
        if field:
            extra["field"] = field
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            internal_code="validation_error",
            extra=extra
        )

def handle_exception(e: Exception, resource_type: str = "element", resource_id: Optional[str] = None) -> HTTPException:
    """
    Map an exception raised while serving a request to an HTTPException.

    Configuration errors become 400 validation errors (an invalid cascade
    selection also lists the allowed values). Anything unexpected is logged
    with its traceback and returned as a 500.
    """
    if isinstance(e, APIError):
        return e.to_http_exception()
    if isinstance(e, HTTPException):
        return e

    if isinstance(e, ElementConfigurationError):
        return ValidationError(str(e), field=e.field).to_http_exception()
    if isinstance(e, InvalidSelectionError):
        return ValidationError(
            str(e), field=e.field, extra={"allowed": list(e.allowed)}
        ).to_http_exception()

    logger.error(f"Unhandled error on {resource_type} {resource_id or ''}: {str(e)}\n{traceback.format_exc()}")
    body: Dict[str, Any] = {
        "detail": f"Unexpected error: {str(e)}",
        "code": "internal_server_error",
        "resource_type": resource_type,
    }
    if resource_id:
        body["resource_id"] = resource_id
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=body)
