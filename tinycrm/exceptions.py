"""
RFC 7807 Problem Details exception handling.

Every error leaves the API as an ``application/problem+json`` body. Three
kinds are distinguished: client input errors (400), unknown records (404)
and everything else, including store failures and referential integrity
violations (500, with the underlying message).

See: https://datatracker.ietf.org/doc/html/rfc7807
"""

from typing import Optional, Dict, Any, List
from enum import Enum
from pydantic import BaseModel, Field
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uuid
from datetime import datetime, timezone

from tinycrm.middleware.correlation import get_request_id

logger = logging.getLogger(__name__)


def _get_trace_id() -> str:
    """Get trace ID from correlation context or generate a new one."""
    request_id = get_request_id()
    if request_id and request_id != "unknown":
        return request_id
    return str(uuid.uuid4())[:12]


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


class ErrorCode(str, Enum):
    """Standardized error codes for the API."""

    # Authentication
    UNAUTHORIZED = "AUTH_001"

    # Validation
    VALIDATION_ERROR = "VAL_001"
    INVALID_FORMAT = "VAL_002"
    CLIENT_ERROR = "VAL_003"

    # Resource
    NOT_FOUND = "RES_001"
    METHOD_NOT_ALLOWED = "RES_002"

    # Persistence
    DATABASE_ERROR = "DB_001"
    INTEGRITY_VIOLATION = "DB_002"

    # Server
    INTERNAL_ERROR = "SRV_001"
    TEMPLATE_ERROR = "SRV_002"


class ProblemDetail(BaseModel):
    """
    RFC 7807 Problem Details response schema.

    Attributes:
        type: URI reference identifying the problem type
        title: Short, human-readable summary
        status: HTTP status code
        detail: Human-readable explanation specific to this occurrence
        instance: Request path that produced the problem
        code: Machine-readable error code for client handling
        timestamp: ISO 8601 timestamp of when the error occurred
        trace_id: Request id for finding the matching log lines
        errors: List of field-level validation errors (for 400)
    """

    type: str = Field(default="about:blank")
    title: str
    status: int
    detail: str
    instance: Optional[str] = None
    code: str
    timestamp: str
    trace_id: str
    errors: Optional[List[Dict[str, Any]]] = None


def _problem_type(code: ErrorCode) -> str:
    return f"urn:tinycrm:problem:{code.value.lower().replace('_', '-')}"


class TinyCRMException(HTTPException):
    """
    Base exception for the API with RFC 7807 support.

    Usage:
        raise TinyCRMException(
            status_code=404,
            code=ErrorCode.NOT_FOUND,
            detail="Invoice with ID 12 was not found",
        )
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        title: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.code = code
        self.title = title or self._default_title(status_code)
        self.errors = errors
        self.trace_id = _get_trace_id()
        self.timestamp = _timestamp()

        super().__init__(status_code=status_code, detail=detail, headers=headers)

    @staticmethod
    def _default_title(status_code: int) -> str:
        titles = {
            400: "Bad Request",
            401: "Unauthorized",
            404: "Not Found",
            405: "Method Not Allowed",
            500: "Internal Server Error",
        }
        return titles.get(status_code, "Error")

    def to_problem_detail(self, instance: Optional[str] = None) -> ProblemDetail:
        return ProblemDetail(
            type=_problem_type(self.code),
            title=self.title,
            status=self.status_code,
            detail=self.detail,
            instance=instance,
            code=self.code.value,
            timestamp=self.timestamp,
            trace_id=self.trace_id,
            errors=self.errors,
        )


# Convenience exception classes

class BadRequestError(TinyCRMException):
    """Malformed client input (400)."""

    def __init__(self, detail: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(
            status_code=400,
            code=ErrorCode.INVALID_FORMAT,
            detail=detail,
            errors=errors,
        )


class UnauthorizedError(TinyCRMException):
    """Missing or invalid Basic credentials (401)."""

    def __init__(self, realm: str, detail: str = "Unauthorized"):
        super().__init__(
            status_code=401,
            code=ErrorCode.UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": f'Basic realm="{realm}"'},
        )


class NotFoundError(TinyCRMException):
    """Resource not found (404)."""

    def __init__(self, resource: str, resource_id: Any):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            status_code=404,
            code=ErrorCode.NOT_FOUND,
            detail=f"{resource} with ID {resource_id} was not found",
        )


class PersistenceError(TinyCRMException):
    """The store rejected or failed an operation (500)."""

    def __init__(self, detail: str, code: ErrorCode = ErrorCode.DATABASE_ERROR):
        super().__init__(status_code=500, code=code, detail=detail)


class IntegrityViolationError(PersistenceError):
    """A cascade/restrict rule or a foreign key would be broken (500)."""

    def __init__(self, detail: str):
        super().__init__(detail=detail, code=ErrorCode.INTEGRITY_VIOLATION)


class TemplateRenderError(TinyCRMException):
    """An invoice template is missing its directory or failed to render (500)."""

    def __init__(self, detail: str):
        super().__init__(status_code=500, code=ErrorCode.TEMPLATE_ERROR, detail=detail)


# Exception handlers for FastAPI

def create_problem_response(
    status_code: int,
    code: ErrorCode,
    detail: str,
    request: Request,
    errors: Optional[List[Dict[str, Any]]] = None,
    trace_id: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Create a RFC 7807 compliant JSON response."""
    problem = ProblemDetail(
        type=_problem_type(code),
        title=TinyCRMException._default_title(status_code),
        status=status_code,
        detail=detail,
        instance=str(request.url.path),
        code=code.value,
        timestamp=_timestamp(),
        trace_id=trace_id or _get_trace_id(),
        errors=errors,
    )
    return JSONResponse(
        status_code=status_code,
        content=problem.model_dump(exclude_none=True),
        media_type="application/problem+json",
        headers=headers,
    )


async def handle_crm_exception(request: Request, exc: TinyCRMException) -> JSONResponse:
    """Handle TinyCRMException with RFC 7807 response."""
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "%s %s -> %s %s: %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.code.value,
        exc.detail,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_problem_detail(instance=str(request.url.path)).model_dump(exclude_none=True),
        media_type="application/problem+json",
        headers=exc.headers,
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle framework HTTPExceptions (unknown routes, wrong methods)."""
    code_map = {
        400: ErrorCode.INVALID_FORMAT,
        401: ErrorCode.UNAUTHORIZED,
        404: ErrorCode.NOT_FOUND,
        405: ErrorCode.METHOD_NOT_ALLOWED,
    }
    fallback = ErrorCode.CLIENT_ERROR if exc.status_code < 500 else ErrorCode.INTERNAL_ERROR
    return create_problem_response(
        status_code=exc.status_code,
        code=code_map.get(exc.status_code, fallback),
        detail=str(exc.detail),
        request=request,
        headers=getattr(exc, "headers", None),
    )


async def handle_validation_exception(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON, invalid fields and non-numeric ids all map to 400."""
    errors = []
    for error in exc.errors():
        errors.append({
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        })

    path_errors = [e for e in errors if e["field"].startswith("path.")]
    if path_errors:
        detail = f"Invalid {path_errors[0]['field'].split('.', 1)[1].replace('_', ' ')}"
    else:
        detail = "Request validation failed"

    return create_problem_response(
        status_code=400,
        code=ErrorCode.VALIDATION_ERROR,
        detail=detail,
        request=request,
        errors=errors,
    )


async def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions with RFC 7807 response."""
    trace_id = _get_trace_id()
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)

    # Don't expose internal details in production
    from tinycrm.config import settings
    detail = str(exc) if settings.DEBUG else "An unexpected error occurred"

    return create_problem_response(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=detail,
        request=request,
        trace_id=trace_id,
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(TinyCRMException, handle_crm_exception)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_exception)
    app.add_exception_handler(Exception, handle_generic_exception)
