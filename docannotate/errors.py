"""Error taxonomy shared by the store, the annotation guard and the routes.

Routes never build error responses themselves; they raise one of these and the
handlers registered in ``docannotate.main`` render ``{"detail", "error"}``.
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class AnnotationError(Exception):
    status_code = 500
    code = "internal_error"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AnnotationError):
    status_code = 400
    code = "validation_error"

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.fields = fields or []


class Unauthorized(AnnotationError):
    status_code = 401
    code = "unauthorized"


class Forbidden(AnnotationError):
    status_code = 403
    code = "forbidden"


class NotFound(AnnotationError):
    status_code = 404
    code = "not_found"


class Conflict(AnnotationError):
    status_code = 409
    code = "conflict"


class PayloadRejected(AnnotationError):
    """Uploaded file unusable: 413 too large, 415 wrong type, 422 no text."""

    status_code = 422
    code = "payload_rejected"


class UpstreamFailure(AnnotationError):
    """Remote fetch failed; 413/415 are used for oversized or non-text bodies."""

    status_code = 502
    code = "upstream_failure"


def _field_name(loc) -> str:
    # drop the "body"/"query"/"path" prefix FastAPI puts in front
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "body"


async def annotation_error_handler(request: Request, exc: AnnotationError) -> JSONResponse:
    content = {"detail": exc.message, "error": exc.code}
    if isinstance(exc, ValidationError) and exc.fields:
        content["fields"] = exc.fields
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = []
    for err in exc.errors():
        name = _field_name(err.get("loc", ()))
        if name not in fields:
            fields.append(name)
    error = ValidationError(f"Invalid fields: {', '.join(fields)}", fields=fields)
    return await annotation_error_handler(request, error)
