from fastapi import HTTPException

from rentdesk.services.exceptions import (
    LineItemNotFoundError,
    RecordNotFoundError,
    ServiceError,
    ValidationFailedError,
)


def http_error(exc: ServiceError) -> HTTPException:
    """Translate a service failure into the HTTP status callers expect."""
    if isinstance(exc, (RecordNotFoundError, LineItemNotFoundError)):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, ValidationFailedError):
        return HTTPException(status_code=400, detail=str(exc))
    return HTTPException(status_code=502, detail=str(exc))
