"""
Global error handling middleware.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from facteur.domain.exceptions import FacteurError, InvalidPayloadError

STATUS_CODE_MAP = {
    "MISSING_CREDENTIAL": status.HTTP_401_UNAUTHORIZED,
    "INVALID_CREDENTIAL": status.HTTP_401_UNAUTHORIZED,
    "TOKEN_EXPIRED": status.HTTP_401_UNAUTHORIZED,
    "AUTHENTICATION_ERROR": status.HTTP_401_UNAUTHORIZED,
    "INVALID_PAYLOAD": status.HTTP_400_BAD_REQUEST,
    "SELF_RELATIONSHIP": status.HTTP_400_BAD_REQUEST,
    "UNKNOWN_USER": status.HTTP_404_NOT_FOUND,
    "NO_SUCH_REQUEST": status.HTTP_404_NOT_FOUND,
    "ALREADY_PENDING": status.HTTP_409_CONFLICT,
    "ALREADY_CONTACTS": status.HTTP_409_CONFLICT,
    "STORAGE_FAILURE": status.HTTP_503_SERVICE_UNAVAILABLE,
    "STORAGE_ERROR": status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def facteur_exception_handler(
    request: Request, exc: FacteurError
) -> JSONResponse:
    """
    Handle Facteur domain exceptions.

    Converts domain exceptions to appropriate HTTP responses.
    """
    status_code = STATUS_CODE_MAP.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    content = {
        "error": exc.code,
        "message": exc.message,
    }
    if isinstance(exc, InvalidPayloadError):
        content["errors"] = exc.errors

    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(status_code=status_code, content=content, headers=headers)
