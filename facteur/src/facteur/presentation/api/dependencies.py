"""
FastAPI dependencies for Facteur API.

Provides dependency injection for routes.
"""

from typing import Optional

from fastapi import Depends, Query, WebSocket, WebSocketException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from facteur.di import Container
from facteur.domain.auth import TokenPayload
from facteur.domain.exceptions import AuthenticationError, MissingCredentialError

# Global container (initialized in main.py)
_container: Optional[Container] = None

# Bearer token security scheme; missing headers are reported by the
# exception handler instead of FastAPI's default 403
security = HTTPBearer(auto_error=False)


def get_container() -> Container:
    """
    Get DI container instance.

    Raises:
        RuntimeError: If container not initialized
    """
    if _container is None:
        raise RuntimeError("Container not initialized")
    return _container


def set_container(container: Optional[Container]) -> None:
    """
    Set DI container (called from main.py and tests).

    Args:
        container: Container instance to set globally
    """
    global _container
    _container = container


async def authenticate_websocket(
    websocket: WebSocket,
    token: Optional[str] = Query(None),
    container: Container = Depends(get_container),
) -> TokenPayload:
    """
    Authenticate a WebSocket handshake.

    The token travels in the query string. On failure the handshake is
    refused with a policy-violation close before the socket is accepted.

    Returns:
        Verified TokenPayload
    """
    try:
        return container.get_authenticate_use_case().verify(token)
    except AuthenticationError as e:
        container.increment_stat("auth_failures")
        container.reporter.warning(
            f"WebSocket handshake rejected: {e.code} "
            f"[client={websocket.client.host if websocket.client else '?'}]",
            context="WebSocket",
            verbose_level=1,
        )
        raise WebSocketException(
            code=status.WS_1008_POLICY_VIOLATION,
            reason=e.message,
        )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    container: Container = Depends(get_container),
) -> TokenPayload:
    """
    Extract and verify the bearer token of an HTTP request.

    Raises:
        MissingCredentialError: No Authorization header
        InvalidCredentialError: Token rejected
    """
    if credentials is None:
        container.increment_stat("auth_failures")
        raise MissingCredentialError()

    try:
        payload = container.get_authenticate_use_case().verify(credentials.credentials)
    except AuthenticationError:
        container.increment_stat("auth_failures")
        raise

    if container.settings.auto_provision_users:
        await container.get_relationship_use_case().ensure_user(
            payload.user_id, payload.username
        )
    return payload


async def get_current_user_id(
    payload: TokenPayload = Depends(get_current_user),
) -> str:
    """Authenticated user id of an HTTP request."""
    return payload.user_id
