"""
WebSocket endpoint: one authenticated session per socket.
"""

import asyncio
import time

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from shared.reporter.emojis import Emoji

from facteur.di import Container
from facteur.domain.auth import TokenPayload
from facteur.domain.entities import Connection
from facteur.domain.events import ErrorEvent, PingEvent, ShutdownEvent
from facteur.domain.exceptions import StorageError
from facteur.infrastructure.websocket import ConnectionLimitExceeded
from facteur.presentation.api.dependencies import (
    authenticate_websocket,
    get_container,
)

router = APIRouter(tags=["websocket"])


@router.websocket("/ws")
async def websocket_endpoint(
    websocket: WebSocket,
    auth_payload: TokenPayload = Depends(authenticate_websocket),
    container: Container = Depends(get_container),
):
    """
    WebSocket endpoint for direct messaging.

    The token is verified once, before the handshake completes. Inbound
    frames are processed one at a time in arrival order; replies go back
    to this socket only, pushes to other users go through the event
    router.

    Connection example:
        - ws://localhost:8770/ws?token=eyJ...
    """
    reporter = container.reporter
    settings = container.settings
    user_id = auth_payload.user_id

    shutdown_manager = container.shutdown_manager
    if shutdown_manager.is_shutting_down():
        reporter.warning(
            f"Connection rejected: server shutting down [user={user_id}]",
            context="WebSocket",
        )
        await websocket.close(
            code=status.WS_1001_GOING_AWAY,
            reason="Server is shutting down",
        )
        return

    if settings.auto_provision_users:
        try:
            await container.get_relationship_use_case().ensure_user(
                user_id, auth_payload.username
            )
        except StorageError as e:
            reporter.error(
                f"{Emoji.ERROR.ERROR} Cannot load user {user_id}: {e.message}",
                context="WebSocket",
            )
            await websocket.close(
                code=status.WS_1011_INTERNAL_ERROR,
                reason="Storage unavailable",
            )
            return

    await websocket.accept()

    connection = Connection(user_id=user_id, transport=websocket)
    presence = container.presence

    try:
        presence.join(user_id, connection)
    except ConnectionLimitExceeded as e:
        reporter.warning(
            f"Connection rejected: {e.limit_type} limit exceeded "
            f"[conn={connection.id}] [user={user_id}]",
            context="WebSocket",
        )
        container.increment_connection_rejection(e.limit_type)
        await connection.send(
            ErrorEvent(code="CONNECTION_LIMIT_EXCEEDED", message=str(e)).to_wire()
        )
        await connection.close(
            code=status.WS_1008_POLICY_VIOLATION,
            reason="Connection limit exceeded",
        )
        return

    container.increment_stat("total_connections")
    reporter.info(
        f"{Emoji.NETWORK.CONNECTED} Client connected [conn={connection.id}] "
        f"[user={user_id}] [total_connections={presence.get_total_connections()}]",
        context="WebSocket",
    )

    parse_uc = container.get_parse_use_case()
    inbound_uc = container.get_inbound_use_case()
    rate_limiter = container.rate_limiter

    connection_start_time = time.time()
    events_processed = 0
    validation_failures = 0
    rate_limit_hits = 0

    try:
        while not connection.is_closed:
            if shutdown_manager.is_shutting_down():
                await connection.send(ShutdownEvent().to_wire())
                await connection.close(
                    code=status.WS_1001_GOING_AWAY,
                    reason="Server shutdown",
                )
                break

            try:
                data = await asyncio.wait_for(
                    websocket.receive_text(), timeout=settings.receive_timeout
                )
            except asyncio.TimeoutError:
                await connection.send(PingEvent().to_wire())
                continue

            container.increment_stat("total_events_received")
            events_processed += 1
            event_start_time = time.time()

            result = parse_uc.parse(data)
            if not result.valid:
                validation_failures += 1
                container.increment_stat("validation_failures")
                reporter.warning(
                    f"Event validation failed [conn={connection.id}] "
                    f"[errors={result.errors}]",
                    context="WebSocket",
                    verbose_level=2,
                )
                await connection.send(
                    ErrorEvent(
                        code="VALIDATION_ERROR",
                        message="Message validation failed",
                        request_type=result.event_type,
                        errors=result.errors,
                    ).to_wire()
                )
                continue

            if rate_limiter and not await rate_limiter.check_rate_limit(
                user_id, message_type=result.event_type
            ):
                rate_limit_hits += 1
                retry_after = rate_limiter.get_retry_after_seconds(
                    user_id, message_type=result.event_type
                )
                reporter.warning(
                    f"{Emoji.ERROR.LIMIT} Rate limit exceeded [conn={connection.id}] "
                    f"[type={result.event_type}] [retry_after={retry_after}s]",
                    context="WebSocket",
                )
                container.increment_rate_limit_hit(result.event_type)
                await connection.send(
                    ErrorEvent(
                        code="RATE_LIMIT_EXCEEDED",
                        message=(
                            f"Rate limit exceeded for event type '{result.event_type}'"
                        ),
                        request_type=result.event_type,
                        retry_after_seconds=retry_after,
                    ).to_wire()
                )
                continue

            replies = await inbound_uc.execute(connection, result.event)
            for reply in replies:
                if reply.type == "messageSent":
                    container.increment_stat("total_messages_sent")
                await connection.send(reply.to_wire())

            reporter.debug(
                f"Event processed [conn={connection.id}] [type={result.event_type}] "
                f"[time={(time.time() - event_start_time) * 1000:.2f}ms] "
                f"[size={result.size_bytes}]",
                context="WebSocket",
            )

    except WebSocketDisconnect:
        reporter.info(
            f"{Emoji.NETWORK.DISCONNECT} Client disconnected [conn={connection.id}] "
            f"[user={user_id}]",
            context="WebSocket",
        )

    except Exception as e:
        reporter.error(
            f"WebSocket connection error [conn={connection.id}]: "
            f"{type(e).__name__}: {str(e)}",
            context="WebSocket",
        )

    finally:
        presence.leave(connection)
        if rate_limiter and not presence.is_online(user_id):
            rate_limiter.reset(user_id)

        reporter.info(
            f"Connection closed [conn={connection.id}] "
            f"[duration={time.time() - connection_start_time:.2f}s] "
            f"[events={events_processed}] "
            f"[validation_failures={validation_failures}] "
            f"[rate_limit_hits={rate_limit_hits}]",
            context="WebSocket",
        )
