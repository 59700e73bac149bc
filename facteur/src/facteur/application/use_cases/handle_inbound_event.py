"""
Dispatches parsed inbound events to their use cases.
"""

from typing import List, Optional

from shared.reporter import SystemReporter

from facteur.application.use_cases.manage_relationship import (
    ManageRelationshipUseCase,
)
from facteur.application.use_cases.send_message import (
    SendMessageUseCase,
    media_from_fields,
)
from facteur.domain.entities import Connection
from facteur.domain.events import (
    AcceptFriendRequestEvent,
    DeclineFriendRequestEvent,
    ErrorEvent,
    FriendRequestAcceptedEvent,
    FriendRequestDeclinedEvent,
    FriendRequestSentEvent,
    InboundPingEvent,
    MessageSentEvent,
    OutboundEvent,
    PongEvent,
    SendFriendRequestEvent,
    SendMessageEvent,
)
from facteur.domain.exceptions import FacteurError, InvalidPayloadError


class HandleInboundEventUseCase:
    """
    Runs one inbound event for the connection that sent it.

    Returns the events to send back to that connection only: the
    acknowledgement on success, an error event on a domain failure.
    Pushes to other users happen inside the use cases.
    """

    def __init__(
        self,
        send_message: SendMessageUseCase,
        manage_relationship: ManageRelationshipUseCase,
        reporter: Optional[SystemReporter] = None,
    ):
        self.send_message = send_message
        self.manage_relationship = manage_relationship
        self.reporter = reporter

    async def execute(self, connection: Connection, event) -> List[OutboundEvent]:
        try:
            return await self._dispatch(connection, event)
        except FacteurError as e:
            if self.reporter:
                self.reporter.warning(
                    f"{event.type} from user={connection.user_id} rejected: "
                    f"{e.code} {e.message}",
                    context="InboundEvent",
                    verbose_level=2,
                )
            return [
                ErrorEvent(
                    code=e.code,
                    message=e.message,
                    request_type=event.type,
                    errors=e.errors if isinstance(e, InvalidPayloadError) else None,
                )
            ]

    async def _dispatch(self, connection: Connection, event) -> List[OutboundEvent]:
        user_id = connection.user_id

        if isinstance(event, SendMessageEvent):
            media = media_from_fields(
                event.media_url, event.media_type, event.thumbnail_url
            )
            message = await self.send_message.execute(
                sender_id=user_id,
                receiver_id=event.receiver_id,
                content=event.content,
                media=media,
            )
            return [MessageSentEvent.from_message(message)]

        if isinstance(event, SendFriendRequestEvent):
            await self.manage_relationship.request_friend(user_id, event.receiver_id)
            return [FriendRequestSentEvent(receiver_id=event.receiver_id)]

        if isinstance(event, AcceptFriendRequestEvent):
            requester = await self.manage_relationship.accept_friend(
                user_id, event.request_id, origin_connection_id=connection.id
            )
            return [
                FriendRequestAcceptedEvent(user_id=requester.id, request_id=requester.id)
            ]

        if isinstance(event, DeclineFriendRequestEvent):
            await self.manage_relationship.decline_friend(user_id, event.request_id)
            return [FriendRequestDeclinedEvent(request_id=event.request_id)]

        if isinstance(event, InboundPingEvent):
            return [PongEvent()]

        raise InvalidPayloadError(f"Unsupported event type: {event.type}")
