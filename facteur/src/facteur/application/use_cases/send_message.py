"""
Message ingest use case: validate, persist, then deliver live.
"""

from typing import Optional

from shared.reporter import SystemReporter
from shared.reporter.emojis import Emoji

from facteur.domain.entities import Message
from facteur.domain.events import ReceiveMessageEvent
from facteur.domain.exceptions import (
    InvalidPayloadError,
    StorageError,
    StorageFailureError,
)
from facteur.domain.repositories import IMessageRepository
from facteur.domain.services import IEventRouter, MessageClock
from facteur.domain.value_objects import MediaReference


def media_from_fields(
    media_url: Optional[str],
    media_type: Optional[str] = None,
    thumbnail_url: Optional[str] = None,
) -> Optional[MediaReference]:
    """
    Build a media reference from flat wire fields.

    Raises:
        InvalidPayloadError: If type or thumbnail come without a URL
    """
    if media_url is None or not media_url.strip():
        if media_type or thumbnail_url:
            raise InvalidPayloadError("mediaType and thumbnailUrl require mediaUrl")
        return None

    try:
        return MediaReference(
            url=media_url.strip(),
            media_type=media_type or None,
            thumbnail_url=thumbnail_url or None,
        )
    except ValueError as e:
        raise InvalidPayloadError(str(e))


class SendMessageUseCase:
    """
    Accepts a message from an authenticated sender.

    The message is durable before anyone sees it: it is persisted first
    and pushed to the receiver's live connections only after the store
    accepted it. An offline receiver reads it later from storage.
    """

    def __init__(
        self,
        message_repository: IMessageRepository,
        event_router: IEventRouter,
        clock: Optional[MessageClock] = None,
        max_content_length: int = 5000,
        reporter: Optional[SystemReporter] = None,
    ):
        self.message_repository = message_repository
        self.event_router = event_router
        self.clock = clock or MessageClock()
        self.max_content_length = max_content_length
        self.reporter = reporter

    def _validate(
        self,
        receiver_id: Optional[str],
        content: str,
        media: Optional[MediaReference],
    ) -> None:
        errors = []
        if receiver_id is None or not str(receiver_id).strip():
            errors.append("receiverId is required")
        if not content.strip() and media is None:
            errors.append("Message must have content or media")
        if len(content) > self.max_content_length:
            errors.append(
                f"Content too long: {len(content)} chars "
                f"(max: {self.max_content_length})"
            )
        if errors:
            raise InvalidPayloadError("; ".join(errors), errors=errors)

    async def execute(
        self,
        sender_id: str,
        receiver_id: str,
        content: Optional[str] = "",
        media: Optional[MediaReference] = None,
    ) -> Message:
        """
        Persist and deliver one message.

        Args:
            sender_id: Authenticated author
            receiver_id: Recipient (not resolved against the user store)
            content: Text body
            media: Optional media reference

        Returns:
            The persisted message, whatever the live delivery outcome

        Raises:
            InvalidPayloadError: If the payload is rejected
            StorageFailureError: If the store rejects the write (no delivery)
        """
        content = content or ""
        self._validate(receiver_id, content, media)

        created_at, sequence = self.clock.next()
        message = Message(
            sender_id=sender_id,
            receiver_id=str(receiver_id).strip(),
            content=content,
            media=media,
            created_at=created_at,
            sequence=sequence,
        )

        try:
            message = await self.message_repository.create(message)
        except StorageError as e:
            if self.reporter:
                self.reporter.error(
                    f"{Emoji.ERROR.ERROR} Message from {sender_id} to "
                    f"{message.receiver_id} not stored: {e.message}",
                    context="SendMessage",
                    verbose_level=1,
                )
            raise StorageFailureError(f"Failed to store message: {e.message}") from e

        report = await self.event_router.deliver(
            message.receiver_id, ReceiveMessageEvent.from_message(message)
        )

        if self.reporter:
            icon = Emoji.MESSAGE.MEDIA if media else Emoji.MESSAGE.NEW
            live = (
                f"live={report.delivered}/{report.attempted}"
                if report.was_online
                else "stored for offline receiver"
            )
            self.reporter.info(
                f"{icon} Message {message.id}: {sender_id} -> {message.receiver_id} "
                f"({live})",
                context="SendMessage",
                verbose_level=2,
            )

        return message
