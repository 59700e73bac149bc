"""
Use case for reading a conversation history.
"""

from facteur.application.dto import ConversationPage, PaginationInfo
from facteur.domain.exceptions import InvalidPayloadError, StorageError, StorageFailureError
from facteur.domain.repositories import IMessageRepository


class GetConversationUseCase:
    """Pages through the messages exchanged by two users, oldest first."""

    def __init__(self, message_repository: IMessageRepository, max_page_size: int = 100):
        self.message_repository = message_repository
        self.max_page_size = max_page_size

    async def execute(
        self, user_id: str, other_user_id: str, page: int = 1, limit: int = 50
    ) -> ConversationPage:
        if page < 1 or limit < 1:
            raise InvalidPayloadError("page and limit must be positive")
        limit = min(limit, self.max_page_size)

        try:
            total = await self.message_repository.count_between(user_id, other_user_id)
            messages = await self.message_repository.find_between(
                user_id, other_user_id, page=page, limit=limit
            )
        except StorageError as e:
            raise StorageFailureError(f"Failed to load conversation: {e.message}") from e

        return ConversationPage(
            messages=[message.to_dict() for message in messages],
            pagination=PaginationInfo.build(page, limit, total),
        )
