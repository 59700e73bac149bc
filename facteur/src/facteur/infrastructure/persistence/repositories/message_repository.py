"""
Message repository implementation.
"""

from typing import List

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError

from facteur.domain.entities import Message
from facteur.domain.exceptions import StorageError
from facteur.domain.repositories import IMessageRepository
from facteur.domain.value_objects import MediaReference
from facteur.infrastructure.persistence.database import Database
from facteur.infrastructure.persistence.models import MessageModel


class MessageRepository(IMessageRepository):
    """SQLAlchemy implementation of message repository."""

    def __init__(self, database: Database):
        self.database = database

    async def create(self, message: Message) -> Message:
        media = message.media
        model = MessageModel(
            id=message.id,
            sender_id=message.sender_id,
            receiver_id=message.receiver_id,
            content=message.content,
            media_url=media.url if media else None,
            media_type=media.media_type if media else None,
            thumbnail_url=media.thumbnail_url if media else None,
            created_at=message.created_at,
            sequence=message.sequence,
        )

        try:
            async with self.database.session() as session:
                session.add(model)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to store message {message.id}: {e}") from e

        return message

    async def find_between(
        self, user_a: str, user_b: str, page: int = 1, limit: int = 50
    ) -> List[Message]:
        page = max(page, 1)
        stmt = (
            select(MessageModel)
            .where(self._pair_clause(user_a, user_b))
            .order_by(MessageModel.created_at, MessageModel.sequence)
            .offset((page - 1) * limit)
            .limit(limit)
        )

        try:
            async with self.database.session() as session:
                result = await session.execute(stmt)
                models = list(result.scalars())
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load conversation: {e}") from e

        return [self._to_entity(model) for model in models]

    async def count_between(self, user_a: str, user_b: str) -> int:
        stmt = select(func.count()).select_from(MessageModel).where(
            self._pair_clause(user_a, user_b)
        )
        try:
            async with self.database.session() as session:
                return (await session.execute(stmt)).scalar_one()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to count conversation: {e}") from e

    @staticmethod
    def _pair_clause(user_a: str, user_b: str):
        return or_(
            and_(MessageModel.sender_id == user_a, MessageModel.receiver_id == user_b),
            and_(MessageModel.sender_id == user_b, MessageModel.receiver_id == user_a),
        )

    @staticmethod
    def _to_entity(model: MessageModel) -> Message:
        media = None
        if model.media_url:
            media = MediaReference(
                url=model.media_url,
                media_type=model.media_type,
                thumbnail_url=model.thumbnail_url,
            )
        return Message(
            id=model.id,
            sender_id=model.sender_id,
            receiver_id=model.receiver_id,
            content=model.content,
            media=media,
            created_at=model.created_at,
            sequence=model.sequence,
        )
