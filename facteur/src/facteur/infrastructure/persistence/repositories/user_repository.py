"""
User repository implementation.
"""

from typing import Dict, List, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from facteur.domain.entities import User
from facteur.domain.exceptions import StorageError
from facteur.domain.repositories import IUserRepository
from facteur.infrastructure.persistence.database import Database
from facteur.infrastructure.persistence.models import (
    ContactModel,
    FriendRequestModel,
    UserModel,
)


class UserRepository(IUserRepository):
    """
    SQLAlchemy implementation of user repository.

    Contacts are stored once per direction; friend requests are stored
    on their receiver. Every public method runs in its own transaction.
    """

    def __init__(self, database: Database):
        """
        Initialize repository with database.

        Args:
            database: Connected Database manager
        """
        self.database = database

    async def create(self, user: User) -> User:
        try:
            async with self.database.session() as session:
                session.add(UserModel(id=user.id, username=user.username))
                await session.flush()
                await self._write_relations(session, user)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to create user {user.id}: {e}") from e

        return user.copy()

    async def get_by_id(self, user_id: str) -> Optional[User]:
        users = await self.get_many([user_id])
        return users[0] if users else None

    async def get_many(self, user_ids: Sequence[str]) -> List[User]:
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return []

        try:
            async with self.database.session() as session:
                result = await session.execute(
                    select(UserModel).where(UserModel.id.in_(ids))
                )
                models: Dict[str, UserModel] = {
                    model.id: model for model in result.scalars().all()
                }
                if not models:
                    return []

                contacts = (
                    await session.execute(
                        select(ContactModel.user_id, ContactModel.contact_id).where(
                            ContactModel.user_id.in_(list(models))
                        )
                    )
                ).all()
                requests = (
                    await session.execute(
                        select(
                            FriendRequestModel.receiver_id,
                            FriendRequestModel.sender_id,
                        ).where(FriendRequestModel.receiver_id.in_(list(models)))
                    )
                ).all()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load users: {e}") from e

        users = {
            user_id: User(id=model.id, username=model.username)
            for user_id, model in models.items()
        }
        for owner, contact in contacts:
            users[owner].contacts.add(contact)
        for receiver, sender in requests:
            users[receiver].friend_requests.add(sender)

        return [users[user_id] for user_id in ids if user_id in users]

    async def save(self, user: User) -> User:
        await self.save_all([user])
        return user.copy()

    async def save_all(self, users: Sequence[User]) -> None:
        try:
            async with self.database.session() as session:
                for user in users:
                    model = await session.get(UserModel, user.id)
                    if model is None:
                        raise StorageError(f"User {user.id} does not exist")
                    model.username = user.username
                    await self._write_relations(session, user)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to save users: {e}") from e

    async def _write_relations(self, session: AsyncSession, user: User) -> None:
        """Replace the stored contact and request rows of one user."""
        await session.execute(delete(ContactModel).where(ContactModel.user_id == user.id))
        await session.execute(
            delete(FriendRequestModel).where(FriendRequestModel.receiver_id == user.id)
        )
        session.add_all(
            ContactModel(user_id=user.id, contact_id=contact)
            for contact in sorted(user.contacts)
        )
        session.add_all(
            FriendRequestModel(receiver_id=user.id, sender_id=sender)
            for sender in sorted(user.friend_requests)
        )
        await session.flush()
