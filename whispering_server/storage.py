# Copyright (C) 2024 Whispering Network Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

"""Storage accessor: CRUD over users, admins, messages and replies.

Handlers receive a ``Storage`` through the ``get_storage`` dependency, so tests
can swap it via ``app.dependency_overrides``. Reads by id or username return
``None`` when nothing matches. Writes commit immediately and return the
persisted row with its server-assigned id and ``created_at``.
"""

import logging
from collections.abc import Sequence

from fastapi import Depends
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from whispering_server.database import get_db
from whispering_server.exceptions import ConflictError
from whispering_server.models import Admin, Message, Reply, User

logger = logging.getLogger(__name__)


def _newest_first(q):
    return q.order_by(Message.created_at.desc(), Message.id.desc())


class Storage:
    """Data access bound to one database session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _insert(self, obj, conflict_message: str):
        """Add, commit and refresh. A unique violation rolls back and raises ConflictError."""
        self.session.add(obj)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            logger.info("Rejected %s insert: unique constraint", type(obj).__name__)
            raise ConflictError(conflict_message)
        await self.session.refresh(obj)
        return obj

    # Users

    async def get_user_by_username(self, username: str) -> User | None:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def create_user(self, username: str, password_hash: str) -> User:
        user = User(username=username, password_hash=password_hash, is_active=True)
        return await self._insert(user, "Username already exists")

    async def set_user_active(self, user_id: int, is_active: bool) -> User | None:
        """Reactivate or deactivate a user account."""
        user = await self.session.get(User, user_id)
        if not user:
            return None
        user.is_active = is_active
        await self.session.commit()
        return user

    # Admins

    async def get_admin_by_username(self, username: str) -> Admin | None:
        result = await self.session.execute(select(Admin).where(Admin.username == username))
        return result.scalar_one_or_none()

    async def create_admin(
        self,
        username: str,
        password_hash: str | None,
        display_name: str,
        role: str = "admin",
    ) -> Admin:
        admin = Admin(
            username=username,
            password_hash=password_hash,
            display_name=display_name,
            role=role or "admin",
            is_active=True,
        )
        return await self._insert(admin, "Admin username already exists")

    async def list_admins(self) -> Sequence[Admin]:
        result = await self.session.execute(select(Admin).order_by(Admin.id))
        return result.scalars().all()

    async def update_admin_status(self, admin_id: int, is_active: bool) -> Admin | None:
        admin = await self.session.get(Admin, admin_id)
        if not admin:
            return None
        admin.is_active = is_active
        await self.session.commit()
        return admin

    async def set_admin_password(self, admin_id: int, password_hash: str) -> Admin | None:
        admin = await self.session.get(Admin, admin_id)
        if not admin:
            return None
        admin.password_hash = password_hash
        await self.session.commit()
        return admin

    # Messages

    async def create_message(
        self,
        content: str,
        category: str,
        recipient: str | None = None,
        spotify_link: str | None = None,
        is_public: bool = False,
    ) -> Message:
        message = Message(
            content=content,
            category=category,
            recipient=recipient,
            spotify_link=spotify_link,
            is_public=is_public,
        )
        self.session.add(message)
        await self.session.commit()
        await self.session.refresh(message)
        return message

    async def get_message(self, message_id: int) -> Message | None:
        """Message with its replies loaded (oldest reply first)."""
        result = await self.session.execute(
            select(Message)
            .options(selectinload(Message.replies))
            .where(Message.id == message_id)
        )
        return result.scalar_one_or_none()

    async def message_exists(self, message_id: int) -> bool:
        result = await self.session.execute(select(Message.id).where(Message.id == message_id))
        return result.scalar_one_or_none() is not None

    async def list_public_messages(self) -> Sequence[Message]:
        result = await self.session.execute(_newest_first(select(Message).where(Message.is_public == True)))
        return result.scalars().all()

    async def list_private_messages(self) -> Sequence[Message]:
        result = await self.session.execute(_newest_first(select(Message).where(Message.is_public == False)))
        return result.scalars().all()

    async def list_messages_by_category(self, category: str) -> Sequence[Message]:
        result = await self.session.execute(
            _newest_first(
                select(Message).where(Message.is_public == True, Message.category == category)
            )
        )
        return result.scalars().all()

    async def list_messages_by_recipient(self, recipient: str) -> Sequence[Message]:
        result = await self.session.execute(
            _newest_first(
                select(Message).where(Message.is_public == True, Message.recipient == recipient)
            )
        )
        return result.scalars().all()

    async def list_recipients(self) -> list[str]:
        """Distinct, sorted recipients of public messages."""
        result = await self.session.execute(
            select(Message.recipient)
            .where(
                Message.is_public == True,
                Message.recipient.is_not(None),
                Message.recipient != "",
            )
            .distinct()
            .order_by(Message.recipient)
        )
        return list(result.scalars().all())

    async def update_message_visibility(self, message_id: int, is_public: bool) -> Message | None:
        message = await self.session.get(Message, message_id)
        if not message:
            return None
        message.is_public = is_public
        await self.session.commit()
        return message

    # Replies

    async def create_reply(self, message_id: int, content: str, nickname: str) -> Reply:
        reply = Reply(message_id=message_id, content=content, nickname=nickname)
        self.session.add(reply)
        await self.session.commit()
        await self.session.refresh(reply)
        return reply

    async def delete_reply(self, reply_id: int) -> bool:
        """Delete a reply. Returns False when no such reply existed."""
        result = await self.session.execute(delete(Reply).where(Reply.id == reply_id))
        await self.session.commit()
        return (result.rowcount or 0) > 0


async def get_storage(db: AsyncSession = Depends(get_db)) -> Storage:
    """Dependency for FastAPI that yields a Storage bound to the request session."""
    return Storage(db)
