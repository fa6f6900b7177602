# Copyright (C) 2024 Whispering Network Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

"""Message and reply models."""

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from whispering_server.models.base import Base
from whispering_server.models.timestamp import TimestampMixin


class Message(Base, TimestampMixin):
    """Anonymous message, optionally addressed to a recipient."""

    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    recipient: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    spotify_link: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)

    replies: Mapped[list["Reply"]] = relationship(
        "Reply",
        back_populates="message",
        cascade="all, delete-orphan",
        order_by="Reply.id",
    )


class Reply(Base, TimestampMixin):
    """Reply to a message under a free-text nickname."""

    __tablename__ = "replies"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    message_id: Mapped[int] = mapped_column(
        ForeignKey("messages.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    nickname: Mapped[str] = mapped_column(String(50), nullable=False)

    message: Mapped["Message"] = relationship("Message", back_populates="replies")
