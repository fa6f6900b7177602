# Copyright (C) 2024 Whispering Network Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

"""Admin model."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from whispering_server.models.base import Base
from whispering_server.models.timestamp import TimestampMixin


class Admin(Base, TimestampMixin):
    """Moderator account. Kept apart from users; an admin without a password hash cannot log in."""

    __tablename__ = "admins"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(String(32), default="admin", nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
