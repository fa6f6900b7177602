# Copyright (C) 2024 Whispering Network Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

"""Database models."""

from whispering_server.models.base import Base
from whispering_server.models.user import User
from whispering_server.models.admin import Admin
from whispering_server.models.message import Message, Reply

__all__ = [
    "Base",
    "User",
    "Admin",
    "Message",
    "Reply",
]
