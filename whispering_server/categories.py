# Copyright (C) 2024 Whispering Network Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

"""Message categories. Static data shared by validation and the web client."""

# (name, display color classes). Order is the order the client lists them in.
MESSAGE_CATEGORIES: list[dict[str, str]] = [
    {"name": "love", "color": "bg-pink-100 text-pink-800 border-pink-300"},
    {"name": "support", "color": "bg-blue-100 text-blue-800 border-blue-300"},
    {"name": "friendship", "color": "bg-yellow-100 text-yellow-800 border-yellow-300"},
    {"name": "gratitude", "color": "bg-green-100 text-green-800 border-green-300"},
    {"name": "apology", "color": "bg-purple-100 text-purple-800 border-purple-300"},
    {"name": "confession", "color": "bg-red-100 text-red-800 border-red-300"},
    {"name": "memories", "color": "bg-indigo-100 text-indigo-800 border-indigo-300"},
    {"name": "encouragement", "color": "bg-orange-100 text-orange-800 border-orange-300"},
    {"name": "other", "color": "bg-gray-100 text-gray-800 border-gray-300"},
]

CATEGORY_NAMES: frozenset[str] = frozenset(c["name"] for c in MESSAGE_CATEGORIES)
