# Copyright (C) 2024 Whispering Network Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

"""Whispering Network Server - anonymous message board API."""

__version__ = "0.1.0"
