# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Infrastructure layer for ClassHub.

- database: SQLAlchemy async engine, sessions and ORM models
- notifications: Outbound mail
"""
