# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

ANONYMOUS_USER_ID = 0


@dataclass(slots=True, frozen=True)
class User:

    id: int
    name: str
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime
    is_privileged: bool = False


@dataclass(slots=True)
class Session:
    """Client-held identity payload, rebuilt from the signed cookie each request."""

    user_id: int = ANONYMOUS_USER_ID
    modified: bool = field(default=False, compare=False)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id > ANONYMOUS_USER_ID

    def establish(self, user_id: int) -> None:
        self.user_id = user_id
        self.modified = True

    def clear(self) -> None:
        self.user_id = ANONYMOUS_USER_ID
        self.modified = True
