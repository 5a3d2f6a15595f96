# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from carpricing.domain.users.entities import Session, User
from carpricing.domain.users.exceptions import EmailInUseError
from carpricing.domain.users.repositories import PasswordHasher, UserRepository
from carpricing.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, name: str, email: str, password: str, *, session: Session) -> User:
        existing = self._users.find_by_email(email)
        if existing:
            raise EmailInUseError()
        now = datetime.now(UTC)
        hashed = self._password_hasher.hash(password)
        user = User(
            id=0,
            name=name,
            email=email,
            password_hash=hashed,
            created_at=now,
            updated_at=now,
        )
        persisted = self._users.add(user)
        session.establish(persisted.id)
        logger.info(f"users.register: created user_id={persisted.id}")
        return persisted
