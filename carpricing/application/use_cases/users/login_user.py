# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from carpricing.domain.users.entities import Session, User
from carpricing.domain.users.exceptions import InvalidCredentialsError
from carpricing.domain.users.repositories import PasswordHasher, UserRepository
from carpricing.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, email: str, password: str, *, session: Session) -> User:
        user = self._users.find_by_email(email)
        # unknown emails still pay for one verification so both failures look alike
        stored_hash = user.password_hash if user else self._password_hasher.dummy_hash
        password_valid = self._password_hasher.verify(stored_hash, password)

        if user is None or not password_valid:
            logger.info("users.login: rejected credentials")
            raise InvalidCredentialsError()

        session.establish(user.id)
        logger.info(f"users.login: ok user_id={user.id}")
        return user
