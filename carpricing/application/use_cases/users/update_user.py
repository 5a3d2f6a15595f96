# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime

from carpricing.application.services.access import ensure_self_or_privileged
from carpricing.domain.users.entities import User
from carpricing.domain.users.exceptions import EmailInUseError, UserNotFoundError
from carpricing.domain.users.repositories import PasswordHasher, UserRepository
from carpricing.shared.logging import logger


class UpdateUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(
        self,
        actor: User,
        user_id: int,
        *,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> User:
        ensure_self_or_privileged(actor, user_id)

        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(context={"user_id": user_id})

        changes: dict[str, object] = {}
        if name is not None:
            changes["name"] = name
        if email is not None and email != user.email:
            owner = self._users.find_by_email(email)
            if owner is not None and owner.id != user.id:
                raise EmailInUseError()
            changes["email"] = email
        if password is not None:
            changes["password_hash"] = self._password_hasher.hash(password)

        if not changes:
            return user

        updated = self._users.update(
            replace(user, updated_at=datetime.now(UTC), **changes)  # type: ignore[arg-type]
        )
        logger.info(
            f"users.update: user_id={user_id} by={actor.id} fields={sorted(changes)}"
        )
        return updated
