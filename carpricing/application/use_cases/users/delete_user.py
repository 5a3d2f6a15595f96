# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from carpricing.application.services.access import ensure_self_or_privileged
from carpricing.domain.users.entities import Session, User
from carpricing.domain.users.exceptions import UserNotFoundError
from carpricing.domain.users.repositories import UserRepository
from carpricing.shared.logging import logger


class DeleteUserUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, actor: User, user_id: int, *, session: Session) -> User:
        ensure_self_or_privileged(actor, user_id)

        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(context={"user_id": user_id})

        self._users.delete(user_id)
        if actor.id == user_id:
            session.clear()
        logger.info(f"users.delete: user_id={user_id} by={actor.id}")
        return user
