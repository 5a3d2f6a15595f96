from __future__ import annotations

from carpricing.domain.users.entities import Session, User
from carpricing.domain.users.repositories import UserRepository
from carpricing.shared.logging import logger


class IdentityResolver:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def resolve(self, session: Session) -> User | None:
        if not session.is_authenticated:
            return None
        user = self._users.find_by_id(session.user_id)
        if user is None:
            logger.info(f"identity: session references missing user={session.user_id}")
        return user
