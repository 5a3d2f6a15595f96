"""Use-case for signing a client out."""

from __future__ import annotations

from carpricing.domain.users.entities import Session


class LogoutUserUseCase:
    def execute(self, session: Session) -> None:
        session.clear()
