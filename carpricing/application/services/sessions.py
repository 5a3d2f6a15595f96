"""Signed cookie codec for the client-held session payload."""

from __future__ import annotations

from typing import Any

from itsdangerous import BadData, BadSignature, URLSafeTimedSerializer

from carpricing.domain.users.entities import Session
from carpricing.shared.logging import logger

SESSION_SALT = "carpricing.session"


class SessionStore:
    def __init__(self, secret_key: str, *, max_age: int, salt: str = SESSION_SALT) -> None:
        self._serializer = URLSafeTimedSerializer(secret_key, salt=salt)
        self._max_age = max_age

    @property
    def max_age(self) -> int:
        return self._max_age

    def dump(self, session: Session) -> str:
        return self._serializer.dumps({"user_id": session.user_id})

    def load(self, raw: str | None) -> Session:
        """Decode a cookie value; anything unverifiable yields an anonymous session."""

        if not raw:
            return Session()
        try:
            payload: Any = self._serializer.loads(raw, max_age=self._max_age)
        except BadSignature:
            logger.debug("session: rejected cookie with bad or expired signature")
            return Session()
        except BadData:
            logger.debug("session: rejected undecodable cookie payload")
            return Session()

        if not isinstance(payload, dict):
            return Session()
        user_id = payload.get("user_id")
        if isinstance(user_id, bool) or not isinstance(user_id, int) or user_id <= 0:
            return Session()
        return Session(user_id=user_id)
