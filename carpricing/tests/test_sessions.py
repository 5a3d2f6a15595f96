from __future__ import annotations

import time
from unittest.mock import patch

from itsdangerous import TimestampSigner, URLSafeTimedSerializer

from carpricing.application.services.sessions import SESSION_SALT, SessionStore
from carpricing.domain.users.entities import Session


def _store(max_age: int = 3600) -> SessionStore:
    return SessionStore("test-secret", max_age=max_age)


def test_round_trip_keeps_user_id() -> None:
    store = _store()

    restored = store.load(store.dump(Session(user_id=7)))

    assert restored.user_id == 7
    assert restored.is_authenticated
    assert restored.modified is False


def test_missing_cookie_is_anonymous() -> None:
    assert _store().load(None) == Session()
    assert _store().load("") == Session()


def test_tampered_cookie_is_anonymous() -> None:
    store = _store()
    cookie = store.dump(Session(user_id=7))
    head, _, signature = cookie.rpartition(".")
    flipped = "A" if signature[0] != "A" else "B"

    assert store.load(f"{head}.{flipped}{signature[1:]}").user_id == 0


def test_cookie_signed_with_other_secret_is_anonymous() -> None:
    foreign = SessionStore("other-secret", max_age=3600).dump(Session(user_id=7))

    assert _store().load(foreign).user_id == 0


def test_expired_cookie_is_anonymous() -> None:
    store = _store(max_age=60)
    cookie = store.dump(Session(user_id=7))

    with patch.object(TimestampSigner, "get_timestamp", return_value=int(time.time()) + 3600):
        assert store.load(cookie).user_id == 0


def test_garbage_cookie_is_anonymous() -> None:
    assert _store().load("not-a-cookie").user_id == 0
    assert _store().load("....").user_id == 0


def test_signed_payload_with_bad_shape_is_anonymous() -> None:
    serializer = URLSafeTimedSerializer("test-secret", salt=SESSION_SALT)
    store = _store()

    for payload in ([7], {"user_id": "7"}, {"user_id": True}, {"user_id": -3}, {}):
        assert store.load(serializer.dumps(payload)).user_id == 0


def test_session_mutations_mark_modified() -> None:
    session = Session()
    session.establish(5)
    assert session.modified and session.user_id == 5

    session = Session(user_id=5)
    session.clear()
    assert session.modified and session.user_id == 0
