from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from conftest import DeterministicHasher, InMemoryUserRepository, make_user
from flask import Flask

from carpricing.application.services.access import (
    AccessDecision,
    AuthenticatedGuard,
    PrivilegedGuard,
)
from carpricing.application.services.identity import IdentityResolver
from carpricing.application.services.sessions import SessionStore
from carpricing.application.use_cases.users.register_user import RegisterUserUseCase
from carpricing.domain.users.entities import Session
from carpricing.interfaces.http.controllers.users_controller import UsersController
from carpricing.interfaces.http.dto.envelope import ApiResponse
from carpricing.interfaces.http.dto.users import UserDTO
from carpricing.interfaces.http.pipeline import (
    GuardStage,
    RequestContext,
    RequestPipeline,
    ShortCircuit,
)
from carpricing.interfaces.http.projection import FieldProjector
from carpricing.shared.config import SessionConfig
from carpricing.shared.errors import AccessDeniedError
from carpricing.shared.middleware.error_handler import configure_error_handling

COOKIE = "session"


@pytest.fixture()
def store() -> SessionStore:
    return SessionStore("test-secret", max_age=3600)


@pytest.fixture()
def pipeline(store: SessionStore, users: InMemoryUserRepository) -> RequestPipeline:
    return RequestPipeline(
        sessions=store,
        resolver=IdentityResolver(users=users),
        cookie=SessionConfig(),  # type: ignore[call-arg]
    )


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def test_guard_short_circuits_before_handler(flask_app: Flask, pipeline: RequestPipeline) -> None:
    handler = MagicMock()
    flask_app.add_url_rule(
        "/guarded", view_func=pipeline.view("guarded", handler, guards=[AuthenticatedGuard()])
    )

    with flask_app.test_client() as client:
        response = client.get("/guarded")

    assert response.status_code == 403
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["error"] == "not_authenticated"
    assert payload["message"] == "You must be logged in to access this resource"
    handler.assert_not_called()


def test_privileged_route_rejects_regular_user(
    flask_app: Flask,
    pipeline: RequestPipeline,
    store: SessionStore,
    users: InMemoryUserRepository,
) -> None:
    regular = users.add(make_user(0))
    handler = MagicMock()
    flask_app.add_url_rule(
        "/admin", view_func=pipeline.view("admin", handler, guards=[PrivilegedGuard()])
    )

    with flask_app.test_client() as client:
        client.set_cookie(COOKIE, store.dump(Session(user_id=regular.id)))
        response = client.get("/admin")

    assert response.status_code == 403
    assert response.get_json()["error"] == "not_privileged"
    handler.assert_not_called()


def test_handler_sees_resolved_user_and_output_is_projected(
    flask_app: Flask,
    pipeline: RequestPipeline,
    store: SessionStore,
    users: InMemoryUserRepository,
) -> None:
    alice = users.add(make_user(0))
    seen: dict[str, object] = {}

    def handler(ctx, item_id: int) -> ApiResponse:
        seen["user"] = ctx.user
        seen["item_id"] = item_id
        return ApiResponse.ok("show", "ok", ctx.require_user())

    flask_app.add_url_rule(
        "/items/<int:item_id>",
        view_func=pipeline.view(
            "show", handler, guards=[AuthenticatedGuard()], projector=FieldProjector(UserDTO)
        ),
    )

    with flask_app.test_client() as client:
        client.set_cookie(COOKIE, store.dump(Session(user_id=alice.id)))
        response = client.get("/items/5")

    assert response.status_code == 200
    payload = response.get_json()
    assert seen == {"user": alice, "item_id": 5}
    assert payload["data"]["id"] == alice.id
    assert "password_hash" not in payload["data"]
    assert payload["meta"]["session"]["user_id"] == alice.id
    assert "Set-Cookie" not in response.headers


def test_register_endpoint_sets_session_cookie(
    flask_app: Flask,
    pipeline: RequestPipeline,
    store: SessionStore,
    users: InMemoryUserRepository,
    hasher: DeterministicHasher,
) -> None:
    controller = UsersController(
        pipeline=pipeline,
        register_use_case=RegisterUserUseCase(users=users, password_hasher=hasher),
        login_use_case=MagicMock(),
        logout_use_case=MagicMock(),
        get_user_use_case=MagicMock(),
        find_by_email_use_case=MagicMock(),
        update_use_case=MagicMock(),
        delete_use_case=MagicMock(),
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/users/register",
            json={"name": "alice", "email": "alice@example.com", "password": "secret123"},
        )
        cookie = client.get_cookie(COOKIE)

    assert response.status_code == 201
    assert response.get_json()["action"] == "register"
    assert "HttpOnly" in response.headers["Set-Cookie"]
    assert cookie is not None
    assert store.load(cookie.value).user_id == 1


def test_register_invalid_payload_returns_422(
    flask_app: Flask, pipeline: RequestPipeline
) -> None:
    register = MagicMock()
    controller = UsersController(
        pipeline=pipeline,
        register_use_case=register,
        login_use_case=MagicMock(),
        logout_use_case=MagicMock(),
        get_user_use_case=MagicMock(),
        find_by_email_use_case=MagicMock(),
        update_use_case=MagicMock(),
        delete_use_case=MagicMock(),
    )
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/api/users/register", json={"name": "a", "email": "not-an-email", "password": "x"}
        )

    assert response.status_code == 422
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert payload["context"]["fields"] == ["email", "password"]
    register.execute.assert_not_called()


def test_guard_denial_without_error_still_short_circuits() -> None:
    class SilentDenyGuard:
        def evaluate(self, user):
            return AccessDecision(allowed=False, error=None)

    outcome = GuardStage(SilentDenyGuard())(RequestContext(session=Session()))

    assert isinstance(outcome, ShortCircuit)
    assert isinstance(outcome.error, AccessDeniedError)
    assert outcome.error.status == 403
