# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-request stage chain shared by every controller.

A request runs through ``SessionStage`` -> ``IdentityStage`` -> guard stages in
order. Each stage returns ``Continue`` with the request context or
``ShortCircuit`` with the error to render, and no later stage or handler runs
after a short circuit. Handlers receive the ``RequestContext`` explicitly and
return an ``ApiResponse`` whose ``data`` is then projected.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Protocol

from flask import Response, jsonify, request

from carpricing.application.services.access import Guard
from carpricing.application.services.identity import IdentityResolver
from carpricing.application.services.sessions import SessionStore
from carpricing.domain.users.entities import Session, User
from carpricing.interfaces.http.dto.envelope import ApiResponse
from carpricing.interfaces.http.projection import FieldProjector
from carpricing.shared.config import SessionConfig
from carpricing.shared.errors.base import AccessDeniedError, AppError, NotAuthenticatedError
from carpricing.shared.errors.http import handle_app_error
from carpricing.shared.logging import get_correlation_id, logger


@dataclass(slots=True)
class RequestContext:
    session: Session
    user: User | None = None
    request_id: str = "-"

    def require_user(self) -> User:
        if self.user is None:
            raise NotAuthenticatedError()
        return self.user


@dataclass(slots=True, frozen=True)
class Continue:
    context: RequestContext


@dataclass(slots=True, frozen=True)
class ShortCircuit:
    error: AppError


StageOutcome = Continue | ShortCircuit


class Stage(Protocol):
    def __call__(self, context: RequestContext) -> StageOutcome: ...


Handler = Callable[..., ApiResponse]


class SessionStage:
    def __init__(self, store: SessionStore, cookie_name: str) -> None:
        self._store = store
        self._cookie_name = cookie_name

    def __call__(self, context: RequestContext) -> StageOutcome:
        context.session = self._store.load(request.cookies.get(self._cookie_name))
        return Continue(context)


class IdentityStage:
    def __init__(self, resolver: IdentityResolver) -> None:
        self._resolver = resolver

    def __call__(self, context: RequestContext) -> StageOutcome:
        context.user = self._resolver.resolve(context.session)
        return Continue(context)


class GuardStage:
    def __init__(self, guard: Guard) -> None:
        self._guard = guard

    def __call__(self, context: RequestContext) -> StageOutcome:
        decision = self._guard.evaluate(context.user)
        if decision.allowed:
            return Continue(context)
        return ShortCircuit(decision.error or AccessDeniedError())


class RequestPipeline:
    def __init__(
        self,
        *,
        sessions: SessionStore,
        resolver: IdentityResolver,
        cookie: SessionConfig,
    ) -> None:
        self._sessions = sessions
        self._cookie = cookie
        self._prelude: tuple[Stage, ...] = (
            SessionStage(sessions, cookie.cookie_name),
            IdentityStage(resolver),
        )

    def stages_for(self, guards: Sequence[Guard]) -> list[Stage]:
        return [*self._prelude, *(GuardStage(guard) for guard in guards)]

    def view(
        self,
        action: str,
        handler: Handler,
        *,
        guards: Sequence[Guard] = (),
        projector: FieldProjector | None = None,
        status: HTTPStatus = HTTPStatus.OK,
    ) -> Callable[..., tuple[Response, int]]:
        stages = self.stages_for(guards)

        def _view(**view_args: Any) -> tuple[Response, int]:
            context = RequestContext(session=Session(), request_id=get_correlation_id())
            for stage in stages:
                outcome = stage(context)
                if isinstance(outcome, ShortCircuit):
                    logger.info(
                        f"pipeline.{action}: denied {outcome.error.code} "
                        f"on {request.method} {request.path}"
                    )
                    return self._render_error(action, outcome.error, context)
                context = outcome.context

            try:
                envelope = handler(context, **view_args)
            except AppError as exc:
                logger.info(f"pipeline.{action}: {exc.code}")
                return self._render_error(action, exc, context)
            except Exception:
                logger.error(f"pipeline.{action}: handler failed on {request.method} {request.path}")
                raise

            if projector is not None:
                envelope.data = projector.project(envelope.data)
            envelope.meta.session.user_id = context.session.user_id
            envelope.meta.request_id = context.request_id
            response = jsonify(envelope.model_dump(mode="json"))
            self._commit_session(response, context.session)
            return response, int(status)

        _view.__name__ = action
        return _view

    def _render_error(
        self, action: str, error: AppError, context: RequestContext
    ) -> tuple[Response, int]:
        response, status = handle_app_error(
            error, action=action, user_id=context.session.user_id
        )
        self._commit_session(response, context.session)
        return response, int(status)

    def _commit_session(self, response: Response, session: Session) -> None:
        if not session.modified:
            return
        response.set_cookie(
            self._cookie.cookie_name,
            self._sessions.dump(session),
            max_age=self._sessions.max_age,
            httponly=True,
            samesite=self._cookie.cookie_samesite,
            secure=self._cookie.cookie_secure,
        )


__all__ = [
    "Continue",
    "GuardStage",
    "IdentityStage",
    "RequestContext",
    "RequestPipeline",
    "SessionStage",
    "ShortCircuit",
    "Stage",
]
