"""Guards evaluated against the resolved identity before a handler runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from carpricing.domain.users.entities import User
from carpricing.shared.errors.base import (
    AccessDeniedError,
    NotAuthenticatedError,
    NotPrivilegedError,
)


@dataclass(slots=True, frozen=True)
class AccessDecision:
    allowed: bool
    error: AccessDeniedError | None = None


ALLOWED = AccessDecision(allowed=True)


def deny(error: AccessDeniedError) -> AccessDecision:
    return AccessDecision(allowed=False, error=error)


class Guard(Protocol):
    def evaluate(self, user: User | None) -> AccessDecision: ...


class AuthenticatedGuard:
    def evaluate(self, user: User | None) -> AccessDecision:
        if user is None:
            return deny(NotAuthenticatedError())
        return ALLOWED


class PrivilegedGuard:
    def evaluate(self, user: User | None) -> AccessDecision:
        if user is None:
            return deny(NotAuthenticatedError())
        if not user.is_privileged:
            return deny(NotPrivilegedError())
        return ALLOWED


def ensure_self_or_privileged(actor: User, target_user_id: int) -> None:
    """Raise unless ``actor`` acts on its own account or holds privileges."""

    if actor.id != target_user_id and not actor.is_privileged:
        raise NotPrivilegedError()


__all__ = [
    "ALLOWED",
    "AccessDecision",
    "AuthenticatedGuard",
    "Guard",
    "PrivilegedGuard",
    "deny",
    "ensure_self_or_privileged",
]
