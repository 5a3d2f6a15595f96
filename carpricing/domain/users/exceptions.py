# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from carpricing.shared.errors.base import ConflictError, DomainError, NotFoundError


class EmailInUseError(ConflictError):
    code = "email_in_use"
    message = "Email in use"


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    message = "Invalid email or password"


class UserNotFoundError(NotFoundError):
    code = "user_not_found"
    message = "User not found"
