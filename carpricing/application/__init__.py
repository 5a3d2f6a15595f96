# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.access import AuthenticatedGuard, PrivilegedGuard
from .services.identity import IdentityResolver
from .services.password_hashing import ScryptPasswordHasher
from .services.sessions import SessionStore

__all__ = [
    "AuthenticatedGuard",
    "IdentityResolver",
    "PrivilegedGuard",
    "ScryptPasswordHasher",
    "SessionStore",
]
