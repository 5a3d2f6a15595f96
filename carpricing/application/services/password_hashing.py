"""Password hashing strategies."""

from __future__ import annotations

import hashlib
import hmac
import secrets

from carpricing.domain.users.repositories import PasswordHasher
from carpricing.shared.config import HashingConfig

DELIMITER = "."
KEY_LENGTH = 32


class ScryptPasswordHasher(PasswordHasher):
    """Salted scrypt digests encoded as ``<hex salt>.<hex key>``."""

    def __init__(self, config: HashingConfig) -> None:
        self._n = config.n
        self._r = config.r
        self._p = config.p
        self._salt_bytes = config.salt_bytes
        # scrypt needs 128 * n * r bytes of working memory, leave headroom
        self._maxmem = 256 * self._n * self._r + 1024 * 1024
        self._dummy_hash = self.hash(secrets.token_urlsafe(16))

    def _derive(self, password: str, salt: str) -> bytes:
        return hashlib.scrypt(
            password.encode("utf-8"),
            salt=salt.encode("utf-8"),
            n=self._n,
            r=self._r,
            p=self._p,
            maxmem=self._maxmem,
            dklen=KEY_LENGTH,
        )

    def hash(self, password: str) -> str:
        salt = secrets.token_bytes(self._salt_bytes).hex()
        return f"{salt}{DELIMITER}{self._derive(password, salt).hex()}"

    def verify(self, hashed: str, password: str) -> bool:
        try:
            salt, _, stored_hex = hashed.partition(DELIMITER)
            if not salt or not stored_hex or DELIMITER in stored_hex:
                return False
            stored = bytes.fromhex(stored_hex)
            supplied = self._derive(password, salt)
        except (AttributeError, TypeError, ValueError, MemoryError):
            return False

        if len(stored) != len(supplied):
            return False
        return hmac.compare_digest(stored, supplied)

    @property
    def dummy_hash(self) -> str:
        """A valid digest of a random secret, verified against when no user matches."""

        return self._dummy_hash
