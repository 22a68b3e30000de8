"""
Password hashing with bcrypt.

The cost factor is a constructor argument so the API can take it from
configuration and tests can run with a cheap one.

bcrypt only reads the first 72 bytes of its input, while the password policy
allows up to 128 characters. Every secret is therefore reduced to a
base64-encoded SHA-256 digest (44 bytes) first, so each character counts.
"""

import base64
import hashlib

import bcrypt

from src.domain.errors import HashingError

DEFAULT_ROUNDS = 12


def _secret_bytes(plaintext: str) -> bytes:
    if not isinstance(plaintext, str):
        raise HashingError("Password must be a string")
    digest = hashlib.sha256(plaintext.encode("utf-8")).digest()
    return base64.b64encode(digest)


class PasswordHasher:
    """
    Salted, one-way password hashing.

    Business Rules:
    - Cost factor 12 (2^12 rounds) unless configured otherwise
    - Verification is constant-time (bcrypt.checkpw)
    - Mismatch returns False; only a malformed hash raises HashingError
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        self._dummy_hash = None

    def hash(self, plaintext: str) -> str:
        secret = _secret_bytes(plaintext)
        try:
            hashed = bcrypt.hashpw(secret, bcrypt.gensalt(self.rounds))
        except ValueError as exc:
            raise HashingError("Failed to hash password") from exc
        return hashed.decode("utf-8")

    def verify(self, plaintext: str, password_hash: str) -> bool:
        secret = _secret_bytes(plaintext)
        if not isinstance(password_hash, str) or not password_hash:
            raise HashingError("Stored password hash is malformed")
        try:
            return bcrypt.checkpw(secret, password_hash.encode("utf-8"))
        except ValueError as exc:
            raise HashingError("Stored password hash is malformed") from exc

    def burn(self, plaintext: str) -> None:
        """Spend one verification's worth of time, e.g. for an unknown email"""
        if self._dummy_hash is None:
            self._dummy_hash = self.hash("dummy_password")
        self.verify(plaintext, self._dummy_hash)
