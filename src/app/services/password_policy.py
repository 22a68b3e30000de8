"""
Password composition rules.

Every rule is evaluated so the caller gets the full list of problems at once.
"""

import re
from typing import List, Optional

from pydantic import BaseModel

MIN_LENGTH = 8
MAX_LENGTH = 128

SYMBOLS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>?"
_SYMBOL_PATTERN = re.compile("[" + re.escape(SYMBOLS) + "]")

WEAK_PASSWORDS = frozenset(
    {
        "password",
        "123456",
        "password123",
        "admin",
        "qwerty",
        "letmein",
        "welcome",
        "monkey",
        "1234567890",
        "password1",
    }
)

MISMATCH_MESSAGE = "Password and confirm password do not match"


class PasswordValidation(BaseModel):
    valid: bool
    errors: List[str]


def validate_password(
    candidate: Optional[str], confirmation: Optional[str]
) -> PasswordValidation:
    candidate = candidate or ""
    errors = []

    if len(candidate) < MIN_LENGTH:
        errors.append(f"Password must be at least {MIN_LENGTH} characters long")
    if len(candidate) > MAX_LENGTH:
        errors.append(f"Password must be at most {MAX_LENGTH} characters long")
    if not re.search(r"[A-Z]", candidate):
        errors.append("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", candidate):
        errors.append("Password must contain at least one lowercase letter")
    if not re.search(r"\d", candidate):
        errors.append("Password must contain at least one number")
    if not _SYMBOL_PATTERN.search(candidate):
        errors.append("Password must contain at least one special character")
    if candidate.lower() in WEAK_PASSWORDS:
        errors.append("Password is too common and easily guessable")

    if candidate != confirmation:
        errors.append(MISMATCH_MESSAGE)

    return PasswordValidation(valid=not errors, errors=errors)
