import secrets

# 64 random bytes, hex-encoded to 128 chars
TOKEN_BYTES = 64


def issue_token() -> str:
    """Opaque bearer token from the OS CSPRNG. Carries no claims."""
    return secrets.token_hex(TOKEN_BYTES)
