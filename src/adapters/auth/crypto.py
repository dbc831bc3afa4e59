from datetime import timedelta
from typing import Any

from src.api.auth_utils import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    create_access_token,
    decode_access_token,
)


def _looks_like_email(value: Any) -> bool:
    return isinstance(value, str) and "@" in value and " " not in value


class JWTIdentityAdapter:
    """
    Identity adapter backed by signed JWTs.

    The caller's email comes from the `email` claim, falling back to `sub`
    when the subject is itself an email address.
    """

    def __init__(self, secret_key: str | None = None) -> None:
        self.secret_key = secret_key

    def create_token(self, email: str, ttl_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES) -> str:
        return create_access_token(
            {"sub": email, "email": email},
            timedelta(minutes=ttl_minutes),
            secret_key=self.secret_key,
        )

    def resolve(self, token: str) -> str | None:
        payload = decode_access_token(token, secret_key=self.secret_key)
        if not payload:
            return None

        email = payload.get("email")
        if _looks_like_email(email):
            return str(email).lower()

        sub = payload.get("sub")
        if _looks_like_email(sub):
            return str(sub).lower()
        return None
