from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from school_api.core import config


class InvalidToken(Exception):
    """Base class for bearer tokens that must be rejected."""


class ExpiredToken(InvalidToken):
    pass


class MalformedToken(InvalidToken):
    pass


@dataclass(frozen=True)
class TokenClaims:
    subject_id: int
    email: str


def create_access_token(
    subject_id: int,
    email: str,
    now: datetime | None = None,
    expires_minutes: int | None = None,
) -> str:
    issued_at = now or datetime.now(timezone.utc)
    expire_minutes = expires_minutes or config.JWT_EXPIRES_MINUTES
    payload = {
        "sub": str(subject_id),
        "email": email,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    # Expiry is checked by verify_access_token so "now" stays injectable.
    return jwt.decode(
        token,
        config.JWT_SECRET_KEY,
        algorithms=[config.JWT_ALGORITHM],
        options={"require": ["sub", "exp"], "verify_exp": False, "verify_iat": False},
    )


def verify_access_token(token: str, now: datetime | None = None) -> TokenClaims:
    """Return the claims of a valid token.

    Raises ``ExpiredToken`` once ``now`` is past the ``exp`` claim and
    ``MalformedToken`` for bad signatures, unparseable tokens or missing claims.
    """
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError as exc:
        raise MalformedToken(str(exc)) from exc

    try:
        expires_at = int(payload["exp"])
        subject_id = int(payload["sub"])
    except (TypeError, ValueError) as exc:
        raise MalformedToken("Token claims are not well formed") from exc
    email = payload.get("email")
    if not isinstance(email, str) or not email:
        raise MalformedToken("Token is missing the email claim")

    current = now or datetime.now(timezone.utc)
    if current.timestamp() > expires_at:
        raise ExpiredToken("Token has expired")

    return TokenClaims(subject_id=subject_id, email=email)
