import logging
from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from school_api.auth import jwt_handler
from school_api.core.errors import Unauthenticated

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    subject_id: int
    email: str


def require_authenticated_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> AuthenticatedUser:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise Unauthenticated("Missing or malformed Authorization header")

    try:
        claims = jwt_handler.verify_access_token(credentials.credentials)
    except jwt_handler.ExpiredToken as exc:
        raise Unauthenticated("Token has expired") from exc
    except jwt_handler.InvalidToken as exc:
        logger.warning("Rejected bearer token on %s: %s", request.url.path, exc)
        raise Unauthenticated("Invalid token") from exc

    user = AuthenticatedUser(subject_id=claims.subject_id, email=claims.email)
    request.state.user = user
    return user
