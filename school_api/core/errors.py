"""Error taxonomy shared by the repositories, the auth gateway and the routes.

Every error carries the HTTP status it maps to; ``main`` renders them as
``{"message": ...}`` bodies.
"""

from fastapi import status


class SchoolApiError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers: dict[str, str] | None = None

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingField(SchoolApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidReference(SchoolApiError):
    """A foreign key points at a row that does not exist."""
    status_code = status.HTTP_400_BAD_REQUEST


class DuplicateEmail(SchoolApiError):
    status_code = status.HTTP_409_CONFLICT


class InvalidCredentials(SchoolApiError):
    status_code = status.HTTP_401_UNAUTHORIZED


class Unauthenticated(SchoolApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class NotFound(SchoolApiError):
    status_code = status.HTTP_404_NOT_FOUND


class StorageFailure(SchoolApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
