import logging

from sqlalchemy.exc import IntegrityError

from school_api.core.errors import DuplicateEmail
from school_api.models.user import User
from school_api.repositories.base import Repository

logger = logging.getLogger(__name__)


class UserRepository(Repository):
    """Credential store backed by the ``users`` table."""

    def get_by_email(self, email: str) -> User | None:
        with self.storage_errors("look up a user"):
            return self.db.query(User).filter(User.email == email).first()

    def email_exists(self, email: str) -> bool:
        with self.storage_errors("check email uniqueness"):
            return self.db.query(User.id).filter(User.email == email).first() is not None

    def create(self, name: str, email: str, password_hash: str) -> User:
        user = User(name=name, email=email, password_hash=password_hash)
        with self.storage_errors("create a user"):
            self.db.add(user)
            try:
                self.db.commit()
            except IntegrityError as exc:
                # The unique constraint is the authority; the caller's pre-check can race.
                self.db.rollback()
                logger.info("Insert rejected by the unique email constraint")
                raise DuplicateEmail("Email already registered") from exc
            self.db.refresh(user)
        return user

    def list_public(self) -> list[tuple[int, str, str]]:
        """Return (id, name, email) rows; the password hash is never selected."""
        with self.storage_errors("list users"):
            return self.db.query(User.id, User.name, User.email).order_by(User.id).all()
