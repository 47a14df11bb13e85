"""User model definitions."""

from sqlalchemy import Column, Integer, String, UniqueConstraint
from school_api.database import Base, TimestampMixin


class User(TimestampMixin, Base):
    """Represents an account that can log in to the API."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)
