"""Teacher model definitions."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from school_api.database import Base, TimestampMixin


class Teacher(TimestampMixin, Base):
    """Represents a teacher; owns zero or more courses."""
    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    department = Column(String(255))

    courses = relationship("Course", back_populates="teacher", order_by="Course.id")
