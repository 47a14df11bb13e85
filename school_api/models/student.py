"""Student model definitions."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from school_api.database import Base, TimestampMixin


class Student(TimestampMixin, Base):
    """Represents a student, optionally enrolled in one course."""
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="SET NULL"), nullable=True, index=True)

    course = relationship("Course", back_populates="students")
