"""Course model definitions."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from school_api.database import Base, TimestampMixin


class Course(TimestampMixin, Base):
    """Represents a course taught by an optional teacher."""
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    teacher_id = Column(Integer, ForeignKey("teachers.id", ondelete="SET NULL"), nullable=True, index=True)

    teacher = relationship("Teacher", back_populates="courses")
    students = relationship("Student", back_populates="course", order_by="Student.id")
