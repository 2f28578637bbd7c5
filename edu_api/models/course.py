"""Course model definitions."""

from sqlalchemy import Column, Integer, String, Text

from edu_api.database import Base


class Course(Base):
    """Represents a course offered on the platform."""
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text)
    instructor = Column(String)
