"""Assignment model definitions."""

from sqlalchemy import Column, Date, Integer, String, Text

from edu_api.database import Base


class Assignment(Base):
    """Represents coursework, optionally with an uploaded attachment."""
    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text)
    due_date = Column(Date)
    course_id = Column(Integer, index=True)
    file_path = Column(String, nullable=True)
