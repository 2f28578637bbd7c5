"""User model definitions."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from edu_api.database import Base


class User(Base):
    """Represents a registered platform user."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    verified = Column(Boolean, nullable=False, default=False)

    tracked = relationship(
        "TrackedCourse",
        order_by="TrackedCourse.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    @property
    def tracked_courses(self) -> list[int]:
        return [entry.course_id for entry in self.tracked]


class TrackedCourse(Base):
    """One course id in a user's tracked-course set."""
    __tablename__ = "tracked_courses"
    __table_args__ = (UniqueConstraint("user_id", "course_id", name="uq_tracked_courses_user_course"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Not a foreign key: courses may be tracked before, or after, they exist.
    course_id = Column(Integer, nullable=False)
