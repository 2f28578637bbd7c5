"""Per-user tracked-course sets.

Each operation looks the user up first and only then touches
``tracked_courses``. The course id itself is not checked against the
courses table, so a user can track a course that does not (yet) exist.
"""
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from edu_api.core.errors import NotFound, StoreError
from edu_api.models.user import TrackedCourse, User

logger = logging.getLogger(__name__)


def _require_user(db: Session, user_id: int) -> User:
    try:
        user = db.query(User).filter(User.id == user_id).first()
    except SQLAlchemyError as exc:
        logger.exception('User lookup failed for id %s', user_id)
        raise StoreError('Failed to query database.') from exc

    if user is None:
        raise NotFound('User not found.')
    return user


def track_course(db: Session, user_id: int, course_id: int) -> None:
    _require_user(db, user_id)

    try:
        already_tracked = db.query(TrackedCourse.id).filter(
            TrackedCourse.user_id == user_id,
            TrackedCourse.course_id == course_id,
        ).first()
        if already_tracked is None:
            db.add(TrackedCourse(user_id=user_id, course_id=course_id))
            db.commit()
    except IntegrityError:
        # Lost a race with a concurrent track of the same course.
        db.rollback()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Tracking course %s for user %s failed', course_id, user_id)
        raise StoreError('Failed to add course to tracked list.') from exc

    logger.info('User %s tracks course %s', user_id, course_id)


def untrack_course(db: Session, user_id: int, course_id: int) -> None:
    _require_user(db, user_id)

    try:
        removed = db.query(TrackedCourse).filter(
            TrackedCourse.user_id == user_id,
            TrackedCourse.course_id == course_id,
        ).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Untracking course %s for user %s failed', course_id, user_id)
        raise StoreError('Failed to remove course from tracked list.') from exc

    logger.info('User %s untracked course %s (%d removed)', user_id, course_id, removed)


def list_tracked_courses(db: Session, user_id: int) -> list[int]:
    _require_user(db, user_id)

    try:
        rows = db.query(TrackedCourse.course_id).filter(
            TrackedCourse.user_id == user_id,
        ).order_by(TrackedCourse.id.asc()).all()
    except SQLAlchemyError as exc:
        logger.exception('Listing tracked courses for user %s failed', user_id)
        raise StoreError('Failed to fetch tracked courses.') from exc

    return [course_id for (course_id,) in rows]
