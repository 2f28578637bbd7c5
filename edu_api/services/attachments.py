"""Assignment attachments: upload the file, then record where it went.

The blob upload always happens first and the assignment row is only
written with a reference the blob store has confirmed. If that insert
fails the uploaded object is left in place and its key is logged, so the
bucket may hold objects no assignment points at.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from edu_api.core.errors import BadRequest, NotFound, PersistenceError, StoreError
from edu_api.models.assignment import Assignment
from edu_api.services.blob_store import BlobStore, build_object_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilePayload:
    filename: str
    data: bytes
    content_type: str | None = None


def create_attachment(
    db: Session,
    blob_store: BlobStore,
    *,
    title: str | None,
    description: str | None,
    due_date: date | None,
    course_id: int,
    upload: FilePayload | None,
    now: datetime | None = None,
) -> Assignment:
    if upload is None or not upload.filename:
        raise BadRequest('No file uploaded.')

    title = (title or '').strip()
    if not title:
        raise BadRequest('Assignment title is required.')

    object_key = build_object_key(upload.filename, now)
    # Raises UploadError before anything is written to the database.
    file_path = blob_store.upload(object_key, upload.data, upload.content_type)

    assignment = Assignment(
        title=title,
        description=description,
        due_date=due_date,
        course_id=course_id,
        file_path=file_path,
    )
    try:
        db.add(assignment)
        db.commit()
        db.refresh(assignment)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error('Assignment insert failed after upload; object %s is orphaned', object_key, exc_info=True)
        raise PersistenceError('Failed to create attachment.', object_key=object_key) from exc

    logger.info('Created assignment %s for course %s with attachment %s', assignment.id, course_id, object_key)
    return assignment


def list_attachment_paths(db: Session, course_id: int) -> list[str]:
    try:
        rows = db.query(Assignment.file_path).filter(
            Assignment.course_id == course_id,
            Assignment.file_path.is_not(None),
        ).order_by(Assignment.id.asc()).all()
    except SQLAlchemyError as exc:
        logger.exception('Listing attachments for course %s failed', course_id)
        raise StoreError('Failed to fetch attachments.') from exc

    if not rows:
        raise NotFound('No attachments found.')
    return [file_path for (file_path,) in rows]
