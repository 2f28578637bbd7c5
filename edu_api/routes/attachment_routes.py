import logging
from datetime import date

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from edu_api.database import get_db
from edu_api.routes.assignment_routes import AssignmentResponse
from edu_api.services.attachments import FilePayload, create_attachment, list_attachment_paths
from edu_api.services.blob_store import BlobStore, get_blob_store

router = APIRouter(tags=['attachments'])

logger = logging.getLogger(__name__)


class AttachmentListResponse(BaseModel):
    filePaths: list[str]


def read_upload(file: UploadFile | None) -> FilePayload | None:
    if file is None or not file.filename:
        return None
    return FilePayload(filename=file.filename, data=file.file.read(), content_type=file.content_type)


@router.post(
    '/courses/{course_id}/assignments/{assignment_id}/attachments',
    response_model=AssignmentResponse,
    status_code=status.HTTP_201_CREATED,
)
def upload_attachment(
    course_id: int,
    assignment_id: int,
    title: str | None = Form(None),
    description: str | None = Form(None),
    due_date: date | None = Form(None),
    file: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store),
):
    # A new assignment row carries the attachment; the path id is informational.
    logger.debug('Attachment upload for course %s via assignment path id %s', course_id, assignment_id)
    return create_attachment(
        db,
        blob_store,
        title=title,
        description=description,
        due_date=due_date,
        course_id=course_id,
        upload=read_upload(file),
    )


@router.get('/courses/{course_id}/attachments', response_model=AttachmentListResponse)
def list_attachments(course_id: int, db: Session = Depends(get_db)):
    return AttachmentListResponse(filePaths=list_attachment_paths(db, course_id))
