from datetime import date

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from edu_api.core.errors import NotFound, StoreError
from edu_api.database import get_db
from edu_api.models.assignment import Assignment

router = APIRouter(tags=['assignments'])


def _require_title(value: str | None) -> str:
    normalized = (value or '').strip()
    if not normalized:
        raise ValueError('Assignment title is required.')
    return normalized


class CreateAssignmentRequest(BaseModel):
    title: str
    description: str | None = None
    due_date: date | None = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str) -> str:
        return _require_title(value)


class UpdateAssignmentRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    due_date: date | None = None
    course_id: int | None = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, value: str | None) -> str:
        return _require_title(value)


class AssignmentResponse(BaseModel):
    id: int
    title: str
    description: str | None = None
    due_date: date | None = None
    course_id: int | None = None
    file_path: str | None = None

    class Config:
        from_attributes = True


@router.post(
    '/courses/{course_id}/assignments',
    response_model=AssignmentResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_assignment(course_id: int, data: CreateAssignmentRequest, db: Session = Depends(get_db)):
    assignment = Assignment(
        title=data.title,
        description=data.description,
        due_date=data.due_date,
        course_id=course_id,
    )

    try:
        db.add(assignment)
        db.commit()
        db.refresh(assignment)
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError('Failed to create assignment.') from exc

    return assignment


@router.get('/assignments', response_model=list[AssignmentResponse])
def list_assignments(db: Session = Depends(get_db)):
    try:
        return db.query(Assignment).order_by(Assignment.id.asc()).all()
    except SQLAlchemyError as exc:
        raise StoreError('Failed to query database.') from exc


@router.patch('/assignments/{assignment_id}/update', response_model=AssignmentResponse)
def update_assignment(assignment_id: int, data: UpdateAssignmentRequest, db: Session = Depends(get_db)):
    try:
        assignment = db.query(Assignment).filter(Assignment.id == assignment_id).first()

        if assignment is None:
            raise NotFound('Assignment not found.')

        # file_path is only ever set by the attachment upload.
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(assignment, field, value)

        db.commit()
        db.refresh(assignment)
        return assignment
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError('Failed to update assignment.') from exc


@router.delete('/assignments/{assignment_id}/delete', status_code=status.HTTP_204_NO_CONTENT)
def delete_assignment(assignment_id: int, db: Session = Depends(get_db)):
    try:
        assignment = db.query(Assignment).filter(Assignment.id == assignment_id).first()

        if assignment is None:
            raise NotFound('Assignment not found.')

        db.delete(assignment)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError('Failed to delete assignment.') from exc
