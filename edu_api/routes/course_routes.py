from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from edu_api.core.errors import NotFound, StoreError
from edu_api.database import get_db
from edu_api.models.course import Course

router = APIRouter(tags=['courses'])


def _require_name(value: str | None) -> str:
    normalized = (value or '').strip()
    if not normalized:
        raise ValueError('Course name is required.')
    return normalized


class CreateCourseRequest(BaseModel):
    name: str
    description: str | None = None
    instructor: str | None = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _require_name(value)


class UpdateCourseRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    instructor: str | None = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str | None) -> str:
        return _require_name(value)


class CourseResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    instructor: str | None = None

    class Config:
        from_attributes = True


@router.post('/courses', response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
def create_course(data: CreateCourseRequest, db: Session = Depends(get_db)):
    course = Course(name=data.name, description=data.description, instructor=data.instructor)

    try:
        db.add(course)
        db.commit()
        db.refresh(course)
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError('Failed to create course.') from exc

    return course


@router.get('/courses', response_model=list[CourseResponse])
def list_courses(db: Session = Depends(get_db)):
    try:
        return db.query(Course).order_by(Course.id.asc()).all()
    except SQLAlchemyError as exc:
        raise StoreError('Failed to query database.') from exc


@router.patch('/courses/{course_id}/update', response_model=CourseResponse)
def update_course(course_id: int, data: UpdateCourseRequest, db: Session = Depends(get_db)):
    try:
        course = db.query(Course).filter(Course.id == course_id).first()

        if course is None:
            raise NotFound('Course not found.')

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(course, field, value)

        db.commit()
        db.refresh(course)
        return course
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError('Failed to update course.') from exc


@router.delete('/courses/{course_id}/delete', status_code=status.HTTP_204_NO_CONTENT)
def delete_course(course_id: int, db: Session = Depends(get_db)):
    try:
        course = db.query(Course).filter(Course.id == course_id).first()

        if course is None:
            raise NotFound('Course not found.')

        db.delete(course)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError('Failed to delete course.') from exc
