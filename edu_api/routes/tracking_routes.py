from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from edu_api.database import get_db
from edu_api.routes.user_routes import MessageResponse
from edu_api.services import tracking

router = APIRouter(tags=['tracked-courses'])


@router.patch('/users/{user_id}/courses/{course_id}/track', response_model=MessageResponse)
def track_course(user_id: int, course_id: int, db: Session = Depends(get_db)):
    tracking.track_course(db, user_id, course_id)
    return MessageResponse(message='Course added to tracked list.')


@router.patch('/users/{user_id}/courses/{course_id}/untrack', response_model=MessageResponse)
def untrack_course(user_id: int, course_id: int, db: Session = Depends(get_db)):
    tracking.untrack_course(db, user_id, course_id)
    return MessageResponse(message='Course removed from tracked list.')


@router.get('/users/{user_id}/tracked-courses', response_model=list[int])
def list_tracked_courses(user_id: int, db: Session = Depends(get_db)):
    return tracking.list_tracked_courses(db, user_id)
