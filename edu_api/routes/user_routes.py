import logging

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from edu_api.auth import jwt_handler
from edu_api.auth.passwords import hash_password, verify_password
from edu_api.core.errors import Conflict, NotFound, StoreError, Unauthorized
from edu_api.database import get_db
from edu_api.models.user import User

router = APIRouter(tags=['users'])

logger = logging.getLogger(__name__)


class UserCredentialsRequest(BaseModel):
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        normalized = value.strip().lower()
        if not normalized or '@' not in normalized:
            raise ValueError('A valid email is required.')
        return normalized

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not value:
            raise ValueError('Password is required.')
        return value


class UserResponse(BaseModel):
    id: int
    email: str
    verified: bool
    tracked_courses: list[int] = []

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    auth: bool
    token: str


class MessageResponse(BaseModel):
    message: str


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


@router.post('/users', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(data: UserCredentialsRequest, db: Session = Depends(get_db)):
    try:
        if find_user_by_email(db, data.email) is not None:
            raise Conflict('Email already exists.')
    except SQLAlchemyError as exc:
        raise StoreError('Failed to query database.') from exc

    user = User(email=data.email, password_hash=hash_password(data.password), verified=False)

    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError as exc:
        # Another registration for the same email committed first.
        db.rollback()
        raise Conflict('Email already exists.') from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Creating user %s failed', data.email)
        raise StoreError('Failed to create user.') from exc

    logger.info('Registered user %s', user.id)
    return user


@router.post('/users/login', response_model=LoginResponse)
def login_user(data: UserCredentialsRequest, db: Session = Depends(get_db)):
    try:
        user = find_user_by_email(db, data.email)
    except SQLAlchemyError as exc:
        raise StoreError('Failed to query database.') from exc

    if user is None:
        raise NotFound('User not found.')

    if not verify_password(data.password, user.password_hash):
        raise Unauthorized('Invalid password.')

    token = jwt_handler.create_access_token(user_id=user.id, verified=user.verified)
    return LoginResponse(auth=True, token=token)


@router.patch('/users/{user_id}/verify', response_model=MessageResponse)
def verify_user(user_id: int, db: Session = Depends(get_db)):
    try:
        user = db.query(User).filter(User.id == user_id).first()
    except SQLAlchemyError as exc:
        raise StoreError('Failed to query database.') from exc

    if user is None:
        raise NotFound('User not found.')

    try:
        user.verified = True
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError('Failed to verify user.') from exc

    return MessageResponse(message='User verified successfully.')


def _list_users(db: Session, verified: bool | None = None) -> list[User]:
    try:
        query = db.query(User)
        if verified is not None:
            query = query.filter(User.verified.is_(verified))
        return query.order_by(User.id.asc()).all()
    except SQLAlchemyError as exc:
        raise StoreError('Failed to query database.') from exc


@router.get('/users', response_model=list[UserResponse])
def list_users(db: Session = Depends(get_db)):
    return _list_users(db)


@router.get('/users/verified', response_model=list[UserResponse])
def list_verified_users(db: Session = Depends(get_db)):
    return _list_users(db, verified=True)


@router.get('/users/unverified', response_model=list[UserResponse])
def list_unverified_users(db: Session = Depends(get_db)):
    return _list_users(db, verified=False)
