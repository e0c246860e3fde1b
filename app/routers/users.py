import logging

from app.utils.auth import auth_dependency
from app.utils.encrypt import hash_password
from app.utils.errors import ValidationError
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from app.models.models import User
from app.database import db_dependency

logger = logging.getLogger(__name__)

router = APIRouter(tags=["user"])

class UserInputBase(BaseModel):
    email: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    id: int
    email: str

    class Config:
        from_attributes = True


@router.post('/users', status_code=201, response_model=UserResponse,
             responses={400: {'description': 'Missing email, missing password or already exist'}})
def create_user(user: UserInputBase, db: db_dependency):
    if not user.email:
        raise ValidationError('Missing email')
    if not user.password:
        raise ValidationError('Missing password')
    if db.query(User).filter(User.email == user.email).first():
        raise ValidationError('Already exist')

    new_user = User(email=user.email, hashed_password=hash_password(user.password))
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race against a concurrent signup with the same email
        db.rollback()
        raise ValidationError('Already exist')
    db.refresh(new_user)
    logger.info("Registered user %s", new_user.id)
    return new_user

@router.get('/users/me', response_model=UserResponse)
def get_me(user = Depends(auth_dependency)):
    return user
