import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from school_api.auth import jwt_handler
from school_api.auth.dependencies import AuthenticatedUser, require_authenticated_user
from school_api.auth.passwords import dummy_verify, hash_password, verify_password
from school_api.core.errors import DuplicateEmail, InvalidCredentials, MissingField
from school_api.database import get_db
from school_api.repositories.users import UserRepository
from school_api.schemas import (
    CurrentUserResponse,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserPublic,
)

router = APIRouter(tags=['Auth'])

logger = logging.getLogger(__name__)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


@router.post('/register', response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, users: UserRepository = Depends(get_user_repository)):
    if not payload.name or not payload.email or not payload.password:
        raise MissingField('Name, email, and password are required')

    if users.email_exists(payload.email):
        raise DuplicateEmail('Email already registered')

    user = users.create(
        name=payload.name,
        email=payload.email,
        password_hash=hash_password(payload.password),
    )
    logger.info('Registered user %s', user.id)
    return user


@router.post('/login', response_model=TokenResponse)
def login(payload: LoginRequest, users: UserRepository = Depends(get_user_repository)):
    if not payload.email or not payload.password:
        raise MissingField('Email and password are required')

    user = users.get_by_email(payload.email)
    if user is None:
        dummy_verify()
        logger.warning('Failed login attempt')
        raise InvalidCredentials('Invalid credentials')
    if not verify_password(payload.password, user.password_hash):
        logger.warning('Failed login attempt')
        raise InvalidCredentials('Invalid credentials')

    token = jwt_handler.create_access_token(subject_id=user.id, email=user.email)
    return {'token': token}


@router.get('/users', response_model=list[UserPublic])
def list_users(
    _: AuthenticatedUser = Depends(require_authenticated_user),
    users: UserRepository = Depends(get_user_repository),
):
    return [UserPublic(id=user_id, name=name, email=email) for user_id, name, email in users.list_public()]


@router.get('/me', response_model=CurrentUserResponse)
def me(current_user: AuthenticatedUser = Depends(require_authenticated_user)):
    return {'id': current_user.subject_id, 'email': current_user.email}
