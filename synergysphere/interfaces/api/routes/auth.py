"""Endpoints for registration and token based authentication."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from synergysphere.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    register_user,
)
from synergysphere.domain.entities import User
from synergysphere.infrastructure.database import get_db
from synergysphere.infrastructure.security import create_access_token
from synergysphere.interfaces.api.dependencies import get_current_active_user
from synergysphere.interfaces.api.errors import translate_errors
from synergysphere.interfaces.api.schemas import Token, UserCreate, UserRead

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, db: Session = Depends(get_db)) -> UserRead:
    with translate_errors():
        user = register_user(
            db,
            username=payload.username,
            email=payload.email,
            password=payload.password,
        )
    logger.info("Registered user %s", user.id)
    return UserRead.model_validate(user)


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
) -> Token:
    """Authenticate by email or username and return a bearer token."""

    user, auth_status = authenticate_user(db, form_data.username, form_data.password)

    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if auth_status is AuthenticationStatus.INACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token({"sub": str(user.id), "role": user.role})
    return Token(access_token=access_token, token_type="bearer", role=user.role)


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(get_current_active_user)) -> UserRead:
    return UserRead.model_validate(current_user)
