"""Use case for registering users."""

import re

from sqlalchemy.orm import Session

from synergysphere.domain.entities import ROLE_USER, User
from synergysphere.infrastructure.repositories import UserRepository
from synergysphere.infrastructure.security import get_password_hash

_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{3,30}$")


def register_user(
    session: Session,
    *,
    username: str,
    email: str,
    password: str,
    role: str = ROLE_USER,
) -> User:
    """Create a new user ensuring unique usernames and email addresses."""

    if not _USERNAME_PATTERN.match(username or ""):
        raise ValueError(
            "Username must be 3 to 30 letters, digits, dots, dashes or underscores"
        )
    if len(password or "") < 6:
        raise ValueError("Password must be at least 6 characters")

    repository = UserRepository(session)
    if repository.get_by_email(email):
        raise ValueError("Email is already registered")
    if repository.get_by_username(username):
        raise ValueError("Username is already taken")

    return repository.create(
        User(
            id=None,
            username=username,
            email=email.lower(),
            password=get_password_hash(password),
            role=role,
        )
    )
