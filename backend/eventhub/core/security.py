"""
Password hashing and request identity.

Passwords are hashed with bcrypt. A successful login issues an opaque session
token (see `SessionStore`) which clients send back as
``Authorization: Bearer <token>``.
"""

from typing import Optional

import bcrypt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from eventhub.core.exceptions import AuthenticationRequiredError
from eventhub.models import User

bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str, rounds: int = 12) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def get_session_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    return credentials.credentials if credentials else None


async def get_optional_user(
    request: Request,
    token: Optional[str] = Depends(get_session_token),
) -> Optional[User]:
    """Resolve the caller from the session token, or None for anonymous requests."""
    if not token:
        return None
    user_id = request.app.state.sessions.get_user_id(token)
    if user_id is None:
        return None
    return await request.app.state.store.get_user(user_id)


async def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise AuthenticationRequiredError()
    return user
