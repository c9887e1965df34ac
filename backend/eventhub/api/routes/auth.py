"""
Authentication endpoints: register, login, logout and the current user.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from eventhub.api.deps import get_app_settings, get_sessions, get_store
from eventhub.core.config import Settings
from eventhub.core.security import get_current_user, get_session_token
from eventhub.infrastructure import MemoryStore, SessionStore
from eventhub.models import User
from eventhub.schemas.user import (
    AdminFlagUpdate, ProfileUpdate, SessionResponse, UserCreate, UserLogin, UserResponse,
)
from eventhub.services import auth_service

router = APIRouter(tags=["Authentication"])


@router.post("/register", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    store: MemoryStore = Depends(get_store),
    sessions: SessionStore = Depends(get_sessions),
    settings: Settings = Depends(get_app_settings),
):
    """Register a new account and start a session for it."""
    user = await auth_service.register_user(store, user_data, settings.BCRYPT_ROUNDS)
    token = sessions.create(user.id)
    return SessionResponse(access_token=token, user=UserResponse.model_validate(user))


@router.post("/login", response_model=SessionResponse)
async def login(
    login_data: UserLogin,
    store: MemoryStore = Depends(get_store),
    sessions: SessionStore = Depends(get_sessions),
):
    """Authenticate and receive a bearer session token."""
    user, token = await auth_service.authenticate_user(store, sessions, login_data)
    return SessionResponse(access_token=token, user=UserResponse.model_validate(user))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    user: User = Depends(get_current_user),
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionStore = Depends(get_sessions),
):
    auth_service.logout(sessions, token, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/user", response_model=UserResponse)
async def current_user(user: User = Depends(get_current_user)):
    return user


@router.patch("/user", response_model=UserResponse)
async def update_current_user(
    patch: ProfileUpdate,
    user: User = Depends(get_current_user),
    store: MemoryStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Update the caller's name, email or password."""
    return await auth_service.update_profile(store, user, patch, settings.BCRYPT_ROUNDS)


@router.put("/users/{user_id}/admin", response_model=UserResponse)
async def set_admin_flag(
    user_id: int,
    body: AdminFlagUpdate,
    user: User = Depends(get_current_user),
    store: MemoryStore = Depends(get_store),
):
    """Grant or revoke the admin flag. Admin only."""
    return await auth_service.set_admin_flag(store, user, user_id, body.is_admin)
