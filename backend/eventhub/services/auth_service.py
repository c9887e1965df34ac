"""
Authentication service: registration, login, logout and profile changes.
"""

from eventhub.core.exceptions import ConflictError, AuthenticationRequiredError, NotFoundError
from eventhub.core.logging import get_logger
from eventhub.core.metrics import record_auth_attempt
from eventhub.core.security import hash_password, verify_password
from eventhub.infrastructure import MemoryStore, SessionStore
from eventhub.models import User
from eventhub.schemas.user import ProfileUpdate, UserCreate, UserLogin, UserUpdate
from eventhub.services.authorization import require_admin

logger = get_logger(__name__)


async def register_user(store: MemoryStore, user_data: UserCreate, bcrypt_rounds: int = 12) -> User:
    """
    Register a new user with hashed password.
    Raises 409 if username or email already exists. New users are never admins.
    """
    if await store.get_user_by_username(user_data.username):
        logger.warning("registration_failed", reason="username_exists", username=user_data.username)
        raise ConflictError("Username already exists")

    if await store.get_user_by_email(user_data.email):
        logger.warning("registration_failed", reason="email_exists", email=user_data.email)
        raise ConflictError("Email already registered")

    hashed = user_data.model_copy(update={"password": hash_password(user_data.password, bcrypt_rounds)})
    user = await store.create_user(hashed)

    logger.info("user_registered", user_id=user.id, username=user.username)
    return user


async def authenticate_user(store: MemoryStore, sessions: SessionStore, login_data: UserLogin) -> tuple[User, str]:
    """
    Check credentials and open a session.
    Raises 401 if credentials are invalid.
    """
    user = await store.get_user_by_username(login_data.username)

    if not user or not verify_password(login_data.password, user.password):
        record_auth_attempt(False)
        logger.warning("login_failed", username=login_data.username)
        raise AuthenticationRequiredError("Invalid username or password")

    token = sessions.create(user.id)
    record_auth_attempt(True)
    logger.info("user_logged_in", user_id=user.id)
    return user, token


def logout(sessions: SessionStore, token: str, user: User) -> None:
    sessions.revoke(token)
    logger.info("user_logged_out", user_id=user.id)


async def update_profile(
    store: MemoryStore,
    user: User,
    patch: ProfileUpdate,
    bcrypt_rounds: int = 12,
) -> User:
    changes = patch.changes()

    if "email" in changes and changes["email"] != user.email:
        if await store.get_user_by_email(changes["email"]):
            raise ConflictError("Email already registered")

    if "password" in changes:
        changes["password"] = hash_password(changes["password"], bcrypt_rounds)

    updated = await store.update_user(user.id, UserUpdate(**changes))
    if updated is None:
        raise NotFoundError("User not found")

    logger.info("user_profile_updated", user_id=user.id, fields=sorted(changes))
    return updated


async def set_admin_flag(store: MemoryStore, actor: User, user_id: int, is_admin: bool) -> User:
    require_admin(actor)

    updated = await store.update_user(user_id, UserUpdate(is_admin=is_admin))
    if updated is None:
        raise NotFoundError("User not found")

    logger.info("user_admin_flag_changed", user_id=user_id, is_admin=is_admin, actor_id=actor.id)
    return updated


async def ensure_admin(store: MemoryStore, username: str, password: str, email: str, bcrypt_rounds: int = 12) -> User:
    """Create (or promote) the bootstrap admin account configured in settings."""
    user = await store.get_user_by_username(username)
    if user is None:
        user = await store.create_user(UserCreate.model_construct(
            username=username,
            password=hash_password(password, bcrypt_rounds),
            email=email,
            name=username,
        ))
    if not user.is_admin:
        user = await store.update_user(user.id, UserUpdate(is_admin=True))
    logger.info("bootstrap_admin_ready", user_id=user.id, username=username)
    return user
