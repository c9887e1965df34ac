"""
In-memory session store mapping opaque bearer tokens to user ids.

Written at login/logout, read on every authenticated request. Expired
sessions are dropped lazily when looked up, and in bulk by `purge_expired`,
which also runs whenever a new session is created.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional


@dataclass
class Session:
    token: str
    user_id: int
    expires_at: datetime


class SessionStore:
    def __init__(self, ttl_seconds: int = 86400) -> None:
        self._ttl = timedelta(seconds=ttl_seconds)
        self._sessions: dict[str, Session] = {}

    def create(self, user_id: int) -> str:
        self.purge_expired()
        token = secrets.token_urlsafe(32)
        self._sessions[token] = Session(
            token=token,
            user_id=user_id,
            expires_at=datetime.now(timezone.utc) + self._ttl,
        )
        return token

    def get_user_id(self, token: str) -> Optional[int]:
        session = self._sessions.get(token)
        if session is None:
            return None
        if session.expires_at <= datetime.now(timezone.utc):
            del self._sessions[token]
            return None
        return session.user_id

    def revoke(self, token: str) -> bool:
        return self._sessions.pop(token, None) is not None

    def purge_expired(self) -> int:
        now = datetime.now(timezone.utc)
        expired = [token for token, s in self._sessions.items() if s.expires_at <= now]
        for token in expired:
            del self._sessions[token]
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)
