"""
User entity.

`password` holds the bcrypt hash produced by the auth service; the store
never sees a plaintext credential.
"""

from dataclasses import dataclass


@dataclass
class User:
    id: int
    username: str
    password: str
    email: str
    name: str
    is_admin: bool = False

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, admin={self.is_admin})>"
