"""User repository (placeholder records, no auth flow)"""
from typing import Optional

from focushero.models.user import User, UserCreate

from .base import BaseRepository


class UserRepository(BaseRepository[User, UserCreate]):
    """Repository for user records"""

    def __init__(self):
        super().__init__(User)

    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by exact username"""
        users = await self.find_by_filters({"username": username}, limit=1)
        return users[0] if users else None

    async def create(self, data: UserCreate) -> User:
        """Create a user; usernames are unique"""
        if await self.find_by_username(data.username):
            raise ValueError(f"Username {data.username} is already taken")
        return await super().create(data)
