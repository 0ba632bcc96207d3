"""User repository for credential queries."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.exceptions import Conflict
from expense_tracker.models.user import User
from expense_tracker.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model with authentication queries."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def create(self, user: User) -> User:
        """Insert a user, refusing duplicates before touching the table."""
        if await self.email_exists(user.email):
            raise Conflict()
        return await super().create(user)

    async def get_by_email(self, email: str) -> User | None:
        """Find user by email address (used for login)."""
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def email_exists(self, email: str, exclude_id: UUID | None = None) -> bool:
        """Check if email is already registered, optionally ignoring one user."""
        query = select(User.id).where(User.email == email)
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none() is not None

    async def update_profile(self, user_id: UUID, name: str, email: str) -> User | None:
        """Change name and email; the password hash is never touched here."""
        return await self.update(user_id, {"name": name, "email": email})
