"""Account service: registration, login and profile management."""

import logging
from dataclasses import dataclass
from uuid import UUID

from starlette.concurrency import run_in_threadpool

from expense_tracker.core.exceptions import Conflict, InvalidCredentials, NotFound
from expense_tracker.core.security import (
    TokenService,
    dummy_password_hash,
    hash_password,
    verify_password,
)
from expense_tracker.models.user import User
from expense_tracker.repositories.user import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    """A user together with a freshly issued bearer token."""

    user: User
    token: str


class AccountService:
    """Service for account operations."""

    def __init__(self, user_repo: UserRepository, token_service: TokenService):
        """
        Initialize account service.

        Args:
            user_repo: User repository for database operations
            token_service: Signs tokens for registered and logged-in users
        """
        self.user_repo = user_repo
        self.token_service = token_service

    async def register(self, name: str, email: str, password: str) -> AuthResult:
        """
        Register a new user and log them in.

        Args:
            name: Display name
            email: User email address (already normalised)
            password: Plain text password

        Returns:
            Created user and token

        Raises:
            Conflict: If email already exists
        """
        if await self.user_repo.email_exists(email):
            raise Conflict()

        # Argon2 is CPU bound; keep it off the event loop.
        hashed_password = await run_in_threadpool(hash_password, password)

        user = await self.user_repo.create(
            User(name=name, email=email, password_hash=hashed_password)
        )
        logger.info("User registered", extra={"user_id": str(user.id)})
        return AuthResult(user=user, token=self._issue(user))

    async def login(self, email: str, password: str) -> AuthResult:
        """
        Authenticate user and return a token.

        Args:
            email: User email address
            password: Plain text password

        Returns:
            Authenticated user and token

        Raises:
            InvalidCredentials: If the email is unknown or the password is wrong
        """
        user = await self.user_repo.get_by_email(email)
        stored_hash = user.password_hash if user is not None else dummy_password_hash()

        password_ok = await run_in_threadpool(verify_password, password, stored_hash)
        if user is None or not password_ok:
            raise InvalidCredentials()

        return AuthResult(user=user, token=self._issue(user))

    async def get_by_id(self, user_id: UUID) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFound("USER_001")
        return user

    async def update_profile(self, user_id: UUID, name: str, email: str) -> User:
        """
        Change the user's name and email.

        Raises:
            NotFound: If the user no longer exists
            Conflict: If the email belongs to another account
        """
        if await self.user_repo.email_exists(email, exclude_id=user_id):
            raise Conflict()

        user = await self.user_repo.update_profile(user_id, name=name, email=email)
        if user is None:
            raise NotFound("USER_001", http_status=400)
        return user

    async def delete_account(self, user_id: UUID) -> None:
        """Delete the user. Their expenses are left in place."""
        if not await self.user_repo.delete(user_id):
            raise NotFound("USER_001", http_status=400)
        logger.info("User deleted", extra={"user_id": str(user_id)})

    def _issue(self, user: User) -> str:
        return self.token_service.issue(user.id, user.email)
