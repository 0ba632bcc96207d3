"""FastAPI dependency injection for authentication and database."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.exceptions import Unauthorized
from expense_tracker.core.security import Identity, TokenService
from expense_tracker.db.session import get_db
from expense_tracker.repositories.expense import ExpenseRepository
from expense_tracker.repositories.user import UserRepository
from expense_tracker.services.account import AccountService
from expense_tracker.services.expense import ExpenseService

# Bearer token scheme; missing headers are rejected by get_current_identity
# so the response is 401 rather than FastAPI's default.
security = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    """Token service built once by the application factory."""
    return request.app.state.token_service


async def get_user_repository(
    db: AsyncSession = Depends(get_db),
) -> UserRepository:
    return UserRepository(db)


async def get_expense_repository(
    db: AsyncSession = Depends(get_db),
) -> ExpenseRepository:
    return ExpenseRepository(db)


async def get_account_service(
    user_repo: UserRepository = Depends(get_user_repository),
    token_service: TokenService = Depends(get_token_service),
) -> AccountService:
    """
    Get account service instance.

    Args:
        user_repo: User repository
        token_service: Token signer/validator

    Returns:
        AccountService instance
    """
    return AccountService(user_repo, token_service)


async def get_expense_service(
    expense_repo: ExpenseRepository = Depends(get_expense_repository),
) -> ExpenseService:
    return ExpenseService(expense_repo)


async def get_current_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    token_service: TokenService = Depends(get_token_service),
) -> Identity:
    """
    Validate the bearer token and return the caller's identity.

    This is the only place token signatures are checked; handlers receive
    the identity as an explicit parameter and pass it on to services.

    Args:
        request: Incoming request (user id recorded for request logging)
        credentials: HTTP bearer token credentials
        token_service: Token validator

    Returns:
        Authenticated identity

    Raises:
        Unauthorized: If the header is missing or the token is invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized(details={"reason": "missing bearer token"})

    identity = token_service.validate(credentials.credentials)
    request.state.user_id = str(identity.user_id)
    return identity


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
