"""Account endpoints: registration, login and profile management."""

from fastapi import APIRouter, Depends

from expense_tracker.api.deps import CurrentIdentity, get_account_service
from expense_tracker.schemas.auth import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    MessageResponse,
    ProfileUpdateResponse,
    RegisterRequest,
    UpdateProfileRequest,
    UserSummary,
)
from expense_tracker.services.account import AccountService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    response_model=AuthResponse,
    summary="Register new user",
    description="Create a new account and return a bearer token for it.",
    responses={400: {"description": "Email already registered or invalid input"}},
)
async def register(
    data: RegisterRequest,
    account_service: AccountService = Depends(get_account_service),
) -> AuthResponse:
    """
    Register a new user account.

    Args:
        data: Registration data (name, email, password)
        account_service: Account service

    Returns:
        User summary and token

    Raises:
        400: Email already registered or validation error
    """
    result = await account_service.register(
        name=data.name,
        email=data.email,
        password=data.password,
    )
    return AuthResponse(
        message="Registered successfully.",
        user=UserSummary.model_validate(result.user),
        token=result.token,
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="User login",
    description="Authenticate with email and password to receive a bearer token.",
    responses={401: {"description": "Invalid email or password"}},
)
async def login(
    data: LoginRequest,
    account_service: AccountService = Depends(get_account_service),
) -> AuthResponse:
    """
    Authenticate user and return a token valid for 7 days.

    Raises:
        401: Invalid credentials
    """
    result = await account_service.login(email=data.email, password=data.password)
    return AuthResponse(
        message="Login successful.",
        user=UserSummary.model_validate(result.user),
        token=result.token,
    )


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    summary="Get current user",
    responses={401: {"description": "Missing or invalid token"}, 404: {"description": "User not found"}},
)
async def get_me(
    identity: CurrentIdentity,
    account_service: AccountService = Depends(get_account_service),
) -> CurrentUserResponse:
    user = await account_service.get_by_id(identity.user_id)
    return CurrentUserResponse(user=UserSummary.model_validate(user))


@router.put(
    "/update",
    response_model=ProfileUpdateResponse,
    summary="Update profile",
    description="Change the display name and email of the authenticated user.",
    responses={400: {"description": "Invalid input, email taken or user not found"}},
)
async def update_profile(
    data: UpdateProfileRequest,
    identity: CurrentIdentity,
    account_service: AccountService = Depends(get_account_service),
) -> ProfileUpdateResponse:
    user = await account_service.update_profile(
        identity.user_id, name=data.name, email=data.email
    )
    return ProfileUpdateResponse(
        message="Updated successfully.",
        user=UserSummary.model_validate(user),
    )


@router.delete(
    "/delete",
    response_model=MessageResponse,
    summary="Delete account",
    description="Delete the authenticated user. Issued tokens stay valid until they expire.",
)
async def delete_account(
    identity: CurrentIdentity,
    account_service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    await account_service.delete_account(identity.user_id)
    return MessageResponse(message="User deleted.")
