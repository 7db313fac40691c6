"""
Auth API endpoints.

Thin HTTP wrappers around IAuthService. Errors raised by the service
are PhoneAuthError subclasses and are rendered by the application's
exception handler.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service

from .interfaces import IAuthService
from .models import (
    AuthResponse,
    LogoutRequest,
    LogoutResponse,
    RefreshRequest,
    SignInRequest,
    SignUpRequest,
    TokenPair,
)

router = APIRouter()


@router.post("/sign-up", response_model=AuthResponse, status_code=201)
async def sign_up(
    request: SignUpRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Register a new user.

    Returns the new user's ID with their first token pair.
    """
    return await service.sign_up(
        request.display_name,
        request.phone_number,
        request.password,
    )


@router.post("/sign-in", response_model=AuthResponse)
async def sign_in(
    request: SignInRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Sign in with phone number and password.
    """
    return await service.sign_in(request.phone_number, request.password)


@router.post("/refresh", response_model=TokenPair)
async def refresh(
    request: RefreshRequest,
    service: IAuthService = Depends(get_auth_service),
) -> TokenPair:
    """
    Exchange the current refresh token for a new token pair.

    The presented refresh token stops working once this succeeds.
    """
    return await service.refresh(request.refresh_token)


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    request: LogoutRequest,
    service: IAuthService = Depends(get_auth_service),
) -> LogoutResponse:
    """
    Log out the user of the given access token.
    """
    await service.logout(request.access_token)
    return LogoutResponse()
