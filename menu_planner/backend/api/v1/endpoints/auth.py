"""
Auth API Endpoints.

Sign-up, sign-in, sign-out, current user and profile.
"""

from fastapi import APIRouter

from menu_planner.backend.core.dependencies import CurrentUser, DbSession, RequestId
from menu_planner.backend.schemas.auth import (
    Credentials,
    ProfileUpdate,
    SessionResponse,
    SignUpResponse,
    UserResponse,
)
from menu_planner.backend.schemas.base import ApiResponse, ResponseMetadata
from menu_planner.backend.services.auth import AuthService

router = APIRouter()


@router.post(
    "/sign-up",
    response_model=ApiResponse[SignUpResponse],
    status_code=201,
    summary="Sign up",
    description="Register a new account with email and password.",
)
async def sign_up(
    data: Credentials,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[SignUpResponse]:
    """Register a new account."""
    service = AuthService(db)
    user, pending = await service.sign_up(data.email, data.password)
    return ApiResponse(
        data=SignUpResponse(
            user=UserResponse.model_validate(user),
            pending_verification=pending,
        ),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "/sign-in",
    response_model=ApiResponse[SessionResponse],
    summary="Sign in",
    description="Exchange email and password for an access token.",
)
async def sign_in(
    data: Credentials,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[SessionResponse]:
    """Open a session."""
    service = AuthService(db)
    token, user = await service.sign_in(data.email, data.password)
    return ApiResponse(
        data=SessionResponse(access_token=token, user=UserResponse.model_validate(user)),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "/sign-out",
    response_model=ApiResponse[dict],
    summary="Sign out",
    description="Close the session. Tokens are stateless; the client discards its token.",
)
async def sign_out(user: CurrentUser, request_id: RequestId) -> ApiResponse[dict]:
    """Close the session."""
    return ApiResponse(
        data={"signed_out": True},
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/me",
    response_model=ApiResponse[UserResponse],
    summary="Current user",
    description="Return the signed-in user, or 401 when there is no session.",
)
async def get_me(user: CurrentUser, request_id: RequestId) -> ApiResponse[UserResponse]:
    """Return the session user."""
    return ApiResponse(
        data=UserResponse.model_validate(user),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.patch(
    "/me",
    response_model=ApiResponse[UserResponse],
    summary="Update profile",
    description="Change the profile username or avatar URL. Omitted fields are kept; an empty value clears one.",
)
async def update_me(
    data: ProfileUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[UserResponse]:
    """Update the session user's profile."""
    service = AuthService(db)
    user = await service.update_profile(user, data.model_dump(exclude_unset=True))
    return ApiResponse(
        data=UserResponse.model_validate(user),
        metadata=ResponseMetadata(request_id=request_id),
    )
