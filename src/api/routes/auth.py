"""Authentication routes (register, login, current user)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_credential_store, get_token_service
from api.models import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    MeResponse,
    MessageResponse,
    RegisterRequest,
    UpdateProfileRequest,
    UserResponse,
)
from api.security import get_current_user_required, unauthorized_error
from domain.model.errors import DuplicateError, ValidationError
from services import auth_service
from services.credential_store import CredentialStore
from services.token_service import TokenService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    store: CredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
):
    """Register a new user and return a session token.

    Raises:
        HTTPException: 400 if a field is missing or the email is already registered
    """
    try:
        profile, token = await auth_service.register(
            store,
            tokens,
            name=request.name,
            email=request.email,
            phone=request.phone,
            password=request.password,
            role=request.role,
        )
    except DuplicateError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return AuthResponse(
        message="User registered successfully",
        token=token,
        user=UserResponse.from_profile(profile),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    store: CredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
):
    """Login user and return a session token.

    Raises:
        HTTPException: 400 if credentials are invalid
    """
    try:
        profile, token = await auth_service.authenticate(
            store, tokens, email=request.email, password=request.password,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserResponse.from_profile(profile),
    )


@router.get("/me", response_model=MeResponse)
async def get_me(current_user: UserResponse = Depends(get_current_user_required)):
    """Get current authenticated user info."""
    return MeResponse(user=current_user)


@router.patch("/me", response_model=MeResponse)
async def update_me(
    request: UpdateProfileRequest,
    current_user: UserResponse = Depends(get_current_user_required),
    store: CredentialStore = Depends(get_credential_store),
):
    """Update name and/or phone of the current user."""
    try:
        profile = await store.update_profile(current_user.id, name=request.name, phone=request.phone)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if profile is None:
        raise unauthorized_error()

    return MeResponse(user=UserResponse.from_profile(profile))


@router.put("/password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    current_user: UserResponse = Depends(get_current_user_required),
    store: CredentialStore = Depends(get_credential_store),
):
    """Change the current user's password.

    Tokens issued before the change stay valid until they expire.
    """
    try:
        await auth_service.change_password(
            store, current_user.id, request.current_password, request.new_password,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return MessageResponse(message="Password updated")
