"""Access guard — bearer token authentication for identity-bound routes."""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_credential_store, get_token_service
from api.models import UserResponse
from domain.model.errors import AuthenticationError, TokenError
from domain.model.user import UserProfile
from services.credential_store import CredentialStore
from services.token_service import TokenService

logger = logging.getLogger(__name__)

# Missing or non-Bearer headers resolve to None instead of FastAPI's own 403
security = HTTPBearer(auto_error=False)

# Single response for every authentication failure
UNAUTHORIZED_DETAIL = "Not authenticated"


class AccessGuard:
    """Resolves the caller's identity from bearer credentials."""

    def __init__(self, tokens: TokenService, store: CredentialStore):
        self.tokens = tokens
        self.store = store

    async def authenticate(self, credentials: Optional[HTTPAuthorizationCredentials]) -> UserProfile:
        """Return the caller's public profile.

        Raises:
            AuthenticationError: for every failure (no token, bad token,
                expired token, identity no longer exists)
        """
        if credentials is None or not credentials.credentials:
            raise AuthenticationError()

        try:
            user_id = self.tokens.validate(credentials.credentials)
        except TokenError as e:
            logger.debug("Token rejected", extra={"reason": type(e).__name__})
            raise AuthenticationError() from None

        profile = await self.store.find_by_id(user_id)
        if profile is None:
            logger.info("Token subject no longer exists", extra={"userId": user_id})
            raise AuthenticationError()

        return profile


def get_access_guard(
    tokens: TokenService = Depends(get_token_service),
    store: CredentialStore = Depends(get_credential_store),
) -> AccessGuard:
    return AccessGuard(tokens, store)


def unauthorized_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=UNAUTHORIZED_DETAIL,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user_required(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    guard: AccessGuard = Depends(get_access_guard),
) -> UserResponse:
    """Get current authenticated user (required). Raises 401 if not authenticated.

    The resolved user is also stored on request.state.user.
    """
    try:
        profile = await guard.authenticate(credentials)
    except AuthenticationError:
        raise unauthorized_error() from None

    user = UserResponse.from_profile(profile)
    request.state.user = user
    return user
