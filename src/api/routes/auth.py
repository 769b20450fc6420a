"""Authentication routes (login hand-off, current user).

The OAuth2/OIDC handshake itself happens in the upstream security layer;
it posts the provider's user-info attributes and access token to the
callback route once the code exchange has succeeded.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import get_profile_resolver, get_user_repo
from api.models import AuthResponse, OAuthLoginRequest, UserResponse
from api.security import create_access_token, get_current_user_required, to_response
from api.security_policy import SecurityPolicy
from domain.model.errors import DomainError
from domain.model.provider import AccessToken
from port.user_repository import UserRepository
from services import login_service
from services.profile_resolver import ProfileResolver

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def build_callback_router(policy: SecurityPolicy) -> APIRouter:
    """Create the login hand-off router mounted under the policy's callback path."""
    callback_router = APIRouter(prefix=policy.callback_base_path, tags=["auth"])

    @callback_router.post("/{registration_id}", response_model=AuthResponse)
    def oauth_callback(
        registration_id: str,
        request: OAuthLoginRequest,
        repo: UserRepository = Depends(get_user_repo),
        resolver: ProfileResolver = Depends(get_profile_resolver),
    ):
        """Provision the local user for a completed federated login.

        A login that cannot be turned into a local user answers 401 with the
        policy's failure redirect in the body.
        """
        access_token = None
        if request.access_token:
            access_token = AccessToken(request.access_token, frozenset(request.scopes))

        try:
            user = login_service.complete_login(
                repo, resolver, registration_id, request.attributes, access_token,
            )
        except DomainError as e:
            logger.warning(
                "Login failed",
                extra={"registration_id": registration_id, "error_type": type(e).__name__, "error": str(e)},
            )
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Login failed", "redirect_url": policy.failure_url},
            )

        logger.info(
            "User logged in",
            extra={"userId": user.id, "provider": user.provider, "registration_id": registration_id},
        )
        return AuthResponse(
            token=create_access_token(user, registration_id),
            user=to_response(user),
            redirect_url=policy.success_url,
        )

    return callback_router


@router.get("/me", response_model=UserResponse)
def get_me(current_user: UserResponse = Depends(get_current_user_required)):
    """Get current authenticated user info.

    Raises:
        HTTPException: 401 if not authenticated
    """
    return current_user
