import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.api.core.auth import AuthContext, resolve_auth_context
from app.api.core.dependencies import get_current_user
from app.api.db.database import get_storage
from app.api.db.storage import Storage
from app.api.utils.auth_cookie import clear_auth_cookie, get_token_from_request, set_auth_cookie
from app.api.utils.auth_token import create_jwt_token
from app.api.utils.exceptions import NotAuthenticatedException
from app.api.utils.response import success_response
from app.api.v1.models.user import User
from app.api.v1.schemas.auth import GoogleAuthRequest, SessionValidationResponse
from app.api.v1.schemas.user import UserResponse
from app.api.v1.services.auth import AuthService
from app.api.v1.services.google import GoogleIdentityVerifier, get_identity_verifier

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/google", response_model=UserResponse)
async def google_auth(
    payload: GoogleAuthRequest,
    request: Request,
    storage: Storage = Depends(get_storage),
    verifier: GoogleIdentityVerifier = Depends(get_identity_verifier),
) -> JSONResponse:
    """
    Sign in with Google.

    Verifies the Google token sent by the frontend, creates the user on first
    sign-in and sets the session cookie.

    Args:
        payload (GoogleAuthRequest): Google access token and/or ID token
        request (Request): FastAPI request object
        storage (Storage): Storage backend
        verifier (GoogleIdentityVerifier): Google identity verifier

    Returns:
        JSONResponse: The user merged with a success message
    """
    logger.info(
        f"Google auth request received: access_token={bool(payload.access_token)} "
        f"id_token={bool(payload.id_token)} origin={request.headers.get('origin')}"
    )

    identity = await verifier.verify(
        access_token=payload.access_token,
        id_token=payload.id_token,
    )
    user = await AuthService.get_or_create_google_user(identity, storage)

    token = create_jwt_token(
        AuthContext(user_id=user.id, email=user.email, name=user.name).to_claims()
    )

    logger.info(f"User {user.id} logged in successfully")

    response = success_response(
        status_code=status.HTTP_200_OK,
        message="Authentication successful",
        data=UserResponse.model_validate(user).to_json(),
    )
    set_auth_cookie(response, token)
    return response


@router.get("/validate", response_model=SessionValidationResponse)
async def validate_session(
    request: Request,
    auth: Optional[AuthContext] = Depends(resolve_auth_context),
    storage: Storage = Depends(get_storage),
) -> JSONResponse:
    """
    Check whether the request carries a usable session.

    Distinguishes a missing cookie from one that no longer verifies.

    Returns:
        JSONResponse: ``{valid: true, user}``

    Raises:
        NotAuthenticatedException: If there is no usable session
    """
    if get_token_from_request(request) is None:
        raise NotAuthenticatedException()

    if auth is None:
        raise NotAuthenticatedException("Session expired or invalid. Please log in again.")

    user = await storage.get_user(auth.user_id)
    if not user:
        logger.warning(f"Session presented for missing user {auth.user_id}")
        raise NotAuthenticatedException()

    return success_response(
        status_code=status.HTTP_200_OK,
        data={"valid": True, "user": UserResponse.model_validate(user).to_json()},
    )


@router.post("/logout")
async def logout() -> JSONResponse:
    """
    Logout by expiring the session cookie.

    Tokens are not revoked server side; the cookie is simply cleared.

    Returns:
        JSONResponse: Logout confirmation
    """
    response = success_response(
        status_code=status.HTTP_200_OK,
        message="Logged out successfully",
    )
    clear_auth_cookie(response)
    return response


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)) -> JSONResponse:
    """
    Get the signed-in user's current record.

    Returns:
        JSONResponse: The user
    """
    return success_response(
        status_code=status.HTTP_200_OK,
        data=UserResponse.model_validate(current_user).to_json(),
    )
