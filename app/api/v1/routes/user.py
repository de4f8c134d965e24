"""
User profile routes.

This module provides endpoints for wallet linking, profile edits and the
signed-in user's transaction history.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from app.api.core.auth import AuthContext, require_auth
from app.api.db.database import get_storage
from app.api.db.storage import Storage
from app.api.utils.exceptions import ErrorCode, StorageException
from app.api.utils.response import success_response
from app.api.utils.validation import validate_payload
from app.api.v1.schemas.transaction import TransactionResponse
from app.api.v1.schemas.user import ProfileUpdateRequest, UserResponse, WalletUpdateRequest
from app.api.v1.services.transaction import TransactionService
from app.api.v1.services.user import UserService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["User"])


def _transactions_response(transactions) -> JSONResponse:
    return success_response(
        status_code=status.HTTP_200_OK,
        data=[TransactionResponse.model_validate(tx).to_json() for tx in transactions],
    )


@router.api_route("/user/wallet", methods=["PUT", "PATCH"], response_model=UserResponse)
async def update_my_wallet(
    payload: WalletUpdateRequest,
    auth: AuthContext = Depends(require_auth),
    storage: Storage = Depends(get_storage),
) -> JSONResponse:
    """
    Link a wallet address to the signed-in user.

    Args:
        payload (WalletUpdateRequest): New wallet address
        auth (AuthContext): Authenticated user
        storage (Storage): Storage backend

    Returns:
        JSONResponse: Updated user
    """
    try:
        user = await UserService.update_wallet(auth.user_id, payload.wallet_address, storage)
    except StorageException as e:
        raise StorageException("Failed to update wallet", error_code=ErrorCode.UPDATE_ERROR) from e

    return success_response(
        status_code=status.HTTP_200_OK,
        data=UserResponse.model_validate(user).to_json(),
    )


@router.patch("/user/profile", response_model=UserResponse)
async def update_my_profile(
    payload: ProfileUpdateRequest,
    auth: AuthContext = Depends(require_auth),
    storage: Storage = Depends(get_storage),
) -> JSONResponse:
    """
    Change the signed-in user's display name.

    Returns:
        JSONResponse: Updated user
    """
    try:
        user = await UserService.update_profile(auth.user_id, payload.name, storage)
    except StorageException as e:
        raise StorageException("Failed to update profile", error_code=ErrorCode.UPDATE_ERROR) from e

    return success_response(
        status_code=status.HTTP_200_OK,
        data=UserResponse.model_validate(user).to_json(),
    )


@router.get("/user/transactions", response_model=list[TransactionResponse])
async def list_my_transactions(
    auth: AuthContext = Depends(require_auth),
    storage: Storage = Depends(get_storage),
) -> JSONResponse:
    """
    List the signed-in user's transactions, newest first.

    Returns:
        JSONResponse: Transactions
    """
    try:
        transactions = await TransactionService.list_transactions(auth.user_id, storage)
    except StorageException as e:
        raise StorageException("Failed to get transactions", error_code=ErrorCode.FETCH_ERROR) from e

    return _transactions_response(transactions)


@router.api_route("/users/{user_id}/wallet", methods=["PUT", "PATCH"], response_model=UserResponse)
async def update_user_wallet(
    user_id: UUID,
    payload: dict = Body(...),
    auth: AuthContext = Depends(require_auth),
    storage: Storage = Depends(get_storage),
) -> JSONResponse:
    """
    Link a wallet address to the user identified in the path.

    Only the user themselves may do this. Ownership is checked before the
    body is validated.

    Args:
        user_id (UUID): Target user UUID
        payload (dict): Raw body, expected ``{walletAddress}``
        auth (AuthContext): Authenticated user
        storage (Storage): Storage backend

    Returns:
        JSONResponse: Updated user
    """
    try:
        await UserService.get_owned_user(user_id, auth, storage)
        wallet = validate_payload(WalletUpdateRequest, payload, "Invalid wallet address format")
        user = await UserService.update_wallet(user_id, wallet.wallet_address, storage)
    except StorageException as e:
        raise StorageException("Failed to update wallet", error_code=ErrorCode.UPDATE_ERROR) from e

    return success_response(
        status_code=status.HTTP_200_OK,
        data=UserResponse.model_validate(user).to_json(),
    )


@router.get("/users/{user_id}/transactions", response_model=list[TransactionResponse])
async def list_user_transactions(
    user_id: UUID,
    auth: AuthContext = Depends(require_auth),
    storage: Storage = Depends(get_storage),
) -> JSONResponse:
    """
    List the transactions of the user identified in the path.

    Returns:
        JSONResponse: Transactions, newest first
    """
    try:
        await UserService.get_owned_user(
            user_id, auth, storage,
            denied_message="You can only access your own transactions",
        )
        transactions = await TransactionService.list_transactions(user_id, storage)
    except StorageException as e:
        raise StorageException("Failed to get transactions", error_code=ErrorCode.FETCH_ERROR) from e

    return _transactions_response(transactions)
