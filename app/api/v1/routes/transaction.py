"""
Transaction routes.

Every endpoint works on the caller's own transactions only.
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
from app.api.v1.schemas.transaction import (
    CreateTransactionRequest,
    TransactionResponse,
    UpdateTransactionRequest,
)
from app.api.v1.services.transaction import TransactionService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.post("", response_model=TransactionResponse)
async def create_transaction(
    payload: CreateTransactionRequest,
    auth: AuthContext = Depends(require_auth),
    storage: Storage = Depends(get_storage),
) -> JSONResponse:
    """
    Record a new transaction for the signed-in user.

    The owner is always the caller; any ``userId`` in the body is ignored.
    New transactions start ``pending`` and gasless.

    Args:
        payload (CreateTransactionRequest): Transaction fields
        auth (AuthContext): Authenticated user
        storage (Storage): Storage backend

    Returns:
        JSONResponse: Created transaction
    """
    try:
        transaction = await TransactionService.create_transaction(payload, auth, storage)
    except StorageException as e:
        raise StorageException("Failed to create transaction", error_code=ErrorCode.CREATION_ERROR) from e

    return success_response(
        status_code=status.HTTP_200_OK,
        data=TransactionResponse.model_validate(transaction).to_json(),
    )


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: UUID,
    auth: AuthContext = Depends(require_auth),
    storage: Storage = Depends(get_storage),
) -> JSONResponse:
    """
    Get one of the caller's transactions.

    Returns:
        JSONResponse: The transaction
    """
    try:
        transaction = await TransactionService.get_owned_transaction(transaction_id, auth, storage)
    except StorageException as e:
        raise StorageException("Failed to get transaction", error_code=ErrorCode.FETCH_ERROR) from e

    return success_response(
        status_code=status.HTTP_200_OK,
        data=TransactionResponse.model_validate(transaction).to_json(),
    )


@router.patch("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    transaction_id: UUID,
    payload: dict = Body(...),
    auth: AuthContext = Depends(require_auth),
    storage: Storage = Depends(get_storage),
) -> JSONResponse:
    """
    Update the status of one of the caller's transactions.

    Used once a transaction is broadcast or confirmed. Ownership is checked
    before the body is validated.

    Args:
        transaction_id (UUID): Transaction UUID
        payload (dict): Raw body with any of ``status``, ``hash``, ``errorMessage``
        auth (AuthContext): Authenticated user
        storage (Storage): Storage backend

    Returns:
        JSONResponse: Updated transaction
    """
    try:
        await TransactionService.get_owned_transaction(
            transaction_id, auth, storage,
            denied_message="You can only update your own transactions",
        )
        update = validate_payload(UpdateTransactionRequest, payload, "Invalid update data")
        transaction = await TransactionService.update_transaction(
            transaction_id, update.to_updates(), storage
        )
    except StorageException as e:
        raise StorageException("Failed to update transaction", error_code=ErrorCode.UPDATE_ERROR) from e

    return success_response(
        status_code=status.HTTP_200_OK,
        data=TransactionResponse.model_validate(transaction).to_json(),
    )
