"""
Custom exception classes for the Wallet Master API.

This module defines all custom exceptions used throughout the application
for consistent error handling and logging. Every exception carries an
``ErrorCode`` which is sent to clients as the ``error`` field.
"""

from enum import Enum
from typing import Any, Optional
from fastapi import status


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in the ``error`` field."""

    # Request validation
    VALIDATION_ERROR = "VALIDATION_ERROR"
    USER_VALIDATION_ERROR = "USER_VALIDATION_ERROR"

    # Session
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    ACCESS_DENIED = "ACCESS_DENIED"

    # Google identity
    INVALID_ACCESS_TOKEN = "INVALID_ACCESS_TOKEN"
    GOOGLE_API_ERROR = "GOOGLE_API_ERROR"
    GOOGLE_SERVICE_ERROR = "GOOGLE_SERVICE_ERROR"
    INVALID_ID_TOKEN_FORMAT = "INVALID_ID_TOKEN_FORMAT"
    INVALID_ID_TOKEN = "INVALID_ID_TOKEN"
    INVALID_ID_TOKEN_PAYLOAD = "INVALID_ID_TOKEN_PAYLOAD"
    INCOMPLETE_USER_DATA = "INCOMPLETE_USER_DATA"

    # Records
    NOT_FOUND = "NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    TRANSACTION_NOT_FOUND = "TRANSACTION_NOT_FOUND"

    # Storage
    DATABASE_ERROR = "DATABASE_ERROR"
    FETCH_ERROR = "FETCH_ERROR"
    UPDATE_ERROR = "UPDATE_ERROR"
    CREATION_ERROR = "CREATION_ERROR"
    USER_CREATION_ERROR = "USER_CREATION_ERROR"

    INTERNAL_ERROR = "INTERNAL_ERROR"


class WalletMasterException(Exception):
    """
    Base exception class for all Wallet Master exceptions.

    Attributes:
        message (str): Error message
        status_code (int): HTTP status code
        error_code (ErrorCode): Application-specific error code
        details (Any): Additional error details
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Any] = None,
    ):
        """
        Initialize WalletMasterException.

        Args:
            message (str): Error message
            status_code (int): HTTP status code (default: 500)
            error_code (ErrorCode): Application-specific error code (default: INTERNAL_ERROR)
            details (Any, optional): Additional error details
        """
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)


class ValidationException(WalletMasterException):
    """
    Raised when a request body or parameter fails validation.

    Examples:
        >>> raise ValidationException("Invalid wallet address format", details=[...])
    """

    def __init__(self, message: str = "Invalid request data", details: Optional[Any] = None):
        """Initialize ValidationException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=ErrorCode.VALIDATION_ERROR,
            details=details,
        )


class AuthenticationRequiredException(WalletMasterException):
    """Raised by protected endpoints when the request carries no valid session."""

    def __init__(self, message: str = "Authentication required. Please log in.", details: Optional[Any] = None):
        """Initialize AuthenticationRequiredException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code=ErrorCode.AUTHENTICATION_REQUIRED,
            details=details,
        )


class NotAuthenticatedException(WalletMasterException):
    """Raised by session validation when no usable session is found."""

    def __init__(self, message: str = "No valid session found", details: Optional[Any] = None):
        """Initialize NotAuthenticatedException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code=ErrorCode.NOT_AUTHENTICATED,
            details=details,
        )


class AccessDeniedException(WalletMasterException):
    """
    Raised when an authenticated user touches a resource owned by someone else,
    or when Google refuses access to the account.

    Examples:
        >>> raise AccessDeniedException("You can only update your own transactions")
    """

    def __init__(self, message: str = "Access denied", details: Optional[Any] = None):
        """Initialize AccessDeniedException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            error_code=ErrorCode.ACCESS_DENIED,
            details=details,
        )


class UserNotFoundException(WalletMasterException):
    """
    Raised when a user account is not found.

    Examples:
        >>> raise UserNotFoundException("User not found")
    """

    def __init__(self, message: str = "User not found", details: Optional[Any] = None):
        """Initialize UserNotFoundException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code=ErrorCode.USER_NOT_FOUND,
            details=details,
        )


class TransactionNotFoundException(WalletMasterException):
    """
    Raised when a transaction is not found in the store.

    Examples:
        >>> raise TransactionNotFoundException("Transaction not found")
    """

    def __init__(self, message: str = "Transaction not found", details: Optional[Any] = None):
        """Initialize TransactionNotFoundException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code=ErrorCode.TRANSACTION_NOT_FOUND,
            details=details,
        )


class DuplicateUserException(WalletMasterException):
    """
    Raised when creating a user collides with an existing email or Google ID.
    """

    def __init__(self, message: str = "Invalid user data from Google.", details: Optional[Any] = None):
        """Initialize DuplicateUserException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=ErrorCode.USER_VALIDATION_ERROR,
            details=details,
        )


class StorageException(WalletMasterException):
    """
    Raised when the storage backend fails.

    Routes usually re-raise this with a route specific error code.
    """

    def __init__(
        self,
        message: str = "Database error occurred. Please try again later.",
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
        details: Optional[Any] = None,
    ):
        """Initialize StorageException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code=error_code,
            details=details,
        )


class MissingCredentialException(WalletMasterException):
    """Raised when neither a Google access token nor an ID token was supplied."""

    def __init__(self, message: str = "Either access_token or id_token must be provided", details: Optional[Any] = None):
        """Initialize MissingCredentialException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=ErrorCode.VALIDATION_ERROR,
            details=details,
        )


class InvalidAccessTokenException(WalletMasterException):
    """Raised when Google rejects the access token (HTTP 401 from user-info)."""

    def __init__(self, message: str = "Invalid or expired Google token. Please try signing in again.", details: Optional[Any] = None):
        """Initialize InvalidAccessTokenException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code=ErrorCode.INVALID_ACCESS_TOKEN,
            details=details,
        )


class GoogleAccessDeniedException(AccessDeniedException):
    """Raised when Google answers the user-info call with HTTP 403."""

    def __init__(self, message: str = "Access denied by Google. Please check your account permissions.", details: Optional[Any] = None):
        """Initialize GoogleAccessDeniedException."""
        super().__init__(message=message, details=details)


class GoogleProviderException(WalletMasterException):
    """
    Raised when Google answers with an unexpected status or an unreadable body.

    Examples:
        >>> raise GoogleProviderException(500, "backend error")
    """

    def __init__(self, provider_status: int, provider_body: str, message: Optional[str] = None):
        """
        Initialize GoogleProviderException.

        Args:
            provider_status (int): HTTP status returned by Google
            provider_body (str): Raw response body returned by Google
            message (str, optional): Override for the client facing message
        """
        self.provider_status = provider_status
        self.provider_body = provider_body
        super().__init__(
            message=message or f"Google authentication service error: {provider_body}",
            status_code=status.HTTP_502_BAD_GATEWAY,
            error_code=ErrorCode.GOOGLE_API_ERROR,
            details={"providerStatus": provider_status, "providerBody": provider_body},
        )


class GoogleUnreachableException(WalletMasterException):
    """
    Raised when the request to Google fails at the network level.

    Examples:
        >>> raise GoogleUnreachableException()
    """

    def __init__(self, message: str = "Unable to verify credentials with Google. Please try again.", details: Optional[Any] = None):
        """Initialize GoogleUnreachableException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error_code=ErrorCode.GOOGLE_SERVICE_ERROR,
            details=details,
        )


class MalformedIdTokenException(WalletMasterException):
    """Raised when an ID token does not have exactly three segments."""

    def __init__(self, message: str = "Invalid ID token format.", details: Optional[Any] = None):
        """Initialize MalformedIdTokenException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=ErrorCode.INVALID_ID_TOKEN_FORMAT,
            details=details,
        )


class InvalidIdTokenException(WalletMasterException):
    """Raised when the ID token payload cannot be decoded."""

    def __init__(self, message: str = "Invalid ID token. Please try signing in again.", details: Optional[Any] = None):
        """Initialize InvalidIdTokenException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=ErrorCode.INVALID_ID_TOKEN,
            details=details,
        )


class IncompleteIdTokenPayloadException(WalletMasterException):
    """Raised when the decoded ID token lacks ``sub`` or ``email``."""

    def __init__(self, message: str = "Invalid ID token payload. Missing required user information.", details: Optional[Any] = None):
        """Initialize IncompleteIdTokenPayloadException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=ErrorCode.INVALID_ID_TOKEN_PAYLOAD,
            details=details,
        )


class IncompleteIdentityException(WalletMasterException):
    """Raised when the verified identity has no external id or email."""

    def __init__(self, message: str = "Incomplete user information from Google.", details: Optional[Any] = None):
        """Initialize IncompleteIdentityException."""
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=ErrorCode.INCOMPLETE_USER_DATA,
            details=details,
        )
