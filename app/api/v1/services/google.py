"""
Google identity verification.

Turns a Google access token or ID token supplied by the frontend into a
normalized GoogleIdentity.
"""

import base64
import binascii
import json
import logging
from typing import Optional

import httpx
from fastapi import Request, status

from app.api.utils.exceptions import (
    GoogleAccessDeniedException,
    GoogleProviderException,
    GoogleUnreachableException,
    IncompleteIdentityException,
    IncompleteIdTokenPayloadException,
    InvalidAccessTokenException,
    InvalidIdTokenException,
    MalformedIdTokenException,
    MissingCredentialException,
)
from app.api.v1.schemas.auth import GoogleIdentity
from config import settings

logger = logging.getLogger(__name__)


class GoogleIdentityVerifier:
    """Service for resolving Google tokens into verified identities."""

    def __init__(
        self,
        userinfo_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize GoogleIdentityVerifier.

        Args:
            userinfo_url (str, optional): Google user-info endpoint
            timeout (float, optional): Request timeout in seconds
            transport (httpx.AsyncBaseTransport, optional): Custom transport, used by tests
        """
        self.userinfo_url = userinfo_url or settings.GOOGLE_USERINFO_URL
        self.timeout = timeout if timeout is not None else settings.GOOGLE_TIMEOUT
        self.transport = transport

    async def verify(
        self,
        access_token: Optional[str] = None,
        id_token: Optional[str] = None,
    ) -> GoogleIdentity:
        """
        Resolve the supplied token into a Google identity.

        The access token wins when both are given; its failure is final.

        Args:
            access_token (str, optional): OAuth access token
            id_token (str, optional): OpenID Connect ID token

        Returns:
            GoogleIdentity: Identity with non-empty external id and email

        Raises:
            MissingCredentialException: If no token was supplied
            WalletMasterException: Subclass describing why verification failed
        """
        if access_token:
            identity = await self.fetch_userinfo(access_token)
        elif id_token:
            identity = self.decode_id_token(id_token)
        else:
            raise MissingCredentialException()

        if not identity.external_id or not identity.email:
            logger.error("Missing required user info from Google")
            raise IncompleteIdentityException()

        return identity

    async def fetch_userinfo(self, access_token: str) -> GoogleIdentity:
        """
        Exchange an access token for the account's profile.

        Args:
            access_token (str): OAuth access token

        Returns:
            GoogleIdentity: Identity reported by the user-info endpoint

        Raises:
            InvalidAccessTokenException: Google answered 401
            GoogleAccessDeniedException: Google answered 403
            GoogleProviderException: Any other non-2xx answer or an unreadable body
            GoogleUnreachableException: The request never completed
        """
        logger.info("Verifying access token with Google")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.get(
                    self.userinfo_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
        except httpx.RequestError as e:
            logger.error(f"Error reaching Google user-info: {str(e)}", exc_info=True)
            raise GoogleUnreachableException() from e

        if resp.status_code == status.HTTP_401_UNAUTHORIZED:
            logger.warning("Google rejected the access token")
            raise InvalidAccessTokenException()
        if resp.status_code == status.HTTP_403_FORBIDDEN:
            logger.warning("Google denied access to the account")
            raise GoogleAccessDeniedException()
        if not resp.is_success:
            logger.error(f"Google API error: {resp.status_code} {resp.text}")
            raise GoogleProviderException(resp.status_code, resp.text)

        try:
            data = resp.json()
        except ValueError as e:
            logger.error(f"Unreadable Google user-info body: {resp.text}")
            raise GoogleProviderException(resp.status_code, resp.text) from e
        if not isinstance(data, dict):
            raise GoogleProviderException(resp.status_code, resp.text)

        identity = GoogleIdentity(
            external_id=str(data.get("id") or ""),
            email=str(data.get("email") or ""),
            name=data.get("name"),
            picture=data.get("picture") or "",
            email_verified=bool(data.get("verified_email", False)),
        )
        logger.info(f"Google user verified via access token: {identity.email}")
        return identity

    @staticmethod
    def decode_id_token(id_token: str) -> GoogleIdentity:
        """
        Read the identity claims of an ID token.

        Warning:
            The token signature is NOT verified; the payload is trusted as sent.

        Args:
            id_token (str): JWT issued by Google

        Returns:
            GoogleIdentity: Identity built from the ``sub``/``email`` claims

        Raises:
            MalformedIdTokenException: Token does not have three segments
            InvalidIdTokenException: Payload is not base64url encoded JSON
            IncompleteIdTokenPayloadException: ``sub`` or ``email`` missing
        """
        logger.info("Decoding Google ID token")
        segments = id_token.split(".")
        if len(segments) != 3:
            raise MalformedIdTokenException()

        encoded = segments[1]
        try:
            raw = base64.urlsafe_b64decode(encoded + "=" * (-len(encoded) % 4))
            payload = json.loads(raw)
        except (binascii.Error, ValueError) as e:
            logger.warning(f"Error decoding ID token: {str(e)}")
            raise InvalidIdTokenException() from e

        if not isinstance(payload, dict):
            raise InvalidIdTokenException()
        if not payload.get("sub") or not payload.get("email"):
            raise IncompleteIdTokenPayloadException()

        identity = GoogleIdentity(
            external_id=str(payload["sub"]),
            email=str(payload["email"]),
            name=payload.get("name") or payload.get("given_name") or "Unknown User",
            picture=payload.get("picture") or "",
            email_verified=bool(payload.get("email_verified", False)),
        )
        logger.info(f"Google user read from ID token: {identity.email}")
        return identity


def get_identity_verifier(request: Request) -> GoogleIdentityVerifier:
    """Dependency that provides the verifier configured on ``app.state``."""
    return request.app.state.identity_verifier
