"""Google identity verifier tests."""

import base64
import json

import httpx
import pytest

from app.api.utils.exceptions import (
    ErrorCode,
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
from app.api.v1.services.google import GoogleIdentityVerifier


def _verifier(status_code=200, body=None, text=None, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if text is not None:
            return httpx.Response(status_code, text=text)
        return httpx.Response(status_code, json=body)

    return GoogleIdentityVerifier(transport=httpx.MockTransport(handler))


def _id_token(payload) -> str:
    encoded = base64.urlsafe_b64encode(json.dumps(payload).encode()).decode().rstrip("=")
    return f"eyJhbGciOiJSUzI1NiJ9.{encoded}.signature"


async def test_access_token_resolves_profile():
    """Test a user-info answer maps onto the identity."""
    seen = []
    verifier = _verifier(
        body={"id": "g1", "email": "a@b.com", "name": "A", "verified_email": True},
        seen=seen,
    )

    identity = await verifier.verify(access_token="valid")

    assert identity.external_id == "g1"
    assert identity.email == "a@b.com"
    assert identity.name == "A"
    assert identity.picture == ""
    assert identity.email_verified is True
    assert seen[0].headers["authorization"] == "Bearer valid"


async def test_access_token_wins_over_id_token():
    """Test the ID token is ignored when an access token is present."""
    verifier = _verifier(status_code=401, body={"error": "invalid_token"})

    with pytest.raises(InvalidAccessTokenException):
        await verifier.verify(
            access_token="expired",
            id_token=_id_token({"sub": "g1", "email": "a@b.com"}),
        )


@pytest.mark.parametrize(
    "status_code, exception, http_status",
    [
        (401, InvalidAccessTokenException, 401),
        (403, GoogleAccessDeniedException, 403),
        (500, GoogleProviderException, 502),
        (429, GoogleProviderException, 502),
    ],
)
async def test_provider_errors_are_mapped(status_code, exception, http_status):
    """Test each provider answer becomes the matching error kind."""
    verifier = _verifier(status_code=status_code, body={"error": "boom"})

    with pytest.raises(exception) as exc_info:
        await verifier.verify(access_token="token")

    assert exc_info.value.status_code == http_status


async def test_provider_error_keeps_status_and_body():
    """Test upstream status and body are carried in the error details."""
    verifier = _verifier(status_code=500, text="backend exploded")

    with pytest.raises(GoogleProviderException) as exc_info:
        await verifier.verify(access_token="token")

    assert exc_info.value.error_code == ErrorCode.GOOGLE_API_ERROR
    assert exc_info.value.details == {"providerStatus": 500, "providerBody": "backend exploded"}


async def test_non_json_profile_is_a_provider_error():
    verifier = _verifier(status_code=200, text="<html>")

    with pytest.raises(GoogleProviderException):
        await verifier.verify(access_token="token")


async def test_unreachable_provider():
    """Test a transport failure maps to a 503."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    verifier = GoogleIdentityVerifier(transport=httpx.MockTransport(handler))

    with pytest.raises(GoogleUnreachableException) as exc_info:
        await verifier.verify(access_token="token")

    assert exc_info.value.status_code == 503


async def test_profile_without_email_is_incomplete():
    verifier = _verifier(body={"id": "g1"})

    with pytest.raises(IncompleteIdentityException):
        await verifier.verify(access_token="token")


async def test_missing_credential():
    """Test no token at all fails without contacting Google."""
    seen = []
    verifier = _verifier(body={}, seen=seen)

    with pytest.raises(MissingCredentialException):
        await verifier.verify()

    assert seen == []


async def test_id_token_is_decoded():
    """Test the ID token payload is read and the name falls back to given_name."""
    verifier = _verifier(body={})

    identity = await verifier.verify(
        id_token=_id_token({"sub": "g2", "email": "c@d.com", "given_name": "Cee"})
    )

    assert identity.external_id == "g2"
    assert identity.email == "c@d.com"
    assert identity.name == "Cee"


def test_id_token_without_any_name():
    identity = GoogleIdentityVerifier.decode_id_token(_id_token({"sub": "g3", "email": "e@f.com"}))
    assert identity.name == "Unknown User"


@pytest.mark.parametrize(
    "token, exception",
    [
        ("only.two", MalformedIdTokenException),
        ("a.b.c.d", MalformedIdTokenException),
        ("header.!!!not-base64!!!.sig", InvalidIdTokenException),
        (f"header.{base64.urlsafe_b64encode(b'not json').decode()}.sig", InvalidIdTokenException),
        ("header.W10.sig", InvalidIdTokenException),
        (_id_token({"email": "a@b.com"}), IncompleteIdTokenPayloadException),
        (_id_token({"sub": "g1"}), IncompleteIdTokenPayloadException),
    ],
)
def test_bad_id_tokens(token, exception):
    """Test malformed, undecodable and incomplete ID tokens are rejected."""
    with pytest.raises(exception):
        GoogleIdentityVerifier.decode_id_token(token)
