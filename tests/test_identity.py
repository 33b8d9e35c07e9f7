"""
Identity Client Unit Tests

Tests for FirebaseIdentityClient with HTTP and firebase_admin mocked.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from aptiprep.core.errors import AuthError
from aptiprep.core.identity import AuthSession, FirebaseIdentityClient


@pytest.fixture
def client():
    return FirebaseIdentityClient(api_key="test-key", app=MagicMock())


class TestSignIn:
    """Tests for password sign-in."""

    @pytest.mark.asyncio
    async def test_success(self, client, mock_httpx_response):
        """Verify a 200 response becomes an AuthSession."""
        response = mock_httpx_response(json_data={
            "localId": "uid-1",
            "email": "a@b.c",
            "idToken": "id-token",
            "refreshToken": "refresh-token",
            "displayName": "Alice",
        })

        with patch("aptiprep.core.identity.post_with_retry", AsyncMock(return_value=response)) as mock_post:
            session = await client.sign_in_with_password("a@b.c", "pw")

        assert session == AuthSession(
            uid="uid-1",
            email="a@b.c",
            id_token="id-token",
            refresh_token="refresh-token",
            display_name="Alice",
        )
        kwargs = mock_post.call_args.kwargs
        assert kwargs["params"] == {"key": "test-key"}
        assert kwargs["json"]["returnSecureToken"] is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code,message", [
        ("INVALID_PASSWORD", "Invalid email or password"),
        ("USER_DISABLED", "This account has been disabled"),
        ("TOO_MANY_ATTEMPTS_TRY_LATER : Access disabled", "Too many attempts, try again later"),
        ("SOMETHING_NEW", "Failed to sign in"),
    ])
    async def test_error_codes(self, client, mock_httpx_response, code, message):
        """Verify provider error codes map to readable messages."""
        response = mock_httpx_response(status_code=400, json_data={"error": {"message": code}})

        with patch("aptiprep.core.identity.post_with_retry", AsyncMock(return_value=response)):
            with pytest.raises(AuthError) as exc_info:
                await client.sign_in_with_password("a@b.c", "pw")

        assert str(exc_info.value) == message

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        """Verify sign-in is refused without a web API key."""
        client = FirebaseIdentityClient(api_key="", app=MagicMock())

        with pytest.raises(AuthError, match="FIREBASE_WEB_API_KEY"):
            await client.sign_in_with_password("a@b.c", "pw")

    @pytest.mark.asyncio
    async def test_transport_error(self, client):
        """Verify a network failure surfaces as AuthError rather than escaping."""
        failing = AsyncMock(side_effect=httpx.ConnectError("unreachable"))

        with patch("aptiprep.core.identity.post_with_retry", failing):
            with pytest.raises(AuthError) as exc_info:
                await client.sign_in_with_password("a@b.c", "pw")

        assert str(exc_info.value) == "Failed to sign in"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_non_json_body(self, client, mock_httpx_response):
        """Verify an HTML error page is reported as a failed sign-in."""
        response = mock_httpx_response(status_code=502, text="<html>Bad Gateway</html>")
        response.json.side_effect = ValueError("Expecting value")

        with patch("aptiprep.core.identity.post_with_retry", AsyncMock(return_value=response)):
            with pytest.raises(AuthError, match="Failed to sign in"):
                await client.sign_in_with_password("a@b.c", "pw")

    @pytest.mark.asyncio
    async def test_non_object_body(self, client, mock_httpx_response):
        response = mock_httpx_response()
        response.json.return_value = ["unexpected"]

        with patch("aptiprep.core.identity.post_with_retry", AsyncMock(return_value=response)):
            with pytest.raises(AuthError, match="Failed to sign in"):
                await client.sign_in_with_password("a@b.c", "pw")


class TestTokens:
    """Tests for refresh, verification and claims."""

    @pytest.mark.asyncio
    async def test_refresh(self, client, mock_httpx_response):
        """Verify refresh swaps in the new tokens and keeps the profile."""
        response = mock_httpx_response(json_data={
            "user_id": "uid-1",
            "id_token": "new-id",
            "refresh_token": "new-refresh",
        })
        session = AuthSession(uid="uid-1", email="a@b.c", id_token="old", refresh_token="r", display_name="A")

        with patch("aptiprep.core.identity.post_with_retry", AsyncMock(return_value=response)):
            refreshed = await client.refresh(session)

        assert refreshed.id_token == "new-id"
        assert refreshed.refresh_token == "new-refresh"
        assert refreshed.display_name == "A"

    @pytest.mark.asyncio
    async def test_refresh_transport_error(self, client):
        """Verify a refresh that cannot reach the token endpoint asks for a new sign-in."""
        session = AuthSession(uid="uid-1", email="a@b.c", id_token="old", refresh_token="r")
        failing = AsyncMock(side_effect=httpx.ReadTimeout("timed out"))

        with patch("aptiprep.core.identity.post_with_retry", failing):
            with pytest.raises(AuthError, match="Session expired, sign in again"):
                await client.refresh(session)

    @pytest.mark.asyncio
    async def test_refresh_non_json_body(self, client, mock_httpx_response):
        response = mock_httpx_response(status_code=500)
        response.json.side_effect = ValueError("Expecting value")
        session = AuthSession(uid="uid-1", email="a@b.c", id_token="old", refresh_token="r")

        with patch("aptiprep.core.identity.post_with_retry", AsyncMock(return_value=response)):
            with pytest.raises(AuthError, match="Session expired, sign in again"):
                await client.refresh(session)

    @pytest.mark.asyncio
    async def test_verify_rejects_bad_token(self, client):
        """Verify firebase_admin errors become AuthError."""
        with patch("aptiprep.core.identity.auth.verify_id_token", side_effect=ValueError("bad")):
            with pytest.raises(AuthError, match="Invalid or expired session token"):
                await client.verify_id_token("garbage")

    @pytest.mark.asyncio
    async def test_get_claims_force_refresh(self, client, mock_httpx_response):
        """Verify force_refresh verifies the refreshed token."""
        response = mock_httpx_response(json_data={"id_token": "fresh", "refresh_token": "r2"})
        session = AuthSession(uid="uid-1", email="a@b.c", id_token="stale", refresh_token="r1")

        with patch("aptiprep.core.identity.post_with_retry", AsyncMock(return_value=response)):
            with patch("aptiprep.core.identity.auth.verify_id_token", return_value={"uid": "uid-1", "admin": True}) as mock_verify:
                claims = await client.get_claims(session, force_refresh=True)

        assert claims["admin"] is True
        assert mock_verify.call_args.args[0] == "fresh"
        assert session.id_token == "fresh"

    @pytest.mark.asyncio
    async def test_set_custom_claims(self, client):
        """Verify claims are passed through to firebase_admin."""
        with patch("aptiprep.core.identity.auth.set_custom_user_claims") as mock_set:
            await client.set_custom_claims("uid-1", {"role": "admin", "admin": True})

        mock_set.assert_called_once_with("uid-1", {"role": "admin", "admin": True}, app=client.app)
