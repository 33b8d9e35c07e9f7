"""
Identity Provider

Adapter over Firebase Authentication:
- Password sign-in and token refresh via the Identity Toolkit REST API
- ID token verification and custom claims via firebase_admin
"""

import abc
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import firebase_admin
import httpx
from firebase_admin import auth
from firebase_admin import exceptions as firebase_exceptions

from aptiprep.core.errors import AuthError
from aptiprep.core.http_client import post_with_retry


logger = logging.getLogger(__name__)

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"
SECURE_TOKEN_URL = "https://securetoken.googleapis.com/v1/token"

# Identity Toolkit error codes mapped to user-facing messages
SIGN_IN_ERRORS = {
    "EMAIL_NOT_FOUND": "Invalid email or password",
    "INVALID_PASSWORD": "Invalid email or password",
    "INVALID_LOGIN_CREDENTIALS": "Invalid email or password",
    "INVALID_EMAIL": "Invalid email address",
    "USER_DISABLED": "This account has been disabled",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many attempts, try again later",
}


@dataclass
class AuthSession:
    """Tokens and identity of a signed-in user."""
    uid: str
    email: str
    id_token: str
    refresh_token: str = ""
    display_name: str = ""
    photo_url: str = ""


class IdentityProvider(abc.ABC):
    """Authentication collaborator used by sessions and the API."""

    @abc.abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password; raises AuthError on failure."""

    @abc.abstractmethod
    async def refresh(self, session: AuthSession) -> AuthSession:
        """Exchange the refresh token for a fresh ID token."""

    @abc.abstractmethod
    async def verify_id_token(self, id_token: str) -> Dict[str, Any]:
        """Verify an ID token and return its claims; raises AuthError if invalid."""

    @abc.abstractmethod
    async def set_custom_claims(self, uid: str, claims: Dict[str, Any]) -> None:
        """Replace the custom claims of ``uid``."""

    async def get_claims(self, session: AuthSession, force_refresh: bool = False) -> Dict[str, Any]:
        """
        Return the claims of the session's ID token.

        With ``force_refresh`` the token is refreshed first so that recently
        changed custom claims are visible.
        """
        if force_refresh and session.refresh_token:
            refreshed = await self.refresh(session)
            session.id_token = refreshed.id_token
            session.refresh_token = refreshed.refresh_token
        return await self.verify_id_token(session.id_token)


def _error_message(response_json: Dict[str, Any], default: str) -> str:
    code = response_json.get("error", {}).get("message", "")
    # Codes can carry a suffix, e.g. "TOO_MANY_ATTEMPTS_TRY_LATER : ..."
    code = code.split(" ")[0]
    return SIGN_IN_ERRORS.get(code, default)


class FirebaseIdentityClient(IdentityProvider):
    """IdentityProvider backed by Firebase Authentication."""

    def __init__(
        self,
        api_key: str,
        app: Optional[firebase_admin.App] = None,
        max_retries: int = 0,
    ):
        self._api_key = api_key
        self._app = app
        self._max_retries = max_retries

    @property
    def app(self) -> firebase_admin.App:
        if self._app is None:
            from aptiprep.core.firebase import get_firebase_app

            self._app = get_firebase_app()
        return self._app

    async def _post(self, url: str, failure_message: str, **kwargs: Any) -> Tuple[httpx.Response, Dict[str, Any]]:
        """
        POST to a Google identity endpoint and decode the JSON body.

        Transport errors and non-JSON bodies raise AuthError(failure_message).
        """
        try:
            response = await post_with_retry(
                url,
                params={"key": self._api_key},
                max_retries=self._max_retries,
                **kwargs,
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Identity request to {url} failed: {e}")
            raise AuthError(failure_message) from e

        if not isinstance(data, dict):
            raise AuthError(failure_message)
        return response, data

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        if not self._api_key:
            raise AuthError("FIREBASE_WEB_API_KEY is not configured")

        response, data = await self._post(
            f"{IDENTITY_TOOLKIT_URL}/accounts:signInWithPassword",
            "Failed to sign in",
            json={"email": email, "password": password, "returnSecureToken": True},
        )

        if response.status_code != 200:
            raise AuthError(_error_message(data, "Failed to sign in"))

        return AuthSession(
            uid=data["localId"],
            email=data.get("email", email),
            id_token=data["idToken"],
            refresh_token=data.get("refreshToken", ""),
            display_name=data.get("displayName", ""),
            photo_url=data.get("profilePicture", ""),
        )

    async def refresh(self, session: AuthSession) -> AuthSession:
        response, data = await self._post(
            SECURE_TOKEN_URL,
            "Session expired, sign in again",
            data={"grant_type": "refresh_token", "refresh_token": session.refresh_token},
        )

        if response.status_code != 200:
            raise AuthError(_error_message(data, "Session expired, sign in again"))

        return AuthSession(
            uid=data.get("user_id", session.uid),
            email=session.email,
            id_token=data["id_token"],
            refresh_token=data.get("refresh_token", session.refresh_token),
            display_name=session.display_name,
            photo_url=session.photo_url,
        )

    async def verify_id_token(self, id_token: str) -> Dict[str, Any]:
        try:
            return await asyncio.to_thread(auth.verify_id_token, id_token, app=self.app)
        except (ValueError, firebase_exceptions.FirebaseError) as e:
            logger.info(f"Rejected ID token: {e}")
            raise AuthError("Invalid or expired session token") from e

    async def set_custom_claims(self, uid: str, claims: Dict[str, Any]) -> None:
        await asyncio.to_thread(auth.set_custom_user_claims, uid, claims, app=self.app)


_identity_client: Optional[IdentityProvider] = None


def get_identity_client() -> IdentityProvider:
    """Get or create the process-wide identity client."""
    global _identity_client
    if _identity_client is None:
        from aptiprep.core.config import settings

        _identity_client = FirebaseIdentityClient(
            api_key=settings.FIREBASE_WEB_API_KEY,
            max_retries=settings.HTTP_MAX_RETRIES,
        )
    return _identity_client
