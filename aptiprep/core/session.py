"""
Session Context

Explicit holder of the authenticated user. A session is created on sign-in
and destroyed on sign-out; operations that need identity receive the
SessionContext instead of reading global state.
"""

import logging
from typing import Any, Dict, Optional

from aptiprep.core.documents import DocumentStore
from aptiprep.core.errors import AuthError, best_effort
from aptiprep.core.identity import AuthSession, IdentityProvider
from aptiprep.models.enums import UserRole


logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"


@best_effort(None)
async def fetch_user_profile(store: DocumentStore, uid: str) -> Optional[Dict[str, Any]]:
    """Load ``users/{uid}``; read failures yield None."""
    return await store.get(USERS_COLLECTION, uid)


class SessionContext:
    """
    The current user's session and profile.

    Attributes:
        identity: Authentication collaborator used for sign-in and claims.
    """

    def __init__(self, identity: IdentityProvider):
        self.identity = identity
        self._session: Optional[AuthSession] = None
        self._profile: Optional[Dict[str, Any]] = None

    @classmethod
    def restore(cls, identity: IdentityProvider, session: AuthSession) -> "SessionContext":
        """Build a context around an already verified session."""
        context = cls(identity)
        context._session = session
        return context

    @property
    def current_user(self) -> Optional[AuthSession]:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    @property
    def profile(self) -> Optional[Dict[str, Any]]:
        return self._profile

    def require_user(self) -> AuthSession:
        """
        Return the signed-in user.

        Raises:
            AuthError: If nobody is signed in.
        """
        if self._session is None:
            raise AuthError("You must be logged in first")
        return self._session

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in and replace any existing session."""
        session = await self.identity.sign_in_with_password(email.strip(), password)
        self._session = session
        self._profile = None
        logger.info(f"Signed in {session.uid}")
        return session

    async def sign_out(self) -> None:
        """Destroy the session and forget the cached profile."""
        if self._session is not None:
            logger.info(f"Signed out {self._session.uid}")
        self._session = None
        self._profile = None

    async def claims(self, force_refresh: bool = False) -> Dict[str, Any]:
        """Claims of the current ID token."""
        return await self.identity.get_claims(self.require_user(), force_refresh=force_refresh)

    async def get_user_profile(self, store: DocumentStore) -> Optional[Dict[str, Any]]:
        """Fetch and cache the user's profile document."""
        self._profile = await fetch_user_profile(store, self.require_user().uid)
        return self._profile

    def has_role(self, role: str) -> bool:
        return bool(self._profile) and self._profile.get("role") == role

    def is_admin(self) -> bool:
        return self.has_role(UserRole.ADMIN.value)

    def is_instructor(self) -> bool:
        return self.has_role(UserRole.INSTRUCTOR.value) or self.is_admin()
