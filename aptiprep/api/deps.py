"""
API Dependencies

Reusable dependencies for API routes including authentication.
"""

from dataclasses import dataclass, field
from typing import Annotated, Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from aptiprep.core.documents import DocumentStore
from aptiprep.core.errors import AuthError
from aptiprep.core.identity import AuthSession, IdentityProvider, get_identity_client
from aptiprep.core.session import SessionContext
from aptiprep.core.store import get_document_store


# Bearer scheme for Firebase ID tokens; missing headers are reported as 401 below
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    """Caller identity taken from a verified ID token."""
    uid: str
    email: str
    id_token: str
    claims: Dict[str, Any] = field(default_factory=dict)

    def to_session(self) -> AuthSession:
        return AuthSession(
            uid=self.uid,
            email=self.email,
            id_token=self.id_token,
            display_name=self.claims.get("name", ""),
            photo_url=self.claims.get("picture", ""),
        )


def get_store() -> DocumentStore:
    """Dependency returning the process-wide document store."""
    return get_document_store()


def get_identity() -> IdentityProvider:
    """Dependency returning the process-wide identity client."""
    return get_identity_client()


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    identity: Annotated[IdentityProvider, Depends(get_identity)],
) -> CurrentUser:
    """
    Dependency to get the current authenticated user.

    This dependency:
    1. Extracts the ID token from the Authorization header
    2. Verifies it with the identity provider
    3. Raises 401 if the token is missing or invalid

    Returns:
        CurrentUser: uid, email and token claims of the caller.

    Raises:
        HTTPException: 401 if authentication fails.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None or not credentials.credentials:
        raise credentials_exception

    try:
        claims = await identity.verify_id_token(credentials.credentials)
    except AuthError:
        raise credentials_exception

    uid = claims.get("uid") or claims.get("sub")
    if not uid:
        raise credentials_exception

    return CurrentUser(
        uid=uid,
        email=claims.get("email", ""),
        id_token=credentials.credentials,
        claims=claims,
    )


async def get_optional_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    identity: Annotated[IdentityProvider, Depends(get_identity)],
) -> Optional[CurrentUser]:
    """Like get_current_user, but anonymous callers get None instead of 401."""
    if credentials is None or not credentials.credentials:
        return None
    return await get_current_user(credentials, identity)


async def get_session_context(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    identity: Annotated[IdentityProvider, Depends(get_identity)],
) -> SessionContext:
    """Dependency wrapping the caller in a SessionContext."""
    return SessionContext.restore(identity, current_user.to_session())
