"""
Admin Service

Admin sign-in, self-service admin bootstrap and role assignment.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from aptiprep.core.documents import SERVER_TIMESTAMP, DocumentStore
from aptiprep.core.errors import DocumentNotFoundError, NotAuthorizedError
from aptiprep.core.identity import AuthSession, IdentityProvider
from aptiprep.core.session import USERS_COLLECTION, SessionContext
from aptiprep.models.enums import UserRole


logger = logging.getLogger(__name__)

NOT_ADMIN_MESSAGE = "This account is not authorized for admin access."
DEFAULT_REDIRECT = "/admin/dashboard"
DEFAULT_ADMIN_DISPLAY_NAME = "Platform Admin"
DEFAULT_ADMIN_EMAIL = "admin@yourdomain.com"


@dataclass
class AdminLoginResult:
    """Outcome of a successful admin sign-in."""
    session: AuthSession
    redirect_to: str


def claims_grant_admin(claims: Mapping[str, Any]) -> bool:
    """Whether token claims mark the holder as an administrator."""
    return bool(claims.get("admin")) or claims.get("role") == UserRole.ADMIN.value


async def admin_login(
    session: SessionContext,
    store: DocumentStore,
    email: str,
    password: str,
    redirect_to: Optional[str] = None,
    default_redirect: str = DEFAULT_REDIRECT,
) -> AdminLoginResult:
    """
    Sign in and confirm the user is an administrator.

    The ``admin`` custom claim is checked first, then the ``role`` field of
    the user's profile document. Profile read errors count as "not admin".
    A non-admin is signed out again before the error is raised.

    Args:
        session: Session to sign in on.
        store: Document store holding user profiles.
        email: Account email.
        password: Account password.
        redirect_to: Page to return to after login.
        default_redirect: Used when ``redirect_to`` is empty.

    Returns:
        AdminLoginResult with the redirect target.

    Raises:
        AuthError: If the credentials are rejected.
        NotAuthorizedError: If the account is not an administrator.
    """
    user = await session.sign_in(email, password)

    claims = await session.claims(force_refresh=True)
    is_admin_claim = bool(claims.get("admin"))

    await session.get_user_profile(store)
    is_admin_doc = session.is_admin()

    if is_admin_claim or is_admin_doc:
        logger.info(f"Admin login for {user.uid}")
        return AdminLoginResult(session=user, redirect_to=redirect_to or default_redirect)

    logger.warning(f"Rejected admin login for non-admin {user.uid}")
    await session.sign_out()
    raise NotAuthorizedError(NOT_ADMIN_MESSAGE)


async def set_admin_role(session: SessionContext, store: DocumentStore) -> str:
    """
    Mark the signed-in user as an admin in their profile document.

    The write is a merge, so other profile fields are kept. Custom claims are
    untouched: the user must sign in again for claim-based checks to change.

    Returns:
        The uid that was updated.

    Raises:
        AuthError: If nobody is signed in.
    """
    user = session.require_user()

    await store.set(
        USERS_COLLECTION,
        user.uid,
        {
            "displayName": user.display_name or DEFAULT_ADMIN_DISPLAY_NAME,
            "email": user.email or DEFAULT_ADMIN_EMAIL,
            "role": UserRole.ADMIN.value,
            "photoURL": user.photo_url or "",
            "createdAt": SERVER_TIMESTAMP,
            "isActive": True,
        },
        merge=True,
    )

    logger.info(f"Admin role set for user: {user.uid}")
    return user.uid


async def assign_role(
    identity: IdentityProvider,
    store: DocumentStore,
    caller_claims: Mapping[str, Any],
    uid: str,
    role: Union[UserRole, str],
) -> Dict[str, Any]:
    """
    Give ``uid`` a role as both a custom claim and a profile field.

    Raises:
        NotAuthorizedError: If the caller is not an admin.
        ValueError: If ``uid`` or ``role`` is missing or unknown.
        DocumentNotFoundError: If the user has no profile document.
    """
    if not claims_grant_admin(caller_claims):
        raise NotAuthorizedError("Only admins can set custom claims")
    if not uid or not role:
        raise ValueError("UID and role are required")

    role_value = UserRole(role).value
    claims = {"role": role_value, "admin": role_value == UserRole.ADMIN.value}

    # Claims are only touched for users that have a profile to update
    if await store.get(USERS_COLLECTION, uid) is None:
        raise DocumentNotFoundError(f"No document to update: {USERS_COLLECTION}/{uid}")

    await identity.set_custom_claims(uid, claims)
    await store.update(
        USERS_COLLECTION,
        uid,
        {"role": role_value, "updatedAt": SERVER_TIMESTAMP},
    )

    logger.info(f"Role {role_value} assigned to user {uid}")
    return claims
