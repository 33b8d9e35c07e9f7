"""
Admin Routes

Admin sign-in and role management.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from aptiprep.api.deps import (
    CurrentUser,
    get_current_user,
    get_identity,
    get_session_context,
    get_store,
)
from aptiprep.core.config import settings
from aptiprep.core.documents import DocumentStore
from aptiprep.core.errors import AuthError, DocumentNotFoundError, NotAuthorizedError
from aptiprep.core.identity import IdentityProvider
from aptiprep.core.session import SessionContext
from aptiprep.models.enums import UserRole
from aptiprep.schemas.auth import (
    AdminLoginRequest,
    AdminLoginResponse,
    AdminRoleResponse,
    RoleAssignmentRequest,
)
from aptiprep.services import admin_service


router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/login",
    response_model=AdminLoginResponse,
    summary="Sign in as an administrator",
)
async def admin_login(
    data: AdminLoginRequest,
    identity: Annotated[IdentityProvider, Depends(get_identity)],
    store: Annotated[DocumentStore, Depends(get_store)],
) -> AdminLoginResponse:
    """
    Sign in with email and password and check for admin rights.

    **Flow:**
    1. Sign in with the identity provider
    2. Accept the user if the ``admin`` claim is set or the profile role is admin
    3. Otherwise sign the user out again and reject the login

    Raises:
        HTTPException: 401 for bad credentials, 403 for non-admin accounts.
    """
    session = SessionContext(identity)
    try:
        result = await admin_service.admin_login(
            session,
            store,
            data.email,
            data.password,
            redirect_to=data.redirect_to,
            default_redirect=settings.ADMIN_REDIRECT_DEFAULT,
        )
    except NotAuthorizedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e) or "Failed to sign in",
        )

    return AdminLoginResponse(
        uid=result.session.uid,
        email=result.session.email,
        redirect_to=result.redirect_to,
        id_token=result.session.id_token,
        refresh_token=result.session.refresh_token,
    )


@router.post(
    "/role",
    response_model=AdminRoleResponse,
    summary="Make the current user an admin",
)
async def set_admin_role(
    session: Annotated[SessionContext, Depends(get_session_context)],
    store: Annotated[DocumentStore, Depends(get_store)],
) -> AdminRoleResponse:
    """
    Set ``role: admin`` on the caller's profile document.

    The caller must sign out and back in before claim-based checks change.
    """
    try:
        uid = await admin_service.set_admin_role(session, store)
    except AuthError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    return AdminRoleResponse(
        uid=uid,
        role=UserRole.ADMIN,
        message="Admin role set. Sign out and sign back in to refresh your access.",
    )


@router.post(
    "/claims",
    response_model=AdminRoleResponse,
    summary="Assign a role to a user",
)
async def assign_role(
    data: RoleAssignmentRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    identity: Annotated[IdentityProvider, Depends(get_identity)],
    store: Annotated[DocumentStore, Depends(get_store)],
) -> AdminRoleResponse:
    """
    Assign ``role`` to ``uid`` as a custom claim and profile field.

    Raises:
        HTTPException: 403 if the caller is not an admin, 404 if the target
            user has no profile document.
    """
    try:
        await admin_service.assign_role(identity, store, current_user.claims, data.uid, data.role)
    except NotAuthorizedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except DocumentNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User {data.uid} not found",
        )

    return AdminRoleResponse(
        uid=data.uid,
        role=data.role,
        message=f"Role {UserRole(data.role).value} assigned to user {data.uid}",
    )
