"""
Admin Service Unit Tests

Tests for admin sign-in, admin bootstrap and role assignment.
"""

from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from aptiprep.core.documents import SERVER_TIMESTAMP
from aptiprep.core.errors import AuthError, DocumentNotFoundError, NotAuthorizedError
from aptiprep.core.session import USERS_COLLECTION, SessionContext
from aptiprep.models.enums import UserRole
from aptiprep.services import admin_service
from aptiprep.services.admin_service import NOT_ADMIN_MESSAGE


class TestAdminLogin:
    """Tests for admin_login."""

    @pytest.mark.asyncio
    async def test_admin_by_profile_role(self, identity, memory_store):
        """Verify a profile with role admin is accepted and redirected."""
        identity.add_account("admin@example.com", "secret", "uid-1")
        memory_store.collections[USERS_COLLECTION]["uid-1"] = {"role": "admin"}
        session = SessionContext(identity)

        result = await admin_service.admin_login(
            session, memory_store, "admin@example.com", "secret", redirect_to="/admin/videos"
        )

        assert result.redirect_to == "/admin/videos"
        assert result.session.uid == "uid-1"
        assert session.is_authenticated

    @pytest.mark.asyncio
    async def test_admin_by_claim(self, identity, memory_store):
        """Verify the admin claim is enough without any profile."""
        identity.add_account("admin@example.com", "secret", "uid-1", claims={"admin": True})
        session = SessionContext(identity)

        result = await admin_service.admin_login(session, memory_store, "admin@example.com", "secret")

        assert result.redirect_to == "/admin/dashboard"
        assert identity.refresh_count == 1

    @pytest.mark.asyncio
    async def test_custom_default_redirect(self, identity, memory_store):
        """Verify the default redirect can be overridden."""
        identity.add_account("admin@example.com", "secret", "uid-1", claims={"admin": True})

        result = await admin_service.admin_login(
            SessionContext(identity), memory_store, "admin@example.com", "secret",
            redirect_to="", default_redirect="/admin/home",
        )

        assert result.redirect_to == "/admin/home"

    @pytest.mark.asyncio
    async def test_non_admin_is_signed_out(self, identity, memory_store):
        """Verify a non-admin gets the fixed message and no session."""
        identity.add_account("student@example.com", "secret", "uid-2")
        memory_store.collections[USERS_COLLECTION]["uid-2"] = {"role": "student"}
        session = SessionContext(identity)

        with pytest.raises(NotAuthorizedError) as exc_info:
            await admin_service.admin_login(session, memory_store, "student@example.com", "secret")

        assert str(exc_info.value) == "This account is not authorized for admin access."
        assert str(exc_info.value) == NOT_ADMIN_MESSAGE
        assert not session.is_authenticated

    @pytest.mark.asyncio
    async def test_profile_errors_are_ignored(self, identity, memory_store):
        """Verify a failing profile read counts as not admin."""
        identity.add_account("student@example.com", "secret", "uid-2")
        memory_store.fail_reads = True
        session = SessionContext(identity)

        with pytest.raises(NotAuthorizedError):
            await admin_service.admin_login(session, memory_store, "student@example.com", "secret")

        assert not session.is_authenticated

    @pytest.mark.asyncio
    async def test_bad_credentials(self, identity, memory_store):
        """Verify sign-in failures surface as AuthError, not NotAuthorizedError."""
        identity.add_account("admin@example.com", "secret", "uid-1", claims={"admin": True})

        with pytest.raises(AuthError) as exc_info:
            await admin_service.admin_login(SessionContext(identity), memory_store, "admin@example.com", "nope")

        assert not isinstance(exc_info.value, NotAuthorizedError)


class TestSetAdminRole:
    """Tests for set_admin_role."""

    @pytest.mark.asyncio
    async def test_requires_login(self, identity, memory_store):
        """Verify a signed-out session is rejected."""
        with pytest.raises(AuthError, match="You must be logged in first"):
            await admin_service.set_admin_role(SessionContext(identity), memory_store)

    @pytest.mark.asyncio
    async def test_merges_admin_fields(self, identity, memory_store):
        """Verify the profile gets admin fields and keeps the rest."""
        identity.add_account("me@example.com", "secret", "uid-5", display_name="Me")
        memory_store.collections[USERS_COLLECTION]["uid-5"] = {"role": "student", "college": "X"}
        session = SessionContext(identity)
        await session.sign_in("me@example.com", "secret")

        uid = await admin_service.set_admin_role(session, memory_store)

        stored = memory_store.collections[USERS_COLLECTION]["uid-5"]
        assert uid == "uid-5"
        assert stored["role"] == "admin"
        assert stored["college"] == "X"
        assert stored["displayName"] == "Me"
        assert stored["email"] == "me@example.com"
        assert stored["isActive"] is True
        assert isinstance(stored["createdAt"], datetime)

    @pytest.mark.asyncio
    async def test_defaults_for_missing_identity_fields(self, identity, mock_store):
        """Verify placeholder display name and email are used when absent."""
        from aptiprep.core.identity import AuthSession

        session = SessionContext.restore(identity, AuthSession(uid="uid-6", email="", id_token="t"))

        await admin_service.set_admin_role(session, mock_store)

        args, kwargs = mock_store.set.call_args
        assert args[:2] == (USERS_COLLECTION, "uid-6")
        assert args[2]["displayName"] == "Platform Admin"
        assert args[2]["email"] == "admin@yourdomain.com"
        assert args[2]["photoURL"] == ""
        assert args[2]["createdAt"] is SERVER_TIMESTAMP
        assert kwargs == {"merge": True}


class TestAssignRole:
    """Tests for assign_role."""

    @pytest.mark.asyncio
    async def test_non_admin_caller_rejected(self, identity, memory_store):
        """Verify only admins may assign roles."""
        with pytest.raises(NotAuthorizedError):
            await admin_service.assign_role(identity, memory_store, {"role": "student"}, "uid-1", "admin")

    @pytest.mark.asyncio
    async def test_sets_claims_and_profile(self, identity, memory_store):
        """Verify the claim and the profile role are both updated."""
        memory_store.collections[USERS_COLLECTION]["uid-7"] = {"role": "student", "email": "x@y.z"}

        claims = await admin_service.assign_role(
            identity, memory_store, {"admin": True}, "uid-7", UserRole.INSTRUCTOR
        )

        assert claims == {"role": "instructor", "admin": False}
        assert identity.custom_claims["uid-7"] == {"role": "instructor", "admin": False}
        stored = memory_store.collections[USERS_COLLECTION]["uid-7"]
        assert stored["role"] == "instructor"
        assert stored["email"] == "x@y.z"
        assert isinstance(stored["updatedAt"], datetime)

    @pytest.mark.asyncio
    async def test_role_claim_admin_caller(self, identity, memory_store):
        """Verify a role=admin claim also authorizes the caller."""
        memory_store.collections[USERS_COLLECTION]["uid-8"] = {"role": "student"}

        claims = await admin_service.assign_role(identity, memory_store, {"role": "admin"}, "uid-8", "admin")

        assert claims == {"role": "admin", "admin": True}

    @pytest.mark.asyncio
    async def test_missing_profile(self, identity, memory_store):
        """Verify assigning to a user without a profile fails before any claim is written."""
        identity.custom_claims["ghost"] = {"role": "student", "admin": False}

        with pytest.raises(DocumentNotFoundError):
            await admin_service.assign_role(identity, memory_store, {"admin": True}, "ghost", "admin")

        assert identity.custom_claims["ghost"] == {"role": "student", "admin": False}

    @pytest.mark.asyncio
    async def test_invalid_arguments(self, memory_store):
        """Verify empty uid and unknown roles are rejected."""
        identity = AsyncMock()

        with pytest.raises(ValueError):
            await admin_service.assign_role(identity, memory_store, {"admin": True}, "", "admin")
        with pytest.raises(ValueError):
            await admin_service.assign_role(identity, memory_store, {"admin": True}, "uid-1", "superuser")
        identity.set_custom_claims.assert_not_called()
