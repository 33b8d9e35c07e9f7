"""
Session Context Tests

Tests for the explicit session lifecycle and role helpers.
"""

import pytest

from aptiprep.core.errors import AuthError
from aptiprep.core.session import USERS_COLLECTION, SessionContext


class TestSessionLifecycle:
    """Tests for sign-in and sign-out."""

    @pytest.mark.asyncio
    async def test_sign_in_creates_session(self, identity):
        """Verify signing in sets the current user."""
        identity.add_account("student@example.com", "secret", "uid-1", display_name="Student")
        session = SessionContext(identity)

        user = await session.sign_in("  student@example.com ", "secret")

        assert session.is_authenticated
        assert session.current_user is user
        assert user.uid == "uid-1"
        assert user.display_name == "Student"

    @pytest.mark.asyncio
    async def test_sign_in_failure_keeps_no_session(self, identity):
        """Verify bad credentials raise and leave the context signed out."""
        identity.add_account("student@example.com", "secret", "uid-1")
        session = SessionContext(identity)

        with pytest.raises(AuthError, match="Invalid email or password"):
            await session.sign_in("student@example.com", "wrong")

        assert not session.is_authenticated

    @pytest.mark.asyncio
    async def test_sign_out_destroys_session(self, identity):
        """Verify signing out clears user and profile."""
        identity.add_account("student@example.com", "secret", "uid-1")
        session = SessionContext(identity)
        await session.sign_in("student@example.com", "secret")

        await session.sign_out()

        assert session.current_user is None
        assert session.profile is None
        with pytest.raises(AuthError, match="You must be logged in first"):
            session.require_user()

    @pytest.mark.asyncio
    async def test_claims_require_session(self, identity):
        """Verify claims cannot be read while signed out."""
        with pytest.raises(AuthError):
            await SessionContext(identity).claims()

    @pytest.mark.asyncio
    async def test_claims_with_refresh(self, identity):
        """Verify claims come from the token and force_refresh refreshes first."""
        identity.add_account("admin@example.com", "secret", "uid-9", claims={"admin": True})
        session = SessionContext(identity)
        await session.sign_in("admin@example.com", "secret")

        claims = await session.claims(force_refresh=True)

        assert claims["admin"] is True
        assert claims["uid"] == "uid-9"
        assert identity.refresh_count == 1


class TestSessionProfile:
    """Tests for profile loading and role checks."""

    @pytest.mark.asyncio
    async def test_role_helpers(self, identity, memory_store):
        """Verify role helpers read the loaded profile."""
        identity.add_account("teach@example.com", "secret", "uid-2")
        memory_store.collections[USERS_COLLECTION]["uid-2"] = {"role": "instructor"}
        session = SessionContext(identity)
        await session.sign_in("teach@example.com", "secret")

        profile = await session.get_user_profile(memory_store)

        assert profile == {"role": "instructor"}
        assert session.has_role("instructor")
        assert session.is_instructor()
        assert not session.is_admin()

    @pytest.mark.asyncio
    async def test_admin_counts_as_instructor(self, identity, memory_store):
        """Verify admins pass the instructor check."""
        identity.add_account("admin@example.com", "secret", "uid-3")
        memory_store.collections[USERS_COLLECTION]["uid-3"] = {"role": "admin"}
        session = SessionContext(identity)
        await session.sign_in("admin@example.com", "secret")
        await session.get_user_profile(memory_store)

        assert session.is_admin()
        assert session.is_instructor()

    @pytest.mark.asyncio
    async def test_profile_read_error_yields_none(self, identity, memory_store):
        """Verify a failing profile read is treated as no profile."""
        identity.add_account("student@example.com", "secret", "uid-1")
        memory_store.fail_reads = True
        session = SessionContext(identity)
        await session.sign_in("student@example.com", "secret")

        assert await session.get_user_profile(memory_store) is None
        assert not session.has_role("student")

    def test_restore(self, identity):
        """Verify restore wraps an existing session."""
        from aptiprep.core.identity import AuthSession

        auth_session = AuthSession(uid="uid-1", email="a@b.c", id_token="t")
        session = SessionContext.restore(identity, auth_session)

        assert session.require_user() is auth_session
