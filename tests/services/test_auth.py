"""Tests for AuthService — login, logout, session gate, account admin."""

from __future__ import annotations

from graphzlive.infrastructure.workspace import Workspace
from graphzlive.services.auth import SESSION_KEY, AuthService, auth_message


class TestLogin:
    def test_login_stores_session(self, workspace: Workspace) -> None:
        svc = AuthService(workspace)
        svc.create_user("admin@example.com", "s3cret!")
        result = svc.login("admin@example.com", "s3cret!")
        assert result.ok
        session = workspace.local_storage.get_item(SESSION_KEY)
        assert session["email"] == "admin@example.com"
        assert svc.require_session("stats") is None

    def test_wrong_password_message(self, workspace: Workspace) -> None:
        svc = AuthService(workspace)
        svc.create_user("admin@example.com", "s3cret!")
        result = svc.login("admin@example.com", "nope")
        assert result.error is not None
        assert result.error.code == "AUTH_FAILED"
        assert result.error.message == "Incorrect password"
        assert result.error.detail["auth_code"] == "auth/wrong-password"
        assert svc.current_session() is None

    def test_unknown_code_gets_generic_message(self) -> None:
        assert auth_message("auth/network-request-failed") == "Login failed. Please try again."


class TestGate:
    def test_no_session(self, workspace: Workspace) -> None:
        gate = AuthService(workspace).require_session("stats")
        assert gate is not None
        assert gate.op == "stats"
        assert gate.error is not None
        assert gate.error.code == "AUTH_REQUIRED"

    def test_logout_clears_session(self, workspace: Workspace) -> None:
        svc = AuthService(workspace)
        svc.create_user("admin@example.com", "s3cret!")
        svc.login("admin@example.com", "s3cret!")
        assert svc.logout().data == {"signed_out": True}
        assert svc.require_session("stats") is not None
        assert svc.logout().data == {"signed_out": False}


class TestAccounts:
    def test_duplicate_account(self, workspace: Workspace) -> None:
        svc = AuthService(workspace)
        assert svc.create_user("admin@example.com", "s3cret!").ok
        result = svc.create_user("admin@example.com", "other1!")
        assert result.error is not None
        assert result.error.detail["auth_code"] == "auth/email-already-in-use"

    def test_disable_then_enable(self, workspace: Workspace) -> None:
        svc = AuthService(workspace)
        svc.create_user("admin@example.com", "s3cret!")
        assert svc.set_disabled("admin@example.com", True).op == "disable_user"
        refused = svc.login("admin@example.com", "s3cret!")
        assert refused.error is not None
        assert refused.error.message == "Account disabled"
        assert svc.set_disabled("admin@example.com", False).op == "enable_user"
        assert svc.login("admin@example.com", "s3cret!").ok

    def test_unlock_unknown(self, workspace: Workspace) -> None:
        result = AuthService(workspace).unlock("ghost@example.com")
        assert result.error is not None
        assert result.error.detail["auth_code"] == "auth/user-not-found"
