"""AuthService — admin sign-in, sign-out, and the session gate.

The session record lives in local storage under ``admin_session``.  The
gate is enforced client-side only: it decides which commands the CLI will
run, it does not protect the store from anyone who can open it directly.
"""

from __future__ import annotations

import logging
from typing import Any

from graphzlive.infrastructure.auth import AuthError
from graphzlive.infrastructure.local_storage import LocalStorageError
from graphzlive.services._helpers import now_iso
from graphzlive.services.base import BaseService
from graphzlive.services.result import ServiceResult, failure
from graphzlive.services.telemetry import traced

logger = logging.getLogger(__name__)

SESSION_KEY = "admin_session"

LOGIN_FAILED_MESSAGE = "Login failed. Please try again."

AUTH_MESSAGES: dict[str, str] = {
    "auth/invalid-email": "Invalid email address",
    "auth/user-disabled": "Account disabled",
    "auth/user-not-found": "No account found with this email",
    "auth/wrong-password": "Incorrect password",
    "auth/too-many-requests": "Too many attempts. Try again later",
}

_CREATE_MESSAGES: dict[str, str] = {
    "auth/invalid-email": "Invalid email address",
    "auth/email-already-in-use": "An account with this email already exists",
}


def auth_message(code: str) -> str:
    """User-facing message for a sign-in error code.

    Examples:
        >>> auth_message("auth/wrong-password")
        'Incorrect password'
        >>> auth_message("auth/network-request-failed")
        'Login failed. Please try again.'
    """
    return AUTH_MESSAGES.get(code, LOGIN_FAILED_MESSAGE)


class AuthService(BaseService):
    """Signs admins in and out and answers "is there a session?"."""

    @traced
    def login(self, email: str, password: str) -> ServiceResult:
        op = "login"
        try:
            user = self._workspace.auth.sign_in(email, password)
        except AuthError as exc:
            logger.info("Sign-in rejected for %s: %s", email, exc.code)
            return failure(op, "AUTH_FAILED", auth_message(exc.code), auth_code=exc.code)

        session = {"uid": user.uid, "email": user.email, "signedInAt": now_iso()}
        try:
            self._workspace.local_storage.set_item(SESSION_KEY, session)
        except LocalStorageError as exc:
            logger.warning("Cannot persist admin session: %s", exc)
            return failure(op, "AUTH_FAILED", LOGIN_FAILED_MESSAGE)
        return ServiceResult(ok=True, op=op, data={"email": user.email, "uid": user.uid})

    @traced
    def logout(self) -> ServiceResult:
        op = "logout"
        try:
            removed = self._workspace.local_storage.remove_item(SESSION_KEY)
        except LocalStorageError as exc:
            logger.warning("Cannot clear admin session: %s", exc)
            return ServiceResult(
                ok=True,
                op=op,
                data={"signed_out": False},
                warnings=["Session could not be cleared"],
            )
        return ServiceResult(ok=True, op=op, data={"signed_out": removed})

    def current_session(self) -> dict[str, Any] | None:
        """The stored session record, or None."""
        try:
            session = self._workspace.local_storage.get_item(SESSION_KEY)
        except LocalStorageError:
            logger.warning("Cannot read admin session", exc_info=True)
            return None
        if isinstance(session, dict) and session.get("email"):
            return session
        return None

    def require_session(self, op: str) -> ServiceResult | None:
        """Return an ``AUTH_REQUIRED`` failure for *op*, or None if signed in."""
        if self.current_session() is None:
            return failure(op, "AUTH_REQUIRED", "Admin login required. Run: graphz admin login")
        return None

    @traced
    def create_user(self, email: str, password: str) -> ServiceResult:
        """Register an admin account."""
        op = "create_user"
        try:
            user = self._workspace.auth.create_user(email, password)
        except AuthError as exc:
            message = _CREATE_MESSAGES.get(exc.code, str(exc))
            return failure(op, "AUTH_FAILED", message, auth_code=exc.code)
        return ServiceResult(ok=True, op=op, data={"email": user.email, "uid": user.uid})

    @traced
    def set_disabled(self, email: str, disabled: bool = True) -> ServiceResult:
        """Disable (or re-enable) an admin account."""
        op = "disable_user" if disabled else "enable_user"
        try:
            self._workspace.auth.set_disabled(email, disabled)
        except AuthError as exc:
            return failure(op, "AUTH_FAILED", auth_message(exc.code), auth_code=exc.code)
        return ServiceResult(ok=True, op=op, data={"email": email, "disabled": disabled})

    @traced
    def unlock(self, email: str) -> ServiceResult:
        """Clear the failed-attempt lockout on an account."""
        op = "unlock_user"
        try:
            self._workspace.auth.reset_attempts(email)
        except AuthError as exc:
            return failure(op, "AUTH_FAILED", auth_message(exc.code), auth_code=exc.code)
        return ServiceResult(ok=True, op=op, data={"email": email, "unlocked": True})
