"""AuthProvider — email/password identities over the ``accounts`` table.

Stands in for the hosted authentication service.  Failures raise
:class:`AuthError` carrying the same ``auth/*`` codes the hosted service
returns, so the service layer maps them to user-facing messages without
knowing which provider produced them.

Passwords are stored as salted PBKDF2-SHA256 hashes in the form
``pbkdf2_sha256$<iterations>$<hex digest>``.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import re
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from graphzlive.infrastructure.database.schema import accounts

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

HASH_ALGORITHM = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 200_000
MAX_FAILED_ATTEMPTS = 5
MIN_PASSWORD_LENGTH = 6

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class AuthError(Exception):
    """Sign-in or account operation failed.

    Attributes:
        code: Provider error code such as ``auth/wrong-password``.
    """

    def __init__(self, code: str, message: str | None = None) -> None:
        super().__init__(message or code)
        self.code = code


@dataclass(frozen=True)
class AuthUser:
    """A signed-in identity."""

    uid: str
    email: str


def hash_password(password: str, salt: str, *, iterations: int = DEFAULT_ITERATIONS) -> str:
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), bytes.fromhex(salt), iterations)
    return f"{HASH_ALGORITHM}${iterations}${digest.hex()}"


def verify_password(password: str, salt: str, stored: str) -> bool:
    """Constant-time check of *password* against a stored hash string."""
    try:
        algorithm, iterations, _ = stored.split("$", 2)
        rounds = int(iterations)
    except ValueError:
        return False
    if algorithm != HASH_ALGORITHM:
        return False
    return hmac.compare_digest(hash_password(password, salt, iterations=rounds), stored)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthProvider:
    """Email/password accounts with lockout after repeated failures."""

    def __init__(self, engine: Engine, *, iterations: int = DEFAULT_ITERATIONS) -> None:
        self._engine = engine
        self._iterations = iterations

    def create_user(self, email: str, password: str) -> AuthUser:
        """Register a new account.

        Raises:
            AuthError: ``auth/invalid-email``, ``auth/weak-password``, or
                ``auth/email-already-in-use``.
        """
        email = normalize_email(email)
        if not _EMAIL_RE.match(email):
            raise AuthError("auth/invalid-email")
        if len(password) < MIN_PASSWORD_LENGTH:
            msg = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            raise AuthError("auth/weak-password", msg)

        salt = secrets.token_hex(16)
        uid = secrets.token_hex(14)
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    insert(accounts).values(
                        email=email,
                        uid=uid,
                        password_hash=hash_password(password, salt, iterations=self._iterations),
                        salt=salt,
                        disabled=0,
                        failed_attempts=0,
                        created=datetime.now(UTC).isoformat(),
                    )
                )
        except IntegrityError as exc:
            raise AuthError("auth/email-already-in-use") from exc
        except SQLAlchemyError as exc:
            raise AuthError("auth/internal-error", str(exc)) from exc

        logger.info("Created account %s", email)
        return AuthUser(uid=uid, email=email)

    def sign_in(self, email: str, password: str) -> AuthUser:
        """Verify credentials and return the account's identity.

        After :data:`MAX_FAILED_ATTEMPTS` consecutive wrong passwords the
        account answers ``auth/too-many-requests`` until
        :meth:`reset_attempts` lifts the lockout.

        Raises:
            AuthError: with one of the ``auth/*`` codes.
        """
        email = normalize_email(email)
        if not _EMAIL_RE.match(email):
            raise AuthError("auth/invalid-email")

        try:
            with self._engine.begin() as conn:
                row = conn.execute(select(accounts).where(accounts.c.email == email)).first()
                if row is None:
                    raise AuthError("auth/user-not-found")
                if row.disabled:
                    raise AuthError("auth/user-disabled")
                if row.failed_attempts >= MAX_FAILED_ATTEMPTS:
                    raise AuthError("auth/too-many-requests")

                if not verify_password(password, row.salt, row.password_hash):
                    conn.execute(
                        update(accounts)
                        .where(accounts.c.email == email)
                        .values(failed_attempts=accounts.c.failed_attempts + 1)
                    )
                    wrong = AuthError("auth/wrong-password")
                else:
                    wrong = None
                    if row.failed_attempts:
                        conn.execute(
                            update(accounts)
                            .where(accounts.c.email == email)
                            .values(failed_attempts=0)
                        )
        except SQLAlchemyError as exc:
            raise AuthError("auth/internal-error", str(exc)) from exc

        # Raised outside the transaction so the attempt counter commits.
        if wrong is not None:
            logger.debug("Wrong password for %s", email)
            raise wrong
        return AuthUser(uid=str(row.uid), email=email)

    def set_disabled(self, email: str, disabled: bool = True) -> None:
        """Enable or disable an account."""
        self._set(email, disabled=int(disabled))

    def reset_attempts(self, email: str) -> None:
        """Clear the failed-attempt counter (lifts a lockout)."""
        self._set(email, failed_attempts=0)

    def _set(self, email: str, **values: int) -> None:
        email = normalize_email(email)
        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    update(accounts).where(accounts.c.email == email).values(**values)
                )
        except SQLAlchemyError as exc:
            raise AuthError("auth/internal-error", str(exc)) from exc
        if result.rowcount == 0:
            raise AuthError("auth/user-not-found")
