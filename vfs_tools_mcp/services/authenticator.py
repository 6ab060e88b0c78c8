"""Process-local email/password accounts."""

import hashlib
import hmac
import logging
import secrets

from vfs_tools_mcp.models.project import AuthResult

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def _hash_password(password: str, salt: bytes) -> bytes:
    return hashlib.scrypt(password.encode("utf-8"), salt=salt, n=2**14, r=8, p=1)


class InMemoryAuthenticator:
    """
    Authenticator used when no identity provider is configured.

    Accounts live only as long as the process. Emails are matched
    case-insensitively; passwords are stored as salted scrypt hashes.
    """

    def __init__(self) -> None:
        self._accounts: dict[str, tuple[bytes, bytes]] = {}

    async def sign_up(self, email: str, password: str) -> AuthResult:
        key = email.strip().lower()
        if not key or "@" not in key:
            return AuthResult(success=False, error="A valid email is required")
        if len(password) < MIN_PASSWORD_LENGTH:
            return AuthResult(success=False, error=f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if key in self._accounts:
            return AuthResult(success=False, error="Email already registered")

        salt = secrets.token_bytes(16)
        self._accounts[key] = (salt, _hash_password(password, salt))
        logger.info(f"Registered account {key}")
        return AuthResult(success=True)

    async def sign_in(self, email: str, password: str) -> AuthResult:
        account = self._accounts.get(email.strip().lower())
        if account is None:
            return AuthResult(success=False, error="Invalid credentials")

        salt, expected = account
        if not hmac.compare_digest(_hash_password(password, salt), expected):
            return AuthResult(success=False, error="Invalid credentials")
        return AuthResult(success=True)
