"""Security utilities for password hashing and JWT token management."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext

from expense_tracker.core.exceptions import ConfigurationError, Unauthorized

# Password hashing with Argon2
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

# JWT settings
ALGORITHM = "HS256"
TOKEN_EXPIRE_DAYS = 7
MIN_SECRET_BYTES = 32


def hash_password(password: str) -> str:
    """
    Hash a password using Argon2.

    Args:
        password: Plain text password

    Returns:
        Hashed password string (salt included)
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        plain_password: Password to verify
        hashed_password: Stored password hash

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


@lru_cache(maxsize=1)
def dummy_password_hash() -> str:
    """Hash checked against when a login email is unknown, so both paths do the same work."""
    return pwd_context.hash("not-a-real-password")


@dataclass(frozen=True)
class Identity:
    """Authenticated caller extracted from a validated token."""

    user_id: UUID
    email: str


class TokenService:
    """Issues and validates signed bearer tokens.

    The service holds the signing secret, so it is built once by the
    application factory and handed to request dependencies through
    ``app.state``.
    """

    def __init__(
        self,
        secret: str | None,
        algorithm: str = ALGORITHM,
        expire_days: int = TOKEN_EXPIRE_DAYS,
    ):
        if not secret:
            raise ConfigurationError("JWT secret is not configured")
        size = len(secret.encode("utf-8"))
        if size < MIN_SECRET_BYTES:
            raise ConfigurationError(
                f"JWT secret too short: need >= {MIN_SECRET_BYTES} bytes, got {size}"
            )
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime = timedelta(days=expire_days)

    def __repr__(self) -> str:
        return f"<TokenService(algorithm={self.algorithm}, lifetime={self.lifetime})>"

    def issue(self, user_id: UUID, email: str, now: datetime | None = None) -> str:
        """
        Create a signed token for a user.

        Args:
            user_id: User ID to encode in the ``sub`` claim
            email: User email to encode in the ``email`` claim
            now: Issue time (defaults to the current UTC time)

        Returns:
            Encoded JWT token string
        """
        issued_at = now or datetime.now(timezone.utc)
        to_encode = {
            "sub": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(to_encode, self._secret, algorithm=self.algorithm)

    def validate(self, token: str) -> Identity:
        """
        Decode and verify a token.

        Issuer and audience are not checked and no clock-skew leeway is
        granted on expiry.

        Args:
            token: JWT token string

        Returns:
            Identity carried by the token

        Raises:
            Unauthorized: If the token is malformed, tampered with or expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_aud": False, "verify_iss": False, "leeway": 0},
            )
        except JWTError as exc:
            raise Unauthorized(details={"reason": type(exc).__name__}) from exc

        user_id_str = payload.get("sub")
        if user_id_str is None:
            raise Unauthorized(details={"reason": "missing sub claim"})
        try:
            user_id = UUID(user_id_str)
        except (TypeError, ValueError) as exc:
            raise Unauthorized(details={"reason": "malformed sub claim"}) from exc

        return Identity(user_id=user_id, email=payload.get("email", ""))
