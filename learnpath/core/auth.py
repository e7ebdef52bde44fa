"""Authentication utilities.

Authentication is a single capability: turn an opaque bearer token into a
user id. The verification strategy sits behind ``TokenResolver`` and is
chosen once at startup from settings.
"""

from abc import ABC, abstractmethod

import jwt

from learnpath.core.config import Settings
from learnpath.core.exceptions import AuthenticationError
from learnpath.core.logging import get_logger

logger = get_logger(__name__)

# Default guest user - used when no authentication is required
DEFAULT_USER_ID = 1


class TokenResolver(ABC):
    """Resolve a bearer token to a user id."""

    @abstractmethod
    def resolve(self, token: str | None) -> int:
        """Return the user id for ``token``.

        Raises:
            AuthenticationError: If the token is missing or invalid.
        """
        raise NotImplementedError


class GuestTokenResolver(TokenResolver):
    """Development resolver: every request acts as the guest user.

    WARNING: never enable this in production.
    """

    def __init__(self, user_id: int = DEFAULT_USER_ID):
        self.user_id = user_id

    def resolve(self, token: str | None) -> int:
        return self.user_id


class JWTTokenResolver(TokenResolver):
    """Verify HMAC-signed JWTs and read the user id from a claim."""

    def __init__(self, *, secret: str, algorithm: str = "HS256", user_claim: str = "userId"):
        self.secret = secret
        self.algorithm = algorithm
        self.user_claim = user_claim

    def resolve(self, token: str | None) -> int:
        if not token:
            raise AuthenticationError("Access token required")

        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as exc:
            logger.info("Rejected token", reason=str(exc))
            raise AuthenticationError("Invalid or expired token") from exc

        raw_user_id = claims.get(self.user_claim, claims.get("sub"))
        try:
            return int(raw_user_id)
        except (TypeError, ValueError) as exc:
            raise AuthenticationError("Token does not identify a user") from exc


def build_token_resolver(settings: Settings) -> TokenResolver:
    """Build the resolver selected by ``AUTH_BACKEND``."""
    if settings.AUTH_BACKEND == "jwt":
        if not settings.JWT_SECRET:
            raise RuntimeError("AUTH_BACKEND=jwt requires JWT_SECRET")
        return JWTTokenResolver(
            secret=settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
            user_claim=settings.JWT_USER_CLAIM,
        )
    if settings.AUTH_BACKEND == "guest":
        return GuestTokenResolver()
    raise RuntimeError(f"Unknown AUTH_BACKEND: {settings.AUTH_BACKEND}")


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()
