"""JWT token creation and verification.

HS256 (symmetric HMAC) signed with the process-wide JWT_SECRET. Rotating the
secret invalidates every token issued before the rotation.

No token revocation: once issued, a token is valid until expiry. The
authentication gate re-resolves the subject on every request, so tokens of
deleted users stop working immediately.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt

from config.settings import settings
from src.erp_common.errors import ExpiredTokenError, InvalidTokenError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"
_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)


@dataclass(frozen=True)
class TokenClaims:
    """Identity and role data carried inside an access token."""

    user_id: str
    username: str
    email: str
    is_admin: bool


def create_access_token(claims: TokenClaims) -> str:
    """Issue an access token (default lifetime: 24h)."""
    now = datetime.now(UTC)
    payload = {
        "sub": claims.user_id,
        "username": claims.username,
        "email": claims.email,
        "is_admin": claims.is_admin,
        "iat": now,
        "exp": now + _ACCESS_EXPIRE,
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def decode_token(token: str) -> TokenClaims:
    """Verify signature and expiry, return the embedded claims unchanged.

    Raises:
        ExpiredTokenError: `exp` is in the past.
        InvalidTokenError: bad signature, malformed token, or missing claims.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except ExpiredSignatureError:
        raise ExpiredTokenError() from None
    except JWTError:
        raise InvalidTokenError() from None

    user_id = payload.get("sub")
    if not user_id:
        raise InvalidTokenError()

    return TokenClaims(
        user_id=str(user_id),
        username=str(payload.get("username", "")),
        email=str(payload.get("email", "")),
        is_admin=bool(payload.get("is_admin", False)),
    )
