"""Admin capability token creation and verification.

Issued on a successful admin login and returned to the client, which can
present it on a later auth:login to regain admin after a reconnect.
HS256 with the shared JWT_SECRET.

Expiry (ADMIN_TOKEN_EXPIRE_MINUTES) bounds how long a token can be reused
for reconnecting. It never ends the authority of a connection that is
already logged in as admin.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.auc_common.errors import AuthorizationDeniedError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"
_ADMIN_EXPIRE = timedelta(minutes=settings.ADMIN_TOKEN_EXPIRE_MINUTES)
_ADMIN_SUBJECT = "admin"
_ADMIN_TYPE = "admin"


def create_admin_token() -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": _ADMIN_SUBJECT,
        "type": _ADMIN_TYPE,
        "iat": now,
        "exp": now + _ADMIN_EXPIRE,
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def decode_admin_token(token: str | None, event: str = "admin") -> dict[str, str]:
    """Decode and validate an admin token.

    Raises:
        AuthorizationDeniedError: token missing, tampered, expired or of another type.
    """
    if not token:
        raise AuthorizationDeniedError(event)
    try:
        payload: dict[str, str] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except JWTError:
        raise AuthorizationDeniedError(event) from None

    if payload.get("type") != _ADMIN_TYPE or payload.get("sub") != _ADMIN_SUBJECT:
        raise AuthorizationDeniedError(event)
    return payload
