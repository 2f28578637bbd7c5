from datetime import datetime, timedelta, timezone

import jwt

from edu_api.core import config
from edu_api.core.errors import ConfigError, Unauthorized


def _signing_secret() -> str:
    if not config.JWT_SECRET_KEY:
        raise ConfigError("Token signing secret is not configured.")
    return config.JWT_SECRET_KEY


def create_access_token(user_id: int, verified: bool, expires_minutes: int | None = None) -> str:
    secret = _signing_secret()
    expire_minutes = expires_minutes or config.JWT_EXPIRES_MINUTES
    issued_at = datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "verified": bool(verified),
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, secret, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    secret = _signing_secret()
    try:
        return jwt.decode(token, secret, algorithms=[config.JWT_ALGORITHM])
    except jwt.PyJWTError as exc:
        raise Unauthorized("Invalid token.") from exc
