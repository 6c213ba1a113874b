from datetime import datetime, timedelta

from jose import JWTError, jwt

from ..config import Settings
from .error_handlers import UnauthorizedError


def create_access_token(data: dict, settings: Settings) -> str:
    """Sign ``data``. An ``exp`` claim is added only when an expiry is configured."""
    to_encode = data.copy()
    if settings.access_token_expire_minutes is not None:
        expire = datetime.utcnow() + timedelta(minutes=settings.access_token_expire_minutes)
        to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> dict:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise UnauthorizedError("Invalid token") from e


def token_for_user(user_id: int, settings: Settings) -> str:
    return create_access_token({"userId": user_id}, settings)


def user_id_from_token(token: str, settings: Settings) -> int:
    payload = decode_access_token(token, settings)
    user_id = payload.get("userId")
    if user_id is None:
        raise UnauthorizedError("Invalid token")
    try:
        return int(user_id)
    except (TypeError, ValueError) as e:
        raise UnauthorizedError("Invalid token") from e
