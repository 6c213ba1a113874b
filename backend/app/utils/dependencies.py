from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config import Settings, get_settings
from .error_handlers import UnauthorizedError
from .jwt import user_id_from_token

http_bearer = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    settings: Settings = Depends(get_settings),
) -> int:
    """
    Acting identity for a protected route.

    The ``userId`` claim of a valid token is trusted as-is; the user row is
    not looked up again.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("No token provided")
    if credentials.scheme.lower() != "bearer":
        raise UnauthorizedError("Invalid token")
    return user_id_from_token(credentials.credentials, settings)
