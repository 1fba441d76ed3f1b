import hmac
from collections.abc import Awaitable, Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from shared.auth.config import AuthSettings
from shared.auth.permissions import Permission, is_allowed
from shared.constants import Role
from shared.models.user import CurrentUser

http_bearer = HTTPBearer(auto_error=False)


def get_auth_settings() -> AuthSettings:
    return AuthSettings()


def _decode_token(token: str, settings: AuthSettings) -> dict:
    return jwt.decode(token, settings.secret, algorithms=[settings.algorithm])


def _payload_to_user(payload: dict) -> CurrentUser:
    # Tokens minted before roles were embedded carry ``userId`` and no role.
    user_id = payload.get("sub") or payload.get("userId")
    if user_id is None:
        raise ValueError("Missing sub in token")
    role = Role(payload.get("role") or Role.USER.value)
    return CurrentUser(id=int(user_id), role=role)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    settings: AuthSettings = Depends(get_auth_settings),
) -> CurrentUser:
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: Missing or invalid token.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return _payload_to_user(_decode_token(credentials.credentials, settings))
    except (JWTError, ValueError, KeyError):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Invalid or expired token.",
        )


def require_permission(
    permission: Permission,
) -> Callable[..., Awaitable[CurrentUser]]:
    async def _check(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not is_allowed(user.role, permission):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden: insufficient role.",
            )
        return user

    return _check


def verify_api_key(provided: str | None, expected: str) -> None:
    """Reject unless ``provided`` matches ``expected``; an empty ``expected`` rejects all."""
    if not provided or not expected or not hmac.compare_digest(provided, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: Missing or invalid API Key.",
        )
