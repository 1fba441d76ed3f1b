from shared.auth.dependencies import get_current_user, require_permission, verify_api_key
from shared.auth.permissions import Permission, is_allowed

__all__ = [
    "get_current_user",
    "require_permission",
    "verify_api_key",
    "Permission",
    "is_allowed",
]
