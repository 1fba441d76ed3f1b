"""Role → permission mapping.

Every role is matched explicitly; adding a member to ``Role`` without
extending ``is_allowed`` fails type checking through ``assert_never``.
"""

from enum import Enum
from typing import assert_never

from shared.constants import Role


class Permission(str, Enum):
    READ = "read"
    MANAGE = "manage"


def is_allowed(role: Role, permission: Permission) -> bool:
    match role:
        case Role.ADMIN:
            return True
        case Role.USER:
            return permission is Permission.READ
        case _:
            assert_never(role)
