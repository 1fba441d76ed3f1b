from pydantic import BaseModel, ConfigDict

from shared.constants import Role


class CurrentUser(BaseModel):
    """Principal decoded from the bearer token."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: int
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
