"""The authenticated caller, as carried in a bearer token."""

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super-admin"


ADMIN_ROLES = (Role.ADMIN, Role.SUPER_ADMIN)


@dataclass(frozen=True)
class Principal:
    user_id: str
    username: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES

    @property
    def is_customer(self) -> bool:
        return self.role == Role.USER

    def claims(self) -> dict:
        return {"id": self.user_id, "username": self.username, "role": self.role.value}
