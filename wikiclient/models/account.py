"""Account information model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import PrivilegeLevel


class AccountInfo(BaseModel):
    """Current account as reported by ``meta=userinfo``."""

    id: int = 0
    name: str = ""
    anonymous: bool = Field(default=False, alias="anon")
    groups: tuple[str, ...] = ()
    rights: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def has_right(self, right: str) -> bool:
        return right in self.rights

    def is_in_group(self, group: str) -> bool:
        return group in self.groups

    @property
    def privilege_level(self) -> PrivilegeLevel:
        """Privilege level that decides the server's per-request limits."""
        if self.has_right("apihighlimits"):
            return PrivilegeLevel.HIGH_LIMITS
        if self.anonymous:
            return PrivilegeLevel.ANONYMOUS
        return PrivilegeLevel.USER
