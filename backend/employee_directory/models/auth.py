"""Authenticated caller, as derived from a validated bearer token."""

from __future__ import annotations

from pydantic import BaseModel


class UserInfo(BaseModel):
    id: str | None = None
    name: str | None = None
    email: str | None = None
    roles: list[str] = []

    def has_any_role(self, *roles: str) -> bool:
        return any(r in self.roles for r in roles)
