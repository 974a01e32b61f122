from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet


@dataclass(frozen=True)
class UserSessionPrincipal:
    user_id: str
    username: str
    display_name: str | None = None
    role_names: FrozenSet[str] = frozenset()

    def is_valid(self) -> bool:
        return bool((self.user_id or "").strip()) and bool((self.username or "").strip())


class UserSessionContext:
    def __init__(self, principal: UserSessionPrincipal | None = None):
        self._principal: UserSessionPrincipal | None = principal

    @property
    def principal(self) -> UserSessionPrincipal | None:
        return self._principal

    def set_principal(self, principal: UserSessionPrincipal) -> None:
        self._principal = principal

    def clear(self) -> None:
        self._principal = None

    def is_authenticated(self) -> bool:
        return self._principal is not None and self._principal.is_valid()


__all__ = ["UserSessionPrincipal", "UserSessionContext"]
