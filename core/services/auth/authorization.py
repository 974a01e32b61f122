from __future__ import annotations

from core.exceptions import AuthError
from core.services.auth.session import UserSessionContext, UserSessionPrincipal


def require_identity(
    user_session: UserSessionContext | None,
    *,
    operation_label: str,
) -> UserSessionPrincipal:
    principal = user_session.principal if user_session is not None else None
    if principal is None:
        raise AuthError(
            f"Authentication required for {operation_label}.",
            code="UNAUTHENTICATED",
        )
    if not principal.is_valid():
        raise AuthError(
            f"Invalid identity presented for {operation_label}.",
            code="INVALID_IDENTITY",
        )
    return principal


__all__ = ["require_identity"]
