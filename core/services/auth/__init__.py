from core.services.auth.authorization import require_identity
from core.services.auth.session import UserSessionContext, UserSessionPrincipal

__all__ = ["UserSessionPrincipal", "UserSessionContext", "require_identity"]
