from .auth import UserSessionContext, UserSessionPrincipal, require_identity
from .health import ScheduleHealthMetrics, ScheduleHealthService

__all__ = [
    "ScheduleHealthService",
    "ScheduleHealthMetrics",
    "UserSessionContext",
    "UserSessionPrincipal",
    "require_identity",
]
