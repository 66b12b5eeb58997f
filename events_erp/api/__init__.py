from .auth import router as auth_router
from .users import router as users_router
from .units import router as units_router
from .events import router as events_router
from .transactions import router as transactions_router
from .requisitions import router as requisitions_router
from .communications import router as communications_router
from .operators import router as operators_router
from .services import router as services_router
from .stats import router as stats_router

__all__ = [
    "auth_router",
    "users_router",
    "units_router",
    "events_router",
    "transactions_router",
    "requisitions_router",
    "communications_router",
    "operators_router",
    "services_router",
    "stats_router"
]
