"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.autofill import router as autofill_router
from routes.active_pods import router as active_pods_router
from routes.users import router as users_router

__all__ = [
    "autofill_router",
    "active_pods_router",
    "users_router",
]
