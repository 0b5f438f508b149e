"""API routes."""

from linkup.api.routes.creators import router as creators_router
from linkup.api.routes.posts import router as posts_router
from linkup.api.routes.sub_requests import router as sub_requests_router
from linkup.api.routes.subscribers import router as subscribers_router
from linkup.api.routes.users import router as users_router

__all__ = [
    "users_router",
    "creators_router",
    "posts_router",
    "sub_requests_router",
    "subscribers_router",
]
