from fastapi import APIRouter

from app.api.v1.health import router as health_router
from app.api.v1.auth import router as auth_router
from app.api.v1.users import router as users_router
from app.api.v1.reviews import router as reviews_router
from app.api.v1.matching import router as matching_router
from app.api.v1.access_requests import router as access_requests_router
from app.api.v1.conversations import router as conversations_router


v1_router = APIRouter()

# ------------------------------------------------------------------
# SYSTEM / CORE
# ------------------------------------------------------------------
v1_router.include_router(health_router, tags=["health"])
v1_router.include_router(auth_router, tags=["auth"])

# ------------------------------------------------------------------
# PROFILES
# ------------------------------------------------------------------
v1_router.include_router(users_router, tags=["users"])
v1_router.include_router(reviews_router, tags=["reviews"])

# ------------------------------------------------------------------
# MATCHING / CHILD DATA ACCESS
# ------------------------------------------------------------------
v1_router.include_router(matching_router, tags=["matching"])
v1_router.include_router(access_requests_router, tags=["access-requests"])

# ------------------------------------------------------------------
# CHAT
# ------------------------------------------------------------------
v1_router.include_router(conversations_router, tags=["conversations"])
