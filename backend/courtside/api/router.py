"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from courtside.api.routes import auth, users, groups, sessions, matches

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(groups.router)
api_router.include_router(sessions.router)
api_router.include_router(matches.router)
