"""API v1 router assembly."""

from fastapi import APIRouter

from projectlens.api.v1.endpoints import auth, clusterroles, projects

api_router = APIRouter()

# Auth endpoints
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

# Project discovery endpoints
api_router.include_router(projects.router, tags=["projects"])

# Role capability endpoints
api_router.include_router(clusterroles.router, tags=["clusterroles"])
