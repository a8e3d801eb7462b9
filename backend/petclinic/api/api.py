"""Module: api."""

# backend/petclinic/api/api.py
from fastapi import APIRouter

# Operational routes.
from petclinic.api.routes.health import router as health_router

# Server-rendered clinic pages.
from petclinic.api.routes.owners import router as owners_router
from petclinic.api.routes.visits import router as visits_router


api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])

# Visit routes share the /owners prefix with the owner page, so paths are
# declared in full on each router.
api_router.include_router(owners_router, tags=["owners"])
api_router.include_router(visits_router, tags=["visits"])
