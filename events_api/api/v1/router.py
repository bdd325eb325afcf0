"""
API v1 router for the Events Registry API.
"""

from fastapi import APIRouter

from ...core.resources import RESOURCES
from .resources import build_resource_router

router = APIRouter(prefix="/api/v1")

for resource in RESOURCES:
    router.include_router(build_resource_router(resource))
