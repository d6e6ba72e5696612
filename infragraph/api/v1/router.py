"""
Aggregated APIRouter for the InfraGraph API.

All endpoint routers are included here and exposed as a single ``router``
instance that is mounted by the FastAPI application in
``infragraph.main``.  The ``/api`` prefix is applied by the application, so
sub-routers only declare their own resource prefix (e.g. ``/parse``).
"""

from __future__ import annotations

from fastapi import APIRouter

from infragraph.api.v1 import parse

router = APIRouter()

router.include_router(
    parse.router,
    prefix="/parse",
    tags=["parse"],
)
