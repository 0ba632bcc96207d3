"""API version 1 routes."""

from fastapi import APIRouter

from expense_tracker.api.v1 import auth, expenses


def build_router(prefix: str = "") -> APIRouter:
    """Combine the API routers under an optional prefix such as ``/api``."""
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router)
    router.include_router(expenses.router)
    return router
