from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.db.session import get_db

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def health():
    """Basic health check."""
    return {"status": "ok"}


@router.get("/healthz/ready")
async def health_ready(db: AsyncSession = Depends(get_db)):
    """Readiness check with database connection."""
    try:
        await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError, TimeoutError):
        # Driver errors can carry connection strings; keep them out of the body.
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not ready", "database": "disconnected"},
        )
    return {"status": "ready", "database": "connected"}
