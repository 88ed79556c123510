"""Health endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from potions.potions_api.db_api import DBAPI
from potions.webservice.deps import get_db_api

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live")
def live() -> dict:
    """Liveness check."""
    return {"status": "ok"}


@router.get("/ready")
def ready(db: DBAPI = Depends(get_db_api)):
    """Readiness check: the document store must answer."""
    if not db.ping():
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ready"}
