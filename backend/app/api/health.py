from fastapi import APIRouter, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from app.core import database
from app.core.config import settings
from datetime import datetime
from typing import Dict, Any

router = APIRouter()


def check_database() -> Dict[str, Any]:
    """Check database connectivity."""
    try:
        db = database.SessionLocal()
        try:
            db.execute(text("SELECT 1")).fetchone()
            return {
                "status": "healthy",
                "timestamp": datetime.now().isoformat()
            }
        finally:
            db.close()
    except SQLAlchemyError as e:
        return {
            "status": "unhealthy",
            "error": str(e),
            "timestamp": datetime.now().isoformat()
        }


@router.get("/healthz")
def health_check():
    """
    Health check including database connectivity.
    Returns 200 if the database answers, 503 otherwise.
    """
    db_check = check_database()
    overall_status = db_check["status"]

    response = {
        "status": overall_status,
        "timestamp": datetime.now().isoformat(),
        "checks": {
            "database": db_check
        },
        "version": settings.version
    }

    if overall_status != "healthy":
        raise HTTPException(status_code=503, detail=response)

    return response


@router.get("/health")
async def simple_health_check():
    """Simple health check for load balancers."""
    return {"status": "ok", "timestamp": datetime.now().isoformat()}
