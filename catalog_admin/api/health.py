from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from catalog_admin.database import get_db
from catalog_admin.utils.storage import LocalImageStorage, get_storage

router = APIRouter(prefix="/health", tags=["Health"])


@router.get(
    "/",
    summary="Health check",
    description="Basic health check endpoint."
)
def health_check():
    """Simple health check."""
    return {"status": "healthy"}


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check if the database and the image upload directory are usable."
)
def readiness_check(
    db: Session = Depends(get_db),
    storage: LocalImageStorage = Depends(get_storage)
):
    """
    Readiness check for all dependencies.

    Returns status of:
    - Database connection
    - Image storage directory
    """
    checks = {
        "database": False,
        "storage": False
    }

    # Check database
    try:
        db.execute(text("SELECT 1"))
        checks["database"] = True
    except Exception as e:
        checks["database_error"] = str(e)

    # Check upload directory
    checks["storage"] = storage.is_available()

    # Determine overall status
    all_healthy = all([checks["database"], checks["storage"]])

    return {
        "status": "ready" if all_healthy else "not_ready",
        "checks": checks
    }
