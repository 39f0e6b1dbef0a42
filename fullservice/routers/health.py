import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fullservice.core.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health(db: Session = Depends(get_db)):
    status = {"status": "healthy"}
    try:
        db.execute(text("SELECT 1"))
        status["database"] = "connected"
    except SQLAlchemyError as e:
        logger.warning("Database check failed: %s", e)
        status["database"] = f"error: {e.__class__.__name__}"
        status["status"] = "degraded"
    return status
