"""Module: health."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from petclinic.api.routes.deps import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


# Endpoint: liveness probe that also reports whether the database answers.
@router.get("/health")
def health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        database = True
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        database = False
    return {"status": "ok", "database": database}
