"""Module: main."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from petclinic.api.api import api_router
from petclinic.core.config import settings
from petclinic.db.init_db import init_db

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Local/dev convenience; deployed databases are managed with Alembic.
    init_db()
    logger.info("Pet clinic started (database=%s)", settings.database_url.split("://", 1)[0])
    yield


app = FastAPI(title="Pet Clinic", version="0.1.0", lifespan=lifespan)

app.include_router(api_router)
