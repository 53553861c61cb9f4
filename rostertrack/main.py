"""
Main entry point for the roster tracking API.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from rostertrack.routes import lineups, players, teams
from rostertrack.services.bootstrap_service import seed_default_team
from rostertrack.utils.db_async import (
    DATABASE_URL,
    SessionLocal,
    describe_database_url,
    dispose_engine,
    init_db,
)

from rostertrack.logging_config import setup_logging
from rostertrack.config import settings

import logging
logger = logging.getLogger(__name__)

setup_logging(
    level=settings.log_level,
    access_log=settings.access_log,
    sql_log=settings.sql_echo,
)

@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.is_dev and settings.auto_init_db:
        logger.info("Running init_db()…")
        logger.info(f"DB target: {describe_database_url(DATABASE_URL)}")
        try:
            await init_db()
            logger.info("DB ready.")
        except Exception:
            logger.exception("init_db failed")
            raise

        if settings.seed_default_team:
            async with SessionLocal() as session:
                await seed_default_team(session)
    else:
        logger.info("Skipping init_db(); auto_init_db disabled or non-dev environment")

    yield

    try:
        logger.info("Disposing DB engine…")
        await dispose_engine()
        logger.info("DB engine disposed.")
    except Exception:
        logger.exception("Failed to dispose DB engine")

app = FastAPI(title="Roster Track", lifespan=lifespan)
app.include_router(teams.router)
app.include_router(players.router)
app.include_router(lineups.router)

@app.get("/health")
async def health_check():
    """Health Check Endpoint"""
    return {"status": "ok"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
