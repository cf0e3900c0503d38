from apscheduler.schedulers.asyncio import AsyncIOScheduler
import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from src.load_secrets import settlement_retry_minutes
from src.models.schemas import Base
from src.routers import gig
from src.routers.gig import get_result_committer
from src.services.result_committer import reconcile_pending_settlements

scheduler = AsyncIOScheduler()
logging.basicConfig(level=logging.INFO)


async def reconcile_settlements():
    await reconcile_pending_settlements(get_result_committer())


@asynccontextmanager
async def lifespan(app):
    """Create tables and start the settlement reconciliation job.
    This function is called to start the server.
    """
    from src.db import engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Settlements left open by a failed write are retried here.
    scheduler.add_job(
        reconcile_settlements,
        "interval",
        minutes=settlement_retry_minutes,
    )
    scheduler.start()
    try:
        yield
    finally:
        scheduler.shutdown()
        logging.info("Stop Server")


app = FastAPI(lifespan=lifespan)
app.include_router(gig.gig_router)
