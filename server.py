# FastAPI Server for the Linkp Promotional Marketplace

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import sys

from config.app_config import (
    LOG_LEVEL, CORS_ORIGINS, ENABLE_EXPIRY_SCHEDULER, EXPIRY_SWEEP_MINUTES,
)
from database.config import init_db, SessionLocal
from routers import promotional_links_router, proposals_router, campaigns_router
from routers.error_handlers import register_error_handlers
from services.acceptance_workflow import AcceptanceWorkflow

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Linkp API",
    description="Promotional link proposals, budgets and campaigns",
    version="1.0.0"
)

scheduler = None


def scheduled_proposal_expiry():
    db = SessionLocal()
    try:
        AcceptanceWorkflow(db).expire_overdue()
    except Exception as e:
        logger.error(f"Scheduled proposal expiry failed: {e}")
    finally:
        db.close()


@app.on_event("startup")
def startup_event():
    # Initialize database tables using SQLAlchemy create_all
    init_db()

    global scheduler
    if ENABLE_EXPIRY_SCHEDULER:
        from apscheduler.schedulers.background import BackgroundScheduler

        scheduler = BackgroundScheduler()
        scheduler.add_job(scheduled_proposal_expiry, 'interval', minutes=EXPIRY_SWEEP_MINUTES)
        scheduler.start()
        logger.info(f"Scheduler started: overdue proposals expire every {EXPIRY_SWEEP_MINUTES} minutes")


@app.on_event("shutdown")
def shutdown_event():
    if scheduler is not None:
        scheduler.shutdown(wait=False)


# CORS Setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=False,  # Required when using "*"
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(promotional_links_router, prefix="/api")
app.include_router(proposals_router, prefix="/api")
app.include_router(campaigns_router, prefix="/api")


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "linkp-api"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
