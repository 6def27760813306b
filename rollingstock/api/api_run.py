from fastapi import FastAPI
import logging

from rollingstock.api.routes import household, items, report, transfer
from rollingstock.events.web_observers import start as start_event_observers
from rollingstock.utilities.config import DEBUG

# Logging
logger = logging.getLogger("rollingstock_app")

# Initialize FastAPI app
app = FastAPI(title="RollingStock Planner API", debug=DEBUG)

# Include routers
app.include_router(items.router)
app.include_router(household.router)
app.include_router(report.router)
app.include_router(transfer.router)


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for web alerts when the app starts."""
    start_event_observers()
    logger.info("RollingStock API ready")


@app.get("/health")
def health():
    return {"status": "ok"}
