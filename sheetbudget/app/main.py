import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sheetbudget.app.api.v1.router import api_router
from sheetbudget.app.config import get_settings
from sheetbudget.app.database import create_tables
from sheetbudget.app.errors import StoreUnavailable
from sheetbudget.app.logging_config import configure_logging

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level)
    if not settings.family_pin or not settings.admin_pin:
        logger.warning("FAMILY_PIN or ADMIN_PIN not set in environment; protected endpoints will reject every request.")
    if settings.store_backend == "sql":
        create_tables()
    logger.info("Starting up with %s backing store", settings.store_backend)
    yield
    logger.info("Shutting down application...")

app = FastAPI(title="Sheet Budget", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    logger.error("Backing store unavailable for %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Backing store unavailable"}
    )

@app.get("/health")
def health():
    return {"status": "ok"}

# Include all API routes
app.include_router(api_router, prefix="/api/v1")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("sheetbudget.app.main:app", host="0.0.0.0", port=8000, reload=True)
