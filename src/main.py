from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic_settings import BaseSettings
from contextlib import asynccontextmanager
from typing import Optional
import logging

from routers.api import router as api_router
from schemas import AppHealthOK, MessageResponse
from core.service_manager import service_manager
from core.config_loader import config_loader

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    app_name: str = "api-rec"
    debug: bool = False
    # Defaults come from config/api_rec_config.json,
    # environment variables (DATABASE_URL, REC_INPUT_FILE, API_PATH...) override them
    database_url: str = config_loader.get_database_url()
    rec_input_file: str = config_loader.get_rec_input_file()
    api_path: Optional[str] = config_loader.get_api_path()
    dedup_window_seconds: int = config_loader.get_dedup_window_seconds()


settings = Settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup/shutdown without deprecated on_event."""
    try:
        service_manager.start_services(
            database_url=settings.database_url,
            rec_input_file=settings.rec_input_file,
            dedup_window_seconds=settings.dedup_window_seconds,
        )
    except Exception as e:
        logger.error("Failed to start services: %s", e)
        raise

    try:
        yield
    finally:
        logger.info("Stopping services")
        service_manager.stop_services()


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
app.state.settings = settings


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # malformed bodies and query values are client errors
    logger.warning("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": "Invalid request", "errors": jsonable_encoder(exc.errors())})


@app.get("/", tags=["meta"], response_model=MessageResponse)
async def read_root() -> MessageResponse:
    return MessageResponse(message=settings.app_name)


@app.get("/health", tags=["meta"], response_model=AppHealthOK)
async def healthcheck() -> AppHealthOK:
    return AppHealthOK(status="ok", app=settings.app_name)


# mount API router under /api
app.include_router(api_router, prefix="/api")
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
