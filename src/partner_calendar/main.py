# main.py
from dotenv import load_dotenv
load_dotenv()
import logging

import uvicorn
from fastapi import FastAPI

from partner_calendar.api import (
    collaboration_api_router,
    events_api_router,
    external_calendars_api_router,
    health_api_router,
    partners_api_router,
    register_exception_handlers,
    users_api_router,
)
from partner_calendar.core.config import get_settings
from partner_calendar.core.database import init_db


def configure_logging() -> None:
    """Apply the configured level to the root logger and the app's loggers."""
    settings = get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger().setLevel(level)


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_name, debug=settings.debug)

    register_exception_handlers(app)

    app.include_router(users_api_router, prefix="/api")
    app.include_router(events_api_router, prefix="/api")
    app.include_router(collaboration_api_router, prefix="/api")
    app.include_router(partners_api_router, prefix="/api")
    app.include_router(external_calendars_api_router, prefix="/api")
    app.include_router(health_api_router, prefix="/api")

    @app.on_event("startup")
    def on_startup():
        configure_logging()
        init_db()

    @app.get("/")
    async def root():
        return {"message": f"Welcome to {settings.app_name}"}

    return app


app = create_app()


def run() -> None:
    """Console entry point."""
    env = get_settings().environment.lower()

    if env == "production":
        # Production: Multiple workers, no reload
        uvicorn.run("partner_calendar.main:app", host="0.0.0.0", port=9020, workers=4)
    else:
        # Development: Single worker with hot reload
        # Note: reload=True is incompatible with workers > 1
        uvicorn.run("partner_calendar.main:app", host="0.0.0.0", port=9020, reload=True)


if __name__ == "__main__":
    run()
