from __future__ import annotations  # FastAPI server exposing the mock interview API

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import router as interviews_router
from config.settings import settings
from storage.migrate import migrate


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):  # Apply schema migrations before serving
    migrate(settings.DB_PATH)
    logger.info("Database ready at %s", settings.DB_PATH)
    yield


def create_app() -> FastAPI:  # Build the application with routes and middleware
    application = FastAPI(title="Mock Interview API", lifespan=lifespan)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(interviews_router)

    @application.get("/health")
    def health() -> dict:  # Liveness probe
        return {"status": "ok"}

    return application


app = create_app()
