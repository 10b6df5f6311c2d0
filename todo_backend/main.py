from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from todo_backend.api.deps import get_app_settings
from todo_backend.api.routers.auth import router as auth_router
from todo_backend.infrastructure.db.engine import create_schema, get_engine


logger = logging.getLogger(__name__)

settings = get_app_settings()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.database_url:
        create_schema(get_engine(settings.database_url))
        logger.info("main: schema_ready")
    yield


app = FastAPI(title="Todo API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(auth_router)
