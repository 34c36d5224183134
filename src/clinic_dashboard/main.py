"""FastAPI application entry point."""

import os
from contextlib import asynccontextmanager

import uvicorn
from ddtrace import patch_all
from fastapi import FastAPI

from clinic_dashboard.dependencies import close_api_client
from clinic_dashboard.routes import (
    agenda_router,
    dashboard_router,
    patients_router,
    sessions_router,
)

patch_all()


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_api_client()


app = FastAPI(title="Clinic Dashboard", lifespan=lifespan)
app.include_router(dashboard_router)
app.include_router(patients_router)
app.include_router(agenda_router)
app.include_router(sessions_router)


def run() -> None:
    uvicorn.run(
        "clinic_dashboard.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_config=None,
    )
