import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

import glowbook.models  # noqa: F401 - register all models with Base.metadata
from glowbook.api.routes.appointments import client_router as client_appointments_router
from glowbook.api.routes.appointments import professional_router as professional_appointments_router
from glowbook.api.routes.appointments import router as appointments_router
from glowbook.api.routes.availability import router as availability_router
from glowbook.api.routes.housekeeping import router as housekeeping_router
from glowbook.api.routes.professionals import router as professionals_router
from glowbook.api.routes.slots import router as slots_router
from glowbook.config import get_settings
from glowbook.database import Base, engine
from glowbook.schemas.system import StatusResponse


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Create tables on startup (dev convenience)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(
        title="Glowbook",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.include_router(professionals_router)
    app.include_router(availability_router)
    app.include_router(slots_router)
    app.include_router(appointments_router)
    app.include_router(professional_appointments_router)
    app.include_router(client_appointments_router)
    app.include_router(housekeeping_router)

    @app.get("/api/system/status", response_model=StatusResponse)
    async def system_status() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
