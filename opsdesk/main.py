from contextlib import asynccontextmanager

from fastapi import FastAPI

from opsdesk.infrastructure.database import SessionLocal, engine, initialize_database
from opsdesk.infrastructure.scheduler import AutomationScheduler
from opsdesk.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema, run the automation scheduler and release resources on exit."""

    initialize_database()
    scheduler = AutomationScheduler(SessionLocal)
    scheduler.start()
    app.state.automation_scheduler = scheduler
    try:
        yield
    finally:
        scheduler.stop()
        engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(title="OpsDesk automation", lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()
