from fastapi import FastAPI

from app.config import settings
from app.log_config import configure_logging


def create_app() -> FastAPI:
    configure_logging(settings.log_level)
    app = FastAPI(title="Chatbot Escalation Service")

    from .api import escalations, health
    app.include_router(health.router)
    app.include_router(escalations.router)

    return app
