from __future__ import annotations

from fastapi import FastAPI
from pydantic import BaseModel

from ratecalc.logging_utils import configure_logging


class HealthResponse(BaseModel):
    status: str
    service: str


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    configure_logging()

    application = FastAPI(
        title="ShipStation Rates Calculator API",
        version="1.0.0",
    )

    from ratecalc.api.routers import metrics_router

    application.include_router(metrics_router)

    @application.get("/health")
    def healthcheck() -> HealthResponse:
        return HealthResponse(status="ok", service="shipstation-rates-calculator")

    return application


app = create_app()
