"""
KIX-AI-Gateway - FastAPI Backend

Receives a ticket ID, retrieves the ticket from the KIX API, summarizes it
with Azure OpenAI and writes the summary into a dynamic field of the ticket.
"""
import sys
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from kix_gateway import __version__
from kix_gateway.config import Settings, get_settings, missing_parameters
from kix_gateway.exceptions import GatewayError
from kix_gateway.middleware.logging_middleware import LoggingMiddleware
from kix_gateway.models.schemas import build_validation_errors
from kix_gateway.routes import analyze, health
from kix_gateway.services.analyzer import TicketAnalyzer
from kix_gateway.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message}
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Body violations are reported as 400 with one item per field"""
    result = build_validation_errors(list(exc.errors()))
    logger.warning(
        f"Rejected {request.method} {request.url.path}: "
        f"{', '.join(item.msg for item in result.errors)}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(result)
    )


def create_app(
    settings: Optional[Settings] = None,
    analyzer: Optional[TicketAnalyzer] = None
) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        settings: Application settings (loaded from the environment if omitted)
        analyzer: Orchestrator to use (built from settings if omitted)

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="KIX-AI-Gateway",
        description="Gateway for KIX ticket analysis and summary generation with Azure OpenAI",
        version=__version__
    )
    app.state.settings = settings
    app.state.analyzer = analyzer or TicketAnalyzer(settings)

    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(analyze.router)
    app.include_router(health.router)

    @app.get("/")
    async def root():
        return {"message": "KIX-AI-Gateway", "version": __version__}

    return app


def run() -> None:
    """Console entry point: validate configuration, then serve"""
    import uvicorn

    setup_logging()
    try:
        settings = get_settings()
    except ValidationError as e:
        missing = missing_parameters(e)
        if missing:
            logger.error(f"Missing Parameters: {', '.join(missing)}")
        else:
            logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    logger.info(f"KIX-AI-Gateway is running on Port {settings.port}")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
