"""FastAPI application entry point for the HydroGuard calculation service.

This module wraps the deterministic hydrology, recovery-priority and proposal
scoring core in a small HTTP API. Domain errors raised by the core are mapped
to 422 responses; nothing here substitutes a default numeric result for a
failed calculation.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from api.v1.routes import api_router
from hydroguard import __version__
from hydroguard.config import settings
from hydroguard.errors import HydroGuardError, InvalidConfiguration
from hydroguard.logger import get_logger, setup_logging
import argparse
import uvicorn

log = get_logger(__name__)


async def hydroguard_error_handler(request: Request, exc: HydroGuardError) -> JSONResponse:
    """Translate core errors into 422 responses.

    The `error` field lets a caller tell a configuration problem (the
    simulation could not run) from an invalid per-call input.
    """
    kind = "invalid_configuration" if isinstance(exc, InvalidConfiguration) else "invalid_input"
    log.warning("{} {} rejected: {}", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc), "error": kind})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Mounts the API router at the /api/v1 prefix and registers the core error
    handler and a health endpoint.

    Returns
    -------
    FastAPI
        Configured FastAPI application instance ready for deployment.
    """
    app = FastAPI(title=settings.APP_NAME, version=__version__)
    app.add_exception_handler(HydroGuardError, hydroguard_error_handler)
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/health")
    def health():
        return {"status": "ok", "version": __version__}

    return app


app = create_app()

if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="HydroGuard calculation service")
    parser.add_argument("--host", default=settings.API_HOST)
    parser.add_argument("--port", type=int, default=settings.API_PORT)
    parser.add_argument("--log-level", default=settings.LOG_LEVEL,
                        help="Console log level (DEBUG, INFO, WARNING...)")

    args = parser.parse_args()
    setup_logging(args.log_level)
    uvicorn.run(app, host=args.host, port=args.port)
