"""Component Chameleon — Backend

Slim backend responsibilities:
  1. Component lookup + alternatives + comparison table
  2. Bulk lookup (sequential, per-item isolation)
  3. BOM lifecycle/stock health (batched, degraded rows on failure)

File parsing, spreadsheet export and the UI live in the frontend.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from component_chameleon import __version__
from component_chameleon.ai.client import OracleClient
from component_chameleon.ai.oracle import create_oracle
from component_chameleon.config import get_settings
from component_chameleon.errors import ComponentFinderError, ErrorKind
from component_chameleon.routers import bom, bulk, components

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.PARSING_ERROR: 502,
    ErrorKind.API_ERROR: 503,
    ErrorKind.FILE_ERROR: 400,
    ErrorKind.UNKNOWN_ERROR: 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: build the oracle client. Shutdown: close its HTTP pool."""
    settings = get_settings()
    if getattr(app.state, "oracle_client", None) is None:
        oracle = create_oracle(settings)
        app.state.oracle_client = OracleClient.from_settings(oracle, settings)
        try:
            yield
        finally:
            await oracle.aclose()
            app.state.oracle_client = None
    else:
        # Pre-injected client (tests, embedding); caller owns its lifecycle
        yield


async def component_error_handler(request: Request, exc: ComponentFinderError):
    logger.warning(
        "%s %s failed (%s): %s", request.method, request.url.path, exc.kind.value, exc.message
    )
    return JSONResponse(
        status_code=ERROR_STATUS.get(exc.kind, 500),
        content={"kind": exc.kind.value, "message": exc.user_message},
    )


def create_app(oracle_client: OracleClient | None = None) -> FastAPI:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    application = FastAPI(
        title=settings.app_name,
        version=__version__,
        description=(
            "Component Chameleon — component lookup, drop-in alternatives "
            "and BOM supply-chain health, backed by an LLM oracle."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    application.state.oracle_client = oracle_client

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_exception_handler(ComponentFinderError, component_error_handler)

    # ─── Single lookup + comparison ───
    application.include_router(
        components.router, prefix="/api/components", tags=["Components"]
    )

    # ─── Bulk lookup ───
    application.include_router(bulk.router, prefix="/api/bulk", tags=["Bulk"])

    # ─── BOM health ───
    application.include_router(bom.router, prefix="/api/bom", tags=["BOM"])

    @application.get("/health")
    async def health_check():
        return {"status": "ok", "service": "component-chameleon", "version": __version__}

    return application


app = create_app()
