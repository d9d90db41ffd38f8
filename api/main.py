"""
regbridge - Main FastAPI Application.

HTTP surface for agents: lists the guarded INWX registrar tools and runs
them one call at a time.
"""
from contextlib import asynccontextmanager
import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.routes import health, tools
from core.domain.errors import (
    InwxApiError,
    OperationNotFoundError,
    PolicyViolationError,
    ToolInputError,
)


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown."""
    logger.info("regbridge API starting up (docs at /docs)")
    yield
    logger.info("regbridge API shutting down")


# =============================================================================
# CREATE FASTAPI APP
# =============================================================================

app = FastAPI(
    title="regbridge - Registrar Tool API",
    description="""
    Permission-gated INWX registrar operations for automated agents.
    
    Every call passes the configured readOnly / allowedOperations policy
    before any request reaches the registrar.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)


# =============================================================================
# REQUEST LOGGING MIDDLEWARE
# =============================================================================

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing."""
    start_time = time.time()
    
    logger.info(f"→ {request.method} {request.url.path}")
    
    response = await call_next(request)
    
    duration = time.time() - start_time
    
    logger.info(
        f"← {request.method} {request.url.path} "
        f"[{response.status_code}] ({duration:.3f}s)"
    )
    
    return response


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

def _error_response(status_code: int, request: Request, exc: Exception, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.__class__.__name__,
            "detail": str(exc),
            "path": request.url.path,
            **extra,
        }
    )


@app.exception_handler(ToolInputError)
async def tool_input_error_handler(request: Request, exc: ToolInputError):
    return _error_response(400, request, exc)


@app.exception_handler(PolicyViolationError)
async def policy_violation_handler(request: Request, exc: PolicyViolationError):
    return _error_response(403, request, exc, rule=exc.rule)


@app.exception_handler(OperationNotFoundError)
async def operation_not_found_handler(request: Request, exc: OperationNotFoundError):
    return _error_response(404, request, exc)


@app.exception_handler(InwxApiError)
async def inwx_api_error_handler(request: Request, exc: InwxApiError):
    logger.error(f"INWX API error on {request.url.path}: {exc}")
    return _error_response(502, request, exc, code=exc.code)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "path": request.url.path
        }
    )


# =============================================================================
# INCLUDE ROUTERS
# =============================================================================

app.include_router(
    health.router,
    tags=["Health"]
)

app.include_router(
    tools.router,
    prefix="/tools",
    tags=["Tools"]
)


# =============================================================================
# ROOT ENDPOINT
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """API root endpoint."""
    return {
        "message": "regbridge - Registrar Tool API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
        "tools": "/tools",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
