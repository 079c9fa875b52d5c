"""
SAP MM Ticket Solver - Main Application
=======================================

Turns SAP Materials Management ticket text into a structured
troubleshooting plan.

Modules:
- Solver: entity extraction, scenario classification, plan assembly

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Services and DTOs
- Domain: Entities, value objects, extractor/classifier/assembler
- Infrastructure: YAML knowledge base loader
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

# Configuration and Core
from src.config import settings

# Solver Module
from src.solver.application import TicketSolverService
from src.solver.interfaces import solver_router

# Logging and middleware
from src.shared.infrastructure.logging import setup_logging, get_logger
from src.shared.api.middleware import (
    CorrelationIDMiddleware,
    TimingMiddleware,
    LoggingMiddleware,
    global_exception_handler
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging
    2. Load and validate the scenario knowledge base
    3. Build the solver service

    A knowledge base that fails validation aborts startup.
    """
    setup_logging(level=settings.log_level, environment=settings.environment)
    logger.info("Starting SAP MM Ticket Solver", extra={
        "version": settings.app_version,
        "environment": settings.environment
    })

    app.state.settings = settings
    app.state.solver_service = TicketSolverService.from_settings(settings)

    logger.info("SAP MM Ticket Solver started successfully", extra={
        "knowledge_base_version": app.state.solver_service.knowledge_base.version
    })

    yield  # Application runs here

    logger.info("SAP MM Ticket Solver shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="SAP MM Ticket Solver API",
    description="""
    ## SAP Materials Management Ticket Solver

    Paste the text of a support ticket (for example the OCR output of a
    ticket screenshot) and receive a guided resolution plan.

    **Endpoints:**
    - `POST /solver/solve` - Analyse ticket text
    - `GET /solver/scenarios` - List the scenario knowledge base
    - `GET /solver/scenarios/{id}` - Show one scenario playbook

    The analysis is rule-based and deterministic: no ticket data leaves the
    service and the same text always yields the same plan.
    """,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# === CORS Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# === Custom Middleware (from shared) ===
# Last added runs first: the correlation id must exist before request logging
app.add_middleware(TimingMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(CorrelationIDMiddleware)
app.add_exception_handler(Exception, global_exception_handler)

# === Include Module Routers ===
app.include_router(solver_router)


# === Health Check Endpoint ===

@app.get("/health", tags=["Health"])
async def health_check(request: Request):
    """
    Health check endpoint for load balancers and orchestrators.

    Reports whether the knowledge base is loaded and which version is live.
    """
    service = getattr(request.app.state, "solver_service", None)
    if service is None:
        knowledge_base_check = "not_loaded"
    else:
        kb = service.knowledge_base
        knowledge_base_check = f"loaded ({len(kb.scenarios)} scenarios, version {kb.version})"

    return {
        "status": "healthy" if service is not None else "degraded",
        "version": settings.app_version,
        "environment": settings.environment,
        "checks": {
            "knowledge_base": knowledge_base_check
        }
    }


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "service": "SAP MM Ticket Solver",
        "version": settings.app_version,
        "architecture": "Clean Architecture / Modular Monolith",
        "docs": "/docs",
        "health": "/health",
        "modules": {
            "solver": {
                "prefix": "/solver",
                "endpoints": [
                    "POST /solver/solve - Analyse ticket text",
                    "GET /solver/scenarios - List scenarios",
                    "GET /solver/scenarios/{id} - Get scenario playbook"
                ]
            }
        }
    }


# === Development Entry Point ===

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info"
    )
