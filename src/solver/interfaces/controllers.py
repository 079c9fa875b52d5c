"""
Solver Controllers (API Routes)
===============================

FastAPI routes for the SAP MM ticket solver.

Controllers delegate to the application service and return its result
verbatim; they add only timing and request bookkeeping.
"""

import time

from fastapi import APIRouter, Depends, HTTPException, Request

from src.core import ResourceNotFoundException
from src.solver.application import (
    TicketSolverService,
    SolveRequest,
    SolveResponse,
    ScenarioListResponse,
    ScenarioSummaryInfo,
    ScenarioDetailResponse,
)
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/solver", tags=["Ticket Solver"])


# ========== Example payloads for Swagger ==========

SOLVE_REQUEST_EXAMPLE = {
    "ticket_id": "INC-4711",
    "text": "Goods receipt posted but stock not updated for material 1000000123, PO 4500001234"
}

SOLVE_RESPONSE_EXAMPLE = {
    "ticket_id": "INC-4711",
    "scenario_id": "gr_stock_discrepancy",
    "title": "Goods Receipt Posted but Stock Not Updated",
    "summary": "A goods receipt against purchase order 4500001234 was reported as posted, yet the stock of material 1000000123 does not show the expected quantity.",
    "root_cause": "The receipt most likely landed in a non-unrestricted stock type ...",
    "confidence": 0.7,
    "confidence_percent": 70,
    "steps": ["Open MIGO (Display) or MB51 for purchase order 4500001234 ..."],
    "validations": ["MMBE shows the received quantity in unrestricted stock ..."],
    "preventive_actions": ["Review the default stock type ..."],
    "automation_ideas": ["Daily report of goods receipts still sitting in quality inspection ..."],
    "knowledge_sources": ["SAP Help Portal: Goods Receipt (MIGO) and stock types in Inventory Management"],
    "metadata": {
        "suspected_module": "Inventory Management",
        "priority": "High",
        "keywords": ["goods receipt", "stock not updated", "stock", "purchase order"],
        "document_numbers": ["1000000123", "4500001234"]
    },
    "knowledge_base_version": "2024.06.1",
    "processing_time_ms": 2
}


# ========== Dependencies ==========

def get_solver_service(request: Request) -> TicketSolverService:
    """Get the solver service initialised at application startup."""
    service = getattr(request.app.state, "solver_service", None)
    if service is None:
        raise HTTPException(
            status_code=503,
            detail="Solver service not available - knowledge base not loaded"
        )
    return service


# ========== Route Handlers ==========

@router.post(
    "/solve",
    response_model=SolveResponse,
    summary="Build a resolution plan for a ticket",
    description="""
    Analyse free-form SAP MM ticket text (typically OCR output of a ticket
    screenshot) and return a structured troubleshooting plan:

    - **Scenario** and confidence
    - **Root cause** hypothesis
    - Ordered **steps**, validation checks, preventive actions, automation ideas
    - **Metadata**: suspected module, priority, detected keywords and document numbers

    Empty or unrecognisable text returns the generic triage plan with low
    confidence rather than an error.
    """,
    responses={
        200: {
            "description": "Ticket analysed",
            "content": {"application/json": {"example": SOLVE_RESPONSE_EXAMPLE}}
        },
        422: {"description": "Text exceeds the maximum length"},
        503: {"description": "Solver not initialised"}
    }
)
async def solve_ticket(
    request: Request,
    payload: SolveRequest,
    service: TicketSolverService = Depends(get_solver_service)
):
    start_time = time.perf_counter()
    correlation_id = getattr(request.state, "correlation_id", "unknown")

    logger.info(
        "Analysing ticket",
        extra={
            "correlation_id": correlation_id,
            "has_ticket_id": payload.ticket_id is not None,
            "text_length": len(payload.text)
        }
    )

    result = service.solve(payload.text)
    total_time = int((time.perf_counter() - start_time) * 1000)

    return SolveResponse.from_domain(
        result,
        knowledge_base_version=service.knowledge_base.version,
        processing_time_ms=total_time,
        ticket_id=payload.ticket_id
    )


@router.get(
    "/scenarios",
    response_model=ScenarioListResponse,
    summary="List knowledge base scenarios"
)
async def list_scenarios(service: TicketSolverService = Depends(get_solver_service)):
    return ScenarioListResponse(
        knowledge_base_version=service.knowledge_base.version,
        scenarios=[ScenarioSummaryInfo.from_domain(s) for s in service.list_scenarios()]
    )


@router.get(
    "/scenarios/{scenario_id}",
    response_model=ScenarioDetailResponse,
    summary="Get one scenario playbook",
    responses={404: {"description": "Scenario not found"}}
)
async def get_scenario(
    scenario_id: str,
    service: TicketSolverService = Depends(get_solver_service)
):
    try:
        scenario = service.get_scenario(scenario_id)
    except ResourceNotFoundException as e:
        raise HTTPException(status_code=404, detail=e.message)

    return ScenarioDetailResponse.from_domain(scenario)


# Export router for inclusion in main app
solver_router = router
