"""
Solver Application Layer
========================

Application layer for the ticket solver module.

Contains:
- Services: TicketSolverService and the solve_sap_mm_ticket entry point
- DTOs: Data transfer objects for API serialization
"""

from src.solver.application.dto import (
    SolveRequest,
    SolveResponse,
    SolveMetadataInfo,
    ScenarioSummaryInfo,
    ScenarioListResponse,
    ScenarioDetailResponse,
)
from src.solver.application.services import (
    TicketSolverService,
    get_solver_service,
    solve_sap_mm_ticket,
)

__all__ = [
    # DTOs
    "SolveRequest",
    "SolveResponse",
    "SolveMetadataInfo",
    "ScenarioSummaryInfo",
    "ScenarioListResponse",
    "ScenarioDetailResponse",
    # Services
    "TicketSolverService",
    "get_solver_service",
    "solve_sap_mm_ticket",
]
