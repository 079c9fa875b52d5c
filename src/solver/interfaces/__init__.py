"""
Solver Interfaces Layer
=======================

Interface adapters (controllers) for the ticket solver module.

Contains:
- Controllers: FastAPI route handlers
"""

from src.solver.interfaces.controllers import solver_router

__all__ = ["solver_router"]
