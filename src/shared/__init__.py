"""
Shared Kernel Module
====================

This module contains shared infrastructure used by the solver bounded
context and the HTTP application around it.

Architecture Pattern: Modular Monolith
- Each module (solver) is a bounded context
- Shared kernel contains only generic infrastructure (logging, middleware)

DO NOT add ticket-analysis logic to the shared kernel.
"""

__version__ = "1.0.0"
