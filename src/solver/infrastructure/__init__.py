"""
Solver Infrastructure Layer
===========================

Infrastructure implementations for the ticket solver module.

Contains:
- Knowledge base: YAML loader and the bundled scenario table
"""

from src.solver.infrastructure.knowledge_base import (
    KnowledgeBaseLoader,
    KnowledgeBaseConfig,
    ScenarioConfig,
    ModuleConfig,
    load_knowledge_base,
)

__all__ = [
    "KnowledgeBaseLoader",
    "KnowledgeBaseConfig",
    "ScenarioConfig",
    "ModuleConfig",
    "load_knowledge_base",
]
