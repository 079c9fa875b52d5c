"""
Solver Domain Layer
===================

Domain layer for the SAP MM ticket solver.

Contains:
- Entities: Signals, ScenarioDefinition, KnowledgeBase, SolveResult
- Value Objects: pattern tables, PriorityLevel, ModuleCluster, ScoringPolicy
- Domain Services: EntityExtractor, ScenarioClassifier, ResultAssembler

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from src.solver.domain.entities import (
    DocumentReference,
    Signals,
    ScenarioDefinition,
    KnowledgeBase,
    ClassificationOutcome,
    SolveMetadata,
    SolveResult,
)
from src.solver.domain.value_objects import (
    PriorityLevel,
    ModuleCluster,
    KeywordPattern,
    DocumentNumberRule,
    PriorityRule,
    ScoringPolicy,
    DOCUMENT_NUMBER_RULES,
    PRIORITY_RULES,
)
from src.solver.domain.extractor import EntityExtractor, normalize_text
from src.solver.domain.classifier import ScenarioClassifier
from src.solver.domain.assembler import ResultAssembler, GENERIC_PHRASES

__all__ = [
    # Entities
    "DocumentReference",
    "Signals",
    "ScenarioDefinition",
    "KnowledgeBase",
    "ClassificationOutcome",
    "SolveMetadata",
    "SolveResult",
    # Value Objects
    "PriorityLevel",
    "ModuleCluster",
    "KeywordPattern",
    "DocumentNumberRule",
    "PriorityRule",
    "ScoringPolicy",
    "DOCUMENT_NUMBER_RULES",
    "PRIORITY_RULES",
    # Domain Services
    "EntityExtractor",
    "normalize_text",
    "ScenarioClassifier",
    "ResultAssembler",
    "GENERIC_PHRASES",
]
