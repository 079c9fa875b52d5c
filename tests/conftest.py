"""Pytest configuration."""
import pytest

from src.solver.application import TicketSolverService
from src.solver.domain import (
    EntityExtractor,
    KnowledgeBase,
    ModuleCluster,
    PriorityLevel,
    ResultAssembler,
    ScenarioClassifier,
    ScenarioDefinition,
)
from src.solver.infrastructure import KnowledgeBaseLoader


@pytest.fixture(scope="session")
def knowledge_base():
    """The bundled knowledge base, loaded once."""
    return KnowledgeBaseLoader().load()


@pytest.fixture(scope="session")
def solver(knowledge_base):
    return TicketSolverService(knowledge_base, max_text_length=20000)


@pytest.fixture
def small_knowledge_base():
    """Two scored scenarios plus the fallback, with a purchasing/inventory split."""
    return KnowledgeBase(
        version="test-1",
        modules=(
            ModuleCluster("Purchasing", frozenset({"purchase order", "release strategy"})),
            ModuleCluster("Inventory Management", frozenset({"goods receipt", "stock"})),
        ),
        aliases={"purchase order": ("po", "p.o.")},
        scenarios=(
            ScenarioDefinition(
                id="stock_issue",
                title="Stock Issue",
                default_module="Inventory Management",
                summary_template="Stock issue for {material}.",
                root_cause_template="Root cause in {document}.",
                steps=("Check {purchase_order}.", "Check {unknown}.", "Module is {module}."),
                trigger_terms={"goods receipt": 2.0, "stock": 1.0},
                default_priority=PriorityLevel.MEDIUM,
                validations=("Priority {priority} confirmed.",),
                preventive_actions=("Watch {keyword}.",),
                automation_ideas=("Report on {vendor}.",),
                knowledge_sources=("Note {material} stays raw",),
            ),
            ScenarioDefinition(
                id="release_issue",
                title="Release Issue",
                default_module="Purchasing",
                summary_template="Release blocked for {purchase_order}.",
                root_cause_template="Strategy not met.",
                steps=("Open ME29N.",),
                trigger_terms={"release strategy": 2.0, "purchase order": 1.0},
            ),
            ScenarioDefinition(
                id="triage",
                title="Triage",
                default_module="General",
                summary_template="Unclassified ticket mentioning {keyword}.",
                root_cause_template="Not enough information.",
                steps=("Ask for details.",),
                is_fallback=True,
            ),
        ),
    )


@pytest.fixture
def small_extractor(small_knowledge_base):
    return EntityExtractor.for_knowledge_base(small_knowledge_base)


@pytest.fixture
def small_classifier(small_knowledge_base):
    return ScenarioClassifier(small_knowledge_base)


@pytest.fixture
def assembler():
    return ResultAssembler()
