"""
Solver Application Services
===========================

Application service for ticket analysis.

Composes the domain pipeline (extract -> classify -> assemble) over one
read-only knowledge base and exposes the public entry point
``solve_sap_mm_ticket``.
"""

from functools import lru_cache
from typing import Optional, Tuple

from src.config import Settings, get_settings
from src.core import ResourceNotFoundException
from src.shared.infrastructure.logging import get_logger, log_latency
from src.solver.domain import (
    EntityExtractor,
    KnowledgeBase,
    ResultAssembler,
    ScenarioClassifier,
    ScenarioDefinition,
    ScoringPolicy,
    SolveResult,
)
from src.solver.infrastructure import KnowledgeBaseLoader

logger = get_logger(__name__)


class TicketSolverService:
    """
    Turns ticket text into a SolveResult.

    Holds only immutable collaborators, so one instance can serve any
    number of concurrent callers.
    """

    def __init__(
        self,
        knowledge_base: KnowledgeBase,
        policy: ScoringPolicy = ScoringPolicy(),
        max_text_length: Optional[int] = None,
    ):
        self._knowledge_base = knowledge_base
        self._extractor = EntityExtractor.for_knowledge_base(knowledge_base)
        self._classifier = ScenarioClassifier(knowledge_base, policy)
        self._assembler = ResultAssembler()
        self._max_text_length = max_text_length

    @classmethod
    def from_settings(cls, settings: Settings) -> "TicketSolverService":
        """Build the service from application settings."""
        knowledge_base = KnowledgeBaseLoader().load(settings.knowledge_base_path)
        policy = ScoringPolicy(
            smoothing=settings.confidence_smoothing,
            fallback_confidence=settings.fallback_confidence,
            confidence_floor=settings.confidence_floor,
            module_match_bonus=settings.module_match_bonus,
        )
        return cls(knowledge_base, policy, max_text_length=settings.max_text_length)

    @property
    def knowledge_base(self) -> KnowledgeBase:
        return self._knowledge_base

    def normalize_input(self, text: Optional[str]) -> str:
        """Strip surrounding whitespace and cap the length of the ticket text."""
        if text is None:
            return ""
        cleaned = str(text).strip()
        if self._max_text_length is not None and len(cleaned) > self._max_text_length:
            logger.warning(
                "Ticket text truncated",
                extra={"text_length": len(cleaned), "max_text_length": self._max_text_length}
            )
            cleaned = cleaned[:self._max_text_length]
        return cleaned

    def solve(self, text: Optional[str]) -> SolveResult:
        """
        Analyse ticket text and build the troubleshooting plan.

        Args:
            text: OCR-extracted or user-edited ticket text; may be empty

        Returns:
            SolveResult; the fallback scenario with low confidence when
            nothing in the text is recognised
        """
        cleaned = self.normalize_input(text)

        with log_latency(logger, "solve_ticket", text_length=len(cleaned)):
            signals = self._extractor.extract(cleaned)
            outcome = self._classifier.classify(signals)
            result = self._assembler.assemble(outcome.scenario, signals, outcome.confidence)

        logger.info(
            "Ticket solved",
            extra={
                "scenario_id": result.scenario_id,
                "score": round(outcome.score, 3),
                "confidence": round(result.confidence, 3),
                "fallback": outcome.is_fallback,
                "keywords": len(signals.keywords),
                "document_numbers": len(signals.document_references),
            }
        )
        return result

    def list_scenarios(self) -> Tuple[ScenarioDefinition, ...]:
        return self._knowledge_base.scenarios

    def get_scenario(self, scenario_id: str) -> ScenarioDefinition:
        scenario = self._knowledge_base.get(scenario_id)
        if scenario is None:
            raise ResourceNotFoundException("Scenario", scenario_id)
        return scenario


@lru_cache()
def get_solver_service() -> TicketSolverService:
    """Returns the process-wide solver service, built on first use."""
    return TicketSolverService.from_settings(get_settings())


def solve_sap_mm_ticket(text: str) -> SolveResult:
    """
    Public entry point: map raw ticket text to a SolveResult.

    Never raises for any string input; empty or unrecognisable text yields
    the generic fallback plan.
    """
    return get_solver_service().solve(text)
