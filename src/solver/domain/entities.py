"""
Solver Domain Entities
======================

Domain entities for the SAP MM ticket solver.

Contains pure Python business objects: the signals extracted from a ticket,
the scenario playbooks of the knowledge base, and the structured result
handed back to callers.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from src.solver.domain.value_objects import ModuleCluster, PriorityLevel


@dataclass(frozen=True)
class DocumentReference:
    """An SAP identifier found in the ticket text."""
    value: str
    kind: str
    position: int


@dataclass(frozen=True)
class Signals:
    """
    Normalized facts pulled out of one ticket text.

    Created fresh per call by the extractor and discarded after the result
    has been assembled.
    """
    keywords: Tuple[str, ...] = ()
    document_references: Tuple[DocumentReference, ...] = ()
    priority_hint: Optional[PriorityLevel] = None
    module_hint: Optional[str] = None

    @property
    def document_numbers(self) -> Tuple[str, ...]:
        """Document numbers in first-seen order, original formatting."""
        return tuple(ref.value for ref in self.document_references)

    @property
    def is_empty(self) -> bool:
        return not self.keywords and not self.document_references and self.priority_hint is None

    def first_document(self, kind: Optional[str] = None) -> Optional[str]:
        """First document number of the given kind (any kind when None)."""
        for ref in self.document_references:
            if kind is None or ref.kind == kind:
                return ref.value
        return None


@dataclass(frozen=True)
class ScenarioDefinition:
    """
    One SAP MM problem class and its remediation playbook.

    Immutable and process-wide; part of the knowledge base.
    """
    id: str
    title: str
    default_module: str
    summary_template: str
    root_cause_template: str
    steps: Tuple[str, ...]
    trigger_terms: Mapping[str, float] = field(default_factory=dict)
    default_priority: Optional[PriorityLevel] = None
    validations: Tuple[str, ...] = ()
    preventive_actions: Tuple[str, ...] = ()
    automation_ideas: Tuple[str, ...] = ()
    knowledge_sources: Tuple[str, ...] = ()
    is_fallback: bool = False

    def __post_init__(self):
        """Freeze trigger terms and validate the scenario shape."""
        terms = {term.lower(): float(weight) for term, weight in self.trigger_terms.items()}
        object.__setattr__(self, "trigger_terms", MappingProxyType(terms))

        if not self.steps:
            raise ValueError(f"Scenario '{self.id}' must declare at least one step")
        if any(weight <= 0 for weight in terms.values()):
            raise ValueError(f"Scenario '{self.id}' has a non-positive trigger weight")
        if self.is_fallback and terms:
            raise ValueError(f"Fallback scenario '{self.id}' cannot declare trigger terms")
        if not self.is_fallback and not terms:
            raise ValueError(f"Scenario '{self.id}' declares no trigger terms")

    def weight_of(self, term: str) -> float:
        return self.trigger_terms.get(term, 0.0)


@dataclass(frozen=True)
class KnowledgeBase:
    """
    Ordered, versioned collection of scenarios and module clusters.

    Declaration order matters twice: it breaks classifier ties between
    scenarios and extractor ties between modules.
    """
    version: str
    scenarios: Tuple[ScenarioDefinition, ...]
    modules: Tuple[ModuleCluster, ...] = ()
    aliases: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "aliases", MappingProxyType({
            term.lower(): tuple(variants) for term, variants in self.aliases.items()
        }))

        ids = [scenario.id for scenario in self.scenarios]
        if len(ids) != len(set(ids)):
            raise ValueError("Scenario ids must be unique")

        fallbacks = [scenario for scenario in self.scenarios if scenario.is_fallback]
        if len(fallbacks) != 1:
            raise ValueError("Knowledge base needs exactly one fallback scenario")

        module_names = {module.name for module in self.modules}
        for scenario in self.scored_scenarios:
            if module_names and scenario.default_module not in module_names:
                raise ValueError(
                    f"Scenario '{scenario.id}' references unknown module '{scenario.default_module}'"
                )

    @property
    def fallback(self) -> ScenarioDefinition:
        return next(scenario for scenario in self.scenarios if scenario.is_fallback)

    @property
    def scored_scenarios(self) -> Tuple[ScenarioDefinition, ...]:
        """Scenarios eligible for selection by score, in declaration order."""
        return tuple(scenario for scenario in self.scenarios if not scenario.is_fallback)

    @property
    def vocabulary(self) -> Tuple[str, ...]:
        """Every canonical term the extractor looks for, first declaration wins."""
        terms = []
        for scenario in self.scored_scenarios:
            terms.extend(scenario.trigger_terms)
        for module in self.modules:
            terms.extend(sorted(module.keywords))
        return tuple(dict.fromkeys(terms))

    def get(self, scenario_id: str) -> Optional[ScenarioDefinition]:
        for scenario in self.scenarios:
            if scenario.id == scenario_id:
                return scenario
        return None


@dataclass(frozen=True)
class ClassificationOutcome:
    """Winning scenario of a classification run."""
    scenario: ScenarioDefinition
    score: float
    confidence: float

    @property
    def is_fallback(self) -> bool:
        return self.scenario.is_fallback


@dataclass(frozen=True)
class SolveMetadata:
    """Context shown next to the resolution plan."""
    suspected_module: str
    priority: Optional[PriorityLevel] = None
    keywords: Tuple[str, ...] = ()
    document_numbers: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SolveResult:
    """
    Structured troubleshooting plan for one ticket.

    Fully self-contained: holds only rendered strings, tuples and the
    priority level, never references to signals or scenarios.
    """
    scenario_id: str
    title: str
    summary: str
    root_cause: str
    confidence: float  # 0.0 to 1.0
    steps: Tuple[str, ...]
    validations: Tuple[str, ...]
    preventive_actions: Tuple[str, ...]
    automation_ideas: Tuple[str, ...]
    knowledge_sources: Tuple[str, ...]
    metadata: SolveMetadata

    def __post_init__(self):
        """Validate solve result."""
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError("Confidence must be between 0 and 1")

    @property
    def confidence_percent(self) -> int:
        return round(self.confidence * 100)
