"""
Solver Application DTOs
=======================

Data Transfer Objects for the solver API layer.

Pydantic models for request/response validation.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional, Literal

from src.config import settings
from src.solver.domain import ScenarioDefinition, SolveResult


# ========== Type Aliases for Literals ==========
PriorityLevelStr = Literal["Low", "Medium", "High", "Critical"]


# ========== Request DTOs ==========

class SolveRequest(BaseModel):
    """Request model for ticket analysis."""
    ticket_id: Optional[str] = Field(None, description="External ticket reference")
    text: str = Field(default="", description="OCR-extracted or edited ticket text")

    @field_validator("text")
    @classmethod
    def validate_text_length(cls, v: str) -> str:
        """Ensure text is within the analysable size."""
        if len(v) > settings.max_text_length:
            raise ValueError(f"Text too long (max {settings.max_text_length} characters)")
        return v


# ========== Response DTOs ==========

class SolveMetadataInfo(BaseModel):
    """Context displayed next to the resolution plan."""
    suspected_module: str
    priority: Optional[PriorityLevelStr] = None
    keywords: List[str]
    document_numbers: List[str]


class SolveResponse(BaseModel):
    """Response model for ticket analysis."""
    ticket_id: Optional[str] = None
    scenario_id: str
    title: str
    summary: str
    root_cause: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    confidence_percent: int = Field(..., ge=0, le=100)
    steps: List[str]
    validations: List[str]
    preventive_actions: List[str]
    automation_ideas: List[str]
    knowledge_sources: List[str]
    metadata: SolveMetadataInfo
    knowledge_base_version: str
    processing_time_ms: int

    @classmethod
    def from_domain(
        cls,
        result: SolveResult,
        knowledge_base_version: str,
        processing_time_ms: int,
        ticket_id: Optional[str] = None
    ) -> "SolveResponse":
        """Create from domain result."""
        metadata = result.metadata
        return cls(
            ticket_id=ticket_id,
            scenario_id=result.scenario_id,
            title=result.title,
            summary=result.summary,
            root_cause=result.root_cause,
            confidence=result.confidence,
            confidence_percent=result.confidence_percent,
            steps=list(result.steps),
            validations=list(result.validations),
            preventive_actions=list(result.preventive_actions),
            automation_ideas=list(result.automation_ideas),
            knowledge_sources=list(result.knowledge_sources),
            metadata=SolveMetadataInfo(
                suspected_module=metadata.suspected_module,
                priority=metadata.priority.value if metadata.priority else None,
                keywords=list(metadata.keywords),
                document_numbers=list(metadata.document_numbers),
            ),
            knowledge_base_version=knowledge_base_version,
            processing_time_ms=processing_time_ms,
        )


class ScenarioSummaryInfo(BaseModel):
    """Short description of one knowledge base scenario."""
    id: str
    title: str
    default_module: str
    default_priority: Optional[PriorityLevelStr] = None
    fallback: bool
    trigger_term_count: int

    @classmethod
    def from_domain(cls, scenario: ScenarioDefinition) -> "ScenarioSummaryInfo":
        return cls(
            id=scenario.id,
            title=scenario.title,
            default_module=scenario.default_module,
            default_priority=scenario.default_priority.value if scenario.default_priority else None,
            fallback=scenario.is_fallback,
            trigger_term_count=len(scenario.trigger_terms),
        )


class ScenarioListResponse(BaseModel):
    """Response model for the scenario catalogue."""
    knowledge_base_version: str
    scenarios: List[ScenarioSummaryInfo]


class ScenarioDetailResponse(ScenarioSummaryInfo):
    """Full playbook of one scenario, templates unrendered."""
    trigger_terms: Dict[str, float]
    summary_template: str
    root_cause_template: str
    steps: List[str]
    validations: List[str]
    preventive_actions: List[str]
    automation_ideas: List[str]
    knowledge_sources: List[str]

    @classmethod
    def from_domain(cls, scenario: ScenarioDefinition) -> "ScenarioDetailResponse":
        summary = ScenarioSummaryInfo.from_domain(scenario)
        return cls(
            **summary.model_dump(),
            trigger_terms=dict(scenario.trigger_terms),
            summary_template=scenario.summary_template,
            root_cause_template=scenario.root_cause_template,
            steps=list(scenario.steps),
            validations=list(scenario.validations),
            preventive_actions=list(scenario.preventive_actions),
            automation_ideas=list(scenario.automation_ideas),
            knowledge_sources=list(scenario.knowledge_sources),
        )
