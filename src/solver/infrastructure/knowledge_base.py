"""
Knowledge Base Loader
=====================

Loads the scenario knowledge base from YAML into immutable domain objects.

The YAML is validated with Pydantic first (shape, weights, unique ids,
single fallback) and then converted into a frozen KnowledgeBase that is
shared read-only by every solver call for the life of the process.
"""

from pathlib import Path
from typing import Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from src.config import BUNDLED_KNOWLEDGE_BASE
from src.core import KnowledgeBaseException
from src.shared.infrastructure.logging import get_logger
from src.solver.domain import KnowledgeBase, ModuleCluster, PriorityLevel, ScenarioDefinition

logger = get_logger(__name__)

PriorityLevelStr = Literal["Low", "Medium", "High", "Critical"]


class ModuleConfig(BaseModel):
    """One SAP MM sub-area and the terms that point to it."""
    name: str = Field(..., min_length=1)
    keywords: List[str] = Field(default_factory=list)

    def to_domain(self) -> ModuleCluster:
        return ModuleCluster(
            name=self.name,
            keywords=frozenset(keyword.lower() for keyword in self.keywords),
        )


class ScenarioConfig(BaseModel):
    """A scenario entry as written in the YAML file."""
    id: str = Field(..., pattern=r"^[a-z][a-z0-9_]*$")
    title: str = Field(..., min_length=1)
    default_module: str = Field(..., min_length=1)
    default_priority: Optional[PriorityLevelStr] = None
    fallback: bool = False
    trigger_terms: Dict[str, float] = Field(default_factory=dict)
    summary_template: str = Field(..., min_length=1)
    root_cause_template: str = Field(..., min_length=1)
    steps: List[str] = Field(..., min_length=1)
    validations: List[str] = Field(default_factory=list)
    preventive_actions: List[str] = Field(default_factory=list)
    automation_ideas: List[str] = Field(default_factory=list)
    knowledge_sources: List[str] = Field(default_factory=list)

    @field_validator("trigger_terms")
    @classmethod
    def validate_trigger_terms(cls, v: Dict[str, float]) -> Dict[str, float]:
        """Weights must be positive; terms are matched lower-case."""
        normalized = {}
        for term, weight in v.items():
            if weight <= 0:
                raise ValueError(f"trigger term '{term}' must have a positive weight")
            normalized[str(term).strip().lower()] = weight
        return normalized

    def to_domain(self) -> ScenarioDefinition:
        return ScenarioDefinition(
            id=self.id,
            title=self.title,
            default_module=self.default_module,
            default_priority=PriorityLevel(self.default_priority) if self.default_priority else None,
            trigger_terms=self.trigger_terms,
            summary_template=self.summary_template,
            root_cause_template=self.root_cause_template,
            steps=tuple(self.steps),
            validations=tuple(self.validations),
            preventive_actions=tuple(self.preventive_actions),
            automation_ideas=tuple(self.automation_ideas),
            knowledge_sources=tuple(self.knowledge_sources),
            is_fallback=self.fallback,
        )


class KnowledgeBaseConfig(BaseModel):
    """
    Whole knowledge base file.

    List order is meaningful and preserved: it is the tie-break order for
    scenarios and modules.
    """
    version: str = Field(..., min_length=1)
    modules: List[ModuleConfig] = Field(default_factory=list)
    aliases: Dict[str, List[str]] = Field(default_factory=dict)
    scenarios: List[ScenarioConfig] = Field(..., min_length=1)

    @field_validator("scenarios")
    @classmethod
    def validate_scenarios(cls, v: List[ScenarioConfig]) -> List[ScenarioConfig]:
        """Scenario ids must be unique and exactly one entry is the fallback."""
        ids = [scenario.id for scenario in v]
        duplicates = sorted({scenario_id for scenario_id in ids if ids.count(scenario_id) > 1})
        if duplicates:
            raise ValueError(f"duplicate scenario ids: {duplicates}")

        fallbacks = [scenario.id for scenario in v if scenario.fallback]
        if len(fallbacks) != 1:
            raise ValueError(f"exactly one fallback scenario required, found {len(fallbacks)}")
        return v

    def to_domain(self) -> KnowledgeBase:
        return KnowledgeBase(
            version=self.version,
            scenarios=tuple(scenario.to_domain() for scenario in self.scenarios),
            modules=tuple(module.to_domain() for module in self.modules),
            aliases={term: tuple(variants) for term, variants in self.aliases.items()},
        )


class KnowledgeBaseLoader:
    """
    Reads the knowledge base YAML.

    A configured path that does not exist is reported and replaced by the
    bundled knowledge base; unreadable or invalid content is an error.
    """

    def __init__(self, bundled_path: Path = BUNDLED_KNOWLEDGE_BASE):
        self._bundled_path = bundled_path

    def load(self, path: Optional[Path] = None) -> KnowledgeBase:
        """Load the knowledge base from ``path`` or the bundled file."""
        if path is not None and not Path(path).exists():
            logger.warning(f"Knowledge base file not found: {path}, using bundled knowledge base")
            path = None

        source = Path(path) if path is not None else self._bundled_path
        knowledge_base = self._load_from_file(source)

        logger.info(
            "Knowledge base loaded",
            extra={
                "source": str(source),
                "version": knowledge_base.version,
                "scenarios": len(knowledge_base.scenarios),
                "modules": len(knowledge_base.modules),
            }
        )
        return knowledge_base

    def _load_from_file(self, path: Path) -> KnowledgeBase:
        """Load, validate and convert one YAML file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise KnowledgeBaseException(str(path), f"cannot be read: {e}")
        except yaml.YAMLError as e:
            raise KnowledgeBaseException(str(path), f"is not valid YAML: {e}")

        if not isinstance(data, dict):
            raise KnowledgeBaseException(str(path), "must contain a mapping at the top level")

        return self.parse(data, source=str(path))

    @staticmethod
    def parse(data: dict, source: str = "<memory>") -> KnowledgeBase:
        """Validate an already-decoded mapping and build the domain object."""
        try:
            return KnowledgeBaseConfig(**data).to_domain()
        except ValidationError as e:
            raise KnowledgeBaseException(
                source,
                f"failed validation with {e.error_count()} error(s)",
                {"source": source, "errors": e.errors(include_url=False)},
            )
        except ValueError as e:
            raise KnowledgeBaseException(source, str(e))


def load_knowledge_base(path: Optional[Path] = None) -> KnowledgeBase:
    """Load the configured (or bundled) knowledge base."""
    return KnowledgeBaseLoader().load(path)
