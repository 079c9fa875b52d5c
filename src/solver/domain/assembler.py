"""
Result Assembler
================

Renders the winning scenario's playbook into a self-contained SolveResult.

Templates may reference ``{placeholder}`` markers. Each marker resolves to
the first matching value extracted from the ticket, or to generic wording
when nothing was found, so rendering never fails on missing data.
"""

import re
from typing import Callable, Dict, Optional

from src.solver.domain.entities import ScenarioDefinition, Signals, SolveMetadata, SolveResult
from src.solver.domain.value_objects import PriorityLevel

_PLACEHOLDER = re.compile(r"\{([a-z_]+)\}")

GENERIC_PHRASES: Dict[str, str] = {
    "purchase_order": "the affected purchase order",
    "material": "the affected material",
    "vendor": "the vendor",
    "invoice": "the blocked invoice",
    "material_document": "the material document",
    "document": "the referenced document",
    "keyword": "the reported symptom",
    "priority": "unassigned",
}


class ResultAssembler:
    """Turns scenario templates plus extracted signals into a SolveResult."""

    def assemble(
        self,
        scenario: ScenarioDefinition,
        signals: Signals,
        confidence: float,
    ) -> SolveResult:
        module = signals.module_hint or scenario.default_module
        priority = signals.priority_hint or scenario.default_priority
        render = self._renderer(signals, module, priority)

        return SolveResult(
            scenario_id=scenario.id,
            title=scenario.title,
            summary=render(scenario.summary_template),
            root_cause=render(scenario.root_cause_template),
            confidence=min(1.0, max(0.0, confidence)),
            steps=tuple(render(step) for step in scenario.steps),
            validations=tuple(render(item) for item in scenario.validations),
            preventive_actions=tuple(render(item) for item in scenario.preventive_actions),
            automation_ideas=tuple(render(item) for item in scenario.automation_ideas),
            knowledge_sources=tuple(scenario.knowledge_sources),
            metadata=SolveMetadata(
                suspected_module=module,
                priority=priority,
                keywords=tuple(signals.keywords),
                document_numbers=signals.document_numbers,
            ),
        )

    def _renderer(
        self,
        signals: Signals,
        module: str,
        priority: Optional[PriorityLevel],
    ) -> Callable[[str], str]:
        values = self.placeholder_values(signals, module, priority)

        def render(template: str) -> str:
            # Unknown markers are left exactly as written
            return _PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), template)

        return render

    @staticmethod
    def placeholder_values(
        signals: Signals,
        module: str,
        priority: Optional[PriorityLevel],
    ) -> Dict[str, str]:
        values: Dict[str, str] = {}
        for kind in _LABELS:
            values[kind] = _labelled(kind, signals.first_document(kind)) or GENERIC_PHRASES[kind]

        first_any = signals.first_document()
        values["document"] = f"document {first_any}" if first_any else GENERIC_PHRASES["document"]
        values["keyword"] = f'"{signals.keywords[0]}"' if signals.keywords else GENERIC_PHRASES["keyword"]
        values["module"] = module
        values["priority"] = priority.value if priority else GENERIC_PHRASES["priority"]
        return values


_LABELS: Dict[str, str] = {
    "purchase_order": "purchase order",
    "material": "material",
    "vendor": "vendor",
    "invoice": "invoice",
    "material_document": "material document",
}


def _labelled(kind: str, value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return f"{_LABELS[kind]} {value}"
