"""Result assembler tests."""
import dataclasses

import pytest

from src.solver.domain import (
    DocumentReference,
    PriorityLevel,
    ScenarioDefinition,
    Signals,
    SolveMetadata,
    SolveResult,
)


@pytest.fixture
def stock_signals():
    return Signals(
        keywords=("goods receipt",),
        document_references=(
            DocumentReference("1000000123", "material", 10),
            DocumentReference("4500001234", "purchase_order", 30),
        ),
    )


class TestRendering:
    def test_placeholders_use_extracted_values(self, assembler, small_knowledge_base, stock_signals):
        result = assembler.assemble(small_knowledge_base.get("stock_issue"), stock_signals, 0.5)

        assert result.scenario_id == "stock_issue"
        assert result.title == "Stock Issue"
        assert result.summary == "Stock issue for material 1000000123."
        assert result.root_cause == "Root cause in document 1000000123."
        assert result.steps[0] == "Check purchase order 4500001234."
        assert result.steps[2] == "Module is Inventory Management."
        assert result.validations == ("Priority Medium confirmed.",)
        assert result.preventive_actions == ('Watch "goods receipt".',)

    def test_missing_values_use_generic_wording(self, assembler, small_knowledge_base):
        result = assembler.assemble(small_knowledge_base.get("stock_issue"), Signals(), 0.3)

        assert result.summary == "Stock issue for the affected material."
        assert result.root_cause == "Root cause in the referenced document."
        assert result.steps[0] == "Check the affected purchase order."
        assert result.preventive_actions == ("Watch the reported symptom.",)
        assert result.automation_ideas == ("Report on the vendor.",)

    def test_unknown_placeholder_is_left_alone(self, assembler, small_knowledge_base, stock_signals):
        result = assembler.assemble(small_knowledge_base.get("stock_issue"), stock_signals, 0.5)
        assert result.steps[1] == "Check {unknown}."

    def test_stray_braces_survive(self, assembler):
        scenario = ScenarioDefinition(
            id="braces",
            title="Braces",
            default_module="Purchasing",
            summary_template="Keep { this } and {Purchase_Order} and {",
            root_cause_template="{}",
            steps=("Step.",),
            trigger_terms={"x": 1.0},
        )
        result = assembler.assemble(scenario, Signals(), 0.4)
        assert result.summary == "Keep { this } and {Purchase_Order} and {"
        assert result.root_cause == "{}"

    def test_knowledge_sources_are_not_rendered(self, assembler, small_knowledge_base, stock_signals):
        result = assembler.assemble(small_knowledge_base.get("stock_issue"), stock_signals, 0.5)
        assert result.knowledge_sources == ("Note {material} stays raw",)


class TestMetadata:
    def test_defaults_come_from_scenario(self, assembler, small_knowledge_base, stock_signals):
        result = assembler.assemble(small_knowledge_base.get("stock_issue"), stock_signals, 0.5)
        assert result.metadata == SolveMetadata(
            suspected_module="Inventory Management",
            priority=PriorityLevel.MEDIUM,
            keywords=("goods receipt",),
            document_numbers=("1000000123", "4500001234"),
        )

    def test_hints_override_defaults(self, assembler, small_knowledge_base):
        signals = Signals(
            keywords=("stock",),
            priority_hint=PriorityLevel.CRITICAL,
            module_hint="Purchasing",
        )
        result = assembler.assemble(small_knowledge_base.get("stock_issue"), signals, 0.3)
        assert result.metadata.suspected_module == "Purchasing"
        assert result.metadata.priority == PriorityLevel.CRITICAL
        assert result.steps[2] == "Module is Purchasing."
        assert result.validations == ("Priority Critical confirmed.",)

    def test_priority_may_stay_unset(self, assembler, small_knowledge_base):
        result = assembler.assemble(small_knowledge_base.get("release_issue"), Signals(), 0.2)
        assert result.metadata.priority is None
        assert result.metadata.suspected_module == "Purchasing"


class TestResult:
    @pytest.mark.parametrize("given,expected", [(1.5, 1.0), (-0.1, 0.0), (0.42, 0.42)])
    def test_confidence_is_clamped(self, assembler, small_knowledge_base, given, expected):
        result = assembler.assemble(small_knowledge_base.get("release_issue"), Signals(), given)
        assert result.confidence == expected

    def test_result_rejects_out_of_range_confidence(self):
        with pytest.raises(ValueError):
            SolveResult(
                scenario_id="x", title="x", summary="x", root_cause="x", confidence=1.2,
                steps=("x",), validations=(), preventive_actions=(), automation_ideas=(),
                knowledge_sources=(), metadata=SolveMetadata(suspected_module="x"),
            )

    def test_result_is_immutable(self, assembler, small_knowledge_base):
        result = assembler.assemble(small_knowledge_base.get("release_issue"), Signals(), 0.2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.summary = "changed"
        assert result.confidence_percent == 20
