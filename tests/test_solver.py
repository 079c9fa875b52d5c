"""End-to-end tests for the ticket solver service and public entry point."""
import pytest

from src.core import ResourceNotFoundException
from src.solver.application import TicketSolverService, solve_sap_mm_ticket
from src.solver.domain import EntityExtractor, PriorityLevel, ScenarioClassifier

GR_TICKET = "Goods receipt posted but stock not updated for material 1000000123, PO 4500001234"


class TestKnownScenarios:
    def test_goods_receipt_ticket(self, solver):
        result = solver.solve(GR_TICKET)

        assert result.scenario_id == "gr_stock_discrepancy"
        assert result.confidence == pytest.approx(9.5 / 13.5)
        assert result.confidence > 0.2
        assert result.metadata.suspected_module == "Inventory Management"
        assert result.metadata.priority == PriorityLevel.HIGH
        assert result.metadata.keywords == (
            "goods receipt", "stock not updated", "stock", "purchase order",
        )
        assert result.metadata.document_numbers == ("1000000123", "4500001234")
        assert "purchase order 4500001234" in result.summary
        assert "material 1000000123" in result.summary

    def test_blocked_invoice_ticket(self, solver):
        result = solver.solve(
            "MIRO invoice 5105600001 blocked for payment due to price variance on PO 4500001234"
        )
        assert result.scenario_id == "invoice_block"
        assert result.metadata.suspected_module == "Invoice Verification"
        assert "invoice 5105600001" in result.summary
        assert result.knowledge_sources

    def test_explicit_priority_beats_default(self, solver):
        result = solver.solve("Low priority: invoice blocked for payment, now critical for month end")
        assert result.scenario_id == "invoice_block"
        assert result.metadata.priority == PriorityLevel.CRITICAL

    def test_unlabelled_document_number_is_reported(self, solver):
        assert "4500009876" in solver.solve("Please check 4500009876").metadata.document_numbers


class TestFallback:
    @pytest.mark.parametrize("text", ["asdkj qweoiu", "", "   ", "hello world", None])
    def test_unrecognised_text_gets_triage_plan(self, solver, text):
        result = solver.solve(text)
        assert result.scenario_id == "general_triage"
        assert result.confidence == 0.2
        assert result.metadata.keywords == ()
        assert result.metadata.document_numbers == ()
        assert result.metadata.suspected_module == "Materials Management (General)"
        assert result.steps


class TestProperties:
    @pytest.mark.parametrize("text", [
        GR_TICKET,
        "{purchase_order} {unknown} {",
        "ÄÖÜ ñ 测试 🚀 stock",
        "4500001234" * 3,
        "x" * 50000 + " goods receipt",
        "P1!!! MMPV not run, posting period closed, M7 053",
    ])
    def test_result_is_always_well_formed(self, solver, text):
        result = solver.solve(text)
        assert 0.0 <= result.confidence <= 1.0
        assert result.title
        assert result.summary
        assert result.steps

    def test_more_trigger_terms_in_text_never_lower_score(self, knowledge_base):
        extractor = EntityExtractor.for_knowledge_base(knowledge_base)
        classifier = ScenarioClassifier(knowledge_base)
        for scenario in knowledge_base.scored_scenarios:
            terms = list(scenario.trigger_terms)
            scores = [
                classifier.score(scenario, extractor.extract(", ".join(terms[:size])))
                for size in range(len(terms) + 1)
            ]
            assert scores == sorted(scores), scenario.id

    def test_solving_is_deterministic(self, solver):
        assert solver.solve(GR_TICKET) == solver.solve(GR_TICKET)

    def test_long_text_is_truncated(self, knowledge_base):
        service = TicketSolverService(knowledge_base, max_text_length=100)
        assert len(service.normalize_input("  " + "a" * 150)) == 100

    def test_text_beyond_limit_is_ignored(self, knowledge_base):
        service = TicketSolverService(knowledge_base, max_text_length=100)
        result = service.solve("x " * 60 + "goods receipt")
        assert result.scenario_id == "general_triage"


class TestCatalogue:
    def test_list_scenarios(self, solver, knowledge_base):
        assert solver.list_scenarios() == knowledge_base.scenarios

    def test_get_scenario(self, solver):
        assert solver.get_scenario("invoice_block").title

    def test_get_unknown_scenario(self, solver):
        with pytest.raises(ResourceNotFoundException) as exc_info:
            solver.get_scenario("nope")
        assert exc_info.value.message == "Scenario with id 'nope' not found"


def test_public_entry_point():
    result = solve_sap_mm_ticket(GR_TICKET)
    assert result.scenario_id == "gr_stock_discrepancy"
    assert solve_sap_mm_ticket("asdkj qweoiu").confidence == 0.2
