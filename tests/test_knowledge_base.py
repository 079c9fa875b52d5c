"""Knowledge base loading and validation tests."""
import copy

import pytest
import yaml

from src.core import KnowledgeBaseException
from src.solver.domain import PriorityLevel
from src.solver.infrastructure import KnowledgeBaseLoader, load_knowledge_base

MINIMAL = {
    "version": "test-2",
    "modules": [{"name": "Purchasing", "keywords": ["Purchase Order"]}],
    "aliases": {"Purchase Order": ["PO"]},
    "scenarios": [
        {
            "id": "po_issue",
            "title": "PO issue",
            "default_module": "Purchasing",
            "default_priority": "High",
            "trigger_terms": {"Purchase Order": 2.0},
            "summary_template": "Problem with {purchase_order}.",
            "root_cause_template": "Unknown.",
            "steps": ["Open ME23N."],
        },
        {
            "id": "triage",
            "title": "Triage",
            "default_module": "General",
            "fallback": True,
            "summary_template": "Unclassified.",
            "root_cause_template": "Unknown.",
            "steps": ["Ask for details."],
        },
    ],
}


def _variant(**changes):
    data = copy.deepcopy(MINIMAL)
    for index, fields in changes.items():
        data["scenarios"][int(index.lstrip("s"))].update(fields)
    return data


class TestBundledKnowledgeBase:
    def test_loads_and_validates(self, knowledge_base):
        assert knowledge_base.version == "2024.06.1"
        assert knowledge_base.fallback.id == "general_triage"
        assert len(knowledge_base.scored_scenarios) == len(knowledge_base.scenarios) - 1

    def test_scenarios_reference_declared_modules(self, knowledge_base):
        names = {module.name for module in knowledge_base.modules}
        for scenario in knowledge_base.scored_scenarios:
            assert scenario.default_module in names
            assert scenario.steps

    def test_vocabulary_includes_module_only_terms(self, knowledge_base):
        assert "purchase order" in knowledge_base.vocabulary
        assert "goods issue" in knowledge_base.vocabulary
        assert len(knowledge_base.vocabulary) == len(set(knowledge_base.vocabulary))

    def test_is_read_only(self, knowledge_base):
        with pytest.raises(TypeError):
            knowledge_base.scenarios[0].trigger_terms["new term"] = 1.0
        with pytest.raises(TypeError):
            knowledge_base.aliases["po"] = ("x",)

    def test_get_unknown_scenario(self, knowledge_base):
        assert knowledge_base.get("does_not_exist") is None


class TestParse:
    def test_minimal_document(self):
        kb = KnowledgeBaseLoader.parse(MINIMAL)
        scenario = kb.get("po_issue")
        assert dict(scenario.trigger_terms) == {"purchase order": 2.0}
        assert scenario.default_priority == PriorityLevel.HIGH
        assert kb.aliases["purchase order"] == ("PO",)
        assert kb.modules[0].keywords == frozenset({"purchase order"})

    @pytest.mark.parametrize("data", [
        _variant(s1={"id": "po_issue"}),
        _variant(s0={"fallback": True, "trigger_terms": {}}),
        _variant(s1={"fallback": False}),
        _variant(s0={"trigger_terms": {"purchase order": -1.0}}),
        _variant(s0={"default_priority": "Urgent"}),
        _variant(s0={"trigger_terms": {}}),
        _variant(s0={"default_module": "Warehouse"}),
        _variant(s1={"trigger_terms": {"anything": 1.0}}),
        _variant(s0={"steps": []}),
        _variant(s0={"id": "Bad Id"}),
    ], ids=[
        "duplicate-id", "two-fallbacks", "no-fallback", "negative-weight", "bad-priority",
        "no-terms", "unknown-module", "fallback-with-terms", "no-steps", "bad-id",
    ])
    def test_invalid_documents_are_rejected(self, data):
        with pytest.raises(KnowledgeBaseException) as exc_info:
            KnowledgeBaseLoader.parse(data, source="inline")
        assert str(exc_info.value).startswith("Knowledge base inline")


class TestLoadFromFile:
    def test_custom_file(self, tmp_path):
        path = tmp_path / "kb.yaml"
        path.write_text(yaml.safe_dump(MINIMAL), encoding="utf-8")
        assert load_knowledge_base(path).version == "test-2"

    def test_missing_file_falls_back_to_bundled(self, tmp_path):
        kb = KnowledgeBaseLoader().load(tmp_path / "missing.yaml")
        assert kb.version == "2024.06.1"

    @pytest.mark.parametrize("content", [
        "version: [unclosed",
        "- just\n- a list\n",
        "",
    ])
    def test_unusable_file_raises(self, tmp_path, content):
        path = tmp_path / "kb.yaml"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(KnowledgeBaseException):
            KnowledgeBaseLoader().load(path)


def test_loader_errors_are_configuration_errors():
    from src import core

    assert set(core.__all__) == {
        "ApplicationException",
        "ResourceNotFoundException",
        "ConfigurationException",
        "KnowledgeBaseException",
    }
    with pytest.raises(core.ConfigurationException) as exc_info:
        KnowledgeBaseLoader.parse({"version": "x"}, source="inline")
    assert isinstance(exc_info.value, core.ApplicationException)
    assert exc_info.value.details["source"] == "inline"
