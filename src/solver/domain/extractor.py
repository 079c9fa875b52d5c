"""
Entity Extractor
================

Pulls normalized signals out of raw, OCR-noisy ticket text: canonical
domain keywords, SAP document numbers, a priority hint and the SAP MM
sub-area the ticket most likely belongs to.

Matching is driven entirely by pattern tables, so the extractor can be
tested on its own and the knowledge base can grow without code changes.
"""

import re
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from src.solver.domain.entities import DocumentReference, KnowledgeBase, Signals
from src.solver.domain.value_objects import (
    DOCUMENT_NUMBER_RULES,
    PRIORITY_RULES,
    DocumentNumberRule,
    KeywordPattern,
    ModuleCluster,
    PriorityLevel,
    PriorityRule,
)

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Lower-case working copy with collapsed whitespace."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text.lower()).strip()


class EntityExtractor:
    """
    Stateless extractor over a fixed vocabulary.

    Build it once per knowledge base with ``for_knowledge_base``; ``extract``
    is then a pure function of its input.
    """

    def __init__(
        self,
        vocabulary: Iterable[str],
        aliases: Optional[Mapping[str, Sequence[str]]] = None,
        modules: Sequence[ModuleCluster] = (),
        document_rules: Sequence[DocumentNumberRule] = DOCUMENT_NUMBER_RULES,
        priority_rules: Sequence[PriorityRule] = PRIORITY_RULES,
    ):
        aliases = aliases or {}
        self._keyword_patterns: Tuple[KeywordPattern, ...] = tuple(
            KeywordPattern.build(term, aliases.get(term.lower(), ()))
            for term in dict.fromkeys(term.lower() for term in vocabulary)
        )
        self._modules = tuple(modules)
        self._document_rules = tuple(document_rules)
        self._priority_rules = tuple(priority_rules)

    @classmethod
    def for_knowledge_base(cls, knowledge_base: KnowledgeBase) -> "EntityExtractor":
        return cls(
            vocabulary=knowledge_base.vocabulary,
            aliases=knowledge_base.aliases,
            modules=knowledge_base.modules,
        )

    @property
    def vocabulary(self) -> Tuple[str, ...]:
        return tuple(pattern.term for pattern in self._keyword_patterns)

    def extract(self, text: str) -> Signals:
        """Extract signals from raw ticket text. Empty text gives empty signals."""
        if not text or not text.strip():
            return Signals()

        normalized = normalize_text(text)
        keywords = self.find_keywords(normalized)

        return Signals(
            keywords=keywords,
            document_references=self.find_document_numbers(text),
            priority_hint=self.detect_priority(text),
            module_hint=self.detect_module(keywords),
        )

    def find_keywords(self, normalized_text: str) -> Tuple[str, ...]:
        """Canonical terms present in the text, ordered by first occurrence."""
        hits: List[Tuple[int, int, str]] = []
        for order, pattern in enumerate(self._keyword_patterns):
            position = pattern.first_position(normalized_text)
            if position is not None:
                hits.append((position, order, pattern.term))
        return tuple(term for _, _, term in sorted(hits))

    def find_document_numbers(self, text: str) -> Tuple[DocumentReference, ...]:
        """SAP identifiers in first-seen order, deduplicated by value."""
        candidates: List[Tuple[int, int, str, str]] = []
        for order, rule in enumerate(self._document_rules):
            for match in rule.pattern.finditer(text):
                candidates.append((match.start("number"), order, rule.kind, match.group("number")))

        references: List[DocumentReference] = []
        seen = set()
        for position, _, kind, value in sorted(candidates):
            if value in seen:
                continue
            seen.add(value)
            references.append(DocumentReference(value=value, kind=kind, position=position))
        return tuple(references)

    def detect_priority(self, text: str) -> Optional[PriorityLevel]:
        """Most severe priority hinted at anywhere in the text, whitespace collapsed."""
        text = normalize_text(text)
        levels = [rule.level for rule in self._priority_rules if rule.pattern.search(text)]
        if not levels:
            return None
        return max(levels, key=lambda level: level.severity)

    def detect_module(self, keywords: Sequence[str]) -> Optional[str]:
        """Module whose cluster matched most keywords; earlier modules win ties."""
        best_name: Optional[str] = None
        best_count = 0
        for module in self._modules:
            count = module.count_matches(keywords)
            if count > best_count:
                best_name, best_count = module.name, count
        return best_name
