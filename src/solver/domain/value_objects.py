"""
Solver Value Objects
====================

Immutable value objects for the ticket solver domain.

Holds the declarative pattern tables the entity extractor runs against
(keywords, document numbers, priority language) and the scoring policy the
classifier applies. Value objects are defined by their attributes, never
mutated, and can be shared freely between threads and requests.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Pattern, Tuple


class PriorityLevel(str, Enum):
    """Ticket priority levels, ordered by severity."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def severity(self) -> int:
        """Rank used to pick the most severe of several hints."""
        return _SEVERITY[self]


_SEVERITY = {
    PriorityLevel.LOW: 1,
    PriorityLevel.MEDIUM: 2,
    PriorityLevel.HIGH: 3,
    PriorityLevel.CRITICAL: 4,
}


# ========== Keyword patterns ==========

_TOKEN_JOINER = r"[\s\-_]+"
_INNER_SEPARATOR = r"[\s/\-]?"


def _token_regex(token: str) -> str:
    """Escape one word, making dots optional and slashes/dashes loose."""
    part = re.escape(token).replace(r"\.", r"\.?")
    return re.sub(r"\\-|/", lambda _: _INNER_SEPARATOR, part)


def phrase_regex(phrase: str) -> str:
    """
    Build a whole-word regex for a (lower-case) phrase.

    "p.o." matches "po" and "p.o."; "gr/ir" matches "gr ir" and "grir";
    words may be split by spaces, dashes or underscores; a trailing
    plural "s"/"es" is accepted.
    """
    tokens = phrase.lower().split()
    body = _TOKEN_JOINER.join(_token_regex(token) for token in tokens)
    return rf"(?<![a-z0-9]){body}(?:s|es)?(?![a-z0-9])"


@dataclass(frozen=True)
class KeywordPattern:
    """A canonical domain term together with its compiled spelling variants."""
    term: str
    pattern: Pattern[str]

    @classmethod
    def build(cls, term: str, aliases: Iterable[str] = ()) -> "KeywordPattern":
        variants = [term.lower()] + [alias.lower() for alias in aliases]
        # Longest variant first so the alternation prefers the fullest spelling
        variants = sorted(dict.fromkeys(variants), key=len, reverse=True)
        regex = "|".join(f"(?:{phrase_regex(variant)})" for variant in variants)
        return cls(term=term.lower(), pattern=re.compile(regex))

    def first_position(self, normalized_text: str) -> Optional[int]:
        """Offset of the first occurrence in lower-cased text, or None."""
        match = self.pattern.search(normalized_text)
        return match.start() if match else None


# ========== Document number rules ==========

_LABEL_SUFFIX = r"\s*(?:no\.?|nr\.?|number|num\.?|#)?\s*[:#]?\s*"


@dataclass(frozen=True)
class DocumentNumberRule:
    """Regex rule with a ``number`` group tagging SAP identifiers by kind."""
    kind: str
    pattern: Pattern[str]

    @classmethod
    def build(cls, kind: str, regex: str) -> "DocumentNumberRule":
        return cls(kind=kind, pattern=re.compile(regex, re.IGNORECASE))


# Ordered from most to least specific; the first rule to claim a position
# decides the kind of the number found there.
DOCUMENT_NUMBER_RULES: Tuple[DocumentNumberRule, ...] = (
    DocumentNumberRule.build(
        "purchase_order",
        rf"\b(?:p\.?\s?o\.?|purchase\s+order){_LABEL_SUFFIX}(?P<number>\d{{8,10}})(?!\d)",
    ),
    DocumentNumberRule.build(
        "material",
        rf"\b(?:material|mat\.){_LABEL_SUFFIX}(?P<number>\d{{6,18}})(?!\d)",
    ),
    DocumentNumberRule.build(
        "vendor",
        rf"\b(?:vendor|supplier){_LABEL_SUFFIX}(?P<number>\d{{5,10}})(?!\d)",
    ),
    DocumentNumberRule.build(
        "invoice",
        rf"\binvoice(?:\s+doc(?:ument)?\.?)?{_LABEL_SUFFIX}(?P<number>\d{{8,10}})(?!\d)",
    ),
    DocumentNumberRule.build("purchase_order", r"(?<!\d)(?P<number>45\d{8})(?!\d)"),
    DocumentNumberRule.build("material_document", r"(?<!\d)(?P<number>(?:49|50)\d{8})(?!\d)"),
    DocumentNumberRule.build("invoice", r"(?<!\d)(?P<number>51\d{8})(?!\d)"),
    DocumentNumberRule.build("document", r"(?<!\d)(?P<number>\d{8,10})(?!\d)"),
)


# ========== Priority rules ==========

_PRIO = r"prio(?:rity)?\s*[:=]?\s*"


@dataclass(frozen=True)
class PriorityRule:
    """Regex rule mapping urgency language to a priority level."""
    level: PriorityLevel
    pattern: Pattern[str]

    @classmethod
    def build(cls, level: PriorityLevel, regex: str) -> "PriorityRule":
        return cls(level=level, pattern=re.compile(regex, re.IGNORECASE))


PRIORITY_RULES: Tuple[PriorityRule, ...] = (
    PriorityRule.build(PriorityLevel.CRITICAL, r"(?<!not\s)\bcritical(?:ly)?\b"),
    PriorityRule.build(PriorityLevel.CRITICAL, rf"\b(?:p\s?1|{_PRIO}(?:1|very\s+high|critical))\b"),
    PriorityRule.build(PriorityLevel.CRITICAL, r"\b(?:production|system|plant)\s+(?:is\s+)?down\b"),
    PriorityRule.build(PriorityLevel.CRITICAL, r"\b(?:show\s?stopper|emergency|go-?live\s+blocker)\b"),
    PriorityRule.build(PriorityLevel.HIGH, r"(?<!not\s)\burgent(?:ly)?\b"),
    PriorityRule.build(PriorityLevel.HIGH, rf"\b(?:p\s?2|{_PRIO}(?:2|high)|high\s+prio(?:rity)?)\b"),
    PriorityRule.build(PriorityLevel.HIGH, r"\b(?:asap|as\s+soon\s+as\s+possible|escalated)\b"),
    PriorityRule.build(PriorityLevel.MEDIUM, rf"\b(?:p\s?3|{_PRIO}(?:3|medium|normal)|(?:medium|normal)\s+prio(?:rity)?)\b"),
    PriorityRule.build(PriorityLevel.LOW, rf"\b(?:p\s?4|{_PRIO}(?:4|low)|low\s+prio(?:rity)?)\b"),
    PriorityRule.build(PriorityLevel.LOW, r"\b(?:not\s+(?:urgent|critical)|when(?:ever)?\s+possible|nice\s+to\s+have)\b"),
)


# ========== Modules ==========

@dataclass(frozen=True)
class ModuleCluster:
    """An SAP MM sub-area and the canonical terms that point to it."""
    name: str
    keywords: FrozenSet[str] = field(default_factory=frozenset)

    def count_matches(self, keywords: Iterable[str]) -> int:
        return sum(1 for keyword in keywords if keyword in self.keywords)


# ========== Scoring ==========

@dataclass(frozen=True)
class ScoringPolicy:
    """
    Constants the classifier uses to turn scores into confidence.

    confidence = max(floor, score / (score + smoothing)) for a matched
    scenario; the unclassified fallback always reports fallback_confidence.
    """
    smoothing: float = 4.0
    fallback_confidence: float = 0.2
    confidence_floor: float = 0.3
    module_match_bonus: float = 1.0

    def __post_init__(self):
        if self.smoothing <= 0:
            raise ValueError("smoothing must be positive")
        if not 0.0 <= self.fallback_confidence <= 1.0:
            raise ValueError("fallback_confidence must be between 0 and 1")
        if not 0.0 <= self.confidence_floor < 1.0:
            raise ValueError("confidence_floor must be in [0, 1)")
        if self.module_match_bonus < 0:
            raise ValueError("module_match_bonus must not be negative")

    def confidence_for(self, score: float) -> float:
        """Confidence for a matched scenario; strictly below 1."""
        if score <= 0:
            return self.fallback_confidence
        return max(self.confidence_floor, score / (score + self.smoothing))
