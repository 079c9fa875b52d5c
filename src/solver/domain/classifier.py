"""
Scenario Classifier
===================

Scores every knowledge-base scenario against extracted signals and picks
the winner.

Selection rules:
- score = sum of the scenario's weights for each extracted keyword it
  declares, plus the module bonus when the base score is positive and the
  detected module equals the scenario's default module
- the strictly highest score wins; on a tie the scenario declared earlier
  in the knowledge base wins
- when nothing scores above zero the fallback scenario is returned with
  the policy's fixed low confidence
"""

from typing import List, Tuple

from src.solver.domain.entities import (
    ClassificationOutcome,
    KnowledgeBase,
    ScenarioDefinition,
    Signals,
)
from src.solver.domain.value_objects import ScoringPolicy


class ScenarioClassifier:
    """Deterministic keyword-weight classifier over a read-only knowledge base."""

    def __init__(self, knowledge_base: KnowledgeBase, policy: ScoringPolicy = ScoringPolicy()):
        self._knowledge_base = knowledge_base
        self._policy = policy

    @property
    def policy(self) -> ScoringPolicy:
        return self._policy

    def score(self, scenario: ScenarioDefinition, signals: Signals) -> float:
        """Evidence for one scenario. The fallback always scores zero."""
        if scenario.is_fallback:
            return 0.0

        base = sum(scenario.weight_of(keyword) for keyword in signals.keywords)
        if base > 0 and signals.module_hint == scenario.default_module:
            base += self._policy.module_match_bonus
        return base

    def rank(self, signals: Signals) -> List[Tuple[ScenarioDefinition, float]]:
        """Scored scenarios, best first; ties keep declaration order."""
        scored = [
            (scenario, self.score(scenario, signals))
            for scenario in self._knowledge_base.scored_scenarios
        ]
        # sorted() is stable, so equal scores stay in declaration order
        return sorted(scored, key=lambda item: item[1], reverse=True)

    def classify(self, signals: Signals) -> ClassificationOutcome:
        ranking = self.rank(signals)
        if not ranking or ranking[0][1] <= 0:
            return ClassificationOutcome(
                scenario=self._knowledge_base.fallback,
                score=0.0,
                confidence=self._policy.fallback_confidence,
            )

        winner, best = ranking[0]
        return ClassificationOutcome(
            scenario=winner,
            score=best,
            confidence=self._policy.confidence_for(best),
        )
