"""Action recommendations and table rules."""

from core.strategy.rules import RuleSet
from core.strategy.advisor import Action, StrategyRecommendation, recommend

__all__ = [
    "RuleSet",
    "Action",
    "StrategyRecommendation",
    "recommend",
]
