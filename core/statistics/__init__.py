"""Outcome probabilities and bet sizing."""

from core.statistics.probability import ProbabilityEstimate, estimate
from core.statistics.kelly import BetRecommendation, KellyCalculator, size_next_bet

__all__ = [
    "ProbabilityEstimate",
    "estimate",
    "BetRecommendation",
    "KellyCalculator",
    "size_next_bet",
]
