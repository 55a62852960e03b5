"""Estimate, recommend and size in one pass over a hand snapshot."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from core.cards import Rank, parse_ranks
from core.shoe import Shoe
from core.statistics.kelly import BetRecommendation, KellyCalculator
from core.statistics.probability import ProbabilityEstimate, estimate
from core.strategy.advisor import StrategyRecommendation, recommend
from core.strategy.rules import RuleSet


@dataclass(frozen=True)
class Analysis:
    """Everything the readout panel shows for one hand state."""

    probabilities: ProbabilityEstimate
    strategy: StrategyRecommendation
    next_bet: BetRecommendation


def analyze(
    player_cards: Sequence[Rank | str],
    dealer_up_card: Rank | str | None,
    shoe: Shoe,
    bankroll: int | Decimal,
    rules: RuleSet | None = None,
) -> Analysis | None:
    """
    Run the full decision pipeline for a hand.

    Probabilities are computed first; the action ranking and the next
    round's bet are both derived from them.

    Returns:
        The analysis, or None until the player has a card and the dealer
        upcard is known
    """
    rules = rules or RuleSet()
    cards = parse_ranks(player_cards)
    if not cards or not dealer_up_card:
        return None

    probabilities = estimate(cards, dealer_up_card, shoe)
    strategy = recommend(cards, dealer_up_card, shoe)
    calculator = KellyCalculator(
        bankroll,
        min_bet=rules.min_bet,
        max_bet=rules.max_bet,
        kelly_fraction=rules.kelly_fraction,
    )
    next_bet = calculator.next_bet(probabilities.win_prob, probabilities.loss_prob)

    return Analysis(
        probabilities=probabilities,
        strategy=strategy,
        next_bet=next_bet,
    )
