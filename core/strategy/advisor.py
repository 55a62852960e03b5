"""One-card lookahead action recommendations."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from core.cards import Rank, parse_ranks
from core.hand import can_double as _can_double
from core.hand import can_split as _can_split
from core.hand import evaluate
from core.shoe import Shoe
from core.statistics.probability import estimate

logger = logging.getLogger(__name__)

DOUBLE_MULTIPLIER = 2
SPLIT_DISCOUNT = 0.9


class Action(Enum):
    """Player actions, declared in tie-break priority order."""

    STAND = "STAND"
    HIT = "HIT"
    DOUBLE = "DOUBLE"
    SPLIT = "SPLIT"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class StrategyRecommendation:
    """Expected values of the legal actions and the best of them."""

    recommended_action: Action
    expected_values: dict[Action, float]
    stand_ev: float
    hit_ev: float

    @property
    def ranked_actions(self) -> list[tuple[Action, float]]:
        """Legal actions by expected value, best first."""
        return _rank(self.expected_values)


def _rank(expected_values: dict[Action, float]) -> list[tuple[Action, float]]:
    # sorted() is stable, so equal values keep Action declaration order
    ordered = [(a, expected_values[a]) for a in Action if a in expected_values]
    return sorted(ordered, key=lambda item: item[1], reverse=True)


def hit_expected_value(
    player_cards: Sequence[Rank],
    dealer_up_card: Rank | str | None,
    shoe: Shoe,
    stand_ev: float,
) -> float:
    """
    Expected value of taking exactly one more card, then standing.

    Each remaining rank is weighted by its share of the shoe. A busting
    draw is worth -1; otherwise the new hand is re-estimated against the
    shoe with that card removed.
    """
    if evaluate(player_cards).total >= 21:
        return stand_ev

    remaining = shoe.remaining_total
    hit_ev = stand_ev
    for rank, count in shoe.items():
        if count <= 0:
            continue
        weight = count / remaining
        drawn = [*player_cards, rank]
        if evaluate(drawn).is_bust:
            hit_ev += weight * (-1 - stand_ev)
        else:
            new_stand_ev = estimate(drawn, dealer_up_card, shoe.draw(rank)).stand_ev
            hit_ev += weight * (new_stand_ev - stand_ev)
    return hit_ev


def recommend(
    player_cards: Sequence[Rank | str],
    dealer_up_card: Rank | str | None,
    shoe: Shoe,
    can_double: bool | None = None,
    can_split: bool | None = None,
) -> StrategyRecommendation:
    """
    Recommend an action for the player's hand.

    Args:
        player_cards: Ranks in the player's hand
        dealer_up_card: Dealer's visible card
        shoe: Snapshot of the undealt cards
        can_double: Whether doubling is allowed (derived from the hand if None)
        can_split: Whether splitting is allowed (derived from the hand if None)

    Returns:
        StrategyRecommendation with every legal action's expected value
    """
    cards = parse_ranks(player_cards)
    if can_double is None:
        can_double = _can_double(cards)
    if can_split is None:
        can_split = _can_split(cards)

    stand_ev = estimate(cards, dealer_up_card, shoe).stand_ev
    hit_ev = hit_expected_value(cards, dealer_up_card, shoe, stand_ev)

    expected_values: dict[Action, float] = {
        Action.STAND: stand_ev,
        Action.HIT: hit_ev,
    }
    if can_double:
        expected_values[Action.DOUBLE] = DOUBLE_MULTIPLIER * hit_ev
    if can_split:
        expected_values[Action.SPLIT] = SPLIT_DISCOUNT * stand_ev

    best, _ = _rank(expected_values)[0]
    logger.debug("Recommending %s from %s", best, expected_values)
    return StrategyRecommendation(
        recommended_action=best,
        expected_values=expected_values,
        stand_ev=stand_ev,
        hit_ev=hit_ev,
    )
