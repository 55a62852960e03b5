"""Hand evaluation for blackjack."""

from dataclasses import dataclass
from typing import Sequence

from core.cards import Rank, parse_ranks


@dataclass(frozen=True)
class HandValue:
    """Derived attributes of a hand, recomputed from its cards on every read."""

    total: int
    is_soft: bool
    is_blackjack: bool
    is_bust: bool

    def __str__(self) -> str:
        if self.is_blackjack:
            return "BLACKJACK"
        if self.is_bust:
            return f"BUST ({self.total})"
        if self.is_soft:
            return f"soft {self.total}"
        return str(self.total)


def evaluate(cards: Sequence[Rank | str]) -> HandValue:
    """
    Evaluate a hand of card ranks.

    Aces count 11 each, then are demoted to 1 one at a time while the
    total exceeds 21. An empty hand totals 0.

    Args:
        cards: Ranks drawn to the hand, in order

    Returns:
        The hand's total and soft/blackjack/bust classification
    """
    ranks = parse_ranks(cards)
    total = 0
    aces = 0

    for rank in ranks:
        if rank.is_ace:
            aces += 1
        total += rank.blackjack_value

    # Reduce aces from 11 to 1 as needed
    while total > 21 and aces > 0:
        total -= 10
        aces -= 1

    return HandValue(
        total=total,
        is_soft=aces > 0 and total <= 21,
        is_blackjack=len(ranks) == 2 and total == 21,
        is_bust=total > 21,
    )


def can_double(cards: Sequence[Rank | str]) -> bool:
    """Doubling is offered on the first two cards only."""
    return len(cards) == 2


def can_split(cards: Sequence[Rank | str]) -> bool:
    """Splitting is offered on a two-card pair of identical rank."""
    if len(cards) != 2:
        return False
    first, second = parse_ranks(cards)
    return first == second
