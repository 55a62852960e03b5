"""Card ranks as tracked by the shoe - suits are irrelevant to the engine."""

from enum import Enum
from typing import Iterable

from core.errors import MalformedRankError


class Rank(Enum):
    """Card ranks, valued by their display symbol."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    def __str__(self) -> str:
        return self.value

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self is Rank.ACE:
            return 11
        if self in (Rank.JACK, Rank.QUEEN, Rank.KING):
            return 10
        return int(self.value)

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self is Rank.ACE

    @property
    def is_ten_value(self) -> bool:
        """Check if this rank has a value of 10."""
        return self.blackjack_value == 10


# Shoe order, matching the card-entry grid
RANKS: tuple[Rank, ...] = tuple(Rank)

# Ranks that favour the dealer busting, and the ones that hurt it
LOW_RANKS: frozenset[Rank] = frozenset(
    {Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE, Rank.SIX}
)
HIGH_RANKS: frozenset[Rank] = frozenset(
    {Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE}
)

_ALIASES = {"T": Rank.TEN}


def parse_rank(value: Rank | str) -> Rank:
    """
    Interpret a rank symbol.

    Accepts a Rank, or a symbol such as 'A', '10', 'k' or 'T'.

    Raises:
        MalformedRankError: If the value is not a known rank
    """
    if isinstance(value, Rank):
        return value
    if not isinstance(value, str):
        raise MalformedRankError(value)

    symbol = value.strip().upper()
    if symbol in _ALIASES:
        return _ALIASES[symbol]
    try:
        return Rank(symbol)
    except ValueError:
        raise MalformedRankError(value) from None


def parse_ranks(values: Iterable[Rank | str]) -> tuple[Rank, ...]:
    """Interpret a sequence of rank symbols, preserving order."""
    return tuple(parse_rank(v) for v in values)
