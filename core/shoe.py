"""Remaining-card counts for a multi-deck shoe."""

import logging
from typing import Iterator, Mapping

from core.cards import HIGH_RANKS, LOW_RANKS, RANKS, Rank, parse_rank
from core.errors import DepletedRankError, InvalidShoeError

logger = logging.getLogger(__name__)

CARDS_PER_RANK_PER_DECK = 4


class Shoe(Mapping[Rank, int]):
    """
    Immutable snapshot of the undealt cards, as a count per rank.

    Drawing or restoring a card returns a new Shoe; the original is never
    modified, so speculative evaluations can share a snapshot freely.
    """

    __slots__ = ("_counts",)

    def __init__(self, counts: Mapping[Rank, int]) -> None:
        """
        Initialize a shoe from per-rank counts.

        Args:
            counts: Remaining count for each rank. Missing ranks count as 0.
        """
        normalized: dict[Rank, int] = {}
        for rank in RANKS:
            count = int(counts.get(rank, 0))
            if count < 0:
                raise InvalidShoeError(f"Count for rank {rank} cannot be negative")
            normalized[rank] = count
        self._counts = normalized

    @classmethod
    def fresh(cls, num_decks: int = 6) -> "Shoe":
        """Create a full shoe of num_decks standard 52-card decks."""
        if num_decks < 1:
            raise InvalidShoeError("Shoe must have at least 1 deck")
        per_rank = num_decks * CARDS_PER_RANK_PER_DECK
        return cls({rank: per_rank for rank in RANKS})

    @classmethod
    def from_counts(
        cls, counts: Mapping[Rank | str, int], num_decks: int = 6
    ) -> "Shoe":
        """
        Create a shoe from counts keyed by Rank or rank symbol.

        Raises:
            InvalidShoeError: If a rank holds more cards than num_decks decks
        """
        per_rank = num_decks * CARDS_PER_RANK_PER_DECK
        parsed: dict[Rank, int] = {}
        for key, count in counts.items():
            rank = parse_rank(key)
            parsed[rank] = parsed.get(rank, 0) + count
            if parsed[rank] > per_rank:
                raise InvalidShoeError(
                    f"A {num_decks}-deck shoe holds at most {per_rank} of rank {rank}"
                )
        return cls(parsed)

    def __getitem__(self, rank: Rank | str) -> int:
        return self._counts[parse_rank(rank)]

    def __iter__(self) -> Iterator[Rank]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Shoe):
            return self._counts == other._counts
        return super().__eq__(other)

    def __hash__(self) -> int:
        return hash(tuple(self._counts.values()))

    def __repr__(self) -> str:
        counts = ", ".join(f"{rank}={count}" for rank, count in self._counts.items())
        return f"Shoe({counts})"

    def draw(self, rank: Rank | str) -> "Shoe":
        """
        Remove one card of the given rank.

        Raises:
            DepletedRankError: If no card of that rank remains
        """
        rank = parse_rank(rank)
        if self._counts[rank] == 0:
            raise DepletedRankError(rank)
        counts = dict(self._counts)
        counts[rank] -= 1
        logger.debug("Drew %s, %d left of that rank", rank, counts[rank])
        return Shoe(counts)

    def restore(self, rank: Rank | str) -> "Shoe":
        """Return one card of the given rank to the shoe."""
        rank = parse_rank(rank)
        counts = dict(self._counts)
        counts[rank] += 1
        return Shoe(counts)

    @property
    def remaining_total(self) -> int:
        """Return the number of cards remaining."""
        return sum(self._counts.values())

    def fraction_of(self, ranks: frozenset[Rank]) -> float:
        """Return the share of the remaining cards that belong to ranks."""
        remaining = self.remaining_total
        if remaining == 0:
            return 0.0
        return sum(self._counts[rank] for rank in ranks) / remaining

    @property
    def low_fraction(self) -> float:
        """Share of remaining cards ranked 2 through 6."""
        return self.fraction_of(LOW_RANKS)

    @property
    def high_fraction(self) -> float:
        """Share of remaining cards that are tens, faces or aces."""
        return self.fraction_of(HIGH_RANKS)

    def to_dict(self) -> dict[str, int]:
        """Convert to a symbol-keyed dictionary."""
        return {str(rank): count for rank, count in self._counts.items()}


def draw(shoe: Shoe, rank: Rank | str) -> Shoe:
    """Return a copy of shoe with one card of rank removed."""
    return shoe.draw(rank)


def restore(shoe: Shoe, rank: Rank | str) -> Shoe:
    """Return a copy of shoe with one card of rank put back."""
    return shoe.restore(rank)


def remaining_total(shoe: Shoe) -> int:
    """Return the number of cards left in shoe."""
    return shoe.remaining_total
