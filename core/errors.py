"""Exceptions raised by the decision engine."""


class EngineError(Exception):
    """Base class for all engine errors."""


class DepletedRankError(EngineError):
    """A card was requested from the shoe but none of that rank remain."""

    def __init__(self, rank: object) -> None:
        self.rank = rank
        super().__init__(f"No cards of rank {rank} remain in the shoe")


class InvalidBankrollError(EngineError):
    """Bet sizing was requested against a non-positive bankroll."""

    def __init__(self, bankroll: object) -> None:
        self.bankroll = bankroll
        super().__init__(f"Bankroll must be positive, got {bankroll}")


class MalformedRankError(EngineError, ValueError):
    """A value could not be interpreted as a card rank."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid rank: {value!r}")


class TableStateError(EngineError):
    """An operation is not allowed for the current table state."""


class InvalidShoeError(EngineError, ValueError):
    """Shoe counts that no shoe of the given size could hold."""


class InvalidBetError(EngineError, ValueError):
    """A stake outside the table's betting limits."""
