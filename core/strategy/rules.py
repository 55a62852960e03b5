"""Table rules that shape bankroll bookkeeping and bet sizing."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RuleSet:
    """
    Table configuration.

    The probability model itself is fixed; these rules cover the shoe size,
    the bet range and how bets are sized and paid.
    """

    # Deck configuration
    num_decks: int = 6

    # Betting limits
    min_bet: int = 1
    max_bet: int = 500

    # Fraction of full Kelly to stake (0.5 = half Kelly)
    kelly_fraction: float = 0.5

    # Blackjack payout (3:2 = 1.5, 6:5 = 1.2)
    blackjack_payout: float = 1.5

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.num_decks < 1 or self.num_decks > 8:
            raise ValueError("num_decks must be between 1 and 8")
        if self.min_bet < 1:
            raise ValueError("min_bet must be at least 1")
        if self.max_bet < self.min_bet:
            raise ValueError("max_bet must not be below min_bet")
        if not 0.0 < self.kelly_fraction <= 1.0:
            raise ValueError("kelly_fraction must be between 0 and 1")
        if self.blackjack_payout < 1.0:
            raise ValueError("blackjack_payout must be at least 1.0")

    @property
    def shoe_size(self) -> int:
        """Total cards in a full shoe."""
        return self.num_decks * 52
