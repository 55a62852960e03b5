"""Kelly criterion calculations for next-round bet sizing."""

import math
from dataclasses import dataclass
from decimal import Decimal

from core.errors import InvalidBankrollError


@dataclass(frozen=True)
class BetRecommendation:
    """Suggested stake for the next round."""

    kelly_fraction: float
    recommended_bet: int
    bet_percentage: float

    def to_dict(self) -> dict[str, float | int]:
        """Convert to a plain dictionary."""
        return {
            "kelly_fraction": self.kelly_fraction,
            "recommended_bet": self.recommended_bet,
            "bet_percentage": self.bet_percentage,
        }


def kelly_criterion(
    win_probability: float,
    loss_probability: float,
    payout: float = 1.0,
) -> float:
    """
    Calculate the Kelly criterion fraction.

    Formula: f* = (bp - q) / b
    where:
        f* = fraction of bankroll to bet
        b = odds received on the bet
        p = probability of winning
        q = probability of losing

    Pushes are neither p nor q, so q is taken as given rather than 1 - p.
    The result is negative when the edge is against the player.
    """
    return (payout * win_probability - loss_probability) / payout


class KellyCalculator:
    """
    Size bets as a fraction of the Kelly-optimal stake.

    The stake is always clamped into the table limits, so a losing edge
    still yields the minimum bet rather than sitting the round out.
    """

    def __init__(
        self,
        bankroll: int | Decimal,
        min_bet: int = 1,
        max_bet: int = 500,
        kelly_fraction: float = 0.5,
    ) -> None:
        """
        Initialize the Kelly calculator.

        Args:
            bankroll: Current bankroll
            min_bet: Smallest bet ever recommended
            max_bet: Largest bet ever recommended
            kelly_fraction: Fraction of Kelly to use (0.5 = half Kelly)

        Raises:
            InvalidBankrollError: If the bankroll is zero or negative
        """
        if bankroll <= 0:
            raise InvalidBankrollError(bankroll)
        self.bankroll = bankroll
        self.min_bet = min_bet
        self.max_bet = max_bet
        self.kelly_fraction = kelly_fraction

    def next_bet(
        self,
        win_probability: float,
        loss_probability: float,
        payout: float = 1.0,
    ) -> BetRecommendation:
        """
        Recommend a stake for the next round.

        Args:
            win_probability: Estimated probability of winning
            loss_probability: Estimated probability of losing
            payout: Amount won per unit bet

        Returns:
            BetRecommendation with the full Kelly fraction and clamped stake
        """
        kelly = kelly_criterion(win_probability, loss_probability, payout)
        bankroll = float(self.bankroll)
        stake = math.floor(kelly * self.kelly_fraction * bankroll)
        bet = max(self.min_bet, min(self.max_bet, stake))

        return BetRecommendation(
            kelly_fraction=kelly,
            recommended_bet=bet,
            bet_percentage=bet / bankroll * 100,
        )


def size_next_bet(
    bankroll: int | Decimal,
    win_prob: float,
    loss_prob: float,
    payout: float = 1.0,
) -> BetRecommendation:
    """Half-Kelly stake for the next round, clamped to [1, 500]."""
    return KellyCalculator(bankroll).next_bet(win_prob, loss_prob, payout)
