"""Closed-form outcome probability estimates for a player hand."""

import logging
from dataclasses import dataclass
from typing import Sequence

from core.cards import Rank, parse_rank
from core.hand import evaluate
from core.shoe import Shoe

logger = logging.getLogger(__name__)

# Dealer bust rate by upcard value (11 = Ace)
DEALER_BUST_RATES: dict[int, float] = {
    2: 0.35,
    3: 0.37,
    4: 0.40,
    5: 0.42,
    6: 0.42,
    7: 0.26,
    8: 0.24,
    9: 0.23,
    10: 0.23,
    11: 0.17,
}
DEFAULT_DEALER_BUST_RATE = 0.23

# Shoe richness shifts the bust rate by at most this much either way
RICHNESS_WEIGHT = 0.1
MIN_DEALER_BUST = 0.10
MAX_DEALER_BUST = 0.60

# Chance the dealer also holds a natural, given the upcard
DEALER_BLACKJACK_ACE = 0.31
DEALER_BLACKJACK_TEN = 0.08

# Share of the dealer's non-bust outcomes the player beats, by total tier
STRONG_TOTAL = 17
MEDIUM_TOTAL = 12
STRONG_WIN_SHARE = 0.4
MEDIUM_WIN_SHARE = 0.2
WEAK_BUST_SHARE = 0.5
FIXED_PUSH = 0.1


@dataclass(frozen=True)
class ProbabilityEstimate:
    """
    Approximate outcome probabilities for standing on the current hand.

    win + loss + push is close to, but not forced to equal, 1.
    """

    win_prob: float
    loss_prob: float
    push_prob: float
    dealer_bust_prob: float

    @property
    def stand_ev(self) -> float:
        """Expected value of standing, in units of the original bet."""
        return self.win_prob - self.loss_prob

    def to_dict(self) -> dict[str, float]:
        """Convert to a plain dictionary."""
        return {
            "win_prob": self.win_prob,
            "loss_prob": self.loss_prob,
            "push_prob": self.push_prob,
            "dealer_bust_prob": self.dealer_bust_prob,
        }


# Returned when there is nothing left to draw
EMPTY_SHOE_ESTIMATE = ProbabilityEstimate(
    win_prob=0.0, loss_prob=1.0, push_prob=0.0, dealer_bust_prob=0.0
)


def _upcard(dealer_up_card: Rank | str | None) -> Rank | None:
    if dealer_up_card is None or dealer_up_card == "":
        return None
    return parse_rank(dealer_up_card)


def dealer_bust_probability(dealer_up_card: Rank | str | None, shoe: Shoe) -> float:
    """
    Estimate how often the dealer busts.

    Starts from the base rate for the upcard and nudges it up when the
    shoe is rich in low cards, down when rich in tens and aces.
    """
    upcard = _upcard(dealer_up_card)
    if upcard is None:
        base = DEFAULT_DEALER_BUST_RATE
    else:
        base = DEALER_BUST_RATES.get(upcard.blackjack_value, DEFAULT_DEALER_BUST_RATE)

    adjusted = base + (shoe.low_fraction - shoe.high_fraction) * RICHNESS_WEIGHT
    return max(MIN_DEALER_BUST, min(MAX_DEALER_BUST, adjusted))


def dealer_blackjack_probability(dealer_up_card: Rank | str | None) -> float:
    """Chance the dealer holds a natural behind the given upcard."""
    upcard = _upcard(dealer_up_card)
    if upcard is None:
        return 0.0
    if upcard.is_ace:
        return DEALER_BLACKJACK_ACE
    if upcard.is_ten_value:
        return DEALER_BLACKJACK_TEN
    return 0.0


def estimate(
    player_cards: Sequence[Rank | str],
    dealer_up_card: Rank | str | None,
    shoe: Shoe,
) -> ProbabilityEstimate:
    """
    Estimate win/loss/push probabilities for the player standing now.

    Args:
        player_cards: Ranks in the player's hand
        dealer_up_card: Dealer's visible card, or None if not yet dealt
        shoe: Snapshot of the undealt cards

    Returns:
        ProbabilityEstimate for the current hand
    """
    if shoe.remaining_total == 0:
        return EMPTY_SHOE_ESTIMATE

    hand = evaluate(player_cards)
    dealer_bust = dealer_bust_probability(dealer_up_card, shoe)

    if hand.is_bust:
        win, loss, push = 0.0, 1.0, 0.0
    elif hand.is_blackjack:
        dealer_blackjack = dealer_blackjack_probability(dealer_up_card)
        push = dealer_blackjack
        win = 1 - dealer_blackjack
        loss = 0.0
    else:
        if hand.total >= STRONG_TOTAL:
            win = dealer_bust + (1 - dealer_bust) * STRONG_WIN_SHARE
        elif hand.total >= MEDIUM_TOTAL:
            win = dealer_bust + (1 - dealer_bust) * MEDIUM_WIN_SHARE
        else:
            win = dealer_bust * WEAK_BUST_SHARE
        push = FIXED_PUSH
        loss = 1 - win - push

    logger.debug(
        "Estimate for %s vs %s: win=%.3f loss=%.3f push=%.3f bust=%.3f",
        hand,
        dealer_up_card,
        win,
        loss,
        push,
        dealer_bust,
    )
    return ProbabilityEstimate(
        win_prob=win,
        loss_prob=loss,
        push_prob=push,
        dealer_bust_prob=dealer_bust,
    )
