"""Hand results and the session log."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from core.cards import Rank


class HandResult(Enum):
    """Declared outcome of a finished hand."""

    WIN = "win"
    LOSS = "loss"
    BLACKJACK = "blackjack"
    PUSH = "push"

    def payout(self, bet: int, blackjack_payout: float = 1.5) -> Decimal:
        """Bankroll change for a hand of the given bet."""
        stake = Decimal(bet)
        if self is HandResult.WIN:
            return stake
        if self is HandResult.BLACKJACK:
            return stake * Decimal(str(blackjack_payout))
        if self is HandResult.LOSS:
            return -stake
        return Decimal("0")


@dataclass(frozen=True)
class HandRecord:
    """One line of the session log."""

    player_cards: tuple[Rank, ...]
    dealer_up_card: Rank | None
    dealer_down_card: Rank | None
    result: HandResult
    bet: int
    payout: Decimal
    bankroll: Decimal
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        cards = ",".join(str(c) for c in self.player_cards)
        up = self.dealer_up_card or ""
        sign = "+" if self.payout > 0 else ""
        return f"{self.result.name} P:[{cards}] D:[{up}] {sign}{self.payout}"
