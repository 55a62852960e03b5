"""Caller-owned table state and the pure operations that advance it."""

import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal

from core.analysis import Analysis, analyze
from core.cards import Rank, parse_rank
from core.errors import InvalidBetError, TableStateError
from core.game.history import HandRecord, HandResult
from core.game.state import GamePhase, Seat, is_valid_transition
from core.hand import HandValue, evaluate
from core.shoe import Shoe
from core.strategy.rules import RuleSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableState:
    """
    Snapshot of everything the card-entry surface tracks.

    Never mutated: every operation below returns a new TableState, and the
    engine keeps no reference to any of them.
    """

    shoe: Shoe
    player_cards: tuple[Rank, ...] = ()
    dealer_up_card: Rank | None = None
    dealer_down_card: Rank | None = None
    bankroll: Decimal = Decimal("1000")
    current_bet: int = 10
    phase: GamePhase = GamePhase.BETTING
    history: tuple[HandRecord, ...] = ()
    rules: RuleSet = field(default_factory=RuleSet)

    @property
    def player_hand(self) -> HandValue:
        """Evaluate the player's cards."""
        return evaluate(self.player_cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards left in the shoe."""
        return self.shoe.remaining_total

    def _advance(self, phase: GamePhase, **changes) -> "TableState":
        if not is_valid_transition(self.phase, phase):
            raise TableStateError(f"Cannot move from {self.phase} to {phase}")
        return replace(self, phase=phase, **changes)


def new_table(
    bankroll: int | Decimal = Decimal("1000"),
    bet: int = 10,
    rules: RuleSet | None = None,
) -> TableState:
    """Start a session with a fresh shoe."""
    rules = rules or RuleSet()
    table = TableState(
        shoe=Shoe.fresh(rules.num_decks),
        bankroll=Decimal(bankroll),
        rules=rules,
    )
    return set_bet(table, bet)


def add_card(table: TableState, rank: Rank | str, seat: Seat) -> TableState:
    """
    Deal a card from the shoe to a seat.

    Raises:
        DepletedRankError: If no card of that rank remains
        TableStateError: If the dealer slot is already filled
    """
    rank = parse_rank(rank)
    if seat is Seat.DEALER_UP and table.dealer_up_card is not None:
        raise TableStateError("Dealer upcard is already set")
    if seat is Seat.DEALER_DOWN and table.dealer_down_card is not None:
        raise TableStateError("Dealer hole card is already set")

    shoe = table.shoe.draw(rank)
    if seat is Seat.PLAYER:
        changes = {"player_cards": (*table.player_cards, rank)}
    elif seat is Seat.DEALER_UP:
        changes = {"dealer_up_card": rank}
    else:
        changes = {"dealer_down_card": rank}

    return table._advance(GamePhase.PLAYING, shoe=shoe, **changes)


def remove_card(table: TableState, rank: Rank | str, seat: Seat) -> TableState:
    """
    Take a card back off the table and return it to the shoe.

    For the player, the most recent card of that rank is removed.

    Raises:
        TableStateError: If that card is not at the seat
    """
    rank = parse_rank(rank)
    if seat is Seat.PLAYER:
        if rank not in table.player_cards:
            raise TableStateError(f"Player has no {rank} to remove")
        cards = list(table.player_cards)
        index = len(cards) - 1 - cards[::-1].index(rank)
        del cards[index]
        changes = {"player_cards": tuple(cards)}
    elif seat is Seat.DEALER_UP:
        if table.dealer_up_card is not rank:
            raise TableStateError(f"Dealer upcard is not {rank}")
        changes = {"dealer_up_card": None}
    else:
        if table.dealer_down_card is not rank:
            raise TableStateError(f"Dealer hole card is not {rank}")
        changes = {"dealer_down_card": None}

    return table._advance(GamePhase.PLAYING, shoe=table.shoe.restore(rank), **changes)


def set_bet(table: TableState, amount: int) -> TableState:
    """
    Change the stake for the current hand.

    Raises:
        InvalidBetError: If amount is outside the table limits
    """
    rules = table.rules
    if not rules.min_bet <= amount <= rules.max_bet:
        raise InvalidBetError(
            f"Bet must be between {rules.min_bet} and {rules.max_bet}"
        )
    return replace(table, current_bet=amount)


def settle_hand(table: TableState, result: HandResult | str) -> TableState:
    """
    Declare the hand's result and apply it to the bankroll.

    Raises:
        TableStateError: If there is no hand in play
    """
    result = HandResult(result)
    if not table.player_cards:
        raise TableStateError("No player cards to settle")

    payout = result.payout(table.current_bet, table.rules.blackjack_payout)
    bankroll = table.bankroll + payout
    record = HandRecord(
        player_cards=table.player_cards,
        dealer_up_card=table.dealer_up_card,
        dealer_down_card=table.dealer_down_card,
        result=result,
        bet=table.current_bet,
        payout=payout,
        bankroll=bankroll,
    )
    logger.info("Settled hand: %s, bankroll now %s", record, bankroll)
    return table._advance(
        GamePhase.FINISHED,
        bankroll=bankroll,
        history=(*table.history, record),
    )


def next_hand(table: TableState) -> TableState:
    """Clear the cards for a new hand, keeping the shoe as dealt."""
    return table._advance(
        GamePhase.BETTING,
        player_cards=(),
        dealer_up_card=None,
        dealer_down_card=None,
    )


def reset_shoe(table: TableState) -> TableState:
    """Shuffle up: a fresh shoe and an empty table. Bankroll and log survive."""
    logger.info("Shoe reset with %d cards remaining", table.cards_remaining)
    return replace(
        table,
        shoe=Shoe.fresh(table.rules.num_decks),
        player_cards=(),
        dealer_up_card=None,
        dealer_down_card=None,
        phase=GamePhase.BETTING,
    )


def analyze_table(table: TableState) -> Analysis | None:
    """Run the decision pipeline on the table's current snapshot."""
    if table.bankroll <= 0:
        return None
    return analyze(
        table.player_cards,
        table.dealer_up_card,
        table.shoe,
        table.bankroll,
        table.rules,
    )


def recent_history(table: TableState, limit: int = 8) -> tuple[HandRecord, ...]:
    """The last few settled hands, oldest first."""
    return table.history[-limit:] if limit > 0 else ()
