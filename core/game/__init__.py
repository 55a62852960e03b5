"""Table state tracking for the card-entry surface."""

from core.game.history import HandRecord, HandResult
from core.game.state import GamePhase, Seat
from core.game.table import (
    TableState,
    add_card,
    analyze_table,
    new_table,
    next_hand,
    recent_history,
    remove_card,
    reset_shoe,
    set_bet,
    settle_hand,
)

__all__ = [
    "HandRecord",
    "HandResult",
    "GamePhase",
    "Seat",
    "TableState",
    "add_card",
    "analyze_table",
    "new_table",
    "next_hand",
    "recent_history",
    "remove_card",
    "reset_shoe",
    "set_bet",
    "settle_hand",
]
