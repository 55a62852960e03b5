"""Blackjack decision engine - pure functions over caller-owned snapshots."""

from core.cards import Rank, parse_rank
from core.errors import (
    DepletedRankError,
    EngineError,
    InvalidBankrollError,
    InvalidBetError,
    InvalidShoeError,
    MalformedRankError,
    TableStateError,
)
from core.hand import HandValue, evaluate
from core.shoe import Shoe, draw, remaining_total, restore

__all__ = [
    "Rank",
    "parse_rank",
    "DepletedRankError",
    "EngineError",
    "InvalidBankrollError",
    "InvalidBetError",
    "InvalidShoeError",
    "MalformedRankError",
    "TableStateError",
    "HandValue",
    "evaluate",
    "Shoe",
    "draw",
    "remaining_total",
    "restore",
]
