"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Literal

from core.analysis import Analysis
from core.game import HandRecord, TableState, recent_history
from core.game.table import analyze_table
from core.hand import HandValue
from core.statistics.kelly import BetRecommendation
from core.statistics.probability import ProbabilityEstimate
from core.strategy.advisor import StrategyRecommendation


SeatName = Literal["player", "dealer-up", "dealer-down"]


# Analysis schemas
class AnalysisRequest(BaseModel):
    """Stateless analysis of a single hand."""

    player_cards: list[str] = Field(default_factory=list)
    dealer_up_card: str | None = None
    shoe: dict[str, int] | None = Field(
        default=None,
        description="Remaining count per rank symbol; a fresh shoe if omitted",
    )
    bankroll: int = Field(default=1000, description="Bankroll for next-round sizing")


class HandValueResponse(BaseModel):
    """Evaluated hand."""

    total: int
    is_soft: bool
    is_blackjack: bool
    is_bust: bool

    @classmethod
    def from_value(cls, value: HandValue) -> "HandValueResponse":
        return cls(
            total=value.total,
            is_soft=value.is_soft,
            is_blackjack=value.is_blackjack,
            is_bust=value.is_bust,
        )


class ProbabilityResponse(BaseModel):
    """Outcome probabilities for standing now."""

    win_prob: float
    loss_prob: float
    push_prob: float
    dealer_bust_prob: float

    @classmethod
    def from_estimate(cls, estimate: ProbabilityEstimate) -> "ProbabilityResponse":
        return cls(**estimate.to_dict())


class StrategyResponse(BaseModel):
    """Recommended action and the expected value of each legal action."""

    recommended_action: Literal["STAND", "HIT", "DOUBLE", "SPLIT"]
    expected_values: dict[str, float]
    stand_ev: float
    hit_ev: float

    @classmethod
    def from_recommendation(cls, rec: StrategyRecommendation) -> "StrategyResponse":
        return cls(
            recommended_action=rec.recommended_action.value,
            expected_values={a.value: ev for a, ev in rec.ranked_actions},
            stand_ev=rec.stand_ev,
            hit_ev=rec.hit_ev,
        )


class BetResponse(BaseModel):
    """Next-round bet recommendation."""

    kelly_fraction: float
    recommended_bet: int
    bet_percentage: float

    @classmethod
    def from_recommendation(cls, bet: BetRecommendation) -> "BetResponse":
        return cls(**bet.to_dict())


class AnalysisResponse(BaseModel):
    """Full readout for one hand state."""

    probabilities: ProbabilityResponse
    strategy: StrategyResponse
    next_bet: BetResponse

    @classmethod
    def from_analysis(cls, analysis: Analysis | None) -> "AnalysisResponse | None":
        if analysis is None:
            return None
        return cls(
            probabilities=ProbabilityResponse.from_estimate(analysis.probabilities),
            strategy=StrategyResponse.from_recommendation(analysis.strategy),
            next_bet=BetResponse.from_recommendation(analysis.next_bet),
        )


class AnalysisResultResponse(BaseModel):
    """Stateless analysis result; analysis is null until the hand is complete."""

    player_hand: HandValueResponse
    cards_remaining: int
    analysis: AnalysisResponse | None


# Table schemas
class CardRequest(BaseModel):
    """Card entered at, or removed from, a seat."""

    rank: str
    target: SeatName = "player"


class BetRequest(BaseModel):
    """Request to change the bet size."""

    amount: int = Field(..., ge=1, description="Bet amount")


class SettleRequest(BaseModel):
    """Declared result of the current hand."""

    result: Literal["win", "loss", "blackjack", "push"]


class HandRecordResponse(BaseModel):
    """Session log entry."""

    player_cards: list[str]
    dealer_up_card: str | None
    dealer_down_card: str | None
    result: str
    bet: int
    payout: float
    bankroll: float

    @classmethod
    def from_record(cls, record: HandRecord) -> "HandRecordResponse":
        return cls(
            player_cards=[str(c) for c in record.player_cards],
            dealer_up_card=str(record.dealer_up_card) if record.dealer_up_card else None,
            dealer_down_card=(
                str(record.dealer_down_card) if record.dealer_down_card else None
            ),
            result=record.result.value,
            bet=record.bet,
            payout=float(record.payout),
            bankroll=float(record.bankroll),
        )


class TableStateResponse(BaseModel):
    """Current table state with its analysis."""

    phase: str
    bankroll: float
    current_bet: int
    cards_remaining: int
    shoe_size: int
    shoe: dict[str, int]
    player_cards: list[str]
    player_hand: HandValueResponse
    dealer_up_card: str | None
    dealer_down_card: str | None
    analysis: AnalysisResponse | None
    history: list[HandRecordResponse]

    @classmethod
    def from_table(cls, table: TableState) -> "TableStateResponse":
        return cls(
            phase=table.phase.name,
            bankroll=float(table.bankroll),
            current_bet=table.current_bet,
            cards_remaining=table.cards_remaining,
            shoe_size=table.rules.shoe_size,
            shoe=table.shoe.to_dict(),
            player_cards=[str(c) for c in table.player_cards],
            player_hand=HandValueResponse.from_value(table.player_hand),
            dealer_up_card=str(table.dealer_up_card) if table.dealer_up_card else None,
            dealer_down_card=(
                str(table.dealer_down_card) if table.dealer_down_card else None
            ),
            analysis=AnalysisResponse.from_analysis(analyze_table(table)),
            history=[HandRecordResponse.from_record(r) for r in recent_history(table)],
        )
