"""Stateless analysis endpoint."""

from fastapi import APIRouter

from api.schemas import AnalysisRequest, AnalysisResponse, AnalysisResultResponse, HandValueResponse
from config import config
from core.analysis import analyze
from core.hand import evaluate
from core.shoe import Shoe

router = APIRouter()


@router.post("")
async def analyze_hand(request: AnalysisRequest) -> AnalysisResultResponse:
    """Estimate, recommend and size the next bet for a hand snapshot."""
    if request.shoe is None:
        shoe = Shoe.fresh(config.table.num_decks)
    else:
        shoe = Shoe.from_counts(request.shoe, config.table.num_decks)

    analysis = analyze(
        request.player_cards,
        request.dealer_up_card,
        shoe,
        request.bankroll,
    )
    return AnalysisResultResponse(
        player_hand=HandValueResponse.from_value(evaluate(request.player_cards)),
        cards_remaining=shoe.remaining_total,
        analysis=AnalysisResponse.from_analysis(analysis),
    )
