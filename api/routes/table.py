"""Table API endpoints: the card-entry surface's state, one session per table."""

from fastapi import APIRouter, HTTPException, Header
from typing import Annotated

from api.schemas import BetRequest, CardRequest, SettleRequest, TableStateResponse
from api.session import (
    create_session,
    default_table,
    extract_session_id,
    get_table_store,
)
from core.game import (
    HandResult,
    Seat,
    TableState,
    add_card,
    next_hand,
    remove_card,
    reset_shoe,
    set_bet,
    settle_hand,
)

router = APIRouter()

SessionHeader = Annotated[str, Header(alias="X-Session-ID")]


async def _get_table(session_id: str) -> TableState:
    """Load the session's table or fail with 404."""
    if extract_session_id(session_id) is None:
        raise HTTPException(status_code=404, detail="Unknown or expired session")
    table = await get_table_store().get(session_id)
    if table is None:
        raise HTTPException(status_code=404, detail="Unknown or expired session")
    return table


async def _save(session_id: str, table: TableState) -> TableStateResponse:
    await get_table_store().set(session_id, table)
    return TableStateResponse.from_table(table)


@router.post("/new")
async def new_session(
    session_id: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> dict[str, str]:
    """Open a table, or start the given session over."""
    if session_id is None or extract_session_id(session_id) is None:
        session_id = await create_session()
    else:
        await get_table_store().set(session_id, default_table())
    return {"session_id": session_id}


@router.get("/state")
async def get_state(session_id: SessionHeader) -> TableStateResponse:
    """Get the table and its current analysis."""
    return TableStateResponse.from_table(await _get_table(session_id))


@router.post("/cards")
async def deal_card(request: CardRequest, session_id: SessionHeader) -> TableStateResponse:
    """Enter a card drawn from the shoe."""
    table = await _get_table(session_id)
    return await _save(session_id, add_card(table, request.rank, Seat(request.target)))


@router.delete("/cards")
async def undo_card(request: CardRequest, session_id: SessionHeader) -> TableStateResponse:
    """Take back an entered card and return it to the shoe."""
    table = await _get_table(session_id)
    return await _save(
        session_id, remove_card(table, request.rank, Seat(request.target))
    )


@router.post("/bet")
async def change_bet(request: BetRequest, session_id: SessionHeader) -> TableStateResponse:
    """Change the bet size."""
    table = await _get_table(session_id)
    return await _save(session_id, set_bet(table, request.amount))


@router.post("/settle")
async def settle(request: SettleRequest, session_id: SessionHeader) -> TableStateResponse:
    """Declare the hand's result and settle the bankroll."""
    table = await _get_table(session_id)
    return await _save(session_id, settle_hand(table, HandResult(request.result)))


@router.post("/next-hand")
async def start_next_hand(session_id: SessionHeader) -> TableStateResponse:
    """Clear the cards and keep counting down the same shoe."""
    table = await _get_table(session_id)
    return await _save(session_id, next_hand(table))


@router.post("/reset")
async def reset(session_id: SessionHeader) -> TableStateResponse:
    """Replace the shoe with a fresh one."""
    table = await _get_table(session_id)
    return await _save(session_id, reset_shoe(table))
