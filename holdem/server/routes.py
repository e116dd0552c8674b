"""
HTTP API Routes for Holdem.

Single table: the human plays through these routes, the agents play from
a background task that the action routes schedule.
"""

from typing import Any, Dict, Optional
from fastapi import APIRouter, HTTPException, Request

from holdem.core.errors import PokerError
from holdem.core.rules import PlayerAction
from holdem.server.schemas import (
    ActionRequest, ActionResultSchema, OpponentRangeSchema,
    RecommendationSchema, TableStateSchema,
)
from holdem.server.session import TableSession
from holdem.server.settings import SettingsStore, TableSettings

router = APIRouter()


def get_session(request: Request) -> TableSession:
    """Get the table session owned by the application."""
    return request.app.state.session


def get_store(request: Request) -> SettingsStore:
    return request.app.state.settings_store


def _fail(error: PokerError) -> HTTPException:
    # Bad setup is the caller's fault; a wrong stage is a state conflict
    status = 400 if isinstance(error, ValueError) else 409
    return HTTPException(status_code=status, detail=error.message)


def _play_agents(session: TableSession) -> bool:
    """
    Play the agents inline when pacing is off.

    Returns True when the caller should schedule the paced agent task instead.
    """
    if session.settings.ai_action_delay > 0:
        return True
    session.run_until_human()
    return False


@router.get("/state", response_model=TableStateSchema)
async def get_state(request: Request) -> Dict[str, Any]:
    """Get the table as seen from the human seat."""
    session = get_session(request)
    async with session.lock:
        return session.snapshot()


@router.post("/hands", response_model=TableStateSchema)
async def start_hand(request: Request) -> Dict[str, Any]:
    """
    Start a new hand.

    Deals cards, posts blinds and lets the agents act until the human is due.
    """
    session = get_session(request)
    async with session.lock:
        if not session.can_start_hand:
            raise HTTPException(
                status_code=409, detail=f"Cannot start a new hand during {session.engine.state.name}"
            )

    await session.cancel_agents()
    async with session.lock:
        try:
            session.start_new_hand()
        except PokerError as e:
            if session.engine.is_hand_running():
                session.schedule_agents()
            raise _fail(e)
        paced = _play_agents(session)
        state = session.snapshot()

    if paced:
        session.schedule_agents()
    return state


@router.post("/actions", response_model=ActionResultSchema)
async def take_action(req: ActionRequest, request: Request) -> Dict[str, Any]:
    """
    Take the human's action.

    Illegal actions come back with success=false and change nothing.
    """
    session = get_session(request)

    try:
        action = PlayerAction(req.action_type.upper())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid action type: {req.action_type}")

    async with session.lock:
        result = session.submit_action(action, req.amount or 0)
        paced = result.success and _play_agents(session)
        response: Dict[str, Any] = {
            "success": result.success,
            "message": result.message,
            "action_type": result.action.value if result.action else None,
            "amount": result.amount,
        }
        if result.success:
            response["table"] = session.snapshot()

    if paced:
        session.schedule_agents()
    return response


@router.get("/recommendation", response_model=Optional[RecommendationSchema])
async def get_recommendation(request: Request) -> Optional[Dict[str, Any]]:
    """Betting hint for the human, or null when none applies."""
    session = get_session(request)
    async with session.lock:
        recommendation = session.recommendation()
    return recommendation.to_dict() if recommendation else None


@router.get("/ranges", response_model=Dict[str, OpponentRangeSchema])
async def get_ranges(request: Request) -> Dict[str, Any]:
    """Estimated ranges of the opponents still in the hand."""
    session = get_session(request)
    async with session.lock:
        return session.opponent_ranges()


@router.get("/settings", response_model=TableSettings)
async def get_settings(request: Request) -> TableSettings:
    return get_session(request).settings


@router.put("/settings", response_model=TableSettings)
async def update_settings(settings: TableSettings, request: Request) -> TableSettings:
    """Validate, apply and persist new table settings."""
    session = get_session(request)
    async with session.lock:
        session.update_settings(settings)
    get_store(request).save(settings)
    return settings
