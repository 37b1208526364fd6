"""
HTTP API Routes for Holdem.

These routes manage rooms, seating and dealing, and accept actions for
clients that do not hold a WebSocket. Connected WebSocket clients get a
state push after every successful change.
"""

from typing import Any, Dict, Optional
from fastapi import APIRouter, HTTPException

from holdem import __version__
from holdem.core.errors import (
    DuplicatePlayer, PokerError, RoundInProgress, TableFull, UnknownPlayer,
)
from holdem.server.schemas import (
    ActionRequest, ActionResultSchema, CreateRoomRequest, RoomInfoSchema,
    RoundStateSchema, SeatRequest,
)
from holdem.server.websocket import GameRoom, room_manager

router = APIRouter()


# Structural conflicts map to 409, missing things to 404, illegal moves to 400
CONFLICT_ERRORS = (RoundInProgress, DuplicatePlayer, TableFull)


def to_http_error(error: PokerError) -> HTTPException:
    if isinstance(error, CONFLICT_ERRORS):
        status = 409
    elif isinstance(error, UnknownPlayer):
        status = 404
    else:
        status = 400
    return HTTPException(status_code=status, detail={"error": error.code, "message": error.message})


def get_room(room_id: str) -> GameRoom:
    """Get a room or fail with 404."""
    room = room_manager.get_room(room_id)
    if room is None:
        raise HTTPException(status_code=404, detail=f"Room {room_id} not found")
    return room


def room_info(room: GameRoom) -> Dict[str, Any]:
    with room.table.acquire() as rnd:
        return {
            "room_id": room.room_id,
            "phase": rnd.phase.name,
            "hand_number": rnd.hand_number,
            "player_count": len(rnd.players),
            "connections": len(room.connections),
        }


@router.get("/")
async def index() -> Dict[str, Any]:
    """Service banner."""
    return {"service": "holdem", "version": __version__, "rooms": len(room_manager.rooms)}


@router.post("/rooms", response_model=RoomInfoSchema)
async def create_room(req: Optional[CreateRoomRequest] = None) -> Dict[str, Any]:
    """Create a new table room."""
    try:
        room_id = room_manager.create_room(req.room_id if req else None)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return room_info(room_manager.rooms[room_id])


@router.get("/rooms/{room_id}", response_model=RoomInfoSchema)
async def get_room_info(room_id: str) -> Dict[str, Any]:
    """Get room information."""
    return room_info(get_room(room_id))


@router.get("/rooms/{room_id}/state", response_model=RoundStateSchema)
async def get_state(room_id: str, viewer: Optional[str] = None) -> Dict[str, Any]:
    """
    Get the round snapshot.

    Hole cards are included only for `viewer` (or for everyone after a showdown).
    """
    room = get_room(room_id)
    with room.table.acquire() as rnd:
        return rnd.snapshot(viewer=viewer)


@router.post("/rooms/{room_id}/players")
async def seat_player(room_id: str, req: SeatRequest) -> Dict[str, Any]:
    """Seat a player between hands."""
    room = get_room(room_id)
    try:
        with room.table.acquire() as rnd:
            seat = rnd.add_player(req.name, req.chips)
    except PokerError as e:
        raise to_http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    await room.send_state_to_all()
    return {"success": True, "name": req.name, "seat": seat, "chips": req.chips}


@router.delete("/rooms/{room_id}/players/{name}")
async def remove_player(room_id: str, name: str) -> Dict[str, Any]:
    """Unseat a player between hands."""
    room = get_room(room_id)
    try:
        with room.table.acquire() as rnd:
            player = rnd.remove_player(name)
    except PokerError as e:
        raise to_http_error(e)

    await room.send_state_to_all()
    return {"success": True, "name": player.name, "chips": player.chips}


@router.post("/rooms/{room_id}/deal")
async def deal(room_id: str) -> Dict[str, Any]:
    """Start a new hand."""
    room = get_room(room_id)
    try:
        with room.table.acquire() as rnd:
            rnd.deal()
            hand_number = rnd.hand_number
            current = rnd.current_player.name
    except PokerError as e:
        raise to_http_error(e)

    await room.send_state_to_all()
    return {
        "success": True,
        "message": f"Hand #{hand_number} started",
        "hand_number": hand_number,
        "current_player": current,
    }


@router.post("/rooms/{room_id}/actions", response_model=ActionResultSchema)
async def take_action(room_id: str, req: ActionRequest) -> Dict[str, Any]:
    """
    Take a game action.

    Illegal actions come back with success=False and the error code;
    once the hand is over the response carries the winners.
    """
    room = get_room(room_id)

    with room.table.acquire() as rnd:
        result = rnd.take_action(req.action_type.upper(), req.amount, player=req.player)
        hand_over = result.success and not rnd.is_hand_running()
        final = rnd.snapshot() if hand_over else None

    response: Dict[str, Any] = {
        "success": result.success,
        "message": result.message,
        "action_type": result.action_type.value if result.action_type else None,
        "amount": result.amount,
        "error": result.error,
    }

    if result.success:
        await room.send_state_to_all()
    if final is not None:
        response["winners"] = final["winners"]
        await room.send_result(final)

    return response


@router.get("/rooms/{room_id}/legal_actions")
async def get_legal_actions(room_id: str) -> Dict[str, Any]:
    """Get legal actions for the player on turn."""
    room = get_room(room_id)
    with room.table.acquire() as rnd:
        current = rnd.current_player
        return {
            "player": current.name if current else None,
            "actions": rnd.get_legal_actions(),
        }
