"""
WebSocket handling for real-time table communication.

This module provides:
- GameRoom: one lock-guarded Table plus its connected clients
- RoomManager: creates and looks up rooms, handles client messages
- WebSocket endpoint: join a room, then sit / deal / act / get_state

Every message that touches a round runs inside `table.acquire()`.
Snapshots are taken under the lock; sending happens after it is released.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from holdem.core.errors import PokerError
from holdem.core.game import Round
from holdem.core.rules import ActionType
from holdem.core.table import Table
from holdem.server.schemas import WSActionMessage, WSErrorMessage, WSJoinMessage, WSSitMessage


logger = logging.getLogger(__name__)


def error_frame(code: str, message: str) -> Dict[str, Any]:
    return WSErrorMessage(code=code, message=message).to_frame()


@dataclass
class GameRoom:
    """A table room with its round and connected players."""
    room_id: str
    table: Table
    connections: Dict[str, WebSocket] = field(default_factory=dict)

    async def broadcast(self, message: Dict[str, Any], exclude: Optional[str] = None):
        """Broadcast a message to all connected players."""
        for player_id, ws in list(self.connections.items()):
            if player_id != exclude:
                try:
                    await ws.send_json(message)
                except Exception as e:
                    logger.error(f"Error sending to {player_id}: {e}")

    async def send_state_to_all(self):
        """Send each connected player the snapshot seen from their seat."""
        with self.table.acquire() as rnd:
            states = {pid: rnd.snapshot(viewer=pid) for pid in self.connections}

        for player_id, state in states.items():
            ws = self.connections.get(player_id)
            if ws is None:
                continue
            try:
                await ws.send_json({"type": "state", **state})
            except Exception as e:
                logger.error(f"Error sending state to {player_id}: {e}")

    async def send_result(self, snapshot: Dict[str, Any]):
        """Send the hand result to all players."""
        await self.broadcast({
            "type": "result",
            "hand_number": snapshot["hand_number"],
            "winners": snapshot["winners"],
            "pot": snapshot["pot"],
            "community_cards": snapshot["community_cards"],
            "players": snapshot["players"],
        })


class RoomManager:
    """
    Manages table rooms and player connections.

    Usage:
        manager = RoomManager()
        room_id = manager.create_room()
        await manager.connect(room_id, player_id, websocket)
        await manager.handle_message(room_id, player_id, message)
        await manager.disconnect(room_id, player_id)
    """

    def __init__(self):
        self.rooms: Dict[str, GameRoom] = {}
        self._room_counter = 0

    def create_room(self, room_id: Optional[str] = None) -> str:
        """Create a new room and return its id."""
        if room_id is None:
            self._room_counter += 1
            room_id = f"room-{self._room_counter}"
        if room_id in self.rooms:
            raise ValueError(f"Room {room_id} already exists")

        self.rooms[room_id] = GameRoom(room_id=room_id, table=Table(room_id, Round()))
        logger.info(f"Created room {room_id}")
        return room_id

    def get_room(self, room_id: str) -> Optional[GameRoom]:
        """Get a room by ID."""
        return self.rooms.get(room_id)

    def get_or_create_room(self, room_id: str) -> GameRoom:
        room = self.get_room(room_id)
        if room is None:
            self.create_room(room_id)
            room = self.rooms[room_id]
        return room

    def clear(self) -> None:
        self.rooms.clear()
        self._room_counter = 0

    async def connect(self, room_id: str, player_id: str, websocket: WebSocket) -> GameRoom:
        """Register an accepted connection and send it the current state."""
        room = self.get_or_create_room(room_id)
        room.connections[player_id] = websocket
        logger.info(f"Player {player_id} connected to {room_id}")

        with room.table.acquire() as rnd:
            state = rnd.snapshot(viewer=player_id)
        await websocket.send_json({"type": "state", **state})

        await room.broadcast(
            {"type": "player_joined", "player_id": player_id},
            exclude=player_id
        )
        return room

    async def disconnect(self, room_id: str, player_id: str):
        """Disconnect a player from a room."""
        room = self.get_room(room_id)
        if room and player_id in room.connections:
            del room.connections[player_id]
            logger.info(f"Player {player_id} disconnected from {room_id}")

            await room.broadcast({
                "type": "player_left",
                "player_id": player_id
            })

    async def handle_message(
        self,
        room_id: str,
        player_id: str,
        message: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Handle a message from a player.

        Returns:
            Response frame for the sender
        """
        room = self.get_room(room_id)
        if room is None:
            return error_frame("ROOM_NOT_FOUND", "Room not found")

        msg_type = message.get("type", "")

        try:
            if msg_type == "action":
                return await self._handle_action(room, player_id, WSActionMessage(**message))
            elif msg_type == "sit":
                return await self._handle_sit(room, player_id, WSSitMessage(**message))
            elif msg_type == "deal":
                return await self._handle_deal(room)
            elif msg_type == "get_state":
                return self._handle_get_state(room, player_id)
            else:
                return error_frame("UNKNOWN_MESSAGE", f"Unknown message type: {msg_type}")
        except ValidationError as e:
            return error_frame("INVALID_MESSAGE", str(e))
        except PokerError as e:
            logger.debug(f"{player_id} in {room_id}: {e.code} {e.message}")
            return error_frame(e.code, e.message)

    async def _handle_action(
        self,
        room: GameRoom,
        player_id: str,
        message: WSActionMessage
    ) -> Dict[str, Any]:
        """Handle a game action from a player."""
        action_str = message.action.upper()
        try:
            action_type = ActionType(action_str)
        except ValueError:
            return error_frame("UNKNOWN_ACTION", f"Invalid action: {action_str}")

        with room.table.acquire() as rnd:
            result = rnd.take_action(action_type, message.amount, player=player_id)
            hand_over = result.success and not rnd.is_hand_running()
            final = rnd.snapshot() if hand_over else None

        if not result.success:
            return error_frame(result.error or "ACTION_FAILED", result.message)

        await room.send_state_to_all()
        if final is not None:
            await room.send_result(final)

        return {
            "type": "action_result",
            "success": True,
            "action": action_str,
            "amount": result.amount
        }

    async def _handle_sit(self, room: GameRoom, player_id: str, message: WSSitMessage) -> Dict[str, Any]:
        """Seat the connected player."""
        with room.table.acquire() as rnd:
            seat = rnd.add_player(player_id, message.chips)

        await room.send_state_to_all()
        return {"type": "seated", "seat": seat, "chips": message.chips}

    async def _handle_deal(self, room: GameRoom) -> Dict[str, Any]:
        """Handle starting a new hand."""
        with room.table.acquire() as rnd:
            rnd.deal()
            hand_number = rnd.hand_number

        await room.send_state_to_all()
        return {"type": "hand_started", "hand_number": hand_number}

    def _handle_get_state(self, room: GameRoom, player_id: str) -> Dict[str, Any]:
        """Handle a state request."""
        with room.table.acquire() as rnd:
            state = rnd.snapshot(viewer=player_id)
        return {"type": "state", **state}


# Room registry shared by the HTTP routes and the WebSocket endpoint
room_manager = RoomManager()


async def websocket_endpoint(websocket: WebSocket):
    """
    WebSocket endpoint for table communication.

    Protocol:
    1. Client connects and sends: {"type": "join", "room_id": "...", "player_id": "..."}
    2. Server sends the table state
    3. Client sends {"type": "sit", "chips": 1000}, {"type": "deal"},
       {"type": "action", "action": "CALL", "amount": 0} or {"type": "get_state"}
    4. Server replies to the sender and broadcasts state updates
    """
    room_id: Optional[str] = None
    player_id: Optional[str] = None

    try:
        await websocket.accept()
        raw = await websocket.receive_json()

        try:
            join = WSJoinMessage(**raw)
        except (ValidationError, TypeError):
            join = None
        if join is None or join.type != "join":
            await websocket.send_json(error_frame("JOIN_REQUIRED", "First message must be join with room_id and player_id"))
            await websocket.close()
            return

        room_id, player_id = join.room_id, join.player_id
        await room_manager.connect(room_id, player_id, websocket)

        # Message loop
        while True:
            message = await websocket.receive_json()
            response = await room_manager.handle_message(room_id, player_id, message)
            await websocket.send_json(response)

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected: {player_id}")
    except Exception as e:
        logger.error(f"WebSocket error: {e}")
    finally:
        if room_id and player_id:
            await room_manager.disconnect(room_id, player_id)
