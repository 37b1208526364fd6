"""
Player and PlayerRegistry for Holdem.

Manages player state including:
- Chips (stack)
- Hole cards
- Chips put in on the current street and over the whole hand
- Per-hand flags (folded, acted this street)

The registry is the ordered seat list. Seat order is turn order and
never changes while a hand is running.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from holdem.core.card import Card
from holdem.core.errors import DuplicatePlayer, InsufficientChips, TableFull, UnknownPlayer
from holdem.core.rules import MAX_PLAYERS, MIN_PLAYERS


@dataclass
class Player:
    """
    A player seated at the table.

    Attributes:
        name: Unique identifier for the player
        chips: Current chip count
        hole_cards: The player's private cards (0 or 2)
        folded: Out of the current hand
        acted: Has acted on the current street
        street_bet: Chips put in on the current street
        committed: Chips put in over the whole hand
    """
    name: str
    chips: int
    hole_cards: List[Card] = field(default_factory=list)
    folded: bool = False
    acted: bool = False
    street_bet: int = 0
    committed: int = 0

    def reset_for_new_hand(self) -> None:
        """Reset player state for a new hand."""
        self.hole_cards = []
        self.folded = False
        self.acted = False
        self.street_bet = 0
        self.committed = 0

    def reset_for_new_street(self) -> None:
        """Reset player state for a new betting street."""
        self.acted = False
        self.street_bet = 0

    def commit(self, amount: int) -> None:
        """
        Move `amount` chips from the stack into the pot.

        Raises:
            InsufficientChips: If the stack cannot cover it; nothing changes.
        """
        if amount > self.chips:
            raise InsufficientChips(
                f"{self.name} has {self.chips} chips, needs {amount}"
            )
        self.chips -= amount
        self.street_bet += amount
        self.committed += amount

    def owes(self, current_bet: int) -> int:
        """Chips still needed to match the current bet on this street."""
        return max(0, current_bet - self.street_bet)

    @property
    def in_hand(self) -> bool:
        """Still contesting the pot."""
        return not self.folded and bool(self.hole_cards)

    def to_dict(self, show_cards: bool = False) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            show_cards: If True, include hole cards
        """
        result = {
            "name": self.name,
            "chips": self.chips,
            "folded": self.folded,
            "acted": self.acted,
            "street_bet": self.street_bet,
            "committed": self.committed,
        }

        if show_cards:
            result["hand"] = [card.to_dict() for card in self.hole_cards]

        return result

    def __repr__(self) -> str:
        return (
            f"Player({self.name}, chips={self.chips}, "
            f"bet={self.street_bet}, folded={self.folded})"
        )

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hole_cards) if self.hole_cards else "??"
        return f"Player {self.name} [{cards_str}] ${self.chips}"


class PlayerRegistry:
    """Ordered roster of seated players."""

    def __init__(self, max_players: int = MAX_PLAYERS):
        # Two hole cards each plus the board must fit in one deck
        if not MIN_PLAYERS <= max_players <= MAX_PLAYERS:
            raise ValueError(f"max_players must be between {MIN_PLAYERS} and {MAX_PLAYERS}, got {max_players}")
        self.max_players = max_players
        self._players: List[Player] = []

    def add(self, name: str, chips: int) -> int:
        """
        Seat a new player at the end of the seat list.

        Returns:
            The new player's seat index
        """
        if chips < 0:
            raise ValueError(f"Starting chips must be non-negative, got {chips}")
        if self.find(name) is not None:
            raise DuplicatePlayer(f"Player {name} is already seated")
        if len(self._players) >= self.max_players:
            raise TableFull(f"Table is full ({self.max_players} seats)")

        self._players.append(Player(name=name, chips=chips))
        return len(self._players) - 1

    def remove(self, name: str) -> Player:
        """Unseat a player, returning them."""
        player = self.get(name)
        self._players.remove(player)
        return player

    def find(self, name: str) -> Optional[Player]:
        for player in self._players:
            if player.name == name:
                return player
        return None

    def get(self, name: str) -> Player:
        player = self.find(name)
        if player is None:
            raise UnknownPlayer(f"No player named {name}")
        return player

    def seat_of(self, name: str) -> int:
        return self._players.index(self.get(name))

    def funded(self) -> List[Player]:
        """Players with chips to play a hand."""
        return [p for p in self._players if p.chips > 0]

    def contenders(self) -> List[Player]:
        """Players still in the current hand, in seat order."""
        return [p for p in self._players if p.in_hand]

    def next_seat(self, start: int, needs_action) -> Optional[int]:
        """
        Find the next seat after `start`, circularly, whose player is still in
        the hand and satisfies `needs_action`. Returns None after a full
        circuit without finding a different seat.
        """
        count = len(self._players)
        for step in range(1, count):
            index = (start + step) % count
            player = self._players[index]
            if player.in_hand and needs_action(player):
                return index
        return None

    def first_seat(self, needs_action) -> Optional[int]:
        """Lowest seat whose player is in the hand and satisfies `needs_action`."""
        for index, player in enumerate(self._players):
            if player.in_hand and needs_action(player):
                return index
        return None

    @property
    def total_chips(self) -> int:
        return sum(p.chips for p in self._players)

    def __getitem__(self, index: int) -> Player:
        return self._players[index]

    def __iter__(self) -> Iterator[Player]:
        return iter(self._players)

    def __len__(self) -> int:
        return len(self._players)
