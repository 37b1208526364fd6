"""
Base Agent Interface for Holdem.

This module defines the abstract base class for automated players. An
agent sees the same snapshot a remote client would and answers with one
of the legal actions.

Usage:
    class MyAgent(BaseAgent):
        def observe(self, game_state):
            pass

        def act(self, game_state, legal_actions):
            return {"action": "CALL", "amount": 0}
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class BaseAgent(ABC):
    """
    Abstract base class for poker agents.

    Attributes:
        name: The seated player's name this agent plays for
    """

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def observe(self, game_state: Dict[str, Any]) -> None:
        """
        Observe the current game state.

        Called before every decision with the snapshot seen from this
        agent's seat (its own hole cards included).
        """
        pass

    @abstractmethod
    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """
        Choose an action given the current game state.

        Args:
            game_state: Round snapshot for this agent
            legal_actions: List of legal action dicts, each containing:
                - type: FOLD, CHECK, CALL or BET
                - amount: Chips owed (for CALL)
                - min/max: Valid street totals (for BET)

        Returns:
            Action dictionary, e.g. {"action": "BET", "amount": 100}
        """
        pass

    def on_hand_end(self, result: Dict[str, Any]) -> None:
        """
        Called when a hand ends with the final snapshot.

        Override to learn from results.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"


def find_action(legal_actions: List[Dict[str, Any]], action_type: str) -> Optional[Dict[str, Any]]:
    """Return the legal action dict of the given type, if any."""
    return next((a for a in legal_actions if a["type"] == action_type), None)
