"""
Holdem - Poker Round Engine

A Texas Hold'em style round engine with:
- Pure Python game core (dealing, betting streets, showdown, split pots)
- A hand evaluator for 5-7 cards
- FastAPI + WebSocket server with lock-guarded tables
- Agent interface for automated play

Usage:
    from holdem.core import Card, Deck, Round, evaluate_best
    from holdem.agents import BaseAgent, RandomAgent, play_hand
"""

__version__ = "0.1.0"

from holdem.core.card import Card, Deck
from holdem.core.player import Player
from holdem.core.game import Round, new_round
from holdem.core.hand import HandRank, evaluate, evaluate_best, compare
from holdem.core.table import Table

__all__ = [
    "Card",
    "Deck",
    "Player",
    "Round",
    "new_round",
    "HandRank",
    "evaluate",
    "evaluate_best",
    "compare",
    "Table",
    "__version__",
]
