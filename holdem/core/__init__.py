"""
Holdem Core - Pure Python Poker Round Logic

This module contains all game logic without any network dependencies.
"""

from holdem.core.card import Card, Deck, Rank, Suit, new_deck
from holdem.core.errors import PokerError
from holdem.core.player import Player, PlayerRegistry
from holdem.core.hand import HandCategory, HandRank, Ordering, compare, evaluate, evaluate_best
from holdem.core.game import Round, Payout, ActionResult, new_round
from holdem.core.rules import GamePhase, Street, ActionType
from holdem.core.table import Table

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "new_deck",
    "PokerError",
    "Player",
    "PlayerRegistry",
    "HandCategory",
    "HandRank",
    "Ordering",
    "compare",
    "evaluate",
    "evaluate_best",
    "Round",
    "Payout",
    "ActionResult",
    "new_round",
    "GamePhase",
    "Street",
    "ActionType",
    "Table",
]
