from __future__ import annotations

from typing import Dict, Iterable, Tuple

from holdem.core.card import parse_cards
from holdem.core.game import Round


def rig(rnd: Round, hands: Dict[str, str], board: str = "") -> None:
    """
    Give players known hole cards and put `board` on top of the deck.

    Call right after deal(). The rigged cards are taken out of the rest of
    the deck so later draws never repeat them.
    """
    used = []
    for name, cards in hands.items():
        hole = parse_cards(cards)
        rnd.get_player(name).hole_cards = hole
        used.extend(hole)

    upcoming = parse_cards(board) if board else []
    used.extend(upcoming)
    rest = [c for c in rnd.deck.cards if c not in used]
    rnd.deck._cards = upcoming + rest


def perform_actions(rnd: Round, actions: Iterable[Tuple[str, str, int]]) -> None:
    """Apply a scripted sequence of (player, action, amount), failing loudly."""
    for name, action, amount in actions:
        result = rnd.take_action(action, amount, player=name)
        assert result.success, f"{name} {action} {amount}: {result.message}"


def check_down(rnd: Round) -> None:
    """Check (or call) every remaining action until the hand is over."""
    while rnd.is_hand_running():
        player = rnd.current_player
        owed = player.owes(rnd.current_bet)
        if owed:
            rnd.call(player.name)
        else:
            rnd.check(player.name)
