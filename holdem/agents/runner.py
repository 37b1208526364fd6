"""
Drive a hand to completion with agents.

Each agent is looked up by the name of the player on turn, shown the
snapshot from that seat, and its answer is applied through
Round.take_action. An answer the round rejects is logged and replaced
by a fold, so a buggy agent can never stall the table.
"""

import logging
from typing import Dict, List

from holdem.agents.base import BaseAgent
from holdem.core.game import Payout, Round
from holdem.core.rules import ActionType


logger = logging.getLogger(__name__)

# Upper bound on actions in a single hand before giving up
MAX_ACTIONS_PER_HAND = 10_000


def play_hand(rnd: Round, agents: Dict[str, BaseAgent], deal: bool = True) -> List[Payout]:
    """
    Play one hand with the given agents.

    Args:
        rnd: The round to drive
        agents: Agent per seated player name
        deal: Deal a new hand first

    Returns:
        The payouts of the finished hand
    """
    if deal:
        rnd.deal()

    for _ in range(MAX_ACTIONS_PER_HAND):
        player = rnd.current_player
        if player is None:
            break

        agent = agents[player.name]
        state = rnd.snapshot(viewer=player.name)
        agent.observe(state)
        decision = agent.act(state, rnd.get_legal_actions())

        result = rnd.take_action(
            decision.get("action", ActionType.FOLD.value),
            decision.get("amount", 0),
            player=player.name,
        )
        if not result.success:
            logger.warning(f"{agent!r} chose an illegal action ({result.message}), folding")
            rnd.fold(player.name)
    else:
        raise RuntimeError(f"Hand #{rnd.hand_number} did not finish in {MAX_ACTIONS_PER_HAND} actions")

    final = rnd.snapshot(reveal=True)
    for agent in agents.values():
        agent.on_hand_end(final)

    return rnd.winners
