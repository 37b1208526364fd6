"""
Random and calling agents.

Simple baselines that are handy for simulations and for exercising the
round engine with long random action sequences.
"""

import random
from typing import Any, Dict, List, Optional

from holdem.agents.base import BaseAgent, find_action


class RandomAgent(BaseAgent):
    """
    An agent that selects random legal actions.

    The agent has configurable tendencies:
    - fold_probability: How likely to fold when facing a bet
    - bet_probability: How likely to bet/raise instead of checking/calling
    """

    def __init__(
        self,
        name: str,
        fold_probability: float = 0.1,
        bet_probability: float = 0.3,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(name)
        self.fold_probability = fold_probability
        self.bet_probability = bet_probability
        self._rng = rng or random.Random()

    def observe(self, game_state: Dict[str, Any]) -> None:
        """Random agent doesn't need to observe state."""
        pass

    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Select a random legal action, biased by the configured probabilities."""
        if not legal_actions:
            return {"action": "FOLD", "amount": 0}

        check = find_action(legal_actions, "CHECK")
        call = find_action(legal_actions, "CALL")
        bet = find_action(legal_actions, "BET")

        roll = self._rng.random()

        # Never fold when checking is free
        if check is None and roll < self.fold_probability:
            return {"action": "FOLD", "amount": 0}

        if bet and roll < self.fold_probability + self.bet_probability:
            # Bias towards smaller bets
            low, high = bet["min"], bet["max"]
            amount = self._rng.randint(low, max(low, (low + high) // 2))
            return {"action": "BET", "amount": amount}

        if check:
            return {"action": "CHECK", "amount": 0}
        if call:
            return {"action": "CALL", "amount": call["amount"]}

        return {"action": "FOLD", "amount": 0}


class CallAgent(BaseAgent):
    """An agent that always checks or calls, folding only when it cannot cover."""

    def observe(self, game_state: Dict[str, Any]) -> None:
        pass

    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        if find_action(legal_actions, "CHECK"):
            return {"action": "CHECK", "amount": 0}

        call = find_action(legal_actions, "CALL")
        if call:
            return {"action": "CALL", "amount": call["amount"]}

        return {"action": "FOLD", "amount": 0}
