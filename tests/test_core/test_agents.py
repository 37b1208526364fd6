"""
Tests for agents and the hand runner.
"""

import random

import pytest
from holdem.agents import BaseAgent, CallAgent, RandomAgent, play_hand
from holdem.core.errors import NotEnoughPlayers
from holdem.core.game import Round
from holdem.core.rules import GamePhase


class RecordingAgent(CallAgent):
    """Call agent that keeps every snapshot it is shown."""

    def __init__(self, name):
        super().__init__(name)
        self.seen = []
        self.results = []

    def observe(self, game_state):
        self.seen.append(game_state)

    def on_hand_end(self, result):
        self.results.append(result)


class BadAgent(BaseAgent):
    """Always tries to check, even facing a bet."""

    def observe(self, game_state):
        pass

    def act(self, game_state, legal_actions):
        return {"action": "CHECK", "amount": 0}


def seat_all(rnd, agents):
    for agent in agents:
        rnd.add_player(agent.name, 1000)
    return {agent.name: agent for agent in agents}


class TestPlayHand:
    """Tests for driving hands with agents."""

    def test_call_agents_reach_showdown(self, three_player_round):
        agents = {name: CallAgent(name) for name in ("alice", "bob", "carol")}
        payouts = play_hand(three_player_round, agents)

        assert three_player_round.phase == GamePhase.COMPLETE
        assert len(three_player_round.community_cards) == 5
        assert payouts
        assert all(p.hand is not None for p in payouts)

    def test_agents_see_only_their_cards(self, two_player_round):
        alice, bob = RecordingAgent("alice"), RecordingAgent("bob")
        play_hand(two_player_round, {"alice": alice, "bob": bob})

        for state in alice.seen:
            mine, theirs = state["players"]
            assert "hand" in mine
            assert "hand" not in theirs
        assert alice.results and bob.results
        assert alice.results[-1]["phase"] == "COMPLETE"

    def test_illegal_action_becomes_fold(self, two_player_round):
        agents = {"alice": RandomAgent("alice", fold_probability=0, bet_probability=1,
                                       rng=random.Random(1)),
                  "bob": BadAgent("bob")}
        payouts = play_hand(two_player_round, agents)

        assert two_player_round.get_player("bob").folded
        assert [p.name for p in payouts] == ["alice"]

    @pytest.mark.parametrize("seed", range(5))
    def test_random_hands_conserve_chips(self, seed):
        rng = random.Random(seed)
        rnd = Round(rng=random.Random(seed + 100))
        agents = seat_all(rnd, [RandomAgent(n, rng=rng) for n in ("a", "b", "c", "d")])

        for _ in range(50):
            try:
                play_hand(rnd, agents)
            except NotEnoughPlayers:
                break
            assert rnd.phase == GamePhase.COMPLETE
            assert rnd.pot == sum(p.committed for p in rnd.players)
            assert sum(w.amount for w in rnd.winners) == rnd.pot
            assert rnd.players.total_chips == 4000
            assert all(p.chips >= 0 for p in rnd.players)
