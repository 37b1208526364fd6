"""
Tests for Player and PlayerRegistry.
"""

import pytest
from holdem.core.card import parse_cards
from holdem.core.errors import DuplicatePlayer, InsufficientChips, TableFull, UnknownPlayer
from holdem.core.player import Player, PlayerRegistry
from holdem.core.rules import MAX_PLAYERS


class TestPlayer:
    """Tests for Player state."""

    def test_commit_moves_chips(self):
        player = Player(name="alice", chips=1000)
        player.commit(100)
        player.commit(50)

        assert player.chips == 850
        assert player.street_bet == 150
        assert player.committed == 150

    def test_commit_too_much_changes_nothing(self):
        player = Player(name="alice", chips=100)
        with pytest.raises(InsufficientChips):
            player.commit(101)

        assert player.chips == 100
        assert player.street_bet == 0
        assert player.committed == 0

    def test_commit_whole_stack(self):
        player = Player(name="alice", chips=100)
        player.commit(100)
        assert player.chips == 0

    def test_owes(self):
        player = Player(name="alice", chips=1000)
        player.commit(40)
        assert player.owes(100) == 60
        assert player.owes(40) == 0
        assert player.owes(0) == 0

    def test_street_reset_keeps_hand_total(self):
        player = Player(name="alice", chips=1000)
        player.commit(40)
        player.acted = True
        player.reset_for_new_street()

        assert player.street_bet == 0
        assert player.committed == 40
        assert not player.acted

    def test_hand_reset(self):
        player = Player(name="alice", chips=1000, hole_cards=parse_cards("As Kd"))
        player.folded = True
        player.commit(40)
        player.reset_for_new_hand()

        assert player.hole_cards == []
        assert not player.folded
        assert player.committed == 0
        assert player.chips == 960

    def test_in_hand_needs_cards(self):
        player = Player(name="alice", chips=1000)
        assert not player.in_hand
        player.hole_cards = parse_cards("As Kd")
        assert player.in_hand
        player.folded = True
        assert not player.in_hand

    def test_to_dict_hides_cards_by_default(self):
        player = Player(name="alice", chips=1000, hole_cards=parse_cards("As Kd"))
        assert "hand" not in player.to_dict()
        assert [c["text"] for c in player.to_dict(show_cards=True)["hand"]] == ["A♠", "K♦"]


class TestPlayerRegistry:
    """Tests for the seat list."""

    def test_add_returns_seat_index(self):
        registry = PlayerRegistry()
        assert registry.add("alice", 1000) == 0
        assert registry.add("bob", 500) == 1
        assert [p.name for p in registry] == ["alice", "bob"]

    def test_duplicate_name(self):
        registry = PlayerRegistry()
        registry.add("alice", 1000)
        with pytest.raises(DuplicatePlayer):
            registry.add("alice", 500)

    def test_negative_chips(self):
        with pytest.raises(ValueError):
            PlayerRegistry().add("alice", -1)

    def test_zero_chips_allowed(self):
        registry = PlayerRegistry()
        registry.add("alice", 0)
        assert registry.funded() == []

    def test_table_full(self):
        registry = PlayerRegistry(max_players=2)
        registry.add("alice", 10)
        registry.add("bob", 10)
        with pytest.raises(TableFull):
            registry.add("carol", 10)

    @pytest.mark.parametrize("seats", [1, MAX_PLAYERS + 1])
    def test_seat_limit_out_of_range(self, seats):
        with pytest.raises(ValueError):
            PlayerRegistry(max_players=seats)

    def test_remove(self):
        registry = PlayerRegistry()
        registry.add("alice", 1000)
        registry.add("bob", 1000)
        registry.remove("alice")
        assert registry.seat_of("bob") == 0

        with pytest.raises(UnknownPlayer):
            registry.remove("alice")

    def test_next_seat_skips_folded_and_wraps(self):
        registry = PlayerRegistry()
        for name in ("a", "b", "c", "d"):
            registry.add(name, 100)
        for player in registry:
            player.hole_cards = parse_cards("2c 3d")
        registry[3].folded = True

        assert registry.next_seat(1, lambda p: True) == 2
        assert registry.next_seat(2, lambda p: True) == 0

    def test_next_seat_none_after_full_circuit(self):
        registry = PlayerRegistry()
        for name in ("a", "b", "c"):
            registry.add(name, 100)
        for player in registry:
            player.hole_cards = parse_cards("2c 3d")
        registry[1].folded = True
        registry[2].folded = True

        assert registry.next_seat(0, lambda p: True) is None
