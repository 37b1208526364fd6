"""
Tests for the lock-guarded Table.
"""

import threading

import pytest
from holdem.core.errors import NotPlayersTurn
from holdem.core.game import Round
from holdem.core.table import Table


class TestTable:
    """Tests for serialized access to a round."""

    def test_acquire_yields_round(self):
        rnd = Round()
        table = Table("t1", rnd)
        with table.acquire() as inside:
            assert inside is rnd
            assert table.locked
        assert not table.locked

    def test_lock_released_after_error(self):
        table = Table("t1")
        with table.acquire() as rnd:
            rnd.add_player("alice", 1000)
            rnd.add_player("bob", 1000)
            rnd.deal()

        with pytest.raises(NotPlayersTurn):
            with table.acquire() as rnd:
                rnd.check("bob")
        assert not table.locked

    def test_apply_returns_result(self):
        table = Table("t1")
        seat = table.apply(lambda rnd: rnd.add_player("alice", 1000))
        assert seat == 0

    def test_concurrent_seating(self):
        table = Table("t1", Round(max_players=20))
        names = [f"p{i}" for i in range(20)]

        def seat(name):
            table.apply(lambda rnd: rnd.add_player(name, 100))

        threads = [threading.Thread(target=seat, args=(n,)) for n in names]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        with table.acquire() as rnd:
            assert sorted(p.name for p in rnd.players) == sorted(names)
            assert rnd.players.total_chips == 2000

    def test_repr(self):
        assert repr(Table("room-7")) == "Table(room-7)"
