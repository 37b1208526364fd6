"""
Pytest configuration and shared fixtures for Holdem tests.
"""

import random

import pytest
from holdem.core.card import Card, Deck, Rank, Suit
from holdem.core.game import Round


@pytest.fixture
def deck():
    """Create a fresh shuffled deck."""
    d = Deck()
    d.shuffle()
    return d


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck()


@pytest.fixture
def seeded_rng():
    """Deterministic randomness for reproducible deals."""
    return random.Random(1234)


@pytest.fixture
def two_player_round(seeded_rng):
    """Round with two seated players, 1000 chips each, not yet dealt."""
    rnd = Round(rng=seeded_rng)
    rnd.add_player("alice", 1000)
    rnd.add_player("bob", 1000)
    return rnd


@pytest.fixture
def three_player_round(seeded_rng):
    """Round with three seated players, 1000 chips each, not yet dealt."""
    rnd = Round(rng=seeded_rng)
    for name in ("alice", "bob", "carol"):
        rnd.add_player(name, 1000)
    return rnd


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.TWO, Suit.HEARTS),
        Card(Rank.THREE, Suit.DIAMONDS),
        Card(Rank.FOUR, Suit.CLUBS),
        Card(Rank.FIVE, Suit.SPADES),
    ]
