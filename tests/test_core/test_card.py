"""
Tests for Card and Deck classes.
"""

import random

import pytest
from holdem.core.card import (
    Card, Deck, Rank, Suit, RANK_VALUES, draw, new_deck, parse_cards, shuffle,
)
from holdem.core.errors import DeckExhausted


class TestCard:
    """Tests for Card class."""

    def test_card_creation(self):
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_card_from_string(self):
        """Test creating cards from string notation."""
        card1 = Card.from_string("As")
        assert card1 == Card(Rank.ACE, Suit.SPADES)

        # With symbol
        card2 = Card.from_string("K♥")
        assert card2 == Card(Rank.KING, Suit.HEARTS)

        # Ten, both spellings
        assert Card.from_string("Td") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("10d") == Card(Rank.TEN, Suit.DIAMONDS)

    @pytest.mark.parametrize("bad", ["", "A", "1s", "Ax", "11h"])
    def test_invalid_card_string(self, bad):
        with pytest.raises(ValueError):
            Card.from_string(bad)

    def test_card_is_immutable(self):
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_equality_and_hash(self):
        card1 = Card(Rank.ACE, Suit.SPADES)
        card2 = Card(Rank.ACE, Suit.SPADES)
        card3 = Card(Rank.KING, Suit.SPADES)

        assert card1 == card2
        assert card1 != card3
        assert len({card1, card2, card3}) == 2

    def test_card_str(self):
        assert str(Card(Rank.ACE, Suit.SPADES)) == "A♠"
        assert str(Card(Rank.TEN, Suit.HEARTS)) == "10♥"
        assert Card(Rank.ACE, Suit.SPADES).short_str == "As"

    def test_card_color(self):
        assert Card(Rank.ACE, Suit.SPADES).color == "black"
        assert Card(Rank.KING, Suit.HEARTS).color == "red"

    def test_card_to_dict(self):
        assert Card(Rank.QUEEN, Suit.DIAMONDS).to_dict() == {
            "rank": "Q",
            "suit": "♦",
            "text": "Q♦",
            "color": "red",
        }

    def test_rank_values_are_explicit(self):
        """Evaluator order comes from the value table, Ace high."""
        assert RANK_VALUES[Rank.TWO] == 2
        assert RANK_VALUES[Rank.TEN] == 10
        assert RANK_VALUES[Rank.JACK] == 11
        assert RANK_VALUES[Rank.ACE] == 14
        assert sorted(RANK_VALUES.values()) == list(range(2, 15))

    def test_parse_cards(self):
        cards = parse_cards("As 10h T♦ 2c")
        assert [c.short_str for c in cards] == ["As", "10h", "10d", "2c"]


class TestDeck:
    """Tests for Deck class."""

    def test_new_deck_has_52_unique_cards(self):
        deck = new_deck()
        assert len(deck) == 52
        assert len(set(deck.cards)) == 52
        assert {(c.suit, c.rank) for c in deck.cards} == {(s, r) for s in Suit for r in Rank}

    def test_shuffle_preserves_cards(self, unshuffled_deck):
        before = sorted(unshuffled_deck.cards, key=Card.sort_key)
        shuffle(unshuffled_deck)
        after = sorted(unshuffled_deck.cards, key=Card.sort_key)
        assert before == after

    def test_shuffle_changes_order(self):
        deck = Deck(rng=random.Random(7))
        original = deck.cards
        deck.shuffle()
        assert deck.cards != original

    def test_seeded_shuffle_is_reproducible(self):
        deck1 = Deck(rng=random.Random(42))
        deck2 = Deck(rng=random.Random(42))
        deck1.shuffle()
        deck2.shuffle()
        assert deck1.cards == deck2.cards

    def test_draw_takes_top_card(self, deck):
        top = deck.cards[0]
        assert draw(deck) == top
        assert deck.remaining == 51
        assert top not in deck.cards

    def test_draw_until_exhausted(self, deck):
        drawn = [deck.draw() for _ in range(52)]
        assert len(set(drawn)) == 52
        assert deck.remaining == 0

        with pytest.raises(DeckExhausted):
            deck.draw()

    def test_deal_multiple(self, deck):
        cards = deck.deal(5)
        assert len(cards) == 5
        assert deck.remaining == 47

    def test_deal_too_many_draws_nothing(self, deck):
        deck.deal(50)
        with pytest.raises(DeckExhausted):
            deck.deal(3)
        assert deck.remaining == 2
