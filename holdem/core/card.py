"""
Card and Deck classes for Holdem.

Ranks are plain symbols (2-10, J, Q, K, A). Their strength order lives in
the explicit RANK_VALUES table, which only the hand evaluator consults;
nothing depends on the declaration order of the enums.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from holdem.core.errors import DeckExhausted


class Suit(Enum):
    """Card suits, valued by their symbol."""
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"
    SPADES = "♠"


class Rank(Enum):
    """Card ranks: numbers 2-10 and the four named faces."""
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"


# Total order used by the hand evaluator (Ace high; the wheel is special-cased there)
RANK_VALUES: Dict[Rank, int] = {
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 11,
    Rank.QUEEN: 12,
    Rank.KING: 13,
    Rank.ACE: 14,
}

VALUE_TO_RANK: Dict[int, Rank] = {v: k for k, v in RANK_VALUES.items()}

SUIT_CHARS = {
    Suit.HEARTS: "h",
    Suit.DIAMONDS: "d",
    Suit.CLUBS: "c",
    Suit.SPADES: "s",
}

# Reverse mappings
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {s.value: s for s in Suit}
TEXT_TO_RANK = {r.value: r for r in Rank}
TEXT_TO_RANK["T"] = Rank.TEN  # Also accept "T"


@dataclass(frozen=True)
class Card:
    """
    A playing card: an immutable (rank, suit) pair.

    Cards can be created from:
    - Rank and Suit enums: Card(Rank.ACE, Suit.SPADES)
    - String notation: Card.from_string("As"), "10h", "Th" or "A♠"
    """

    rank: Rank
    suit: Suit

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        The last character is the suit (letter or symbol), everything
        before it is the rank.
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s!r}")

        rank_part, suit_part = s[:-1].upper(), s[-1]

        if rank_part not in TEXT_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_part}")

        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part}")

        return cls(TEXT_TO_RANK[rank_part], suit)

    @property
    def value(self) -> int:
        """Evaluator strength of this card's rank."""
        return RANK_VALUES[self.rank]

    @property
    def short_str(self) -> str:
        """Short string like 'As', '10h'."""
        return f"{self.rank.value}{SUIT_CHARS[self.suit]}"

    @property
    def color(self) -> str:
        """Return 'red' for hearts/diamonds, 'black' for clubs/spades."""
        return "red" if self.suit in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    def sort_key(self):
        """Canonical ordering: strongest rank first, then suit symbol."""
        return (-RANK_VALUES[self.rank], self.suit.value)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rank": self.rank.value,
            "suit": self.suit.value,
            "text": str(self),
            "color": self.color,
        }

    def __repr__(self) -> str:
        return f"Card({self.short_str})"

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.value}"


# Process-wide randomness, seeded once from the OS, shared by every deck
_default_rng = random.SystemRandom()


class Deck:
    """
    A standard 52-card deck. The top of the deck is index 0.

    Usage:
        deck = new_deck()
        deck.shuffle()
        hole_cards = deck.deal(2)
        river = deck.draw()
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize a full, unshuffled deck."""
        self._rng = rng or _default_rng
        self._cards: List[Card] = [
            Card(rank, suit)
            for suit in Suit
            for rank in Rank
        ]

    def shuffle(self) -> None:
        """Shuffle the remaining cards in place."""
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        """
        Remove and return the top card.

        Raises:
            DeckExhausted: If the deck is empty.
        """
        if not self._cards:
            raise DeckExhausted("Cannot draw from an empty deck")
        return self._cards.pop(0)

    def deal(self, n: int = 1) -> List[Card]:
        """
        Deal n cards from the top of the deck.

        Raises:
            DeckExhausted: If fewer than n cards remain; nothing is drawn.
        """
        if n > len(self._cards):
            raise DeckExhausted(f"Cannot deal {n} cards, only {len(self._cards)} remain")

        dealt = self._cards[:n]
        self._cards = self._cards[n:]
        return dealt

    @property
    def cards(self) -> List[Card]:
        """Copy of the remaining cards, top first."""
        return list(self._cards)

    @property
    def remaining(self) -> int:
        """Number of cards remaining in the deck."""
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({self.remaining} cards remaining)"


def new_deck(rng: Optional[random.Random] = None) -> Deck:
    """Return a fresh, unshuffled deck with all 52 cards."""
    return Deck(rng=rng)


def shuffle(deck: Deck) -> None:
    """Shuffle `deck` in place."""
    deck.shuffle()


def draw(deck: Deck) -> Card:
    """Draw the top card of `deck`, raising DeckExhausted when empty."""
    return deck.draw()


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse space-separated cards.

    Accepts "As Kh 10d", "A♠ K♥ T♦" and mixed notation.
    """
    return [Card.from_string(s) for s in cards_str.split()]
