"""
Hand Evaluation for Holdem.

This module ranks the best 5-card hand out of 5-7 cards and gives a total
order over the results.

Hand Rankings (best to worst):
1. Straight Flush: 5 consecutive cards of same suit (Royal Flush is the Ace-high one)
2. Four of a Kind: 4 cards of same rank
3. Full House: 3 of a kind + pair
4. Flush: 5 cards of same suit
5. Straight: 5 consecutive cards
6. Three of a Kind: 3 cards of same rank
7. Two Pair: 2 different pairs
8. One Pair: 2 cards of same rank
9. High Card: No made hand

Each HandRank carries the category plus the tie-break ranks in the order
they matter, so comparing two ranks is a plain tuple comparison.

Note: Ace can be low in A-2-3-4-5 straight (wheel), which ranks as 5-high.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from enum import IntEnum
from itertools import combinations
from typing import Iterable, List, Optional, Sequence, Tuple

from holdem.core.card import Card, Rank, VALUE_TO_RANK
from holdem.core.errors import InsufficientCards
from holdem.core.rules import HAND_SIZE, HOLE_CARDS, MAX_EVALUATED_CARDS, TOTAL_COMMUNITY_CARDS


class HandCategory(IntEnum):
    """Hand categories, higher value = better hand."""
    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9


CATEGORY_NAMES = {
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.HIGH_CARD: "High Card",
}


class Ordering(IntEnum):
    """Result of compare()."""
    LESS = -1
    EQUAL = 0
    GREATER = 1


@dataclass(frozen=True, order=True)
class HandRank:
    """
    The value of a best 5-card hand.

    Attributes:
        category: The hand category
        ranks: Tie-break rank values (2-14) in significance order
        cards: The five cards making the hand (not used for comparison)
    """
    category: HandCategory
    ranks: Tuple[int, ...]
    cards: Tuple[Card, ...] = field(default=(), compare=False)

    @property
    def name(self) -> str:
        return CATEGORY_NAMES[self.category]

    def to_dict(self) -> dict:
        return {
            "category": self.category.name,
            "ranks": list(self.ranks),
            "cards": [str(c) for c in self.cards],
            "description": describe(self),
        }


WHEEL = [14, 5, 4, 3, 2]


def evaluate(hole: Sequence[Card], community: Sequence[Card]) -> HandRank:
    """
    Rank a player's best hand from hole cards plus community cards.

    Raises:
        InsufficientCards: If fewer than 5 cards are available combined.
        ValueError: If more than 2 hole or 5 community cards are given.
    """
    if len(hole) > HOLE_CARDS:
        raise ValueError(f"At most {HOLE_CARDS} hole cards, got {len(hole)}")
    if len(community) > TOTAL_COMMUNITY_CARDS:
        raise ValueError(f"At most {TOTAL_COMMUNITY_CARDS} community cards, got {len(community)}")
    return evaluate_best(list(hole) + list(community))


def evaluate_best(cards: Iterable[Card]) -> HandRank:
    """
    Rank the best 5-card subset of 5-7 cards.

    The cards are put in a canonical order first, so the same set of cards
    always produces the same HandRank (chosen cards included).

    Raises:
        InsufficientCards: If fewer than 5 cards are given.
        ValueError: If more than 7 cards or duplicate cards are given.
    """
    cards = list(cards)
    if len(cards) < HAND_SIZE:
        raise InsufficientCards(f"Need at least {HAND_SIZE} cards, got {len(cards)}")
    if len(cards) > MAX_EVALUATED_CARDS:
        raise ValueError(f"Need at most {MAX_EVALUATED_CARDS} cards, got {len(cards)}")
    if len(set(cards)) != len(cards):
        raise ValueError("Duplicate cards in hand")

    ordered = sorted(cards, key=Card.sort_key)

    best: Optional[HandRank] = None
    for combo in combinations(ordered, HAND_SIZE):
        rank = _evaluate_5_cards(combo)
        if best is None or rank > best:
            best = rank
    return best


def compare(a: HandRank, b: HandRank) -> Ordering:
    """Compare two hand ranks: GREATER means `a` wins."""
    if a > b:
        return Ordering.GREATER
    if a < b:
        return Ordering.LESS
    return Ordering.EQUAL


def _evaluate_5_cards(cards: Sequence[Card]) -> HandRank:
    """Classify exactly 5 cards, given strongest first."""
    values = [c.value for c in cards]
    is_flush = len({c.suit for c in cards}) == 1
    straight_high = _straight_high(values)

    # (value, count) groups, biggest group first, then higher rank
    counts = Counter(values)
    groups = sorted(counts.items(), key=lambda item: (item[1], item[0]), reverse=True)
    shape = [count for _, count in groups]
    grouped = [value for value, _ in groups]

    if straight_high and is_flush:
        return _make(HandCategory.STRAIGHT_FLUSH, [straight_high], _straight_cards(cards, straight_high))

    if shape == [4, 1]:
        return _make(HandCategory.FOUR_OF_A_KIND, grouped, _by_group(cards, counts))

    if shape == [3, 2]:
        return _make(HandCategory.FULL_HOUSE, grouped, _by_group(cards, counts))

    if is_flush:
        return _make(HandCategory.FLUSH, values, cards)

    if straight_high:
        return _make(HandCategory.STRAIGHT, [straight_high], _straight_cards(cards, straight_high))

    if shape == [3, 1, 1]:
        return _make(HandCategory.THREE_OF_A_KIND, grouped, _by_group(cards, counts))

    if shape == [2, 2, 1]:
        return _make(HandCategory.TWO_PAIR, grouped, _by_group(cards, counts))

    if shape == [2, 1, 1, 1]:
        return _make(HandCategory.ONE_PAIR, grouped, _by_group(cards, counts))

    return _make(HandCategory.HIGH_CARD, values, cards)


def _make(category: HandCategory, ranks: Sequence[int], cards: Sequence[Card]) -> HandRank:
    return HandRank(category=category, ranks=tuple(ranks), cards=tuple(cards))


def _straight_high(values: List[int]) -> Optional[int]:
    """
    Return the high card of a straight, or None.

    Expects 5 values sorted descending.
    """
    if len(set(values)) != HAND_SIZE:
        return None
    if values[0] - values[4] == 4:
        return values[0]
    if values == WHEEL:
        return 5
    return None


def _by_group(cards: Sequence[Card], counts: Counter) -> List[Card]:
    """Sort cards by group size (descending), then by rank (descending)."""
    return sorted(cards, key=lambda c: (counts[c.value], c.value), reverse=True)


def _straight_cards(cards: Sequence[Card], high: int) -> List[Card]:
    """Order a straight from its top card down; the wheel puts the Ace last."""
    if high == 5:
        return [c for c in cards if c.value != 14] + [c for c in cards if c.value == 14]
    return list(cards)


def describe(rank: HandRank) -> str:
    """Get a human-readable description of a hand rank."""
    category = rank.category
    top = _rank_name(rank.ranks[0])

    if category == HandCategory.STRAIGHT_FLUSH:
        if rank.ranks[0] == 14:
            return "Royal Flush"
        return f"Straight Flush, {top} high"
    elif category == HandCategory.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_plural(rank.ranks[0])}"
    elif category == HandCategory.FULL_HOUSE:
        return f"Full House, {_plural(rank.ranks[0])} full of {_plural(rank.ranks[1])}"
    elif category == HandCategory.FLUSH:
        return f"Flush, {top} high"
    elif category == HandCategory.STRAIGHT:
        if rank.ranks[0] == 5:
            return "Straight, Five high (Wheel)"
        return f"Straight, {top} high"
    elif category == HandCategory.THREE_OF_A_KIND:
        return f"Three of a Kind, {_plural(rank.ranks[0])}"
    elif category == HandCategory.TWO_PAIR:
        return f"Two Pair, {_plural(rank.ranks[0])} and {_plural(rank.ranks[1])}"
    elif category == HandCategory.ONE_PAIR:
        return f"Pair of {_plural(rank.ranks[0])}"
    else:
        return f"High Card, {top}"


RANK_NAMES = {
    Rank.TWO: "Two", Rank.THREE: "Three", Rank.FOUR: "Four",
    Rank.FIVE: "Five", Rank.SIX: "Six", Rank.SEVEN: "Seven",
    Rank.EIGHT: "Eight", Rank.NINE: "Nine", Rank.TEN: "Ten",
    Rank.JACK: "Jack", Rank.QUEEN: "Queen", Rank.KING: "King",
    Rank.ACE: "Ace",
}


def _rank_name(value: int) -> str:
    return RANK_NAMES[VALUE_TO_RANK[value]]


def _plural(value: int) -> str:
    name = _rank_name(value)
    return f"{name}es" if name == "Six" else f"{name}s"
