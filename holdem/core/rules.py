"""
Holdem Rules and Constants.

Phases, streets and action names shared by the round engine, the agents
and the server, plus the table limits.

Card budget: no burn cards are drawn, so a full table of MAX_PLAYERS
needs 2 * 23 hole cards + 5 community cards = 51 <= 52.
"""

from enum import Enum, auto


class GamePhase(Enum):
    """Phases of a round."""
    SETUP = auto()        # Seating players, nothing dealt yet
    DEALING = auto()      # Hole cards being dealt
    BETTING = auto()      # One of the betting streets
    SHOWDOWN = auto()     # Comparing hands
    COMPLETE = auto()     # Hand over, winners paid


class Street(Enum):
    """Betting streets, in order."""
    PRE_FLOP = auto()
    FLOP = auto()
    TURN = auto()
    RIVER = auto()


class ActionType(Enum):
    """Possible player actions."""
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    BET = "BET"


# Table limits
MIN_PLAYERS = 2
MAX_PLAYERS = 23
DEFAULT_BUY_IN = 1000

# Cards per street
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

# Hand evaluation
HAND_SIZE = 5
MAX_EVALUATED_CARDS = HOLE_CARDS + TOTAL_COMMUNITY_CARDS

# Cards dealt when entering each street
STREET_CARDS = {
    Street.FLOP: FLOP_CARDS,
    Street.TURN: TURN_CARDS,
    Street.RIVER: RIVER_CARDS,
}

# Community card count while betting on each street
COMMUNITY_COUNT = {
    Street.PRE_FLOP: 0,
    Street.FLOP: 3,
    Street.TURN: 4,
    Street.RIVER: 5,
}


def next_street(street: Street):
    """
    Return the street after `street`, or None after the river.

    None means the hand goes to showdown.
    """
    order = list(Street)
    index = order.index(street)
    if index + 1 < len(order):
        return order[index + 1]
    return None
