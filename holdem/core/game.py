"""
Holdem Round Engine - State Machine Implementation.

This module implements one poker round at a table. It handles:
- Seating (add/remove players between hands)
- Dealing hole cards from a fresh shuffled deck every hand
- Player actions (bet, call, check, fold) for the player on turn
- Turn order and automatic street advancement (pre-flop, flop, turn, river)
- Showdown with split pots

Phases: SETUP -> DEALING -> BETTING(street) -> SHOWDOWN -> COMPLETE.
A new deal restarts from COMPLETE.

Every mutator validates before it changes anything and raises a
PokerError subclass on failure, so a rejected action leaves the round
exactly as it was.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from holdem.core.card import Card, Deck, new_deck
from holdem.core.errors import (
    BetTooSmall, IllegalCheck, InvalidPhaseForAction, NotEnoughPlayers,
    NotPlayersTurn, PokerError, RoundInProgress,
)
from holdem.core.hand import HandRank, Ordering, compare, describe, evaluate
from holdem.core.player import Player, PlayerRegistry
from holdem.core.rules import (
    ActionType, GamePhase, Street,
    HOLE_CARDS, MAX_PLAYERS, MIN_PLAYERS, STREET_CARDS, next_street,
)


logger = logging.getLogger(__name__)


@dataclass
class Payout:
    """Chips awarded to one winner at the end of a hand."""
    name: str
    amount: int
    hand: Optional[HandRank] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "amount": self.amount,
            "hand": self.hand.to_dict() if self.hand else None,
            "description": describe(self.hand) if self.hand else "All other players folded",
        }


@dataclass
class ActionResult:
    """Result of a player action taken through take_action()."""
    success: bool
    message: str
    action_type: Optional[ActionType] = None
    amount: int = 0
    error: Optional[str] = None


class Round:
    """
    Poker round engine implementing a state machine.

    Usage:
        rnd = Round()
        rnd.add_player("alice", 1000)
        rnd.add_player("bob", 1000)
        rnd.deal()

        while rnd.is_hand_running():
            action = get_player_action(rnd.snapshot())  # From UI or agent
            rnd.take_action(action["type"], action.get("amount", 0))

        payouts = rnd.winners
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        max_players: int = MAX_PLAYERS,
    ):
        """
        Initialize an empty round in the SETUP phase.

        Args:
            rng: Optional randomness source for shuffling (tests)
            max_players: Seat limit, at most MAX_PLAYERS so one deck covers every hand
        """
        self._rng = rng
        self.players = PlayerRegistry(max_players)

        # Hand state
        self.deck: Deck = new_deck(rng)
        self.community_cards: List[Card] = []
        self.phase = GamePhase.SETUP
        self.street: Optional[Street] = None
        self.hand_number = 0

        # Turn tracking (None when nobody is on turn)
        self.current_player_index: Optional[int] = None

        # Betting state
        self.current_bet = 0
        self.pot = 0

        # Results of the last completed hand
        self.winners: List[Payout] = []
        self._showdown_reached = False

        # Event log of the current hand
        self.hand_history: List[Dict[str, Any]] = []

    # Queries ------------------------------------------------------------

    @property
    def current_player(self) -> Optional[Player]:
        """The player whose turn it is to act."""
        if self.current_player_index is None or not self.is_hand_running():
            return None
        return self.players[self.current_player_index]

    def is_hand_running(self) -> bool:
        """Check if a hand is currently in progress."""
        return self.phase in (GamePhase.DEALING, GamePhase.BETTING, GamePhase.SHOWDOWN)

    def get_player(self, name: str) -> Player:
        return self.players.get(name)

    # Seating ------------------------------------------------------------

    def add_player(self, name: str, starting_chips: int) -> int:
        """
        Seat a player at the end of the seat list.

        Returns:
            The player's seat index

        Raises:
            RoundInProgress: If a hand is running.
        """
        self._require_between_hands("add a player")
        seat = self.players.add(name, starting_chips)
        logger.info(f"Seated {name} at seat {seat} with {starting_chips} chips")
        return seat

    def remove_player(self, name: str) -> Player:
        """Unseat a player between hands."""
        self._require_between_hands("remove a player")
        player = self.players.remove(name)
        logger.info(f"Removed {name} ({player.chips} chips)")
        return player

    # Dealing ------------------------------------------------------------

    def deal(self) -> None:
        """
        Start a new hand.

        Builds and shuffles a fresh deck and deals two cards to every funded
        player, one card per player per pass. Seated players without chips
        sit the hand out.

        Raises:
            RoundInProgress: If a hand is already running.
            NotEnoughPlayers: If fewer than two players have chips.
        """
        self._require_between_hands("deal")

        funded = self.players.funded()
        if len(funded) < MIN_PLAYERS:
            raise NotEnoughPlayers(
                f"Need at least {MIN_PLAYERS} players with chips, have {len(funded)}"
            )

        self.hand_number += 1
        self.phase = GamePhase.DEALING
        logger.info(f"Starting hand #{self.hand_number} with {len(funded)} players")

        # Reset for new hand
        self.community_cards = []
        self.pot = 0
        self.current_bet = 0
        self.winners = []
        self._showdown_reached = False
        self.hand_history = []

        for player in self.players:
            player.reset_for_new_hand()
            if player.chips == 0:
                player.folded = True

        self.deck = new_deck(self._rng)
        self.deck.shuffle()

        for _ in range(HOLE_CARDS):
            for player in funded:
                player.hole_cards.append(self.deck.draw())

        self.phase = GamePhase.BETTING
        self.street = Street.PRE_FLOP
        self.current_player_index = self.players.first_seat(lambda p: True)

        self._log_action("HAND_START", {
            "hand_number": self.hand_number,
            "players": [p.name for p in funded],
        })

    # Player actions ----------------------------------------------------

    def bet(self, amount: int, player: Optional[str] = None) -> int:
        """
        Bet or raise so the player's total on this street becomes `amount`.

        Args:
            amount: The player's street total after the bet
            player: Optional name of the acting player, checked against the turn

        Returns:
            Chips moved from the player's stack into the pot

        Raises:
            BetTooSmall: If amount is not positive or below the current bet.
            InsufficientChips: If the player cannot cover it.
        """
        actor = self._begin_action(player)

        if amount <= 0 or amount < self.current_bet:
            raise BetTooSmall(
                f"Bet must be positive and at least the current bet ({self.current_bet})"
            )

        debit = amount - actor.street_bet
        actor.commit(debit)
        self.pot += debit
        self.current_bet = amount
        actor.acted = True

        self._log_action(ActionType.BET.value, {"player": actor.name, "amount": debit})
        self._advance_turn()
        return debit

    def call(self, player: Optional[str] = None) -> int:
        """
        Match the current bet (same as bet(current_bet)).

        Returns:
            Chips moved into the pot (0 if nothing was owed)

        Raises:
            InsufficientChips: If the player cannot cover the full call.
        """
        actor = self._begin_action(player)

        owed = actor.owes(self.current_bet)
        actor.commit(owed)
        self.pot += owed
        actor.acted = True

        self._log_action(ActionType.CALL.value, {"player": actor.name, "amount": owed})
        self._advance_turn()
        return owed

    def check(self, player: Optional[str] = None) -> None:
        """
        Pass without betting.

        Raises:
            IllegalCheck: If the player still owes chips on this street.
        """
        actor = self._begin_action(player)

        owed = actor.owes(self.current_bet)
        if owed > 0:
            raise IllegalCheck(f"Cannot check, must call ${owed}")

        actor.acted = True
        self._log_action(ActionType.CHECK.value, {"player": actor.name})
        self._advance_turn()

    def fold(self, player: Optional[str] = None) -> None:
        """
        Give up the hand. If a single player is left, they win the pot now.
        """
        actor = self._begin_action(player)

        actor.folded = True
        actor.acted = True
        self._log_action(ActionType.FOLD.value, {"player": actor.name})

        remaining = self.players.contenders()
        if len(remaining) == 1:
            self._award_uncontested(remaining[0])
        else:
            self._advance_turn()

    def take_action(
        self,
        action_type: ActionType,
        amount: int = 0,
        player: Optional[str] = None,
    ) -> ActionResult:
        """
        Process a player action without raising for game errors.

        Args:
            action_type: FOLD, CHECK, CALL or BET (enum or its string value)
            amount: Street total for BET
            player: Optional acting player's name

        Returns:
            ActionResult indicating success/failure and details
        """
        try:
            action_type = ActionType(action_type)
        except ValueError:
            return ActionResult(False, f"Unknown action: {action_type}", error="UNKNOWN_ACTION")

        try:
            if action_type == ActionType.FOLD:
                self.fold(player)
                return ActionResult(True, "Folded", ActionType.FOLD, 0)
            elif action_type == ActionType.CHECK:
                self.check(player)
                return ActionResult(True, "Checked", ActionType.CHECK, 0)
            elif action_type == ActionType.CALL:
                paid = self.call(player)
                return ActionResult(True, f"Called ${paid}", ActionType.CALL, paid)
            else:
                paid = self.bet(amount, player)
                return ActionResult(True, f"Bet to ${amount}", ActionType.BET, paid)
        except PokerError as e:
            logger.debug(f"Rejected {action_type.value} from {player or 'current player'}: {e.message}")
            return ActionResult(False, e.message, action_type, error=e.code)

    def get_legal_actions(self) -> List[Dict[str, Any]]:
        """
        Get legal actions for the player on turn.

        Returns:
            List of action dicts with type and constraints
        """
        player = self.current_player
        if player is None or self.phase != GamePhase.BETTING:
            return []

        actions = [{"type": ActionType.FOLD.value}]
        owed = player.owes(self.current_bet)

        if owed == 0:
            actions.append({"type": ActionType.CHECK.value})
        elif owed <= player.chips:
            actions.append({"type": ActionType.CALL.value, "amount": owed})

        # Room to raise beyond the call
        if player.chips > owed:
            actions.append({
                "type": ActionType.BET.value,
                "min": max(self.current_bet + 1, 1),
                "max": player.street_bet + player.chips,
            })

        return actions

    # Street and showdown ------------------------------------------------

    def advance_street(self) -> None:
        """
        Close the current street and open the next one.

        Resets per-street flags and the current bet, deals 3/1/1 community
        cards, and goes to showdown after the river. Called automatically
        when every remaining player has acted and matched the bet.

        Raises:
            InvalidPhaseForAction: Outside BETTING, or while a player still
                has to act on this street.
        """
        if self.phase != GamePhase.BETTING:
            raise InvalidPhaseForAction(f"Cannot advance street during {self.phase.name}")
        waiting = [p.name for p in self.players.contenders() if self._needs_action(p)]
        if waiting:
            raise InvalidPhaseForAction(
                f"Cannot close {self.street.name} while {', '.join(waiting)} must still act"
            )

        for player in self.players:
            player.reset_for_new_street()
        self.current_bet = 0

        upcoming = next_street(self.street)
        if upcoming is None:
            self.phase = GamePhase.SHOWDOWN
            self.current_player_index = None
            self.showdown()
            return

        self.community_cards.extend(self.deck.deal(STREET_CARDS[upcoming]))
        self.street = upcoming
        self.current_player_index = self.players.first_seat(lambda p: True)

        logger.info(f"Hand #{self.hand_number}: {upcoming.name} {' '.join(map(str, self.community_cards))}")
        self._log_action(upcoming.name, {"cards": [str(c) for c in self.community_cards]})

    def showdown(self) -> List[Payout]:
        """
        Compare the remaining players' best hands and pay the winner(s).

        Tied winners split the pot by integer division; leftover chips go
        one each to the tied winners in seat order, lowest seat first.
        """
        if self.phase != GamePhase.SHOWDOWN:
            raise InvalidPhaseForAction(f"Cannot run showdown during {self.phase.name}")

        ranked = [
            (player, evaluate(player.hole_cards, self.community_cards))
            for player in self.players.contenders()
        ]
        best = max(rank for _, rank in ranked)
        tied = [(p, rank) for p, rank in ranked if compare(rank, best) == Ordering.EQUAL]

        share, remainder = divmod(self.pot, len(tied))
        payouts = []
        for i, (player, rank) in enumerate(tied):
            amount = share + (1 if i < remainder else 0)
            player.chips += amount
            payouts.append(Payout(name=player.name, amount=amount, hand=rank))

        self.winners = payouts
        self._showdown_reached = True
        self.phase = GamePhase.COMPLETE

        for payout in payouts:
            logger.info(f"Hand #{self.hand_number}: {payout.name} wins {payout.amount} with {describe(payout.hand)}")
        self._log_action("SHOWDOWN", {"winners": [p.to_dict() for p in payouts]})
        return payouts

    # Snapshot -----------------------------------------------------------

    def snapshot(self, viewer: Optional[str] = None, reveal: bool = False) -> Dict[str, Any]:
        """
        Export the round as plain JSON-compatible data.

        Args:
            viewer: Player whose own hole cards are included
            reveal: Include every player's hole cards

        Hole cards of players still in the hand are also shown once a
        showdown has happened.
        """
        current = self.current_player
        players = []
        for seat, player in enumerate(self.players):
            show = (
                reveal
                or player.name == viewer
                or (self._showdown_reached and player.in_hand)
            )
            players.append({"seat": seat, **player.to_dict(show_cards=show)})

        return {
            "phase": self.phase.name,
            "street": self.street.name if self.street else None,
            "hand_number": self.hand_number,
            "pot": self.pot,
            "current_bet": self.current_bet,
            "current_turn": self.current_player_index if current else None,
            "current_player": current.name if current else None,
            "community_cards": [c.to_dict() for c in self.community_cards],
            "deck_remaining": self.deck.remaining,
            "players": players,
            "winners": [p.to_dict() for p in self.winners],
        }

    # Internals ----------------------------------------------------------

    def _require_between_hands(self, what: str) -> None:
        if self.phase not in (GamePhase.SETUP, GamePhase.COMPLETE):
            raise RoundInProgress(f"Cannot {what} while a hand is in progress")

    def _begin_action(self, name: Optional[str]) -> Player:
        """Validate phase and turn; return the acting player."""
        if self.phase != GamePhase.BETTING:
            raise InvalidPhaseForAction(f"No betting during {self.phase.name}")

        actor = self.players[self.current_player_index]
        if name is not None and name != actor.name:
            raise NotPlayersTurn(f"It is {actor.name}'s turn, not {name}'s")
        return actor

    def _needs_action(self, player: Player) -> bool:
        return not player.acted or player.owes(self.current_bet) > 0

    def _advance_turn(self) -> None:
        """Move to the next player who must act, or close the street."""
        if not any(self._needs_action(p) for p in self.players.contenders()):
            self.advance_street()
            return

        upcoming = self.players.next_seat(self.current_player_index, self._needs_action)
        if upcoming is None:
            self.advance_street()
            return
        self.current_player_index = upcoming

    def _award_uncontested(self, winner: Player) -> None:
        """End the hand when only one player remains."""
        winner.chips += self.pot
        self.winners = [Payout(name=winner.name, amount=self.pot)]
        self.phase = GamePhase.COMPLETE
        self.current_player_index = None

        logger.info(f"Hand #{self.hand_number}: {winner.name} wins {self.pot} uncontested")
        self._log_action("WIN_BY_FOLD", {"winner": winner.name, "amount": self.pot})

    def _log_action(self, action: str, details: Dict[str, Any]) -> None:
        """Log an action to hand history."""
        self.hand_history.append({
            "action": action,
            "phase": self.phase.name,
            **details
        })


def new_round(rng: Optional[random.Random] = None) -> Round:
    """Create an empty round ready for seating."""
    return Round(rng=rng)
