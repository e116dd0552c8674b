"""
Texas Hold'em Betting Engine - State Machine Implementation.

This module implements the table logic for one hand at a time:
- Hand setup (dealer rotation, blind posting, hole-card deal)
- Player actions (fold, check, call, bet, raise, all-in)
- Stage progression (flop, turn, river, showdown)
- Pot accumulation and settlement, including side pots and split pots

The engine is single-writer: every mutation goes through its own methods and
callers must serialize access. Illegal actions come back as a rejected
ActionResult; broken preconditions raise a PokerError.
"""

from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence
import logging

from holdem.core.card import Card, Deck
from holdem.core.errors import (
    IllegalActionError, InvalidConfigurationError, InvalidTransitionError,
    NoEligiblePlayerError,
)
from holdem.core.hand import HandEvaluation, evaluate_best, get_hand_description
from holdem.core.player import Player
from holdem.core.rules import (
    GameState, PlayerAction,
    BETTING_STATES, HAND_START_STATES, STAGE_TRANSITIONS,
    DEFAULT_BIG_BLIND, DEFAULT_SMALL_BLIND, HOLE_CARDS, MIN_PLAYERS,
    calculate_min_raise, get_blind_positions,
)


logger = logging.getLogger(__name__)


@dataclass
class Pot:
    """Represents a pot (main pot or side pot)."""
    amount: int = 0
    eligible_players: List[str] = field(default_factory=list)


@dataclass
class ActionResult:
    """
    Result of a player action.

    A rejected action carries an IllegalActionError in ``error`` and leaves
    the table untouched, so the caller can simply ask again.
    """
    success: bool
    message: str
    action: Optional[PlayerAction] = None
    amount: int = 0
    error: Optional[IllegalActionError] = None

    @classmethod
    def rejected(cls, message: str, action: Optional[PlayerAction] = None) -> ActionResult:
        return cls(False, message, action, 0, IllegalActionError(message))

    def raise_for_error(self) -> None:
        """Raise the carried IllegalActionError, if any."""
        if self.error is not None:
            raise self.error


class HoldemEngine:
    """
    Texas Hold'em betting engine implementing a state machine.

    Usage:
        engine = HoldemEngine(small_blind=10, big_blind=20)
        engine.start_new_hand(players)

        while engine.state not in (GameState.SHOWDOWN, GameState.FINISHED):
            if engine.is_betting_round_complete():
                engine.next_stage()
                continue
            player = engine.current_player
            result = engine.process_player_action(player, action, amount)
            if result.success:
                engine.next_player()

        winners = engine.get_winners()
    """

    def __init__(
        self,
        small_blind: int = DEFAULT_SMALL_BLIND,
        big_blind: int = DEFAULT_BIG_BLIND,
        deck: Optional[Deck] = None,
    ):
        """
        Initialize the engine.

        Args:
            small_blind: Small blind amount
            big_blind: Big blind amount (at least the small blind)
            deck: Optional deck, e.g. one seeded for reproducible hands
        """
        if small_blind <= 0 or big_blind < small_blind:
            raise InvalidConfigurationError(
                f"Invalid blinds: small={small_blind}, big={big_blind}"
            )

        self.small_blind = small_blind
        self.big_blind = big_blind
        self.deck = deck or Deck()

        self.players: List[Player] = []
        self.state = GameState.WAITING
        self.community_cards: List[Card] = []
        self.hand_number = 0

        # Position tracking; the first hand moves the button onto seat 0
        self.dealer_position = -1
        self.small_blind_position = -1
        self.big_blind_position = -1
        self.current_player_index = 0

        # Betting state
        self.pot = 0
        self.current_bet = 0  # Highest commitment in the current round
        self.last_raise_amount = 0  # Size of the last raise in the round

        self.hand_history: List[Dict[str, Any]] = []
        self._winners: List[Dict[str, Any]] = []

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def contenders(self) -> List[Player]:
        """Players still contesting the pot."""
        return [p for p in self.players if p.is_in_hand]

    @property
    def current_player(self) -> Optional[Player]:
        """The player whose turn it is to act."""
        if not self.is_hand_running():
            return None
        return self.players[self.current_player_index]

    def is_hand_running(self) -> bool:
        """Check if a betting round is in progress."""
        return self.state in BETTING_STATES

    # ------------------------------------------------------------------
    # Hand setup
    # ------------------------------------------------------------------

    def start_new_hand(self, players: Optional[Sequence[Player]] = None) -> None:
        """
        Start a new hand.

        Args:
            players: Seats in table order; defaults to the previous hand's players

        Raises:
            InvalidConfigurationError: With fewer than 2 players (with chips)
            InvalidTransitionError: If a hand is still being played
        """
        players = list(players) if players is not None else list(self.players)
        if len(players) < MIN_PLAYERS:
            raise InvalidConfigurationError(
                f"Need at least {MIN_PLAYERS} players, got {len(players)}"
            )
        if sum(1 for p in players if p.stack > 0) < MIN_PLAYERS:
            raise InvalidConfigurationError("Need at least 2 players with chips")
        if self.state not in HAND_START_STATES:
            raise InvalidTransitionError(f"Cannot start a new hand during {self.state.name}")

        self.players = players
        self.hand_number += 1
        logger.info(f"Starting hand #{self.hand_number} with {len(players)} players")

        self.deck.reset()
        self.community_cards = []
        self.pot = 0
        self.current_bet = 0
        self.last_raise_amount = 0
        self.hand_history = []
        self._winners = []

        for seat, player in enumerate(players):
            player.seat = seat
            player.reset_for_new_hand()

        self._move_dealer_button()
        self._post_blinds()
        self._deal_hole_cards()

        self.state = GameState.PRE_FLOP
        self.last_raise_amount = self.big_blind
        self.current_player_index = self._next_seat_in_hand(self.big_blind_position)

        self._log_action("HAND_START", {
            "hand_number": self.hand_number,
            "dealer": self.dealer_position,
            "small_blind": self.small_blind_position,
            "big_blind": self.big_blind_position,
        })

    def _move_dealer_button(self) -> None:
        """Move the dealer button to the next active seat and place the blinds."""
        n = self.num_players
        start = (self.dealer_position + 1) % n
        for i in range(n):
            pos = (start + i) % n
            if self.players[pos].is_active:
                self.dealer_position = pos
                break

        active_indices = [i for i, p in enumerate(self.players) if p.is_active]
        sb_rel, bb_rel = get_blind_positions(
            len(active_indices), active_indices.index(self.dealer_position)
        )
        self.small_blind_position = active_indices[sb_rel]
        self.big_blind_position = active_indices[bb_rel]

        self.players[self.dealer_position].is_dealer = True
        self.players[self.small_blind_position].is_small_blind = True
        self.players[self.big_blind_position].is_big_blind = True

    def _post_blinds(self) -> None:
        """Post small and big blinds, capped at the posting players' stacks."""
        sb_player = self.players[self.small_blind_position]
        bb_player = self.players[self.big_blind_position]

        sb_amount = sb_player.bet(self.small_blind)
        sb_player.last_action = f"SB ${sb_amount}"

        bb_amount = bb_player.bet(self.big_blind)
        bb_player.last_action = f"BB ${bb_amount}"

        self.pot += sb_amount + bb_amount
        self.current_bet = self.big_blind

        logger.debug(f"Blinds posted: SB={sb_amount} BB={bb_amount}")

    def _deal_hole_cards(self) -> None:
        """Deal 2 hole cards to each active, non-folded player."""
        for player in self.players:
            if player.is_in_hand:
                player.deal_cards(self.deck.deal_cards(HOLE_CARDS))

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def process_player_action(
        self,
        player: Player,
        action: PlayerAction,
        amount: int = 0,
    ) -> ActionResult:
        """
        Validate and apply one action.

        Args:
            player: The acting player
            action: The action to take
            amount: Requested total commitment for BET/RAISE (raised to the minimum)

        Returns:
            ActionResult; on rejection the table state is unchanged
        """
        result = self._execute_action(player, action, amount)

        if result.success:
            player.has_acted = True
            self._log_action(action.value, {
                "player": player.player_id,
                "amount": result.amount,
            })
            logger.debug(f"{player.player_id}: {result.message}")
        else:
            logger.warning(f"Rejected {action.value} from {player.player_id}: {result.message}")

        return result

    def _execute_action(self, player: Player, action: PlayerAction, amount: int) -> ActionResult:
        """Execute the specified action for the player."""
        if not self.is_hand_running():
            return ActionResult.rejected("No betting round in progress", action)
        if not player.is_active:
            return ActionResult.rejected("Player is not dealt into this hand", action)
        if player.is_folded:
            return ActionResult.rejected("Player has already folded", action)
        if player.is_all_in:
            return ActionResult.rejected("Player is all-in", action)

        chips_to_call = max(0, self.current_bet - player.current_bet)

        if action == PlayerAction.FOLD:
            if len(self.contenders) == 1:
                return ActionResult.rejected("Cannot fold, no opponents remain", action)
            player.fold()
            return ActionResult(True, "Folded", action, 0)

        if action == PlayerAction.CHECK:
            if chips_to_call > 0:
                return ActionResult.rejected(f"Cannot check, must call ${chips_to_call}", action)
            player.last_action = "CHECK"
            return ActionResult(True, "Checked", action, 0)

        if action == PlayerAction.CALL:
            actual = self._commit(player, chips_to_call)
            player.last_action = f"CALL ${actual}"
            return ActionResult(True, f"Called ${actual}", action, actual)

        if action in (PlayerAction.BET, PlayerAction.RAISE):
            if action == PlayerAction.BET and self.current_bet == 0:
                minimum = self.big_blind
            else:
                # A bet into an outstanding bet is a raise
                minimum = calculate_min_raise(
                    self.current_bet, self.last_raise_amount, self.big_blind
                )
            target = max(amount, minimum)
            actual = self._commit(player, target - player.current_bet)
            self._update_table_bet(player)
            player.last_action = (
                f"ALL-IN ${player.current_bet}" if player.is_all_in
                else f"{action.value} ${player.current_bet}"
            )
            return ActionResult(True, f"{action.value.capitalize()} to ${player.current_bet}", action, actual)

        if action == PlayerAction.ALL_IN:
            actual = self._commit(player, player.stack)
            self._update_table_bet(player)
            player.last_action = f"ALL-IN ${player.current_bet}"
            return ActionResult(True, f"All-in for ${player.current_bet}", action, actual)

        return ActionResult.rejected(f"Unknown action: {action}", action)

    def _commit(self, player: Player, amount: int) -> int:
        """Move chips from the player to the pot, capped at the stack."""
        actual = player.bet(amount)
        self.pot += actual
        return actual

    def _update_table_bet(self, player: Player) -> None:
        """Raise the table bet to the player's commitment and reopen the action."""
        if player.current_bet <= self.current_bet:
            return

        increment = player.current_bet - self.current_bet
        if increment >= self.last_raise_amount:
            self.last_raise_amount = increment
        self.current_bet = player.current_bet

        for other in self.players:
            if other is not player and other.can_act:
                other.has_acted = False

    def get_legal_actions(self, player: Optional[Player] = None) -> List[PlayerAction]:
        """Actions the player may take right now."""
        if player is None:
            player = self.current_player

        if player is None or not self.is_hand_running() or not player.can_act:
            return []

        actions = [PlayerAction.FOLD]
        if self.current_bet > player.current_bet:
            actions.append(PlayerAction.CALL)
        else:
            actions.append(PlayerAction.CHECK)

        if player.stack > self.current_bet - player.current_bet:
            actions.append(PlayerAction.BET if self.current_bet == 0 else PlayerAction.RAISE)
        actions.append(PlayerAction.ALL_IN)
        return actions

    def min_raise_to(self) -> int:
        """Smallest total a RAISE is bumped up to."""
        return calculate_min_raise(self.current_bet, self.last_raise_amount, self.big_blind)

    # ------------------------------------------------------------------
    # Turn and stage progression
    # ------------------------------------------------------------------

    def next_player(self, players: Optional[Sequence[Player]] = None) -> Player:
        """
        Advance the acting seat, skipping folded or inactive seats.

        Raises:
            NoEligiblePlayerError: If no seat can take a turn
        """
        players = players if players is not None else self.players
        n = len(players)
        index = self.current_player_index
        for _ in range(n):
            index = (index + 1) % n
            if players[index].is_in_hand:
                self.current_player_index = index
                return players[index]

        raise NoEligiblePlayerError("Every seat is folded or inactive")

    def all_players_acted(self, players: Optional[Sequence[Player]] = None) -> bool:
        """True when every contender has matched the highest bet or is all-in."""
        players = players if players is not None else self.players
        active = [p for p in players if p.is_in_hand]
        if not active:
            return True

        max_bet = max(p.current_bet for p in active)
        return all(p.current_bet == max_bet or p.is_all_in for p in active)

    def is_betting_round_complete(self) -> bool:
        """
        Check if the current betting round is over.

        Unlike all_players_acted(), a fresh round where nobody has bet yet is
        not complete until everyone who can act has had a turn.
        """
        if not self.is_hand_running():
            return False
        if len(self.contenders) <= 1:
            return True
        if not self.all_players_acted():
            return False

        actors = [p for p in self.contenders if p.can_act]
        if len(actors) <= 1:
            return True
        return all(p.has_acted for p in actors)

    def next_stage(self, players: Optional[Sequence[Player]] = None) -> GameState:
        """
        Advance to the next stage, dealing community cards or settling the pot.

        With a single contender left, a betting stage goes straight to showdown.

        Raises:
            InvalidTransitionError: From WAITING or FINISHED
        """
        players = players if players is not None else self.players
        if self.state not in STAGE_TRANSITIONS:
            raise InvalidTransitionError(f"No stage follows {self.state.name}")

        if self.is_hand_running() and len(self.contenders) <= 1:
            new_state, cards = GameState.SHOWDOWN, 0
        else:
            new_state, cards = STAGE_TRANSITIONS[self.state]

        if cards:
            self.community_cards.extend(self.deck.deal_cards(cards))

        self.state = new_state
        logger.info(
            f"Hand #{self.hand_number} -> {new_state.name} "
            f"board=[{' '.join(str(c) for c in self.community_cards)}] pot={self.pot}"
        )

        if new_state == GameState.SHOWDOWN:
            self._settle()

        for player in players:
            player.reset_for_new_round()
        self.current_bet = 0
        self.last_raise_amount = 0

        if self.is_hand_running():
            self.current_player_index = self._next_seat_in_hand(self.dealer_position)
            self._log_action(new_state.name, {"cards": [str(c) for c in self.community_cards]})

        return new_state

    def _next_seat_in_hand(self, position: int) -> int:
        """First seat after ``position`` whose player is still in the hand."""
        n = self.num_players
        for i in range(1, n + 1):
            pos = (position + i) % n
            if self.players[pos].is_in_hand:
                return pos
        raise NoEligiblePlayerError("No player left in the hand")

    # ------------------------------------------------------------------
    # Settlement
    # ------------------------------------------------------------------

    def _settle(self) -> None:
        """Award the pot to the best hand(s); the pot ends at zero."""
        contenders = self.contenders

        if len(contenders) == 1:
            winner = contenders[0]
            amount = self.pot
            winner.stack += amount
            self.pot = 0
            self._winners = [{
                "player_id": winner.player_id,
                "amount": amount,
                "hand_type": None,
                "description": "All other players folded",
            }]
            self._log_action("WIN_BY_FOLD", {"winner": winner.player_id, "amount": amount})
            logger.info(f"{winner.player_id} wins {amount} uncontested")
            return

        evaluations: Dict[str, HandEvaluation] = {
            p.player_id: evaluate_best(p.hole_cards, self.community_cards)
            for p in contenders
        }

        awards: Dict[str, int] = defaultdict(int)
        for pot in self._calculate_side_pots():
            eligible = [p for p in contenders if p.player_id in pot.eligible_players]
            best = max(evaluations[p.player_id] for p in eligible)
            pot_winners = [p for p in eligible if evaluations[p.player_id] == best]

            share, remainder = divmod(pot.amount, len(pot_winners))
            for winner in pot_winners:
                awards[winner.player_id] += share
            # Odd chips go to the winners closest to the left of the button
            for winner in self._clockwise_from_dealer(pot_winners)[:remainder]:
                awards[winner.player_id] += 1

        self._winners = []
        for player in contenders:
            amount = awards.get(player.player_id, 0)
            if amount == 0:
                continue
            player.stack += amount
            evaluation = evaluations[player.player_id]
            self._winners.append({
                "player_id": player.player_id,
                "amount": amount,
                "hand_type": evaluation.category.name,
                "description": get_hand_description(evaluation),
                "cards": [str(c) for c in evaluation.cards],
            })

        paid = sum(awards.values())
        assert paid == self.pot, f"Settlement paid {paid} from a pot of {self.pot}"
        self.pot = 0

        self._log_action("SHOWDOWN", {"winners": self._winners})
        logger.info(
            "Showdown: " + ", ".join(f"{w['player_id']} +{w['amount']}" for w in self._winners)
        )

    def _calculate_side_pots(self) -> List[Pot]:
        """
        Layer the pot by hand contributions.

        Each contender's total bet closes a layer; every player (folded or not)
        pays into a layer up to their own contribution. Chips above the top
        contender level belong to the last pot.
        """
        contenders = self.contenders
        levels = sorted({p.total_bet for p in contenders if p.total_bet > 0})
        if not levels:
            return [Pot(self.pot, [p.player_id for p in contenders])]

        pots: List[Pot] = []
        prev_level = 0
        for level in levels:
            amount = sum(
                min(p.total_bet, level) - min(p.total_bet, prev_level)
                for p in self.players
            )
            eligible = [p.player_id for p in contenders if p.total_bet >= level]
            pots.append(Pot(amount, eligible))
            prev_level = level

        pots[-1].amount += self.pot - sum(pot.amount for pot in pots)
        return pots

    def _clockwise_from_dealer(self, players: Sequence[Player]) -> List[Player]:
        n = self.num_players
        return sorted(players, key=lambda p: (p.seat - self.dealer_position - 1) % n)

    def get_winners(self) -> List[Dict[str, Any]]:
        """Get winner information after the pot has been settled."""
        return [dict(w) for w in self._winners]

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------

    def get_state(self, for_player_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Get a read-only projection of the table.

        Args:
            for_player_id: If specified, include this player's hole cards
        """
        current = self.current_player
        players = []
        for player in self.players:
            show = player.player_id == for_player_id or (
                self.state in (GameState.SHOWDOWN, GameState.FINISHED) and player.is_in_hand
            )
            players.append(player.to_dict(hide_cards=not show))

        return {
            "state": self.state.name,
            "hand_number": self.hand_number,
            "pot": self.pot,
            "current_bet": self.current_bet,
            "min_raise": self.min_raise_to(),
            "board": [c.to_dict() for c in self.community_cards],
            "dealer_position": self.dealer_position,
            "small_blind_position": self.small_blind_position,
            "big_blind_position": self.big_blind_position,
            "current_player_index": self.current_player_index,
            "current_player": current.player_id if current else None,
            "small_blind": self.small_blind,
            "big_blind": self.big_blind,
            "players": players,
            "winners": self.get_winners(),
        }

    def _log_action(self, action: str, details: Dict[str, Any]) -> None:
        """Log an action to hand history."""
        self.hand_history.append({
            "action": action,
            "state": self.state.name,
            **details
        })
