"""
Texas Hold'em Rules and Constants.

Single table, fixed small/big blind structure, no antes.

1. Heads-up (2 players): Dealer posts small blind, non-dealer posts big blind.
   Preflop the dealer acts first; after the flop the non-dealer acts first.

2. Minimum raise: a raise must increase the bet by at least the size of the
   previous raise in the round (never less than the big blind).

3. A hand moves strictly forward through its stages; the legal moves are
   listed in STAGE_TRANSITIONS.
"""

from enum import Enum
from typing import Dict, FrozenSet, Tuple


class GameState(Enum):
    """Stages of a hand."""
    WAITING = "WAITING"        # No hand started yet
    PRE_FLOP = "PRE_FLOP"      # Hole cards dealt, blinds posted
    FLOP = "FLOP"              # 3 community cards
    TURN = "TURN"              # 4th community card
    RIVER = "RIVER"            # 5th community card
    SHOWDOWN = "SHOWDOWN"      # Pot settled
    FINISHED = "FINISHED"      # Hand closed


class PlayerAction(Enum):
    """Actions accepted by the betting engine."""
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    BET = "BET"
    RAISE = "RAISE"
    ALL_IN = "ALL_IN"


# Default game settings
DEFAULT_SMALL_BLIND = 10
DEFAULT_BIG_BLIND = 20
DEFAULT_BUY_IN = 1000
MIN_PLAYERS = 2
MAX_PLAYERS = 10

# Cards per stage
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

# Hand evaluation
HAND_SIZE = 5  # Best 5-card hand

# Opponent modelling
MAX_OPPONENT_HISTORY = 10
TOTAL_HAND_COMBINATIONS = 1326  # C(52, 2)

BETTING_STATES = frozenset({
    GameState.PRE_FLOP, GameState.FLOP, GameState.TURN, GameState.RIVER,
})

# Stage advanced by next_stage(), and the cards dealt on the way in
STAGE_TRANSITIONS: Dict[GameState, Tuple[GameState, int]] = {
    GameState.PRE_FLOP: (GameState.FLOP, FLOP_CARDS),
    GameState.FLOP: (GameState.TURN, TURN_CARDS),
    GameState.TURN: (GameState.RIVER, RIVER_CARDS),
    GameState.RIVER: (GameState.SHOWDOWN, 0),
    GameState.SHOWDOWN: (GameState.FINISHED, 0),
}

# States from which a new hand may be started
HAND_START_STATES: FrozenSet[GameState] = frozenset({
    GameState.WAITING, GameState.SHOWDOWN, GameState.FINISHED,
})


def get_blind_positions(num_players: int, dealer_position: int) -> Tuple[int, int]:
    """
    Calculate small blind and big blind positions.

    In heads-up play the dealer posts the small blind.

    Args:
        num_players: Number of active players
        dealer_position: Position of the dealer among them (0-indexed)

    Returns:
        Tuple of (small_blind_position, big_blind_position)
    """
    if num_players < MIN_PLAYERS:
        raise ValueError("Need at least 2 players")

    if num_players == 2:
        sb_pos = dealer_position
        bb_pos = (dealer_position + 1) % num_players
    else:
        sb_pos = (dealer_position + 1) % num_players
        bb_pos = (dealer_position + 2) % num_players

    return sb_pos, bb_pos


def calculate_min_raise(current_bet: int, last_raise_amount: int, big_blind: int) -> int:
    """
    Calculate the minimum total a raise must reach.

    Args:
        current_bet: Current highest bet in the round
        last_raise_amount: The size of the last raise (the increase, not total)
        big_blind: Big blind amount

    Returns:
        Minimum total bet amount (call + raise)
    """
    return current_bet + max(last_raise_amount, big_blind)
