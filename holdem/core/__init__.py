"""
Holdem Core - Pure Python Texas Hold'em Game Logic

This module contains all game logic without any network dependencies.
"""

from holdem.core.card import Card, Deck, Rank, Suit, CardColor, parse_cards
from holdem.core.errors import (
    PokerError, IllegalActionError, InvalidConfigurationError, InsufficientCardsError,
    EmptyDeckError, InvalidTransitionError, NoEligiblePlayerError,
)
from holdem.core.player import Player
from holdem.core.hand import (
    HandRank, HandEvaluation, evaluate_five, evaluate_best, get_hand_description,
)
from holdem.core.rules import GameState, PlayerAction
from holdem.core.game import HoldemEngine, ActionResult, Pot

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "CardColor",
    "parse_cards",
    "PokerError",
    "IllegalActionError",
    "InvalidConfigurationError",
    "InsufficientCardsError",
    "EmptyDeckError",
    "InvalidTransitionError",
    "NoEligiblePlayerError",
    "Player",
    "HandRank",
    "HandEvaluation",
    "evaluate_five",
    "evaluate_best",
    "get_hand_description",
    "GameState",
    "PlayerAction",
    "HoldemEngine",
    "ActionResult",
    "Pot",
]
