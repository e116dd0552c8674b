"""
Holdem - Texas Hold'em Rules Engine

A single-table Texas Hold'em project with:
- Pure Python engine (cards, hand evaluation, betting state machine, settlement)
- Rule-based opponents and decision-support heuristics
- FastAPI server for one human against the agents

Usage:
    from holdem.core import Card, Deck, Player, HoldemEngine
    from holdem.agents import RuleBasedAgent
"""

__version__ = "0.2.0"

from holdem.core.card import Card, Deck
from holdem.core.player import Player
from holdem.core.game import HoldemEngine, ActionResult
from holdem.core.hand import HandRank, HandEvaluation, evaluate_best, evaluate_five
from holdem.core.rules import GameState, PlayerAction

__all__ = [
    "Card",
    "Deck",
    "Player",
    "HoldemEngine",
    "ActionResult",
    "HandRank",
    "HandEvaluation",
    "evaluate_best",
    "evaluate_five",
    "GameState",
    "PlayerAction",
    "__version__",
]
