"""
Holdem Strategy - decision-support heuristics

Stateless advisors: bet sizing, opponent range estimation and the shared
hand-strength scores they rely on.
"""

from holdem.strategy.strength import Position, position_for_seat, preflop_strength, pot_odds
from holdem.strategy.betting_helper import (
    BettingAdvisor, BettingRecommendation, BoardTexture, analyze_board_texture, estimate_equity,
)
from holdem.strategy.range_analyzer import (
    HandRange, OpponentAction, OpponentTracker, RangeAnalyzer, RangeStrength,
)

__all__ = [
    "Position",
    "position_for_seat",
    "preflop_strength",
    "pot_odds",
    "BettingAdvisor",
    "BettingRecommendation",
    "BoardTexture",
    "analyze_board_texture",
    "estimate_equity",
    "HandRange",
    "OpponentAction",
    "OpponentTracker",
    "RangeAnalyzer",
    "RangeStrength",
]
