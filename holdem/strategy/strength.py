"""
Shared hand-strength scores for the decision heuristics.

All scores are in [0, 1]. Pre-flop strength is a closed-form estimate from
the two hole cards; post-flop strength is the made-hand category / 10.
"""

from __future__ import annotations
from enum import IntEnum
from typing import Sequence

from holdem.core.card import Card, Rank
from holdem.core.hand import evaluate_best
from holdem.core.rules import FLOP_CARDS


class Position(IntEnum):
    """Table position relative to the button."""
    EARLY = 0
    MIDDLE = 1
    LATE = 2


def position_for_seat(index: int, seats: int) -> Position:
    """Bucket a seat into early/middle/late thirds of the table."""
    if seats <= 0:
        return Position.LATE
    ratio = index / seats
    if ratio < 0.33:
        return Position.EARLY
    if ratio < 0.66:
        return Position.MIDDLE
    return Position.LATE


def _unpaired_score(high: int, low: int, suited: bool) -> float:
    score = 0.3
    if suited:
        score += 0.1
    if high - low <= 1:
        score += 0.1
    score += (high - 7) * 0.05
    return min(1.0, max(0.0, score))


def agent_preflop_score(hole_cards: Sequence[Card]) -> float:
    """
    Pre-flop score used by the rule-based agent.

    Premium pairs come from a fixed table; other pairs scale with rank.
    """
    if len(hole_cards) != 2:
        return 0.0
    first, second = hole_cards
    high, low = max(first.rank, second.rank), min(first.rank, second.rank)

    if high == low:
        premium = {Rank.ACE: 0.95, Rank.KING: 0.90, Rank.QUEEN: 0.85, Rank.JACK: 0.80}
        return premium.get(high, 0.60 + (int(high) - 2) * 0.02)

    return _unpaired_score(int(high), int(low), first.suit == second.suit)


def preflop_strength(hole_cards: Sequence[Card]) -> float:
    """Pre-flop strength used by the betting advisor and the range analyzer."""
    if len(hole_cards) != 2:
        return 0.0
    first, second = hole_cards
    high, low = max(first.rank, second.rank), min(first.rank, second.rank)

    if high == low:
        return min(1.0, 0.6 + (int(high) - 2) * 0.03)

    return _unpaired_score(int(high), int(low), first.suit == second.suit)


def made_hand_strength(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> float:
    """Category / 10 of the best hand, or pre-flop strength before the flop."""
    if len(community_cards) < FLOP_CARDS:
        return preflop_strength(hole_cards)
    return evaluate_best(hole_cards, community_cards).strength


def pot_odds(to_call: int, pot: int) -> float:
    """Share of the final pot a call would contribute."""
    if to_call <= 0:
        return 0.0
    return to_call / (pot + to_call)
