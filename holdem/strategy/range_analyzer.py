"""
Opponent hand-range estimation.

Starts from all 1,326 two-card combinations and narrows them by each action
an opponent took this hand, then by the opponent's table position. Narrowing
always uses the pre-flop strength of the combination; measuring the range
against a board uses the made-hand category.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from itertools import combinations
from typing import Any, Deque, Dict, List, Optional, Sequence, Tuple
import logging

from holdem.core.card import Card, full_deck
from holdem.core.hand import evaluate_best
from holdem.core.rules import (
    GameState, PlayerAction, FLOP_CARDS, MAX_OPPONENT_HISTORY, TOTAL_HAND_COMBINATIONS,
)
from holdem.strategy.strength import Position, preflop_strength


logger = logging.getLogger(__name__)

Combo = Tuple[Card, Card]

STRONG_THRESHOLD = 0.7
MEDIUM_THRESHOLD = 0.5


@dataclass(frozen=True)
class OpponentAction:
    """One observed action by an opponent."""
    action: PlayerAction
    amount: int = 0
    stage: GameState = GameState.PRE_FLOP


@dataclass(frozen=True)
class HandRange:
    """
    Estimated holdings of one opponent.

    Attributes:
        possible_hands: Two-card combinations still consistent with the actions
        probability: Share of all 1,326 combinations that remain
        strength: Average strength of the remaining combinations
    """
    possible_hands: Tuple[Combo, ...]
    probability: float
    strength: float

    def __len__(self) -> int:
        return len(self.possible_hands)


@dataclass(frozen=True)
class RangeStrength:
    """Summary statistics of a range measured against a board."""
    average: float
    minimum: float
    maximum: float
    distribution: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "average": self.average,
            "minimum": self.minimum,
            "maximum": self.maximum,
            "distribution": dict(self.distribution),
        }


def all_combinations() -> List[Combo]:
    """Every unordered two-card combination (1,326 of them)."""
    return list(combinations(full_deck(), 2))


class RangeAnalyzer:
    """
    Narrows an opponent's possible holdings from observed actions.

    Usage:
        analyzer = RangeAnalyzer()
        hand_range = analyzer.analyze_opponent_range(actions, board, pot, position)
        summary = analyzer.evaluate_range_strength(hand_range, board)
    """

    def analyze_opponent_range(
        self,
        actions: Sequence[OpponentAction],
        community_cards: Sequence[Card],
        pot: int,
        position: int,
    ) -> HandRange:
        """
        Estimate an opponent's range.

        Args:
            actions: The opponent's actions, oldest first
            community_cards: Board cards dealt so far
            pot: Chips in the pot (for bet sizing)
            position: Opponent position (0 early, 1 middle, 2 late)
        """
        hands = all_combinations()
        for action in actions:
            hands = self._narrow_by_action(hands, action, pot)
        hands = self._narrow_by_position(hands, position)

        strengths = self._strengths(hands, community_cards)
        average = sum(strengths) / len(strengths) if strengths else 0.0

        return HandRange(
            possible_hands=tuple(hands),
            probability=len(hands) / TOTAL_HAND_COMBINATIONS,
            strength=average,
        )

    def evaluate_range_strength(
        self,
        hand_range: HandRange,
        community_cards: Sequence[Card],
    ) -> RangeStrength:
        """Average, extremes and strong/medium/weak shares of a range."""
        strengths = self._strengths(hand_range.possible_hands, community_cards)
        if not strengths:
            return RangeStrength(0.0, 0.0, 0.0, {})

        buckets: Dict[str, int] = {}
        for strength in strengths:
            if strength >= STRONG_THRESHOLD:
                bucket = "strong"
            elif strength >= MEDIUM_THRESHOLD:
                bucket = "medium"
            else:
                bucket = "weak"
            buckets[bucket] = buckets.get(bucket, 0) + 1

        total = len(strengths)
        return RangeStrength(
            average=sum(strengths) / total,
            minimum=min(strengths),
            maximum=max(strengths),
            distribution={name: count / total for name, count in buckets.items()},
        )

    def get_most_likely_hands(
        self,
        hand_range: HandRange,
        community_cards: Sequence[Card],
        count: int = 5,
    ) -> List[Tuple[Combo, float]]:
        """
        Strongest combinations in the range with their strength.

        Before the flop every combination scores 0.5, so the first ``count``
        combinations of the range are returned.
        """
        board = set(community_cards)
        scored = []
        for combo in hand_range.possible_hands:
            if board.intersection(combo):
                continue
            if len(community_cards) >= FLOP_CARDS:
                strength = evaluate_best(combo, community_cards).strength
            else:
                strength = 0.5
            scored.append((combo, strength))

        scored.sort(key=lambda item: item[1], reverse=True)
        return scored[:count]

    def _narrow_by_action(self, hands: List[Combo], action: OpponentAction, pot: int) -> List[Combo]:
        kind = action.action
        if kind == PlayerAction.FOLD:
            return []
        if kind == PlayerAction.CHECK:
            return [h for h in hands if preflop_strength(h) < 0.7]
        if kind == PlayerAction.CALL:
            return [h for h in hands if 0.3 <= preflop_strength(h) <= 0.7]
        if kind in (PlayerAction.BET, PlayerAction.RAISE):
            ratio = action.amount / pot if pot > 0 else float("inf")
            if ratio > 0.75:
                floor = 0.7
            elif ratio > 0.5:
                floor = 0.6
            else:
                floor = 0.4
            return [h for h in hands if preflop_strength(h) > floor]
        if kind == PlayerAction.ALL_IN:
            return [h for h in hands if preflop_strength(h) > 0.75]
        return hands

    def _narrow_by_position(self, hands: List[Combo], position: int) -> List[Combo]:
        if position == Position.EARLY:
            return [h for h in hands if preflop_strength(h) > 0.5]
        if position == Position.MIDDLE:
            return [h for h in hands if preflop_strength(h) > 0.4]
        return hands

    def _strengths(self, hands: Sequence[Combo], community_cards: Sequence[Card]) -> List[float]:
        if len(community_cards) < FLOP_CARDS:
            return [preflop_strength(h) for h in hands]

        # Combos holding a board card are impossible
        board = set(community_cards)
        return [
            evaluate_best(h, community_cards).strength
            for h in hands if not board.intersection(h)
        ]


class OpponentTracker:
    """
    Rolling action history per opponent.

    Each opponent keeps at most ``max_history`` actions; older ones fall off.
    """

    def __init__(self, max_history: int = MAX_OPPONENT_HISTORY):
        self.max_history = max_history
        self._history: Dict[str, Deque[OpponentAction]] = {}

    def record(
        self,
        player_id: str,
        action: PlayerAction,
        amount: int = 0,
        stage: GameState = GameState.PRE_FLOP,
    ) -> None:
        """Append an action to the opponent's history."""
        history = self._history.setdefault(player_id, deque(maxlen=self.max_history))
        history.append(OpponentAction(action, amount, stage))
        logger.debug(f"Tracked {player_id}: {action.value} {amount} on {stage.name}")

    def actions_for(self, player_id: str) -> List[OpponentAction]:
        """Recorded actions for one opponent, oldest first."""
        return list(self._history.get(player_id, ()))

    def clear(self, player_id: Optional[str] = None) -> None:
        """Forget one opponent, or everybody."""
        if player_id is None:
            self._history.clear()
        else:
            self._history.pop(player_id, None)

    def __contains__(self, player_id: str) -> bool:
        return player_id in self._history
