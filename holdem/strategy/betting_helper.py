"""
Bet-sizing advisor.

Suggests an action and a chip amount for the seat to act, with a confidence
and a short reason. Pre-flop advice is tiered on hole-card strength and
position; post-flop advice uses the made-hand category, board texture and
pot odds against a crude equity estimate.

The advisor is stateless; its output is advisory and never fed back into
the engine.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from holdem.core.card import Card
from holdem.core.hand import evaluate_best
from holdem.core.player import Player
from holdem.core.rules import PlayerAction
from holdem.strategy.strength import Position, made_hand_strength, pot_odds


class BoardTexture(Enum):
    """How coordinated the community cards are."""
    WET = "WET"
    DRY = "DRY"

    @property
    def is_wet(self) -> bool:
        return self is BoardTexture.WET


@dataclass(frozen=True)
class BettingRecommendation:
    """Suggested action for the seat to act."""
    action: PlayerAction
    suggested_amount: int
    confidence: float
    reasoning: str
    pot_odds: Optional[float] = None
    equity: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action.value,
            "suggested_amount": self.suggested_amount,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
            "pot_odds": self.pot_odds,
            "equity": self.equity,
        }


# Equity multiplier by number of players still in the hand (5+ uses the last)
EQUITY_DISCOUNT = {2: 1.0, 3: 0.85, 4: 0.75}
CROWDED_DISCOUNT = 0.65


def analyze_board_texture(community_cards: Sequence[Card]) -> BoardTexture:
    """
    Classify the board.

    Wet when every card shares a suit, two ranks are adjacent, or a rank is
    paired. An empty board is dry.
    """
    if not community_cards:
        return BoardTexture.DRY

    ranks = sorted(int(c.rank) for c in community_cards)
    monotone = len({c.suit for c in community_cards}) == 1
    connected = any(b - a <= 1 for a, b in zip(ranks, ranks[1:]))
    paired = len(set(ranks)) < len(ranks)

    return BoardTexture.WET if monotone or connected or paired else BoardTexture.DRY


def estimate_equity(
    hole_cards: Sequence[Card],
    community_cards: Sequence[Card],
    active_players: int,
) -> float:
    """Made-hand category / 10, discounted for the number of opponents."""
    if not hole_cards or not community_cards:
        return 0.5

    base = evaluate_best(hole_cards, community_cards).strength
    return base * EQUITY_DISCOUNT.get(active_players, CROWDED_DISCOUNT)


class BettingAdvisor:
    """
    Computes bet-sizing recommendations.

    Usage:
        advisor = BettingAdvisor()
        rec = advisor.get_betting_recommendation(
            player, board, pot=120, current_bet=40,
            position=Position.LATE, active_players=3,
        )
    """

    def get_betting_recommendation(
        self,
        player: Player,
        community_cards: Sequence[Card],
        pot: int,
        current_bet: int,
        position: int,
        active_players: int,
    ) -> BettingRecommendation:
        """
        Recommend an action for ``player``.

        Args:
            player: Seat to advise (hole cards and round bet are used)
            community_cards: Board cards dealt so far
            pot: Chips in the pot
            current_bet: Highest bet this round
            position: Position (0 early, 1 middle, 2 late)
            active_players: Players still in the hand
        """
        if not community_cards:
            strength = made_hand_strength(player.hole_cards, community_cards)
            return self._preflop(player, pot, current_bet, position, strength)

        return self._postflop(
            player, community_cards, pot, current_bet, position, active_players
        )

    def _preflop(
        self,
        player: Player,
        pot: int,
        current_bet: int,
        position: int,
        strength: float,
    ) -> BettingRecommendation:
        to_call = current_bet - player.current_bet
        aggressive = PlayerAction.BET if current_bet == 0 else PlayerAction.RAISE

        if strength > 0.85:
            return BettingRecommendation(
                aggressive,
                pot // 3 if current_bet == 0 else current_bet * 2,
                0.9,
                "Premium hand, play aggressively",
            )

        if strength > 0.65:
            if position >= Position.MIDDLE and to_call < pot / 4:
                return BettingRecommendation(
                    PlayerAction.CALL, to_call, 0.7, "Strong hand at a good price",
                )
            return BettingRecommendation(
                aggressive,
                pot // 4 if current_bet == 0 else int(current_bet * 1.5),
                0.75,
                "Strong hand, raise moderately",
            )

        if strength > 0.45 and position >= Position.MIDDLE and to_call < pot / 3:
            return BettingRecommendation(
                PlayerAction.CALL, to_call, 0.6, "Playable hand in position at a fair price",
            )

        return BettingRecommendation(PlayerAction.FOLD, 0, 0.8, "Weak hand, fold")

    def _postflop(
        self,
        player: Player,
        community_cards: Sequence[Card],
        pot: int,
        current_bet: int,
        position: int,
        active_players: int,
    ) -> BettingRecommendation:
        to_call = current_bet - player.current_bet
        odds = pot_odds(to_call, pot)
        equity = estimate_equity(player.hole_cards, community_cards, active_players)
        hand_rank = evaluate_best(player.hole_cards, community_cards).strength
        texture = analyze_board_texture(community_cards)

        if hand_rank >= 0.7:
            return BettingRecommendation(
                PlayerAction.BET if current_bet == 0 else PlayerAction.RAISE,
                int(pot * 0.75) if current_bet == 0 else current_bet * 2,
                0.95,
                "Monster hand, build the pot",
                equity=equity,
            )

        if hand_rank >= 0.5:
            bet_size = int(pot * 0.5) if texture.is_wet else int(pot * 0.33)
            if current_bet == 0:
                return BettingRecommendation(
                    PlayerAction.BET, bet_size, 0.8, "Strong hand, bet for value", equity=equity,
                )
            if odds < equity:
                return BettingRecommendation(
                    PlayerAction.CALL, to_call, 0.7, "Pot odds are favourable",
                    pot_odds=odds, equity=equity,
                )
            return BettingRecommendation(
                PlayerAction.FOLD, 0, 0.75, "Pot odds are unfavourable",
                pot_odds=odds, equity=equity,
            )

        if hand_rank < 0.3 and texture.is_wet and position >= Position.MIDDLE:
            return BettingRecommendation(
                PlayerAction.BET if current_bet == 0 else PlayerAction.FOLD,
                int(pot * 0.4) if current_bet == 0 else 0,
                0.5,
                "Bluff on a coordinated board",
                equity=equity,
            )

        return BettingRecommendation(
            PlayerAction.FOLD, 0, 0.8, "Weak hand, fold", pot_odds=odds, equity=equity,
        )
