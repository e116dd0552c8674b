"""
Rule-based Agent Implementation.

A deterministic opponent driven by simple hand-strength thresholds.
Pre-flop it scores the two hole cards; after the flop it uses the made-hand
category (category / 10) and compares the price of a call against the pot.
"""

import logging
from typing import List, Optional

from holdem.agents.base import BaseAgent
from holdem.core.card import Card
from holdem.core.player import Player
from holdem.core.rules import PlayerAction
from holdem.strategy.strength import agent_preflop_score, made_hand_strength, pot_odds


logger = logging.getLogger(__name__)


class RuleBasedAgent(BaseAgent):
    """
    An agent that plays fixed thresholds on hand strength.

    With nothing to call it bets strong hands and checks the rest. Facing a
    bet it raises very strong hands, calls medium hands at a good price and
    folds everything else. Bet and raise sizes are fixed.
    """

    def __init__(
        self,
        player_id: str,
        name: Optional[str] = None,
        bet_amount: int = 50,
        raise_amount: int = 100,
    ):
        """
        Initialize the rule-based agent.

        Args:
            player_id: Unique identifier
            name: Optional name
            bet_amount: Total to bet when opening the betting
            raise_amount: Chips to add on top of the current bet when raising
        """
        super().__init__(player_id, name or f"Bot-{player_id}")
        self.bet_amount = bet_amount
        self.raise_amount = raise_amount

    def decide(
        self,
        player: Player,
        community_cards: List[Card],
        current_bet: int,
        pot: int,
    ) -> PlayerAction:
        if current_bet == 0 or current_bet == player.current_bet:
            action = self._check_or_bet(player, community_cards)
        else:
            action = self._fold_call_or_raise(player, community_cards, current_bet, pot)

        logger.debug(f"{self.player_id} decides {action.value}")
        return action

    def _strength(self, player: Player, community_cards: List[Card]) -> float:
        if not community_cards:
            return agent_preflop_score(player.hole_cards)
        return made_hand_strength(player.hole_cards, community_cards)

    def _check_or_bet(self, player: Player, community_cards: List[Card]) -> PlayerAction:
        threshold = 0.6 if not community_cards else 0.5
        if self._strength(player, community_cards) > threshold:
            return PlayerAction.BET
        return PlayerAction.CHECK

    def _fold_call_or_raise(
        self,
        player: Player,
        community_cards: List[Card],
        current_bet: int,
        pot: int,
    ) -> PlayerAction:
        strength = self._strength(player, community_cards)
        odds = pot_odds(current_bet - player.current_bet, pot)

        if not community_cards:
            raise_at, call_at, max_odds = 0.8, 0.5, 0.3
        else:
            raise_at, call_at, max_odds = 0.7, 0.4, 0.4

        if strength > raise_at:
            return PlayerAction.RAISE
        if strength > call_at and odds < max_odds:
            return PlayerAction.CALL
        return PlayerAction.FOLD

    def choose_amount(
        self,
        action: PlayerAction,
        player: Player,
        current_bet: int,
        pot: int,
        big_blind: int,
    ) -> int:
        """Fixed sizes: open for bet_amount, raise by raise_amount."""
        if action == PlayerAction.BET:
            return self.bet_amount
        if action == PlayerAction.RAISE:
            return current_bet + self.raise_amount
        return 0
