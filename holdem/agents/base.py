"""
Base Agent Interface for Holdem.

This module defines the abstract base class for seats that are played by
code rather than by a person. An agent looks at a snapshot of the table
(its own seat, the board, the bet it faces and the pot) and names an action.
The table driver then asks for the chip amount that goes with it.

Usage:
    class MyAgent(BaseAgent):
        def decide(self, player, community_cards, current_bet, pot):
            return PlayerAction.CHECK
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from holdem.core.card import Card
from holdem.core.player import Player
from holdem.core.rules import PlayerAction


class BaseAgent(ABC):
    """
    Abstract base class for poker agents.

    Agents are stateless with respect to the table: every decision is a
    function of the snapshot passed in.

    Attributes:
        player_id: Seat identifier this agent plays
        name: Human-readable name
    """

    def __init__(self, player_id: str, name: Optional[str] = None):
        self.player_id = player_id
        self.name = name or f"Agent-{player_id}"

    @abstractmethod
    def decide(
        self,
        player: Player,
        community_cards: List[Card],
        current_bet: int,
        pot: int,
    ) -> PlayerAction:
        """
        Choose an action for the given snapshot.

        Args:
            player: The agent's own seat (hole cards, stack, round bet)
            community_cards: Board cards dealt so far
            current_bet: Highest bet on the table this round
            pot: Chips in the pot

        Returns:
            The chosen PlayerAction
        """

    def choose_amount(
        self,
        action: PlayerAction,
        player: Player,
        current_bet: int,
        pot: int,
        big_blind: int,
    ) -> int:
        """
        Requested total commitment for BET/RAISE; 0 for everything else.

        The engine bumps a short request up to the legal minimum.
        """
        if action == PlayerAction.BET:
            return big_blind
        if action == PlayerAction.RAISE:
            return current_bet + big_blind
        return 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.player_id}, {self.name})"
