"""
Player class for Texas Hold'em.

Manages player state including:
- Stack (chip count)
- Hole cards
- Chips committed this betting round and this hand
- Table flags (folded, all-in, dealer, blinds, active)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from holdem.core.card import Card


@dataclass
class Player:
    """
    A seat at the Texas Hold'em table.

    Attributes:
        player_id: Unique identifier for the player
        name: Display name
        stack: Current chip count (never negative)
        seat: Seat position at the table (0-indexed)
        hole_cards: The player's private cards (0 or 2)
        current_bet: Chips committed in the current betting round
        total_bet: Chips committed in the current hand (for side pots)
        is_active: Seated and eligible to be dealt in
    """
    player_id: str
    name: str
    stack: int
    seat: int = 0
    hole_cards: List[Card] = field(default_factory=list)
    current_bet: int = 0
    total_bet: int = 0
    is_folded: bool = False
    is_all_in: bool = False
    is_dealer: bool = False
    is_small_blind: bool = False
    is_big_blind: bool = False
    is_active: bool = True

    # Track if player has acted in current round (for betting round completion)
    has_acted: bool = False
    # Track last action for display
    last_action: Optional[str] = None

    def __post_init__(self) -> None:
        if self.stack < 0:
            raise ValueError(f"Stack cannot be negative: {self.stack}")

    def reset_for_new_hand(self) -> None:
        """Clear cards, bets and flags; stack and identity survive."""
        self.hole_cards = []
        self.current_bet = 0
        self.total_bet = 0
        self.is_folded = False
        self.is_all_in = False
        self.is_dealer = False
        self.is_small_blind = False
        self.is_big_blind = False
        self.has_acted = False
        self.last_action = None
        # A busted player sits out
        self.is_active = self.stack > 0

    def reset_for_new_round(self) -> None:
        """Reset per-round state for the next betting round."""
        self.current_bet = 0
        self.has_acted = False

    def deal_cards(self, cards: List[Card]) -> None:
        """Deal hole cards to the player."""
        self.hole_cards = list(cards)

    def bet(self, amount: int) -> int:
        """
        Commit chips, capped at the stack.

        Returns:
            Actual amount committed (less than asked when the stack runs out)
        """
        if amount <= 0:
            return 0

        actual_amount = min(amount, self.stack)

        self.stack -= actual_amount
        self.current_bet += actual_amount
        self.total_bet += actual_amount

        if self.stack == 0:
            self.is_all_in = True

        return actual_amount

    def fold(self) -> None:
        """Fold the hand."""
        self.is_folded = True
        self.last_action = "FOLD"

    @property
    def is_in_hand(self) -> bool:
        """Still contesting the pot (not folded, seated)."""
        return self.is_active and not self.is_folded

    @property
    def can_act(self) -> bool:
        """Check if player can still take a betting decision."""
        return self.is_in_hand and not self.is_all_in

    def to_dict(self, hide_cards: bool = True) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            hide_cards: If True, don't include hole cards
        """
        result = {
            "id": self.player_id,
            "name": self.name,
            "seat": self.seat,
            "stack": self.stack,
            "bet": self.current_bet,
            "total_bet": self.total_bet,
            "folded": self.is_folded,
            "all_in": self.is_all_in,
            "dealer": self.is_dealer,
            "small_blind": self.is_small_blind,
            "big_blind": self.is_big_blind,
            "active": self.is_active,
            "last_action": self.last_action,
        }

        if not hide_cards and self.hole_cards:
            result["cards"] = [card.to_dict() for card in self.hole_cards]

        return result

    def __repr__(self) -> str:
        return (
            f"Player({self.player_id}, stack={self.stack}, "
            f"bet={self.current_bet}, folded={self.is_folded}, all_in={self.is_all_in})"
        )

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hole_cards) if self.hole_cards else "??"
        return f"{self.name} [{cards_str}] ${self.stack}"
