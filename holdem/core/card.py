"""
Card and Deck classes for Texas Hold'em.

Ranks carry their poker value directly (2..14, Ace high) so hand evaluation
can do arithmetic on them. The Ace only plays low inside the wheel straight,
which the evaluator handles as a special case.
"""

from __future__ import annotations
import random
from enum import Enum, IntEnum
from functools import total_ordering
from typing import List, Optional

from holdem.core.errors import EmptyDeckError


class CardColor(Enum):
    """Card colors."""
    RED = "red"
    BLACK = "black"


class Suit(IntEnum):
    """Card suits. The integer value only breaks ordering ties between equal ranks."""
    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3

    @property
    def color(self) -> CardColor:
        if self in (Suit.HEARTS, Suit.DIAMONDS):
            return CardColor.RED
        return CardColor.BLACK

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self]


class Rank(IntEnum):
    """Card ranks from 2 (lowest) to Ace (14)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def symbol(self) -> str:
        return RANK_CHARS[self]


SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

SUIT_CHARS = {
    Suit.HEARTS: "h",
    Suit.DIAMONDS: "d",
    Suit.CLUBS: "c",
    Suit.SPADES: "s",
}

RANK_CHARS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "T",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

CHAR_TO_RANK = {v: k for k, v in RANK_CHARS.items()}
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}

DECK_SIZE = 52


@total_ordering
class Card:
    """
    An immutable playing card.

    Cards can be created from:
    - Suit and Rank enums: Card(Suit.SPADES, Rank.ACE)
    - String notation: Card.from_string("As"), Card.from_string("10♠")

    Equality and ordering use rank first, then suit.
    """

    __slots__ = ("_suit", "_rank")

    def __init__(self, suit: Suit, rank: Rank):
        object.__setattr__(self, "_suit", Suit(suit))
        object.__setattr__(self, "_rank", Rank(rank))

    def __setattr__(self, name, value):
        raise AttributeError("Card is immutable")

    def __delattr__(self, name):
        raise AttributeError("Card is immutable")

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def color(self) -> CardColor:
        return self._suit.color

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts "As", "Kh", "Td", "10d", "2c" and the symbol forms "A♠", "10♥".
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_part, suit_part = s[:-1].upper(), s[-1]
        if rank_part == "10":
            rank_part = "T"
        if rank_part not in CHAR_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_part}")

        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part}")

        return cls(suit, CHAR_TO_RANK[rank_part])

    def _key(self):
        return (self._rank, self._suit)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Card):
            return self._key() == other._key()
        return NotImplemented

    def __lt__(self, other: Card) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"Card({self.short_str})"

    def __str__(self) -> str:
        return f"{RANK_CHARS[self._rank]}{SUIT_SYMBOLS[self._suit]}"

    @property
    def short_str(self) -> str:
        """Short string like 'As', 'Kh'."""
        return f"{RANK_CHARS[self._rank]}{SUIT_CHARS[self._suit]}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rank": RANK_CHARS[self._rank],
            "suit": SUIT_SYMBOLS[self._suit],
            "text": str(self),
            "color": self.color.value,
        }


def full_deck() -> List[Card]:
    """All 52 cards in suit-major order."""
    return [Card(suit, rank) for suit in Suit for rank in Rank]


class Deck:
    """
    A standard 52-card deck.

    Between a reset() and exhaustion no card is dealt twice.

    Usage:
        deck = Deck()
        hole_cards = deck.deal_cards(2)
        turn = deck.deal_card()
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """Create a full, shuffled deck. Pass ``rng`` for reproducible shuffles."""
        self._rng = rng or random.Random()
        self._cards: List[Card] = []
        self.reset()

    def reset(self) -> None:
        """Repopulate all 52 cards and shuffle them."""
        self._cards = full_deck()
        self.shuffle()

    def shuffle(self) -> None:
        """Shuffle the remaining cards (uniform random permutation)."""
        self._rng.shuffle(self._cards)

    def deal_card(self) -> Card:
        """
        Remove and return the next card.

        Raises:
            EmptyDeckError: If the deck is exhausted.
        """
        if not self._cards:
            raise EmptyDeckError("Cannot deal from an empty deck")
        return self._cards.pop()

    def deal_cards(self, n: int) -> List[Card]:
        """Deal n cards one after another."""
        if n < 0:
            raise ValueError(f"Cannot deal a negative number of cards: {n}")
        return [self.deal_card() for _ in range(n)]

    def remaining_cards(self) -> int:
        """Number of cards left to deal."""
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({self.remaining_cards()} cards remaining)"


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse multiple cards from a string.

    Accepts "As Kh Td" (space-separated) or "AsKhTd" (2 chars each).
    """
    cards_str = cards_str.strip()
    if not cards_str:
        return []

    if " " in cards_str:
        return [Card.from_string(s) for s in cards_str.split()]

    if len(cards_str) % 2:
        raise ValueError(f"Cannot parse cards: {cards_str}")
    return [Card.from_string(cards_str[i:i + 2]) for i in range(0, len(cards_str), 2)]
