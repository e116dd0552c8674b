"""
Hand Evaluation for Texas Hold'em.

evaluate_five() classifies exactly five cards; evaluate_best() finds the best
five-card hand among 5-7 cards by trying every subset (21 for seven cards).

A HandEvaluation orders first by category and then by its kicker tuple, so
``max()`` over evaluations picks the winning hand and ``==`` means a true tie.

Hand Rankings (best to worst):
10. Royal Flush: A♠ K♠ Q♠ J♠ T♠
 9. Straight Flush: 5 consecutive cards of same suit
 8. Four of a Kind
 7. Full House
 6. Flush
 5. Straight
 4. Three of a Kind
 3. Two Pair
 2. Pair
 1. High Card

Note: Ace can be low in A-2-3-4-5 straight (wheel), which is a 5-high hand.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from enum import IntEnum
from functools import total_ordering
from itertools import combinations
from typing import List, Optional, Sequence, Tuple

from holdem.core.card import Card, Rank
from holdem.core.errors import InsufficientCardsError, InvalidConfigurationError
from holdem.core.rules import HAND_SIZE, HOLE_CARDS, TOTAL_COMMUNITY_CARDS


class HandRank(IntEnum):
    """Hand categories, higher value = better hand."""
    ROYAL_FLUSH = 10
    STRAIGHT_FLUSH = 9
    FOUR_OF_A_KIND = 8
    FULL_HOUSE = 7
    FLUSH = 6
    STRAIGHT = 5
    THREE_OF_A_KIND = 4
    TWO_PAIR = 3
    PAIR = 2
    HIGH_CARD = 1

    @property
    def strength(self) -> float:
        """Category normalized to 0.1-1.0, as used by the heuristics."""
        return self.value / 10.0


HAND_RANK_NAMES = {
    HandRank.ROYAL_FLUSH: "Royal Flush",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FLUSH: "Flush",
    HandRank.STRAIGHT: "Straight",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.PAIR: "Pair",
    HandRank.HIGH_CARD: "High Card",
}

ROYAL_RANKS = frozenset({Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE})
WHEEL_RANKS = [Rank.ACE, Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO]


@total_ordering
@dataclass(frozen=True, eq=False)
class HandEvaluation:
    """
    Result of evaluating a hand.

    Attributes:
        category: The hand category
        kickers: Rank values used to break ties within the category
        cards: The five cards that make the hand (not used for comparison)
    """
    category: HandRank
    kickers: Tuple[int, ...] = ()
    cards: Tuple[Card, ...] = field(default=())

    def _key(self) -> Tuple[int, Tuple[int, ...]]:
        return (int(self.category), self.kickers)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HandEvaluation):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: HandEvaluation) -> bool:
        if not isinstance(other, HandEvaluation):
            return NotImplemented
        # Tuple comparison: element-wise, a shorter prefix is lower
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    @property
    def name(self) -> str:
        return HAND_RANK_NAMES[self.category]

    @property
    def strength(self) -> float:
        return self.category.strength


def evaluate_five(cards: Sequence[Card]) -> HandEvaluation:
    """
    Evaluate exactly five cards.

    Raises:
        InsufficientCardsError: If not exactly 5 cards are given
    """
    if len(cards) != HAND_SIZE:
        raise InsufficientCardsError(f"Need exactly 5 cards, got {len(cards)}")

    sorted_cards = tuple(sorted(cards, key=lambda c: c.rank, reverse=True))
    ranks = [c.rank for c in sorted_cards]
    rank_values = tuple(int(r) for r in ranks)

    is_flush = len({c.suit for c in sorted_cards}) == 1
    straight_high = _straight_high(ranks)

    rank_counts = Counter(ranks)
    counts = sorted(rank_counts.values(), reverse=True)

    if is_flush and set(ranks) == ROYAL_RANKS:
        return HandEvaluation(HandRank.ROYAL_FLUSH, (int(Rank.ACE),), sorted_cards)

    if is_flush and straight_high is not None:
        return HandEvaluation(HandRank.STRAIGHT_FLUSH, (int(straight_high),), sorted_cards)

    if counts == [4, 1]:
        quad = _rank_with_count(rank_counts, 4)
        kicker = _rank_with_count(rank_counts, 1)
        return HandEvaluation(
            HandRank.FOUR_OF_A_KIND, (int(quad), int(kicker)),
            _sort_by_count(sorted_cards, rank_counts),
        )

    if counts == [3, 2]:
        trips = _rank_with_count(rank_counts, 3)
        pair = _rank_with_count(rank_counts, 2)
        return HandEvaluation(
            HandRank.FULL_HOUSE, (int(trips), int(pair)),
            _sort_by_count(sorted_cards, rank_counts),
        )

    if is_flush:
        return HandEvaluation(HandRank.FLUSH, rank_values, sorted_cards)

    if straight_high is not None:
        if straight_high == Rank.FIVE:
            sorted_cards = _reorder_wheel(sorted_cards)
        return HandEvaluation(HandRank.STRAIGHT, (int(straight_high),), sorted_cards)

    if counts == [3, 1, 1]:
        trips = _rank_with_count(rank_counts, 3)
        return HandEvaluation(
            HandRank.THREE_OF_A_KIND,
            (int(trips),) + _singles(rank_counts),
            _sort_by_count(sorted_cards, rank_counts),
        )

    if counts == [2, 2, 1]:
        pairs = sorted((r for r, c in rank_counts.items() if c == 2), reverse=True)
        kicker = _rank_with_count(rank_counts, 1)
        return HandEvaluation(
            HandRank.TWO_PAIR,
            (int(pairs[0]), int(pairs[1]), int(kicker)),
            _sort_by_count(sorted_cards, rank_counts),
        )

    if counts == [2, 1, 1, 1]:
        pair = _rank_with_count(rank_counts, 2)
        return HandEvaluation(
            HandRank.PAIR,
            (int(pair),) + _singles(rank_counts),
            _sort_by_count(sorted_cards, rank_counts),
        )

    return HandEvaluation(HandRank.HIGH_CARD, rank_values, sorted_cards)


def evaluate_best(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> HandEvaluation:
    """
    Find the best five-card hand from hole and community cards.

    Args:
        hole_cards: Up to 2 private cards
        community_cards: Up to 5 board cards

    Returns:
        The maximal HandEvaluation over every 5-card subset

    Raises:
        InsufficientCardsError: If fewer than 5 cards are available
        InvalidConfigurationError: On too many hole/board cards or duplicates
    """
    if len(hole_cards) > HOLE_CARDS:
        raise InvalidConfigurationError(f"At most {HOLE_CARDS} hole cards, got {len(hole_cards)}")
    if len(community_cards) > TOTAL_COMMUNITY_CARDS:
        raise InvalidConfigurationError(
            f"At most {TOTAL_COMMUNITY_CARDS} community cards, got {len(community_cards)}"
        )

    all_cards = list(hole_cards) + list(community_cards)
    if len(all_cards) < HAND_SIZE:
        raise InsufficientCardsError(f"Need at least 5 cards, got {len(all_cards)}")
    if len(set(all_cards)) != len(all_cards):
        raise InvalidConfigurationError(f"Duplicate cards in {all_cards}")

    return max(evaluate_five(combo) for combo in combinations(all_cards, HAND_SIZE))


def _straight_high(ranks: List[Rank]) -> Optional[Rank]:
    """
    Return the high card of a straight, or None.

    The wheel (A-2-3-4-5) is a 5-high straight.
    """
    unique_ranks = sorted(set(ranks), reverse=True)
    if len(unique_ranks) != 5:
        return None

    if unique_ranks[0] - unique_ranks[4] == 4:
        return unique_ranks[0]

    if unique_ranks == WHEEL_RANKS:
        return Rank.FIVE

    return None


def _rank_with_count(rank_counts: Counter, count: int) -> Rank:
    """Get the rank that appears 'count' times."""
    for rank, c in rank_counts.items():
        if c == count:
            return rank
    raise ValueError(f"No rank with count {count}")


def _singles(rank_counts: Counter) -> Tuple[int, ...]:
    """Unpaired ranks, highest first."""
    return tuple(sorted((int(r) for r, c in rank_counts.items() if c == 1), reverse=True))


def _sort_by_count(cards: Sequence[Card], rank_counts: Counter) -> Tuple[Card, ...]:
    """Sort cards by count (descending), then by rank (descending)."""
    return tuple(sorted(cards, key=lambda c: (rank_counts[c.rank], c.rank), reverse=True))


def _reorder_wheel(cards: Sequence[Card]) -> Tuple[Card, ...]:
    """Reorder wheel straight so Ace is last (5-4-3-2-A)."""
    ace = [c for c in cards if c.rank == Rank.ACE][0]
    others = [c for c in cards if c.rank != Rank.ACE]
    return tuple(others) + (ace,)


def get_hand_description(evaluation: HandEvaluation) -> str:
    """Get a human-readable description of an evaluated hand."""
    category = evaluation.category
    kickers = evaluation.kickers

    if category == HandRank.ROYAL_FLUSH:
        return "Royal Flush"
    if category == HandRank.STRAIGHT_FLUSH:
        return f"Straight Flush, {_rank_name(kickers[0])} high"
    if category == HandRank.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_plural(kickers[0])}"
    if category == HandRank.FULL_HOUSE:
        return f"Full House, {_plural(kickers[0])} full of {_plural(kickers[1])}"
    if category == HandRank.FLUSH:
        return f"Flush, {_rank_name(kickers[0])} high"
    if category == HandRank.STRAIGHT:
        if kickers[0] == Rank.FIVE:
            return "Straight, Five high (Wheel)"
        return f"Straight, {_rank_name(kickers[0])} high"
    if category == HandRank.THREE_OF_A_KIND:
        return f"Three of a Kind, {_plural(kickers[0])}"
    if category == HandRank.TWO_PAIR:
        return f"Two Pair, {_plural(kickers[0])} and {_plural(kickers[1])}"
    if category == HandRank.PAIR:
        return f"Pair of {_plural(kickers[0])}"
    return f"High Card, {_rank_name(kickers[0])}"


def _rank_name(rank_value: int) -> str:
    return Rank(rank_value).name.capitalize()


def _plural(rank_value: int) -> str:
    name = _rank_name(rank_value)
    return f"{name}es" if name == "Six" else f"{name}s"
