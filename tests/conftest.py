"""
Pytest configuration and shared fixtures for Holdem tests.
"""

import random
from typing import List

import pytest
from holdem.core.card import Card, Deck, parse_cards
from holdem.core.game import HoldemEngine
from holdem.core.player import Player


class StackedDeck(Deck):
    """A deck that deals a fixed sequence of cards first (for scripted hands)."""

    def __init__(self, cards: List[Card]):
        self._stacked = list(cards)
        super().__init__(random.Random(0))

    def reset(self) -> None:
        super().reset()
        rest = [c for c in self._cards if c not in self._stacked]
        # deal_card() pops from the end
        self._cards = rest + list(reversed(self._stacked))


def make_players(*stacks: int) -> List[Player]:
    """Players p0..pN with the given stacks."""
    return [Player(f"p{i}", f"Player {i}", stack) for i, stack in enumerate(stacks)]


def stacked_engine(deal: str, small_blind: int = 10, big_blind: int = 20) -> HoldemEngine:
    """Engine whose deck deals ``deal`` (e.g. "As Ad Kc Kd ...") in order."""
    return HoldemEngine(small_blind, big_blind, deck=StackedDeck(parse_cards(deal)))


@pytest.fixture
def players_factory():
    """Build players p0..pN from a list of stacks."""
    return make_players


@pytest.fixture
def stacked():
    """Build an engine from a scripted deal."""
    return stacked_engine


@pytest.fixture
def deck():
    """Create a fresh deck with a fixed seed."""
    return Deck(random.Random(42))


@pytest.fixture
def sample_player():
    """Create a sample player with 1000 chips."""
    return Player(player_id="test_player", name="Tester", stack=1000)


@pytest.fixture
def engine():
    """Create an engine with 10/20 blinds and a seeded deck."""
    return HoldemEngine(small_blind=10, big_blind=20, deck=Deck(random.Random(7)))


@pytest.fixture
def two_players():
    return make_players(1000, 1000)


@pytest.fixture
def four_players():
    return make_players(1000, 1000, 1000, 1000)


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return parse_cards("As Ks Qs Js Ts")


@pytest.fixture
def straight_flush():
    """Create a straight flush (9-high)."""
    return parse_cards("9h 8h 7h 6h 5h")


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return parse_cards("As 2h 3d 4c 5s")
