"""
Tests for the agent interface and the rule-based agent.
"""

import pytest
from holdem.agents.base import BaseAgent
from holdem.agents.rule_based import RuleBasedAgent
from holdem.core.card import parse_cards
from holdem.core.player import Player
from holdem.core.rules import PlayerAction


def seat(cards, current_bet=0):
    player = Player("ai1", "Bot 1", 1000, current_bet=current_bet)
    player.deal_cards(parse_cards(cards))
    return player


@pytest.fixture
def agent():
    return RuleBasedAgent("ai1")


class AlwaysCheck(BaseAgent):
    def decide(self, player, community_cards, current_bet, pot):
        return PlayerAction.CHECK


class TestAgentInterface:
    """Tests for the base interface."""

    def test_base_agent_is_abstract(self):
        with pytest.raises(TypeError):
            BaseAgent("x")

    def test_default_name(self):
        assert AlwaysCheck("ai9").name == "Agent-ai9"
        assert AlwaysCheck("ai9", name="Nine").name == "Nine"

    def test_default_amounts(self):
        agent = AlwaysCheck("ai9")
        player = seat("As Ah")
        assert agent.choose_amount(PlayerAction.BET, player, 0, 100, 20) == 20
        assert agent.choose_amount(PlayerAction.RAISE, player, 50, 100, 20) == 70
        assert agent.choose_amount(PlayerAction.CALL, player, 50, 100, 20) == 0


class TestPreflopDecisions:
    """Pre-flop thresholds."""

    def test_strong_hand_bets_when_unopened(self, agent):
        assert agent.decide(seat("As Ah"), [], 0, 30) == PlayerAction.BET

    def test_weak_hand_checks_when_unopened(self, agent):
        assert agent.decide(seat("7d 2s"), [], 0, 30) == PlayerAction.CHECK

    def test_matched_bet_counts_as_unopened(self, agent):
        """The big blind with nothing more to call checks or bets."""
        assert agent.decide(seat("7d 2s", current_bet=20), [], 20, 40) == PlayerAction.CHECK

    def test_premium_pair_raises(self, agent):
        assert agent.decide(seat("Ks Kh"), [], 20, 30) == PlayerAction.RAISE

    def test_medium_hand_calls_cheap_bet(self, agent):
        # pair of twos scores 0.60; pot odds 20 / (100 + 20) < 0.3
        assert agent.decide(seat("2s 2h"), [], 20, 100) == PlayerAction.CALL

    def test_medium_hand_folds_expensive_bet(self, agent):
        assert agent.decide(seat("2s 2h"), [], 100, 100) == PlayerAction.FOLD

    def test_weak_hand_folds(self, agent):
        assert agent.decide(seat("7d 2s"), [], 20, 30) == PlayerAction.FOLD


class TestPostflopDecisions:
    """Post-flop thresholds on category / 10."""

    def test_trips_check(self, agent):
        # trips is 0.4, not enough to bet
        assert agent.decide(seat("As Ah"), parse_cards("Ad 7c 2h"), 0, 100) == PlayerAction.CHECK

    def test_flush_bets(self, agent):
        assert agent.decide(seat("As 3s"), parse_cards("Ks 7s 2s"), 0, 100) == PlayerAction.BET

    def test_quads_raise(self, agent):
        board = parse_cards("Ad Ac 7h")
        assert agent.decide(seat("As Ah"), board, 50, 100) == PlayerAction.RAISE

    def test_straight_calls_reasonable_bet(self, agent):
        board = parse_cards("9d 8c 7h")
        assert agent.decide(seat("Ts 6h"), board, 50, 100) == PlayerAction.CALL

    def test_pair_folds_to_bet(self, agent):
        board = parse_cards("Ad 8c 2h")
        assert agent.decide(seat("As 3h"), board, 50, 100) == PlayerAction.FOLD


class TestBetSizing:
    """Fixed bet and raise sizes."""

    def test_fixed_amounts(self):
        agent = RuleBasedAgent("ai1", bet_amount=60, raise_amount=120)
        player = seat("As Ah")
        assert agent.choose_amount(PlayerAction.BET, player, 0, 100, 20) == 60
        assert agent.choose_amount(PlayerAction.RAISE, player, 40, 100, 20) == 160
        assert agent.choose_amount(PlayerAction.FOLD, player, 40, 100, 20) == 0
