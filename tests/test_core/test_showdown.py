"""
Tests for showdown settlement.

These tests verify:
- The best hand takes the pot
- Tied hands split the pot
- Odd chips go to the winners closest to the dealer's left
- Winner reporting
"""

from holdem.core.rules import GameState, PlayerAction


def check_down(engine):
    """Check or call every street until the pot is settled."""
    while engine.is_hand_running():
        if engine.is_betting_round_complete():
            engine.next_stage()
            continue
        player = engine.current_player
        if not player.can_act:
            engine.next_player()
            continue
        legal = engine.get_legal_actions(player)
        action = PlayerAction.CHECK if PlayerAction.CHECK in legal else PlayerAction.CALL
        assert engine.process_player_action(player, action).success
        engine.next_player()


class TestShowdownBasics:
    """Basic showdown tests."""

    def test_best_hand_wins(self, stacked, players_factory):
        engine = stacked("As Ad Kc Kd 2h 7s 9c Jd 3h")
        players = players_factory(1000, 1000)
        engine.start_new_hand(players)
        check_down(engine)

        assert engine.state == GameState.SHOWDOWN
        assert players[0].stack == 1020
        assert players[1].stack == 980
        winners = engine.get_winners()
        assert len(winners) == 1
        assert winners[0]["player_id"] == "p0"
        assert winners[0]["hand_type"] == "PAIR"
        assert winners[0]["description"] == "Pair of Aces"

    def test_best_five_of_seven_used(self, stacked, players_factory):
        """A flush made with three board cards beats a pair."""
        engine = stacked("Ah 2h Js Kc 9h 7h 3h Jd 4s")
        players = players_factory(1000, 1000)
        engine.start_new_hand(players)
        check_down(engine)

        assert players[0].stack == 1020
        assert engine.get_winners()[0]["hand_type"] == "FLUSH"

    def test_split_pot(self, stacked, players_factory):
        """Both players play the board."""
        engine = stacked("2c 3d 2h 4c Ts 9h 8d 7c 6s")
        players = players_factory(1000, 1000)
        engine.start_new_hand(players)
        check_down(engine)

        assert players[0].stack == 1000
        assert players[1].stack == 1000
        assert {w["player_id"] for w in engine.get_winners()} == {"p0", "p1"}

    def test_odd_chip_goes_left_of_dealer(self, stacked, players_factory):
        """Pot of 25 split two ways: the seat nearer the dealer's left gets 13."""
        engine = stacked("2c 3d Ah Ad 2h 3s Ts 9h 8d 7c 6s", small_blind=5, big_blind=10)
        players = players_factory(1000, 1000, 1000)
        engine.start_new_hand(players)

        assert engine.process_player_action(players[0], PlayerAction.CALL).success
        engine.next_player()
        assert engine.process_player_action(players[1], PlayerAction.FOLD).success
        engine.next_player()
        check_down(engine)

        assert players[0].stack == 1002
        assert players[1].stack == 995
        assert players[2].stack == 1003
        assert sum(p.stack for p in players) == 3000

    def test_showdown_reveals_contender_cards(self, stacked, players_factory):
        engine = stacked("As Ad Kc Kd 2h 7s 9c Jd 3h")
        players = players_factory(1000, 1000)
        engine.start_new_hand(players)
        check_down(engine)

        state = engine.get_state(for_player_id="p0")
        assert all("cards" in p for p in state["players"])
        assert state["pot"] == 0
