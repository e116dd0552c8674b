"""
Tests for hand evaluation.
"""

import random
from itertools import combinations

import pytest
from holdem.core.card import Deck, parse_cards
from holdem.core.errors import InsufficientCardsError, InvalidConfigurationError
from holdem.core.hand import (
    HandEvaluation, HandRank, evaluate_best, evaluate_five, get_hand_description,
)


class TestHandRanking:
    """Tests for hand ranking detection."""

    def test_royal_flush(self, royal_flush):
        result = evaluate_five(royal_flush)
        assert result.category == HandRank.ROYAL_FLUSH
        assert result.kickers == (14,)

    def test_straight_flush(self, straight_flush):
        result = evaluate_five(straight_flush)
        assert result.category == HandRank.STRAIGHT_FLUSH
        assert result.kickers == (9,)

    def test_steel_wheel(self):
        """A-2-3-4-5 suited is a 5-high straight flush."""
        result = evaluate_five(parse_cards("Ah 2h 3h 4h 5h"))
        assert result.category == HandRank.STRAIGHT_FLUSH
        assert result.kickers == (5,)

    def test_four_of_a_kind(self):
        result = evaluate_five(parse_cards("9s 9h 9d 9c Kd"))
        assert result.category == HandRank.FOUR_OF_A_KIND
        assert result.kickers == (9, 13)

    def test_full_house(self):
        result = evaluate_five(parse_cards("Ks Kh Kd 7c 7d"))
        assert result.category == HandRank.FULL_HOUSE
        assert result.kickers == (13, 7)

    def test_flush(self):
        result = evaluate_five(parse_cards("Ad Jd 8d 5d 2d"))
        assert result.category == HandRank.FLUSH
        assert result.kickers == (14, 11, 8, 5, 2)

    def test_straight(self):
        result = evaluate_five(parse_cards("Ts 9h 8d 7c 6s"))
        assert result.category == HandRank.STRAIGHT
        assert result.kickers == (10,)

    def test_wheel_straight(self, wheel_straight):
        """The wheel is a 5-high straight with the ace played last."""
        result = evaluate_five(wheel_straight)
        assert result.category == HandRank.STRAIGHT
        assert result.kickers == (5,)
        assert result.cards[-1].short_str == "As"

    def test_ace_does_not_wrap(self):
        """Q-K-A-2-3 is not a straight."""
        result = evaluate_five(parse_cards("Qs Kh Ad 2c 3s"))
        assert result.category == HandRank.HIGH_CARD

    def test_three_of_a_kind(self):
        result = evaluate_five(parse_cards("7s 7h 7d Kc 2s"))
        assert result.category == HandRank.THREE_OF_A_KIND
        assert result.kickers == (7, 13, 2)

    def test_two_pair(self):
        result = evaluate_five(parse_cards("Js Jh 4d 4c As"))
        assert result.category == HandRank.TWO_PAIR
        assert result.kickers == (11, 4, 14)

    def test_one_pair(self):
        result = evaluate_five(parse_cards("As Ah Kd Qc Js"))
        assert result.category == HandRank.PAIR
        assert result.kickers == (14, 13, 12, 11)

    def test_high_card(self):
        result = evaluate_five(parse_cards("As Jh 8d 5c 3s"))
        assert result.category == HandRank.HIGH_CARD
        assert result.kickers == (14, 11, 8, 5, 3)

    def test_requires_exactly_five_cards(self):
        with pytest.raises(InsufficientCardsError):
            evaluate_five(parse_cards("As Kh Qd Jc"))
        with pytest.raises(InsufficientCardsError):
            evaluate_five(parse_cards("As Kh Qd Jc Ts 9s"))

    def test_strength_is_category_over_ten(self):
        assert evaluate_five(parse_cards("Ks Kh Kd 7c 7d")).strength == 0.7
        assert HandRank.HIGH_CARD.strength == 0.1


class TestHandComparison:
    """Tests for comparing hands."""

    def test_royal_flush_beats_straight_flush(self, royal_flush, straight_flush):
        assert evaluate_five(royal_flush) > evaluate_five(straight_flush)

    def test_flush_beats_straight(self):
        flush = evaluate_five(parse_cards("Ad Jd 8d 5d 2d"))
        straight = evaluate_five(parse_cards("As Kh Qd Jc Ts"))
        assert flush > straight

    def test_wheel_is_lowest_straight(self, wheel_straight):
        six_high = evaluate_five(parse_cards("6s 5h 4d 3c 2s"))
        assert evaluate_five(wheel_straight) < six_high

    def test_kicker_decides(self):
        ace_king = evaluate_five(parse_cards("As Ah Kd 9c 2s"))
        ace_queen = evaluate_five(parse_cards("Ac Ad Qd 9h 2h"))
        assert ace_king > ace_queen

    def test_two_pair_compares_high_pair_first(self):
        kings_up = evaluate_five(parse_cards("Ks Kh 2d 2c 3s"))
        queens_up = evaluate_five(parse_cards("Qs Qh Jd Jc As"))
        assert kings_up > queens_up

    def test_tie(self):
        """Same ranks in different suits are a true tie."""
        first = evaluate_five(parse_cards("As Kh Qd Jc 9s"))
        second = evaluate_five(parse_cards("Ad Kc Qh Js 9c"))
        assert first == second
        assert not first < second and not first > second
        assert hash(first) == hash(second)

    def test_shorter_kickers_compare_lower(self):
        """Element-wise comparison; a strict prefix is lower."""
        short = HandEvaluation(HandRank.PAIR, (10, 9))
        longer = HandEvaluation(HandRank.PAIR, (10, 9, 2))
        assert short < longer


class TestSevenCardEvaluation:
    """Tests for best-hand selection over 5-7 cards."""

    def test_best_five_from_seven(self):
        result = evaluate_best(parse_cards("As Ks"), parse_cards("Qs Js Ts 2h 3d"))
        assert result.category == HandRank.ROYAL_FLUSH

    def test_flush_from_six_suited(self):
        result = evaluate_best(parse_cards("Ah 2h"), parse_cards("9h 7h 5h 3h Kd"))
        assert result.category == HandRank.FLUSH
        assert result.kickers == (14, 9, 7, 5, 3)

    def test_board_plays(self):
        """Both players play the board straight."""
        board = parse_cards("Ts 9h 8d 7c 6s")
        first = evaluate_best(parse_cards("2c 3d"), board)
        second = evaluate_best(parse_cards("2h 4s"), board)
        assert first == second
        assert first.category == HandRank.STRAIGHT

    def test_five_cards_total_is_enough(self):
        result = evaluate_best(parse_cards("As Ah"), parse_cards("Kd Qc Js"))
        assert result.category == HandRank.PAIR

    def test_too_few_cards(self):
        with pytest.raises(InsufficientCardsError):
            evaluate_best(parse_cards("As Ah"), parse_cards("Kd Qc"))

    def test_invalid_card_sets(self):
        with pytest.raises(InvalidConfigurationError):
            evaluate_best(parse_cards("As Ah Ad"), parse_cards("Kd Qc Js"))
        with pytest.raises(InvalidConfigurationError):
            evaluate_best(parse_cards("As Ah"), parse_cards("Kd Qc Js Ts 9s 8s"))
        with pytest.raises(InvalidConfigurationError):
            evaluate_best(parse_cards("As Ah"), parse_cards("As Qc Js"))

    def test_matches_brute_force_over_random_hands(self):
        """evaluate_best equals the max over all 21 five-card subsets."""
        rng = random.Random(2024)
        for _ in range(200):
            cards = Deck(rng).deal_cards(7)
            expected = max(evaluate_five(combo) for combo in combinations(cards, 5))
            assert evaluate_best(cards[:2], cards[2:]) == expected


class TestHandDescription:
    """Tests for hand descriptions."""

    def test_royal_flush_description(self, royal_flush):
        assert get_hand_description(evaluate_five(royal_flush)) == "Royal Flush"

    def test_full_house_description(self):
        result = evaluate_five(parse_cards("As Ah Ad Kc Kd"))
        assert get_hand_description(result) == "Full House, Aces full of Kings"

    def test_pair_description(self):
        result = evaluate_five(parse_cards("6s 6h Kd Qc Js"))
        assert get_hand_description(result) == "Pair of Sixes"

    def test_wheel_description(self, wheel_straight):
        assert get_hand_description(evaluate_five(wheel_straight)) == "Straight, Five high (Wheel)"
