"""
Tests for Card and Deck classes.
"""

import random

import pytest
from holdem.core.card import Card, CardColor, Deck, Rank, Suit, full_deck, parse_cards
from holdem.core.errors import EmptyDeckError


class TestCard:
    """Tests for Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Suit.SPADES, Rank.ACE)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_card_from_string(self):
        """Test creating cards from string notation."""
        assert Card.from_string("As") == Card(Suit.SPADES, Rank.ACE)
        assert Card.from_string("K♥") == Card(Suit.HEARTS, Rank.KING)
        assert Card.from_string("Td") == Card(Suit.DIAMONDS, Rank.TEN)
        assert Card.from_string("10c") == Card(Suit.CLUBS, Rank.TEN)

    def test_invalid_card_string(self):
        """Test that malformed strings are rejected."""
        for bad in ("", "A", "1s", "Ax", "ZZ"):
            with pytest.raises(ValueError):
                Card.from_string(bad)

    def test_card_colors(self):
        """Hearts and diamonds are red, clubs and spades black."""
        assert Card(Suit.HEARTS, Rank.TWO).color == CardColor.RED
        assert Card(Suit.DIAMONDS, Rank.TWO).color == CardColor.RED
        assert Card(Suit.CLUBS, Rank.TWO).color == CardColor.BLACK
        assert Card(Suit.SPADES, Rank.TWO).color == CardColor.BLACK

    def test_card_is_immutable(self):
        """Cards cannot be changed after creation."""
        card = Card(Suit.SPADES, Rank.ACE)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING
        with pytest.raises(AttributeError):
            del card.suit

    def test_ordering_rank_then_suit(self):
        """Cards order by rank first, then by suit."""
        assert Card(Suit.SPADES, Rank.TWO) < Card(Suit.HEARTS, Rank.THREE)
        assert Card(Suit.HEARTS, Rank.ACE) < Card(Suit.SPADES, Rank.ACE)
        assert max(parse_cards("Kh As 2c")) == Card(Suit.SPADES, Rank.ACE)

    def test_card_hashable(self):
        """Equal cards hash equally."""
        cards = {Card(Suit.SPADES, Rank.ACE), Card.from_string("As"), Card.from_string("Kd")}
        assert len(cards) == 2

    def test_card_string_forms(self):
        """Test the display and short forms."""
        card = Card(Suit.SPADES, Rank.ACE)
        assert str(card) == "A♠"
        assert card.short_str == "As"
        assert repr(card) == "Card(As)"
        assert card.to_dict() == {"rank": "A", "suit": "♠", "text": "A♠", "color": "black"}

    def test_parse_cards(self):
        """Test parsing multiple cards."""
        assert parse_cards("As Kh") == parse_cards("AsKh")
        assert len(parse_cards("As Kh Qd Jc Ts")) == 5
        assert parse_cards("  ") == []
        with pytest.raises(ValueError):
            parse_cards("AsK")


class TestDeck:
    """Tests for Deck class."""

    def test_full_deck_is_52_distinct_cards(self):
        assert len(full_deck()) == 52
        assert len(set(full_deck())) == 52

    def test_new_deck_has_52_cards(self, deck):
        assert len(deck) == 52
        assert deck.remaining_cards() == 52

    def test_no_card_dealt_twice(self, deck):
        """Dealing the whole deck yields every card exactly once."""
        dealt = deck.deal_cards(52)
        assert len(set(dealt)) == 52
        assert deck.remaining_cards() == 0

    def test_empty_deck_raises(self, deck):
        deck.deal_cards(52)
        with pytest.raises(EmptyDeckError):
            deck.deal_card()

    def test_deal_cards_reduces_remaining(self, deck):
        cards = deck.deal_cards(5)
        assert len(cards) == 5
        assert deck.remaining_cards() == 47

    def test_reset_restores_all_cards(self, deck):
        deck.deal_cards(30)
        deck.reset()
        assert deck.remaining_cards() == 52
        assert len(set(deck.deal_cards(52))) == 52

    def test_seeded_decks_shuffle_identically(self):
        """Same seed, same order."""
        first = Deck(random.Random(3)).deal_cards(52)
        second = Deck(random.Random(3)).deal_cards(52)
        assert first == second

    def test_shuffle_changes_order(self):
        """A shuffled deck is not in construction order."""
        deck = Deck(random.Random(11))
        dealt = deck.deal_cards(52)
        assert dealt != list(reversed(full_deck()))

    def test_negative_deal_rejected(self, deck):
        with pytest.raises(ValueError):
            deck.deal_cards(-1)
