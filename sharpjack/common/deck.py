"""
This module contains the Deck class, which represents a single standard
52-card deck.

>>> deck = Deck()
>>> deck.size
52
>>> deck.cards[-1]
Card(Suit.CLUBS, Rank.ACE)
"""

from typing import List, Union

from sharpjack.common.card import Card, Rank, Suit


class Deck:
    """
    A class representing a deck of cards.
    """

    SUITS = (Suit.HEARTS, Suit.DIAMONDS, Suit.SPADES, Suit.CLUBS)

    RANKS = (
        Rank.TWO,
        Rank.THREE,
        Rank.FOUR,
        Rank.FIVE,
        Rank.SIX,
        Rank.SEVEN,
        Rank.EIGHT,
        Rank.NINE,
        Rank.TEN,
        Rank.JACK,
        Rank.QUEEN,
        Rank.KING,
        Rank.ACE,
    )

    def __init__(self, cards: Union[List[Card], None] = None):
        """
        Initialize a Deck instance.

        :param cards: A list of Card instances to populate the deck (optional).
                      If not provided, a standard deck in suit-then-rank order
                      is constructed.
        """
        if cards is None:
            self.cards: List[Card] = self.initialize_default_deck()
        else:
            self.cards = cards.copy()

    def initialize_default_deck(self) -> List[Card]:
        """
        Construct a default deck with all possible combinations of suits and ranks.

        Every call builds new Card objects, since a card's value is mutable.

        :return: A list of Card instances representing the default deck.
        """
        return [Card(suit, rank) for suit in self.SUITS for rank in self.RANKS]

    @property
    def size(self) -> int:
        """Return the number of cards in the deck."""
        return len(self.cards)

    def __repr__(self) -> str:
        return f"Deck({[repr(card) for card in self.cards]})"

    def __str__(self) -> str:
        return f"Deck of {len(self.cards)} cards"
