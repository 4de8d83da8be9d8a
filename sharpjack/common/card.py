"""
This module defines the `Suit`, `Rank`, and `Card` classes, which are used to represent playing cards.

- `Suit`: An enum representing the four suits of a standard deck of playing
cards: Hearts, Diamonds, Spades, and Clubs.

- `Rank`: An enum representing the thirteen ranks of a standard deck of playing
cards: Two through Ten, Jack, Queen, King, and Ace.

- `Card`: A class representing a playing card. A card has an immutable suit and
rank, and a numeric value that starts at the rank's default value. An Ace starts
at 11 and can be demoted to 1 exactly once.

This module is part of the `sharpjack` package, a single-table blackjack engine.
"""

from enum import Enum, unique


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck.
    """

    HEARTS = "Hearts"
    DIAMONDS = "Diamonds"
    SPADES = "Spades"
    CLUBS = "Clubs"

    @property
    def symbol(self) -> str:
        """The one-character symbol of the suit."""
        return _SUIT_SYMBOLS[self]

    def __str__(self) -> str:
        return self.value


_SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.SPADES: "♠",
    Suit.CLUBS: "♣",
}


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck.
    """

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "Jack"
    QUEEN = "Queen"
    KING = "King"
    ACE = "Ace"

    @property
    def default_value(self) -> int:
        """The value a freshly dealt card of this rank is worth."""
        if self == Rank.ACE:
            return 11
        if self in (Rank.JACK, Rank.QUEEN, Rank.KING):
            return 10
        return int(self.value)

    @property
    def rank_str(self) -> str:
        """A compact string representation of the rank."""
        if self in (Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE):
            return self.value[0]
        return self.value

    def __str__(self) -> str:
        return self.value


class Card:
    """
    Class representing a playing card. This class is a member of a card deck.

    >>> card = Card(Suit.HEARTS, Rank.TWO)
    >>> print(card)
    2 of Hearts
    >>> card.value
    2
    >>> ace = Card(Suit.SPADES, Rank.ACE)
    >>> ace.value
    11
    """

    def __init__(self, suit: Suit, rank: Rank):
        """
        Initialize a Card instance.

        :param suit: Suit of the card (one of the Suit enums)
        :param rank: Rank of the card (one of the Rank enums)
        """
        if not isinstance(suit, Suit):
            raise TypeError(f"Invalid suit: {suit}")
        if not isinstance(rank, Rank):
            raise TypeError(f"Invalid rank: {rank}")
        self.suit = suit
        self.rank = rank
        self.value = rank.default_value
        self.str_rep = f"{self.rank} of {self.suit}"

    @property
    def is_ace(self) -> bool:
        return self.rank == Rank.ACE

    @property
    def is_soft_ace(self) -> bool:
        """True for an Ace still counted as 11."""
        return self.rank == Rank.ACE and self.value == 11

    @property
    def short(self) -> str:
        """Compact display form, e.g. ``A♠`` or ``10♥``."""
        return f"{self.rank.rank_str}{self.suit.symbol}"

    def demote_ace(self) -> None:
        """
        Revalue an Ace from 11 to 1.

        :raises ValueError: If the card is not an Ace still worth 11.
        """
        if not self.is_soft_ace:
            raise ValueError(f"{self} cannot be revalued to 1")
        self.value = 1

    def copy(self) -> "Card":
        """Return a fresh card of the same suit and rank, at its default value."""
        return Card(self.suit, self.rank)

    def __eq__(self, other):
        """
        Checks if this card is equal to another card.

        :param other: The other card to compare to.
        :return: True if the cards have the same rank and suit, False otherwise.
        """
        if isinstance(other, Card):
            return self.rank == other.rank and self.suit == other.suit
        return NotImplemented

    def __hash__(self):
        return hash((self.suit, self.rank))

    def __repr__(self) -> str:
        """
        Provide a machine-readable representation of the card.

        :return: A string representation of the card.
        """
        return f"Card(Suit.{self.suit.name}, Rank.{self.rank.name})"

    def __str__(self) -> str:
        """
        Provide a human-readable representation of the card.

        :return: A string representation of the card.
        """
        return self.str_rep
