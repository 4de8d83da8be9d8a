"""
This module contains classes to represent a hand of cards.

It includes an abstract base class `AbstractHand`, and a concrete implementation `Hand`.
A hand keeps its cards in the order they were received.

Classes:

AbstractHand: An abstract base class for an ordered hand of cards.
Hand: A concrete hand with display helpers.
"""
from abc import ABC
from typing import List

from sharpjack.common.card import Card


class AbstractHand(ABC):
    """
    An abstract base class for a hand of cards.

    Subclasses hook `add_card` and `pop_card` to keep derived state in step
    with the card list.
    """

    def __init__(self):
        self._cards: List[Card] = []

    @property
    def cards(self) -> List[Card]:
        """Returns the cards in the hand."""
        return self._cards

    def add_card(self, card: Card) -> None:
        """
        Appends a card to the hand.

        Args:
            card: The card to add.
        """
        self._cards.append(card)

    def pop_card(self, index: int) -> Card:
        """
        Removes and returns the card at the given position.

        Args:
            index: Position of the card, 0 being the first card received.

        Raises:
            ValueError: If the hand has no card at that position.
        """
        if not 0 <= index < len(self._cards):
            raise ValueError(
                f"No card at position {index} in a hand of {len(self._cards)}."
            )
        return self._cards.pop(index)

    def clear(self) -> None:
        """Discard every card in the hand."""
        self._cards.clear()

    def __len__(self) -> int:
        return len(self._cards)


class Hand(AbstractHand):
    """
    A concrete hand of cards with string representations for debugging and display.
    """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.cards!r})"

    def __str__(self) -> str:
        """
        Returns a string representation of the hand for display.

        Returns:
            A string in the form "A♠, 10♥".
        """
        return ", ".join(card.short for card in self.cards)
