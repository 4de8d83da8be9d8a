"""
BlackjackHand: the ordered cards of one hand plus its bet, ace bookkeeping and
terminal result.

The hand evaluates itself after every card addition or stand. Ace handling is
explicit: each Ace enters the hand worth 11 and is demoted to 1 by the
evaluator once the hand would otherwise bust.
"""

import logging

from sharpjack.blackjack.constants import BLACKJACK_VALUE, Result
from sharpjack.common.card import Card
from sharpjack.common.hand import Hand

logger = logging.getLogger("sharpjack.hand")


class BlackjackHand(Hand):
    """A hand in the game of Blackjack."""

    def __init__(self, bet: int = 0):
        super().__init__()
        self.current_bet = bet
        self.ace_count = 0
        self.result = Result.NONE

    def add_card(self, card: Card) -> None:
        """Add a card, counting it if it is an Ace."""
        super().add_card(card)
        if card.is_ace:
            self.ace_count += 1

    def remove_second_card(self) -> Card:
        """
        Remove the second card of the hand, as done when splitting.

        Raises:
            ValueError: If the hand holds fewer than two cards.
        """
        if len(self._cards) < 2:
            raise ValueError("A hand needs two cards to give one up.")
        card = self.pop_card(1)
        if card.is_soft_ace:
            self.ace_count -= 1
        return card

    def clear(self) -> None:
        """Empty the hand for the next round."""
        super().clear()
        self.current_bet = 0
        self.ace_count = 0
        self.result = Result.NONE

    def sum_of_values(self) -> int:
        """Sum of the current values of the cards."""
        return sum(card.value for card in self._cards)

    @property
    def is_blackjack(self) -> bool:
        """Two cards summing to 21."""
        return len(self._cards) == 2 and self.sum_of_values() == BLACKJACK_VALUE

    @property
    def is_twenty_one(self) -> bool:
        """21 with more than two cards."""
        return len(self._cards) > 2 and self.sum_of_values() == BLACKJACK_VALUE

    @property
    def is_busted(self) -> bool:
        return self.sum_of_values() > BLACKJACK_VALUE

    @property
    def can_split(self) -> bool:
        """Two cards of equal value."""
        return len(self._cards) == 2 and self._cards[0].value == self._cards[1].value

    @property
    def is_soft(self) -> bool:
        """True if an Ace is still counted as 11."""
        return self.ace_count > 0

    @property
    def is_finished(self) -> bool:
        return self.result != Result.NONE

    def demote_one_ace(self) -> bool:
        """
        Revalue the first Ace still worth 11 to 1.

        Returns:
            False, without changing anything, if there is no such Ace.
        """
        for card in self._cards:
            if card.is_soft_ace:
                card.demote_ace()
                self.ace_count -= 1
                logger.debug(f"Ace revalued to 1, hand now {self.sum_of_values()}")
                return True
        logger.info(f"No Ace to revalue in hand [{self}]")
        return False

    def evaluate(self) -> Result:
        """
        Evaluate the hand and store the result.

        Checked in order: blackjack, twenty-one, bust without a soft Ace, and
        bust with a soft Ace. In the last case one Ace is demoted and the hand
        plays on, unless the hand is a splittable pair (two Aces at 22); that
        pair is left for `change_ace_if_not_split`.
        """
        if self.is_blackjack:
            self.result = Result.BLACKJACK
        elif self.is_twenty_one:
            self.result = Result.WIN
        elif self.is_busted and self.ace_count == 0:
            self.result = Result.LOSE
        elif self.is_busted and self.ace_count > 0 and not self.can_split:
            self.demote_one_ace()

        logger.debug(f"Evaluated [{self}] = {self.sum_of_values()}: {self.result.name}")
        return self.result

    def change_ace_if_not_split(self) -> None:
        """Demote an Ace of a busted splittable pair (two Aces worth 22)."""
        if self.is_busted and self.ace_count > 0 and self.can_split:
            self.demote_one_ace()
