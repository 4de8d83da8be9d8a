"""
This module provides the `Player` and `Dealer` classes for a game of Blackjack.

The `Player` class holds one hand, or two after a split, and a cursor on the
hand currently being played. It exposes the five player actions: hit, stand,
double down, split and surrender. Each action reports whether the active hand
is finished; moving on to the next hand or to the dealer is left to the game.

The `Dealer` class holds exactly one hand and plays it automatically, drawing
while it is below 17.

Exceptions:
    - `InsufficientFundsError`: Raised when the ledger cannot cover a double down or split.
    - `InvalidActionError`: Raised when an action is not legal for the active hand.

This module is part of the `sharpjack` package.
"""

import logging
from typing import List

from sharpjack.blackjack.action import Action
from sharpjack.blackjack.bankroll import Ledger
from sharpjack.blackjack.constants import Result
from sharpjack.blackjack.hand import BlackjackHand
from sharpjack.blackjack.rules import Rules
from sharpjack.common.card import Card
from sharpjack.common.shoe import Shoe

logger = logging.getLogger("sharpjack.game")


class InsufficientFundsError(Exception):
    """Raised when a player does not have enough money to perform an action."""

    pass


class InvalidActionError(Exception):
    """Raised when a player attempts to perform an action that is not currently valid."""

    pass


class Player:
    """A player in a game of Blackjack."""

    def __init__(self, shoe: Shoe, ledger: Ledger, name: str = "Player"):
        self.name = name
        self.shoe = shoe
        self.ledger = ledger
        self.hands: List[BlackjackHand] = [BlackjackHand()]
        self.active_hand_index = 0
        self.action_history: List[List[Action]] = [[]]

    @property
    def active_hand(self) -> BlackjackHand:
        """Returns the hand the next action applies to."""
        return self.hands[self.active_hand_index]

    @property
    def has_split(self) -> bool:
        return len(self.hands) > 1

    def start_round(self, bet: int) -> None:
        """Discard the previous hands and open a single hand carrying the bet."""
        for hand in self.hands:
            hand.clear()
        self.hands = [BlackjackHand(bet)]
        self.active_hand_index = 0
        self.action_history = [[]]

    def receive_card(self, card: Card) -> None:
        """Add a dealt card to the active hand."""
        self.active_hand.add_card(card)

    def _shape_allows(self, action: Action) -> bool:
        hand = self.active_hand
        if hand.is_finished or not hand.cards:
            return False
        if action in (Action.HIT, Action.STAND):
            return True

        is_first_action = not self.action_history[self.active_hand_index]
        if not is_first_action or self.has_split or len(hand.cards) != 2:
            return False
        if action == Action.SPLIT:
            return hand.can_split
        return True

    @property
    def valid_actions(self) -> List[Action]:
        """Returns the actions the active hand allows, given the player's funds."""
        bet = self.active_hand.current_bet
        valid = []
        for action in Action:
            if not self._shape_allows(action):
                continue
            if action in (Action.DOUBLE, Action.SPLIT) and not self.ledger.can_afford(bet):
                continue
            valid.append(action)
        return valid

    def _require(self, action: Action) -> BlackjackHand:
        hand = self.active_hand
        if not self._shape_allows(action):
            raise InvalidActionError(
                f"{self.name} cannot {action.value} on hand {self.active_hand_index + 1} [{hand}]."
            )
        if action in (Action.DOUBLE, Action.SPLIT) and not self.ledger.can_afford(
            hand.current_bet
        ):
            raise InsufficientFundsError(
                f"{self.name} does not have enough money to {action.value}."
            )
        self.action_history[self.active_hand_index].append(action)
        return hand

    def hit(self) -> bool:
        """Draw one card into the active hand. Returns True if the hand is finished."""
        hand = self._require(Action.HIT)
        hand.add_card(self.shoe.draw())
        return hand.evaluate() != Result.NONE

    def stand(self) -> bool:
        """End the active hand without drawing."""
        hand = self._require(Action.STAND)
        hand.evaluate()
        hand.change_ace_if_not_split()
        return True

    def double_down(self) -> bool:
        """Double the bet, draw exactly one card and end the active hand."""
        hand = self._require(Action.DOUBLE)
        bet = hand.current_bet
        hand.add_card(self.shoe.draw())
        self.ledger.increase_bet(bet)
        hand.current_bet = 2 * bet
        hand.evaluate()
        hand.change_ace_if_not_split()

        # No further card comes, so a soft bust must be resolved now.
        while hand.is_busted and hand.is_soft:
            hand.demote_one_ace()
        if hand.is_busted:
            hand.evaluate()
        return True

    def split(self) -> bool:
        """
        Split the pair into two hands with equal bets and deal one card to each.

        Returns:
            True if the first hand is already finished after its new card.
        """
        first_hand = self._require(Action.SPLIT)
        second_hand = BlackjackHand(first_hand.current_bet)
        second_hand.add_card(first_hand.remove_second_card())
        self.ledger.increase_bet(first_hand.current_bet)

        self.hands.append(second_hand)
        self.action_history.append([])

        for hand in self.hands:
            hand.add_card(self.shoe.draw())

        self.active_hand_index = 0
        first_hand.evaluate()
        second_hand.evaluate()
        return first_hand.is_finished

    def surrender(self) -> bool:
        """Give up the active hand; half the bet comes back at payout."""
        hand = self._require(Action.SURRENDER)
        hand.result = Result.SURRENDERED
        return True

    def advance(self) -> bool:
        """Move to the next hand. Returns False if the last hand was active."""
        if self.active_hand_index + 1 < len(self.hands):
            self.active_hand_index += 1
            return True
        return False


class Dealer:
    """The dealer: one hand, played by the fixed hit-below-17 policy."""

    def __init__(self):
        self.hand = BlackjackHand()

    @property
    def up_card(self) -> Card:
        return self.hand.cards[0]

    def start_round(self) -> None:
        self.hand.clear()

    def receive_card(self, card: Card) -> None:
        self.hand.add_card(card)

    def play_turn(self, shoe: Shoe) -> List[Card]:
        """
        Draw until the hand reaches 17 or more.

        A busted hand holding an Ace worth 11 demotes it before the next check.

        Returns:
            The cards drawn.
        """
        drawn = []
        self.hand.change_ace_if_not_split()

        while Rules.should_dealer_hit(self.hand):
            card = shoe.draw()
            self.hand.add_card(card)
            drawn.append(card)
            logger.debug(f"Dealer draws {card}, hand now {self.hand.sum_of_values()}")

            if self.hand.is_busted and self.hand.ace_count > 0:
                self.hand.demote_one_ace()

        return drawn
