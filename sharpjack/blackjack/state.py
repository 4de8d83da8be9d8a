"""
Round phases and immutable snapshots of the table.

Snapshots are what a presentation layer renders. They are frozen dataclasses
built from the live engine objects, so holding on to one never lets a caller
mutate engine state.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple

from sharpjack.blackjack.action import Action
from sharpjack.blackjack.constants import Result
from sharpjack.blackjack.hand import BlackjackHand


class RoundPhase(Enum):
    """
    Phases of a round.

    AWAITING_BET -> PLAYER_TURN -> DEALER_TURN -> SETTLED -> AWAITING_BET
    """

    AWAITING_BET = auto()
    PLAYER_TURN = auto()
    DEALER_TURN = auto()
    SETTLED = auto()


@dataclass(frozen=True)
class HandSnapshot:
    """
    Immutable representation of a hand.

    Attributes:
        cards: Revealed cards, in compact form ("A♠", "10♥")
        value: Sum of the revealed cards' current values
        bet: Chips riding on the hand
        result: The hand's result, NONE while it is still open
        hidden_cards: Number of cards dealt face down
    """

    cards: Tuple[str, ...] = ()
    value: int = 0
    bet: int = 0
    result: Result = Result.NONE
    hidden_cards: int = 0

    @classmethod
    def of(cls, hand: BlackjackHand, reveal: Optional[int] = None) -> "HandSnapshot":
        """
        Snapshot a live hand.

        Args:
            hand: The hand to capture
            reveal: How many leading cards are face up; None for all of them
        """
        shown = hand.cards if reveal is None else hand.cards[:reveal]
        return cls(
            cards=tuple(card.short for card in shown),
            value=sum(card.value for card in shown),
            bet=hand.current_bet,
            result=hand.result,
            hidden_cards=len(hand.cards) - len(shown),
        )


@dataclass(frozen=True)
class TableSnapshot:
    """
    Immutable representation of the whole table.

    Attributes:
        phase: Current round phase
        round_number: Rounds started this session
        active_hand_index: Player hand the next action applies to
        player_hands: One snapshot per player hand
        dealer_hand: The dealer's hand, hole card concealed during play
        balance: Chips available to the player
        bet: Chips at risk in the current round (or pending before the deal)
        valid_actions: Actions currently legal for the active hand
        game_over: True once the balance can no longer cover the smallest chip
    """

    phase: RoundPhase
    round_number: int
    active_hand_index: int
    player_hands: Tuple[HandSnapshot, ...]
    dealer_hand: HandSnapshot
    balance: int
    bet: int
    valid_actions: Tuple[Action, ...] = field(default_factory=tuple)
    game_over: bool = False

    @property
    def results(self) -> List[Result]:
        return [hand.result for hand in self.player_hands]
