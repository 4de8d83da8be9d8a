"""Blackjack-specific constants for the single fixed ruleset."""

from enum import Enum


class Result(Enum):
    """The outcome of a player's hand."""

    NONE = "none"
    BLACKJACK = "blackjack"
    WIN = "win"
    TIE = "tie"
    LOSE = "lose"
    SURRENDERED = "surrendered"


BLACKJACK_VALUE = 21
DEALER_STAND_VALUE = 17

# Amount credited back to the balance, as (numerator, denominator) of the
# hand's bet. The stake is included.
PAYOUT_RATIOS = {
    Result.BLACKJACK: (5, 2),
    Result.WIN: (2, 1),
    Result.TIE: (1, 1),
    Result.SURRENDERED: (1, 2),
    Result.LOSE: (0, 1),
    Result.NONE: (0, 1),
}

CHIP_DENOMINATIONS = (5, 10, 25, 100)
MIN_CHIP = CHIP_DENOMINATIONS[0]

MIN_DECKS = 1
MAX_DECKS = 8
MIN_INITIAL_BALANCE = 1000
MAX_INITIAL_BALANCE = 10000
