from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from sharpjack.blackjack.constants import (
    DEALER_STAND_VALUE,
    MAX_DECKS,
    MAX_INITIAL_BALANCE,
    MIN_DECKS,
    MIN_INITIAL_BALANCE,
    PAYOUT_RATIOS,
    Result,
)
from sharpjack.blackjack.hand import BlackjackHand


@dataclass
class TableConfig:
    """
    Session configuration accepted at start-up.

    Attributes:
        num_decks: Number of standard 52-card decks in the shoe
        initial_balance: Chips the player starts with
        seed: Optional seed for the shoe, for reproducible sessions
    """

    num_decks: int = 1
    initial_balance: int = 1000
    seed: Optional[int] = None

    def validate(self) -> "TableConfig":
        """
        Check the configuration against the table limits.

        Raises:
            ValueError: If the deck count or the balance is out of range.
        """
        if not MIN_DECKS <= self.num_decks <= MAX_DECKS:
            raise ValueError(
                f"num_decks must be between {MIN_DECKS} and {MAX_DECKS}, got {self.num_decks}"
            )
        if not MIN_INITIAL_BALANCE <= self.initial_balance <= MAX_INITIAL_BALANCE:
            raise ValueError(
                f"initial_balance must be between {MIN_INITIAL_BALANCE} and "
                f"{MAX_INITIAL_BALANCE}, got {self.initial_balance}"
            )
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert the configuration to a dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TableConfig":
        """Build a configuration from a dictionary, ignoring unknown keys."""
        known = {key: data[key] for key in ("num_decks", "initial_balance", "seed") if key in data}
        return cls(**known)


class Rules:
    """The single fixed ruleset of the table."""

    @staticmethod
    def should_dealer_hit(hand: BlackjackHand) -> bool:
        """The dealer draws while the hand is below 17."""
        return hand.sum_of_values() < DEALER_STAND_VALUE

    @staticmethod
    def settle(player_hand: BlackjackHand, dealer_hand: BlackjackHand) -> Result:
        """
        Compare a finished player hand with the dealer's final hand.

        Args:
            player_hand: A player hand that was not terminal before dealer play.
            dealer_hand: The dealer's hand after drawing.

        Returns:
            LOSE against a dealer blackjack, WIN against a dealer bust,
            otherwise the comparison of the sums.
        """
        if dealer_hand.is_blackjack:
            return Result.LOSE
        if dealer_hand.is_busted:
            return Result.WIN

        player_sum = player_hand.sum_of_values()
        dealer_sum = dealer_hand.sum_of_values()
        if player_sum == dealer_sum:
            return Result.TIE
        if player_sum > dealer_sum:
            return Result.WIN
        return Result.LOSE

    @staticmethod
    def payout(result: Result, bet: int) -> int:
        """
        Chips credited back for a hand, stake included.

        >>> Rules.payout(Result.BLACKJACK, 100)
        250
        >>> Rules.payout(Result.SURRENDERED, 25)
        12
        """
        numerator, denominator = PAYOUT_RATIOS[result]
        return bet * numerator // denominator
