"""
Chip ledger for the player's balance and bet.

The ledger only relabels money between "available" (balance) and "at risk"
(bet) until a payout credits the balance. It never debits a lost hand beyond
the stake already moved into the bet.
"""

import logging
from typing import Dict

logger = logging.getLogger("sharpjack.ledger")


class Ledger:
    """
    The player's chip stack: available balance and the amount currently bet.

    >>> ledger = Ledger(1000)
    >>> ledger.increase_bet(100)
    True
    >>> ledger.balance, ledger.bet
    (900, 100)
    >>> ledger.restart_bet()
    >>> ledger.balance, ledger.bet
    (1000, 0)
    """

    def __init__(self, balance: int):
        if balance < 0:
            raise ValueError("Balance must be non-negative")
        self.balance = balance
        self.bet = 0

    @property
    def total(self) -> int:
        """Balance plus everything currently bet."""
        return self.balance + self.bet

    def can_afford(self, amount: int) -> bool:
        return amount <= self.balance

    def increase_bet(self, amount: int) -> bool:
        """
        Move `amount` from the balance onto the bet.

        Args:
            amount: Chips to add to the bet.

        Returns:
            False, leaving the ledger untouched, if the balance cannot cover it.

        Raises:
            ValueError: If amount is not positive.
        """
        if amount <= 0:
            raise ValueError(f"Bet increase must be positive, got {amount}")
        if amount > self.balance:
            logger.warning(
                f"Bet increase of {amount} refused, balance is only {self.balance}"
            )
            return False
        self.bet += amount
        self.balance -= amount
        return True

    def restart_bet(self) -> None:
        """Cancel the pending bet and return it to the balance."""
        self.balance += self.bet
        self.bet = 0

    def credit(self, amount: int) -> None:
        """Credit a payout to the balance."""
        if amount < 0:
            raise ValueError(f"Payout must be non-negative, got {amount}")
        self.balance += amount

    def clear_bet(self) -> None:
        """Forget the settled bet at the end of a round."""
        self.bet = 0

    def snapshot(self) -> Dict[str, int]:
        return {"balance": self.balance, "bet": self.bet}

    def __repr__(self) -> str:
        return f"Ledger(balance={self.balance}, bet={self.bet})"
