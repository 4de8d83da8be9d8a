"""
This module contains the SessionStats class which tracks the results of a
playing session by listening to a game's events.
"""

from collections import Counter
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from sharpjack.blackjack.constants import Result
from sharpjack.events import EngineEventType, EventEmitter


class SessionStats:
    """
    Statistics of one session at the table.

    >>> stats = SessionStats(starting_balance=1000)
    >>> stats.record_round([Result.WIN], wagered=100, payout=200)
    >>> stats.report()["net_result"]
    100
    """

    def __init__(self, starting_balance: int = 0):
        self.starting_balance = starting_balance
        self.rounds_played = 0
        self.total_wagered = 0
        self.hand_results: Counter = Counter()
        self.round_nets: List[int] = []
        self._unsubscribe: List[Callable] = []

    def attach(self, events: EventEmitter) -> "SessionStats":
        """Start recording every round the emitter reports."""
        self._unsubscribe.append(
            events.on(EngineEventType.ROUND_ENDED, self._on_round_ended)
        )
        return self

    def detach(self) -> None:
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []

    def _on_round_ended(self, data: Dict[str, Any]) -> None:
        self.record_round(data["results"], data["wagered"], data["payout"])

    def record_round(self, results: List[Result], wagered: int, payout: int) -> None:
        """Record one settled round."""
        self.rounds_played += 1
        self.total_wagered += wagered
        self.hand_results.update(results)
        self.round_nets.append(payout - wagered)

    def balance_history(self) -> np.ndarray:
        """Balance after each round, starting balance first."""
        return self.starting_balance + np.concatenate(
            ([0], np.cumsum(self.round_nets, dtype=np.int64))
        )

    def max_drawdown(self) -> int:
        """Largest drop of the balance from a previous high."""
        history = self.balance_history()
        return int(np.max(np.maximum.accumulate(history) - history))

    def report(self) -> Dict[str, Optional[float]]:
        """
        Returns a dictionary containing the current statistics.
        """
        nets = np.asarray(self.round_nets, dtype=float)
        return {
            "rounds_played": self.rounds_played,
            "total_wagered": self.total_wagered,
            "net_result": int(nets.sum()) if nets.size else 0,
            "mean_net_per_round": float(np.mean(nets)) if nets.size else None,
            "std_net_per_round": float(np.std(nets)) if nets.size else None,
            "max_drawdown": self.max_drawdown(),
            "blackjacks": self.hand_results[Result.BLACKJACK],
            "wins": self.hand_results[Result.WIN],
            "ties": self.hand_results[Result.TIE],
            "losses": self.hand_results[Result.LOSE],
            "surrenders": self.hand_results[Result.SURRENDERED],
        }
