"""
The round engine for a single-player blackjack table.

`BlackjackGame` owns the shoe, the ledger, the player and the dealer, and
sequences a round:

    AWAITING_BET -> PLAYER_TURN(hand 0[, hand 1]) -> DEALER_TURN -> SETTLED

A presentation layer drives it through the action methods (`increase_bet`,
`restart_bet`, `place_bet`, `hit`, `stand`, `double_down`, `split`,
`surrender`, `start_new_round`), listens to `game.events`, and renders
`game.snapshot()`. Every action runs to completion before it returns.

Event payloads:
    ROUND_STARTED     {"round_number", "bet"}
    PHASE_CHANGED     {"phase", "hand_index"}
    CARD_DEALT        {"to", "hand_index", "card", "face_up"}
    HAND_UPDATED      {"hand_index", "hand"}
    HAND_SPLIT        {"hands"}
    HAND_COMPLETED    {"hand_index", "hand"}
    DEALER_REVEALED   {"hand"}
    HAND_RESULT       {"hand_index", "result", "bet", "payout"}
    MONEY_PAYOUT      {"hand_index", "amount"}
    BET_CHANGED       {"bet", "balance"}
    BANKROLL_UPDATED  {"bet", "balance"}
    SHUFFLE           {"total_cards", "reshuffle_count"}
    ROUND_ENDED       {"round_number", "results", "wagered", "payout", "net", "balance"}
    GAME_OVER         {"balance"}
"""

import logging
from typing import Callable, List, Optional

from sharpjack.blackjack.action import Action
from sharpjack.blackjack.actor import (
    Dealer,
    InsufficientFundsError,
    InvalidActionError,
    Player,
)
from sharpjack.blackjack.bankroll import Ledger
from sharpjack.blackjack.constants import MIN_CHIP, Result
from sharpjack.blackjack.rules import Rules, TableConfig
from sharpjack.blackjack.state import HandSnapshot, RoundPhase, TableSnapshot
from sharpjack.common.card import Card
from sharpjack.common.shoe import Shoe
from sharpjack.events import EngineEventType, EventEmitter

logger = logging.getLogger("sharpjack.game")


class BlackjackGame:
    """A blackjack table with one player, one dealer and one shoe."""

    def __init__(
        self,
        config: Optional[TableConfig] = None,
        shoe: Optional[Shoe] = None,
        events: Optional[EventEmitter] = None,
    ):
        """
        Create a table. The configuration is trusted; call
        `TableConfig.validate()` first to check it against the table limits.

        Args:
            config: Decks, starting balance and optional shoe seed
            shoe: A ready-made shoe, e.g. a stacked one in tests
            events: Emitter to publish on; a private one is created if omitted
        """
        self.config = config or TableConfig()
        self.events = events or EventEmitter()
        self.shoe = shoe or Shoe(self.config.num_decks, seed=self.config.seed)
        self.shoe.on_reshuffle = self._on_reshuffle

        self.ledger = Ledger(self.config.initial_balance)
        self.player = Player(self.shoe, self.ledger)
        self.dealer = Dealer()

        self.phase = RoundPhase.AWAITING_BET
        self.round_number = 0

    @property
    def active_hand_index(self) -> int:
        return self.player.active_hand_index

    @property
    def dealer_revealed(self) -> bool:
        """The hole card stays face down until the dealer's turn."""
        return self.phase in (RoundPhase.DEALER_TURN, RoundPhase.SETTLED)

    @property
    def is_game_over(self) -> bool:
        """True when waiting for a bet that the balance cannot cover."""
        return (
            self.phase == RoundPhase.AWAITING_BET and self.ledger.total < MIN_CHIP
        )

    @property
    def valid_actions(self) -> List[Action]:
        if self.phase != RoundPhase.PLAYER_TURN:
            return []
        return self.player.valid_actions

    @property
    def results(self) -> List[Result]:
        return [hand.result for hand in self.player.hands]

    def snapshot(self) -> TableSnapshot:
        """Capture the table as an immutable snapshot for rendering."""
        return TableSnapshot(
            phase=self.phase,
            round_number=self.round_number,
            active_hand_index=self.player.active_hand_index,
            player_hands=tuple(HandSnapshot.of(hand) for hand in self.player.hands),
            dealer_hand=self._dealer_snapshot(),
            balance=self.ledger.balance,
            bet=self.ledger.bet,
            valid_actions=tuple(self.valid_actions),
            game_over=self.is_game_over,
        )

    def _dealer_snapshot(self) -> HandSnapshot:
        return HandSnapshot.of(
            self.dealer.hand, reveal=None if self.dealer_revealed else 1
        )

    def increase_bet(self, amount: int) -> bool:
        """
        Add chips to the pending bet.

        Returns:
            False if the balance cannot cover the chips; the ledger is unchanged.
        """
        self._require_phase(RoundPhase.AWAITING_BET, "change the bet")
        accepted = self.ledger.increase_bet(amount)
        if accepted:
            self._emit_ledger(EngineEventType.BET_CHANGED)
        return accepted

    def restart_bet(self) -> None:
        """Take the pending bet back before the deal."""
        self._require_phase(RoundPhase.AWAITING_BET, "cancel the bet")
        self.ledger.restart_bet()
        self._emit_ledger(EngineEventType.BET_CHANGED)

    def place_bet(self, amount: int = 0) -> RoundPhase:
        """
        Lock in the bet and deal the round.

        Args:
            amount: Chips to add to the pending bet before locking it in

        Raises:
            InsufficientFundsError: If `amount` exceeds the balance.
            InvalidActionError: If no bet is pending, or a round is in progress.
        """
        self._require_phase(RoundPhase.AWAITING_BET, "place a bet")
        if amount:
            if not self.ledger.increase_bet(amount):
                raise InsufficientFundsError(
                    f"Cannot bet {amount} with a balance of {self.ledger.balance}."
                )
            self._emit_ledger(EngineEventType.BET_CHANGED)
        if self.ledger.bet <= 0:
            raise InvalidActionError("A bet must be placed before the deal.")

        self.round_number += 1
        bet = self.ledger.bet
        self.player.start_round(bet)
        self.dealer.start_round()
        logger.info(f"Round {self.round_number} started with a bet of {bet}")
        self.events.emit(
            EngineEventType.ROUND_STARTED,
            {"round_number": self.round_number, "bet": bet},
        )

        self._deal_to_player(self.shoe.draw())
        self._deal_to_dealer(self.shoe.draw(), face_up=True)
        self._deal_to_player(self.shoe.draw())
        self._deal_to_dealer(self.shoe.draw(), face_up=False)

        result = self.player.hands[0].evaluate()
        self._emit_hand(EngineEventType.HAND_UPDATED, 0)
        if result != Result.NONE:
            self._settle_natural()
        else:
            self._set_phase(RoundPhase.PLAYER_TURN)
        return self.phase

    def hit(self) -> RoundPhase:
        return self._play(Action.HIT, self.player.hit)

    def stand(self) -> RoundPhase:
        return self._play(Action.STAND, self.player.stand)

    def double_down(self) -> RoundPhase:
        return self._play(Action.DOUBLE, self.player.double_down)

    def split(self) -> RoundPhase:
        return self._play(Action.SPLIT, self.player.split)

    def surrender(self) -> RoundPhase:
        return self._play(Action.SURRENDER, self.player.surrender)

    def start_new_round(self) -> RoundPhase:
        """Clear the table after settlement and wait for the next bet."""
        self._require_phase(RoundPhase.SETTLED, "start a new round")
        self.player.start_round(0)
        self.dealer.start_round()
        self.ledger.clear_bet()
        self._set_phase(RoundPhase.AWAITING_BET)
        self._emit_ledger(EngineEventType.BANKROLL_UPDATED)

        if self.is_game_over:
            logger.info(f"Game over, balance {self.ledger.balance}")
            self.events.emit(
                EngineEventType.GAME_OVER, {"balance": self.ledger.balance}
            )
        return self.phase

    def _play(self, action: Action, perform: Callable[[], bool]) -> RoundPhase:
        self._require_phase(RoundPhase.PLAYER_TURN, action.value)
        hand_index = self.player.active_hand_index
        dealt_before = {id(card) for hand in self.player.hands for card in hand.cards}

        finished = perform()
        logger.debug(
            f"{self.player.name} {action.value}s on hand {hand_index + 1}: "
            f"[{self.player.hands[hand_index]}]"
        )

        for index, hand in enumerate(self.player.hands):
            for card in hand.cards:
                if id(card) not in dealt_before:
                    self._emit_card("player", index, card, face_up=True)

        if action == Action.SPLIT:
            self.events.emit(
                EngineEventType.HAND_SPLIT,
                {"hands": [HandSnapshot.of(hand) for hand in self.player.hands]},
            )
            for index in range(len(self.player.hands)):
                self._emit_hand(EngineEventType.HAND_UPDATED, index)
        else:
            self._emit_hand(EngineEventType.HAND_UPDATED, hand_index)

        if action in (Action.DOUBLE, Action.SPLIT):
            self._emit_ledger(EngineEventType.BET_CHANGED)

        if finished:
            self._advance_turn()
        return self.phase

    def _advance_turn(self) -> None:
        """Move past every finished hand; hand the table to the dealer after the last."""
        self._emit_hand(EngineEventType.HAND_COMPLETED, self.player.active_hand_index)
        while self.player.advance():
            if not self.player.active_hand.is_finished:
                self._set_phase(RoundPhase.PLAYER_TURN)
                return
            self._emit_hand(
                EngineEventType.HAND_COMPLETED, self.player.active_hand_index
            )
        self._dealer_turn()

    def _dealer_turn(self) -> None:
        self._set_phase(RoundPhase.DEALER_TURN)
        self.events.emit(
            EngineEventType.DEALER_REVEALED, {"hand": HandSnapshot.of(self.dealer.hand)}
        )

        # Only the first hand's surrender spares the dealer from drawing.
        if self.player.hands[0].result != Result.SURRENDERED:
            for card in self.dealer.play_turn(self.shoe):
                self._emit_card("dealer", 0, card, face_up=True)
            logger.debug(
                f"Dealer stands on {self.dealer.hand.sum_of_values()}: [{self.dealer.hand}]"
            )

        for hand in self.player.hands:
            if hand.result == Result.NONE:
                hand.result = Rules.settle(hand, self.dealer.hand)

        self._pay_out()

    def _settle_natural(self) -> None:
        """Settle a blackjack dealt in the first two cards; the dealer does not draw."""
        hand = self.player.hands[0]
        if self.dealer.hand.is_blackjack:
            hand.result = Result.TIE
        self._emit_hand(EngineEventType.HAND_COMPLETED, 0)
        self.events.emit(
            EngineEventType.DEALER_REVEALED, {"hand": HandSnapshot.of(self.dealer.hand)}
        )
        self._pay_out()

    def _pay_out(self) -> None:
        wagered = self.ledger.bet
        total_payout = 0
        for index, hand in enumerate(self.player.hands):
            amount = Rules.payout(hand.result, hand.current_bet)
            self.events.emit(
                EngineEventType.HAND_RESULT,
                {
                    "hand_index": index,
                    "result": hand.result,
                    "bet": hand.current_bet,
                    "payout": amount,
                },
            )
            if amount:
                self.ledger.credit(amount)
                self.events.emit(
                    EngineEventType.MONEY_PAYOUT,
                    {"hand_index": index, "amount": amount},
                )
            total_payout += amount

        self._set_phase(RoundPhase.SETTLED)
        logger.info(
            f"Round {self.round_number} settled: "
            f"{[hand.result.name for hand in self.player.hands]}, "
            f"wagered {wagered}, paid {total_payout}, balance {self.ledger.balance}"
        )
        self.events.emit(
            EngineEventType.ROUND_ENDED,
            {
                "round_number": self.round_number,
                "results": self.results,
                "wagered": wagered,
                "payout": total_payout,
                "net": total_payout - wagered,
                "balance": self.ledger.balance,
            },
        )
        self._emit_ledger(EngineEventType.BANKROLL_UPDATED)

    def _require_phase(self, phase: RoundPhase, what: str) -> None:
        if self.phase != phase:
            raise InvalidActionError(
                f"Cannot {what} during {self.phase.name}; expected {phase.name}."
            )

    def _set_phase(self, phase: RoundPhase) -> None:
        changed = phase != self.phase
        self.phase = phase
        hand_index = (
            self.player.active_hand_index if phase == RoundPhase.PLAYER_TURN else None
        )
        if changed or phase == RoundPhase.PLAYER_TURN:
            self.events.emit(
                EngineEventType.PHASE_CHANGED, {"phase": phase, "hand_index": hand_index}
            )

    def _deal_to_player(self, card: Card) -> None:
        self.player.receive_card(card)
        self._emit_card("player", 0, card, face_up=True)

    def _deal_to_dealer(self, card: Card, face_up: bool) -> None:
        self.dealer.receive_card(card)
        self._emit_card("dealer", 0, card, face_up=face_up)

    def _emit_card(self, to: str, hand_index: int, card: Card, face_up: bool) -> None:
        self.events.emit(
            EngineEventType.CARD_DEALT,
            {
                "to": to,
                "hand_index": hand_index,
                "card": card.short if face_up else None,
                "face_up": face_up,
            },
        )

    def _emit_hand(self, event_type: EngineEventType, hand_index: int) -> None:
        self.events.emit(
            event_type,
            {
                "hand_index": hand_index,
                "hand": HandSnapshot.of(self.player.hands[hand_index]),
            },
        )

    def _emit_ledger(self, event_type: EngineEventType) -> None:
        self.events.emit(event_type, self.ledger.snapshot())

    def _on_reshuffle(self, shoe: Shoe) -> None:
        self.events.emit(
            EngineEventType.SHUFFLE,
            {"total_cards": shoe.total_cards, "reshuffle_count": shoe.reshuffle_count},
        )
