"""
Event system for the sharpjack engine.

The engine emits phase changes, dealt cards, hand results and ledger updates
through an `EventEmitter`. A presentation layer subscribes to the events it
renders and reads snapshots; it never needs a reference into engine internals.
"""

from collections import defaultdict
from typing import Any, Callable, Dict, Union
import logging
import threading
from enum import Enum

logger = logging.getLogger("sharpjack.events")


class EventPriority(Enum):
    """Priority levels for event handlers."""

    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3


class EventEmitter:
    """
    Event emitter with priority-ordered subscriptions.

    Features:
    - Subscriptions by event type, with priorities
    - Once-only subscriptions
    - Subscriptions to all events, with the event type passed to the handler
    - Handlers run outside the listener lock; a failing handler is logged and
      does not stop the others
    """

    def __init__(self):
        """Initialize the event emitter."""
        self._listeners = defaultdict(list)
        self._global_listeners = []
        self._listener_lock = threading.RLock()

    @staticmethod
    def _insert_by_priority(handlers: list, handler: Dict[str, Any]) -> None:
        # Higher priorities first, FIFO within a priority.
        for i, existing in enumerate(handlers):
            if existing["priority"] < handler["priority"]:
                handlers.insert(i, handler)
                return
        handlers.append(handler)

    def on(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to subscribe to (string or enum)
            callback: Function to call when event occurs, signature: fn(event_data)
            priority: Priority level for this handler

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        if isinstance(event_type, Enum):
            event_type = event_type.name

        handler = {"callback": callback, "priority": priority.value}

        with self._listener_lock:
            self._insert_by_priority(self._listeners[event_type], handler)

        def unsubscribe():
            with self._listener_lock:
                handlers = self._listeners[event_type]
                if handler in handlers:
                    handlers.remove(handler)

        return unsubscribe

    def once(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Subscribe to an event type for a single occurrence.

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        unsubscribe_ref = []

        def one_time_handler(event_data):
            try:
                callback(event_data)
            finally:
                # Unsubscribe even if the callback raises
                if unsubscribe_ref:
                    unsubscribe_ref[0]()

        unsubscribe_ref.append(self.on(event_type, one_time_handler, priority))
        return unsubscribe_ref[0]

    def on_any(
        self, callback: Callable, priority: EventPriority = EventPriority.NORMAL
    ) -> Callable:
        """
        Subscribe to all events.

        Args:
            callback: Function to call for any event, signature: fn((event_type, event_data))
            priority: Priority level for this handler

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        handler = {"callback": callback, "priority": priority.value}

        with self._listener_lock:
            self._insert_by_priority(self._global_listeners, handler)

        def unsubscribe():
            with self._listener_lock:
                if handler in self._global_listeners:
                    self._global_listeners.remove(handler)

        return unsubscribe

    def emit(self, event_type: Union[str, Enum], data: Dict[str, Any]) -> None:
        """
        Emit an event to all registered listeners.

        Args:
            event_type: The type of event to emit
            data: The data to include with the event
        """
        if isinstance(event_type, Enum):
            event_type = event_type.name

        handlers_to_call = []

        with self._listener_lock:
            for handler in self._listeners.get(event_type, []):
                handlers_to_call.append((handler["callback"], data))

            for handler in self._global_listeners:
                handlers_to_call.append((handler["callback"], (event_type, data)))

        # Call handlers outside of the lock to avoid deadlocks
        for callback, args in handlers_to_call:
            try:
                callback(args)
            except Exception as e:
                logger.error(
                    f"Error in event handler for {event_type}: {e}", exc_info=True
                )

    def remove_all_listeners(self, event_type: Union[str, Enum, None] = None) -> None:
        """
        Remove all listeners for a specific event type or all events.

        Args:
            event_type: Optional event type. If None, removes all listeners for all events.
        """
        with self._listener_lock:
            if event_type is None:
                self._listeners.clear()
                self._global_listeners.clear()
            else:
                if isinstance(event_type, Enum):
                    event_type = event_type.name
                self._listeners[event_type].clear()


class EngineEventType(Enum):
    """
    Event types emitted by the blackjack engine.

    Payloads are plain dictionaries; see `BlackjackGame` for their keys.
    """

    # Round lifecycle
    ROUND_STARTED = "round_started"
    PHASE_CHANGED = "phase_changed"
    ROUND_ENDED = "round_ended"
    GAME_OVER = "game_over"

    # Card events
    CARD_DEALT = "card_dealt"
    DEALER_REVEALED = "dealer_revealed"
    SHUFFLE = "shuffle"

    # Hand events
    HAND_UPDATED = "hand_updated"
    HAND_SPLIT = "hand_split"
    HAND_COMPLETED = "hand_completed"
    HAND_RESULT = "hand_result"

    # Money events
    BET_CHANGED = "bet_changed"
    MONEY_PAYOUT = "money_payout"
    BANKROLL_UPDATED = "bankroll_updated"
