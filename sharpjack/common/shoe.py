import logging
import random
from typing import Callable, Iterable, List, Optional

from sharpjack.common.card import Card
from sharpjack.common.deck import Deck

logger = logging.getLogger("sharpjack.shoe")


class Shoe:
    """
    A multi-deck shoe that reshuffles itself at a fixed penetration.

    The shoe keeps the complete pool of cards for all decks and a live draw
    pile. Once fewer than 30% of the cards remain in the draw pile, the next
    draw first replaces the pile with a freshly shuffled copy of the pool.
    """

    RESHUFFLE_FRACTION = 0.3

    def __init__(
        self,
        num_decks: int = 1,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        on_reshuffle: Optional[Callable[["Shoe"], None]] = None,
    ):
        """
        Initialize a Shoe instance.

        :param num_decks: Number of standard 52-card decks in the shoe (default is 1)
        :param seed: Seed for the shoe's private random generator, for reproducible shuffles
        :param rng: A random.Random to shuffle with; takes precedence over seed
        :param on_reshuffle: Optional callable invoked with the shoe after every reshuffle
        """
        if num_decks < 1:
            raise ValueError("Number of decks must be at least 1")

        self.num_decks = num_decks
        self.rng = rng if rng is not None else random.Random(seed)
        self.on_reshuffle = on_reshuffle

        self.full_pool: List[Card] = []
        for _ in range(num_decks):
            self.full_pool.extend(Deck().cards)

        self.total_cards = len(self.full_pool)
        self.reshuffle_threshold: int = int(self.RESHUFFLE_FRACTION * self.total_cards)
        self.reshuffle_count = 0
        self.draw_pile: List[Card] = self._fresh_pile()

    def _fresh_pile(self) -> List[Card]:
        # Copies, so an Ace demoted in a previous shoe comes back at 11.
        pile = [card.copy() for card in self.full_pool]
        self.rng.shuffle(pile)
        return pile

    def reshuffle(self) -> None:
        """Replace the draw pile with a freshly shuffled copy of the full pool."""
        self.draw_pile = self._fresh_pile()
        self.reshuffle_count += 1
        logger.info(
            f"Shoe reshuffled ({self.total_cards} cards, reshuffle #{self.reshuffle_count})"
        )
        if self.on_reshuffle is not None:
            self.on_reshuffle(self)

    def draw(self) -> Card:
        """
        Draw the top card of the draw pile, reshuffling first if the pile has
        dropped below the reshuffle threshold.

        :return: The drawn Card
        """
        if len(self.draw_pile) < self.reshuffle_threshold:
            logger.debug(
                f"{len(self.draw_pile)} cards left, below threshold {self.reshuffle_threshold}"
            )
            self.reshuffle()

        card = self.draw_pile.pop(0)
        logger.debug(f"Drew {card}")
        return card

    def stack(self, cards: Iterable[Card]) -> None:
        """
        Put specific cards on top of the draw pile, in draw order.

        Used to script deals in tests and demos.
        """
        self.draw_pile[0:0] = list(cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining in the draw pile."""
        return len(self.draw_pile)

    def get_penetration_percentage(self) -> float:
        """Return how far through the current shoe we are, as a fraction."""
        dealt = self.total_cards - len(self.draw_pile)
        return max(0.0, dealt / self.total_cards)

    def __str__(self) -> str:
        return f"Shoe with {self.cards_remaining} cards remaining"

    def __repr__(self) -> str:
        return f"Shoe(num_decks={self.num_decks})"
