"""
Pytest configuration for integration tests.

Integration tests play whole sessions on seeded shoes, so every run deals the
same cards.
"""

import pytest

from sharpjack.blackjack.game import BlackjackGame
from sharpjack.blackjack.rules import TableConfig


@pytest.fixture
def seeded_game():
    """Factory for a game on a seeded, unstacked shoe."""

    def _make(seed=2024, num_decks=1, initial_balance=1000):
        config = TableConfig(
            num_decks=num_decks, initial_balance=initial_balance, seed=seed
        ).validate()
        return BlackjackGame(config)

    return _make
