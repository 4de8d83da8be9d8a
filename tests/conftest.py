"""
Pytest configuration for tests at the root level.

This module contains fixtures for building cards and scripted shoes.
"""

import pytest

from sharpjack.common.card import Card, Rank, Suit
from sharpjack.common.shoe import Shoe

_FACE_CODES = {"A": Rank.ACE, "K": Rank.KING, "Q": Rank.QUEEN, "J": Rank.JACK}


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "split: mark test as testing split scenarios")
    config.addinivalue_line(
        "markers", "surrender: mark test as testing surrender scenarios"
    )
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture
def make_cards():
    """Factory turning rank codes ("A", "K", "10", "7") into cards."""

    def _make(*codes, suit=Suit.SPADES):
        return [Card(suit, _FACE_CODES.get(code) or Rank(code)) for code in codes]

    return _make


@pytest.fixture
def stacked_shoe(make_cards):
    """Factory for a seeded shoe whose next draws are the given cards."""

    def _stack(*codes, num_decks=1, seed=7):
        shoe = Shoe(num_decks, seed=seed)
        shoe.stack(make_cards(*codes))
        return shoe

    return _stack
