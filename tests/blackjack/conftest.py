"""
Pytest configuration and fixtures for blackjack tests.
"""

import pytest

from sharpjack.blackjack.bankroll import Ledger
from sharpjack.blackjack.game import BlackjackGame
from sharpjack.blackjack.hand import BlackjackHand
from sharpjack.blackjack.rules import TableConfig


@pytest.fixture
def make_hand(make_cards):
    """Factory for a hand holding the given rank codes."""

    def _make(*codes, bet=0):
        hand = BlackjackHand(bet)
        for card in make_cards(*codes):
            hand.add_card(card)
        return hand

    return _make


@pytest.fixture
def ledger():
    return Ledger(1000)


@pytest.fixture
def make_game(stacked_shoe):
    """
    Factory for a game whose shoe deals the given rank codes first.

    Initial deal order is player, dealer, player, dealer (hole card); later
    codes are drawn by the actions in the order they happen.
    """

    def _make(*codes, balance=1000, num_decks=1):
        shoe = stacked_shoe(*codes, num_decks=num_decks)
        config = TableConfig(num_decks=num_decks, initial_balance=balance)
        return BlackjackGame(config, shoe=shoe)

    return _make
