import pytest

from sharpjack.blackjack.action import Action
from sharpjack.blackjack.actor import (
    Dealer,
    InsufficientFundsError,
    InvalidActionError,
    Player,
)
from sharpjack.blackjack.bankroll import Ledger
from sharpjack.blackjack.constants import Result


@pytest.fixture
def make_player(stacked_shoe, make_cards):
    """Player holding `hand` with `bet` locked in; `draws` are the next shoe cards."""

    def _make(hand, draws=(), bet=100, balance=1000):
        ledger = Ledger(balance)
        ledger.increase_bet(bet)
        player = Player(stacked_shoe(*draws), ledger)
        player.start_round(bet)
        for card in make_cards(*hand):
            player.receive_card(card)
        return player

    return _make


class TestPlayerHit:
    def test_hit_adds_card(self, make_player):
        player = make_player(("10", "2"), draws=("5",))
        assert player.hit() is False
        assert player.active_hand.sum_of_values() == 17
        assert player.action_history == [[Action.HIT]]

    def test_hit_to_bust(self, make_player):
        player = make_player(("10", "6"), draws=("K",))
        assert player.hit() is True
        assert player.active_hand.result == Result.LOSE

    def test_hit_to_twenty_one(self, make_player):
        player = make_player(("7", "7"), draws=("7",))
        assert player.hit() is True
        assert player.active_hand.result == Result.WIN

    def test_hit_soft_hand_demotes_ace(self, make_player):
        player = make_player(("A", "6"), draws=("10",))
        assert player.hit() is False
        assert player.active_hand.sum_of_values() == 17

    def test_hit_forecloses_other_options(self, make_player):
        player = make_player(("8", "8"), draws=("2",))
        player.hit()
        assert player.valid_actions == [Action.HIT, Action.STAND]
        with pytest.raises(InvalidActionError):
            player.double_down()
        with pytest.raises(InvalidActionError):
            player.split()
        with pytest.raises(InvalidActionError):
            player.surrender()

    def test_hit_on_finished_hand(self, make_player):
        player = make_player(("10", "6"), draws=("K",))
        player.hit()
        with pytest.raises(InvalidActionError):
            player.hit()


class TestPlayerStand:
    def test_stand_finishes(self, make_player):
        player = make_player(("10", "7"))
        assert player.stand() is True
        assert player.active_hand.result == Result.NONE
        assert player.active_hand.sum_of_values() == 17


class TestPlayerDoubleDown:
    def test_double_down(self, make_player):
        player = make_player(("6", "5"), draws=("9",))
        assert player.double_down() is True
        hand = player.active_hand
        assert len(hand.cards) == 3
        assert hand.current_bet == 200
        assert player.ledger.balance == 800
        assert player.ledger.bet == 200

    def test_double_down_bust(self, make_player):
        player = make_player(("10", "6"), draws=("Q",))
        player.double_down()
        assert player.active_hand.result == Result.LOSE
        assert player.active_hand.current_bet == 200

    def test_double_down_insufficient_funds(self, make_player):
        player = make_player(("6", "5"), draws=("9",), bet=600)
        assert Action.DOUBLE not in player.valid_actions
        with pytest.raises(InsufficientFundsError):
            player.double_down()
        assert player.ledger.balance == 400
        assert player.active_hand.current_bet == 600
        assert len(player.active_hand.cards) == 2
        assert player.action_history == [[]]

    def test_double_down_demotes_every_ace_needed(self, make_player):
        player = make_player(("A", "A"), draws=("Q",))
        player.double_down()
        hand = player.active_hand
        assert [card.value for card in hand.cards] == [1, 1, 10]
        assert not hand.is_busted
        assert hand.result == Result.NONE

    def test_double_down_with_exact_balance(self, make_player):
        player = make_player(("6", "5"), draws=("9",), bet=500)
        player.double_down()
        assert player.ledger.balance == 0
        assert player.ledger.bet == 1000


@pytest.mark.split
class TestPlayerSplit:
    def test_split_eights(self, make_player):
        player = make_player(("8", "8"), draws=("3", "10"))
        assert player.split() is False
        assert len(player.hands) == 2
        assert [len(hand.cards) for hand in player.hands] == [2, 2]
        assert [hand.sum_of_values() for hand in player.hands] == [11, 18]
        assert [hand.current_bet for hand in player.hands] == [100, 100]
        assert player.ledger.balance == 800
        assert player.ledger.bet == 200
        assert player.active_hand_index == 0

    def test_split_ten_valued_cards(self, make_player):
        player = make_player(("K", "10"), draws=("2", "3"))
        player.split()
        assert [hand.cards[0].value for hand in player.hands] == [10, 10]

    def test_split_to_blackjack_finishes_first_hand(self, make_player):
        player = make_player(("K", "K"), draws=("A", "5"))
        assert player.split() is True
        assert player.hands[0].result == Result.BLACKJACK
        assert player.hands[1].result == Result.NONE

    def test_split_aces_keeps_ace_count(self, make_player):
        player = make_player(("A", "A"), draws=("A", "9"))
        player.split()
        first, second = player.hands
        assert first.ace_count == 2
        assert first.sum_of_values() == 22
        assert first.result == Result.NONE
        assert second.ace_count == 1
        assert second.sum_of_values() == 20

    def test_split_pair_of_aces_demoted_on_stand(self, make_player):
        player = make_player(("A", "A"), draws=("A", "9"))
        player.split()
        player.stand()
        assert player.hands[0].sum_of_values() == 12

    def test_cannot_split_unequal(self, make_player):
        player = make_player(("8", "9"))
        assert Action.SPLIT not in player.valid_actions
        with pytest.raises(InvalidActionError):
            player.split()

    def test_cannot_resplit(self, make_player):
        player = make_player(("8", "8"), draws=("8", "8"))
        player.split()
        assert player.hands[0].can_split
        with pytest.raises(InvalidActionError):
            player.split()

    def test_no_double_or_surrender_after_split(self, make_player):
        player = make_player(("8", "8"), draws=("3", "2"))
        player.split()
        assert player.valid_actions == [Action.HIT, Action.STAND]

    def test_split_insufficient_funds(self, make_player):
        player = make_player(("8", "8"), bet=700)
        with pytest.raises(InsufficientFundsError):
            player.split()
        assert len(player.hands) == 1
        assert len(player.active_hand.cards) == 2

    def test_advance_through_hands(self, make_player):
        player = make_player(("8", "8"), draws=("3", "2"))
        player.split()
        assert player.advance() is True
        assert player.active_hand_index == 1
        assert player.advance() is False
        assert player.active_hand_index == 1


@pytest.mark.surrender
class TestPlayerSurrender:
    def test_surrender(self, make_player):
        player = make_player(("10", "6"))
        assert player.surrender() is True
        assert player.active_hand.result == Result.SURRENDERED
        assert len(player.active_hand.cards) == 2

    def test_surrender_only_first_action(self, make_player):
        player = make_player(("10", "2"), draws=("3",))
        player.hit()
        with pytest.raises(InvalidActionError):
            player.surrender()


class TestPlayerValidActions:
    def test_fresh_pair(self, make_player):
        player = make_player(("8", "8"))
        assert player.valid_actions == [
            Action.HIT,
            Action.STAND,
            Action.DOUBLE,
            Action.SPLIT,
            Action.SURRENDER,
        ]

    def test_fresh_non_pair(self, make_player):
        player = make_player(("9", "8"))
        assert Action.SPLIT not in player.valid_actions
        assert Action.DOUBLE in player.valid_actions

    def test_start_round_resets(self, make_player):
        player = make_player(("8", "8"), draws=("3", "2"))
        player.split()
        player.start_round(50)
        assert len(player.hands) == 1
        assert player.active_hand.current_bet == 50
        assert player.active_hand.cards == []
        assert player.active_hand_index == 0
        assert player.action_history == [[]]


class TestDealer:
    def test_dealer_draws_to_seventeen(self, stacked_shoe, make_cards):
        dealer = Dealer()
        for card in make_cards("10", "2"):
            dealer.receive_card(card)
        drawn = dealer.play_turn(stacked_shoe("3", "2", "9"))
        assert [card.value for card in drawn] == [3, 2]
        assert dealer.hand.sum_of_values() == 17

    def test_dealer_stands_on_seventeen(self, stacked_shoe, make_cards):
        dealer = Dealer()
        for card in make_cards("10", "7"):
            dealer.receive_card(card)
        assert dealer.play_turn(stacked_shoe("5")) == []

    def test_dealer_stands_on_soft_seventeen(self, stacked_shoe, make_cards):
        dealer = Dealer()
        for card in make_cards("A", "6"):
            dealer.receive_card(card)
        assert dealer.play_turn(stacked_shoe("5")) == []
        assert dealer.hand.sum_of_values() == 17

    def test_dealer_demotes_ace_on_bust(self, stacked_shoe, make_cards):
        dealer = Dealer()
        for card in make_cards("A", "5"):
            dealer.receive_card(card)
        dealer.play_turn(stacked_shoe("K", "3"))
        # A5 = 16, K busts to 26 -> 16, 3 -> 19
        assert dealer.hand.sum_of_values() == 19
        assert dealer.hand.ace_count == 0

    def test_dealer_pair_of_aces(self, stacked_shoe, make_cards):
        dealer = Dealer()
        for card in make_cards("A", "A"):
            dealer.receive_card(card)
        dealer.play_turn(stacked_shoe("5"))
        # 22 -> 12 before drawing, then 17
        assert dealer.hand.sum_of_values() == 17

    def test_dealer_bust(self, stacked_shoe, make_cards):
        dealer = Dealer()
        for card in make_cards("10", "6"):
            dealer.receive_card(card)
        dealer.play_turn(stacked_shoe("9"))
        assert dealer.hand.is_busted

    def test_dealer_never_stops_below_seventeen(self):
        from sharpjack.common.shoe import Shoe

        shoe = Shoe(num_decks=1, seed=123)
        dealer = Dealer()
        for _ in range(300):
            dealer.start_round()
            dealer.receive_card(shoe.draw())
            dealer.receive_card(shoe.draw())
            drawn = dealer.play_turn(shoe)
            total = dealer.hand.sum_of_values()
            assert total >= 17
            assert len(drawn) <= 10

    def test_up_card_and_start_round(self, make_cards):
        dealer = Dealer()
        cards = make_cards("9", "K")
        for card in cards:
            dealer.receive_card(card)
        assert dealer.up_card is cards[0]
        dealer.start_round()
        assert dealer.hand.cards == []
