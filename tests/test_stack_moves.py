from seep.moves import AddToStack, CreateStack
from seep.rules import apply_move
from seep.seats import Seat
from seep.stack import Stack

from .helpers import Suit, card, make_state, opening_state, stack


def test_opening_stack_takes_the_call_value_and_sweeps_matches():
    hand = (card(9, Suit.SPADES), card(9, Suit.HEARTS), card(5, Suit.CLUBS), card(13, Suit.DIAMONDS))
    board = (card(4, Suit.DIAMONDS), card(2, Suit.CLUBS), card(7, Suit.HEARTS), card(12, Suit.SPADES))
    state = opening_state(hand, board, call=9)

    after = apply_move(state, CreateStack(card(5, Suit.CLUBS), (card(4, Suit.DIAMONDS),))).state
    assert after.board[0] == card(12, Suit.SPADES)
    built = after.board[-1]
    assert isinstance(built, Stack)
    assert built.value == 9
    assert built.creator is Seat.PLYR2
    assert set(built.members) == {
        card(5, Suit.CLUBS),
        card(4, Suit.DIAMONDS),
        card(2, Suit.CLUBS),
        card(7, Suit.HEARTS),
    }
    assert after.current_turn is Seat.PLYR3


def test_create_stack_needs_a_card_of_the_declared_value_in_hand():
    state = make_state(hands={Seat.PLYR1: (card(5, Suit.CLUBS), card(2, Suit.HEARTS))}, board=(card(4, Suit.DIAMONDS),))
    outcome = apply_move(state, CreateStack(card(5, Suit.CLUBS), (card(4, Suit.DIAMONDS),), 9))
    assert not outcome.ok
    assert "another 9" in outcome.reason


def test_declared_value_must_be_nine_to_king():
    state = make_state(hands={Seat.PLYR1: (card(4, Suit.CLUBS), card(8, Suit.HEARTS))}, board=(card(4, Suit.DIAMONDS),))
    assert not apply_move(state, CreateStack(card(4, Suit.CLUBS), (card(4, Suit.DIAMONDS),), 8)).ok


def test_stack_total_must_be_a_multiple_of_declared_value():
    state = make_state(hands={Seat.PLYR1: (card(5, Suit.CLUBS), card(9, Suit.HEARTS))}, board=(card(3, Suit.DIAMONDS),))
    assert not apply_move(state, CreateStack(card(5, Suit.CLUBS), (card(3, Suit.DIAMONDS),), 9)).ok


def test_at_most_four_cards_per_stack_build():
    table = (card(2, Suit.DIAMONDS), card(3, Suit.DIAMONDS), card(1, Suit.HEARTS), card(2, Suit.HEARTS))
    state = make_state(hands={Seat.PLYR1: (card(1, Suit.CLUBS), card(9, Suit.HEARTS))}, board=table)
    outcome = apply_move(state, CreateStack(card(1, Suit.CLUBS), table, 9))
    assert not outcome.ok


def test_at_most_two_stacks_on_the_board():
    board = (
        stack(9, Seat.PLYR3, card(4, Suit.HEARTS), card(5, Suit.HEARTS)),
        stack(10, Seat.PLYR4, card(4, Suit.SPADES), card(6, Suit.SPADES)),
        card(4, Suit.DIAMONDS),
    )
    state = make_state(hands={Seat.PLYR1: (card(7, Suit.CLUBS), card(11, Suit.HEARTS))}, board=board)
    outcome = apply_move(state, CreateStack(card(7, Suit.CLUBS), (card(4, Suit.DIAMONDS),), 11))
    assert not outcome.ok


def test_new_stack_absorbs_stack_of_same_value_and_keeps_its_creator():
    existing = stack(10, Seat.PLYR2, card(4, Suit.HEARTS), card(6, Suit.HEARTS))
    state = make_state(
        hands={Seat.PLYR1: (card(7, Suit.CLUBS), card(10, Suit.SPADES))},
        board=(existing, card(3, Suit.DIAMONDS)),
    )
    after = apply_move(state, CreateStack(card(7, Suit.CLUBS), (card(3, Suit.DIAMONDS),), 10)).state
    assert len(after.board) == 1
    (built,) = after.board
    assert built.value == 10
    assert built.creator is Seat.PLYR2
    assert len(built.members) == 4


def test_stack_on_top_of_a_tight_stack():
    target = stack(9, Seat.PLYR1, card(9, Suit.CLUBS), card(9, Suit.DIAMONDS))
    state = make_state(
        hands={Seat.PLYR3: (card(9, Suit.HEARTS), card(9, Suit.SPADES))},
        board=(target,),
        current_turn=Seat.PLYR3,
    )
    after = apply_move(state, AddToStack(target, card(9, Suit.HEARTS))).state
    (updated,) = after.board
    assert updated.value == 9
    assert updated.creator is Seat.PLYR1
    assert len(updated.members) == 3


def test_teammate_of_creator_may_add_without_holding_the_value():
    target = stack(9, Seat.PLYR1, card(9, Suit.CLUBS), card(9, Suit.DIAMONDS))
    hand = (card(9, Suit.HEARTS), card(2, Suit.CLUBS))

    partner = make_state(hands={Seat.PLYR3: hand}, board=(target,), current_turn=Seat.PLYR3)
    assert apply_move(partner, AddToStack(target, card(9, Suit.HEARTS))).ok

    opponent = make_state(hands={Seat.PLYR2: hand}, board=(target,), current_turn=Seat.PLYR2)
    assert not apply_move(opponent, AddToStack(target, card(9, Suit.HEARTS))).ok

    creator = make_state(hands={Seat.PLYR1: hand}, board=(target,), current_turn=Seat.PLYR1)
    assert not apply_move(creator, AddToStack(target, card(9, Suit.HEARTS))).ok


def test_loose_stack_is_modified_to_a_new_value():
    target = stack(9, Seat.PLYR2, card(4, Suit.HEARTS), card(5, Suit.HEARTS))
    state = make_state(hands={Seat.PLYR1: (card(1, Suit.CLUBS), card(10, Suit.DIAMONDS))}, board=(target,))
    after = apply_move(state, AddToStack(target, card(1, Suit.CLUBS))).state
    (updated,) = after.board
    assert updated.value == 10
    assert updated.creator is Seat.PLYR2
    assert updated.members == (card(4, Suit.HEARTS), card(5, Suit.HEARTS), card(1, Suit.CLUBS))


def test_tight_stack_cannot_be_modified():
    target = stack(9, Seat.PLYR1, card(9, Suit.CLUBS), card(9, Suit.DIAMONDS))
    state = make_state(
        hands={Seat.PLYR2: (card(2, Suit.CLUBS), card(11, Suit.HEARTS))},
        board=(target,),
        current_turn=Seat.PLYR2,
    )
    outcome = apply_move(state, AddToStack(target, card(2, Suit.CLUBS)))
    assert not outcome.ok
    assert "tight" in outcome.reason


def test_modified_stack_is_capped_at_four_cards():
    target = stack(9, Seat.PLYR2, card(2, Suit.HEARTS), card(3, Suit.HEARTS), card(4, Suit.HEARTS))
    state = make_state(
        hands={Seat.PLYR1: (card(1, Suit.CLUBS), card(12, Suit.DIAMONDS))},
        board=(target, card(2, Suit.SPADES)),
    )
    assert target.is_loose()
    assert not apply_move(state, AddToStack(target, card(1, Suit.CLUBS), (card(2, Suit.SPADES),))).ok


def test_modification_picks_the_largest_dividing_value():
    target = stack(11, Seat.PLYR2, card(5, Suit.HEARTS), card(6, Suit.HEARTS))
    state = make_state(
        hands={Seat.PLYR1: (card(13, Suit.DIAMONDS), card(12, Suit.SPADES))},
        board=(target, card(12, Suit.CLUBS)),
    )
    after = apply_move(state, AddToStack(target, card(13, Suit.DIAMONDS), (card(12, Suit.CLUBS),))).state
    (updated,) = after.board
    # 36 divides by both 9 and 12.
    assert updated.value == 12
    assert len(updated.members) == 4


def test_modified_stack_merges_with_earlier_stack_of_new_value():
    ten = stack(10, Seat.PLYR1, card(4, Suit.CLUBS), card(6, Suit.CLUBS))
    nine = stack(9, Seat.PLYR2, card(4, Suit.HEARTS), card(5, Suit.HEARTS))
    state = make_state(
        hands={Seat.PLYR4: (card(1, Suit.DIAMONDS), card(10, Suit.SPADES))},
        board=(ten, nine),
        current_turn=Seat.PLYR4,
    )
    after = apply_move(state, AddToStack(nine, card(1, Suit.DIAMONDS))).state
    (merged,) = after.board
    assert merged.value == 10
    assert merged.creator is Seat.PLYR1
    assert merged.members == (
        card(4, Suit.CLUBS),
        card(6, Suit.CLUBS),
        card(4, Suit.HEARTS),
        card(5, Suit.HEARTS),
        card(1, Suit.DIAMONDS),
    )


def test_modified_stack_sweeps_loose_cards_of_new_value():
    target = stack(9, Seat.PLYR2, card(4, Suit.HEARTS), card(5, Suit.HEARTS))
    state = make_state(
        hands={Seat.PLYR1: (card(1, Suit.CLUBS), card(10, Suit.DIAMONDS))},
        board=(target, card(10, Suit.HEARTS), card(3, Suit.CLUBS)),
    )
    after = apply_move(state, AddToStack(target, card(1, Suit.CLUBS))).state
    assert after.board[0] == card(3, Suit.CLUBS)
    assert card(10, Suit.HEARTS) in after.board[-1].members


def test_target_must_be_on_the_board():
    ghost = stack(9, Seat.PLYR2, card(4, Suit.HEARTS), card(5, Suit.HEARTS))
    state = make_state(hands={Seat.PLYR1: (card(9, Suit.CLUBS), card(9, Suit.DIAMONDS))}, board=(card(2, Suit.CLUBS),))
    assert not apply_move(state, AddToStack(ghost, card(9, Suit.CLUBS))).ok


def test_modified_stack_merges_into_later_stack_of_new_value():
    nine = stack(9, Seat.PLYR2, card(4, Suit.HEARTS), card(5, Suit.HEARTS))
    ten = stack(10, Seat.PLYR1, card(4, Suit.CLUBS), card(6, Suit.CLUBS))
    state = make_state(
        hands={Seat.PLYR4: (card(1, Suit.DIAMONDS), card(10, Suit.SPADES))},
        board=(nine, ten),
        current_turn=Seat.PLYR4,
    )
    after = apply_move(state, AddToStack(nine, card(1, Suit.DIAMONDS))).state
    (merged,) = after.board
    assert merged.value == 10
    assert merged.creator is Seat.PLYR1
    assert merged.members[:2] == (card(4, Suit.CLUBS), card(6, Suit.CLUBS))
    assert len(merged.members) == 5


def test_opening_stack_needs_a_second_card_of_the_call():
    hand = (card(9, Suit.HEARTS), card(5, Suit.CLUBS), card(2, Suit.DIAMONDS), card(13, Suit.DIAMONDS))
    board = (card(9, Suit.CLUBS), card(4, Suit.DIAMONDS), card(7, Suit.HEARTS), card(12, Suit.SPADES))
    state = opening_state(hand, board, call=9)
    outcome = apply_move(state, CreateStack(card(9, Suit.HEARTS), (card(9, Suit.CLUBS),)))
    assert not outcome.ok
    assert "another 9" in outcome.reason
    assert outcome.state is state


def test_opening_stack_cannot_be_declared_at_another_value():
    hand = (card(9, Suit.SPADES), card(9, Suit.HEARTS), card(5, Suit.CLUBS), card(13, Suit.DIAMONDS))
    board = (card(4, Suit.DIAMONDS), card(2, Suit.CLUBS), card(7, Suit.HEARTS), card(12, Suit.SPADES))
    state = opening_state(hand, board, call=9)
    outcome = apply_move(state, CreateStack(card(5, Suit.CLUBS), (card(4, Suit.DIAMONDS),), 13))
    assert not outcome.ok
    assert outcome.state is state


def test_failed_stack_moves_leave_the_state_untouched():
    tight = stack(9, Seat.PLYR1, card(9, Suit.CLUBS), card(9, Suit.DIAMONDS))
    state = make_state(
        hands={Seat.PLYR2: (card(2, Suit.CLUBS), card(11, Suit.HEARTS))},
        board=(tight, card(9, Suit.HEARTS)),
        current_turn=Seat.PLYR2,
    )
    for move in (
        AddToStack(tight, card(2, Suit.CLUBS)),
        CreateStack(card(2, Suit.CLUBS), (card(9, Suit.HEARTS),), 10),
    ):
        outcome = apply_move(state, move)
        assert not outcome.ok
        assert outcome.state is state
        assert state.hand(Seat.PLYR2) == (card(2, Suit.CLUBS), card(11, Suit.HEARTS))
        assert state.board == (tight, card(9, Suit.HEARTS))
