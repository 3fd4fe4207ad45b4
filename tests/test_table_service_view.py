from random import Random

import pytest

from seep.cards import deserialize_card
from seep.game import StateContainer
from seep.seats import Seat
from seep.service import TableService, serialize_state
from seep.state import InvalidMove


def _service():
    return TableService(StateContainer(rng=Random(11)))


def test_initial_view_hides_board_until_the_call():
    view = _service().start_round()
    assert view.phase == "calling"
    assert view.current_turn == "plyr2"
    assert view.board is None
    assert view.board_size == 4
    assert len(view.hand) == 4
    assert view.valid_calls
    assert view.deck_remaining == 32
    assert view.scores is None


def test_call_reveals_board():
    service = _service()
    view = service.start_round()
    view = service.call(Seat.PLYR2, view.valid_calls[0])
    assert view.call in range(9, 14)
    assert len(view.board) == 4
    assert view.phase == "acting"


def test_throw_away_from_payload():
    service = _service()
    view = service.start_round()
    call = view.valid_calls[0]
    service.call(Seat.PLYR2, call)
    payload = next(item for item in view.hand if deserialize_card(item).face_value() == call)

    view = service.throw_away(Seat.PLYR2, payload)
    assert view.current_turn == "plyr3"
    assert view.board[-1]["card"] == payload
    assert len(view.hand) == 3


def test_rejected_actions_raise_invalid_move():
    service = _service()
    view = service.start_round()
    with pytest.raises(InvalidMove):
        service.throw_away(Seat.PLYR1, {"rank": "two", "suit": "clubs"})
    with pytest.raises(InvalidMove):
        service.call(Seat.PLYR2, 8)
    service.call(Seat.PLYR2, view.valid_calls[0])
    with pytest.raises(InvalidMove):
        service.pickup(Seat.PLYR2, view.hand[0], [7])
    with pytest.raises(InvalidMove):
        service.add_to_stack(Seat.PLYR2, 0, view.hand[0])


def test_serialized_state_uses_camel_case_keys():
    service = _service()
    service.start_round()
    payload = serialize_state(service.container.state)
    assert payload["currentTurn"] == "plyr2"
    assert payload["moveCount"] == 1
    assert payload["boardVisible"] is False
    assert len(payload["deck"]) == 32
    assert set(payload["hands"]) == {"plyr1", "plyr2", "plyr3", "plyr4"}
