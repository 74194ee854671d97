import pytest

from loa.core import Move, decode_move, encode_move, parse_square, sq


def test_square_notation_round_trip():
    assert str(sq(0, 0)) == "a1"
    assert str(sq(7, 7)) == "h8"
    assert parse_square("c5") == sq(2, 4)


@pytest.mark.parametrize("text", ["i1", "a9", "a0", "A1", "a10", ""])
def test_parse_square_rejects_bad_designators(text):
    with pytest.raises(ValueError):
        parse_square(text)


def test_sq_rejects_off_board_coordinates():
    with pytest.raises(ValueError):
        sq(8, 0)


def test_distance_counts_king_steps():
    assert sq(0, 0).distance(sq(3, 5)) == 5
    assert sq(2, 2).distance(sq(3, 3)) == 1
    assert sq(4, 4).distance(sq(4, 4)) == 0


def test_valid_move_lines():
    origin = sq(3, 3)
    assert origin.is_valid_move(sq(3, 7))
    assert origin.is_valid_move(sq(0, 3))
    assert origin.is_valid_move(sq(6, 0))
    assert not origin.is_valid_move(sq(4, 5))
    assert not origin.is_valid_move(origin)


def test_directions_are_clockwise_from_north():
    origin = sq(3, 3)
    assert origin.direction(sq(3, 6)) == 0
    assert origin.direction(sq(5, 5)) == 1
    assert origin.direction(sq(7, 3)) == 2
    assert origin.direction(sq(2, 2)) == 5
    with pytest.raises(ValueError):
        origin.direction(sq(4, 5))


def test_move_dest_and_rays_stop_at_the_edge():
    assert sq(0, 0).move_dest(4, 1) is None
    assert sq(0, 0).move_dest(1, 3) == sq(3, 3)
    assert sq(5, 5).ray(1) == (sq(6, 6), sq(7, 7))
    assert sq(0, 0).ray(6) == ()


def test_adjacency_edges_and_corners():
    assert len(sq(0, 0).adjacent()) == 3
    assert len(sq(0, 4).adjacent()) == 5
    assert len(sq(4, 4).adjacent()) == 8
    assert sq(7, 0).is_corner and sq(7, 0).is_edge
    assert sq(7, 3).is_edge and not sq(7, 3).is_corner
    assert not sq(3, 3).is_edge


def test_move_identity_ignores_capture_flag():
    move = Move.parse("b1-b3")
    assert move == Move(sq(1, 0), sq(1, 2))
    assert move.capture_move() == move
    assert move.capture_move().capture
    assert hash(move.capture_move()) == hash(move)
    assert str(move) == "b1-b3"
    with pytest.raises(ValueError):
        Move.parse("b1b3")


def test_move_encoding():
    move = Move.parse("h8-a1")
    index = encode_move(move)
    assert index == 63 * 64
    assert decode_move(index) == move
    with pytest.raises(ValueError):
        decode_move(64 * 64)
