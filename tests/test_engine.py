import pytest

from ttt_engine import GameEngine, InvalidMoveError, Level, Marker, Mode, Move, NoMoveAvailableError, State


def test_accessors_and_defaults():
    e = GameEngine(5, Mode.HVH, Level.EASY)
    assert e.get_board_size() == e.board_size == 5
    assert e.get_mode() is e.mode is Mode.HVH
    assert e.level is Level.EASY
    assert e.get_current_player() is e.current_player is Marker.X
    assert e.get_state() is e.state is State.IN_PROGRESS
    assert e.is_in_progress()


def test_size_clamped_through_engine():
    assert GameEngine(1).board_size == 3
    assert GameEngine(12).board_size == 10


def test_turns_alternate_only_on_success():
    e = GameEngine(3, Mode.HVH)
    assert e.make_player_move(Move(1, 1))
    assert e.current_player is Marker.O
    # occupied: normal negative result, same player retries
    assert e.make_player_move(Move(1, 1)) is False
    assert e.current_player is Marker.O
    assert e.make_player_move(Move(2, 2))
    assert e.current_player is Marker.X


def test_out_of_bounds_propagates_and_keeps_turn():
    e = GameEngine(3, Mode.HVH)
    with pytest.raises(InvalidMoveError):
        e.make_player_move(Move(0, 2))
    with pytest.raises(InvalidMoveError):
        e.make_player_move(Move(2, 4))
    assert e.current_player is Marker.X
    assert e.board.empty_count == 9


def test_row_win_sequence():
    e = GameEngine(3, Mode.HVH)
    for mv in [Move(1, 1), Move(2, 2), Move(1, 2), Move(3, 3)]:
        assert e.make_player_move(mv)
        assert e.is_in_progress()
    assert e.make_player_move(Move(1, 3))
    assert e.state is State.WIN_X
    assert not e.is_in_progress()


def test_hard_computer_answers_corner_with_center():
    e = GameEngine(3, Mode.HVC, Level.HARD)
    e.make_player_move(Move(1, 1))
    assert e.make_computer_move()
    assert e.board.cell(Move(2, 2)) is Marker.O
    assert e.current_player is Marker.X


def test_easy_computer_is_seeded():
    a = GameEngine(4, Mode.HVC, Level.EASY, seed=5)
    b = GameEngine(4, Mode.HVC, Level.EASY, seed=5)
    for _ in range(6):
        a.make_computer_move()
        b.make_computer_move()
    assert a.render() == b.render()
    assert a.board.empty_count == 10


@pytest.mark.parametrize("level", [Level.EASY, Level.HARD])
def test_computer_move_without_moves_is_fatal(level):
    e = GameEngine(3, Mode.HVC, level, seed=1)
    for mv in [Move(1, 1), Move(1, 2), Move(1, 3), Move(2, 2), Move(2, 1),
               Move(2, 3), Move(3, 2), Move(3, 1), Move(3, 3)]:
        assert e.make_player_move(mv)
    assert e.state is State.DRAW
    with pytest.raises(NoMoveAvailableError):
        e.make_computer_move()


def test_reset_restores_x_and_empty_board():
    e = GameEngine(3, Mode.HVC)
    e.make_player_move(Move(2, 2))
    e.reset()
    assert e.current_player is Marker.X
    assert e.state is State.IN_PROGRESS
    assert e.board.empty_count == 9
    assert str(e) == e.render() == str(e.board)
