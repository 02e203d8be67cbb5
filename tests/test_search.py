import pytest

from ttt_minimax.board import EMPTY, Player, new_board
from ttt_minimax.search import (
    LOSS_SCORE,
    TIE_SCORE,
    WIN_SCORE,
    choose_move,
    clear_search_cache,
    evaluate,
    score_moves,
    search_cache_info,
)

X, O, _ = Player.HUMAN, Player.AI, EMPTY

FULL_NO_LINE = [X, O, X,
                X, O, O,
                O, X, X]


@pytest.mark.parametrize("player", [X, O])
@pytest.mark.parametrize("hole", range(9))
def test_single_empty_cell_is_chosen(hole: int, player: Player):
    board = list(FULL_NO_LINE)
    board[hole] = _
    assert choose_move(board, player) == hole


def test_blocks_or_forks_when_human_has_two_in_a_row():
    board = [X, X, _,
             O, O, _,
             _, _, _]
    scores = score_moves(board, O)
    assert choose_move(board, O) == 2
    assert scores[2] == WIN_SCORE


def test_takes_immediate_win_over_lower_index_moves():
    board = [X, X, _,
             _, X, _,
             O, O, _]
    assert choose_move(board, O) == 8
    assert score_moves(board, O) == {2: LOSS_SCORE, 3: LOSS_SCORE, 5: LOSS_SCORE, 8: WIN_SCORE}


def test_human_side_minimizes():
    board = [O, O, _,
             _, X, _,
             X, _, _]
    assert choose_move(board, X) == 2


def test_terminal_scores():
    assert evaluate([X, X, X, O, O, _, _, _, _], O) == LOSS_SCORE
    assert evaluate([O, O, O, X, X, _, X, _, _], X) == WIN_SCORE
    assert evaluate(FULL_NO_LINE, X) == TIE_SCORE


def test_human_line_checked_before_ai_line():
    board = [X, X, X,
             O, O, O,
             _, _, _]
    assert evaluate(board, O) == LOSS_SCORE


def test_scores_are_not_depth_discounted():
    # win-in-one scores the same flat +10
    board = [O, O, _,
             X, X, _,
             X, _, _]
    assert evaluate(board, O) == WIN_SCORE


def test_evaluate_and_choose_leave_board_untouched():
    board = [X, _, _, _, O, _, _, _, X]
    before = list(board)
    evaluate(board, O)
    choose_move(board, O)
    score_moves(board, O)
    assert board == before


def test_empty_board_ai_first_is_a_forced_tie():
    board = new_board()
    move = choose_move(board, O)
    assert move in (0, 2, 4, 6, 8)
    board[move] = O
    assert evaluate(board, X) == TIE_SCORE


def test_ties_broken_by_lowest_index():
    scores = score_moves(new_board(), O)
    assert set(scores.values()) == {TIE_SCORE}
    assert choose_move(new_board(), O) == 0


def test_empty_board_value_is_tie():
    assert evaluate(new_board(), X) == TIE_SCORE


def test_choose_move_rejects_terminal_boards():
    with pytest.raises(ValueError):
        choose_move(FULL_NO_LINE, X)
    with pytest.raises(ValueError):
        choose_move([X, X, X, O, O, _, _, _, _], O)


def test_malformed_board_rejected():
    with pytest.raises(ValueError):
        evaluate([_] * 8, O)
    with pytest.raises(ValueError):
        choose_move([_] * 8 + [2], O)


def test_cache_can_be_cleared():
    evaluate(new_board(), X)
    assert search_cache_info().currsize > 0
    clear_search_cache()
    assert search_cache_info().currsize == 0
