import random

import pytest

import game_logic
from game_state import GameState, RoundResult
from shared import CHOICES, Choice, Outcome


WINS = [
    (Choice.ROCK, Choice.SCISSORS),
    (Choice.PAPER, Choice.ROCK),
    (Choice.SCISSORS, Choice.PAPER),
]


@pytest.mark.parametrize('choice', CHOICES)
def test_same_choice_is_tie(choice):
    assert game_logic.determine_outcome(choice, choice) == Outcome.TIE


@pytest.mark.parametrize('winner,loser', WINS)
def test_beats_relation_is_cyclic(winner, loser):
    assert game_logic.determine_outcome(winner, loser) == Outcome.PLAYER_WINS
    assert game_logic.determine_outcome(loser, winner) == Outcome.OPPONENT_WINS


def test_every_pair_has_exactly_one_outcome():
    outcomes = {}
    for p in CHOICES:
        for o in CHOICES:
            outcomes[(p, o)] = game_logic.determine_outcome(p, o)
    assert sum(1 for v in outcomes.values() if v == Outcome.TIE) == 3
    assert sum(1 for v in outcomes.values() if v == Outcome.PLAYER_WINS) == 3
    assert sum(1 for v in outcomes.values() if v == Outcome.OPPONENT_WINS) == 3


def test_points_for():
    assert game_logic.points_for(Outcome.PLAYER_WINS) == 500
    assert game_logic.points_for(Outcome.TIE) == 100
    assert game_logic.points_for(Outcome.OPPONENT_WINS) == 0


def test_random_choice_covers_all_choices():
    rng = random.Random(1234)
    drawn = {game_logic.random_choice(rng) for _ in range(300)}
    assert drawn == set(CHOICES)


def test_apply_result_moves_at_most_one_score():
    state = GameState()
    game_logic.apply_result(state, RoundResult(1, Choice.ROCK, Choice.SCISSORS, Outcome.PLAYER_WINS, 500))
    game_logic.apply_result(state, RoundResult(2, Choice.ROCK, Choice.ROCK, Outcome.TIE, 100))
    game_logic.apply_result(state, RoundResult(3, Choice.ROCK, Choice.PAPER, Outcome.OPPONENT_WINS, 0))

    assert (state.player_score, state.opponent_score) == (1, 1)
    assert state.total_points == 600
    assert state.rounds_played == 3
    assert state.last_result.round_number == 3


def test_has_winner():
    state = GameState(player_score=2, opponent_score=4)
    assert not game_logic.has_winner(state, 5)
    state.opponent_score = 5
    assert game_logic.has_winner(state, 5)


def test_result_captions():
    win = RoundResult(1, Choice.ROCK, Choice.SCISSORS, Outcome.PLAYER_WINS, 500)
    loss = RoundResult(1, Choice.ROCK, Choice.PAPER, Outcome.OPPONENT_WINS, 0)
    tie = RoundResult(1, Choice.PAPER, Choice.PAPER, Outcome.TIE, 100)

    assert (win.title, win.message) == ("YOU WIN!", "ROCK BEATS SCISSORS")
    assert (loss.title, loss.message) == ("YOU LOSE!", "PAPER BEATS ROCK")
    assert (tie.title, tie.message) == ("IT'S A TIE!", "BOTH CHOSE PAPER")


def test_winner():
    assert GameState(player_score=5, opponent_score=2).winner() == "player"
    assert GameState(player_score=1, opponent_score=5).winner() == "opponent"
    assert GameState().winner() is None
