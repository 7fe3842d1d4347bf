# game_logic.py

import random

from game_state import GameState, RoundResult
from shared import BEATS, CHOICES, POINTS, Choice, Outcome


def random_choice(rng=random) -> Choice:
    """Uniform draw over the three choices. `rng` is anything with a `choice` method."""
    return rng.choice(CHOICES)


def determine_outcome(player_choice: Choice, opponent_choice: Choice) -> Outcome:
    """
    Compares the two choices from the player's point of view.

    Rock beats Scissors, Paper beats Rock, Scissors beats Paper;
    identical choices are a tie.
    """
    if player_choice == opponent_choice:
        return Outcome.TIE
    if BEATS[player_choice] == opponent_choice:
        return Outcome.PLAYER_WINS
    return Outcome.OPPONENT_WINS


def points_for(outcome: Outcome) -> int:
    return POINTS[outcome]


def apply_result(state: GameState, result: RoundResult) -> None:
    """Folds a resolved round into the game scores."""
    if result.outcome == Outcome.PLAYER_WINS:
        state.player_score += 1
    elif result.outcome == Outcome.OPPONENT_WINS:
        state.opponent_score += 1

    state.total_points += result.points
    state.round_history.append(result)


def has_winner(state: GameState, winning_score: int) -> bool:
    return state.player_score >= winning_score or state.opponent_score >= winning_score
