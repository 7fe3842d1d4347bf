from enum import Enum


class Choice(Enum):
    ROCK = 'rock'
    PAPER = 'paper'
    SCISSORS = 'scissors'


class Outcome(Enum):
    PLAYER_WINS = 'win'
    OPPONENT_WINS = 'lose'
    TIE = 'tie'


CHOICES = (Choice.ROCK, Choice.PAPER, Choice.SCISSORS)

# Each choice maps to the one it beats.
BEATS = {
    Choice.ROCK: Choice.SCISSORS,
    Choice.PAPER: Choice.ROCK,
    Choice.SCISSORS: Choice.PAPER,
}

CHOICE_ICONS = {
    Choice.ROCK: '✊',
    Choice.PAPER: '🖐️',
    Choice.SCISSORS: '✌️',
}

POINTS = {
    Outcome.PLAYER_WINS: 500,
    Outcome.TIE: 100,
    Outcome.OPPONENT_WINS: 0,
}

TICK_INTERVAL_SEC = 1.0
TIMER_WARNING_SEC = 3
