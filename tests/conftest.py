from collections import deque

import pytest

from controller import GameController, GameListener
from scheduler import ManualScheduler
from settings import GameSettings
from shared import Choice


class RecordingListener(GameListener):
    """Keeps every notification as a (name, args) tuple, in order."""

    def __init__(self):
        self.events = []

    def on_round_started(self, remaining_seconds):
        self.events.append(('round_started', (remaining_seconds,)))

    def on_tick(self, remaining_seconds):
        self.events.append(('tick', (remaining_seconds,)))

    def on_round_resolved(self, player_choice, opponent_choice, outcome,
                          player_score, opponent_score, total_points):
        self.events.append(('round_resolved', (player_choice, opponent_choice, outcome,
                                               player_score, opponent_score, total_points)))

    def on_game_over(self, player_score, opponent_score, total_points):
        self.events.append(('game_over', (player_score, opponent_score, total_points)))

    def names(self):
        return [name for name, _ in self.events]

    def of(self, name):
        return [args for event, args in self.events if event == name]


class ScriptedRandom:
    """Stands in for random.Random: `choice` hands out scripted picks, then Rock."""

    def __init__(self, *picks):
        self.picks = deque(picks)

    def push(self, *picks):
        self.picks.extend(picks)

    def choice(self, seq):
        if not self.picks:
            return Choice.ROCK
        pick = self.picks.popleft()
        assert pick in seq
        return pick


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def listener():
    return RecordingListener()


@pytest.fixture()
def rng():
    return ScriptedRandom()


@pytest.fixture()
def settings():
    return GameSettings(sound_enabled=False, timer_duration_seconds=10, winning_score=5)


@pytest.fixture()
def controller(settings, scheduler, rng, listener):
    return GameController(settings=settings, scheduler=scheduler, rng=rng, listeners=[listener])
