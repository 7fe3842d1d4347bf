# controller.py
import logging
import random
from typing import Iterable, Optional

import game_logic
from game_state import GameState, RoundResult, RoundState
from phases import GameOverPhase, IdlePhase, Phase, RoundActivePhase, RoundResolvedPhase
from round_timer import RoundTimer
from scheduler import AsyncioScheduler, Scheduler
from settings import GameSettings
from shared import Choice, Outcome

logger = logging.getLogger(__name__)


class GameListener:
    """
    Observer interface for the presentation layer. Every callback is a
    no-op here so listeners only override what they render.
    """

    def on_round_started(self, remaining_seconds: int):
        pass

    def on_tick(self, remaining_seconds: int):
        pass

    def on_round_resolved(self, player_choice: Choice, opponent_choice: Choice, outcome: Outcome,
                          player_score: int, opponent_score: int, total_points: int):
        pass

    def on_game_over(self, player_score: int, opponent_score: int, total_points: int):
        pass


class GameController:
    """
    Manages the game state and sequences rounds.
    It does NOT handle any UI or direct user input. It is the "Controller"
    in the MVC pattern: the view calls in with choices and advance requests
    and is told what happened through GameListener callbacks.

    Calls that make no sense in the current phase (a second choice, a late
    click after the timer ran out, advancing mid-round) are ignored.
    """

    def __init__(self, settings: Optional[GameSettings] = None, scheduler: Optional[Scheduler] = None,
                 rng=None, listeners: Iterable[GameListener] = ()):
        self.settings = settings or GameSettings()
        self.scheduler = scheduler or AsyncioScheduler()
        self.rng = rng or random.Random()
        self.listeners = list(listeners)

        self.state = GameState()
        self.round: Optional[RoundState] = None
        self.phase: Phase = IdlePhase()
        self._timer: Optional[RoundTimer] = None

    # --- Observers ---

    def add_listener(self, listener: GameListener):
        self.listeners.append(listener)

    def remove_listener(self, listener: GameListener):
        if listener in self.listeners:
            self.listeners.remove(listener)

    def _emit(self, event: str, *args):
        for listener in list(self.listeners):
            getattr(listener, event)(*args)

    # --- Game Lifecycle ---

    def start_game(self, settings: Optional[GameSettings] = None):
        """
        Starts a fresh game and its first round. Raises InvalidSettings
        before touching any state if the settings are unusable.
        """
        settings = (settings or self.settings).validate()

        self._stop_timer()
        self.settings = settings
        self.state = GameState()
        self.round = None
        logger.info(
            "New game: timer=%ss, winning score=%s, sound=%s",
            settings.timer_duration_seconds, settings.winning_score, settings.sound_enabled,
        )
        self._begin_round()

    def start_round(self):
        """Starts the next round after a result, unless a round is running or the game is decided."""
        if self.state.round_active:
            logger.debug("start_round ignored: a round is already active")
            return
        if not isinstance(self.phase, RoundResolvedPhase):
            logger.debug("start_round ignored in phase %s", self.phase.get_name())
            return
        if game_logic.has_winner(self.state, self.settings.winning_score):
            logger.debug("start_round ignored: the game has a winner, use advance()")
            return
        self._begin_round()

    def submit_choice(self, choice: Choice):
        """Locks in the player's choice and resolves the round immediately."""
        choice = Choice(choice)
        if not self.state.round_active or self.round is None:
            logger.debug("Choice %s ignored: no active round", choice.value)
            return
        if self.round.player_choice is not None:
            logger.debug("Choice %s ignored: already chose %s", choice.value, self.round.player_choice.value)
            return

        self.round.player_choice = choice
        self._stop_timer()
        self._resolve_round(timed_out=False)

    def advance(self):
        """Moves on from a result: ends the game if someone reached the winning score, else plays on."""
        if not isinstance(self.phase, RoundResolvedPhase):
            logger.debug("advance ignored in phase %s", self.phase.get_name())
            return

        if game_logic.has_winner(self.state, self.settings.winning_score):
            self.phase = GameOverPhase()
            logger.info(
                "Game over: %s-%s, %s points",
                self.state.player_score, self.state.opponent_score, self.state.total_points,
            )
            self._emit('on_game_over', self.state.player_score, self.state.opponent_score, self.state.total_points)
        else:
            self._begin_round()

    def reset_game(self):
        """Abandons the current game and returns to the main menu."""
        self._stop_timer()
        self.state = GameState()
        self.round = None
        self.phase = IdlePhase()

    # --- Queries ---

    def is_game_over(self) -> bool:
        return isinstance(self.phase, GameOverPhase)

    @property
    def last_result(self) -> Optional[RoundResult]:
        return self.state.last_result

    def get_legal_moves(self) -> list:
        """A simple pass-through to the current phase for the UI to use."""
        return self.phase.get_legal_moves(self.state, self.settings)

    def process_action(self, action: tuple):
        """
        Processes a single action tuple as listed by get_legal_moves.
        Actions the current phase does not accept are dropped.
        """
        if not action:
            return

        action_type = action[0]
        if action_type not in ('START_GAME', 'CHOOSE', 'ADVANCE'):
            raise ValueError(f"Unknown action: {action}")

        if not self.phase.accepts(action):
            logger.debug("Action %s ignored in phase %s", action, self.phase.get_name())
            return

        if action_type == 'START_GAME':
            self.start_game(action[1] if len(action) > 1 else None)
        elif action_type == 'CHOOSE':
            self.submit_choice(action[1])
        elif action_type == 'ADVANCE':
            self.advance()

    # --- Round Internals ---

    def _begin_round(self):
        self._stop_timer()

        duration = self.settings.timer_duration_seconds
        self.round = RoundState(remaining_seconds=duration)
        self.state.round_active = True
        self.phase = RoundActivePhase()
        logger.info("Round %s started (%ss)", self.state.rounds_played + 1, duration)

        # The timer runs before anyone hears about the round, so a listener
        # that answers straight away still stops it.
        self._timer = RoundTimer(self.scheduler)
        self._timer.start(duration, self._on_timer_tick, self._on_timer_expired)
        self._emit('on_round_started', duration)

    def _stop_timer(self):
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def _on_timer_tick(self, remaining: int):
        if not self.state.round_active or self.round is None:
            return
        self.round.remaining_seconds = remaining
        logger.debug("Tick: %ss left", remaining)
        self._emit('on_tick', remaining)

    def _on_timer_expired(self):
        if not self.state.round_active or self.round is None or self.round.player_choice is not None:
            return
        self.round.player_choice = game_logic.random_choice(self.rng)
        logger.info("Time is up, picked %s for the player", self.round.player_choice.value)
        self._resolve_round(timed_out=True)

    def _resolve_round(self, timed_out: bool):
        self._stop_timer()
        current = self.round

        current.opponent_choice = game_logic.random_choice(self.rng)
        outcome = game_logic.determine_outcome(current.player_choice, current.opponent_choice)
        result = RoundResult(
            round_number=self.state.rounds_played + 1,
            player_choice=current.player_choice,
            opponent_choice=current.opponent_choice,
            outcome=outcome,
            points=game_logic.points_for(outcome),
            timed_out=timed_out,
        )

        game_logic.apply_result(self.state, result)
        self.state.round_active = False
        self.round = None
        self.phase = RoundResolvedPhase()
        logger.info(
            "Round %s: %s vs %s -> %s (score %s-%s, %s points)",
            result.round_number, result.player_choice.value, result.opponent_choice.value,
            outcome.name, self.state.player_score, self.state.opponent_score, self.state.total_points,
        )

        self._emit(
            'on_round_resolved',
            result.player_choice, result.opponent_choice, outcome,
            self.state.player_score, self.state.opponent_score, self.state.total_points,
        )
