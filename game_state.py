# game_state.py

from dataclasses import dataclass, field
from typing import List, Optional

from shared import Choice, Outcome

# --- Per-Round Data ---

@dataclass(frozen=True)
class RoundResult:
    """An immutable record of one resolved round."""
    round_number: int
    player_choice: Choice
    opponent_choice: Choice
    outcome: Outcome
    points: int
    timed_out: bool = False

    @property
    def title(self) -> str:
        if self.outcome == Outcome.PLAYER_WINS:
            return "YOU WIN!"
        if self.outcome == Outcome.OPPONENT_WINS:
            return "YOU LOSE!"
        return "IT'S A TIE!"

    @property
    def message(self) -> str:
        """The caption shown under the result, naming the winning choice first."""
        player = self.player_choice.value.upper()
        opponent = self.opponent_choice.value.upper()
        if self.outcome == Outcome.TIE:
            return f"BOTH CHOSE {player}"
        if self.outcome == Outcome.PLAYER_WINS:
            return f"{player} BEATS {opponent}"
        return f"{opponent} BEATS {player}"


@dataclass
class RoundState:
    """Owned by the active round and discarded when it resolves."""
    remaining_seconds: int
    player_choice: Optional[Choice] = None
    opponent_choice: Optional[Choice] = None

# --- Game-Level State ---

@dataclass
class GameState:
    """
    Scores for one game session. Only the GameController mutates it,
    and only when a round starts or resolves.
    """
    player_score: int = 0
    opponent_score: int = 0
    total_points: int = 0
    round_active: bool = False

    round_history: List[RoundResult] = field(default_factory=list)

    @property
    def rounds_played(self) -> int:
        return len(self.round_history)

    @property
    def last_result(self) -> Optional[RoundResult]:
        return self.round_history[-1] if self.round_history else None

    def winner(self) -> Optional[str]:
        """Returns 'player', 'opponent' or None if the scores are level."""
        if self.player_score > self.opponent_score:
            return "player"
        if self.opponent_score > self.player_score:
            return "opponent"
        return None
