# phases.py

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from rich.text import Text

import game_logic
from shared import CHOICE_ICONS, CHOICES

if TYPE_CHECKING:
    from game_state import GameState
    from settings import GameSettings

# --- Base Class ---
class Phase(ABC):
    """
    A step of the game session. Phases describe what may happen next;
    the controller performs the transitions.
    """
    accepted_actions: frozenset = frozenset()

    @abstractmethod
    def get_name(self) -> str:
        """Gets the phase name."""
        pass

    @abstractmethod
    def get_legal_moves(self, state: 'GameState', settings: 'GameSettings') -> list:
        """Lists (description, action) pairs the player may take in this phase."""
        pass

    def accepts(self, action: tuple) -> bool:
        return bool(action) and action[0] in self.accepted_actions

    def __repr__(self):
        return f"<{type(self).__name__}>"

# --- Concrete Phases ---

class IdlePhase(Phase):
    """No game has been started yet."""
    accepted_actions = frozenset({'START_GAME'})

    def get_name(self) -> str:
        return "Main Menu"

    def get_legal_moves(self, state, settings) -> list:
        return [(Text("Start Game", style="bold green"), ('START_GAME',))]


class RoundActivePhase(Phase):
    """The countdown is running and the player has not chosen yet."""
    accepted_actions = frozenset({'CHOOSE'})

    def get_name(self) -> str:
        return "Choose!"

    def get_legal_moves(self, state, settings) -> list:
        legal_moves = []
        for choice in CHOICES:
            desc = Text(f"{CHOICE_ICONS[choice]}  ")
            desc.append(choice.value.capitalize(), style="bold")
            legal_moves.append((desc, ('CHOOSE', choice)))
        return legal_moves


class RoundResolvedPhase(Phase):
    """A result is on screen, waiting for the player to move on."""
    accepted_actions = frozenset({'ADVANCE'})

    def get_name(self) -> str:
        return "Round Result"

    def get_legal_moves(self, state, settings) -> list:
        if game_logic.has_winner(state, settings.winning_score):
            return [(Text("See Final Score", style="bold magenta"), ('ADVANCE',))]
        return [(Text("Next Round", style="bold"), ('ADVANCE',))]


class GameOverPhase(Phase):
    """Terminal phase. Only a new game leaves it."""
    accepted_actions = frozenset({'START_GAME'})

    def get_name(self) -> str:
        return "Game Over"

    def get_legal_moves(self, state, settings) -> list:
        return [(Text("Play Again", style="bold green"), ('START_GAME',))]
