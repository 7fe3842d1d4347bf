# settings.py

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Optional

DEFAULT_OPTIONS = {
    "sound_enabled": True,
    "timer_duration_seconds": 10,
    "winning_score": 5,
}

# Values offered by the settings menu.
TIMER_OPTIONS = (5, 10, 15, 20)
SCORE_OPTIONS = (3, 5, 7, 10)


class InvalidSettings(ValueError):
    """Raised when a game is started with settings that cannot be played."""


def deep_merge(base_dict: dict, update_dict: dict) -> dict:
    for key, value in update_dict.items():
        if isinstance(base_dict.get(key), dict) and isinstance(value, dict):
            deep_merge(base_dict[key], value)
        else:
            base_dict[key] = value
    return base_dict


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


@dataclass(frozen=True)
class GameSettings:
    """
    Player-facing configuration. Captured by the controller at game start
    and never changed while a game is running.
    """
    sound_enabled: bool = True
    timer_duration_seconds: int = 10
    winning_score: int = 5

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]] = None) -> 'GameSettings':
        """Builds settings from a (possibly partial) options dict layered over the defaults."""
        merged = deep_merge(dict(DEFAULT_OPTIONS), options or {})
        unknown = set(merged) - set(DEFAULT_OPTIONS)
        if unknown:
            raise InvalidSettings(f"Unknown settings: {', '.join(sorted(unknown))}")
        return cls(**merged)

    def with_changes(self, **changes) -> 'GameSettings':
        return dataclasses.replace(self, **changes)

    def toggle_sound(self) -> 'GameSettings':
        return self.with_changes(sound_enabled=not self.sound_enabled)

    def validate(self) -> 'GameSettings':
        if not isinstance(self.sound_enabled, bool):
            raise InvalidSettings(f"sound_enabled must be a bool, got {self.sound_enabled!r}")
        if not _is_positive_int(self.timer_duration_seconds):
            raise InvalidSettings(
                f"timer_duration_seconds must be a positive integer, got {self.timer_duration_seconds!r}"
            )
        if not _is_positive_int(self.winning_score):
            raise InvalidSettings(f"winning_score must be a positive integer, got {self.winning_score!r}")
        return self
