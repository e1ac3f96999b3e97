"""Game configuration data class."""

# Pickle Track
# Copyright (C) 2025  Pickle Track developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass
from typing import Any, Dict, Optional

from pickletrack.constants import (
    DEFAULT_GAME_FORMAT,
    DEFAULT_PLAY_TO,
    DEFAULT_SCORING_SYSTEM,
    FIRST_SERVER,
    FORMAT_DOUBLES,
    GAME_FORMATS,
    SCORING_SYSTEMS,
    TEAM_ONE,
)
from pickletrack.utils.validation import (
    raise_for_settings,
    validate_choice,
    validate_positive_integer,
    validate_team_side,
)


@dataclass(frozen=True)
class MatchSettings:
    """Configuration settings for a single game.

    Attributes
    ----------
    serving_team : int
        Team serving the first rally (1 or 2)
    server_number : int
        Starting server number within the serving team (doubles only)
    game_format : str
        'singles' or 'doubles'
    scoring_system : str
        'rally' or 'sideout'
    play_to : int
        Target score; the game also needs a two point lead
    """

    serving_team: int = TEAM_ONE
    server_number: int = FIRST_SERVER
    game_format: str = DEFAULT_GAME_FORMAT
    scoring_system: str = DEFAULT_SCORING_SYSTEM
    play_to: int = DEFAULT_PLAY_TO

    def __post_init__(self) -> None:
        raise_for_settings(validate_team_side(self.serving_team, "Serving team"))
        raise_for_settings(validate_team_side(self.server_number, "Server number"))
        raise_for_settings(
            validate_choice(self.game_format, GAME_FORMATS, "Game format")
        )
        raise_for_settings(
            validate_choice(self.scoring_system, SCORING_SYSTEMS, "Scoring system")
        )
        play_to = raise_for_settings(validate_positive_integer(self.play_to, "Play to"))
        object.__setattr__(self, "play_to", play_to)

    @property
    def is_doubles(self) -> bool:
        return self.game_format == FORMAT_DOUBLES

    def to_dict(self) -> Dict[str, Any]:
        """Serialize settings to dictionary."""
        return {
            "serving_team": self.serving_team,
            "server_number": self.server_number,
            "game_format": self.game_format,
            "scoring_system": self.scoring_system,
            "play_to": self.play_to,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "MatchSettings":
        """Deserialize settings from dictionary; missing or null keys use defaults."""
        data = {k: v for k, v in (data or {}).items() if v is not None}
        return cls(
            serving_team=data.get("serving_team", TEAM_ONE),
            server_number=data.get("server_number", FIRST_SERVER),
            game_format=data.get("game_format", DEFAULT_GAME_FORMAT),
            scoring_system=data.get("scoring_system", DEFAULT_SCORING_SYSTEM),
            play_to=data.get("play_to", DEFAULT_PLAY_TO),
        )
