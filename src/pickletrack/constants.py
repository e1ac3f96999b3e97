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

# --- Constants ---
APP_NAME = "Pickle Track"

# Team sides in a single game
TEAM_ONE = 1
TEAM_TWO = 2
TEAM_SIDES = (TEAM_ONE, TEAM_TWO)

# Server numbers (doubles only)
FIRST_SERVER = 1
SECOND_SERVER = 2

# Scoring systems
SCORING_RALLY = "rally"
SCORING_SIDEOUT = "sideout"
SCORING_SYSTEMS = (SCORING_RALLY, SCORING_SIDEOUT)

# Game formats
FORMAT_SINGLES = "singles"
FORMAT_DOUBLES = "doubles"
GAME_FORMATS = (FORMAT_SINGLES, FORMAT_DOUBLES)

# Game defaults
DEFAULT_PLAY_TO = 11
DEFAULT_SCORING_SYSTEM = SCORING_SIDEOUT
DEFAULT_GAME_FORMAT = FORMAT_SINGLES
WIN_BY = 2

# Match statuses
MATCH_IN_PROGRESS = "in-progress"
MATCH_COMPLETED = "completed"

# Fixture statuses
FIXTURE_PENDING = "pending"
FIXTURE_IN_PROGRESS = "in-progress"
FIXTURE_COMPLETED = "completed"

# Tournament statuses
TOURNAMENT_IN_PROGRESS = "in-progress"
TOURNAMENT_COMPLETED = "completed"

# Event statuses (ad-hoc game collections)
EVENT_ACTIVE = "active"
EVENT_COMPLETED = "completed"

# Head-to-head results
RESULT_WON = "won"
RESULT_LOST = "lost"

# History action labels
ACTION_RALLY = "Rally won by Team {team}"
ACTION_MANUAL_SWITCH = "Manual serve switch"

# Listener channel prefixes
CHANNEL_GAME = "game"
CHANNEL_EVENT = "event"
CHANNEL_ROUND_ROBIN = "round-robin"

# Listener message types
MESSAGE_GAME_CREATED = "game-created"
MESSAGE_SCORE_UPDATE = "score-update"
MESSAGE_EVENT_CLOSED = "event-closed"
MESSAGE_FIXTURE_STARTED = "fixture-started"
MESSAGE_STANDINGS_UPDATED = "standings-updated"

# Minimum teams in a round-robin tournament
MIN_ROUND_ROBIN_TEAMS = 2

# Environment variable read by setup_logger
LOG_LEVEL_ENV = "PICKLETRACK_LOG_LEVEL"
