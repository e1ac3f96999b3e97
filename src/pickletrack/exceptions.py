"""Exceptions for use in Pickle Track"""

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


# ========== Base Application Exception ==========


class PickleTrackException(Exception):
    """Base exception for all Pickle Track errors.

    All custom exceptions in the application should inherit from this class.
    Every one of them is recoverable: the failed operation leaves the engine
    state exactly as it was before the call.
    """

    pass


# ========== Not Found Exceptions ==========


class NotFoundException(PickleTrackException):
    """Base exception for lookups of unknown ids."""

    kind = "Entity"

    def __init__(self, entity_id):
        self.entity_id = entity_id
        super().__init__(f"{self.kind} {entity_id} not found")


class GameNotFoundException(NotFoundException):
    """Raised when a requested game does not exist."""

    kind = "Game"


class TournamentNotFoundException(NotFoundException):
    """Raised when a requested round-robin tournament does not exist."""

    kind = "Tournament"


class FixtureNotFoundException(NotFoundException):
    """Raised when a requested fixture does not exist in a tournament."""

    kind = "Fixture"


class EventNotFoundException(NotFoundException):
    """Raised when a requested event does not exist."""

    kind = "Event"


# ========== State Exceptions ==========


class InvalidStateException(PickleTrackException):
    """Raised when an entity is in the wrong status for the requested operation."""

    pass


class MatchStateException(InvalidStateException):
    """Raised when scoring a completed game."""

    pass


class FixtureStateException(InvalidStateException):
    """Raised when a fixture cannot move to the requested status."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(PickleTrackException):
    """Base exception for malformed input."""

    pass


class InvalidTeamListException(ValidationException):
    """Raised when a tournament team list is too short or contains bad names."""

    pass


class InvalidScoreException(ValidationException):
    """Raised when a score or rally winner is out of range."""

    pass


class InvalidSettingsException(ValidationException):
    """Raised when game settings are invalid."""

    pass


# ========== History Exceptions ==========


class EmptyHistoryException(PickleTrackException):
    """Raised when undoing a game that has nothing left to undo."""

    pass
