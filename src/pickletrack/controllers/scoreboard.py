"""Scoreboard: the entry point for live scoring.

The scoreboard owns every game, round-robin tournament and event in the
process. It wires round-robin fixtures to match engines, serialises work on
each entity with a per-id lock and pushes fresh snapshots to listeners after
every change.
"""

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

import threading
from datetime import timedelta
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pickletrack.constants import (
    CHANNEL_EVENT,
    CHANNEL_GAME,
    CHANNEL_ROUND_ROBIN,
    EVENT_COMPLETED,
    MESSAGE_EVENT_CLOSED,
    MESSAGE_FIXTURE_STARTED,
    MESSAGE_GAME_CREATED,
    MESSAGE_SCORE_UPDATE,
    MESSAGE_STANDINGS_UPDATED,
)
from pickletrack.controllers.match import MatchEngine
from pickletrack.controllers.registry import Registry
from pickletrack.controllers.tournament import RoundRobinTournament
from pickletrack.exceptions import (
    EventNotFoundException,
    FixtureNotFoundException,
    GameNotFoundException,
    InvalidStateException,
    MatchStateException,
    TournamentNotFoundException,
)
from pickletrack.models.match import HistoryEntry, MatchSettings, MatchState
from pickletrack.models.tournament import Event
from pickletrack.type_hints import Listener, Payload
from pickletrack.utils import generate_id, setup_logger, utc_now

logger = setup_logger(__name__)

SettingsInput = Union[MatchSettings, Mapping[str, Any], None]


def channel_name(prefix: str, entity_id: str) -> str:
    """Build a listener channel name such as ``game:<id>``."""
    return f"{prefix}:{entity_id}"


def _coerce_settings(settings: SettingsInput) -> MatchSettings:
    if isinstance(settings, MatchSettings):
        return settings
    return MatchSettings.from_dict(dict(settings) if settings else None)


class Scoreboard:
    """Coordinates games, round-robin tournaments and events.

    This class is responsible for:
    - Creating and looking up games, tournaments and events
    - Starting round-robin fixtures on fresh match engines
    - Feeding completed games back into the tournament standings
    - Publishing snapshots to subscribed listeners

    Every public method holds the lock of the entity it works on for the
    whole call; a method that fails leaves all state untouched.
    """

    def __init__(self) -> None:
        self.games: Registry[MatchEngine] = Registry("game", GameNotFoundException)
        self.round_robins: Registry[RoundRobinTournament] = Registry(
            "round robin", TournamentNotFoundException
        )
        self.events: Registry[Event] = Registry("event", EventNotFoundException)

        self._listeners: Dict[str, List[Listener]] = {}
        self._listeners_lock = threading.Lock()

    # ========== Listeners ==========

    def subscribe(self, channel: str, listener: Listener) -> None:
        """Register ``listener(message_type, payload)`` on a channel."""
        with self._listeners_lock:
            self._listeners.setdefault(channel, []).append(listener)
        logger.debug(f"Listener subscribed to {channel}")

    def unsubscribe(self, channel: str, listener: Listener) -> bool:
        """Remove a listener; returns False if it was not subscribed."""
        with self._listeners_lock:
            listeners = self._listeners.get(channel, [])
            if listener not in listeners:
                return False
            listeners.remove(listener)
            if not listeners:
                del self._listeners[channel]
        logger.debug(f"Listener unsubscribed from {channel}")
        return True

    def listener_count(self, channel: str) -> int:
        with self._listeners_lock:
            return len(self._listeners.get(channel, []))

    def _publish(self, channel: str, message_type: str, payload: Payload) -> None:
        with self._listeners_lock:
            listeners = list(self._listeners.get(channel, []))

        for listener in listeners:
            try:
                listener(message_type, payload)
            except Exception:
                # A broken listener must not undo a committed change
                logger.exception(f"Listener on {channel} failed for {message_type}")

    def _publish_game(self, engine: MatchEngine, state: MatchState, message_type: str) -> None:
        payload = state.to_dict()
        self._publish(channel_name(CHANNEL_GAME, engine.id), message_type, payload)
        if engine.tournament_id in self.events:
            self._publish(
                channel_name(CHANNEL_EVENT, engine.tournament_id), message_type, payload
            )

    # ========== Events ==========

    def create_event(self, name: str, organizer_id: Optional[str] = None) -> Event:
        """Create an ad-hoc event that games can be added to."""
        event = Event(
            id=generate_id(),
            name=(name or "").strip() or "Open Play",
            organizer_id=organizer_id or generate_id(),
        )
        self.events.add(event.id, event)
        logger.info(f"Created event '{event.name}' ({event.id})")
        return event

    def list_events(self) -> List[Event]:
        """Active events, oldest first."""
        return self.events.list(lambda event: event.is_active)

    def get_event(self, event_id: str) -> Event:
        return self.events.get(event_id)

    def event_games(self, event_id: str) -> List[MatchState]:
        """Snapshots of an event's games in creation order."""
        with self.events.lock(event_id):
            event = self.events.get(event_id)
            engines = [self.games.find(game_id) for game_id in event.game_ids]
        return [engine.snapshot() for engine in engines if engine is not None]

    def create_game(
        self,
        event_id: str,
        team1_name: str,
        team2_name: str,
        settings: SettingsInput = None,
    ) -> MatchState:
        """Start a new game inside an event.

        Raises:
            EventNotFoundException: If the event does not exist
            InvalidStateException: If the event has been closed
            InvalidSettingsException: If the names or settings are invalid
        """
        with self.events.lock(event_id):
            event = self.events.get(event_id)
            if not event.is_active:
                raise InvalidStateException(f"Event {event_id} is closed")

            engine = MatchEngine(
                team1_name,
                team2_name,
                settings=_coerce_settings(settings),
                tournament_id=event.id,
            )
            self.games.add(engine.id, engine)
            event.game_ids.append(engine.id)
            state = engine.snapshot()

        self._publish(
            channel_name(CHANNEL_EVENT, event_id), MESSAGE_GAME_CREATED, state.to_dict()
        )
        return state

    def close_event(self, event_id: str) -> Event:
        """Mark an event completed; no more games can be added."""
        with self.events.lock(event_id):
            event = self.events.get(event_id)
            if not event.is_active:
                raise InvalidStateException(f"Event {event_id} is already closed")
            event.status = EVENT_COMPLETED
            event.completed_at = utc_now()
        logger.info(f"Closed event '{event.name}' ({event.id})")
        self._publish(
            channel_name(CHANNEL_EVENT, event_id), MESSAGE_EVENT_CLOSED, event.to_dict()
        )
        return event

    # ========== Games ==========

    def get_game(self, game_id: str) -> MatchState:
        with self.games.lock(game_id):
            return self.games.get(game_id).snapshot()

    def game_history(self, game_id: str) -> Tuple[HistoryEntry, ...]:
        with self.games.lock(game_id):
            return self.games.get(game_id).history

    def record_rally(self, game_id: str, winning_team: int) -> MatchState:
        """Score one rally.

        Raises:
            GameNotFoundException: If the game does not exist
            MatchStateException: If the game is completed or archived
            InvalidScoreException: If ``winning_team`` is not 1 or 2
        """
        with self.games.lock(game_id):
            engine = self.games.get(game_id)
            state = engine.record_rally(winning_team)
            self._publish_game(engine, state, MESSAGE_SCORE_UPDATE)
        return state

    def undo(self, game_id: str) -> MatchState:
        """Undo the last rally or serve switch.

        Raises:
            GameNotFoundException: If the game does not exist
            MatchStateException: If the game is archived
            EmptyHistoryException: If there is nothing to undo
        """
        with self.games.lock(game_id):
            engine = self.games.get(game_id)
            state = engine.undo()
            self._publish_game(engine, state, MESSAGE_SCORE_UPDATE)
        return state

    def switch_serve(self, game_id: str) -> MatchState:
        with self.games.lock(game_id):
            engine = self.games.get(game_id)
            state = engine.switch_serve()
            self._publish_game(engine, state, MESSAGE_SCORE_UPDATE)
        return state

    # ========== Round Robin ==========

    def create_round_robin(
        self,
        name: str,
        team_names: Sequence[str],
        organizer_id: Optional[str] = None,
    ) -> RoundRobinTournament:
        """Create a round-robin tournament with its full schedule.

        Raises:
            InvalidTeamListException: If fewer than two valid, distinct names
        """
        tournament = RoundRobinTournament(name, team_names, organizer_id=organizer_id)
        self.round_robins.add(tournament.id, tournament)
        return tournament

    def list_round_robins(self) -> List[RoundRobinTournament]:
        return self.round_robins.list()

    def get_round_robin(self, tournament_id: str) -> RoundRobinTournament:
        return self.round_robins.get(tournament_id)

    def start_fixture(
        self,
        tournament_id: str,
        fixture_id: str,
        settings: SettingsInput = None,
    ) -> MatchState:
        """Start the game that decides a pending fixture.

        Settings default to a singles side-out game to 11 with team 1 serving.

        Raises:
            TournamentNotFoundException: If the tournament does not exist
            FixtureNotFoundException: If the fixture does not exist
            FixtureStateException: If the fixture is not pending
        """
        with self.round_robins.lock(tournament_id):
            tournament = self.round_robins.get(tournament_id)
            fixture = tournament.get_fixture(fixture_id)

            engine = MatchEngine(
                fixture.team1.name,
                fixture.team2.name,
                settings=_coerce_settings(settings),
                tournament_id=tournament.id,
            )
            tournament.start_fixture(fixture_id, engine.id)
            self.games.add(engine.id, engine)
            state = engine.snapshot()

            self._publish(
                channel_name(CHANNEL_ROUND_ROBIN, tournament_id),
                MESSAGE_FIXTURE_STARTED,
                {"fixture": fixture.to_dict(), "game": state.to_dict()},
            )
        return state

    def complete_fixture(self, tournament_id: str, fixture_id: str) -> Dict[str, Any]:
        """Record a finished fixture game into the standings.

        Returns:
            The updated standings view

        Raises:
            TournamentNotFoundException: If the tournament does not exist
            FixtureNotFoundException: If the fixture does not exist or was
                never started
            GameNotFoundException: If the fixture's game has been deleted
            MatchStateException: If the game is not completed yet
            FixtureStateException: If the fixture is already completed
        """
        with self.round_robins.lock(tournament_id):
            tournament = self.round_robins.get(tournament_id)
            fixture = tournament.get_fixture(fixture_id)
            if fixture.match_id is None:
                raise FixtureNotFoundException(fixture_id)

            with self.games.lock(fixture.match_id):
                engine = self.games.get(fixture.match_id)
                state = engine.snapshot()
                if not state.is_completed:
                    raise MatchStateException(
                        f"Game {state.id} for fixture {fixture.label()} "
                        "is not completed yet"
                    )
                tournament.record_fixture_result(fixture_id, *state.score)
                engine.archive()

            standings = tournament.standings_view()
            self._publish(
                channel_name(CHANNEL_ROUND_ROBIN, tournament_id),
                MESSAGE_STANDINGS_UPDATED,
                standings,
            )
        return standings

    def standings(self, tournament_id: str) -> Dict[str, Any]:
        with self.round_robins.lock(tournament_id):
            return self.round_robins.get(tournament_id).standings_view()

    # ========== Deletion ==========

    def delete_game(self, game_id: str) -> None:
        with self.games.lock(game_id):
            engine = self.games.remove(game_id)
        event = self.events.find(engine.tournament_id)
        if event is not None:
            with self.events.lock(event.id):
                if game_id in event.game_ids:
                    event.game_ids.remove(game_id)

    def delete_round_robin(self, tournament_id: str) -> None:
        """Delete a tournament together with its fixture games."""
        with self.round_robins.lock(tournament_id):
            tournament = self.round_robins.remove(tournament_id)
        for fixture in tournament.fixtures:
            if fixture.match_id in self.games:
                self.games.remove(fixture.match_id)

    def delete_event(self, event_id: str) -> None:
        """Delete an event together with its games."""
        with self.events.lock(event_id):
            event = self.events.remove(event_id)
        for game_id in event.game_ids:
            if game_id in self.games:
                self.games.remove(game_id)

    def prune_completed(self, max_age: timedelta) -> Dict[str, List[str]]:
        """Drop games, tournaments and events completed at least ``max_age`` ago.

        A finished game whose fixture result is not recorded yet is kept, so
        the fixture can still be completed.

        Returns:
            Removed ids per registry
        """
        unrecorded = {
            fixture.match_id
            for tournament in self.round_robins.list()
            for fixture in tournament.fixtures
            if fixture.is_in_progress
        }
        return {
            "games": self.games.prune_completed(
                max_age, keep=lambda engine: engine.id in unrecorded
            ),
            "round_robins": self.round_robins.prune_completed(max_age),
            "events": self.events.prune_completed(max_age),
        }
