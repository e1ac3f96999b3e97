"""Pickle Track console.

Keeps score for a round-robin tournament from the terminal. Starts an
interactive session by default; ``pickletrack simulate`` runs a simulated
tournament non-interactively.
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

import argparse
import shlex
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from pickletrack.constants import (
    APP_NAME,
    DEFAULT_GAME_FORMAT,
    DEFAULT_PLAY_TO,
    DEFAULT_SCORING_SYSTEM,
    GAME_FORMATS,
    SCORING_SYSTEMS,
)
from pickletrack.controllers import Scoreboard
from pickletrack.controllers.tournament import RoundRobinTournament
from pickletrack.exceptions import PickleTrackException
from pickletrack.models.match import MatchState
from pickletrack.utils import setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


# Command definitions with their options
COMMANDS = {
    "tournament": {
        "description": "Create a round-robin tournament",
        "options": {
            "--name": "Tournament name",
            "--teams": "Comma-separated team names (at least 2)",
        },
    },
    "fixtures": {
        "description": "List fixtures of the current tournament",
        "options": {"--pending": "Only show fixtures not yet started"},
    },
    "start": {
        "description": "Start the game for a fixture",
        "options": {
            "<number>": "Fixture number from 'fixtures'",
            "--format": "Game format (singles/doubles)",
            "--scoring": "Scoring system (sideout/rally)",
            "--play-to": "Target score (default: 11)",
            "--serving": "Team serving first (1/2)",
        },
    },
    "rally": {
        "description": "Record a rally won by team 1 or 2",
        "options": {"<team>": "1 or 2"},
    },
    "undo": {"description": "Undo the last rally or serve switch", "options": {}},
    "switch": {"description": "Manually switch the serve", "options": {}},
    "complete": {
        "description": "Record the finished game into the standings",
        "options": {},
    },
    "standings": {"description": "Show the standings table", "options": {}},
    "simulate": {
        "description": "Simulate a full round robin",
        "options": {
            "--teams": "Number of teams (default: 4)",
            "--seed": "Random seed for reproducibility",
            "--scoring": "Scoring system (sideout/rally)",
            "--format": "Game format (singles/doubles)",
            "--play-to": "Target score (default: 11)",
            "--output": "Write the result as JSON to this file",
        },
    },
    "help": {
        "description": "Show help for specific command",
        "options": {"<command>": "Command name to get help for"},
    },
    "exit": {"description": "Exit the interactive mode", "options": {}},
}


def print_banner():
    """Print the application banner."""
    banner = f"""
{Colors.OKBLUE}╔═══════════════════════════════════════════════════════════════╗
║                                                               ║
║                      PICKLE TRACK                             ║
║                                                               ║
║                 [Live round-robin scoring]                    ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝{Colors.ENDC}

Type {Colors.BOLD}help{Colors.ENDC} to see all available commands
Type {Colors.BOLD}exit{Colors.ENDC} or {Colors.BOLD}quit{Colors.ENDC} to leave
"""
    print(banner)


def print_commands_list():
    """Print list of all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{cmd:15}{Colors.ENDC} - {info['description']}")
    print()


def print_command_help(command: str):
    """Print detailed help for a specific command."""
    if command not in COMMANDS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        print_commands_list()
        return

    cmd_info = COMMANDS[command]
    print(f"\n{Colors.BOLD}{Colors.OKBLUE}Command: {command}{Colors.ENDC}")
    print(f"{Colors.BOLD}Description:{Colors.ENDC} {cmd_info['description']}\n")

    if cmd_info["options"]:
        print(f"{Colors.BOLD}Options:{Colors.ENDC}")
        for option, description in cmd_info["options"].items():
            print(f"  {Colors.OKCYAN}{option:20}{Colors.ENDC} {description}")
    print()


def create_completer():
    """Create autocomplete completer for interactive mode."""
    completions = {}
    for cmd, info in COMMANDS.items():
        options = [opt for opt in info["options"] if opt.startswith("--")]
        completions[cmd] = WordCompleter(options) if options else None
    completions["help"] = WordCompleter(list(COMMANDS))
    return NestedCompleter.from_nested_dict(completions)


def parse_team_list(value: str) -> List[str]:
    """argparse type for ``--teams "A, B, C"``."""
    teams = [name.strip() for name in value.split(",") if name.strip()]
    if len(teams) < 2:
        raise argparse.ArgumentTypeError("at least two comma-separated teams required")
    return teams


def format_state(state: MatchState) -> str:
    """One-line scoreboard for a game."""
    serving = state.team1_name if state.serving_team == 1 else state.team2_name
    line = (
        f"{state.team1_name} {state.team1_score} - {state.team2_score} "
        f"{state.team2_name}  [{state.score_call}]  serving: {serving}"
    )
    if state.is_completed:
        winner = state.team1_name if state.winner == 1 else state.team2_name
        line += f"  {Colors.OKGREEN}FINAL, winner: {winner}{Colors.ENDC}"
    return line


def format_standings(standings: Dict[str, Any]) -> str:
    """Render the rankings table."""
    teams = {team["id"]: team for team in standings["teams"]}
    lines = [
        f"{'#':>3}  {'Team':24} {'W':>3} {'L':>3} {'PF':>5} {'PA':>5} {'Diff':>5} {'Win%':>6}"
    ]
    for entry in standings["rankings"]:
        win_pct = teams[entry["team_id"]]["win_percentage"]
        lines.append(
            f"{entry['rank']:>3}  {entry['team_name']:24} {entry['games_won']:>3} "
            f"{entry['games_lost']:>3} {entry['points_scored']:>5} "
            f"{entry['points_conceded']:>5} {entry['point_difference']:>+5} "
            f"{win_pct:>6.1f}"
        )
    return "\n".join(lines)


# ========== Command Parsers ==========


def create_tournament_parser():
    """Create parser for tournament command."""
    parser = argparse.ArgumentParser(prog="tournament", description="Create a round robin")
    parser.add_argument("--name", default="Round Robin", help="Tournament name")
    parser.add_argument(
        "--teams", type=parse_team_list, required=True, help="Comma-separated teams"
    )
    return parser


def create_fixtures_parser():
    """Create parser for fixtures command."""
    parser = argparse.ArgumentParser(prog="fixtures", description="List fixtures")
    parser.add_argument("--pending", action="store_true", help="Only pending fixtures")
    return parser


def create_start_parser():
    """Create parser for start command."""
    parser = argparse.ArgumentParser(prog="start", description="Start a fixture")
    parser.add_argument("number", type=int, help="Fixture number")
    parser.add_argument("--format", choices=GAME_FORMATS, default=DEFAULT_GAME_FORMAT)
    parser.add_argument(
        "--scoring", choices=SCORING_SYSTEMS, default=DEFAULT_SCORING_SYSTEM
    )
    parser.add_argument("--play-to", type=int, default=DEFAULT_PLAY_TO)
    parser.add_argument("--serving", type=int, choices=[1, 2], default=1)
    return parser


def create_rally_parser():
    """Create parser for rally command."""
    parser = argparse.ArgumentParser(prog="rally", description="Record a rally")
    parser.add_argument("team", type=int, choices=[1, 2], help="Rally winner")
    return parser


def add_simulate_arguments(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    parser.add_argument("--teams", type=int, default=4, help="Number of teams")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument(
        "--scoring", choices=SCORING_SYSTEMS, default=DEFAULT_SCORING_SYSTEM
    )
    parser.add_argument("--format", choices=GAME_FORMATS, default=DEFAULT_GAME_FORMAT)
    parser.add_argument("--play-to", type=int, default=DEFAULT_PLAY_TO)
    parser.add_argument("--output", help="Output JSON file")
    return parser


def create_simulate_parser():
    """Create parser for simulate command."""
    parser = argparse.ArgumentParser(prog="simulate", description="Simulate a round robin")
    return add_simulate_arguments(parser)


# ========== Commands ==========


def run_simulate_command(args: argparse.Namespace) -> int:
    """Run the simulate command."""
    from pickletrack.testing import RoundRobinSimulator, SimulationConfig

    print(f"\n{Colors.BOLD}Simulating round robin...{Colors.ENDC}")
    config = SimulationConfig(
        num_teams=args.teams,
        seed=args.seed,
        scoring_system=args.scoring,
        game_format=args.format,
        play_to=args.play_to,
    )
    simulator = RoundRobinSimulator(config)
    result = simulator.run()

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(simulator.export_json_format(result), encoding="utf-8")
        print(f"{Colors.OKGREEN}Result saved to: {output_path}{Colors.ENDC}")

    total_rallies = sum(f["rallies"] for f in result["fixtures"])
    print(f"\n{Colors.BOLD}Simulation Complete:{Colors.ENDC}")
    print(f"  Fixtures: {len(result['fixtures'])}")
    print(f"  Rallies: {total_rallies}\n")
    print(format_standings(result["standings"]))
    print()
    return 0


class ConsoleSession:
    """Interactive scorekeeping state: one scoreboard, one current tournament."""

    def __init__(self, scoreboard: Optional[Scoreboard] = None):
        self.scoreboard = scoreboard or Scoreboard()
        self.tournament: Optional[RoundRobinTournament] = None
        self.fixture_id: Optional[str] = None
        self.game_id: Optional[str] = None

    def execute(self, user_input: str) -> bool:
        """Run one command line.

        Returns:
            False when the session should end
        """
        user_input = user_input.strip()
        if not user_input:
            return True

        if user_input in ["exit", "quit", "q"]:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            return False

        try:
            parts = shlex.split(user_input)
        except ValueError as e:
            print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
            return True

        command = parts[0].lstrip("/")
        args_list = parts[1:]

        if command not in COMMANDS:
            print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
            print(f"Type {Colors.BOLD}help{Colors.ENDC} to see available commands")
            return True

        try:
            if command == "tournament":
                self.create_tournament(create_tournament_parser().parse_args(args_list))
            elif command == "fixtures":
                self.list_fixtures(create_fixtures_parser().parse_args(args_list))
            elif command == "start":
                self.start(create_start_parser().parse_args(args_list))
            elif command == "rally":
                args = create_rally_parser().parse_args(args_list)
                self.show(self.scoreboard.record_rally(self._require_game(), args.team))
            elif command == "undo":
                self.show(self.scoreboard.undo(self._require_game()))
            elif command == "switch":
                self.show(self.scoreboard.switch_serve(self._require_game()))
            elif command == "complete":
                self.complete()
            elif command == "standings":
                tournament = self._require_tournament()
                print(format_standings(self.scoreboard.standings(tournament.id)))
            elif command == "simulate":
                run_simulate_command(create_simulate_parser().parse_args(args_list))
            elif command == "help":
                if args_list:
                    print_command_help(args_list[0].lstrip("/"))
                else:
                    print_commands_list()
        except SystemExit:
            # argparse calls sys.exit on error, catch it
            pass
        except PickleTrackException as e:
            print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return True

    def create_tournament(self, args: argparse.Namespace) -> None:
        self.tournament = self.scoreboard.create_round_robin(args.name, args.teams)
        self.fixture_id = None
        self.game_id = None
        print(
            f"{Colors.OKGREEN}Created '{self.tournament.name}' with "
            f"{len(self.tournament.teams)} teams and "
            f"{len(self.tournament.fixtures)} fixtures{Colors.ENDC}"
        )

    def list_fixtures(self, args: argparse.Namespace) -> None:
        tournament = self._require_tournament()
        fixtures = (
            tournament.upcoming_fixtures() if args.pending else tournament.fixtures
        )
        for fixture in fixtures:
            score = ""
            if fixture.is_completed:
                score = f"  {fixture.team1.score}-{fixture.team2.score}"
            print(f"  {fixture.number:>3}. {fixture.label():40} {fixture.status}{score}")

    def start(self, args: argparse.Namespace) -> None:
        tournament = self._require_tournament()
        fixture = self._fixture_by_number(tournament, args.number)
        settings = {
            "game_format": args.format,
            "scoring_system": args.scoring,
            "play_to": args.play_to,
            "serving_team": args.serving,
        }
        state = self.scoreboard.start_fixture(tournament.id, fixture.id, settings)
        self.fixture_id = fixture.id
        self.game_id = state.id
        print(f"{Colors.OKGREEN}Started fixture {fixture.number}{Colors.ENDC}")
        self.show(state)

    def complete(self) -> None:
        tournament = self._require_tournament()
        if self.fixture_id is None:
            raise PickleTrackException("No fixture in progress, use 'start' first")
        standings = self.scoreboard.complete_fixture(tournament.id, self.fixture_id)
        self.fixture_id = None
        self.game_id = None
        print(format_standings(standings))
        if tournament.is_completed:
            print(f"\n{Colors.OKGREEN}Tournament complete!{Colors.ENDC}")

    def show(self, state: MatchState) -> None:
        print(format_state(state))

    def _require_tournament(self) -> RoundRobinTournament:
        if self.tournament is None:
            raise PickleTrackException("No tournament, use 'tournament' first")
        return self.tournament

    def _require_game(self) -> str:
        if self.game_id is None:
            raise PickleTrackException("No game in progress, use 'start' first")
        return self.game_id

    def _fixture_by_number(self, tournament: RoundRobinTournament, number: int):
        for fixture in tournament.fixtures:
            if fixture.number == number:
                return fixture
        raise PickleTrackException(f"No fixture number {number}")


def run_interactive_mode():
    """Run the interactive console session."""
    print_banner()

    style = Style.from_dict(
        {
            "prompt": "#00aa00 bold",
        }
    )
    prompt_session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=style,
    )
    console = ConsoleSession()

    while True:
        try:
            user_input = prompt_session.prompt("pickletrack> ")
            try:
                if not console.execute(user_input):
                    break
            except Exception as e:
                print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
                logger.exception("Command execution failed")
        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break
    return 0


def create_main_parser():
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="pickletrack",
        description=f"{APP_NAME}: live pickleball scoring for round-robin tournaments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  pickletrack

  # Simulate a six team rally-scoring round robin
  pickletrack simulate --teams 6 --scoring rally --seed 7 --output rr.json
        """,
    )
    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Start in interactive mode"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    sim_parser = subparsers.add_parser("simulate", help="Simulate a round robin")
    add_simulate_arguments(sim_parser)
    sim_parser.set_defaults(func=run_simulate_command)
    return parser


def run_standard_mode(argv: Optional[List[str]] = None):
    """Run in standard CLI mode (non-interactive)."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.interactive:
        return run_interactive_mode()

    if hasattr(args, "func"):
        try:
            return args.func(args)
        except PickleTrackException as e:
            print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
            return 1
    parser.print_help()
    return 0


def main() -> int:
    """Main entry point for the pickletrack console."""
    # If no arguments, start interactive mode
    if len(sys.argv) == 1:
        return run_interactive_mode()

    if "--interactive" in sys.argv or "-i" in sys.argv:
        return run_interactive_mode()

    return run_standard_mode()


if __name__ == "__main__":
    sys.exit(main())
