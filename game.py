#!/usr/bin/env python3
"""Starlane - Main entry point.

A text front end for the travel engine: fly between locations, survive
random events and try not to get stranded.
"""

import argparse
import logging
import sys

from starlane.engine.collaborators import Collaborators, DockingSync
from starlane.engine.travel_service import TravelService
from starlane.interface.command_parser import (
    HELP_TEXT,
    Command,
    CommandParseError,
    CommandParser,
    CommandType,
)
from starlane.interface.console import (
    ConsolePresentation,
    show_result,
    show_routes,
    show_status,
)
from starlane.models.game import Game
from starlane.models.trip import TripPhase
from starlane.utils.catalog import load_catalog, new_game
from starlane.utils.constants import RNG_SEED_DEFAULT, STARTING_VESSEL_ID
from starlane.utils.serialization import load_game, save_game


class ConsoleSession:
    """Runs the read-eval loop for one game."""

    def __init__(self, game: Game):
        self.game = game
        self.parser = CommandParser()
        self.service = TravelService(
            game,
            Collaborators.for_game(
                game, presentation=ConsolePresentation(), docking=DockingSync()
            ),
        )

    def run(self) -> Game:
        """Main input loop."""
        print("\n" + "=" * 60)
        print("Starlane")
        print("=" * 60)
        print("Type 'help' for commands. Press Ctrl+C at any time to quit.")
        show_status(self.game)

        try:
            while True:
                if self.game.is_game_over:
                    print(f"\nGAME OVER: {self.game.game_over_reason}")
                    break
                try:
                    line = input(f"\n[day {self.game.day}] > ")
                except EOFError:
                    break
                try:
                    command = self.parser.parse(line)
                except CommandParseError as e:
                    print(e.message)
                    continue
                if command.type is CommandType.QUIT:
                    break
                self.dispatch(command)
        except KeyboardInterrupt:
            print("\n\nGame interrupted by user. Exiting...")

        return self.game

    def dispatch(self, command: Command) -> None:
        if command.type is CommandType.HELP:
            print(HELP_TEXT)
        elif command.type is CommandType.STATUS:
            show_status(self.game)
        elif command.type is CommandType.ROUTES:
            show_routes(self.service)
        elif command.type is CommandType.SAVE:
            save_game(self.game, command.args[0])
            print(f"Game saved to {command.args[0]}")
        elif command.type is CommandType.TRAVEL:
            result = self.service.travel_to(command.args[0], command.use_instant_drive)
            show_result(result)
        elif command.type is CommandType.CHOOSE:
            self._choose(command.args[0])
        elif command.type is CommandType.CONTINUE:
            if self.game.trip.phase is not TripPhase.RESOLVED:
                print("There is nothing to continue.")
                return
            show_result(self.service.resume_travel())

    def _choose(self, selection: str) -> None:
        pending = self.game.pending_travel
        if pending is None or pending.event_id is None:
            print("No event is waiting for a choice.")
            return
        event = self.game.catalog.get_event(pending.event_id)
        choice_id = selection
        if selection.isdigit():
            index = int(selection) - 1
            if not 0 <= index < len(event.choices):
                print(f"Pick a number between 1 and {len(event.choices)}.")
                return
            choice_id = event.choices[index].id
        try:
            self.service.choose(choice_id)
        except ValueError as e:
            print(f"Cannot choose that: {e}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Starlane - Space travel with random events",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # New game with the default vessel
  %(prog)s --vessel sparrow         # Start with a different vessel
  %(prog)s --seed 7 --always-event  # Every trip triggers an event
  %(prog)s --load savegame.json     # Load saved game
  %(prog)s --save mygame.json       # Save when the session ends
        """,
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=RNG_SEED_DEFAULT,
        help=f"Random seed (default: {RNG_SEED_DEFAULT})",
    )
    parser.add_argument(
        "--vessel",
        type=str,
        default=STARTING_VESSEL_ID,
        help=f"Starting vessel ID (default: {STARTING_VESSEL_ID})",
    )
    parser.add_argument("--catalog", type=str, metavar="FILE", help="Reference data JSON file")
    parser.add_argument("--load", type=str, metavar="FILE", help="Load game from JSON file")
    parser.add_argument(
        "--save", type=str, metavar="FILE", help="Save game to JSON file when the session ends"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--always-event",
        action="store_true",
        help="Trigger a random event on every trip (debug)",
    )

    args = parser.parse_args()

    log_level = logging.DEBUG if args.debug else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    try:
        catalog = load_catalog(args.catalog)
    except Exception as e:
        print(f"Error loading catalog: {e}")
        sys.exit(1)

    if args.load:
        print(f"Loading game from {args.load}...")
        try:
            game = load_game(args.load, catalog)
            print(f"Game loaded successfully (Day {game.day}, Seed {game.seed})")
        except FileNotFoundError:
            print(f"Error: File {args.load} not found.")
            sys.exit(1)
        except Exception as e:
            print(f"Error loading game: {e}")
            sys.exit(1)
    else:
        try:
            game = new_game(catalog, seed=args.seed, vessel_id=args.vessel)
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)

    if args.always_event:
        game.debug_always_trigger = True

    final_game = ConsoleSession(game).run()

    if args.save:
        print(f"\nSaving game to {args.save}...")
        try:
            save_game(final_game, args.save)
            print("Game saved successfully!")
        except OSError as e:
            print(f"Error saving game: {e}")


if __name__ == "__main__":
    main()
