"""Text command parser for the console front end.

Parses lines like "travel mars" or "travel saturn drive" into Command
objects that the console loop dispatches to the travel service.
"""

from dataclasses import dataclass, field
from enum import Enum


class CommandType(Enum):
    TRAVEL = "travel"
    ROUTES = "routes"
    STATUS = "status"
    SAVE = "save"
    CHOOSE = "choose"
    CONTINUE = "continue"
    HELP = "help"
    QUIT = "quit"


class ErrorType(Enum):
    """Classification of command input errors."""

    UNKNOWN_COMMAND = "unknown_command"
    SYNTAX_ERROR = "syntax_error"


class CommandParseError(Exception):
    """Raised when command parsing fails with classification."""

    def __init__(self, error_type: ErrorType, message: str):
        """Initialize parse error.

        Args:
            error_type: Classification of the error
            message: Human-readable error message
        """
        self.error_type = error_type
        self.message = message
        super().__init__(message)


@dataclass
class Command:
    """A parsed console command."""

    type: CommandType
    args: list[str] = field(default_factory=list)
    use_instant_drive: bool = False


ALIASES = {
    "travel": CommandType.TRAVEL,
    "go": CommandType.TRAVEL,
    "t": CommandType.TRAVEL,
    "routes": CommandType.ROUTES,
    "r": CommandType.ROUTES,
    "status": CommandType.STATUS,
    "st": CommandType.STATUS,
    "save": CommandType.SAVE,
    "choose": CommandType.CHOOSE,
    "c": CommandType.CHOOSE,
    "continue": CommandType.CONTINUE,
    "next": CommandType.CONTINUE,
    "help": CommandType.HELP,
    "h": CommandType.HELP,
    "?": CommandType.HELP,
    "quit": CommandType.QUIT,
    "exit": CommandType.QUIT,
    "q": CommandType.QUIT,
}

HELP_TEXT = """Commands:
  travel <location> [drive]   Travel to a location (add 'drive' to use a Folded-Space Drive)
  routes                      List destinations with fuel and day costs
  status                      Show vessel, cargo and clock
  choose <n|id>               Pick an option when an event is shown (or just type the number)
  continue                    Resume the trip after an event result
  save <file>                 Save the game
  help                        Show this help
  quit                        Leave the game"""


class CommandParser:
    """Parse console input into Commands."""

    def parse(self, line: str) -> Command:
        """Parse one input line.

        A bare number is shorthand for "choose <number>".

        Args:
            line: Raw input

        Returns:
            Parsed Command

        Raises:
            CommandParseError: If the line is empty, unknown or malformed
        """
        parts = line.strip().lower().split()
        if not parts:
            raise CommandParseError(ErrorType.SYNTAX_ERROR, "Empty command")

        if len(parts) == 1 and parts[0].isdigit():
            return Command(CommandType.CHOOSE, [parts[0]])

        command_type = ALIASES.get(parts[0])
        if command_type is None:
            raise CommandParseError(ErrorType.UNKNOWN_COMMAND, f"Unknown command: '{parts[0]}'")
        args = parts[1:]

        if command_type is CommandType.TRAVEL:
            return self._parse_travel(args)
        if command_type in (CommandType.SAVE, CommandType.CHOOSE):
            if len(args) != 1:
                usage = "save <file>" if command_type is CommandType.SAVE else "choose <n|id>"
                raise CommandParseError(
                    ErrorType.SYNTAX_ERROR, f"Syntax error\nCorrect format: {usage}"
                )
            if command_type is CommandType.SAVE:
                # File names keep their case
                args = [line.strip().split()[1]]
            return Command(command_type, args)
        if args:
            raise CommandParseError(
                ErrorType.SYNTAX_ERROR, f"'{parts[0]}' does not take arguments"
            )
        return Command(command_type)

    def _parse_travel(self, args: list[str]) -> Command:
        if not args:
            raise CommandParseError(
                ErrorType.SYNTAX_ERROR,
                "Syntax error: missing destination\nCorrect format: travel <location> [drive]",
            )
        if len(args) == 1:
            return Command(CommandType.TRAVEL, [args[0]])
        if len(args) == 2 and args[1] == "drive":
            return Command(CommandType.TRAVEL, [args[0]], use_instant_drive=True)
        raise CommandParseError(
            ErrorType.SYNTAX_ERROR,
            "Syntax error: invalid travel command\nCorrect format: travel <location> [drive]",
        )
