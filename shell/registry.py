"""Command registry - maps command names to handler functions."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional, Union

from models.errors import ErrorKind, FsError
from shell.parser import CommandLine

if TYPE_CHECKING:
    from shell.interpreter import ExecutionResult, Shell

HandlerResult = Union[str, "ExecutionResult"]
CommandHandler = Callable[["Shell", CommandLine], HandlerResult]

FILE_OPERATIONS = "File Operations"
TEXT_PROCESSING = "Text Processing"
SYSTEM_INFO = "System Info"
NETWORK = "Network"
UTILITIES = "Utilities"

CATEGORY_ORDER = [FILE_OPERATIONS, TEXT_PROCESSING, SYSTEM_INFO, NETWORK, UTILITIES]


class ShellError(Exception):
    """Raised by command handlers; rendered as the command's output.

    Args:
        kind: Error kind, for callers that want more than the text.
        message: The exact text shown to the user.
    """

    def __init__(self, kind: ErrorKind, message: str):
        self.kind = kind
        self.message = message
        super().__init__(message)

    @classmethod
    def missing_operand(cls, message: str) -> "ShellError":
        return cls(ErrorKind.MISSING_OPERAND, message)

    @classmethod
    def from_fs(cls, error: FsError, prefix: str) -> "ShellError":
        """Wrap a filesystem error as ``<prefix>: <reason>``."""
        return cls(error.kind, f"{prefix}: {error.message}")


@dataclass
class CommandSpec:
    """A registered command.

    Args:
        name: Primary command name.
        aliases: Alternative names dispatching to the same handler.
        category: Section the command is listed under in ``help``.
        summary: One-line description.
        handler: Function called with the shell and the tokenized line.
    """

    name: str
    category: str
    handler: CommandHandler
    aliases: list[str] = field(default_factory=list)
    summary: str = ""

    @property
    def names(self) -> list[str]:
        return [self.name, *self.aliases]


class CommandRegistry:
    """Dispatch table from command names (lowercase) to CommandSpecs."""

    def __init__(self) -> None:
        self._specs: dict[str, CommandSpec] = {}
        self._order: list[CommandSpec] = []

    def register(
        self, name: str, *aliases: str, category: str, summary: str = ""
    ) -> Callable[[CommandHandler], CommandHandler]:
        """Decorator registering a handler under a name and its aliases.

        Raises:
            ValueError: If any of the names is already registered.
        """

        def decorator(handler: CommandHandler) -> CommandHandler:
            spec = CommandSpec(
                name=name,
                aliases=list(aliases),
                category=category,
                summary=summary,
                handler=handler,
            )
            for command_name in spec.names:
                if command_name in self._specs:
                    raise ValueError(f"Command '{command_name}' is already registered")
            for command_name in spec.names:
                self._specs[command_name] = spec
            self._order.append(spec)
            return handler

        return decorator

    def get(self, name: str) -> Optional[CommandSpec]:
        return self._specs.get(name.lower())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._specs

    def names(self) -> list[str]:
        return sorted(self._specs)

    def by_category(self) -> dict[str, list[CommandSpec]]:
        """Registered commands grouped by category, in registration order."""
        grouped: dict[str, list[CommandSpec]] = {}
        for category in CATEGORY_ORDER:
            grouped[category] = []
        for spec in self._order:
            grouped.setdefault(spec.category, []).append(spec)
        return {category: specs for category, specs in grouped.items() if specs}


# Built-in commands register themselves here when shell.commands is imported
builtin_commands = CommandRegistry()
