"""Command interpreter - runs one command line against the filesystem."""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Protocol

from pydantic import BaseModel, Field

from models.errors import ErrorKind
from models.filesystem import FileSystem
from models.session import SessionContext
from models.settings import ShellSettings
from shell.parser import tokenize
from shell.registry import CommandRegistry, ShellError, builtin_commands

logger = logging.getLogger(__name__)


class EditorCollaborator(Protocol):
    """Something that can present a file for editing (a UI modal, $EDITOR, ...)."""

    def open(self, path: str, content: str) -> None: ...


class ExecutionResult(BaseModel):
    """Rendered outcome of one command line.

    Args:
        output: Text to append to the terminal (may be empty).
        error_kind: Set when the output is an error message.
        clear_screen: The terminal should clear its scrollback.
        open_editor: Canonical path the terminal should open in an editor.
    """

    output: str = Field(default="", description="Text to append to the terminal")
    error_kind: Optional[ErrorKind] = Field(
        default=None, description="Set when the output is an error message"
    )
    clear_screen: bool = Field(default=False, description="Clear the terminal")
    open_editor: Optional[str] = Field(
        default=None, description="Path to open in an editor"
    )

    @property
    def ok(self) -> bool:
        return self.error_kind is None


class Shell:
    """Line-oriented interpreter over a FileSystem.

    The shell is stateless between calls except for its SessionContext:
    there is no history buffer and no environment. Every command either
    renders its result or renders its error as text; ``execute`` never
    raises for user mistakes.

    Attributes:
        filesystem: The shared filesystem store.
        session: Working-directory state of this shell.
        settings: Names shown by ``whoami``, ``uname`` and prompts.
        editor: Optional collaborator notified by ``nano``/``vim``/``vi``.
        registry: Dispatch table of available commands.
        clock: Returns the current time (injectable for tests).
        started_at: When this shell was created (used by ``uptime``).

    Example:
        >>> shell = Shell(FileSystem.open())
        >>> shell.execute("mkdir projects")
        ''
        >>> shell.execute("ls")
        'Desktop  Documents  Downloads  projects'
    """

    def __init__(
        self,
        filesystem: FileSystem,
        session: Optional[SessionContext] = None,
        settings: Optional[ShellSettings] = None,
        editor: Optional[EditorCollaborator] = None,
        registry: Optional[CommandRegistry] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.filesystem = filesystem
        self.settings = settings or ShellSettings(home=filesystem.home)
        self.session = session or SessionContext(
            current_directory=filesystem.home,
            home=filesystem.home,
            username=self.settings.username,
            hostname=self.settings.hostname,
        )
        self.editor = editor
        self.registry = registry or builtin_commands
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.started_at = self.clock()

    @property
    def cwd(self) -> str:
        return self.session.current_directory

    @property
    def prompt(self) -> str:
        return self.session.prompt

    def resolve(self, path: str) -> str:
        return self.filesystem.resolve(path, self.cwd)

    def execute(self, raw_line: str) -> str:
        """Run one command line and return the rendered output text."""
        return self.run(raw_line).output

    def run(self, raw_line: str) -> ExecutionResult:
        """Run one command line.

        Args:
            raw_line: The line as typed by the user.

        Returns:
            ExecutionResult with the output text and any UI side effects.
        """
        command = tokenize(raw_line)
        if command.is_empty:
            return ExecutionResult()

        spec = self.registry.get(command.name)
        if spec is None:
            logger.debug(f"Unknown command '{command.name}'")
            return ExecutionResult(
                output=f"{self.settings.shell_name}: {command.name}: command not found",
                error_kind=ErrorKind.UNKNOWN_COMMAND,
            )

        try:
            result = spec.handler(self, command)
        except ShellError as e:
            return ExecutionResult(output=e.message, error_kind=e.kind)

        if isinstance(result, ExecutionResult):
            return result
        return ExecutionResult(output=result)
