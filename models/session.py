"""Session context - the mutable working-directory state of one shell."""

from pydantic import BaseModel, Field

from models.paths import DEFAULT_HOME, abbreviate_home


class SessionContext(BaseModel):
    """Per-session state shared by consecutive shell invocations.

    Only ``FileSystem.change_directory`` mutates ``current_directory``; every
    other operation just reads it as the base for relative paths.

    Args:
        current_directory: Canonical absolute working directory.
        home: Canonical home directory used for ``~``.
        username: User shown in prompts and ``whoami``.
        hostname: Host shown in prompts.
    """

    current_directory: str = Field(
        default=DEFAULT_HOME, description="Canonical absolute working directory"
    )
    home: str = Field(default=DEFAULT_HOME, description="Canonical home directory")
    username: str = Field(default="user", description="User shown in prompts")
    hostname: str = Field(default="vshell", description="Host shown in prompts")

    @property
    def display_directory(self) -> str:
        return abbreviate_home(self.current_directory, self.home)

    @property
    def prompt(self) -> str:
        """Prompt string, e.g. ``user@vshell:~/Documents$``."""
        return f"{self.username}@{self.hostname}:{self.display_directory}$"
