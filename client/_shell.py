"""Shell sub-client for the Virtual Shell API.

This module provides ShellClient and AsyncShellClient for the command
endpoints (/shell/*).

This is an internal module. Import from `client` instead.
"""

from client._base import AsyncBaseClient, BaseClient
from client.models import CommandResponse, SessionResponse


class ShellClient(BaseClient):
    """Synchronous client for the shell endpoints (/shell/*).

    Commands run in the server's single shell session, so ``cd`` persists
    between calls.

    Example:
        with VirtualShellClient() as client:
            client.shell.execute("cd Documents")
            result = client.shell.execute("ls -l")
            print(result.output)
    """

    _BASE_PATH = "/shell"

    def execute(self, command: str) -> CommandResponse:
        """Run one command line.

        Command failures are reported in the response (``error_kind`` and
        the error text as ``output``), not raised.

        Args:
            command: The line exactly as typed.

        Returns:
            Output, UI side effects, and the session's new cwd and prompt.
        """
        data = self._post("/execute", json={"command": command})
        return CommandResponse(**data)

    def session(self) -> SessionResponse:
        """Get the session's working directory and prompt."""
        data = self._get("/session")
        return SessionResponse(**data)


class AsyncShellClient(AsyncBaseClient):
    """Asynchronous client for the shell endpoints (/shell/*).

    Example:
        async with AsyncVirtualShellClient() as client:
            result = await client.shell.execute("pwd")
    """

    _BASE_PATH = "/shell"

    async def execute(self, command: str) -> CommandResponse:
        """Run one command line. See ``ShellClient.execute``."""
        data = await self._post("/execute", json={"command": command})
        return CommandResponse(**data)

    async def session(self) -> SessionResponse:
        """Get the session's working directory and prompt."""
        data = await self._get("/session")
        return SessionResponse(**data)
