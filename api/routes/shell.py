"""Shell endpoints for terminal clients.

A single interactive session is kept per process: consecutive commands share
the working directory, exactly like typing into one terminal window.
"""

import logging

from fastapi import APIRouter

from api.dependencies import ShellDep, filesystem_lock
from api.models import CommandRequest, CommandResponse, SessionResponse


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/shell",
    tags=["shell"],
)


@router.post("/execute", response_model=CommandResponse)
async def execute_command(request: CommandRequest, shell: ShellDep):
    """Run one command line in the shared shell session.

    Command failures are not HTTP errors: they are rendered as the command's
    output text, with ``error_kind`` set.

    Args:
        request: The command line to run.
        shell: The Shell instance (injected by FastAPI).

    Returns:
        The rendered output, UI side effects, and the new cwd and prompt.
    """
    async with filesystem_lock:
        result = shell.run(request.command)
        cwd = shell.cwd
        prompt = shell.prompt

    if result.error_kind is not None:
        logger.debug(f"Command '{request.command}' failed with {result.error_kind.value}")

    return CommandResponse(
        output=result.output,
        error_kind=result.error_kind,
        cwd=cwd,
        prompt=prompt,
        clear_screen=result.clear_screen,
        open_editor=result.open_editor,
    )


@router.get("/session", response_model=SessionResponse)
async def get_session(shell: ShellDep):
    """Get the shell session's working directory and prompt."""
    session = shell.session
    return SessionResponse(
        cwd=session.current_directory,
        prompt=session.prompt,
        home=session.home,
        username=session.username,
        hostname=session.hostname,
    )
