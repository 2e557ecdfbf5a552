"""Interactive terminal for a running Virtual Shell server.

Usage:
    python -m client.terminal --url http://localhost:8000

Each line is sent to ``/shell/execute``. ``clear``/``cls`` clears the local
screen, and ``nano``/``vim``/``vi`` open the file in ``$EDITOR`` on a
temporary copy that is written back through ``/fs/write`` on save.
"""

import argparse
import logging
import os
import shlex
import subprocess
import sys
import tempfile
from typing import Callable, Optional, TextIO

from client.client import VirtualShellClient
from client.exceptions import VirtualShellClientError
from client.models import CommandResponse

logger = logging.getLogger(__name__)

CLEAR_SEQUENCE = "\033[2J\033[H"
EXIT_COMMANDS = {"exit", "logout"}
DEFAULT_EDITOR = "vi"


def run_editor(path: str) -> None:
    """Open a local file in ``$VISUAL``/``$EDITOR`` and wait for it to exit."""
    editor = os.environ.get("VISUAL") or os.environ.get("EDITOR") or DEFAULT_EDITOR
    subprocess.run([*shlex.split(editor), path], check=False)


class Terminal:
    """Prompt loop bound to one client.

    Args:
        client: Client connected to the server.
        stdout: Stream output is written to.
        editor: Callable opening a local file path for editing.
    """

    def __init__(
        self,
        client: VirtualShellClient,
        stdout: Optional[TextIO] = None,
        editor: Callable[[str], None] = run_editor,
    ) -> None:
        self.client = client
        self.stdout = stdout or sys.stdout
        self.editor = editor
        self.prompt = client.shell.session().prompt

    def handle(self, line: str) -> bool:
        """Run one line. Returns False when the session should end."""
        if line.strip() in EXIT_COMMANDS:
            return False

        response = self.client.shell.execute(line)
        self.render(response)
        self.prompt = response.prompt
        return True

    def render(self, response: CommandResponse) -> None:
        if response.clear_screen:
            self.stdout.write(CLEAR_SEQUENCE)
        if response.output:
            self.stdout.write(response.output.rstrip("\n") + "\n")
        if response.open_editor:
            self.edit(response.open_editor)
        self.stdout.flush()

    def edit(self, path: str) -> None:
        """Edit a remote file through a local temporary copy.

        The file is only written back when its content changed.
        """
        original = self.client.filesystem.read(path).content
        suffix = os.path.splitext(path)[1]
        handle, local_path = tempfile.mkstemp(prefix="vshell-", suffix=suffix)
        try:
            with os.fdopen(handle, "w", encoding="utf-8") as f:
                f.write(original)
            self.editor(local_path)
            with open(local_path, encoding="utf-8") as f:
                edited = f.read()
        finally:
            os.unlink(local_path)

        if edited != original:
            self.client.filesystem.write(path, edited)
            logger.info(f"Saved {path} ({len(edited)} characters)")

    def loop(self, read_line: Callable[[str], str] = input) -> None:
        """Read and run lines until EOF, ``exit`` or Ctrl-C."""
        while True:
            try:
                line = read_line(f"{self.prompt} ")
            except (EOFError, KeyboardInterrupt):
                self.stdout.write("\n")
                return
            try:
                if not self.handle(line):
                    return
            except VirtualShellClientError as e:
                self.stdout.write(f"error: {e}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m client.terminal",
        description="Interactive terminal for a Virtual Shell server",
    )
    parser.add_argument(
        "--url",
        default=os.environ.get("VSHELL_URL", "http://localhost:8000"),
        help="Server base URL (default: $VSHELL_URL or http://localhost:8000)",
    )
    parser.add_argument(
        "-c",
        "--command",
        help="Run a single command and exit",
    )
    parser.add_argument(
        "--retry",
        action="store_true",
        help="Retry transient connection failures with backoff",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    with VirtualShellClient(base_url=args.url, retry_enabled=args.retry) as client:
        try:
            terminal = Terminal(client)
            if args.command is not None:
                terminal.handle(args.command)
            else:
                terminal.loop()
        except VirtualShellClientError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
