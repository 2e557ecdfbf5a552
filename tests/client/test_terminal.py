"""Unit tests for the interactive terminal in client/terminal.py.

The client is a MagicMock returning real response models, and the editor is
a callable that rewrites the temporary file, so no server or process is
needed.
"""

import io
import os
from unittest.mock import MagicMock, patch

import pytest

from client.exceptions import ConnectionError, NotFoundError
from client.models import CommandResponse, ReadFileResponse, SessionResponse
from client.terminal import CLEAR_SEQUENCE, Terminal, build_parser, main


def command_response(**overrides) -> CommandResponse:
    fields = {"output": "", "cwd": "/home/user", "prompt": "user@vshell:~$"}
    fields.update(overrides)
    return CommandResponse(**fields)


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.shell.session.return_value = SessionResponse(
        cwd="/home/user",
        prompt="user@vshell:~$",
        home="/home/user",
        username="user",
        hostname="vshell",
    )
    return client


@pytest.fixture
def stdout():
    return io.StringIO()


def make_editor(new_content=None):
    """Editor that records the local path and optionally rewrites the file."""
    opened = []

    def editor(path: str) -> None:
        opened.append(path)
        if new_content is not None:
            with open(path, "w", encoding="utf-8") as f:
                f.write(new_content)

    editor.opened = opened
    return editor


# =============================================================================
# Handling Lines
# =============================================================================


class TestHandle:
    def test_initial_prompt_comes_from_session(self, mock_client, stdout):
        assert Terminal(mock_client, stdout=stdout).prompt == "user@vshell:~$"

    def test_output_is_written_with_newline(self, mock_client, stdout):
        mock_client.shell.execute.return_value = command_response(output="a.txt  b.txt")
        terminal = Terminal(mock_client, stdout=stdout)

        assert terminal.handle("ls") is True

        mock_client.shell.execute.assert_called_once_with("ls")
        assert stdout.getvalue() == "a.txt  b.txt\n"

    def test_trailing_newline_is_not_doubled(self, mock_client, stdout):
        mock_client.shell.execute.return_value = command_response(output="hi\n")

        Terminal(mock_client, stdout=stdout).handle("cat x")

        assert stdout.getvalue() == "hi\n"

    def test_empty_output_writes_nothing(self, mock_client, stdout):
        mock_client.shell.execute.return_value = command_response()

        Terminal(mock_client, stdout=stdout).handle("mkdir x")

        assert stdout.getvalue() == ""

    def test_prompt_follows_response(self, mock_client, stdout):
        mock_client.shell.execute.return_value = command_response(
            cwd="/tmp", prompt="user@vshell:/tmp$"
        )
        terminal = Terminal(mock_client, stdout=stdout)

        terminal.handle("cd /tmp")

        assert terminal.prompt == "user@vshell:/tmp$"

    def test_clear_screen(self, mock_client, stdout):
        mock_client.shell.execute.return_value = command_response(clear_screen=True)

        Terminal(mock_client, stdout=stdout).handle("clear")

        assert stdout.getvalue() == CLEAR_SEQUENCE

    @pytest.mark.parametrize("line", ["exit", "  logout "])
    def test_exit_commands(self, mock_client, stdout, line):
        assert Terminal(mock_client, stdout=stdout).handle(line) is False
        mock_client.shell.execute.assert_not_called()


# =============================================================================
# Editing
# =============================================================================


class TestEdit:
    def test_changed_content_is_written_back(self, mock_client, stdout):
        mock_client.shell.execute.return_value = command_response(open_editor="/home/user/a.txt")
        mock_client.filesystem.read.return_value = ReadFileResponse(
            path="/home/user/a.txt", content="old\n", size=4
        )
        editor = make_editor("new\n")

        Terminal(mock_client, stdout=stdout, editor=editor).handle("nano a.txt")

        mock_client.filesystem.read.assert_called_once_with("/home/user/a.txt")
        mock_client.filesystem.write.assert_called_once_with("/home/user/a.txt", "new\n")
        assert editor.opened[0].endswith(".txt")

    def test_unchanged_content_is_not_written(self, mock_client, stdout):
        mock_client.filesystem.read.return_value = ReadFileResponse(
            path="/home/user/a.md", content="same", size=4
        )
        editor = make_editor()

        Terminal(mock_client, stdout=stdout, editor=editor).edit("/home/user/a.md")

        assert len(editor.opened) == 1
        mock_client.filesystem.write.assert_not_called()

    def test_temporary_copy_is_removed(self, mock_client, stdout):
        mock_client.filesystem.read.return_value = ReadFileResponse(
            path="/tmp/x", content="", size=0
        )
        editor = make_editor("x")

        Terminal(mock_client, stdout=stdout, editor=editor).edit("/tmp/x")

        assert not os.path.exists(editor.opened[0])


# =============================================================================
# Loop and CLI
# =============================================================================


class TestLoop:
    def test_runs_until_exit(self, mock_client, stdout):
        mock_client.shell.execute.return_value = command_response(output="/home/user")
        lines = iter(["pwd", "exit", "never"])
        prompts = []

        def read_line(prompt):
            prompts.append(prompt)
            return next(lines)

        Terminal(mock_client, stdout=stdout).loop(read_line)

        assert prompts == ["user@vshell:~$ ", "user@vshell:~$ "]
        assert mock_client.shell.execute.call_count == 1

    def test_stops_on_eof(self, mock_client, stdout):
        def read_line(prompt):
            raise EOFError

        Terminal(mock_client, stdout=stdout).loop(read_line)

        assert stdout.getvalue() == "\n"

    def test_client_errors_are_reported_and_loop_continues(self, mock_client, stdout):
        mock_client.shell.execute.side_effect = [
            NotFoundError("No such file or directory", error_kind="no_such_entry", path="/x"),
            command_response(output="ok"),
        ]
        lines = iter(["nano /x", "pwd", "exit"])

        Terminal(mock_client, stdout=stdout).loop(lambda prompt: next(lines))

        assert stdout.getvalue() == (
            "error: [HTTP 404] [no_such_entry] /x: No such file or directory\nok\n"
        )


class TestCommandLine:
    def test_parser_defaults(self, monkeypatch):
        monkeypatch.delenv("VSHELL_URL", raising=False)

        args = build_parser().parse_args([])

        assert args.url == "http://localhost:8000"
        assert args.command is None
        assert args.retry is False

    def test_parser_options(self):
        args = build_parser().parse_args(["--url", "http://h:1", "-c", "ls -l", "--retry"])

        assert args.url == "http://h:1"
        assert args.command == "ls -l"
        assert args.retry is True

    def test_main_runs_single_command(self, mock_client, capsys):
        mock_client.__enter__.return_value = mock_client
        mock_client.shell.execute.return_value = command_response(output="hello")

        with patch("client.terminal.VirtualShellClient", return_value=mock_client) as factory:
            assert main(["-c", "echo hello", "--url", "http://h:1"]) == 0

        factory.assert_called_once_with(base_url="http://h:1", retry_enabled=False)
        mock_client.shell.execute.assert_called_once_with("echo hello")
        assert capsys.readouterr().out == "hello\n"

    def test_main_reports_connection_failure(self, mock_client, capsys):
        mock_client.__enter__.return_value = mock_client
        mock_client.shell.session.side_effect = ConnectionError("Failed to connect", url="http://h:1")

        with patch("client.terminal.VirtualShellClient", return_value=mock_client):
            assert main(["-c", "ls"]) == 1

        assert "error: Failed to connect" in capsys.readouterr().err
