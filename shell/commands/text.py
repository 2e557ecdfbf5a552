"""Text processing commands: echo, grep, wc, head, tail."""

import re
from typing import TYPE_CHECKING

from models.errors import ErrorKind
from shell.parser import CommandLine, is_flag, parse_echo
from shell.registry import TEXT_PROCESSING, ShellError, builtin_commands

if TYPE_CHECKING:
    from shell.interpreter import Shell

DEFAULT_LINE_COUNT = 10

_NUMERIC_FLAG = re.compile(r"^-(\d+)$")


def _read(shell: "Shell", command: str, operand: str) -> str:
    result = shell.filesystem.read_file(operand, cwd=shell.cwd)
    if not result.ok:
        raise ShellError.from_fs(result.error, f"{command}: {operand}")
    return result.value


@builtin_commands.register(
    "echo", category=TEXT_PROCESSING, summary="Print text, or write it with > / >>"
)
def echo_command(shell: "Shell", cmd: CommandLine) -> str:
    text, redirection = parse_echo(cmd.raw)
    if redirection is None:
        return text

    if not redirection.target:
        raise ShellError.missing_operand("echo: missing filename for redirection")

    result = shell.filesystem.write_file(
        redirection.target,
        redirection.text + "\n",
        append=redirection.append,
        cwd=shell.cwd,
    )
    if not result.ok:
        raise ShellError.from_fs(result.error, f"echo: cannot write '{redirection.target}'")
    return ""


@builtin_commands.register(
    "grep", category=TEXT_PROCESSING, summary="Print lines containing a pattern"
)
def grep_command(shell: "Shell", cmd: CommandLine) -> str:
    if len(cmd.operands) < 2:
        raise ShellError.missing_operand("grep: missing pattern or file")

    pattern, target = cmd.operands[0], cmd.operands[1]
    content = _read(shell, "grep", target)
    matches = [line for line in content.split("\n") if pattern in line]
    return "\n".join(matches) or "grep: no matches found"


@builtin_commands.register(
    "wc", category=TEXT_PROCESSING, summary="Count lines, words and characters"
)
def wc_command(shell: "Shell", cmd: CommandLine) -> str:
    target = cmd.operand(0)
    if target is None:
        raise ShellError.missing_operand("wc: missing file operand")

    content = _read(shell, "wc", target)
    # Newline count, as wc(1): a final line without "\n" is not counted
    lines = content.count("\n")
    words = len(content.split())
    chars = len(content)
    return f"  {lines}  {words}  {chars} {target}"


def _parse_line_count(command: str, args: list[str]) -> tuple[int, list[str]]:
    """Extract ``-n N`` / ``-nN`` / ``-N`` from head/tail arguments.

    Returns:
        A tuple of (line count, remaining operands).

    Raises:
        ShellError: If the count is missing or not a non-negative integer.
    """
    count = DEFAULT_LINE_COUNT
    operands = []
    index = 0
    while index < len(args):
        token = args[index]
        value = None
        numeric = _NUMERIC_FLAG.match(token)
        if numeric:
            value = numeric.group(1)
        elif token == "-n":
            if index + 1 >= len(args):
                raise ShellError.missing_operand(f"{command}: option requires an argument -- 'n'")
            index += 1
            value = args[index]
        elif token.startswith("-n"):
            value = token[2:]
        elif not is_flag(token):
            operands.append(token)

        if value is not None:
            try:
                if not value.isdecimal():
                    raise ValueError(value)
                count = int(value)
            except ValueError:
                raise ShellError(
                    ErrorKind.INVALID_ARGUMENT,
                    f"{command}: invalid number of lines: '{value}'",
                ) from None
        index += 1
    return count, operands


def _slice_lines(shell: "Shell", cmd: CommandLine, from_end: bool) -> str:
    count, operands = _parse_line_count(cmd.name, cmd.args)
    if not operands:
        raise ShellError.missing_operand(f"{cmd.name}: missing file operand")

    lines = _read(shell, cmd.name, operands[0]).splitlines()
    if count == 0:
        return ""
    selected = lines[-count:] if from_end else lines[:count]
    return "\n".join(selected)


@builtin_commands.register(
    "head", category=TEXT_PROCESSING, summary="Print the first lines of a file"
)
def head_command(shell: "Shell", cmd: CommandLine) -> str:
    return _slice_lines(shell, cmd, from_end=False)


@builtin_commands.register(
    "tail", category=TEXT_PROCESSING, summary="Print the last lines of a file"
)
def tail_command(shell: "Shell", cmd: CommandLine) -> str:
    return _slice_lines(shell, cmd, from_end=True)
