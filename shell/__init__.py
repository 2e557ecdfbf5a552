"""Command interpreter over the virtual filesystem.

Example:
    >>> from models.filesystem import FileSystem
    >>> from shell import Shell
    >>> shell = Shell(FileSystem.open())
    >>> shell.execute("pwd")
    '/home/user'
"""

from shell.interpreter import EditorCollaborator, ExecutionResult, Shell
from shell.parser import CommandLine, tokenize
from shell.registry import CommandRegistry, CommandSpec, ShellError, builtin_commands

from shell import commands  # noqa: E402,F401  registers the built-in commands

__all__ = [
    "Shell",
    "ExecutionResult",
    "EditorCollaborator",
    "CommandLine",
    "tokenize",
    "CommandRegistry",
    "CommandSpec",
    "ShellError",
    "builtin_commands",
]
