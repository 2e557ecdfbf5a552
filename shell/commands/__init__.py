"""Built-in shell commands.

Importing this package registers every command on
``shell.registry.builtin_commands``.
"""

from shell.commands import files, system, text

__all__ = ["files", "system", "text"]
