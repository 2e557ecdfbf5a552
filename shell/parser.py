"""Command-line tokenizing for the shell.

The grammar is deliberately small: a line is split on runs of whitespace,
the first token names the command, tokens starting with ``-`` are flags and
everything else is a positional operand. There is no general quoting or
escaping; ``echo`` redirection is parsed from the raw line separately.
"""

import re
from typing import Optional

from pydantic import BaseModel, Field

_QUOTE_PATTERN = re.compile(r"^[\"']|[\"']$")


class CommandLine(BaseModel):
    """A tokenized command line.

    Args:
        raw: The line exactly as received.
        name: Lowercased command name (empty for a blank line).
        args: Every token after the command name, in order.
        operands: Tokens that are not flags.
        flags: Flag tokens as typed (e.g. "-la").
    """

    raw: str
    name: str = ""
    args: list[str] = Field(default_factory=list)
    operands: list[str] = Field(default_factory=list)
    flags: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.name == ""

    @property
    def short_flags(self) -> set[str]:
        """Single-letter flags with clusters expanded (``-la`` -> {"l", "a"})."""
        letters: set[str] = set()
        for flag in self.flags:
            if flag.startswith("--"):
                continue
            letters.update(flag[1:])
        return letters

    def has_flag(self, *letters: str) -> bool:
        """Whether any of the given short flag letters was supplied."""
        present = self.short_flags
        return any(letter in present for letter in letters)

    def has_long_flag(self, name: str) -> bool:
        return f"--{name}" in self.flags

    def operand(self, index: int) -> Optional[str]:
        if index < len(self.operands):
            return self.operands[index]
        return None


def is_flag(token: str) -> bool:
    return token.startswith("-") and token != "-"


def tokenize(raw_line: str) -> CommandLine:
    """Split a raw line into command name, operands and flags.

    Args:
        raw_line: The line typed by the user.

    Returns:
        The tokenized CommandLine (``is_empty`` for blank input).
    """
    tokens = raw_line.split()
    if not tokens:
        return CommandLine(raw=raw_line)

    args = tokens[1:]
    return CommandLine(
        raw=raw_line,
        name=tokens[0].lower(),
        args=args,
        operands=[token for token in args if not is_flag(token)],
        flags=[token for token in args if is_flag(token)],
    )


def strip_quotes(text: str) -> str:
    """Remove one leading and one trailing single or double quote."""
    return _QUOTE_PATTERN.sub("", text)


class Redirection(BaseModel):
    """Parsed ``echo`` output redirection.

    Args:
        text: Text to write, quotes stripped.
        target: File name after the operator (may be empty when missing).
        append: True for ``>>``, False for ``>``.
    """

    text: str
    target: str
    append: bool = False


def parse_echo(raw_line: str) -> tuple[str, Optional[Redirection]]:
    """Parse an ``echo`` line, detecting ``>``/``>>`` redirection.

    The raw line is split on the first ``>``; a second ``>`` right after it
    selects append mode. Quotes are only stripped from redirected text.

    Args:
        raw_line: The full line, starting with the ``echo`` token.

    Returns:
        A tuple of (text, redirection). ``redirection`` is None when the
        line has no ``>``.
    """
    line = raw_line.strip()
    body = line.split(None, 1)[1] if len(line.split(None, 1)) > 1 else ""

    if ">" not in body:
        return " ".join(body.split()), None

    text_part, _, rest = body.partition(">")
    append = rest.startswith(">")
    if append:
        rest = rest[1:]

    text = strip_quotes(text_part.strip())
    return text, Redirection(text=text, target=rest.strip(), append=append)
