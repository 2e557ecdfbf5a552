"""File operation commands: ls, cd, pwd, mkdir, touch, rm, cp, mv, cat, editors."""

from typing import TYPE_CHECKING

from models.entry import EntryInfo
from models.errors import ErrorKind
from models.paths import join_path
from shell.interpreter import ExecutionResult
from shell.parser import CommandLine
from shell.registry import FILE_OPERATIONS, ShellError, builtin_commands

if TYPE_CHECKING:
    from shell.interpreter import Shell

LONG_FORMAT_DATE = "Jan  1 00:00"


def _long_listing_line(info: EntryInfo, owner: str) -> str:
    mode = "drw-r--r--" if info.is_directory else "-rw-r--r--"
    return f"{mode} 1 {owner} {owner} {info.size:>5} {LONG_FORMAT_DATE} {info.name}"


@builtin_commands.register(
    "ls", "dir", category=FILE_OPERATIONS, summary="List directory contents"
)
def ls_command(shell: "Shell", cmd: CommandLine) -> str:
    target = cmd.operand(0) or "."
    result = shell.filesystem.list_directory(
        target, show_hidden=cmd.has_flag("a"), cwd=shell.cwd
    )
    if not result.ok:
        raise ShellError.from_fs(result.error, f"ls: cannot access '{target}'")

    names = result.value
    if not cmd.has_flag("l"):
        return "  ".join(names)

    resolved = shell.resolve(target)
    if shell.filesystem.is_file(resolved):
        infos = [shell.filesystem.stat(resolved).unwrap()]
    else:
        infos = [
            shell.filesystem.stat(join_path(resolved, name)).unwrap() for name in names
        ]

    if not infos:
        return "total 0"
    owner = shell.session.username
    return "\n".join(_long_listing_line(info, owner) for info in infos)


@builtin_commands.register("cd", category=FILE_OPERATIONS, summary="Change directory")
def cd_command(shell: "Shell", cmd: CommandLine) -> str:
    target = cmd.operand(0) or "~"
    result = shell.filesystem.change_directory(shell.session, target)
    if not result.ok:
        raise ShellError.from_fs(result.error, f"cd: {target}")
    return ""


@builtin_commands.register(
    "pwd", category=FILE_OPERATIONS, summary="Print working directory"
)
def pwd_command(shell: "Shell", cmd: CommandLine) -> str:
    return shell.filesystem.print_working_directory(shell.session)


@builtin_commands.register("mkdir", category=FILE_OPERATIONS, summary="Create directories")
def mkdir_command(shell: "Shell", cmd: CommandLine) -> str:
    if not cmd.operands:
        raise ShellError.missing_operand("mkdir: missing operand")

    errors = []
    for operand in cmd.operands:
        result = shell.filesystem.make_directory(operand, cwd=shell.cwd)
        if not result.ok:
            errors.append(
                ShellError.from_fs(
                    result.error, f"mkdir: cannot create directory '{operand}'"
                )
            )
    _raise_collected(errors)
    return ""


@builtin_commands.register(
    "touch", category=FILE_OPERATIONS, summary="Create empty files"
)
def touch_command(shell: "Shell", cmd: CommandLine) -> str:
    if not cmd.operands:
        raise ShellError.missing_operand("touch: missing file operand")

    errors = []
    for operand in cmd.operands:
        result = shell.filesystem.touch(operand, cwd=shell.cwd)
        if not result.ok:
            errors.append(ShellError.from_fs(result.error, f"touch: cannot touch '{operand}'"))
    _raise_collected(errors)
    return ""


def _raise_collected(errors: list[ShellError]) -> None:
    """Raise one ShellError listing every per-operand failure."""
    if not errors:
        return
    raise ShellError(errors[0].kind, "\n".join(error.message for error in errors))


@builtin_commands.register(
    "rm", category=FILE_OPERATIONS, summary="Remove files or directories (-r)"
)
def rm_command(shell: "Shell", cmd: CommandLine) -> str:
    target = cmd.operand(0)
    if target is None:
        raise ShellError.missing_operand("rm: missing operand")

    recursive = cmd.has_flag("r", "R") or cmd.has_long_flag("recursive")
    result = shell.filesystem.remove(target, recursive=recursive, cwd=shell.cwd)
    if not result.ok:
        raise ShellError.from_fs(result.error, f"rm: cannot remove '{target}'")
    return ""


@builtin_commands.register("cp", category=FILE_OPERATIONS, summary="Copy a file")
def cp_command(shell: "Shell", cmd: CommandLine) -> str:
    if len(cmd.operands) < 2:
        raise ShellError.missing_operand("cp: missing file operand")

    src, dest = cmd.operands[0], cmd.operands[1]
    result = shell.filesystem.copy(src, dest, cwd=shell.cwd)
    if not result.ok:
        raise _transfer_error(shell, "cp", src, dest, result.error)
    return ""


@builtin_commands.register("mv", category=FILE_OPERATIONS, summary="Move a file")
def mv_command(shell: "Shell", cmd: CommandLine) -> str:
    if len(cmd.operands) < 2:
        raise ShellError.missing_operand("mv: missing file operand")

    src, dest = cmd.operands[0], cmd.operands[1]
    result = shell.filesystem.move(src, dest, cwd=shell.cwd)
    if not result.ok:
        raise _transfer_error(shell, "mv", src, dest, result.error)
    return ""


def _transfer_error(shell: "Shell", verb: str, src: str, dest: str, error) -> ShellError:
    if error.kind == ErrorKind.IS_A_DIRECTORY and error.path == shell.resolve(src):
        return ShellError(error.kind, f"{verb}: -r not specified; omitting directory '{src}'")
    if error.kind == ErrorKind.INVALID_ARGUMENT:
        return ShellError(error.kind, f"{verb}: '{src}' and '{dest}' are the same file")
    if error.path == shell.resolve(src):
        return ShellError.from_fs(error, f"{verb}: cannot stat '{src}'")
    if verb == "cp":
        return ShellError.from_fs(error, f"cp: cannot create regular file '{dest}'")
    return ShellError.from_fs(error, f"mv: cannot move '{src}' to '{dest}'")


@builtin_commands.register("cat", category=FILE_OPERATIONS, summary="Print file contents")
def cat_command(shell: "Shell", cmd: CommandLine) -> "str | ExecutionResult":
    if not cmd.operands:
        raise ShellError.missing_operand("cat: missing file operand")

    output = ""
    errors = []
    for operand in cmd.operands:
        result = shell.filesystem.read_file(operand, cwd=shell.cwd)
        if result.ok:
            output += result.value
            continue
        error = ShellError.from_fs(result.error, f"cat: {operand}")
        errors.append(error)
        # Each error message starts on its own line
        if output and not output.endswith("\n"):
            output += "\n"
        output += error.message + "\n"

    if not errors:
        return output
    if output.endswith(errors[-1].message + "\n"):
        output = output[:-1]
    return ExecutionResult(output=output, error_kind=errors[0].kind)


@builtin_commands.register(
    "nano", "vim", "vi", category=FILE_OPERATIONS, summary="Edit a file"
)
def editor_command(shell: "Shell", cmd: CommandLine) -> ExecutionResult:
    target = cmd.operand(0)
    if target is None:
        raise ShellError.missing_operand(f"{cmd.name}: missing file operand")

    path = shell.resolve(target)
    result = shell.filesystem.read_file(path)
    if result.ok:
        content = result.value
    elif result.error.kind == ErrorKind.NO_SUCH_ENTRY:
        # New files are created up front, so saving only ever overwrites
        touched = shell.filesystem.touch(path)
        if not touched.ok:
            raise ShellError.from_fs(touched.error, f"{cmd.name}: cannot open '{target}'")
        content = ""
    else:
        raise ShellError.from_fs(result.error, f"{cmd.name}: {target}")

    if shell.editor is not None:
        shell.editor.open(path, content)
    return ExecutionResult(open_editor=path)
