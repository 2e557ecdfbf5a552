"""Path resolution for the virtual filesystem.

Resolution is purely syntactic: nothing here consults the tree, and nothing
here fails. Existence checks are left to the filesystem store.
"""

ROOT = "/"
DEFAULT_HOME = "/home/user"


def canonicalize(path: str) -> str:
    """Collapse an absolute path into its canonical form.

    Empty and ``.`` segments are dropped, ``..`` pops the previous segment
    (never climbing above the root) and trailing slashes are removed.

    Args:
        path: An absolute path, possibly containing ``.``/``..`` segments.

    Returns:
        The canonical absolute path.
    """
    parts: list[str] = []
    for part in path.split("/"):
        if part == "" or part == ".":
            continue
        if part == "..":
            if parts:
                parts.pop()
        else:
            parts.append(part)

    return ROOT + "/".join(parts)


def resolve_path(path_expr: str, current_directory: str, home: str = DEFAULT_HOME) -> str:
    """Turn a user-supplied path expression into a canonical absolute path.

    Rules, in priority order:

    1. ``/...`` is absolute.
    2. ``~`` is the home directory.
    3. ``~/rest`` is relative to the home directory.
    4. ``.`` is the current directory.
    5. ``..`` is the parent of the current directory (``/`` stays ``/``).
    6. Anything else is relative to the current directory.

    The chosen form is then canonicalized, so embedded ``.``/``..`` segments
    never reach the tree as literal keys.

    Args:
        path_expr: The expression typed by the user.
        current_directory: Canonical directory relative paths resolve against.
        home: Canonical home directory used for ``~``.

    Returns:
        The canonical absolute path.
    """
    if path_expr.startswith("/"):
        resolved = path_expr
    elif path_expr == "~":
        resolved = home
    elif path_expr.startswith("~/"):
        resolved = home + path_expr[1:]
    elif path_expr == ".":
        resolved = current_directory
    elif path_expr == "..":
        segments = [p for p in current_directory.split("/") if p]
        segments = segments[:-1]
        resolved = ROOT + "/".join(segments)
    else:
        separator = "" if current_directory.endswith("/") else "/"
        resolved = current_directory + separator + path_expr

    return canonicalize(resolved)


def parent_path(path: str) -> str:
    """Return the parent of a canonical path (the root is its own parent)."""
    index = path.rfind("/")
    if index <= 0:
        return ROOT
    return path[:index]


def base_name(path: str) -> str:
    """Return the last segment of a canonical path (empty for the root)."""
    return path[path.rfind("/") + 1:]


def join_path(directory: str, name: str) -> str:
    """Join a canonical directory and a child name."""
    if directory == ROOT:
        return ROOT + name
    return f"{directory}/{name}"


def abbreviate_home(path: str, home: str = DEFAULT_HOME) -> str:
    """Abbreviate the home directory prefix as ``~`` for prompt display."""
    if path == home:
        return "~"
    if home != ROOT and path.startswith(home + "/"):
        return "~" + path[len(home):]
    return path
