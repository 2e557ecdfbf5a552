"""System info, network and utility commands.

Process, memory and network output is simulated. ``date``, ``uptime`` and
``df`` are computed from the shell clock and the filesystem contents.
"""

import math
from typing import TYPE_CHECKING

from shell.interpreter import ExecutionResult
from shell.parser import CommandLine
from shell.registry import (
    NETWORK,
    SYSTEM_INFO,
    UTILITIES,
    ShellError,
    builtin_commands,
)

if TYPE_CHECKING:
    from shell.interpreter import Shell

SYSTEM_VERSION = "1.0.0"
DISK_CAPACITY_KB = 10485760

PS_OUTPUT = """  PID TTY          TIME CMD
    1 pts/0    00:00:00 {shell}
   42 pts/0    00:00:00 vshell
  420 pts/0    00:00:00 ps"""

TOP_OUTPUT = """top - simulated
Tasks: 3 total, 1 running
%Cpu(s): 0.3 us, 0.1 sy
MiB Mem: 8192 total, 2048 free
  PID USER      PR  NI    VIRT    RES  %CPU  %MEM COMMAND
    1 {user:<9} 20   0   12345   1234   0.1   0.1 vshell"""

FREE_OUTPUT = """              total        used        free
Mem:        8388608     2097152     6291456
Swap:             0           0           0"""

PING_OUTPUT = """PING {host} (127.0.0.1): 56 data bytes
64 bytes from 127.0.0.1: icmp_seq=0 ttl=64 time=0.1 ms
64 bytes from 127.0.0.1: icmp_seq=1 ttl=64 time=0.1 ms"""


# =============================================================================
# Terminal
# =============================================================================


@builtin_commands.register("help", category=UTILITIES, summary="List available commands")
def help_command(shell: "Shell", cmd: CommandLine) -> str:
    lines = ["Available commands:"]
    for category, specs in shell.registry.by_category().items():
        names = [name for spec in specs for name in spec.names]
        lines.append(f"{category}: {', '.join(names)}")
    return "\n".join(lines)


@builtin_commands.register(
    "clear", "cls", category=UTILITIES, summary="Clear the terminal"
)
def clear_command(shell: "Shell", cmd: CommandLine) -> ExecutionResult:
    return ExecutionResult(clear_screen=True)


# =============================================================================
# System Info
# =============================================================================


@builtin_commands.register("whoami", category=SYSTEM_INFO, summary="Print the user name")
def whoami_command(shell: "Shell", cmd: CommandLine) -> str:
    return shell.session.username


@builtin_commands.register(
    "uname", category=SYSTEM_INFO, summary="Print system information (-a for all)"
)
def uname_command(shell: "Shell", cmd: CommandLine) -> str:
    name = shell.settings.system_name
    if cmd.has_flag("a"):
        return f"{name} {SYSTEM_VERSION} Linux x86_64 GNU/Linux"
    return name


@builtin_commands.register("date", category=SYSTEM_INFO, summary="Print the current date")
def date_command(shell: "Shell", cmd: CommandLine) -> str:
    return shell.clock().strftime("%a %b %d %H:%M:%S %Z %Y")


def format_uptime(seconds: int) -> str:
    """Render a duration the way ``uptime`` does (``up 2 days, 3:04``)."""
    days, remainder = divmod(max(seconds, 0), 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes = remainder // 60
    clock = f"{hours}:{minutes:02d}"
    if days:
        unit = "day" if days == 1 else "days"
        return f"up {days} {unit}, {clock}"
    return f"up {clock}"


@builtin_commands.register("uptime", category=SYSTEM_INFO, summary="Time since shell start")
def uptime_command(shell: "Shell", cmd: CommandLine) -> str:
    elapsed = int((shell.clock() - shell.started_at).total_seconds())
    return f"{format_uptime(elapsed)}, 1 user, load average: 0.00, 0.01, 0.05"


@builtin_commands.register("ps", category=SYSTEM_INFO, summary="List processes")
def ps_command(shell: "Shell", cmd: CommandLine) -> str:
    return PS_OUTPUT.format(shell=shell.settings.shell_name)


@builtin_commands.register("top", category=SYSTEM_INFO, summary="Show resource usage")
def top_command(shell: "Shell", cmd: CommandLine) -> str:
    return TOP_OUTPUT.format(user=shell.session.username)


@builtin_commands.register("df", category=SYSTEM_INFO, summary="Show disk usage")
def df_command(shell: "Shell", cmd: CommandLine) -> str:
    used_kb = math.ceil(shell.filesystem.disk_usage() / 1024)
    available_kb = DISK_CAPACITY_KB - used_kb
    percent = math.ceil(used_kb * 100 / DISK_CAPACITY_KB)
    header = "Filesystem     1K-blocks    Used Available Use% Mounted on"
    row = f"/dev/vfs       {DISK_CAPACITY_KB:>9} {used_kb:>7} {available_kb:>9} {percent:>3}% /"
    return f"{header}\n{row}"


@builtin_commands.register("free", category=SYSTEM_INFO, summary="Show memory usage")
def free_command(shell: "Shell", cmd: CommandLine) -> str:
    return FREE_OUTPUT


# =============================================================================
# Network
# =============================================================================


@builtin_commands.register("ping", category=NETWORK, summary="Ping a host")
def ping_command(shell: "Shell", cmd: CommandLine) -> str:
    return PING_OUTPUT.format(host=cmd.operand(0) or "localhost")


@builtin_commands.register("curl", "wget", category=NETWORK, summary="Fetch a URL")
def fetch_command(shell: "Shell", cmd: CommandLine) -> str:
    if cmd.operand(0) is None:
        raise ShellError.missing_operand(f"{cmd.name}: missing URL")
    return f"{cmd.name}: simulated download (use the file API for real content)"


# =============================================================================
# Utilities
# =============================================================================


@builtin_commands.register("history", category=UTILITIES, summary="Command history")
def history_command(shell: "Shell", cmd: CommandLine) -> str:
    return "history: command history not implemented yet"


@builtin_commands.register("export", category=UTILITIES, summary="Set environment variables")
def export_command(shell: "Shell", cmd: CommandLine) -> str:
    if cmd.args:
        return ""
    return "export: environment variables not implemented"
