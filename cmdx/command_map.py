"""
Command rule table for cmdx.

Two independent lookup structures live here:

* ``COMMAND_MAPPINGS`` -- how a verb translates for one (source, target)
  OS pair: the target verb, an *ordered* list of flag rules, the policy for
  flags with no rule, and optional notes.
* ``NATIVE_COMMANDS`` -- which operating systems ship a verb natively.

Directions are separate entries.  ``dir`` Windows -> Linux says nothing
about ``ls`` Linux -> Windows; flag semantics are rarely symmetric.

Both tables are built once at import time and exposed read-only.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from thefuzz import fuzz

from cmdx.platforms import OperatingSystem


WINDOWS = OperatingSystem.WINDOWS
LINUX = OperatingSystem.LINUX
MACOS = OperatingSystem.MACOS
BSDS = (OperatingSystem.FREEBSD, OperatingSystem.OPENBSD, OperatingSystem.NETBSD)


# ---------------------------------------------------------------------------
# Record types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FlagMapping:
    """
    One flag rule.

    ``target`` may be empty (the flag is dropped), may hold several
    space-separated tokens (one flag expands to many), and receives the
    value suffix of a prefix-matched token (``/n:5`` -> ``-c 5``).
    """
    source: str
    target: str
    description: Optional[str] = None


@dataclass(frozen=True)
class CommandMapping:
    """How one verb translates for one OS pair.  Flag order is significant."""
    source_cmd: str
    target_cmd: str
    flag_mappings: Tuple[FlagMapping, ...] = ()
    preserve_unmapped_flags: bool = True
    notes: Optional[str] = None


@dataclass(frozen=True)
class MappingKey:
    command: str
    from_os: OperatingSystem
    to_os: OperatingSystem

    @classmethod
    def of(cls, command: str, from_os: OperatingSystem, to_os: OperatingSystem) -> "MappingKey":
        return cls(command.lower(), from_os, to_os)


def _f(source: str, target: str, description: Optional[str] = None) -> FlagMapping:
    return FlagMapping(source, target, description)


# ---------------------------------------------------------------------------
# Shared flag rule lists
# ---------------------------------------------------------------------------

# Windows dir -> ls.  The /o:<key> rules must come before the bare /o rule,
# otherwise /o would prefix-match and swallow them.
_DIR_TO_LS = (
    _f("/w", "-C", "Wide list format"),
    _f("/s", "-R", "Recursive listing"),
    _f("/b", "-1", "Bare format (names only)"),
    _f("/a", "-la", "All files including hidden"),
    _f("/o:n", "--sort=name", "Sort by name"),
    _f("/o:s", "--sort=size", "Sort by size"),
    _f("/o:d", "--sort=time", "Sort by date"),
    _f("/o:e", "--sort=extension", "Sort by extension"),
    _f("/o", "", "Sorted listing (ls sorts by default)"),
    _f("/p", "", "Pause (not directly supported)"),
    _f("/q", "-l", "Show owner"),
)

_DIR_TO_LS_BASIC = (
    _f("/w", "-C"),
    _f("/s", "-R"),
    _f("/b", "-1"),
    _f("/a", "-la"),
)

_COPY_TO_CP = (
    _f("/y", "-f", "Force overwrite"),
    _f("/v", "-v", "Verbose"),
    _f("/a", "", "ASCII mode (N/A)"),
    _f("/b", "", "Binary mode (default)"),
)

_DEL_TO_RM = (
    _f("/s", "-r", "Recursive"),
    _f("/q", "-f", "Quiet/Force"),
    _f("/f", "-f", "Force"),
    _f("/p", "-i", "Prompt before delete"),
)

# "-la" before "-l", "-rf" before "-r": the longer cluster must win.
_LS_TO_DIR = (
    _f("-la", "/a", "All files long format"),
    _f("-al", "/a", "All files long format"),
    _f("-l", "", "Long format (default)"),
    _f("-a", "/a", "All files"),
    _f("-R", "/s", "Recursive"),
    _f("-1", "/b", "One file per line"),
    _f("-S", "/o:s", "Sort by size"),
    _f("-t", "/o:d", "Sort by time"),
    _f("-r", "/o:-n", "Reverse order"),
    _f("--sort=size", "/o:s", "Sort by size"),
    _f("--sort=time", "/o:d", "Sort by time"),
)

_LS_TO_DIR_BASIC = (
    _f("-la", "/a"),
    _f("-l", ""),
    _f("-a", "/a"),
    _f("-R", "/s"),
    _f("-r", "/o:-n"),
    _f("-1", "/b"),
)


# ---------------------------------------------------------------------------
# Command mappings
# ---------------------------------------------------------------------------

def _build_command_mappings() -> Dict[MappingKey, CommandMapping]:
    table: Dict[MappingKey, CommandMapping] = {}

    def add(verb: str, from_os: OperatingSystem, to_os: OperatingSystem,
            target: str, flags: Iterable[FlagMapping] = (),
            notes: Optional[str] = None, preserve: bool = True):
        table[MappingKey.of(verb, from_os, to_os)] = CommandMapping(
            source_cmd=verb,
            target_cmd=target,
            flag_mappings=tuple(flags),
            preserve_unmapped_flags=preserve,
            notes=notes,
        )

    # ── Windows -> Linux ──
    add("dir", WINDOWS, LINUX, "ls", _DIR_TO_LS)
    add("copy", WINDOWS, LINUX, "cp", _COPY_TO_CP)
    add("xcopy", WINDOWS, LINUX, "cp -r", (
        _f("/s", "", "Copy subdirs (implied by -r)"),
        _f("/e", "", "Copy empty dirs too"),
        _f("/y", "-f", "Force overwrite"),
        _f("/i", "", "Assume destination is directory"),
        _f("/q", "-q", "Quiet mode"),
    ))
    add("robocopy", WINDOWS, LINUX, "rsync -av", (
        _f("/mir", "--delete", "Mirror a directory tree"),
        _f("/e", "", "Copy subdirectories (implied by -a)"),
        _f("/s", "", "Copy subdirectories (implied by -a)"),
        _f("/move", "--remove-source-files", "Move files"),
    ), notes="rsync treats a trailing slash on the source differently than robocopy")
    add("move", WINDOWS, LINUX, "mv", (_f("/y", "-f", "Force overwrite"),))
    add("del", WINDOWS, LINUX, "rm", _DEL_TO_RM)
    add("erase", WINDOWS, LINUX, "rm", _DEL_TO_RM)
    add("rmdir", WINDOWS, LINUX, "rm -r", (
        _f("/s", "", "Recursive (implied)"),
        _f("/q", "-f", "Quiet"),
    ))
    add("rd", WINDOWS, LINUX, "rm -r", (_f("/s", ""), _f("/q", "-f")))
    add("mkdir", WINDOWS, LINUX, "mkdir", (_f("/p", "-p", "Create parent directories"),))
    add("md", WINDOWS, LINUX, "mkdir -p")
    add("type", WINDOWS, LINUX, "cat")
    add("cls", WINDOWS, LINUX, "clear")
    add("echo", WINDOWS, LINUX, "echo")
    add("findstr", WINDOWS, LINUX, "grep", (
        _f("/i", "-i", "Case insensitive"),
        _f("/s", "-r", "Recursive"),
        _f("/n", "-n", "Line numbers"),
        _f("/v", "-v", "Invert match"),
        _f("/c:", "-c", "Count matches"),
        _f("/r", "-E", "Regular expressions"),
    ))
    # Windows find searches text in files; it is not Unix find.
    add("find", WINDOWS, LINUX, "grep", (
        _f("/i", "-i", "Case insensitive"),
        _f("/v", "-v", "Invert match"),
        _f("/c", "-c", "Count lines"),
        _f("/n", "-n", "Line numbers"),
    ))
    add("tasklist", WINDOWS, LINUX, "ps aux")
    add("taskkill", WINDOWS, LINUX, "kill", (
        _f("/f", "-9", "Force kill"),
        _f("/pid", "", "Process ID (use directly)"),
        _f("/im", "", "Image name (use pkill instead)"),
    ))
    add("ipconfig", WINDOWS, LINUX, "ip addr", (
        _f("/all", "show", "Show all info"),
        _f("/release", "", "Release DHCP"),
        _f("/renew", "", "Renew DHCP"),
    ))
    add("systeminfo", WINDOWS, LINUX, "uname -a && cat /etc/os-release")
    add("hostname", WINDOWS, LINUX, "hostname")
    add("whoami", WINDOWS, LINUX, "whoami")
    add("set", WINDOWS, LINUX, "env")
    add("attrib", WINDOWS, LINUX, "chmod")
    add("fc", WINDOWS, LINUX, "diff", (
        _f("/b", "", "Binary compare"),
        _f("/c", "-i", "Ignore case"),
        _f("/n", "-n", "Show line numbers"),
        _f("/w", "-w", "Ignore whitespace"),
    ))
    add("more", WINDOWS, LINUX, "less")
    add("ren", WINDOWS, LINUX, "mv")
    add("rename", WINDOWS, LINUX, "mv")
    add("tree", WINDOWS, LINUX, "tree", (
        _f("/f", "", "Show files (default in Linux)"),
        _f("/a", "--charset=ascii", "ASCII characters"),
    ))
    add("sort", WINDOWS, LINUX, "sort", (
        _f("/r", "-r", "Reverse order"),
        _f("/n", "-n", "Numeric sort"),
    ))
    add("where", WINDOWS, LINUX, "which")
    add("ping", WINDOWS, LINUX, "ping", (
        _f("-n", "-c", "Count of pings"),
        _f("-t", "", "Continuous ping (use Ctrl+C)"),
        _f("-l", "-s", "Packet size"),
        _f("-w", "-W", "Timeout"),
    ))
    add("tracert", WINDOWS, LINUX, "traceroute", (
        _f("-h", "-m", "Max hops"),
        _f("-w", "-w", "Wait timeout"),
    ))
    add("netstat", WINDOWS, LINUX, "ss", (
        _f("-ano", "-anp", "All sockets, numeric, with owning process"),
        _f("-a", "-a", "All sockets"),
        _f("-n", "-n", "Numeric addresses"),
        _f("-o", "-p", "Show process"),
        _f("-b", "-p", "Show process name"),
    ))
    add("chkdsk", WINDOWS, LINUX, "fsck")
    add("start", WINDOWS, LINUX, "xdg-open")

    # ── Windows -> macOS ──
    add("dir", WINDOWS, MACOS, "ls", _DIR_TO_LS_BASIC)
    add("copy", WINDOWS, MACOS, "cp", (_f("/y", "-f"), _f("/v", "-v")))
    add("move", WINDOWS, MACOS, "mv", (_f("/y", "-f"),))
    add("type", WINDOWS, MACOS, "cat")
    add("cls", WINDOWS, MACOS, "clear")
    add("tasklist", WINDOWS, MACOS, "ps aux")
    add("ipconfig", WINDOWS, MACOS, "ifconfig")
    add("start", WINDOWS, MACOS, "open")

    # ── Linux -> Windows ──
    add("ls", LINUX, WINDOWS, "dir", _LS_TO_DIR)
    add("cp", LINUX, WINDOWS, "copy", (
        _f("-r", "/s /e", "Recursive copy (xcopy semantics)"),
        _f("-R", "/s /e", "Recursive copy (xcopy semantics)"),
        _f("-f", "/y", "Force overwrite"),
        _f("-v", "/v", "Verbose"),
        _f("-i", "/-y", "Interactive/confirm"),
    ))
    add("mv", LINUX, WINDOWS, "move", (
        _f("-f", "/y", "Force overwrite"),
        _f("-i", "/-y", "Interactive"),
    ))
    add("rm", LINUX, WINDOWS, "del", (
        _f("-rf", "/s /q", "Recursive force"),
        _f("-fr", "/s /q", "Recursive force"),
        _f("-r", "/s", "Recursive"),
        _f("-R", "/s", "Recursive"),
        _f("-f", "/q /f", "Force/quiet"),
        _f("-i", "/p", "Interactive"),
    ))
    add("cat", LINUX, WINDOWS, "type")
    add("clear", LINUX, WINDOWS, "cls")
    add("grep", LINUX, WINDOWS, "findstr", (
        _f("-i", "/i", "Case insensitive"),
        _f("-r", "/s", "Recursive"),
        _f("-R", "/s", "Recursive"),
        _f("-n", "/n", "Line numbers"),
        _f("-v", "/v", "Invert match"),
        _f("-c", "/c:", "Count matches"),
        _f("-E", "/r", "Extended regex"),
    ))
    add("ps", LINUX, WINDOWS, "tasklist")
    add("kill", LINUX, WINDOWS, "taskkill /pid", (
        _f("-9", "/f", "Force kill"),
        _f("-SIGKILL", "/f", "Force kill"),
        _f("-SIGTERM", "", "Terminate"),
    ))
    add("pkill", LINUX, WINDOWS, "taskkill /im", (_f("-9", "/f", "Force kill"),))
    add("ifconfig", LINUX, WINDOWS, "ipconfig")
    add("ip", LINUX, WINDOWS, "ipconfig", (
        _f("addr", "/all", "Show addresses"),
        _f("link", "", "Link info"),
        _f("route", "", "Routing table"),
    ))
    add("uname", LINUX, WINDOWS, "systeminfo", (
        _f("-a", "", "All info"),
        _f("-r", "", "Release"),
    ))
    add("env", LINUX, WINDOWS, "set")
    add("printenv", LINUX, WINDOWS, "set")
    add("chmod", LINUX, WINDOWS, "attrib")
    add("diff", LINUX, WINDOWS, "fc", (
        _f("-i", "/c", "Ignore case"),
        _f("-w", "/w", "Ignore whitespace"),
        _f("-n", "/n", "Show line numbers"),
    ))
    add("less", LINUX, WINDOWS, "more")
    add("which", LINUX, WINDOWS, "where")
    add("whereis", LINUX, WINDOWS, "where")
    add("touch", LINUX, WINDOWS, "type nul >")
    add("head", LINUX, WINDOWS, "more")
    add("tail", LINUX, WINDOWS, "more")
    add("ping", LINUX, WINDOWS, "ping", (
        _f("-c", "-n", "Count"),
        _f("-s", "-l", "Packet size"),
        _f("-W", "-w", "Timeout"),
    ))
    add("traceroute", LINUX, WINDOWS, "tracert", (
        _f("-m", "-h", "Max hops"),
        _f("-w", "-w", "Wait timeout"),
    ))
    add("ss", LINUX, WINDOWS, "netstat", (
        _f("-a", "-a", "All sockets"),
        _f("-n", "-n", "Numeric"),
        _f("-p", "-o", "Show process"),
        _f("-t", "", "TCP only"),
        _f("-u", "", "UDP only"),
    ))
    add("tar", LINUX, WINDOWS, "tar", notes="tar ships with Windows 10 and later")
    add("curl", LINUX, WINDOWS, "curl", notes="curl ships with Windows 10 and later")
    add("wget", LINUX, WINDOWS, "curl -O", (
        _f("-o", "--stderr", "Log file"),
        _f("-O", "-o", "Output file"),
        _f("-q", "-s", "Quiet/silent"),
    ))
    add("df", LINUX, WINDOWS, "wmic logicaldisk get size,freespace,caption")
    add("du", LINUX, WINDOWS, "dir /s")
    add("ln", LINUX, WINDOWS, "mklink", (
        _f("-s", "", "Symbolic link (default in mklink)"),
    ), notes="mklink takes the link name first, then the target")
    add("man", LINUX, WINDOWS, "help")
    add("xdg-open", LINUX, WINDOWS, "start")

    # ── macOS -> Windows ──
    add("ls", MACOS, WINDOWS, "dir", _LS_TO_DIR_BASIC)
    add("cat", MACOS, WINDOWS, "type")
    add("clear", MACOS, WINDOWS, "cls")
    add("open", MACOS, WINDOWS, "start")

    # ── Linux <-> macOS desktop helpers ──
    add("xdg-open", LINUX, MACOS, "open")
    add("open", MACOS, LINUX, "xdg-open")
    add("pbcopy", MACOS, LINUX, "xclip -selection clipboard")
    add("pbpaste", MACOS, LINUX, "xclip -selection clipboard -o")

    # ── BSD <-> Windows ──
    for bsd in BSDS:
        add("dir", WINDOWS, bsd, "ls", _DIR_TO_LS_BASIC)
        add("copy", WINDOWS, bsd, "cp", (_f("/y", "-f"), _f("/v", "-v")))
        add("ls", bsd, WINDOWS, "dir", (
            _f("-a", "/a"),
            _f("-R", "/s"),
            _f("-1", "/b"),
        ))

    return table


COMMAND_MAPPINGS: Mapping[MappingKey, CommandMapping] = MappingProxyType(_build_command_mappings())


# ---------------------------------------------------------------------------
# Native command classification
# ---------------------------------------------------------------------------

_UNIX = frozenset(os_ for os_ in OperatingSystem if os_.is_unix_like)
_LINUX_FAMILY = frozenset({LINUX, OperatingSystem.ANDROID})
_WINDOWS = frozenset({WINDOWS})
_MACOS = frozenset({MACOS})

_WINDOWS_COMMANDS = (
    "dir", "copy", "xcopy", "robocopy", "move", "del", "erase", "rmdir", "rd",
    "mkdir", "md", "type", "cls", "echo", "findstr", "find", "tasklist",
    "taskkill", "ipconfig", "systeminfo", "hostname", "whoami", "set",
    "attrib", "fc", "more", "ren", "rename", "tree", "sort", "where", "ping",
    "tracert", "netstat", "chkdsk", "mklink", "help", "tar", "curl", "cd",
    "exit", "start", "shutdown", "cmd", "powershell",
)

_UNIX_COMMANDS = (
    "ls", "cp", "mv", "rm", "cat", "clear", "grep", "ps", "kill", "pkill",
    "ifconfig", "uname", "env", "printenv", "chmod", "chown", "diff", "less",
    "more", "which", "whereis", "touch", "head", "tail", "ping", "traceroute",
    "netstat", "tar", "curl", "wget", "df", "du", "ln", "man", "mkdir",
    "rmdir", "echo", "hostname", "whoami", "sort", "find", "cd", "exit",
    "pwd", "sed", "awk", "export", "sudo", "shutdown",
)

_LINUX_COMMANDS = ("ip", "ss", "xdg-open", "xclip", "free", "lsblk", "systemctl")

_MACOS_COMMANDS = ("open", "pbcopy", "pbpaste", "say", "defaults", "diskutil")


def _build_native_commands() -> Dict[str, FrozenSet[OperatingSystem]]:
    native: Dict[str, FrozenSet[OperatingSystem]] = {}
    for names, systems in (
        (_WINDOWS_COMMANDS, _WINDOWS),
        (_UNIX_COMMANDS, _UNIX),
        (_LINUX_COMMANDS, _LINUX_FAMILY),
        (_MACOS_COMMANDS, _MACOS),
    ):
        for name in names:
            native[name] = native.get(name, frozenset()) | systems
    return native


NATIVE_COMMANDS: Mapping[str, FrozenSet[OperatingSystem]] = MappingProxyType(_build_native_commands())


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def get_mapping(command: str, from_os: OperatingSystem, to_os: OperatingSystem) -> Optional[CommandMapping]:
    """Return the mapping for *command* on this OS pair, or ``None``."""
    return COMMAND_MAPPINGS.get(MappingKey.of(command, from_os, to_os))


def get_available_commands(from_os: OperatingSystem, to_os: OperatingSystem) -> List[str]:
    """Source verbs that have an explicit mapping for this OS pair."""
    return [
        mapping.source_cmd
        for key, mapping in COMMAND_MAPPINGS.items()
        if key.from_os == from_os and key.to_os == to_os
    ]


def is_native_command(command: str, os_: OperatingSystem) -> bool:
    """True if *command* ships natively on *os_*."""
    return os_ in NATIVE_COMMANDS.get(command.lower(), frozenset())


def is_target_command_for_os(command: str, os_: OperatingSystem) -> bool:
    """
    True if *command* is the verb some mapping produces for *os_*.

    Used as the last fallback before giving up: a verb that the table would
    emit for the target OS is assumed to already be in target format.
    """
    command = command.lower()
    for key, mapping in COMMAND_MAPPINGS.items():
        if key.to_os != os_:
            continue
        target_verb = mapping.target_cmd.split()[0].lower() if mapping.target_cmd else ""
        if target_verb == command:
            return True
    return False


def suggest_commands(
    command: str,
    from_os: OperatingSystem,
    to_os: OperatingSystem,
    limit: int = 3,
    threshold: int = 60,
) -> List[str]:
    """
    Closest known source verbs for *command* on this OS pair.

    Scores with ``fuzz.ratio`` and keeps candidates scoring at least
    *threshold* (0-100), best first.
    """
    query = command.lower().strip()
    if not query:
        return []

    scored = []
    for name in sorted(set(get_available_commands(from_os, to_os))):
        score = fuzz.ratio(query, name)
        if score >= threshold and name != query:
            scored.append((score, name))

    scored.sort(key=lambda item: (-item[0], item[1]))
    return [name for _, name in scored[:limit]]
