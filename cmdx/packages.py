"""
Package-manager command translation.

``sudo apt install -y vim`` -> ``sudo dnf install -y vim``

A command is parsed into (manager, operation, flags, packages).  Each manager
spells its operations differently (subcommand words for apt, a flag cluster
such as ``-Syu`` for pacman, ``-i``/``-e`` for nix-env), so every manager has
its own operation parser registered in ``_OPERATION_PARSERS``.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple, Union

from cmdx.command_map import FlagMapping
from cmdx.errors import EmptyCommand, NotPackageManagerCommand, TranslationError, UnsupportedOperation
from cmdx.platforms import PackageManager

logger = logging.getLogger(__name__)


class PackageOperation(Enum):
    INSTALL = "install"
    REMOVE = "remove"
    UPDATE = "update"
    UPGRADE = "upgrade"
    SEARCH = "search"
    INFO = "info"
    LIST = "list"
    CLEAN = "clean"
    AUTOREMOVE = "autoremove"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OperationMapping:
    """How a manager spells one operation."""
    command: str
    requires_sudo: bool
    notes: Optional[str] = None


@dataclass(frozen=True)
class PackageTranslationResult:
    command: str
    original: str
    from_pm: PackageManager
    to_pm: PackageManager
    warnings: Tuple[str, ...] = ()
    requires_sudo: bool = False

    def __str__(self) -> str:
        return self.command

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original": self.original,
            "translated": self.command,
            "from": str(self.from_pm),
            "to": str(self.to_pm),
            "warnings": list(self.warnings),
            "requires_sudo": self.requires_sudo,
        }


class ParsedPackageCommand(NamedTuple):
    manager: PackageManager
    operation: PackageOperation
    args: List[str]
    sudo: bool


# ---------------------------------------------------------------------------
# Operation tables
# ---------------------------------------------------------------------------

Op = PackageOperation
PM = PackageManager


def _ops(*entries) -> Dict[PackageOperation, OperationMapping]:
    return {op: OperationMapping(*rest) for op, *rest in entries}


_OPERATIONS_BY_MANAGER: Dict[PackageManager, Dict[PackageOperation, OperationMapping]] = {
    PM.APT: _ops(
        (Op.INSTALL, "apt install", True),
        (Op.REMOVE, "apt remove", True),
        (Op.UPDATE, "apt update", True),
        (Op.UPGRADE, "apt upgrade", True),
        (Op.SEARCH, "apt search", False),
        (Op.INFO, "apt show", False),
        (Op.LIST, "apt list --installed", False),
        (Op.CLEAN, "apt clean", True),
        (Op.AUTOREMOVE, "apt autoremove", True),
    ),
    PM.YUM: _ops(
        (Op.INSTALL, "yum install", True),
        (Op.REMOVE, "yum remove", True),
        (Op.UPDATE, "yum check-update", False),
        (Op.UPGRADE, "yum update", True),
        (Op.SEARCH, "yum search", False),
        (Op.INFO, "yum info", False),
        (Op.LIST, "yum list installed", False),
        (Op.CLEAN, "yum clean all", True),
        (Op.AUTOREMOVE, "yum autoremove", True),
    ),
    PM.DNF: _ops(
        (Op.INSTALL, "dnf install", True),
        (Op.REMOVE, "dnf remove", True),
        (Op.UPDATE, "dnf check-update", False),
        (Op.UPGRADE, "dnf upgrade", True),
        (Op.SEARCH, "dnf search", False),
        (Op.INFO, "dnf info", False),
        (Op.LIST, "dnf list installed", False),
        (Op.CLEAN, "dnf clean all", True),
        (Op.AUTOREMOVE, "dnf autoremove", True),
    ),
    PM.PACMAN: _ops(
        (Op.INSTALL, "pacman -S", True),
        (Op.REMOVE, "pacman -R", True),
        (Op.UPDATE, "pacman -Sy", True),
        (Op.UPGRADE, "pacman -Syu", True),
        (Op.SEARCH, "pacman -Ss", False),
        (Op.INFO, "pacman -Si", False),
        (Op.LIST, "pacman -Q", False),
        (Op.CLEAN, "pacman -Sc", True),
        (Op.AUTOREMOVE, "pacman -Rs", True, "Removes package with unused dependencies"),
    ),
    PM.ZYPPER: _ops(
        (Op.INSTALL, "zypper install", True),
        (Op.REMOVE, "zypper remove", True),
        (Op.UPDATE, "zypper refresh", True),
        (Op.UPGRADE, "zypper update", True),
        (Op.SEARCH, "zypper search", False),
        (Op.INFO, "zypper info", False),
        (Op.LIST, "zypper search --installed-only", False),
        (Op.CLEAN, "zypper clean", True),
        (Op.AUTOREMOVE, "zypper remove --clean-deps", True),
    ),
    PM.APK: _ops(
        (Op.INSTALL, "apk add", True),
        (Op.REMOVE, "apk del", True),
        (Op.UPDATE, "apk update", True),
        (Op.UPGRADE, "apk upgrade", True),
        (Op.SEARCH, "apk search", False),
        (Op.INFO, "apk info", False),
        (Op.LIST, "apk list --installed", False),
        (Op.CLEAN, "apk cache clean", True),
        (Op.AUTOREMOVE, "apk del", True, "Use with package name and dependencies"),
    ),
    PM.EMERGE: _ops(
        (Op.INSTALL, "emerge", True),
        (Op.REMOVE, "emerge --unmerge", True),
        (Op.UPDATE, "emerge --sync", True),
        (Op.UPGRADE, "emerge --update --deep --with-bdeps=y @world", True),
        (Op.SEARCH, "emerge --search", False),
        (Op.INFO, "emerge --info", False),
        (Op.LIST, "qlist -I", False, "Requires portage-utils"),
        (Op.CLEAN, "emerge --depclean", True),
        (Op.AUTOREMOVE, "emerge --depclean", True),
    ),
    PM.XBPS: _ops(
        (Op.INSTALL, "xbps-install", True),
        (Op.REMOVE, "xbps-remove", True),
        (Op.UPDATE, "xbps-install -S", True),
        (Op.UPGRADE, "xbps-install -Su", True),
        (Op.SEARCH, "xbps-query -Rs", False),
        (Op.INFO, "xbps-query -R", False),
        (Op.LIST, "xbps-query -l", False),
        (Op.CLEAN, "xbps-remove -O", True),
        (Op.AUTOREMOVE, "xbps-remove -o", True),
    ),
    PM.NIX: _ops(
        (Op.INSTALL, "nix-env -i", False),
        (Op.REMOVE, "nix-env -e", False),
        (Op.UPDATE, "nix-channel --update", False),
        (Op.UPGRADE, "nix-env -u", False),
        (Op.SEARCH, "nix search", False),
        (Op.INFO, "nix-env -qa --description", False),
        (Op.LIST, "nix-env -q", False),
        (Op.CLEAN, "nix-collect-garbage", False),
        (Op.AUTOREMOVE, "nix-collect-garbage -d", False),
    ),
}

OPERATION_MAPPINGS: Mapping[Tuple[PackageManager, PackageOperation], OperationMapping] = MappingProxyType({
    (manager, op): mapping
    for manager, ops in _OPERATIONS_BY_MANAGER.items()
    for op, mapping in ops.items()
})


# ---------------------------------------------------------------------------
# Flag tables, keyed by (source manager, target manager, operation)
# ---------------------------------------------------------------------------

def _flags(*pairs: Tuple[str, str]) -> Tuple[FlagMapping, ...]:
    return tuple(FlagMapping(source, target) for source, target in pairs)


def _build_flag_mappings() -> Dict[Tuple[PackageManager, PackageManager, PackageOperation], Tuple[FlagMapping, ...]]:
    table = {
        (PM.APT, PM.DNF, Op.INSTALL): _flags(
            ("-y", "-y"), ("--yes", "-y"), ("--assume-yes", "-y"),
            ("--no-install-recommends", "--setopt=install_weak_deps=False"),
            ("--reinstall", "--reinstall"), ("-q", "-q"), ("--quiet", "-q"),
        ),
        (PM.APT, PM.YUM, Op.INSTALL): _flags(
            ("-y", "-y"), ("--yes", "-y"), ("--assume-yes", "-y"),
            ("--reinstall", "reinstall"), ("-q", "-q"), ("--quiet", "-q"),
        ),
        (PM.APT, PM.PACMAN, Op.INSTALL): _flags(
            ("-y", "--noconfirm"), ("--yes", "--noconfirm"), ("--assume-yes", "--noconfirm"),
            ("--no-install-recommends", "--asdeps"), ("-q", "-q"), ("--quiet", "-q"),
        ),
        (PM.APT, PM.ZYPPER, Op.INSTALL): _flags(
            ("-y", "-y"), ("--yes", "--no-confirm"), ("--assume-yes", "--non-interactive"),
            ("--reinstall", "--force"), ("-q", "-q"),
        ),
        (PM.DNF, PM.APT, Op.INSTALL): _flags(
            ("-y", "-y"), ("--assumeyes", "--assume-yes"), ("--reinstall", "--reinstall"),
            ("-q", "-q"), ("--quiet", "-q"),
        ),
        (PM.YUM, PM.APT, Op.INSTALL): _flags(
            ("-y", "-y"), ("--assumeyes", "--assume-yes"), ("-q", "-q"), ("--quiet", "-q"),
        ),
        (PM.DNF, PM.PACMAN, Op.INSTALL): _flags(
            ("-y", "--noconfirm"), ("--assumeyes", "--noconfirm"), ("-q", "-q"),
        ),
        (PM.PACMAN, PM.APT, Op.INSTALL): _flags(
            ("--noconfirm", "-y"), ("--asdeps", ""), ("-q", "-q"), ("--quiet", "-q"),
        ),
        (PM.PACMAN, PM.DNF, Op.INSTALL): _flags(
            ("--noconfirm", "-y"), ("-q", "-q"),
        ),
        (PM.APT, PM.DNF, Op.REMOVE): _flags(
            ("-y", "-y"), ("--yes", "-y"), ("--purge", ""), ("--auto-remove", "--noautoremove"),
        ),
        (PM.APT, PM.PACMAN, Op.REMOVE): _flags(
            ("-y", "--noconfirm"), ("--yes", "--noconfirm"), ("--purge", "-n"),
        ),
        (PM.PACMAN, PM.APT, Op.REMOVE): _flags(
            ("--noconfirm", "-y"), ("-n", "--purge"), ("-s", "--auto-remove"),
        ),
        (PM.APT, PM.DNF, Op.UPGRADE): _flags(
            ("-y", "-y"), ("--yes", "-y"), ("-q", "-q"),
        ),
        (PM.APT, PM.PACMAN, Op.UPGRADE): _flags(
            ("-y", "--noconfirm"), ("--yes", "--noconfirm"),
        ),
        (PM.PACMAN, PM.APT, Op.UPGRADE): _flags(
            ("--noconfirm", "-y"),
        ),
        (PM.APT, PM.DNF, Op.SEARCH): _flags(
            ("-n", ""), ("--names-only", ""),
        ),
        (PM.APT, PM.PACMAN, Op.SEARCH): _flags(
            ("-n", ""), ("--names-only", ""),
        ),
    }

    # Verbose means the same thing across the apt/rpm/zypper family.
    verbose_family = (PM.APT, PM.DNF, PM.YUM, PM.ZYPPER)
    for source in verbose_family:
        for target in verbose_family:
            if source == target:
                continue
            for op in (Op.INSTALL, Op.REMOVE, Op.UPGRADE):
                key = (source, target, op)
                table[key] = table.get(key, ()) + _flags(("-v", "-v"))

    return table


FLAG_MAPPINGS: Mapping[Tuple[PackageManager, PackageManager, PackageOperation], Tuple[FlagMapping, ...]] = MappingProxyType(
    _build_flag_mappings()
)


# ---------------------------------------------------------------------------
# Command parsing
# ---------------------------------------------------------------------------

_EXECUTABLES: Dict[str, PackageManager] = {
    "apt": PM.APT,
    "apt-get": PM.APT,
    "aptitude": PM.APT,
    "yum": PM.YUM,
    "dnf": PM.DNF,
    "pacman": PM.PACMAN,
    "zypper": PM.ZYPPER,
    "apk": PM.APK,
    "emerge": PM.EMERGE,
    "xbps-install": PM.XBPS,
    "xbps-remove": PM.XBPS,
    "xbps-query": PM.XBPS,
    "nix-env": PM.NIX,
    "nix": PM.NIX,
}

# Each parser takes (executable, tokens after the executable) and returns the
# operation plus how many tokens it consumed.
OperationParser = Callable[[str, List[str]], Tuple[PackageOperation, int]]


def _word_parser(words: Dict[str, PackageOperation]) -> OperationParser:
    def parse(executable: str, tokens: List[str]) -> Tuple[PackageOperation, int]:
        word = tokens[0].lower()
        if word not in words:
            raise UnsupportedOperation(word)
        return words[word], 1
    return parse


_parse_apt = _word_parser({
    "install": Op.INSTALL,
    "remove": Op.REMOVE,
    "uninstall": Op.REMOVE,
    "purge": Op.REMOVE,
    "update": Op.UPDATE,
    "upgrade": Op.UPGRADE,
    "full-upgrade": Op.UPGRADE,
    "dist-upgrade": Op.UPGRADE,
    "search": Op.SEARCH,
    "show": Op.INFO,
    "info": Op.INFO,
    "list": Op.LIST,
    "clean": Op.CLEAN,
    "autoclean": Op.CLEAN,
    "autoremove": Op.AUTOREMOVE,
})

# yum and dnf: "update" upgrades packages, "check-update" refreshes metadata.
_parse_rpm = _word_parser({
    "install": Op.INSTALL,
    "remove": Op.REMOVE,
    "erase": Op.REMOVE,
    "check-update": Op.UPDATE,
    "update": Op.UPGRADE,
    "upgrade": Op.UPGRADE,
    "search": Op.SEARCH,
    "info": Op.INFO,
    "list": Op.LIST,
    "clean": Op.CLEAN,
    "autoremove": Op.AUTOREMOVE,
})

_parse_zypper = _word_parser({
    "install": Op.INSTALL,
    "in": Op.INSTALL,
    "remove": Op.REMOVE,
    "rm": Op.REMOVE,
    "refresh": Op.UPDATE,
    "ref": Op.UPDATE,
    "update": Op.UPGRADE,
    "up": Op.UPGRADE,
    "search": Op.SEARCH,
    "se": Op.SEARCH,
    "info": Op.INFO,
    "if": Op.INFO,
    "packages": Op.LIST,
    "clean": Op.CLEAN,
})

_parse_apk = _word_parser({
    "add": Op.INSTALL,
    "del": Op.REMOVE,
    "update": Op.UPDATE,
    "upgrade": Op.UPGRADE,
    "search": Op.SEARCH,
    "info": Op.INFO,
    "list": Op.LIST,
    "cache": Op.CLEAN,
})

# Clusters are looked up lowercased: no two pacman operations differ only in case.
_PACMAN_CLUSTERS: Dict[str, PackageOperation] = {
    "-s": Op.INSTALL,
    "-r": Op.REMOVE,
    "-rs": Op.REMOVE,
    "-rns": Op.REMOVE,
    "-sy": Op.UPDATE,
    "-syu": Op.UPGRADE,
    "-ss": Op.SEARCH,
    "-si": Op.INFO,
    "-qi": Op.INFO,
    "-q": Op.LIST,
    "-sc": Op.CLEAN,
    "-scc": Op.CLEAN,
}


def _parse_pacman(executable: str, tokens: List[str]) -> Tuple[PackageOperation, int]:
    cluster = tokens[0]
    if cluster.lower() not in _PACMAN_CLUSTERS:
        raise UnsupportedOperation(cluster)
    return _PACMAN_CLUSTERS[cluster.lower()], 1


_EMERGE_FLAGS: Dict[str, PackageOperation] = {
    "-a": Op.INSTALL,
    "-av": Op.INSTALL,
    "--ask": Op.INSTALL,
    "--unmerge": Op.REMOVE,
    "-C": Op.REMOVE,
    "--sync": Op.UPDATE,
    "--update": Op.UPGRADE,
    "-u": Op.UPGRADE,
    "-uDN": Op.UPGRADE,
    "--search": Op.SEARCH,
    "-s": Op.SEARCH,
    "--info": Op.INFO,
    "--depclean": Op.CLEAN,
}


def _parse_emerge(executable: str, tokens: List[str]) -> Tuple[PackageOperation, int]:
    first = tokens[0]
    if not first.startswith("-"):
        # emerge <atom> installs
        return Op.INSTALL, 0
    if first not in _EMERGE_FLAGS:
        raise UnsupportedOperation(first)
    return _EMERGE_FLAGS[first], 1


def _parse_xbps(executable: str, tokens: List[str]) -> Tuple[PackageOperation, int]:
    first = tokens[0]
    if executable == "xbps-remove":
        # -O and -o are different operations, so case matters here only.
        if first == "-O":
            return Op.CLEAN, 1
        if first == "-o":
            return Op.AUTOREMOVE, 1
        return Op.REMOVE, 0
    if executable == "xbps-query":
        queries = {"-rs": Op.SEARCH, "-r": Op.INFO, "-l": Op.LIST}
        if first.lower() not in queries:
            raise UnsupportedOperation(first)
        return queries[first.lower()], 1
    # xbps-install
    if first.lower() == "-su":
        return Op.UPGRADE, 1
    if first.lower() == "-s":
        return (Op.INSTALL if len(tokens) > 1 else Op.UPDATE), 1
    if not first.startswith("-"):
        return Op.INSTALL, 0
    raise UnsupportedOperation(first)


_NIX_ENV_FLAGS: Dict[str, PackageOperation] = {
    "-i": Op.INSTALL,
    "-iA": Op.INSTALL,
    "-e": Op.REMOVE,
    "-u": Op.UPGRADE,
    "-uA": Op.UPGRADE,
    "-q": Op.LIST,
    "-qa": Op.LIST,
}


def _parse_nix(executable: str, tokens: List[str]) -> Tuple[PackageOperation, int]:
    first = tokens[0]
    if first.lower() == "search":
        return Op.SEARCH, 1
    if first not in _NIX_ENV_FLAGS:
        raise UnsupportedOperation(first)
    return _NIX_ENV_FLAGS[first], 1


def _parse_generic(executable: str, tokens: List[str]) -> Tuple[PackageOperation, int]:
    raise UnsupportedOperation(tokens[0])


_OPERATION_PARSERS: Dict[PackageManager, OperationParser] = {
    PM.APT: _parse_apt,
    PM.YUM: _parse_rpm,
    PM.DNF: _parse_rpm,
    PM.PACMAN: _parse_pacman,
    PM.ZYPPER: _parse_zypper,
    PM.APK: _parse_apk,
    PM.EMERGE: _parse_emerge,
    PM.XBPS: _parse_xbps,
    PM.NIX: _parse_nix,
    PM.GENERIC: _parse_generic,
}


def detect_package_manager(executable: str) -> PackageManager:
    """Map an executable name (``apt-get``, ``xbps-query``...) to its manager."""
    manager = _EXECUTABLES.get(executable.lower())
    if manager is None:
        raise NotPackageManagerCommand(executable)
    return manager


def detect_operation(manager: PackageManager, tokens: Sequence[str], executable: Optional[str] = None) -> PackageOperation:
    """
    Identify the operation in *tokens* (everything after the executable).

    *executable* only matters for xbps, whose operation depends on which of
    its binaries was invoked; it defaults to the manager's canonical one.
    """
    if not tokens:
        raise NotPackageManagerCommand("")
    parser = _OPERATION_PARSERS[manager]
    operation, _ = parser((executable or manager.command_name).lower(), list(tokens))
    return operation


def parse_package_command(command: str) -> ParsedPackageCommand:
    """
    Split *command* into manager, operation and remaining arguments.

    Raises:
        EmptyCommand: *command* is blank.
        NotPackageManagerCommand: unknown executable, or no operation given.
        UnsupportedOperation: the operation token is not understood.
    """
    parts = command.split()
    if not parts:
        raise EmptyCommand()

    sudo = parts[0] == "sudo" and len(parts) > 1
    if sudo:
        parts = parts[1:]

    executable = parts[0].lower()
    manager = detect_package_manager(executable)

    tokens = parts[1:]
    if not tokens:
        raise NotPackageManagerCommand(command.strip())

    operation, consumed = _OPERATION_PARSERS[manager](executable, tokens)
    return ParsedPackageCommand(manager, operation, tokens[consumed:], sudo)


# ---------------------------------------------------------------------------
# Translation
# ---------------------------------------------------------------------------

def _match_package_flag(flag: str, rules: Sequence[FlagMapping]) -> Optional[List[str]]:
    """
    First rule matching *flag*, or ``None``.

    Unlike command flags, a package flag only carries a value after ``=``:
    ``--opt=value`` matches a ``--opt`` rule, but ``-yq`` never matches ``-y``.
    """
    for rule in rules:
        if flag.lower() == rule.source.lower():
            return rule.target.split()

        name, sep, value = flag.partition("=")
        if sep and name == rule.source:
            if not rule.target:
                return []
            if "=" in rule.target:
                return [f"{rule.target}={value}"]
            return [rule.target, value]

    return None


def translate_package_command(command: str, from_pm: PackageManager, to_pm: PackageManager) -> PackageTranslationResult:
    """
    Translate a package-manager invocation from *from_pm* to *to_pm*.

    ``sudo`` is kept only when the input had it and the target operation
    needs root.  Flags with no known equivalent are kept and reported.
    """
    text = command.strip()
    if not text:
        raise EmptyCommand()

    if from_pm == to_pm:
        return PackageTranslationResult(text, text, from_pm, to_pm)

    parsed = parse_package_command(text)

    target = OPERATION_MAPPINGS.get((to_pm, parsed.operation))
    if target is None:
        raise UnsupportedOperation(str(parsed.operation))

    warnings: List[str] = []
    if parsed.manager != from_pm:
        warnings.append(
            f"Command appears to be for {parsed.manager} but was specified as {from_pm}"
        )

    flags = [arg for arg in parsed.args if arg.startswith(("-", "/"))]
    packages = [arg for arg in parsed.args if not arg.startswith(("-", "/"))]

    rules = FLAG_MAPPINGS.get((from_pm, to_pm, parsed.operation), ())
    translated_flags: List[str] = []
    for flag in flags:
        emitted = _match_package_flag(flag, rules)
        if emitted is None:
            warnings.append(
                f"Flag '{flag}' has no direct equivalent in {to_pm} for {parsed.operation} operation"
            )
            translated_flags.append(flag)
        else:
            translated_flags.extend(emitted)

    pieces = []
    if parsed.sudo and target.requires_sudo:
        pieces.append("sudo")
    pieces.append(target.command)
    pieces.extend(translated_flags)
    pieces.extend(packages)

    if target.notes:
        warnings.append(target.notes)

    logger.debug("%s %s -> %s", parsed.manager, parsed.operation, target.command)

    return PackageTranslationResult(
        command=" ".join(pieces),
        original=text,
        from_pm=from_pm,
        to_pm=to_pm,
        warnings=tuple(warnings),
        requires_sudo=target.requires_sudo,
    )


def translate_package_command_auto(command: str, to_pm: PackageManager) -> PackageTranslationResult:
    """Translate *command* to *to_pm*, detecting the source manager from the executable."""
    text = command.strip()
    if not text:
        raise EmptyCommand()
    return translate_package_command(text, parse_package_command(text).manager, to_pm)


def _parse_manager(name: str) -> PackageManager:
    manager = PackageManager.parse(name)
    if manager is None:
        raise NotPackageManagerCommand(name)
    return manager


def translate_package_command_str(command: str, from_pm: str, to_pm: str) -> PackageTranslationResult:
    return translate_package_command(command, _parse_manager(from_pm), _parse_manager(to_pm))


def translate_package_batch(
    commands: Sequence[str], from_pm: PackageManager, to_pm: PackageManager
) -> List[Union[PackageTranslationResult, TranslationError]]:
    results: List[Union[PackageTranslationResult, TranslationError]] = []
    for command in commands:
        try:
            results.append(translate_package_command(command, from_pm, to_pm))
        except TranslationError as e:
            results.append(e)
    return results
