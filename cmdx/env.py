"""
Environment-variable reference rewriting.

``%NAME%`` (Windows) <-> ``$NAME`` / ``${NAME}`` (Unix), renaming the
well-known variables that differ between the two families.  Names with no
counterpart keep their original spelling.
"""

import re
from types import MappingProxyType
from typing import List, Sequence

from cmdx.platforms import OperatingSystem


WINDOWS_TO_UNIX_VARS = MappingProxyType({
    "USERPROFILE": "HOME",
    "USERNAME": "USER",
    "APPDATA": "XDG_CONFIG_HOME",
    "LOCALAPPDATA": "XDG_DATA_HOME",
    "TEMP": "TMPDIR",
    "TMP": "TMPDIR",
    "COMPUTERNAME": "HOSTNAME",
    "CD": "PWD",
    "COMSPEC": "SHELL",
})

UNIX_TO_WINDOWS_VARS = MappingProxyType({
    "HOME": "USERPROFILE",
    "USER": "USERNAME",
    "XDG_CONFIG_HOME": "APPDATA",
    "XDG_DATA_HOME": "LOCALAPPDATA",
    "XDG_CACHE_HOME": "LOCALAPPDATA",
    "TMPDIR": "TEMP",
    "HOSTNAME": "COMPUTERNAME",
    "PWD": "CD",
    "SHELL": "COMSPEC",
})

_WINDOWS_VAR_RE = re.compile(r"%([^%]*)%")
_UNIX_VAR_RE = re.compile(r"\$\{([^}]*)\}|\$(\w+)")


def _windows_to_unix(text: str) -> str:
    def replace(match: re.Match) -> str:
        name = match.group(1)
        if not name:
            # "%%" is an escaped percent sign, not an empty variable; keep it.
            return match.group(0)
        return "$" + WINDOWS_TO_UNIX_VARS.get(name.upper(), name)

    return _WINDOWS_VAR_RE.sub(replace, text)


def _unix_to_windows(text: str) -> str:
    def replace(match: re.Match) -> str:
        name = match.group(1) if match.group(1) is not None else match.group(2)
        return "%" + UNIX_TO_WINDOWS_VARS.get(name.upper(), name) + "%"

    return _UNIX_VAR_RE.sub(replace, text)


def translate_env_vars(text: str, from_os: OperatingSystem, to_os: OperatingSystem) -> str:
    """
    Rewrite environment-variable references in *text* for *to_os*.

    A ``%`` with no closing partner is copied through as-is.  Pairs within
    the same family (Unix to Unix, or anything involving an OS that is
    neither Windows nor Unix-like) are returned unchanged.

    >>> translate_env_vars("echo %USERPROFILE%", OperatingSystem.WINDOWS, OperatingSystem.LINUX)
    'echo $HOME'
    """
    if from_os == to_os:
        return text
    if from_os == OperatingSystem.WINDOWS and to_os.is_unix_like:
        return _windows_to_unix(text)
    if from_os.is_unix_like and to_os == OperatingSystem.WINDOWS:
        return _unix_to_windows(text)
    return text


def translate_env_vars_batch(
    texts: Sequence[str], from_os: OperatingSystem, to_os: OperatingSystem
) -> List[str]:
    return [translate_env_vars(text, from_os, to_os) for text in texts]
