"""
Path translation between Windows and Unix-like systems.

Drive letters map to WSL-style mount points (``C:\\`` <-> ``/mnt/c``), UNC
shares to ``//server/share``, ``/home`` to ``C:\\Users`` and ``~`` to
``%USERPROFILE%``.  Anything beyond swapping separators is a convention
rather than a guarantee, so each such mapping adds a warning.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from cmdx.errors import EmptyPath, InvalidOs, TranslationError
from cmdx.platforms import OperatingSystem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathTranslation:
    path: str
    original: str
    from_os: OperatingSystem
    to_os: OperatingSystem
    drive_translated: bool = False
    warnings: Tuple[str, ...] = ()

    def __str__(self) -> str:
        return self.path


def _has_drive_letter(path: str) -> bool:
    return len(path) >= 2 and path[0].isascii() and path[0].isalpha() and path[1] == ":"


def _is_mount_point(path: str) -> bool:
    """``/mnt/<letter>`` followed by ``/`` or the end of the path."""
    if not path.startswith("/mnt/") or len(path) < 6:
        return False
    drive = path[5]
    return drive.isascii() and drive.isalpha() and (len(path) == 6 or path[6] == "/")


def is_windows_path(path: str) -> bool:
    """Drive prefix (``C:``), UNC prefix (``\\\\``) or any backslash."""
    return _has_drive_letter(path) or path.startswith("\\\\") or "\\" in path


def is_unix_path(path: str) -> bool:
    return path.startswith(("/", "~/", "./", "../"))


# ---------------------------------------------------------------------------
# Directions
# ---------------------------------------------------------------------------

def _windows_to_unix(path: str) -> Tuple[str, bool, List[str]]:
    warnings: List[str] = []
    drive_translated = False
    result = path

    if _has_drive_letter(result):
        result = f"/mnt/{result[0].lower()}{result[2:]}"
        drive_translated = True

    if result.startswith("\\\\"):
        result = "//" + result[2:]
        warnings.append("UNC path converted to network path format")

    result = result.replace("\\", "/")

    if result.startswith("//"):
        result = "//" + "/".join(part for part in result[2:].split("/") if part)
    else:
        joined = "/".join(part for part in result.split("/") if part)
        absolute = path.startswith(("/", "\\")) or (len(path) >= 2 and path[1] == ":")
        result = "/" + joined if absolute else joined

    return result, drive_translated, warnings


def _unix_to_windows(path: str) -> Tuple[str, bool, List[str]]:
    warnings: List[str] = []
    drive_translated = False
    result = path

    if _is_mount_point(result):
        result = f"{result[5].upper()}:{result[6:]}"
        drive_translated = True
    elif result.startswith("/home/"):
        result = "C:\\Users" + result[5:]
        drive_translated = True
        warnings.append("/home mapped to C:\\Users")
    elif result.startswith("~/") or result == "~":
        result = "%USERPROFILE%" + result[1:]
        warnings.append("~ translated to %USERPROFILE%")
    elif result.startswith("/") and not result.startswith("//"):
        result = "C:" + result
        drive_translated = True
        warnings.append("Root path mapped to C: drive")
    elif result.startswith("//"):
        result = "\\\\" + result[2:]

    result = result.replace("/", "\\")

    if result.startswith("\\\\"):
        result = "\\\\" + "\\".join(part for part in result[2:].split("\\") if part)
    else:
        result = "\\".join(part for part in result.split("\\") if part)

    return result, drive_translated, warnings


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def translate_path(path: str, from_os: OperatingSystem, to_os: OperatingSystem) -> PathTranslation:
    """
    Convert *path* from *from_os* syntax to *to_os* syntax.

    Unix-to-Unix paths are returned unchanged.  When either side is neither
    Windows nor Unix-like, the direction is picked from the shape of *path*.

    Raises:
        EmptyPath: *path* is blank.
    """
    text = path.strip()
    if not text:
        raise EmptyPath()

    if from_os == to_os:
        return PathTranslation(text, text, from_os, to_os)

    if from_os == OperatingSystem.WINDOWS and to_os.is_unix_like:
        converted = _windows_to_unix(text)
    elif from_os.is_unix_like and to_os == OperatingSystem.WINDOWS:
        converted = _unix_to_windows(text)
    elif from_os.is_unix_like and to_os.is_unix_like:
        converted = (text, False, [])
    elif is_windows_path(text):
        logger.debug("guessing Windows syntax for '%s' (%s -> %s)", text, from_os, to_os)
        converted = _windows_to_unix(text)
    else:
        logger.debug("guessing Unix syntax for '%s' (%s -> %s)", text, from_os, to_os)
        converted = _unix_to_windows(text)

    translated, drive_translated, warnings = converted
    return PathTranslation(
        path=translated,
        original=text,
        from_os=from_os,
        to_os=to_os,
        drive_translated=drive_translated,
        warnings=tuple(warnings),
    )


def translate_path_str(path: str, from_os: str, to_os: str) -> PathTranslation:
    source = OperatingSystem.parse(from_os)
    if source is None:
        raise InvalidOs(from_os)
    target = OperatingSystem.parse(to_os)
    if target is None:
        raise InvalidOs(to_os)
    return translate_path(path, source, target)


def translate_path_auto(path: str, to_os: OperatingSystem) -> PathTranslation:
    """Translate *path*, treating it as Windows if it looks like one and Linux otherwise."""
    if not path.strip():
        raise EmptyPath()
    from_os = OperatingSystem.WINDOWS if is_windows_path(path) else OperatingSystem.LINUX
    return translate_path(path, from_os, to_os)


def translate_paths(
    paths: Sequence[str], from_os: OperatingSystem, to_os: OperatingSystem
) -> List[Union[PathTranslation, TranslationError]]:
    results: List[Union[PathTranslation, TranslationError]] = []
    for path in paths:
        try:
            results.append(translate_path(path, from_os, to_os))
        except TranslationError as e:
            results.append(e)
    return results
