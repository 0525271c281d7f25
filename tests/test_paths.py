"""
Tests for path translation.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from cmdx.errors import EmptyPath, InvalidOs
from cmdx.paths import (
    PathTranslation,
    is_unix_path,
    is_windows_path,
    translate_path,
    translate_path_auto,
    translate_path_str,
    translate_paths,
)
from cmdx.platforms import OperatingSystem

WINDOWS = OperatingSystem.WINDOWS
LINUX = OperatingSystem.LINUX


def test_is_windows_path():
    assert is_windows_path("C:\\Users\\john")
    assert is_windows_path("D:/Documents")
    assert is_windows_path("\\\\server\\share")
    assert is_windows_path("folder\\file.txt")
    assert not is_windows_path("/home/john")
    assert not is_windows_path("./file.txt")


def test_is_unix_path():
    assert is_unix_path("/home/john")
    assert is_unix_path("~/Documents")
    assert is_unix_path("./file.txt")
    assert is_unix_path("../parent/file")
    assert not is_unix_path("C:\\Users")


# ---------------------------------------------------------------------------
# Windows -> Unix
# ---------------------------------------------------------------------------

def test_drive_to_mount_point():
    result = translate_path("C:\\Users\\john", WINDOWS, LINUX)
    assert result.path == "/mnt/c/Users/john"
    assert result.drive_translated
    assert result.warnings == ()


def test_forward_slash_drive_path():
    assert translate_path("D:/Documents/report.pdf", WINDOWS, LINUX).path == "/mnt/d/Documents/report.pdf"


def test_unc_path_becomes_network_path():
    result = translate_path("\\\\server\\share\\dir", WINDOWS, LINUX)
    assert result.path == "//server/share/dir"
    assert result.warnings == ("UNC path converted to network path format",)
    assert not result.drive_translated


def test_relative_windows_path():
    result = translate_path("folder\\file.txt", WINDOWS, LINUX)
    assert result.path == "folder/file.txt"
    assert not result.drive_translated


def test_duplicate_separators_collapse():
    assert translate_path("C:\\Users\\\\john\\", WINDOWS, LINUX).path == "/mnt/c/Users/john"
    assert translate_path("\\temp\\\\x", WINDOWS, LINUX).path == "/temp/x"


# ---------------------------------------------------------------------------
# Unix -> Windows
# ---------------------------------------------------------------------------

def test_mount_point_to_drive():
    result = translate_path("/mnt/c/Users/john", LINUX, WINDOWS)
    assert result.path == "C:\\Users\\john"
    assert result.drive_translated
    assert result.warnings == ()


def test_bare_mount_point():
    assert translate_path("/mnt/d", LINUX, WINDOWS).path == "D:"


def test_mount_dir_that_is_not_a_drive():
    result = translate_path("/mnt/data/x", LINUX, WINDOWS)
    assert result.path == "C:\\mnt\\data\\x"
    assert result.warnings == ("Root path mapped to C: drive",)


def test_home_to_users():
    result = translate_path("/home/john/Documents", LINUX, WINDOWS)
    assert result.path == "C:\\Users\\john\\Documents"
    assert result.drive_translated
    assert result.warnings == ("/home mapped to C:\\Users",)


@pytest.mark.parametrize("path, expected", [
    ("~/Documents", "%USERPROFILE%\\Documents"),
    ("~", "%USERPROFILE%"),
])
def test_tilde_to_userprofile(path, expected):
    result = translate_path(path, LINUX, WINDOWS)
    assert result.path == expected
    assert result.warnings == ("~ translated to %USERPROFILE%",)
    assert not result.drive_translated


def test_root_path_gets_c_drive():
    result = translate_path("/etc/hosts", LINUX, WINDOWS)
    assert result.path == "C:\\etc\\hosts"
    assert result.drive_translated
    assert result.warnings == ("Root path mapped to C: drive",)


def test_network_path_to_unc():
    result = translate_path("//server/share//dir", LINUX, WINDOWS)
    assert result.path == "\\\\server\\share\\dir"
    assert result.warnings == ()


def test_relative_unix_path():
    assert translate_path("./scripts/run.sh", LINUX, WINDOWS).path == ".\\scripts\\run.sh"


def test_round_trip():
    forward = translate_path("C:\\Users\\john", WINDOWS, LINUX)
    back = translate_path(forward.path, LINUX, WINDOWS)
    assert back.path == "C:\\Users\\john"


# ---------------------------------------------------------------------------
# Other pairings & entry points
# ---------------------------------------------------------------------------

def test_same_os_passthrough_trims():
    result = translate_path("  C:\\Temp  ", WINDOWS, WINDOWS)
    assert result.path == "C:\\Temp"
    assert result.original == "C:\\Temp"


def test_unix_to_unix_unchanged():
    result = translate_path("/home/john", LINUX, OperatingSystem.MACOS)
    assert result.path == "/home/john"
    assert result.warnings == ()


def test_unknown_pairing_guesses_direction():
    assert translate_path("C:\\x", OperatingSystem.UNKNOWN, OperatingSystem.IOS).path == "/mnt/c/x"
    assert translate_path("/home/john", OperatingSystem.IOS, OperatingSystem.UNKNOWN).path == "C:\\Users\\john"


def test_blank_path_raises():
    with pytest.raises(EmptyPath):
        translate_path("   ", WINDOWS, LINUX)
    with pytest.raises(EmptyPath):
        translate_path_auto("", LINUX)


def test_translate_path_str():
    assert translate_path_str("C:\\Temp", "windows", "linux").path == "/mnt/c/Temp"
    with pytest.raises(InvalidOs):
        translate_path_str("C:\\Temp", "windows", "amiga")


def test_translate_path_auto():
    assert translate_path_auto("C:\\Users", LINUX).path == "/mnt/c/Users"
    assert translate_path_auto("/mnt/c/Users", WINDOWS).path == "C:\\Users"


def test_translate_paths_batch():
    results = translate_paths(["C:\\a", ""], WINDOWS, LINUX)
    assert isinstance(results[0], PathTranslation)
    assert str(results[0]) == "/mnt/c/a"
    assert isinstance(results[1], EmptyPath)
