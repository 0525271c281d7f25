"""
Tests for environment-variable reference rewriting.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from cmdx.env import translate_env_vars, translate_env_vars_batch
from cmdx.platforms import OperatingSystem

WINDOWS = OperatingSystem.WINDOWS
LINUX = OperatingSystem.LINUX
MACOS = OperatingSystem.MACOS


def test_userprofile_round_trip():
    assert translate_env_vars("echo %USERPROFILE%", WINDOWS, LINUX) == "echo $HOME"
    assert translate_env_vars("echo $HOME", LINUX, WINDOWS) == "echo %USERPROFILE%"


@pytest.mark.parametrize("text, expected", [
    ("%userprofile%\\docs", "$HOME\\docs"),
    ("%TEMP% %TMP%", "$TMPDIR $TMPDIR"),
    ("%APPDATA%", "$XDG_CONFIG_HOME"),
    ("%ComSpec%", "$SHELL"),
    ("%PATH%", "$PATH"),
    ("%MyVar%", "$MyVar"),
])
def test_windows_to_unix(text, expected):
    assert translate_env_vars(text, WINDOWS, LINUX) == expected


def test_unterminated_percent_is_literal():
    assert translate_env_vars("50% done", WINDOWS, LINUX) == "50% done"
    assert translate_env_vars("100%%", WINDOWS, LINUX) == "100%%"


@pytest.mark.parametrize("text, expected", [
    ("cd ${HOME}/src", "cd %USERPROFILE%/src"),
    ("$XDG_CACHE_HOME", "%LOCALAPPDATA%"),
    ("$USER@$HOSTNAME", "%USERNAME%@%COMPUTERNAME%"),
    ("$my_var", "%my_var%"),
    ("cost: $ 5", "cost: $ 5"),
])
def test_unix_to_windows(text, expected):
    assert translate_env_vars(text, LINUX, WINDOWS) == expected


def test_same_family_is_noop():
    assert translate_env_vars("echo $HOME", LINUX, MACOS) == "echo $HOME"
    assert translate_env_vars("echo %HOME%", WINDOWS, WINDOWS) == "echo %HOME%"
    assert translate_env_vars("echo %HOME%", OperatingSystem.UNKNOWN, LINUX) == "echo %HOME%"


def test_batch():
    assert translate_env_vars_batch(["%USERNAME%", "%CD%"], WINDOWS, LINUX) == ["$USER", "$PWD"]
