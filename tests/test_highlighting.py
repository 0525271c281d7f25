"""
Tests for the prompt lexer.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from pygments.token import Comment, Name, Number, Operator, Punctuation, String

from cmdx.highlighting import PROMPT_STYLE, CmdxStyle, CommandLexer


def _tokens(text):
    return [(ttype, value) for ttype, value in CommandLexer().get_tokens(text)]


def test_windows_flags_and_variables():
    tokens = _tokens("dir /w %USERPROFILE%")
    assert (Name.Tag, "/w") in tokens
    assert (Name.Variable, "%USERPROFILE%") in tokens


def test_unix_flags_and_operators():
    tokens = _tokens("ls -la --color=auto | grep $HOME ; clear")
    assert (Name.Tag, "-la") in tokens
    assert (Name.Tag, "--color=auto") in tokens
    assert (Operator, "|") in tokens
    assert (Name.Variable, "$HOME") in tokens
    assert (Punctuation, ";") in tokens


def test_paths_and_strings():
    tokens = _tokens('copy "a b.txt" C:\\Temp')
    assert (String.Double, '"a b.txt"') in tokens
    assert (Number.Other, "C:\\Temp") in tokens


def test_comments():
    assert _tokens("# note")[0] == (Comment.Single, "# note")
    assert _tokens("REM note")[0] == (Comment.Single, "REM note")


def test_path_segments_are_not_flags():
    tokens = _tokens("cat /etc/hosts")
    assert (Name.Tag, "/etc") not in tokens


def test_style_covers_prompt_classes():
    assert Name.Tag in CmdxStyle.styles
    assert set(PROMPT_STYLE) == {"prompt-name", "prompt-sep", "prompt-os", "prompt-arrow"}
