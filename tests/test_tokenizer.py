"""
Tests for command tokenizing and compound splitting.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from cmdx.tokenizer import is_operator, parse_command, split_compound


def test_parse_command():
    verb, args = parse_command("ls -la /home")
    assert verb == "ls"
    assert args == ["-la", "/home"]


def test_parse_command_lowercases_verb_only():
    verb, args = parse_command("DIR /W   C:\\Temp")
    assert verb == "dir"
    assert args == ["/W", "C:\\Temp"]


def test_parse_command_blank():
    assert parse_command("   ") == ("", [])


def test_parse_command_has_no_quoting():
    _, args = parse_command('echo "hello world"')
    assert args == ['"hello', 'world"']


def test_split_compound_and_or():
    assert split_compound("a && b || c") == ["a", "&&", "b", "||", "c"]


def test_split_compound_pipe_and_semicolon():
    assert split_compound("type f.txt|findstr x ; cls") == ["type f.txt", "|", "findstr x", ";", "cls"]


def test_split_compound_single_ampersand_is_not_operator():
    assert split_compound("start app & exit") == ["start app & exit"]


def test_split_compound_two_char_operators_win():
    assert split_compound("a ||| b") == ["a", "||", "|", "b"]


def test_split_compound_drops_empty_segments():
    assert split_compound("&& a ;; b") == ["&&", "a", ";", ";", "b"]
    assert split_compound("   ") == []


def test_is_operator():
    assert is_operator("&&")
    assert is_operator(" | ")
    assert not is_operator("&")
    assert not is_operator("ls")
