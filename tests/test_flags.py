"""
Tests for first-match flag rewriting.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from cmdx.command_map import FlagMapping, get_mapping
from cmdx.flags import match_flag, translate_flags
from cmdx.platforms import OperatingSystem


def test_exact_match_is_case_insensitive():
    rules = [FlagMapping("/w", "-C")]
    assert match_flag("/W", rules) == ["-C"]


def test_multi_token_target_expands():
    rules = [FlagMapping("-rf", "/s /q")]
    assert match_flag("-rf", rules) == ["/s", "/q"]


def test_empty_target_drops_flag():
    result = translate_flags(["/p", "file"], [FlagMapping("/p", "")])
    assert result.args == ["file"]
    assert result.warnings == []
    assert not result.had_unmapped


def test_prefix_match_carries_value():
    rules = [FlagMapping("/n", "-c")]
    assert match_flag("/n:5", rules) == ["-c 5"]
    assert match_flag("/n=5", rules) == ["-c 5"]
    assert match_flag("/n::=5", rules) == ["-c 5"]


def test_prefix_match_without_value_gives_bare_target():
    assert match_flag("/n:", [FlagMapping("/n", "-c")]) == ["-c"]


def test_prefix_match_is_case_sensitive():
    assert match_flag("/N:5", [FlagMapping("/n", "-c")]) is None


def test_unmapped_flag_is_kept_with_warning():
    result = translate_flags(["/zzz", "notes.txt"], [FlagMapping("/w", "-C")])
    assert result.args == ["/zzz", "notes.txt"]
    assert result.warnings == ["Flag '/zzz' was not translated"]
    assert result.had_unmapped


def test_unmapped_plain_argument_is_silent():
    result = translate_flags(["notes.txt"], [FlagMapping("/w", "-C")])
    assert result.args == ["notes.txt"]
    assert result.warnings == []
    assert not result.had_unmapped


def test_unmapped_flag_dropped_when_not_preserving():
    result = translate_flags(["/zzz", "-C"], [FlagMapping("-C", "-C")], preserve_unmapped=False)
    assert result.args == ["-C"]
    assert result.warnings == ["Flag '/zzz' was dropped"]
    assert result.had_unmapped


def test_declared_rule_order_wins():
    specific_first = [FlagMapping("/o:n", "--sort=name"), FlagMapping("/o", "")]
    broad_first = [FlagMapping("/o", ""), FlagMapping("/o:n", "--sort=name")]

    assert match_flag("/o:n", specific_first) == ["--sort=name"]
    # "/o" prefix-matches "/o:n" and its empty target swallows it
    assert match_flag("/o:n", broad_first) == []


def test_dir_table_orders_sort_keys_before_bare_sort():
    mapping = get_mapping("dir", OperatingSystem.WINDOWS, OperatingSystem.LINUX)
    sources = [rule.source for rule in mapping.flag_mappings]
    bare = sources.index("/o")
    for key in ("/o:n", "/o:s", "/o:d"):
        assert sources.index(key) < bare

    result = translate_flags(["/o:d"], mapping.flag_mappings)
    assert result.args == ["--sort=time"]


def test_exact_spelling_beats_case_only_sibling():
    rules = [FlagMapping("-R", "/s"), FlagMapping("-r", "/o:-n")]
    assert match_flag("-r", rules) == ["/o:-n"]
    assert match_flag("-R", rules) == ["/s"]


def test_case_insensitive_match_without_exact_sibling():
    assert match_flag("-r", [FlagMapping("-R", "/s")]) == ["/s"]
