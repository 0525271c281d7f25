"""
Flag rewriting against an ordered rule list.

Shared by the command orchestrator and the package-command translator.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from cmdx.command_map import FlagMapping


@dataclass
class FlagTranslation:
    """Output of :func:`translate_flags`."""
    args: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    had_unmapped: bool = False


def match_flag(token: str, rules: Sequence[FlagMapping]) -> Optional[List[str]]:
    """
    Apply the first rule in *rules* that matches *token*.

    Returns the emitted tokens (possibly empty, meaning the flag is dropped),
    or ``None`` when no rule matches.

    A rule matches exactly (case-insensitive), or as a case-sensitive prefix.
    For a prefix match the remainder, minus leading ``:`` then ``=``, is the
    flag's value: ``/n:5`` against ``/n -> -c`` gives ``"-c 5"``.

    When two rules differ only in case (``ls -R`` and ``-r``), a token
    spelled exactly like one of them matches that one only.
    """
    lowered = token.lower()
    for rule in rules:
        if lowered == rule.source.lower():
            if rule.source != token and any(other.source == token for other in rules):
                continue
            return rule.target.split()

        if token.startswith(rule.source):
            if not rule.target:
                return []
            value = token[len(rule.source):].lstrip(":").lstrip("=")
            if value:
                return [f"{rule.target} {value}"]
            return [rule.target]

    return None


def translate_flags(
    args: Sequence[str],
    rules: Sequence[FlagMapping],
    preserve_unmapped: bool = True,
) -> FlagTranslation:
    """
    Rewrite every token in *args* using *rules*, first match wins.

    Unmatched tokens are kept when *preserve_unmapped* is true (with a
    warning if they look like flags), and dropped with a warning otherwise.
    """
    result = FlagTranslation()

    for arg in args:
        emitted = match_flag(arg, rules)
        if emitted is not None:
            result.args.extend(emitted)
            continue

        if preserve_unmapped:
            result.args.append(arg)
            if arg.startswith(("-", "/")):
                result.warnings.append(f"Flag '{arg}' was not translated")
                result.had_unmapped = True
        else:
            result.warnings.append(f"Flag '{arg}' was dropped")
            result.had_unmapped = True

    return result
