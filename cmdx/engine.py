"""
Command translation engine.

Turns a command written for one operating system into the equivalent
command for another, consulting the rule table in ``cmdx.command_map``.

The decision order for a single command is fixed:

    1. blank input            -> EmptyCommand
    2. same OS                -> passthrough
    3. native to target only  -> passthrough + warning
    4. native to both         -> flags only if a mapping exists, else passthrough
    5. mapping found          -> translate flags, append notes
    6. both Unix-like         -> passthrough + warning
    7. already a target verb  -> passthrough + warning
    8. otherwise              -> CommandNotFound
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from cmdx.command_map import (
    CommandMapping,
    get_mapping,
    is_native_command,
    is_target_command_for_os,
)
from cmdx.env import translate_env_vars
from cmdx.errors import CommandNotFound, EmptyCommand, InvalidOs, TranslationError
from cmdx.flags import translate_flags
from cmdx.platforms import OperatingSystem
from cmdx.tokenizer import is_operator, parse_command, split_compound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranslationResult:
    """A translated command plus the advisory warnings produced on the way."""
    command: str
    original: str
    from_os: OperatingSystem
    to_os: OperatingSystem
    warnings: Tuple[str, ...] = ()
    had_unmapped_flags: bool = False

    def __str__(self) -> str:
        return self.command

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original": self.original,
            "translated": self.command,
            "from": str(self.from_os),
            "to": str(self.to_os),
            "warnings": list(self.warnings),
            "had_unmapped_flags": self.had_unmapped_flags,
        }


def _passthrough(text: str, from_os: OperatingSystem, to_os: OperatingSystem,
                 warning: Optional[str] = None) -> TranslationResult:
    return TranslationResult(
        command=text,
        original=text,
        from_os=from_os,
        to_os=to_os,
        warnings=(warning,) if warning else (),
    )


def _apply_mapping(text: str, args: List[str], mapping: CommandMapping,
                   from_os: OperatingSystem, to_os: OperatingSystem,
                   with_notes: bool) -> TranslationResult:
    flags = translate_flags(args, mapping.flag_mappings, mapping.preserve_unmapped_flags)

    command = mapping.target_cmd
    if flags.args:
        command += " " + " ".join(flags.args)

    warnings = list(flags.warnings)
    if with_notes and mapping.notes:
        warnings.append(mapping.notes)

    return TranslationResult(
        command=command,
        original=text,
        from_os=from_os,
        to_os=to_os,
        warnings=tuple(warnings),
        had_unmapped_flags=flags.had_unmapped,
    )


# ---------------------------------------------------------------------------
# Single commands
# ---------------------------------------------------------------------------

def translate_command(command: str, from_os: OperatingSystem, to_os: OperatingSystem) -> TranslationResult:
    """
    Translate a single command (no ``&&``/``|`` operators) from *from_os* to *to_os*.

    Raises:
        EmptyCommand: *command* is blank.
        CommandNotFound: nothing in the rule table or the fallbacks applies.
    """
    text = command.strip()
    if not text:
        raise EmptyCommand()

    if from_os == to_os:
        return _passthrough(text, from_os, to_os)

    verb, args = parse_command(text)

    native_to_target = is_native_command(verb, to_os)
    native_to_source = is_native_command(verb, from_os)

    if native_to_target and not native_to_source:
        logger.debug("'%s' is native to %s only, passing through", verb, to_os)
        return _passthrough(
            text, from_os, to_os,
            f"Command '{verb}' is already in {to_os} format, passed through unchanged",
        )

    mapping = get_mapping(verb, from_os, to_os)

    if native_to_target and native_to_source:
        if mapping is None:
            logger.debug("'%s' is native to both %s and %s, no flag rules", verb, from_os, to_os)
            return _passthrough(text, from_os, to_os)
        logger.debug("'%s' is native to both, translating flags only", verb)
        return _apply_mapping(text, args, mapping, from_os, to_os, with_notes=False)

    if mapping is not None:
        logger.debug("'%s' -> '%s' (%s -> %s)", verb, mapping.target_cmd, from_os, to_os)
        return _apply_mapping(text, args, mapping, from_os, to_os, with_notes=True)

    if from_os.is_unix_like and to_os.is_unix_like:
        logger.debug("no mapping for '%s', assuming Unix compatibility", verb)
        return _passthrough(
            text, from_os, to_os,
            f"Command '{verb}' passed through (Unix-like OS compatibility assumed)",
        )

    if is_target_command_for_os(verb, to_os):
        logger.debug("'%s' is already a %s target verb", verb, to_os)
        return _passthrough(
            text, from_os, to_os,
            f"Command '{verb}' appears to already be a {to_os} command, passed through unchanged",
        )

    raise CommandNotFound(verb)


def _parse_os(name: str) -> OperatingSystem:
    parsed = OperatingSystem.parse(name)
    if parsed is None:
        raise InvalidOs(name)
    return parsed


def translate_command_str(command: str, from_os: str, to_os: str) -> TranslationResult:
    """Like :func:`translate_command`, with OS names (``"windows"``, ``"darwin"``...)."""
    return translate_command(command, _parse_os(from_os), _parse_os(to_os))


def translate_batch(
    commands: Sequence[str], from_os: OperatingSystem, to_os: OperatingSystem
) -> List[Union[TranslationResult, TranslationError]]:
    """
    Translate each command independently.

    Failures are returned in place of the result rather than raised, so one
    bad line does not hide the others.
    """
    results: List[Union[TranslationResult, TranslationError]] = []
    for command in commands:
        try:
            results.append(translate_command(command, from_os, to_os))
        except TranslationError as e:
            results.append(e)
    return results


# ---------------------------------------------------------------------------
# Compound commands
# ---------------------------------------------------------------------------

def translate_compound_command(command: str, from_os: OperatingSystem, to_os: OperatingSystem) -> TranslationResult:
    """
    Translate a line that may chain commands with ``&&``, ``||``, ``;`` or ``|``.

    Each segment is translated on its own and the operators are put back
    between them.  A segment with no known translation is kept as written
    and reported in the warnings; any other error aborts the whole line.
    """
    text = command.strip()
    if not text:
        raise EmptyCommand()

    if from_os == to_os:
        return _passthrough(text, from_os, to_os)

    parts = split_compound(text)
    if len(parts) == 1:
        return translate_command(text, from_os, to_os)

    translated: List[str] = []
    warnings: List[str] = []
    had_unmapped = False

    for part in parts:
        if is_operator(part):
            translated.append(part)
            continue
        try:
            result = translate_command(part, from_os, to_os)
        except CommandNotFound:
            logger.debug("keeping untranslated segment '%s'", part)
            translated.append(part)
            warnings.append(f"Command '{part.split()[0]}' was not translated")
            continue
        translated.append(result.command)
        warnings.extend(result.warnings)
        had_unmapped = had_unmapped or result.had_unmapped_flags

    return TranslationResult(
        command=" ".join(translated),
        original=text,
        from_os=from_os,
        to_os=to_os,
        warnings=tuple(warnings),
        had_unmapped_flags=had_unmapped,
    )


def translate_full(command: str, from_os: OperatingSystem, to_os: OperatingSystem) -> TranslationResult:
    """Rewrite environment-variable references, then translate as a compound line."""
    result = translate_compound_command(translate_env_vars(command, from_os, to_os), from_os, to_os)
    return replace(result, original=command.strip())


# ---------------------------------------------------------------------------
# Script helpers
# ---------------------------------------------------------------------------

UNIX_SHEBANG = "#!/bin/sh"
WINDOWS_PREAMBLE = "@echo off"

_UNIX_SCRIPT_EXTENSIONS = (".sh", ".bash")
_WINDOWS_SCRIPT_EXTENSIONS = (".bat", ".cmd")


def translate_shebang(line: str, from_os: OperatingSystem, to_os: OperatingSystem) -> str:
    """
    Swap a script's first line between a Unix shebang and a batch preamble.

    Lines that are neither are returned unchanged.
    """
    if from_os == to_os:
        return line
    stripped = line.strip()
    if to_os == OperatingSystem.WINDOWS and stripped.startswith("#!"):
        return WINDOWS_PREAMBLE
    if to_os.is_unix_like and stripped.lower() == WINDOWS_PREAMBLE:
        return UNIX_SHEBANG
    return line


def translate_script_extension(filename: str, from_os: OperatingSystem, to_os: OperatingSystem) -> str:
    """``build.sh`` -> ``build.bat`` for Windows targets, ``build.cmd`` -> ``build.sh`` for Unix ones."""
    if from_os == to_os:
        return filename
    stem, ext = os.path.splitext(filename)
    if to_os == OperatingSystem.WINDOWS and ext.lower() in _UNIX_SCRIPT_EXTENSIONS:
        return stem + ".bat"
    if to_os.is_unix_like and ext.lower() in _WINDOWS_SCRIPT_EXTENSIONS:
        return stem + ".sh"
    return filename
