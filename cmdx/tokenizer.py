"""
Command-line tokenizing for cmdx.

Tokens are whitespace-delimited.  There is no quoting or escaping support:
``echo "a b"`` yields the tokens ``echo``, ``"a`` and ``b"``.
"""

from typing import List, Tuple


COMPOUND_OPERATORS = ("&&", "||", ";", "|")

# Two-character operators are matched before single-character ones so that
# ``||`` is never read as two pipes.
_TWO_CHAR_OPERATORS = ("&&", "||")
_ONE_CHAR_OPERATORS = (";", "|")


def parse_command(line: str) -> Tuple[str, List[str]]:
    """
    Split a command line into a lowercased verb and its arguments.

    Returns ``("", [])`` for blank input.
    """
    parts = line.split()
    if not parts:
        return "", []
    return parts[0].lower(), parts[1:]


def is_operator(part: str) -> bool:
    return part.strip() in COMPOUND_OPERATORS


def split_compound(line: str) -> List[str]:
    """
    Split *line* on ``&&``, ``||``, ``;`` and ``|``, keeping the operators.

    Segments are trimmed and empty segments dropped; operators appear in the
    order they were encountered.  A lone ``&`` is not an operator.

    >>> split_compound("a && b || c")
    ['a', '&&', 'b', '||', 'c']
    """
    parts: List[str] = []
    current: List[str] = []

    def flush():
        segment = "".join(current).strip()
        if segment:
            parts.append(segment)
        current.clear()

    i = 0
    while i < len(line):
        pair = line[i:i + 2]
        if pair in _TWO_CHAR_OPERATORS:
            flush()
            parts.append(pair)
            i += 2
            continue
        if line[i] in _ONE_CHAR_OPERATORS:
            flush()
            parts.append(line[i])
            i += 1
            continue
        current.append(line[i])
        i += 1

    flush()
    return parts
