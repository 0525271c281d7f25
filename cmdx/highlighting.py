"""
Syntax highlighting for the cmdx interactive prompt.

Colour coding for both command dialects as you type:

  Unix flags    (-l, --all)       grey
  Windows flags (/w, /o:n)        grey
  Variables     ($VAR, %VAR%)     yellow
  Strings       ("...", '...')    green
  Operators     (|, &&, ;)        cyan
  Drive paths   (C:\\...)         purple

Uses Pygments for lexing and prompt_toolkit for rendering.
"""

from pygments.lexer import RegexLexer
from pygments.token import (
    Token,
    Comment,
    String,
    Name,
    Number,
    Operator,
    Punctuation,
)
from pygments.style import Style as PygmentsStyle


# ---------------------------------------------------------------------------
# Lexer for mixed Windows / Unix command lines
# ---------------------------------------------------------------------------

class CommandLexer(RegexLexer):
    """
    Lexer for single command lines in either cmd.exe or POSIX shell style.

    Not a script lexer: there is no notion of blocks or heredocs.
    """

    name = "CmdxInput"
    aliases = ["cmdxinput"]

    tokens = {
        "root": [
            # ── comments ──
            (r"#.*$", Comment.Single),
            (r"(?i)^rem\s.*$", Comment.Single),

            # ── strings ──
            (r'"(?:\\.|[^"\\])*"', String.Double),
            (r"'[^']*'", String.Single),

            # ── variables ──
            (r"\$\{[^}]+\}", Name.Variable),
            (r"\$[A-Za-z_]\w*", Name.Variable),
            (r"%[A-Za-z_][\w()]*%", Name.Variable),

            # ── drive and UNC paths ──
            (r"[A-Za-z]:[\\/]\S*", Number.Other),
            (r"\\\\\S+", Number.Other),

            # ── flags ──
            (r"--[A-Za-z0-9][\w-]*(=\S*)?", Name.Tag),
            (r"(?<=\s)-[A-Za-z0-9]+", Name.Tag),
            (r"(?<=\s)/[A-Za-z?][\w:+-]*(?=\s|$)", Name.Tag),

            # ── operators & redirects ──
            (r"\|{1,2}", Operator),
            (r"&&", Operator),
            (r"[12]?>{1,2}", Operator),
            (r"<", Operator),
            (r";", Punctuation),

            # ── catch-all ──
            (r"\S+", Token.Text),
            (r"\s+", Token.Text),
        ],
    }


# ---------------------------------------------------------------------------
# Colour palette
# ---------------------------------------------------------------------------

class CmdxStyle(PygmentsStyle):
    """Pygments colour theme for cmdx command highlighting."""

    default_style = ""
    styles = {
        Token.Text:        "",
        Comment.Single:    "#6a6a6a italic",
        String.Double:     "#a6e22e",
        String.Single:     "#a6e22e",
        Name.Variable:     "#e6db74",
        Name.Tag:          "#888888",    # flags
        Operator:          "#66d9ef",
        Punctuation:       "#66d9ef",
        Number.Other:      "#ae81ff",    # drive / network paths
    }


# ---------------------------------------------------------------------------
# Prompt segment styles ("cmdx:Windows->Linux >")
# ---------------------------------------------------------------------------

PROMPT_STYLE = {
    "prompt-name":  "#00d7d7 bold",
    "prompt-sep":   "#888888",
    "prompt-os":    "#ffffff",
    "prompt-arrow": "#6a6a6a",
}
