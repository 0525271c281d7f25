"""
Interactive translation shell for cmdx.
Reads commands at a highlighted prompt and prints their translation.
"""

import os
import platform
import sys
from typing import Optional

from cmdx.command_map import suggest_commands
from cmdx.engine import translate_command, translate_compound_command
from cmdx.errors import CommandNotFound, TranslationError
from cmdx.platforms import OperatingSystem


# ---------------------------------------------------------------------------
# Colorized output helpers
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Check if the terminal supports ANSI colors."""
    if os.getenv("NO_COLOR"):
        return False
    if not hasattr(sys.stdout, "isatty") or not sys.stdout.isatty():
        return False
    return True

_COLOR = _supports_color()

# Enable ANSI escape sequences on Windows 10+
if _COLOR and platform.system() == "Windows":
    os.system("")


def disable_color():
    global _COLOR
    _COLOR = False


def _c(code: str, text: str) -> str:
    """Wrap *text* with an ANSI escape if colors are enabled."""
    return f"\033[{code}m{text}\033[0m" if _COLOR else text


def print_success(msg: str):
    """Print a green success message."""
    print(_c("32", msg))


def print_error(msg: str, **kw):
    """Print a red error message."""
    print(_c("31", msg), **kw)


def print_warning(msg: str, **kw):
    """Print a yellow warning message."""
    print(_c("33", msg), **kw)


def print_info(msg: str):
    """Print a cyan informational message."""
    print(_c("36", msg))


def print_header(msg: str):
    """Print a bold header message."""
    print(_c("1", msg))


def print_dim(msg: str):
    """Print a dimmed/muted message."""
    print(_c("2", msg))


def report_error(error: TranslationError, from_os: OperatingSystem, to_os: OperatingSystem, **kw):
    """Print *error* in red, plus "did you mean" hints for unknown commands."""
    print_error(f"Error: {error}", **kw)
    if isinstance(error, CommandNotFound):
        suggestions = suggest_commands(error.verb, from_os, to_os)
        if suggestions:
            print_warning(f"  Did you mean: {', '.join(suggestions)}?", **kw)


# ---------------------------------------------------------------------------
# REPL
# ---------------------------------------------------------------------------

class TranslateShell:
    """Interactive loop translating each line from one OS to another."""

    def __init__(self, from_os: OperatingSystem, to_os: OperatingSystem, compound: bool = True):
        self.from_os = from_os
        self.to_os = to_os
        self.compound = compound
        self.running = True

    def print_banner(self):
        print_header("\n" + "=" * 60)
        print_info(f"  cmdx interactive: {self.from_os} -> {self.to_os}")
        print_header("=" * 60)
        print_dim("  Type a command to translate it.")
        print_dim("  'swap' reverses the direction, 'help' lists commands, 'exit' quits.\n")

    def show_help(self):
        print_header("\nCommands:")
        print("  <command>       Translate the command")
        print("  swap            Swap source and target OS")
        print("  help, ?         Show this help")
        print("  exit, quit, q   Leave the shell\n")

    def _create_prompt_session(self):
        """Build a prompt_toolkit PromptSession with syntax highlighting."""
        from prompt_toolkit import PromptSession
        from prompt_toolkit.history import InMemoryHistory
        from prompt_toolkit.lexers import PygmentsLexer
        from prompt_toolkit.styles import merge_styles, Style as PTStyle
        from prompt_toolkit.styles.pygments import style_from_pygments_cls
        from cmdx.highlighting import CommandLexer, CmdxStyle, PROMPT_STYLE

        style = merge_styles([
            style_from_pygments_cls(CmdxStyle),
            PTStyle.from_dict(PROMPT_STYLE),
        ])

        return PromptSession(
            lexer=PygmentsLexer(CommandLexer),
            style=style,
            history=InMemoryHistory(),
        )

    def _prompt_message(self):
        return [
            ("class:prompt-name", "cmdx"),
            ("class:prompt-sep", ":"),
            ("class:prompt-os", f"{self.from_os}->{self.to_os}"),
            ("", " "),
            ("class:prompt-arrow", "> "),
        ]

    def handle_input(self, user_input: str) -> Optional[str]:
        """
        Process one line of input.

        Returns the translated command, or ``None`` for shell commands and
        failed translations.
        """
        lowered = user_input.lower()

        if lowered in ("exit", "quit", "q"):
            print("Goodbye!")
            self.running = False
            return None

        if lowered in ("help", "?"):
            self.show_help()
            return None

        if lowered == "swap":
            self.from_os, self.to_os = self.to_os, self.from_os
            print_info(f"Now translating {self.from_os} -> {self.to_os}")
            return None

        translate = translate_compound_command if self.compound else translate_command
        try:
            result = translate(user_input, self.from_os, self.to_os)
        except TranslationError as e:
            report_error(e, self.from_os, self.to_os)
            return None

        print_success(result.command)
        for warning in result.warnings:
            print_warning(f"  ! {warning}")
        return result.command

    def run(self, session=None):
        """Main shell loop."""
        self.print_banner()

        if session is None:
            session = self._create_prompt_session()

        while self.running:
            try:
                user_input = session.prompt(self._prompt_message()).strip()
                if not user_input:
                    continue
                self.handle_input(user_input)
            except KeyboardInterrupt:
                print("\nGoodbye!")
                break
            except EOFError:
                print("\nGoodbye!")
                break
