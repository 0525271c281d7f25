"""
cmdx - Main entry point.
Translates commands, paths and env vars between operating systems.
"""

import sys
import json
import logging
import argparse
from typing import List, Optional

from cmdx import __version__
from cmdx.command_map import get_mapping, get_available_commands
from cmdx.config import Config
from cmdx.engine import translate_command, translate_compound_command, translate_full
from cmdx.env import translate_env_vars
from cmdx.errors import InvalidOs, NotPackageManagerCommand, TranslationError
from cmdx.packages import translate_package_command, translate_package_command_auto
from cmdx.paths import translate_path
from cmdx.platforms import OperatingSystem, PackageManager, detect_os
from cmdx.shell import (
    TranslateShell,
    disable_color,
    print_dim,
    print_error,
    print_header,
    print_info,
    print_warning,
    report_error,
)


def _resolve_os(name: Optional[str], fallback: Optional[OperatingSystem], flag: str) -> OperatingSystem:
    if name:
        parsed = OperatingSystem.parse(name)
        if parsed is None:
            raise InvalidOs(name)
        return parsed
    if fallback is None:
        raise InvalidOs(f"(no {flag} given and none configured)")
    return fallback


def _resolve_pair(args, config: Config):
    from_os = _resolve_os(args.from_os, config.default_from_os(), "--from")
    to_os = _resolve_os(args.to_os, config.default_to_os(), "--to")
    return from_os, to_os


def _print_warnings(warnings):
    for warning in warnings:
        print_warning(f"  ! {warning}", file=sys.stderr)


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------

def cmd_translate(args, config: Config) -> int:
    from_os, to_os = _resolve_pair(args, config)

    if args.command:
        lines = [" ".join(args.command)]
    else:
        lines = [line for line in sys.stdin.read().splitlines() if line.strip()]

    if args.full:
        translate = translate_full
    elif not args.no_compound and config.get("compound", True):
        translate = translate_compound_command
    else:
        translate = translate_command

    as_json = args.json or config.get("json_output", False)
    verbose = args.verbose or config.get("verbose", False)

    status = 0
    for line in lines:
        try:
            result = translate(line, from_os, to_os)
        except TranslationError as e:
            if as_json:
                print(json.dumps({"original": line.strip(), "error": str(e)}))
                status = 1
                continue
            report_error(e, from_os, to_os, file=sys.stderr)
            return 1

        if as_json:
            print(json.dumps(result.to_dict()))
            continue

        print(result.command)
        if verbose:
            print_dim(f"  {result.original}  ({from_os} -> {to_os})")
            _print_warnings(result.warnings)

    return status


def cmd_path(args, config: Config) -> int:
    from_os, to_os = _resolve_pair(args, config)
    result = translate_path(args.path, from_os, to_os)
    print(result.path)
    if args.verbose:
        _print_warnings(result.warnings)
    return 0


def cmd_env(args, config: Config) -> int:
    from_os, to_os = _resolve_pair(args, config)
    print(translate_env_vars(" ".join(args.text), from_os, to_os))
    return 0


def _parse_manager(name: str) -> PackageManager:
    manager = PackageManager.parse(name)
    if manager is None:
        raise NotPackageManagerCommand(name)
    return manager


def cmd_pkg(args, config: Config) -> int:
    command = " ".join(args.command)
    to_pm = _parse_manager(args.to_pm)
    if args.from_pm:
        result = translate_package_command(command, _parse_manager(args.from_pm), to_pm)
    else:
        result = translate_package_command_auto(command, to_pm)
    print(result.command)
    if args.verbose:
        _print_warnings(result.warnings)
        if result.requires_sudo:
            print_dim("  (requires root)")
    return 0


def cmd_list(args, config: Config) -> int:
    from_os, to_os = _resolve_pair(args, config)
    verbs = sorted(set(get_available_commands(from_os, to_os)))
    if not verbs:
        print_warning(f"No command mappings for {from_os} -> {to_os}")
        return 0

    print_header(f"Commands translated {from_os} -> {to_os}:")
    width = max(len(verb) for verb in verbs)
    for verb in verbs:
        mapping = get_mapping(verb, from_os, to_os)
        print(f"  {verb.ljust(width)}  ->  {mapping.target_cmd}")
    print_dim(f"\n{len(verbs)} commands")
    return 0


def cmd_os(args, config: Config) -> int:
    print_header("Supported operating systems:")
    for os_ in OperatingSystem.all():
        notes = []
        if os_.is_unix_like:
            notes.append("Unix-like")
        if os_.is_bsd:
            notes.append("BSD")
        suffix = f"  ({', '.join(notes)})" if notes else ""
        print(f"  {os_}{suffix}")
    return 0


def cmd_detect(args, config: Config) -> int:
    print_info(f"Detected OS: {detect_os()}")
    return 0


def cmd_interactive(args, config: Config) -> int:
    from_os, to_os = _resolve_pair(args, config)
    TranslateShell(from_os, to_os, compound=config.get("compound", True)).run()
    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _add_os_pair(parser: argparse.ArgumentParser):
    parser.add_argument('--from', '-f', dest='from_os', help='Source OS (default: detected or configured)')
    parser.add_argument('--to', '-t', dest='to_os', help='Target OS (default: configured)')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='cmdx',
        description="cmdx - translate shell commands between operating systems",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cmdx translate "dir /w" --from windows --to linux
  cmdx translate "ls -la && clear" -f linux -t windows --verbose
  cmdx path 'C:\\Users\\john' --from windows --to linux
  cmdx env 'echo %USERPROFILE%' --from windows --to linux
  cmdx pkg "sudo apt install -y vim" --to pacman
  cmdx interactive --from windows --to linux
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'cmdx {__version__}'
    )

    parser.add_argument(
        '--config-dir',
        type=str,
        help='Custom configuration directory (default: ~/.cmdx)'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging and tracebacks'
    )

    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable coloured output'
    )

    sub = parser.add_subparsers(dest='subcommand')

    p = sub.add_parser('translate', help='Translate a command (reads stdin when omitted)')
    p.add_argument('command', nargs='*', help='Command to translate')
    _add_os_pair(p)
    p.add_argument('--verbose', '-v', action='store_true', help='Show warnings and notes')
    p.add_argument('--json', action='store_true', help='Print one JSON object per line')
    p.add_argument('--no-compound', action='store_true', help='Translate the whole line as one command, without splitting on && || ; |')
    p.add_argument('--full', action='store_true', help='Also rewrite environment variables')
    p.set_defaults(handler=cmd_translate)

    p = sub.add_parser('path', help='Translate a filesystem path')
    p.add_argument('path')
    _add_os_pair(p)
    p.add_argument('--verbose', '-v', action='store_true')
    p.set_defaults(handler=cmd_path)

    p = sub.add_parser('env', help='Translate environment variable references')
    p.add_argument('text', nargs='+')
    _add_os_pair(p)
    p.set_defaults(handler=cmd_env)

    p = sub.add_parser('pkg', help='Translate a package manager command')
    p.add_argument('command', nargs='+')
    p.add_argument('--from', '-f', dest='from_pm', help='Source package manager (default: detected)')
    p.add_argument('--to', '-t', dest='to_pm', required=True, help='Target package manager')
    p.add_argument('--verbose', '-v', action='store_true')
    p.set_defaults(handler=cmd_pkg)

    p = sub.add_parser('list', help='List translatable commands for an OS pair')
    _add_os_pair(p)
    p.set_defaults(handler=cmd_list)

    p = sub.add_parser('os', help='List supported operating systems')
    p.set_defaults(handler=cmd_os)

    p = sub.add_parser('detect', help='Show the detected operating system')
    p.set_defaults(handler=cmd_detect)

    p = sub.add_parser('interactive', help='Start the interactive translation shell')
    _add_os_pair(p)
    p.set_defaults(handler=cmd_interactive)

    return parser


def main(argv: Optional[List[str]] = None):
    """Main entry point for cmdx."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not getattr(args, 'handler', None):
        parser.print_help()
        sys.exit(0)

    try:
        config = Config(config_dir=args.config_dir)
        if args.no_color or not config.get("color", True):
            disable_color()
        status = args.handler(args, config)
    except TranslationError as e:
        print_error(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\n\nInterrupted. Goodbye!")
        sys.exit(0)
    except Exception as e:
        print(f"\n[Fatal Error] {e}")
        if args.debug:
            import traceback
            traceback.print_exc()
        sys.exit(1)

    sys.exit(status)


if __name__ == '__main__':
    main()
