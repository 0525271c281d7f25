"""
cmdx - Translate shell commands between operating systems.

Rewrites a command, filesystem path, environment-variable reference or
package-manager invocation written for one OS into its equivalent on
another:

- Commands and compound lines (``dir /w && cls`` -> ``ls -C && clear``)
- Paths (``C:\\Users\\john`` -> ``/mnt/c/Users/john``)
- Env vars (``%USERPROFILE%`` -> ``$HOME``)
- Package managers (``apt install vim`` -> ``pacman -S vim``)
"""

__version__ = "0.1.0"
__author__ = "cmdx Contributors"

from cmdx.command_map import (
    CommandMapping,
    FlagMapping,
    get_available_commands,
    get_mapping,
    is_native_command,
    suggest_commands,
)
from cmdx.engine import (
    TranslationResult,
    translate_batch,
    translate_command,
    translate_command_str,
    translate_compound_command,
    translate_full,
    translate_script_extension,
    translate_shebang,
)
from cmdx.env import translate_env_vars, translate_env_vars_batch
from cmdx.errors import (
    CommandNotFound,
    EmptyCommand,
    EmptyPath,
    InvalidOs,
    NotPackageManagerCommand,
    SameOs,
    TranslationError,
    UnsupportedOperation,
)
from cmdx.packages import (
    PackageOperation,
    PackageTranslationResult,
    translate_package_batch,
    translate_package_command,
    translate_package_command_auto,
    translate_package_command_str,
)
from cmdx.paths import (
    PathTranslation,
    is_unix_path,
    is_windows_path,
    translate_path,
    translate_path_auto,
    translate_path_str,
    translate_paths,
)
from cmdx.platforms import Distro, OperatingSystem, PackageManager, detect_os

__all__ = [
    "CommandMapping", "FlagMapping", "get_available_commands", "get_mapping",
    "is_native_command", "suggest_commands",
    "TranslationResult", "translate_batch", "translate_command",
    "translate_command_str", "translate_compound_command", "translate_full",
    "translate_script_extension", "translate_shebang",
    "translate_env_vars", "translate_env_vars_batch",
    "CommandNotFound", "EmptyCommand", "EmptyPath", "InvalidOs",
    "NotPackageManagerCommand", "SameOs", "TranslationError", "UnsupportedOperation",
    "PackageOperation", "PackageTranslationResult", "translate_package_batch",
    "translate_package_command", "translate_package_command_auto",
    "translate_package_command_str",
    "PathTranslation", "is_unix_path", "is_windows_path", "translate_path",
    "translate_path_auto", "translate_path_str", "translate_paths",
    "Distro", "OperatingSystem", "PackageManager", "detect_os",
]
