"""
Platform model for cmdx.

Closed enumerations for operating systems, Linux distributions and package
managers, with case-insensitive name parsing and the classification
predicates the translators branch on.
"""

import os
import platform
from enum import Enum
from typing import Dict, Optional, Tuple


# ---------------------------------------------------------------------------
# Operating systems
# ---------------------------------------------------------------------------

class OperatingSystem(Enum):
    """Operating systems a command can be translated between."""
    WINDOWS = "Windows"
    LINUX = "Linux"
    MACOS = "macOS"
    FREEBSD = "FreeBSD"
    OPENBSD = "OpenBSD"
    NETBSD = "NetBSD"
    SOLARIS = "Solaris"
    ANDROID = "Android"
    IOS = "iOS"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: str) -> Optional["OperatingSystem"]:
        """
        Parse an OS name or alias (``win``, ``darwin``, ``sunos``...).

        Returns ``None`` when *name* is not recognised.
        """
        return _OS_ALIASES.get((name or "").strip().lower())

    @classmethod
    def all(cls) -> Tuple["OperatingSystem", ...]:
        """All concrete operating systems (``UNKNOWN`` excluded)."""
        return tuple(os_ for os_ in cls if os_ is not cls.UNKNOWN)

    @property
    def is_unix_like(self) -> bool:
        return self in _UNIX_LIKE

    @property
    def is_bsd(self) -> bool:
        return self in _BSD


_OS_ALIASES: Dict[str, OperatingSystem] = {
    "windows": OperatingSystem.WINDOWS,
    "win": OperatingSystem.WINDOWS,
    "win32": OperatingSystem.WINDOWS,
    "win64": OperatingSystem.WINDOWS,
    "linux": OperatingSystem.LINUX,
    "gnu/linux": OperatingSystem.LINUX,
    "macos": OperatingSystem.MACOS,
    "darwin": OperatingSystem.MACOS,
    "osx": OperatingSystem.MACOS,
    "mac": OperatingSystem.MACOS,
    "freebsd": OperatingSystem.FREEBSD,
    "openbsd": OperatingSystem.OPENBSD,
    "netbsd": OperatingSystem.NETBSD,
    "solaris": OperatingSystem.SOLARIS,
    "sunos": OperatingSystem.SOLARIS,
    "android": OperatingSystem.ANDROID,
    "ios": OperatingSystem.IOS,
}

_UNIX_LIKE = frozenset({
    OperatingSystem.LINUX,
    OperatingSystem.MACOS,
    OperatingSystem.FREEBSD,
    OperatingSystem.OPENBSD,
    OperatingSystem.NETBSD,
    OperatingSystem.SOLARIS,
    OperatingSystem.ANDROID,
})

_BSD = frozenset({
    OperatingSystem.FREEBSD,
    OperatingSystem.OPENBSD,
    OperatingSystem.NETBSD,
    OperatingSystem.MACOS,
})


def detect_os() -> OperatingSystem:
    """
    Best-effort detection of the running operating system.

    Only used by the CLI to fill in a default ``--from``; the translators
    themselves always take the OS pair explicitly.
    """
    system = platform.system()
    if system == "Linux" and os.path.exists("/system/build.prop"):
        return OperatingSystem.ANDROID
    return OperatingSystem.parse(system) or OperatingSystem.UNKNOWN


# ---------------------------------------------------------------------------
# Package managers & distributions
# ---------------------------------------------------------------------------

class PackageManager(Enum):
    """Linux package managers."""
    APT = "apt"
    YUM = "yum"
    DNF = "dnf"
    PACMAN = "pacman"
    ZYPPER = "zypper"
    APK = "apk"
    EMERGE = "emerge"
    XBPS = "xbps"
    NIX = "nix"
    GENERIC = "generic"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: str) -> Optional["PackageManager"]:
        """Parse a package manager name or executable alias."""
        return _PM_ALIASES.get((name or "").strip().lower())

    @property
    def command_name(self) -> str:
        """Canonical executable for this package manager."""
        return _PM_COMMANDS[self]


_PM_ALIASES: Dict[str, PackageManager] = {
    "apt": PackageManager.APT,
    "apt-get": PackageManager.APT,
    "aptitude": PackageManager.APT,
    "yum": PackageManager.YUM,
    "dnf": PackageManager.DNF,
    "pacman": PackageManager.PACMAN,
    "zypper": PackageManager.ZYPPER,
    "apk": PackageManager.APK,
    "emerge": PackageManager.EMERGE,
    "portage": PackageManager.EMERGE,
    "xbps": PackageManager.XBPS,
    "xbps-install": PackageManager.XBPS,
    "xbps-remove": PackageManager.XBPS,
    "nix": PackageManager.NIX,
    "nix-env": PackageManager.NIX,
    "generic": PackageManager.GENERIC,
}

_PM_COMMANDS: Dict[PackageManager, str] = {
    PackageManager.APT: "apt",
    PackageManager.YUM: "yum",
    PackageManager.DNF: "dnf",
    PackageManager.PACMAN: "pacman",
    PackageManager.ZYPPER: "zypper",
    PackageManager.APK: "apk",
    PackageManager.EMERGE: "emerge",
    PackageManager.XBPS: "xbps-install",
    PackageManager.NIX: "nix-env",
    PackageManager.GENERIC: "package-manager",
}


class Distro(Enum):
    """Linux distributions, each tied to one primary package manager."""
    DEBIAN = "Debian"
    UBUNTU = "Ubuntu"
    RHEL = "RHEL"
    CENTOS = "CentOS"
    FEDORA = "Fedora"
    ARCH = "Arch"
    MANJARO = "Manjaro"
    OPENSUSE = "openSUSE"
    ALPINE = "Alpine"
    GENTOO = "Gentoo"
    VOID = "Void"
    NIXOS = "NixOS"
    GENERIC = "Generic Linux"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: str) -> Optional["Distro"]:
        """Parse a distribution name (``redhat``, ``archlinux``, ``suse``...)."""
        return _DISTRO_ALIASES.get((name or "").strip().lower())

    @property
    def package_manager(self) -> PackageManager:
        return _DISTRO_PACKAGE_MANAGERS[self]


_DISTRO_ALIASES: Dict[str, Distro] = {
    "debian": Distro.DEBIAN,
    "ubuntu": Distro.UBUNTU,
    "rhel": Distro.RHEL,
    "redhat": Distro.RHEL,
    "red hat": Distro.RHEL,
    "centos": Distro.CENTOS,
    "fedora": Distro.FEDORA,
    "arch": Distro.ARCH,
    "archlinux": Distro.ARCH,
    "manjaro": Distro.MANJARO,
    "opensuse": Distro.OPENSUSE,
    "suse": Distro.OPENSUSE,
    "alpine": Distro.ALPINE,
    "gentoo": Distro.GENTOO,
    "void": Distro.VOID,
    "nixos": Distro.NIXOS,
    "nix": Distro.NIXOS,
    "generic": Distro.GENERIC,
    "linux": Distro.GENERIC,
}

_DISTRO_PACKAGE_MANAGERS: Dict[Distro, PackageManager] = {
    Distro.DEBIAN: PackageManager.APT,
    Distro.UBUNTU: PackageManager.APT,
    Distro.RHEL: PackageManager.YUM,
    Distro.CENTOS: PackageManager.YUM,
    Distro.FEDORA: PackageManager.DNF,
    Distro.ARCH: PackageManager.PACMAN,
    Distro.MANJARO: PackageManager.PACMAN,
    Distro.OPENSUSE: PackageManager.ZYPPER,
    Distro.ALPINE: PackageManager.APK,
    Distro.GENTOO: PackageManager.EMERGE,
    Distro.VOID: PackageManager.XBPS,
    Distro.NIXOS: PackageManager.NIX,
    Distro.GENERIC: PackageManager.GENERIC,
}
