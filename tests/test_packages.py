"""
Tests for package-manager command translation.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from cmdx.errors import EmptyCommand, NotPackageManagerCommand, UnsupportedOperation
from cmdx.packages import (
    OPERATION_MAPPINGS,
    PackageOperation,
    PackageTranslationResult,
    detect_operation,
    parse_package_command,
    translate_package_batch,
    translate_package_command,
    translate_package_command_auto,
    translate_package_command_str,
)
from cmdx.platforms import PackageManager

PM = PackageManager
Op = PackageOperation


def test_apt_to_dnf_install():
    result = translate_package_command("apt install vim", PM.APT, PM.DNF)
    assert result.command == "dnf install vim"
    assert result.requires_sudo
    assert result.warnings == ()


def test_sudo_and_flags_translated():
    result = translate_package_command("sudo apt install -y vim git", PM.APT, PM.PACMAN)
    assert result.command == "sudo pacman -S --noconfirm vim git"


def test_sudo_dropped_when_target_does_not_need_it():
    result = translate_package_command("sudo apt search vim", PM.APT, PM.DNF)
    assert result.command == "dnf search vim"
    assert not result.requires_sudo

    result = translate_package_command("sudo apt install vim", PM.APT, PM.NIX)
    assert result.command == "nix-env -i vim"


def test_sudo_not_added_when_absent():
    assert translate_package_command("zypper in vim", PM.ZYPPER, PM.APT).command == "apt install vim"
    assert translate_package_command("sudo zypper in vim", PM.ZYPPER, PM.APT).command == "sudo apt install vim"


def test_unmapped_flag_kept_with_warning():
    result = translate_package_command("apt install --fix-broken vim", PM.APT, PM.DNF)
    assert result.command == "dnf install --fix-broken vim"
    assert result.warnings == (
        "Flag '--fix-broken' has no direct equivalent in dnf for install operation",
    )


def test_flag_mapped_to_nothing_is_dropped():
    result = translate_package_command("pacman -S --asdeps libfoo", PM.PACMAN, PM.APT)
    assert result.command == "apt install libfoo"


@pytest.mark.parametrize("command, expected", [
    ("apt install -yq vim", "dnf install -yq vim"),
    ("apt install -qq vim", "dnf install -qq vim"),
])
def test_combined_short_flags_are_not_split(command, expected):
    result = translate_package_command(command, PM.APT, PM.DNF)
    assert result.command == expected
    flag = command.split()[2]
    assert result.warnings == (
        f"Flag '{flag}' has no direct equivalent in dnf for install operation",
    )


def test_combined_short_flags_never_become_packages():
    result = translate_package_command("sudo apt install -yq vim", PM.APT, PM.PACMAN)
    assert result.command == "sudo pacman -S -yq vim"


def test_flag_value_after_equals():
    assert translate_package_command("pacman -S --asdeps=1 libfoo", PM.PACMAN, PM.APT).command == "apt install libfoo"


def test_verbose_flag_across_rpm_family():
    assert translate_package_command("yum install -v vim", PM.YUM, PM.ZYPPER).command == "zypper install -v vim"


@pytest.mark.parametrize("command, from_pm, to_pm, expected", [
    ("pacman -Syu", PM.PACMAN, PM.APT, "apt upgrade"),
    ("pacman -Sy", PM.PACMAN, PM.APT, "apt update"),
    ("pacman -S --noconfirm vim", PM.PACMAN, PM.APT, "apt install -y vim"),
    ("pacman -Rs vim", PM.PACMAN, PM.APT, "apt remove vim"),
    ("yum update", PM.YUM, PM.APT, "apt upgrade"),
    ("dnf check-update", PM.DNF, PM.APT, "apt update"),
    ("apt-get dist-upgrade", PM.APT, PM.DNF, "dnf upgrade"),
    ("apt show vim", PM.APT, PM.ZYPPER, "zypper info vim"),
    ("apk add curl", PM.APK, PM.APT, "apt install curl"),
    ("emerge vim", PM.EMERGE, PM.APT, "apt install vim"),
    ("emerge --sync", PM.EMERGE, PM.APT, "apt update"),
    ("xbps-remove vim", PM.XBPS, PM.APT, "apt remove vim"),
    ("xbps-install -Su", PM.XBPS, PM.APT, "apt upgrade"),
    ("xbps-install -S", PM.XBPS, PM.APT, "apt update"),
    ("xbps-install -S vim", PM.XBPS, PM.APT, "apt install vim"),
    ("xbps-query -Rs vim", PM.XBPS, PM.APT, "apt search vim"),
    ("nix-env -iA nixpkgs.vim", PM.NIX, PM.APT, "apt install nixpkgs.vim"),
    ("nix search vim", PM.NIX, PM.APT, "apt search vim"),
    ("apt update", PM.APT, PM.EMERGE, "emerge --sync"),
    ("apt upgrade", PM.APT, PM.EMERGE, "emerge --update --deep --with-bdeps=y @world"),
])
def test_operation_translations(command, from_pm, to_pm, expected):
    assert translate_package_command(command, from_pm, to_pm).command == expected


def test_operation_notes_are_reported():
    result = translate_package_command("apt autoremove", PM.APT, PM.PACMAN)
    assert result.command == "pacman -Rs"
    assert result.warnings == ("Removes package with unused dependencies",)

    result = translate_package_command("apt list", PM.APT, PM.EMERGE)
    assert result.command == "qlist -I"
    assert "Requires portage-utils" in result.warnings


def test_manager_mismatch_warning():
    result = translate_package_command("dnf install vim", PM.APT, PM.PACMAN)
    assert result.command == "pacman -S vim"
    assert "Command appears to be for dnf but was specified as apt" in result.warnings


def test_same_manager_passthrough():
    result = translate_package_command("  apt install vim ", PM.APT, PM.APT)
    assert result.command == "apt install vim"
    assert result.warnings == ()


def test_errors():
    with pytest.raises(EmptyCommand):
        translate_package_command("   ", PM.APT, PM.DNF)
    with pytest.raises(NotPackageManagerCommand):
        translate_package_command("brew install vim", PM.APT, PM.DNF)
    with pytest.raises(NotPackageManagerCommand):
        translate_package_command("apt", PM.APT, PM.DNF)
    with pytest.raises(UnsupportedOperation) as exc_info:
        translate_package_command("apt frobnicate vim", PM.APT, PM.DNF)
    assert exc_info.value.operation == "frobnicate"


def test_target_without_operation_is_unsupported():
    with pytest.raises(UnsupportedOperation) as exc_info:
        translate_package_command("apt install vim", PM.APT, PM.GENERIC)
    assert str(exc_info.value) == "Operation 'install' not supported by target package manager"


@pytest.mark.parametrize("manager", [pm for pm in PackageManager if pm is not PackageManager.GENERIC])
def test_every_manager_supports_every_operation(manager):
    for op in PackageOperation:
        assert (manager, op) in OPERATION_MAPPINGS


def test_operation_parsers():
    assert detect_operation(PM.APT, ["purge", "vim"]) == Op.REMOVE
    assert detect_operation(PM.DNF, ["erase", "vim"]) == Op.REMOVE
    assert detect_operation(PM.PACMAN, ["-Ss", "vim"]) == Op.SEARCH
    assert detect_operation(PM.PACMAN, ["-Qi", "vim"]) == Op.INFO
    assert detect_operation(PM.ZYPPER, ["se", "vim"]) == Op.SEARCH
    assert detect_operation(PM.APK, ["cache", "clean"]) == Op.CLEAN
    assert detect_operation(PM.EMERGE, ["--depclean"]) == Op.CLEAN
    assert detect_operation(PM.XBPS, ["-l"], "xbps-query") == Op.LIST
    assert detect_operation(PM.XBPS, ["-o"], "xbps-remove") == Op.AUTOREMOVE
    assert detect_operation(PM.NIX, ["-e", "vim"]) == Op.REMOVE


def test_pacman_clusters_accept_lowercase():
    assert detect_operation(PM.PACMAN, ["-syu"]) == Op.UPGRADE
    assert detect_operation(PM.PACMAN, ["-ss", "vim"]) == Op.SEARCH
    with pytest.raises(UnsupportedOperation):
        detect_operation(PM.PACMAN, ["-Xyz"])


def test_xbps_accepts_lowercase_except_remove_flags():
    assert translate_package_command("xbps-install -s vim", PM.XBPS, PM.APT).command == "apt install vim"
    assert translate_package_command("xbps-install -su", PM.XBPS, PM.APT).command == "apt upgrade"
    assert detect_operation(PM.XBPS, ["-rs", "vim"], "xbps-query") == Op.SEARCH
    assert detect_operation(PM.XBPS, ["-O"], "xbps-remove") == Op.CLEAN
    assert detect_operation(PM.XBPS, ["-o"], "xbps-remove") == Op.AUTOREMOVE


def test_detect_operation_requires_a_token():
    with pytest.raises(NotPackageManagerCommand):
        detect_operation(PM.APT, [])


def test_parse_package_command():
    parsed = parse_package_command("sudo apt-get install -y vim")
    assert parsed.manager == PM.APT
    assert parsed.operation == Op.INSTALL
    assert parsed.args == ["-y", "vim"]
    assert parsed.sudo


def test_auto_detects_source():
    result = translate_package_command_auto("sudo apt-get install curl", PM.DNF)
    assert result.command == "sudo dnf install curl"
    assert result.from_pm == PM.APT


def test_string_entry_point():
    assert translate_package_command_str("apt install vim", "apt", "pacman").command == "pacman -S vim"
    with pytest.raises(NotPackageManagerCommand):
        translate_package_command_str("apt install vim", "apt", "brew")


def test_batch_returns_errors_in_place():
    results = translate_package_batch(["apt install vim", "brew install vim"], PM.APT, PM.DNF)
    assert isinstance(results[0], PackageTranslationResult)
    assert isinstance(results[1], NotPackageManagerCommand)


def test_result_to_dict():
    result = translate_package_command("apt install vim", PM.APT, PM.DNF)
    data = result.to_dict()
    assert data["translated"] == "dnf install vim"
    assert data["from"] == "apt"
    assert data["to"] == "dnf"
    assert data["requires_sudo"] is True
    assert str(result) == "dnf install vim"
