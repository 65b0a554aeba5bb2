"""
Checks that yt-dlp and ffmpeg are on PATH and, with the user's consent,
installs whatever is missing through the platform's package manager.
"""

import logging
import platform
import shutil
from typing import Callable, Iterable

from slycer.core.display import DisplaySink
from slycer.core.runner import run_streaming_lines
from slycer.exceptions import DependencyError, SlycerError
from slycer.models.media import CommandSpec

log = logging.getLogger(__name__)

REQUIRED_BINARIES = ("yt-dlp", "ffmpeg")

INSTALLER_CANDIDATES = {
    "Darwin": ("brew",),
    "Linux": ("apt-get", "dnf", "yum", "pacman", "zypper", "apk"),
    "Windows": ("winget", "choco", "scoop"),
}

WINGET_IDS = {"ffmpeg": "Gyan.FFmpeg", "yt-dlp": "yt-dlp.yt-dlp"}

AFFIRMATIVE_ANSWERS = {"y", "yes", "д", "да"}

ConfirmCallback = Callable[[str], bool]


def locate_binaries(
    binaries: Iterable[str] = REQUIRED_BINARIES,
) -> dict[str, str | None]:
    """Maps each binary to its resolved path, or None when it is not on PATH."""
    return {name: shutil.which(name) for name in binaries}


def find_missing(binaries: Iterable[str] = REQUIRED_BINARIES) -> list[str]:
    """Returns the binaries that cannot be found on PATH."""
    return [name for name, path in locate_binaries(binaries).items() if path is None]


def is_affirmative(answer: str) -> bool:
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS


def choose_installer(system: str | None = None) -> str | None:
    """Picks the first available package manager for the given OS."""
    candidates = INSTALLER_CANDIDATES.get(system or platform.system(), ())
    for name in candidates:
        if shutil.which(name):
            return name
    return None


def installer_commands(installer: str, missing: list[str]) -> list[CommandSpec]:
    """
    Builds the install command(s) for `installer`, keeping each package
    manager to the smallest footprint it allows.

    Raises:
        DependencyError: If `installer` is not a supported package manager.
    """
    if installer == "brew":
        return [
            CommandSpec(
                "brew",
                ["install", "--formula", *missing],
                env={
                    "HOMEBREW_NO_AUTO_UPDATE": "1",
                    "HOMEBREW_NO_INSTALL_CLEANUP": "1",
                    "HOMEBREW_NO_ANALYTICS": "1",
                },
            )
        ]
    if installer == "apt-get":
        return [
            CommandSpec("sudo", ["-n", "apt-get", "update"]),
            CommandSpec(
                "sudo",
                [
                    "-n",
                    "apt-get",
                    "install",
                    "-y",
                    "--no-install-recommends",
                    "--no-upgrade",
                    *missing,
                ],
            ),
        ]
    if installer == "dnf":
        return [
            CommandSpec(
                "sudo",
                ["-n", "dnf", "install", "-y", "--setopt=install_weak_deps=False"]
                + missing,
            )
        ]
    if installer == "yum":
        return [CommandSpec("sudo", ["-n", "yum", "install", "-y", *missing])]
    if installer == "pacman":
        return [
            CommandSpec(
                "sudo", ["-n", "pacman", "-S", "--noconfirm", "--needed", *missing]
            )
        ]
    if installer == "zypper":
        return [
            CommandSpec(
                "sudo", ["-n", "zypper", "install", "-y", "--no-recommends", *missing]
            )
        ]
    if installer == "apk":
        return [CommandSpec("sudo", ["-n", "apk", "add", "--no-cache", *missing])]
    if installer == "winget":
        return [
            CommandSpec(
                "winget",
                [
                    "install",
                    "--silent",
                    "--accept-package-agreements",
                    "--accept-source-agreements",
                    "--exact",
                    *[WINGET_IDS.get(name, name) for name in missing],
                ],
            )
        ]
    if installer == "choco":
        return [CommandSpec("choco", ["install", "-y", "--no-progress", *missing])]
    if installer == "scoop":
        return [CommandSpec("scoop", ["install", *missing])]
    raise DependencyError(f"Unsupported installer: {installer}")


def install_missing(
    missing: list[str], spinner: DisplaySink, system: str | None = None
) -> None:
    """
    Installs `missing` with the detected package manager, streaming its output
    above `spinner`.

    Raises:
        DependencyError: If no package manager is found or the install fails.
    """
    installer = choose_installer(system)
    if installer is None:
        spinner.finish_with_message("Auto-install is unavailable")
        raise DependencyError(
            f"Cannot determine package manager. Install manually: {', '.join(missing)}"
        )

    log.debug(f"Installing {', '.join(missing)} with {installer}")
    try:
        for spec in installer_commands(installer, missing):
            run_streaming_lines(spec, spinner)
    except SlycerError as e:
        spinner.finish_with_message("Auto-install failed")
        raise DependencyError(
            f"Failed to install: {', '.join(missing)}. "
            "Install manually via package manager"
        ) from e
    spinner.finish_with_message("Dependencies installed")


def ensure_binaries_present(
    auto_yes: bool,
    confirm: ConfirmCallback,
    spinner_factory: Callable[[str], DisplaySink],
    binaries: Iterable[str] = REQUIRED_BINARIES,
) -> None:
    """
    Makes sure every required binary is available, installing the missing
    ones when the user agrees (or `auto_yes` is set).

    Raises:
        DependencyError: If the user declines or a binary is still missing
            after installation.
    """
    missing = find_missing(binaries)
    if not missing:
        return

    msg_list = ", ".join(missing)
    if not auto_yes and not confirm(
        f"Missing binaries: {msg_list}. Install automatically? [y/N]: "
    ):
        raise DependencyError(
            f"Required: {msg_list}. Install manually or run with --yes for auto-install"
        )

    install_missing(missing, spinner_factory("Installing dependencies"))

    if still_missing := find_missing(missing):
        raise DependencyError(
            f"Binary '{still_missing[0]}' not found after installation"
        )
