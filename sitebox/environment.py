"""Capability checks for optional external tools."""

from __future__ import annotations

import shutil

# Capability -> executable that provides it
CAPABILITY_COMMANDS: dict[str, str] = {
    "git": "git",
}


def command_exists(command: str) -> bool:
    return shutil.which(command) is not None


def check_capability(capability: str) -> bool:
    """Check whether an optional capability is available on this machine."""
    command = CAPABILITY_COMMANDS.get(capability)
    if command is None:
        return False
    return command_exists(command)


def git_command_exists() -> bool:
    return check_capability("git")
