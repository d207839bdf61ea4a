"""
Privilege helpers — prefix commands with sudo when not running as root.
"""

from __future__ import annotations

import os


def is_root() -> bool:
    """Whether the effective user is root."""
    return os.geteuid() == 0


def privileged(argv: list[str]) -> list[str]:
    """``argv`` unchanged for root, ``["sudo", *argv]`` otherwise."""
    if is_root():
        return list(argv)
    return ["sudo", *argv]
