"""
Python runtime packages for the skill — best-effort ``pip3 install --user``.

A failed install is not an error: the package may already be present
system-wide, or pip may refuse a user install on an externally managed
environment where the distro package is already there.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from src.adapters.registry import AdapterRegistry
from src.core.data.constants import PIP_PACKAGES, PIP_TIMEOUT

logger = logging.getLogger(__name__)


@dataclass
class PackageInstallResult:
    installed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def install_python_packages(
    registry: AdapterRegistry,
    packages: Sequence[str] = PIP_PACKAGES,
) -> PackageInstallResult:
    """Install each requirement spec one at a time."""
    result = PackageInstallResult()
    for spec in packages:
        receipt = registry.run(
            f"pip.install.{spec}",
            ["pip3", "install", "--user", spec],
            description=f"Install {spec}",
            timeout=PIP_TIMEOUT,
        )
        if receipt.ok:
            result.installed.append(spec)
        else:
            logger.debug("pip3 install %s failed: %s", spec, receipt.error)
            result.failed.append(spec)
    return result
