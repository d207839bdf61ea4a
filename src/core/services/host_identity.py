"""
Host identity — read os-release and classify the distribution.

An unsupported distribution is only a warning; an unreadable identity
file is fatal because every later path assumption (/boot, /sys) depends
on this being a Debian-family Linux.
"""

from __future__ import annotations

import logging
from pathlib import Path

from src.core.data.constants import SUPPORTED_DISTROS
from src.core.errors import SetupError
from src.core.models.setup import OsIdentity

logger = logging.getLogger(__name__)


def parse_os_release(text: str) -> dict[str, str]:
    """Parse ``KEY=value`` lines, dropping comments and surrounding quotes."""
    fields: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            value = value[1:-1]
        fields[key.strip()] = value
    return fields


def detect_system(os_release: Path) -> OsIdentity:
    """Read and classify the host identity.

    Raises:
        SetupError: If the identity file is missing, not text, or has no ID.
    """
    try:
        text = os_release.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Cannot read %s: %s", os_release, e)
        raise SetupError(f"Cannot detect operating system ({os_release} unreadable)") from e

    fields = parse_os_release(text)
    distro_id = fields.get("ID", "").lower()
    if not distro_id:
        raise SetupError(f"Cannot detect operating system (no ID in {os_release})")

    identity = OsIdentity(
        id=distro_id,
        pretty_name=fields.get("PRETTY_NAME") or fields.get("NAME") or distro_id,
        supported=distro_id in SUPPORTED_DISTROS,
    )
    logger.info("Host identity: %s (supported=%s)", identity.id, identity.supported)
    return identity
