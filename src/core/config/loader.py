"""
Skill configuration loader — reads and writes the agent-side config.yaml.

The file lives at ``<home>/.<agent>/skills/temperature-alert/config.yaml``
and is the contract with the claw agent, so its layout is fixed:
``config`` first, then ``notifications`` (email before telegram).

Credentials are stored in cleartext because the agent reads them
back verbatim. The file mode is restricted to 0600.
"""

from __future__ import annotations

import logging
import tempfile
from datetime import datetime
from pathlib import Path

import yaml

from src.core.data.constants import CONFIG_FILENAME, SKILL_NAME
from src.core.models.setup import SkillConfiguration

logger = logging.getLogger(__name__)

_HEADER = (
    "# Temperature Alert Skill Configuration\n"
    "# Generated by setup on {stamp}\n"
    "\n"
)


class ConfigError(Exception):
    """Raised when the skill configuration is missing or invalid."""


def skill_config_path(home: Path, agent_name: str) -> Path:
    """Location of the skill config for a given agent."""
    return home / f".{agent_name}" / "skills" / SKILL_NAME / CONFIG_FILENAME


def render_skill_config(config: SkillConfiguration, stamp: str | None = None) -> str:
    """Serialize the configuration as the agent expects it."""
    stamp = stamp or datetime.now().strftime("%a %b %d %H:%M:%S %Y")
    body = yaml.safe_dump(
        config.to_document(),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )
    return _HEADER.format(stamp=stamp) + body


def save_skill_config(config: SkillConfiguration, path: Path) -> None:
    """Write the configuration (atomic write, parents created).

    Uses write-to-temp-then-rename so an interrupted run never leaves a
    half-written file for the agent to pick up.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    content = render_skill_config(config)

    _fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=".config_",
        suffix=".tmp",
    )
    tmp = Path(tmp_path)
    try:
        with open(_fd, "w", encoding="utf-8") as f:
            f.write(content)
        tmp.chmod(0o600)
        tmp.replace(path)
    except Exception:
        tmp.unlink(missing_ok=True)
        logger.error("Failed to save skill config to %s", path)
        raise

    logger.info(
        "Skill config saved to %s (channels: %s)",
        path, ", ".join(config.notifications.channels) or "none",
    )


def load_skill_config(path: Path) -> SkillConfiguration:
    """Load and validate a skill configuration file.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading skill config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    if "config" not in data:
        raise ConfigError(f"Missing 'config' section in {path}")

    # An empty "notifications:" key loads as None
    data["notifications"] = data.get("notifications") or {}

    try:
        return SkillConfiguration.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid skill configuration in {path}: {e}") from e
