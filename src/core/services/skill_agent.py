"""
Skill agent — hands the temperature-alert skill to the claw agent.

Thin wrapper over ``<prefix> skill ...``; every call goes through the
adapter registry and comes back as a Receipt.
"""

from __future__ import annotations

import logging
from pathlib import Path

from src.adapters.registry import AdapterRegistry
from src.core.data.constants import SKILL_MANIFEST, SKILL_NAME
from src.core.models.action import Receipt
from src.core.models.setup import AgentCommand

logger = logging.getLogger(__name__)

# Read-only sub-commands exposed as-is by the CLI.
PASSTHROUGH_COMMANDS: tuple[str, ...] = ("status", "logs", "config", "test")


class SkillAgent:
    """Lifecycle commands for one skill on one agent."""

    def __init__(
        self,
        agent: AgentCommand,
        registry: AdapterRegistry,
        skill_name: str = SKILL_NAME,
    ):
        self.agent = agent
        self.registry = registry
        self.skill_name = skill_name

    def manifest_path(self, skill_dir: Path) -> Path:
        return skill_dir / SKILL_MANIFEST

    def has_manifest(self, skill_dir: Path) -> bool:
        return self.manifest_path(skill_dir).is_file()

    def install(self, skill_dir: Path) -> Receipt:
        return self._skill("install", str(skill_dir))

    def test_sensor(self) -> Receipt:
        return self._skill("test", self.skill_name, "--action", "read_sensor")

    def test_notifications(self) -> Receipt:
        return self._skill("run", self.skill_name, "--action", "test_notifications")

    def enable(self) -> Receipt:
        return self._skill("enable", self.skill_name)

    def passthrough(self, subcommand: str) -> Receipt:
        """``status``/``logs``/``config``/``test`` for this skill."""
        if subcommand not in PASSTHROUGH_COMMANDS:
            raise ValueError(f"Unsupported skill command: {subcommand}")
        return self._skill(subcommand, self.skill_name)

    def hint(self, subcommand: str) -> str:
        """Command line a user can run later."""
        return " ".join(self.agent.skill_argv(subcommand, self.skill_name))

    def _skill(self, subcommand: str, *args: str) -> Receipt:
        argv = self.agent.skill_argv(subcommand, *args)
        logger.info("Agent: %s", " ".join(argv))
        return self.registry.run(
            f"agent.{subcommand}",
            argv,
            description=f"{self.agent.name} skill {subcommand}",
        )
