"""
Dependency resolver — required commands, the claw agent, the GPIO helper.

Read-only checks against PATH. Every unmet requirement is collected so
the user sees the full list in one run, never just the first miss.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from src.core.data.constants import (
    AGENT_COMMANDS,
    AGENT_PLACEHOLDER,
    AGENT_SUBCOMMAND_PREFIX,
    GPIO_COMMAND,
    REQUIRED_COMMANDS,
)
from src.core.models.setup import AgentCommand

logger = logging.getLogger(__name__)

Which = Callable[[str], str | None]


@dataclass
class DependencyReport:
    """What was found on PATH and what is missing."""

    missing: list[str] = field(default_factory=list)
    found: dict[str, str] = field(default_factory=dict)
    agent: AgentCommand | None = None
    gpio_available: bool = False

    @property
    def ok(self) -> bool:
        return not self.missing and self.agent is not None

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "missing": self.missing,
            "found": self.found,
            "agent": self.agent.model_dump() if self.agent else None,
            "gpio_available": self.gpio_available,
        }


def agent_command(name: str) -> AgentCommand:
    """Invocation shape for an agent binary."""
    prefix = [name, *AGENT_SUBCOMMAND_PREFIX.get(name, ())]
    return AgentCommand(name=name, prefix=prefix)


def select_agent(
    agents: Sequence[str] = AGENT_COMMANDS,
    which: Which = shutil.which,
) -> AgentCommand | None:
    """First agent alternative on PATH, in priority order."""
    for name in agents:
        if which(name):
            return agent_command(name)
    return None


def resolve_dependencies(
    required: Sequence[str] = REQUIRED_COMMANDS,
    agents: Sequence[str] = AGENT_COMMANDS,
    which: Which = shutil.which,
) -> DependencyReport:
    """Check every required command and pick an agent.

    Args:
        required: Commands that must ALL be on PATH.
        agents: Alternatives of which ANY one satisfies the agent
            requirement; the first that resolves is selected.
        which: PATH lookup (``shutil.which`` signature).
    """
    report = DependencyReport()

    for cmd in required:
        path = which(cmd)
        if path:
            report.found[cmd] = path
        else:
            report.missing.append(cmd)

    report.agent = select_agent(agents, which)
    if report.agent is None:
        report.missing.append(AGENT_PLACEHOLDER)
    else:
        report.found[report.agent.name] = which(report.agent.name) or report.agent.name

    report.gpio_available = which(GPIO_COMMAND) is not None

    logger.info(
        "Dependencies: missing=%s agent=%s gpio=%s",
        report.missing, report.agent.name if report.agent else None, report.gpio_available,
    )
    return report
