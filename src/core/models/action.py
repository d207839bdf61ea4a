"""
Action and Receipt models — the contract for every external command.

Actions describe a command the wizard wants to run (agent, sudo, pip,
modprobe, i2cdetect). Receipts describe what happened. Adapters turn
one into the other and never raise.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Action(BaseModel):
    """A command to execute through an adapter.

    ``params["argv"]`` carries the argument vector; ``params["input"]``
    optionally feeds stdin.
    """

    id: str                         # e.g. "agent.install", "w1.modprobe"
    adapter: str = "shell"
    description: str = ""
    params: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def command(
        cls,
        action_id: str,
        argv: list[str],
        description: str = "",
        **params: Any,
    ) -> Action:
        """Build a shell action for an argument vector."""
        return cls(
            id=action_id,
            description=description,
            params={"argv": list(argv), **params},
        )

    @property
    def argv(self) -> list[str]:
        return list(self.params.get("argv", []))

    def display(self) -> str:
        """The command line as a user would type it."""
        return " ".join(self.argv)


class Receipt(BaseModel):
    """Result of an adapter execution.

    The adapter NEVER raises — failures are captured here.
    """

    adapter: str
    action_id: str
    status: Literal["ok", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None
    return_code: int | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the command succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the command failed."""
        return self.status == "failed"

    @classmethod
    def success(
        cls,
        adapter: str,
        action_id: str,
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        kwargs.setdefault("return_code", 0)
        return cls(
            adapter=adapter,
            action_id=action_id,
            status="ok",
            output=output,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        adapter: str,
        action_id: str,
        error: str,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(
            adapter=adapter,
            action_id=action_id,
            status="failed",
            error=error,
            **kwargs,
        )
