"""
Setup domain models — host identity, agent, sensors, skill configuration.

The skill configuration models mirror the YAML document consumed by
the claw agent, field for field and in the same order.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from src.core.data.constants import (
    DEFAULT_COOLDOWN_MINUTES,
    DEFAULT_HIGH_THRESHOLD,
    DEFAULT_LOW_THRESHOLD,
    DEFAULT_RATE_THRESHOLD,
    DEFAULT_SENSOR_TYPE,
    DEFAULT_SMTP_PORT,
    DEFAULT_SMTP_SERVER,
    SMTP_PORT_RANGE,
)


class OsIdentity(BaseModel):
    """Distribution identity read from os-release."""

    id: str
    pretty_name: str = ""
    supported: bool = False


class AgentCommand(BaseModel):
    """The claw agent selected on PATH and how to invoke its skill commands."""

    name: str
    prefix: list[str] = Field(default_factory=list)

    def skill_argv(self, *args: str) -> list[str]:
        """Argument vector for ``<prefix> skill <args...>``."""
        return [*self.prefix, "skill", *args]

    @property
    def skill_command(self) -> str:
        return " ".join(self.prefix)


class BusType(StrEnum):
    """Where a sensor is attached."""

    ONE_WIRE = "1-wire"
    I2C = "i2c"
    VIRTUAL = "virtual"


class Sensor(BaseModel):
    """A sensor found during detection (or entered by hand)."""

    model_config = {"frozen": True}

    id: str
    bus: BusType = BusType.ONE_WIRE
    temperature_c: float | None = None   # None = not available

    @property
    def temperature_label(self) -> str:
        if self.temperature_c is None:
            return "N/A"
        return f"{self.temperature_c:.3f}°C"


# ── Skill configuration document ────────────────────────────────


class ThresholdConfig(BaseModel):
    """The ``config`` block."""

    high_threshold: float = DEFAULT_HIGH_THRESHOLD
    low_threshold: float = DEFAULT_LOW_THRESHOLD
    rate_threshold: float = DEFAULT_RATE_THRESHOLD
    cooldown_minutes: int = DEFAULT_COOLDOWN_MINUTES
    sensor_id: str = Field(min_length=1)
    sensor_type: str = DEFAULT_SENSOR_TYPE


class EmailChannel(BaseModel):
    """``notifications.email`` — password may be empty, nothing else."""

    enabled: bool = True
    smtp_server: str = Field(default=DEFAULT_SMTP_SERVER, min_length=1)
    smtp_port: int = Field(
        default=DEFAULT_SMTP_PORT, ge=SMTP_PORT_RANGE[0], le=SMTP_PORT_RANGE[1],
    )
    username: str = Field(min_length=1)
    password: str = ""
    from_email: str = Field(min_length=1)
    to_email: str = Field(min_length=1)


class TelegramChannel(BaseModel):
    """``notifications.telegram``."""

    enabled: bool = True
    bot_token: str = Field(min_length=1)
    chat_id: str = Field(min_length=1)


class Notifications(BaseModel):
    """The two known channel kinds. A channel is present only if enabled."""

    model_config = {"extra": "forbid"}

    email: EmailChannel | None = None
    telegram: TelegramChannel | None = None

    @property
    def channels(self) -> list[str]:
        return [name for name in ("email", "telegram") if getattr(self, name) is not None]


class SkillConfiguration(BaseModel):
    """The whole ``config.yaml`` written for the skill."""

    config: ThresholdConfig
    notifications: Notifications = Field(default_factory=Notifications)

    def to_document(self) -> dict[str, Any]:
        """Plain mapping in serialization order: config, notifications, email, telegram."""
        notifications: dict[str, Any] = {}
        if self.notifications.email is not None:
            notifications["email"] = self.notifications.email.model_dump()
        if self.notifications.telegram is not None:
            notifications["telegram"] = self.notifications.telegram.model_dump()
        return {
            "config": self.config.model_dump(mode="json"),
            "notifications": notifications,
        }

    def redacted(self) -> dict[str, Any]:
        """Document with secrets masked, for display."""
        doc = self.to_document()
        email = doc["notifications"].get("email")
        if email and email.get("password"):
            email["password"] = "********"
        telegram = doc["notifications"].get("telegram")
        if telegram:
            token = telegram["bot_token"]
            telegram["bot_token"] = f"{token[:4]}…" if len(token) > 4 else "****"
        return doc


# ── Run outcome ─────────────────────────────────────────────────


class SetupOutcome(BaseModel):
    """Flags accumulated across stages, read at the end of the run."""

    reboot_required: bool = False
    sensor_test_passed: bool | None = None         # None = not run
    notification_test_passed: bool | None = None   # None = not run
    installed: bool = False
    enabled: bool = False
