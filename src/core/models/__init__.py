"""
Domain models — Pydantic types for the setup wizard.

All models are re-exported here for convenient access:

    from src.core.models import Action, Receipt, Sensor, SkillConfiguration
"""

from src.core.models.action import Action, Receipt
from src.core.models.setup import (
    AgentCommand,
    BusType,
    EmailChannel,
    Notifications,
    OsIdentity,
    Sensor,
    SetupOutcome,
    SkillConfiguration,
    TelegramChannel,
    ThresholdConfig,
)

__all__ = [
    # action.py
    "Action",
    "Receipt",
    # setup.py
    "AgentCommand",
    "BusType",
    "EmailChannel",
    "Notifications",
    "OsIdentity",
    "Sensor",
    "SetupOutcome",
    "SkillConfiguration",
    "TelegramChannel",
    "ThresholdConfig",
]
