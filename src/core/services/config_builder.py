"""
Config builder — interactive questions that produce the skill configuration.

Every question has a typed default applied on empty input. Sensor menu
answers that are out of range or not a number select the first
detected sensor without asking again, so piped/unattended runs never
stall on the menu.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from src.core.console import Console
from src.core.data.constants import (
    DEFAULT_HIGH_THRESHOLD,
    DEFAULT_LOW_THRESHOLD,
    DEFAULT_SENSOR_ID,
    DEFAULT_SMTP_PORT,
    DEFAULT_SMTP_SERVER,
    DS18B20_FAMILY_PREFIX,
    SMTP_PORT_RANGE,
)
from src.core.models.setup import (
    BusType,
    EmailChannel,
    Notifications,
    Sensor,
    SkillConfiguration,
    TelegramChannel,
    ThresholdConfig,
)

logger = logging.getLogger(__name__)


# ── Sensor ──────────────────────────────────────────────────────


def pick_sensor(sensors: Sequence[Sensor], choice: str) -> Sensor:
    """Resolve a 1-based menu answer; anything invalid means the first sensor."""
    try:
        index = int(choice.strip())
    except ValueError:
        logger.debug("Non-numeric sensor choice %r, using first sensor", choice)
        return sensors[0]
    if 1 <= index <= len(sensors):
        return sensors[index - 1]
    logger.debug("Sensor choice %d out of range, using first sensor", index)
    return sensors[0]


def manual_sensor(sensor_id: str) -> Sensor:
    """A sensor entered by hand (no detection result to back it)."""
    sensor_id = sensor_id.strip() or DEFAULT_SENSOR_ID
    bus = BusType.ONE_WIRE if sensor_id.startswith(DS18B20_FAMILY_PREFIX) else BusType.VIRTUAL
    return Sensor(id=sensor_id, bus=bus)


def select_sensor(console: Console, sensors: Sequence[Sensor]) -> Sensor:
    """Menu over detected sensors, or a free-text id when there are none."""
    if not sensors:
        return manual_sensor(console.prompt("Enter sensor ID", default=DEFAULT_SENSOR_ID))

    console.echo("Detected sensors:")
    for number, sensor in enumerate(sensors, start=1):
        console.echo(f"  {number}. {sensor.id}")
    console.echo()
    choice = console.prompt(f"Select sensor number (1-{len(sensors)})", default="1")
    return pick_sensor(sensors, choice)


# ── Thresholds ──────────────────────────────────────────────────


def collect_thresholds(console: Console, sensor: Sensor) -> ThresholdConfig:
    """High/low thresholds are asked; rate and cooldown keep their defaults."""
    high = console.prompt_float("High temperature threshold (°C)", default=DEFAULT_HIGH_THRESHOLD)
    low = console.prompt_float("Low temperature threshold (°C)", default=DEFAULT_LOW_THRESHOLD)
    if low >= high:
        console.warning(f"Low threshold {low} is not below high threshold {high}")
    return ThresholdConfig(high_threshold=high, low_threshold=low, sensor_id=sensor.id)


# ── Notification channels ───────────────────────────────────────


def collect_email(console: Console) -> EmailChannel | None:
    if not console.confirm("Enable email notifications?", default=True):
        return None
    return EmailChannel(
        smtp_server=console.prompt("SMTP server", default=DEFAULT_SMTP_SERVER),
        smtp_port=console.prompt_int(
            "SMTP port",
            default=DEFAULT_SMTP_PORT,
            min_value=SMTP_PORT_RANGE[0],
            max_value=SMTP_PORT_RANGE[1],
        ),
        username=console.prompt("Email username"),
        password=console.prompt("Email password (will be hidden)", default="", hide_input=True),
        from_email=console.prompt("From email address"),
        to_email=console.prompt("To email address"),
    )


def collect_telegram(console: Console) -> TelegramChannel | None:
    if not console.confirm("Enable Telegram notifications?", default=False):
        return None
    return TelegramChannel(
        bot_token=console.prompt("Telegram bot token"),
        chat_id=console.prompt("Telegram chat ID"),
    )


def collect_notifications(console: Console) -> Notifications:
    console.echo()
    console.echo("Notification setup:")
    console.echo()
    return Notifications(email=collect_email(console), telegram=collect_telegram(console))


# ── Whole document ──────────────────────────────────────────────


def build_configuration(console: Console, sensors: Sequence[Sensor]) -> SkillConfiguration:
    """Ask every configuration question, in the order the file is written."""
    console.echo()
    console.echo("Configuration Questions:")
    console.echo()

    sensor = select_sensor(console, sensors)
    thresholds = collect_thresholds(console, sensor)
    notifications = collect_notifications(console)

    config = SkillConfiguration(config=thresholds, notifications=notifications)
    logger.info(
        "Built configuration for sensor %s (%s), channels: %s",
        sensor.id, sensor.bus, ", ".join(notifications.channels) or "none",
    )
    return config
