"""
Module-level constants for the setup wizard.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

from pathlib import Path

SKILL_NAME = "temperature-alert"
SKILL_MANIFEST = "skill.yaml"
CONFIG_FILENAME = "config.yaml"

# ── Host identity ───────────────────────────────────────────────

OS_RELEASE_PATH = Path("/etc/os-release")
SUPPORTED_DISTROS: frozenset[str] = frozenset({"raspbian", "debian", "ubuntu"})

# ── Dependencies ────────────────────────────────────────────────

REQUIRED_COMMANDS: tuple[str, ...] = ("python3", "pip3")

# Priority order: the first one found on PATH wins.
AGENT_COMMANDS: tuple[str, ...] = ("picclaw", "nanoclaw", "microclaw", "moltclaw")

# moltclaw nests skill management under its "fleet" sub-command.
AGENT_SUBCOMMAND_PREFIX: dict[str, tuple[str, ...]] = {
    "moltclaw": ("fleet",),
}

# Reported in the missing list when no agent alternative resolves.
AGENT_PLACEHOLDER = "claw-agent"

GPIO_COMMAND = "gpio"

# ── 1-Wire interface ────────────────────────────────────────────

W1_OVERLAY_DIRECTIVE = "dtoverlay=w1-gpio"

# Newer Raspberry Pi OS releases moved config.txt under /boot/firmware.
BOOT_CONFIG_CANDIDATES: tuple[Path, ...] = (
    Path("/boot/firmware/config.txt"),
    Path("/boot/config.txt"),
)

PROC_MODULES_PATH = Path("/proc/modules")
W1_LOADED_MODULE = "w1_gpio"
W1_KERNEL_MODULES: tuple[str, ...] = ("w1-gpio", "w1-therm")

# ── Python runtime packages for the skill ───────────────────────

PIP_PACKAGES: tuple[str, ...] = (
    "requests>=2.28.0",
    "PyYAML>=6.0",
    "schedule>=1.2.0",
)

# ── Sensors ─────────────────────────────────────────────────────

W1_DEVICES_PATH = Path("/sys/bus/w1/devices")
DS18B20_FAMILY_PREFIX = "28-"
W1_SLAVE_FILE = "w1_slave"
W1_CRC_OK_TOKEN = "YES"
W1_TEMP_FIELD = "t="

I2C_DETECT_COMMAND = "i2cdetect"
I2C_BUS_INDEX = 1

# ── Configuration defaults ──────────────────────────────────────

DEFAULT_SENSOR_ID = "temp_01"
DEFAULT_SENSOR_TYPE = "DS18B20"
DEFAULT_HIGH_THRESHOLD = 35.0
DEFAULT_LOW_THRESHOLD = 5.0
DEFAULT_RATE_THRESHOLD = 5.0
DEFAULT_COOLDOWN_MINUTES = 15
DEFAULT_SMTP_SERVER = "smtp.gmail.com"
DEFAULT_SMTP_PORT = 587
SMTP_PORT_RANGE: tuple[int, int] = (1, 65535)

# ── Timeouts (seconds) ──────────────────────────────────────────

COMMAND_TIMEOUT = 300
PIP_TIMEOUT = 600
