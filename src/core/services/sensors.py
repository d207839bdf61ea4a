"""
Sensor detector — DS18B20 sensors on the 1-Wire bus, plus an I2C census.

The kernel w1 driver exposes each device as a directory under
/sys/bus/w1/devices named ``<family>-<serial>``. Its ``w1_slave`` file
holds two lines, e.g.::

    72 01 4b 46 7f ff 0e 10 57 : crc=57 YES
    72 01 4b 46 7f ff 0e 10 57 t=23125

``YES`` means the CRC check passed (the sensor answered); ``t=`` is the
temperature in millidegrees Celsius.

The I2C scan only counts addresses that answer on the bus. Those are
not turned into Sensor records.
"""

from __future__ import annotations

import logging
import re
import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from src.adapters.registry import AdapterRegistry
from src.core.data.constants import (
    DS18B20_FAMILY_PREFIX,
    I2C_DETECT_COMMAND,
    W1_CRC_OK_TOKEN,
    W1_SLAVE_FILE,
    W1_TEMP_FIELD,
)
from src.core.models.setup import BusType, Sensor

logger = logging.getLogger(__name__)

_I2C_CELL = re.compile(r"^(?:[0-9a-f]{2}|UU)$")


@dataclass
class SensorScan:
    """Everything the detector found."""

    bus_present: bool = False
    sensors: list[Sensor] = field(default_factory=list)
    unresponsive: list[str] = field(default_factory=list)
    i2c_device_count: int | None = None   # None = i2cdetect unavailable

    def to_dict(self) -> dict:
        return {
            "bus_present": self.bus_present,
            "sensors": [s.model_dump(mode="json") for s in self.sensors],
            "unresponsive": self.unresponsive,
            "i2c_device_count": self.i2c_device_count,
        }


# ── 1-Wire ──────────────────────────────────────────────────────


def parse_w1_slave(content: str) -> tuple[bool, float | None]:
    """Parse a ``w1_slave`` status record.

    Returns:
        (responsive, temperature in °C or None when the field is
        missing or malformed)
    """
    tokens = content.split()
    responsive = W1_CRC_OK_TOKEN in tokens
    temperature: float | None = None
    for token in tokens:
        if token.startswith(W1_TEMP_FIELD):
            try:
                temperature = int(token[len(W1_TEMP_FIELD):]) / 1000
            except ValueError:
                logger.debug("Malformed temperature field %r", token)
            break
    return responsive, temperature


def list_w1_devices(w1_devices: Path, prefix: str = DS18B20_FAMILY_PREFIX) -> list[str]:
    """Device ids on the bus matching the family prefix, sorted by name."""
    try:
        return sorted(
            entry.name for entry in w1_devices.iterdir()
            if entry.name.startswith(prefix)
        )
    except OSError as e:
        logger.debug("Cannot list %s: %s", w1_devices, e)
        return []


def read_w1_sensor(w1_devices: Path, device_id: str) -> Sensor | None:
    """Read one sensor. None when it does not answer."""
    status_file = w1_devices / device_id / W1_SLAVE_FILE
    try:
        content = status_file.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug("Cannot read %s: %s", status_file, e)
        return None

    responsive, temperature = parse_w1_slave(content)
    if not responsive:
        return None
    return Sensor(id=device_id, bus=BusType.ONE_WIRE, temperature_c=temperature)


def detect_w1_sensors(w1_devices: Path) -> SensorScan:
    """Enumerate and read every DS18B20 on the bus, in name order."""
    scan = SensorScan()
    if not w1_devices.is_dir():
        logger.info("1-Wire bus directory %s not present", w1_devices)
        return scan

    scan.bus_present = True
    for device_id in list_w1_devices(w1_devices):
        sensor = read_w1_sensor(w1_devices, device_id)
        if sensor is None:
            scan.unresponsive.append(device_id)
        else:
            scan.sensors.append(sensor)

    logger.info(
        "1-Wire scan: %d responsive, %d unresponsive",
        len(scan.sensors), len(scan.unresponsive),
    )
    return scan


# ── I2C ─────────────────────────────────────────────────────────


def count_i2c_addresses(output: str) -> int:
    """Count answering addresses in an ``i2cdetect -y`` grid.

    Skips the column header and the reserved ``00:`` row; row labels
    themselves are never counted.
    """
    count = 0
    for line in output.splitlines():
        if ":" not in line:
            continue
        label, cells = line.split(":", 1)
        if label.strip() == "00":
            continue
        count += sum(1 for cell in cells.split() if _I2C_CELL.match(cell))
    return count


def scan_i2c(
    registry: AdapterRegistry,
    bus: int,
    which: Callable[[str], str | None] = shutil.which,
) -> int | None:
    """Number of I2C devices on ``bus``, or None without i2cdetect."""
    if not which(I2C_DETECT_COMMAND):
        return None
    receipt = registry.run(
        "i2c.detect",
        [I2C_DETECT_COMMAND, "-y", str(bus)],
        description=f"Scan I2C bus {bus}",
    )
    if receipt.failed:
        logger.debug("i2cdetect failed: %s", receipt.error)
        return 0
    return count_i2c_addresses(receipt.output)


def detect_sensors(
    w1_devices: Path,
    registry: AdapterRegistry,
    i2c_bus: int,
    which: Callable[[str], str | None] = shutil.which,
) -> SensorScan:
    """Full detection: 1-Wire sensors plus the I2C device count."""
    scan = detect_w1_sensors(w1_devices)
    scan.i2c_device_count = scan_i2c(registry, i2c_bus, which)
    return scan
