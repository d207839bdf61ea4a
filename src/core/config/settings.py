"""
Setup settings — every filesystem location and switch the wizard uses.

Resolved in precedence order:
    CLI option  >  TAS_* env var  >  built-in default

Tests point these at ``tmp_path`` instead of the real /etc, /boot,
/sys and /proc.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from src.core.data.constants import (
    BOOT_CONFIG_CANDIDATES,
    I2C_BUS_INDEX,
    OS_RELEASE_PATH,
    PROC_MODULES_PATH,
    W1_DEVICES_PATH,
)

logger = logging.getLogger(__name__)

# env var → settings field
_ENV_OVERRIDES: dict[str, str] = {
    "TAS_OS_RELEASE": "os_release",
    "TAS_BOOT_CONFIG": "boot_config",
    "TAS_W1_DEVICES": "w1_devices",
    "TAS_PROC_MODULES": "proc_modules",
    "TAS_HOME": "home",
    "TAS_SKILL_DIR": "skill_dir",
}


class SetupSettings(BaseModel):
    """Locations and switches for one wizard run."""

    os_release: Path = OS_RELEASE_PATH
    boot_config: Path | None = None         # None → auto-detect
    w1_devices: Path = W1_DEVICES_PATH
    proc_modules: Path = PROC_MODULES_PATH
    home: Path = Field(default_factory=Path.home)
    skill_dir: Path = Field(default_factory=Path.cwd)
    i2c_bus: int = I2C_BUS_INDEX
    install_python_deps: bool = True

    @classmethod
    def from_env(cls, **overrides: Any) -> SetupSettings:
        """Build settings from TAS_* env vars, then explicit overrides.

        Overrides whose value is None are ignored so that unset CLI
        options fall through to the environment.
        """
        data: dict[str, Any] = {}
        for env_name, field_name in _ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value:
                data[field_name] = Path(value)
        data.update({k: v for k, v in overrides.items() if v is not None})
        settings = cls.model_validate(data)
        logger.debug("Settings: %s", settings.model_dump(mode="json"))
        return settings

    def resolve_boot_config(self) -> Path:
        """The boot config file to check, auto-detected when not set."""
        if self.boot_config is not None:
            return self.boot_config
        for candidate in BOOT_CONFIG_CANDIDATES:
            if candidate.is_file():
                return candidate
        return BOOT_CONFIG_CANDIDATES[-1]
