"""
Interface enabler — turn on the 1-Wire bus for DS18B20 sensors.

Two independent checks:
    1. ``dtoverlay=w1-gpio`` in the boot config (append-only, takes
       effect after a reboot).
    2. ``w1_gpio`` in the loaded kernel modules (modprobe, takes effect
       immediately).

Both are idempotent: a directive already present is never written
again, modules already loaded are never reloaded. Failures are
collected as warnings; nothing here aborts the run.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from src.adapters.registry import AdapterRegistry
from src.adapters.shell.sudo import privileged
from src.core.data.constants import (
    W1_KERNEL_MODULES,
    W1_LOADED_MODULE,
    W1_OVERLAY_DIRECTIVE,
)

logger = logging.getLogger(__name__)


@dataclass
class InterfaceResult:
    """Outcome of enabling the 1-Wire interface."""

    boot_config: Path
    already_enabled: bool = False
    directive_added: bool = False
    modules_already_loaded: bool = False
    modules_loaded: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def reboot_required(self) -> bool:
        return self.directive_added

    def to_dict(self) -> dict:
        return {
            "boot_config": str(self.boot_config),
            "already_enabled": self.already_enabled,
            "directive_added": self.directive_added,
            "reboot_required": self.reboot_required,
            "modules_already_loaded": self.modules_already_loaded,
            "modules_loaded": self.modules_loaded,
            "warnings": self.warnings,
        }


# ── Boot config ─────────────────────────────────────────────────


def read_boot_config(boot_config: Path) -> str:
    """Boot config text, empty when the file does not exist yet.

    Undecodable bytes are replaced; the directive itself is ASCII.

    Raises:
        OSError: If the file exists but cannot be read.
    """
    try:
        return boot_config.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return ""


def has_directive(boot_config: Path, directive: str = W1_OVERLAY_DIRECTIVE) -> bool:
    """Substring pre-check. A missing file counts as absent.

    Raises:
        OSError: If the file exists but cannot be read.
    """
    return directive in read_boot_config(boot_config)


def _can_write(path: Path) -> bool:
    if path.exists():
        return os.access(path, os.W_OK)
    return os.access(path.parent, os.W_OK)


def _needs_leading_newline(path: Path) -> bool:
    try:
        with open(path, "rb") as f:
            f.seek(0, os.SEEK_END)
            if f.tell() == 0:
                return False
            f.seek(-1, os.SEEK_END)
            return f.read(1) != b"\n"
    except OSError:
        return False


def append_directive(
    boot_config: Path,
    registry: AdapterRegistry,
    directive: str = W1_OVERLAY_DIRECTIVE,
) -> str | None:
    """Append ``directive`` on its own line.

    Writes directly when the file is writable, otherwise through
    ``sudo tee -a``.

    Returns:
        None on success, an error message otherwise.
    """
    line = directive + "\n"
    if _needs_leading_newline(boot_config):
        line = "\n" + line

    if _can_write(boot_config):
        try:
            with open(boot_config, "a", encoding="utf-8") as f:
                f.write(line)
        except OSError as e:
            return f"Cannot write {boot_config}: {e}"
        logger.info("Appended %s to %s", directive, boot_config)
        return None

    logger.info("No write access to %s, escalating", boot_config)
    receipt = registry.run(
        "w1.boot_config",
        privileged(["tee", "-a", str(boot_config)]),
        description=f"Append {directive} to {boot_config}",
        input=line,
    )
    if receipt.failed:
        return f"Cannot append {directive} to {boot_config}: {receipt.error}"
    return None


# ── Kernel modules ──────────────────────────────────────────────


def loaded_modules(proc_modules: Path) -> set[str]:
    """Names of loaded kernel modules (first column of /proc/modules)."""
    try:
        text = proc_modules.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug("Cannot read %s: %s", proc_modules, e)
        return set()
    return {line.split()[0] for line in text.splitlines() if line.strip()}


def load_kernel_modules(registry: AdapterRegistry) -> tuple[list[str], list[str]]:
    """modprobe each 1-Wire module.

    Returns:
        (loaded module names, warning messages)
    """
    loaded: list[str] = []
    warnings: list[str] = []
    for module in W1_KERNEL_MODULES:
        receipt = registry.run(
            f"w1.modprobe.{module}",
            privileged(["modprobe", module]),
            description=f"Load kernel module {module}",
        )
        if receipt.ok:
            loaded.append(module)
        else:
            warnings.append(f"Failed to load kernel module {module}: {receipt.error}")
    return loaded, warnings


# ── Stage entry point ───────────────────────────────────────────


def enable_w1_interface(
    boot_config: Path,
    proc_modules: Path,
    registry: AdapterRegistry,
) -> InterfaceResult:
    """Ensure the 1-Wire overlay is configured and its modules are loaded."""
    result = InterfaceResult(boot_config=boot_config)

    try:
        present = has_directive(boot_config)
    except OSError as e:
        # An unreadable file may already hold the directive
        result.warnings.append(
            f"Cannot read {boot_config} ({e}), {W1_OVERLAY_DIRECTIVE} not added"
        )
    else:
        if present:
            result.already_enabled = True
        else:
            error = append_directive(boot_config, registry)
            if error:
                result.warnings.append(error)
            else:
                result.directive_added = True

    if W1_LOADED_MODULE in loaded_modules(proc_modules):
        result.modules_already_loaded = True
    else:
        loaded, warnings = load_kernel_modules(registry)
        result.modules_loaded = loaded
        result.warnings.extend(warnings)

    return result
