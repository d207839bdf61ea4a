"""
Setup use case — the wizard pipeline, one stage after another.

    check_system → check_dependencies → enable_interfaces →
    install_python_deps → detect_sensors → configure_skill →
    install_skill → smoke_test_skill → enable_monitoring → offer_reboot

Each stage receives the shared SetupContext, reports through the
Console, and either returns or raises SetupError (fatal). Nothing is
retried and nothing is rolled back: re-running is safe because every
mutating step checks before it writes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from src.adapters.registry import AdapterRegistry
from src.adapters.shell.sudo import is_root, privileged
from src.core.config.loader import save_skill_config, skill_config_path
from src.core.config.settings import SetupSettings
from src.core.console import Console
from src.core.errors import SetupError
from src.core.models.setup import (
    AgentCommand,
    OsIdentity,
    Sensor,
    SetupOutcome,
    SkillConfiguration,
)
from src.core.services.config_builder import build_configuration
from src.core.services.dependencies import DependencyReport, resolve_dependencies
from src.core.services.interfaces import enable_w1_interface
from src.core.services.python_packages import install_python_packages
from src.core.services.sensors import SensorScan, detect_sensors
from src.core.services.skill_agent import PASSTHROUGH_COMMANDS, SkillAgent
from src.core.services.host_identity import detect_system

logger = logging.getLogger(__name__)


@dataclass
class SetupContext:
    """Run state threaded through every stage."""

    settings: SetupSettings
    registry: AdapterRegistry
    os_identity: OsIdentity | None = None
    dependencies: DependencyReport | None = None
    scan: SensorScan | None = None
    configuration: SkillConfiguration | None = None
    config_path: Path | None = None
    outcome: SetupOutcome = field(default_factory=SetupOutcome)

    @property
    def agent(self) -> AgentCommand:
        if self.dependencies is None or self.dependencies.agent is None:
            raise SetupError("No claw agent selected (dependency check has not run)")
        return self.dependencies.agent

    @property
    def sensors(self) -> list[Sensor]:
        return self.scan.sensors if self.scan else []

    def skill_agent(self) -> SkillAgent:
        return SkillAgent(self.agent, self.registry)


Stage = Callable[[SetupContext, Console], None]


# ── 1. System ───────────────────────────────────────────────────


def check_system(ctx: SetupContext, console: Console) -> None:
    console.step("Checking system compatibility...")
    identity = detect_system(ctx.settings.os_release)
    ctx.os_identity = identity
    if identity.supported:
        console.info(f"Detected {identity.pretty_name} - Compatible")
    else:
        console.warning(f"Detected {identity.pretty_name} - May not be fully supported")


# ── 2. Dependencies ─────────────────────────────────────────────


def check_dependencies(ctx: SetupContext, console: Console) -> None:
    console.step("Checking dependencies...")
    report = resolve_dependencies()
    ctx.dependencies = report

    if not report.gpio_available:
        console.warning("gpio utility not found - OK if using USB/I2C sensors or virtual mode")
    if report.agent is not None:
        console.info(f"Found {report.agent.name}")

    if report.missing:
        raise SetupError(
            f"Missing dependencies: {' '.join(report.missing)}",
            details=report.missing,
            hint="Please install missing dependencies and run setup again",
        )

    console.info("All dependencies found")


# ── 3. Interfaces ───────────────────────────────────────────────


def enable_interfaces(ctx: SetupContext, console: Console) -> None:
    console.step("Enabling required interfaces...")
    boot_config = ctx.settings.resolve_boot_config()
    result = enable_w1_interface(boot_config, ctx.settings.proc_modules, ctx.registry)

    if result.already_enabled:
        console.info("1-Wire interface already enabled")
    elif result.directive_added:
        console.info(f"1-Wire interface enabled in {boot_config}")
        console.warning("Reboot required after setup to activate 1-Wire")
        ctx.outcome.reboot_required = True

    if result.modules_loaded:
        console.info(f"Loaded 1-Wire modules: {', '.join(result.modules_loaded)}")

    for warning in result.warnings:
        console.warning(warning)


# ── 4. Python packages ──────────────────────────────────────────


def install_python_deps(ctx: SetupContext, console: Console) -> None:
    if not ctx.settings.install_python_deps:
        logger.info("Skipping Python dependency install")
        return

    console.step("Installing Python dependencies...")
    result = install_python_packages(ctx.registry)
    for spec in result.installed:
        console.info(f"Installed {spec}")
    for spec in result.failed:
        console.warning(f"Failed to install {spec} - may already be installed")


# ── 5. Sensors ──────────────────────────────────────────────────


def detect_sensors_stage(ctx: SetupContext, console: Console) -> None:
    console.step("Detecting temperature sensors...")
    scan = detect_sensors(ctx.settings.w1_devices, ctx.registry, ctx.settings.i2c_bus)
    ctx.scan = scan
    report_scan(scan, console)


def report_scan(scan: SensorScan, console: Console) -> None:
    """Print what the detector found (shared with the ``detect`` command)."""
    if not scan.bus_present:
        console.warning("1-Wire interface not available - check wiring and reboot")
    elif not scan.sensors and not scan.unresponsive:
        console.warning("No DS18B20 sensors detected on 1-Wire bus")
    else:
        total = len(scan.sensors) + len(scan.unresponsive)
        console.info(f"Found {total} DS18B20 sensor(s):")
        for sensor in scan.sensors:
            console.echo(f"  - {sensor.id}")
            console.echo(f"    Temperature: {sensor.temperature_label}")
        for device_id in scan.unresponsive:
            console.echo(f"  - {device_id}")
            console.warning(f"    Sensor {device_id} not responding")

    if scan.i2c_device_count:
        console.info(f"Found {scan.i2c_device_count} I2C device(s) - may include sensors")


# ── 6. Configuration ────────────────────────────────────────────


def configure_skill(ctx: SetupContext, console: Console) -> None:
    console.step("Configuring temperature alert skill...")
    configuration = build_configuration(console, ctx.sensors)
    path = skill_config_path(ctx.settings.home, ctx.agent.name)

    try:
        save_skill_config(configuration, path)
    except OSError as e:
        raise SetupError(f"Cannot write configuration to {path}: {e}") from e

    ctx.configuration = configuration
    ctx.config_path = path
    console.info(f"Configuration saved to {path}")
    if configuration.notifications.channels:
        console.warning("Notification credentials are stored in cleartext in this file")


# ── 7. Delegation to the agent ──────────────────────────────────


def install_skill(ctx: SetupContext, console: Console) -> None:
    console.step("Installing temperature alert skill...")
    agent = ctx.skill_agent()
    skill_dir = ctx.settings.skill_dir

    if not agent.has_manifest(skill_dir):
        raise SetupError(
            f"Skill definition not found at {agent.manifest_path(skill_dir)}",
            hint="Run setup from the skill directory or pass --skill-dir",
        )

    receipt = agent.install(skill_dir)
    _echo_output(receipt.output, console)
    if receipt.failed:
        raise SetupError(
            f"Skill install failed ({ctx.agent.skill_command} skill install): {receipt.error}"
        )

    ctx.outcome.installed = True
    console.info("Skill installed successfully")


def smoke_test_skill(ctx: SetupContext, console: Console) -> None:
    console.step("Testing installation...")
    agent = ctx.skill_agent()

    console.info("Testing sensor reading...")
    receipt = agent.test_sensor()
    _echo_output(receipt.output, console)
    ctx.outcome.sensor_test_passed = receipt.ok
    if receipt.ok:
        console.info("Sensor reading test passed")
    else:
        console.warning("Sensor reading test failed - check sensor connection")

    if console.confirm("Send test notification?", default=True):
        console.info("Sending test notification...")
        receipt = agent.test_notifications()
        _echo_output(receipt.output, console)
        ctx.outcome.notification_test_passed = receipt.ok
        if receipt.ok:
            console.info("Test notification sent successfully")
        else:
            console.warning("Test notification failed - check configuration")


def enable_monitoring(ctx: SetupContext, console: Console) -> None:
    console.step("Enabling temperature monitoring...")
    agent = ctx.skill_agent()

    receipt = agent.enable()
    _echo_output(receipt.output, console)
    if receipt.failed:
        raise SetupError(
            f"Could not enable {agent.skill_name}: {receipt.error}",
            hint=f"Retry with: {agent.hint('enable')}",
        )

    ctx.outcome.enabled = True
    console.info("Temperature monitoring enabled")
    console.echo()
    console.info("Setup complete! Temperature monitoring is now active.")
    console.echo()
    console.echo("Useful commands:")
    labels = {"status": "Check status", "logs": "View logs", "config": "Edit config", "test": "Run tests"}
    for subcommand in PASSTHROUGH_COMMANDS:
        console.echo(f"  {agent.hint(subcommand):<48} # {labels[subcommand]}")
    console.echo()


# ── 8. Reboot ───────────────────────────────────────────────────


def offer_reboot(ctx: SetupContext, console: Console) -> None:
    if not ctx.outcome.reboot_required:
        return

    console.echo()
    console.warning("A reboot is required to complete 1-Wire setup")
    if not console.confirm("Reboot now?", default=False):
        console.warning("Please reboot manually to complete setup")
        return

    console.info("Rebooting system...")
    receipt = ctx.registry.run("system.reboot", privileged(["reboot"]), description="Reboot")
    if receipt.failed:
        hint = "" if is_root() else " (sudo may have refused)"
        console.warning(f"Reboot failed{hint}: {receipt.error}")


# ── Pipeline ────────────────────────────────────────────────────

STAGES: tuple[Stage, ...] = (
    check_system,
    check_dependencies,
    enable_interfaces,
    install_python_deps,
    detect_sensors_stage,
    configure_skill,
    install_skill,
    smoke_test_skill,
    enable_monitoring,
    offer_reboot,
)


def run_setup(ctx: SetupContext, console: Console) -> SetupOutcome:
    """Run every stage in order.

    Raises:
        SetupError: On the first fatal stage; later stages do not run.
    """
    for stage in STAGES:
        logger.debug("Stage: %s", stage.__name__)
        stage(ctx, console)
    return ctx.outcome


def _echo_output(output: str, console: Console) -> None:
    for line in output.splitlines():
        console.echo(f"  {line}")
