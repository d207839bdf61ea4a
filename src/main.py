"""
Temperature Alert Setup — CLI entrypoint.

Usage:
    python -m src.main --help
    python -m src.main setup
    python -m src.main check
    python -m src.main detect
    python -m src.main config show
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click
import yaml

from src import __version__
from src.core.observability.logging_config import setup_logging

_PathOption = click.Path(path_type=Path)


@click.group()
@click.version_option(version=__version__, prog_name="talert-setup")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option("--mock", is_flag=True, help="Don't run external commands (agent, sudo, pip).")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    mock: bool,
) -> None:
    """Temperature Alert Setup — install and configure the temperature-alert skill."""
    from src.adapters.registry import default_registry

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["mock"] = mock
    # Tests may inject a registry holding a MockAdapter
    ctx.obj.setdefault("registry", default_registry(mock_mode=mock))

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("TAS_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("TAS_LOG_FILE"),
        log_file_level=os.environ.get("TAS_LOG_FILE_LEVEL"),
        quiet_third_party=not debug,
    )


# ── Setup wizard ────────────────────────────────────────────────


@cli.command()
@click.option("--skill-dir", type=_PathOption, default=None,
              help="Directory holding skill.yaml (default: current directory).")
@click.option("--skip-python-deps", is_flag=True, help="Don't pip-install the skill's Python packages.")
@click.option("--os-release", type=_PathOption, default=None, help="Host identity file.")
@click.option("--boot-config", type=_PathOption, default=None,
              help="Boot config file (default: auto-detect).")
@click.option("--w1-dir", type=_PathOption, default=None, help="1-Wire devices directory.")
@click.option("--home", type=_PathOption, default=None, help="Home directory for the agent config.")
@click.pass_context
def setup(
    ctx: click.Context,
    skill_dir: Path | None,
    skip_python_deps: bool,
    os_release: Path | None,
    boot_config: Path | None,
    w1_dir: Path | None,
    home: Path | None,
) -> None:
    """Run the interactive setup wizard.

    Checks the system and dependencies, enables 1-Wire, detects
    sensors, writes the skill configuration, then installs, tests and
    enables the skill through the claw agent.
    """
    from src.core.config.settings import SetupSettings
    from src.core.errors import SetupError
    from src.core.use_cases.setup import SetupContext, run_setup
    from src.ui.cli.console import ClickConsole

    settings = SetupSettings.from_env(
        skill_dir=skill_dir,
        os_release=os_release,
        boot_config=boot_config,
        w1_devices=w1_dir,
        home=home,
        install_python_deps=False if skip_python_deps else None,
    )
    console = ClickConsole()
    console.banner("Temperature Alert Skill Setup")

    setup_ctx = SetupContext(settings=settings, registry=ctx.obj["registry"])
    try:
        run_setup(setup_ctx, console)
    except SetupError as e:
        console.error(str(e))
        if e.hint:
            console.info(e.hint)
        if setup_ctx.outcome.reboot_required:
            console.warning("A reboot is still required to activate 1-Wire")
        sys.exit(1)


# ── Read-only checks ────────────────────────────────────────────


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--os-release", type=_PathOption, default=None, help="Host identity file.")
def check(as_json: bool, os_release: Path | None) -> None:
    """Check system compatibility and dependencies (changes nothing)."""
    from src.core.config.settings import SetupSettings
    from src.core.use_cases.check import run_check

    settings = SetupSettings.from_env(os_release=os_release)
    result = run_check(settings.os_release)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.os_identity:
        icon = "✅" if result.os_identity.supported else "⚠️ "
        click.echo(f"{icon} {result.os_identity.pretty_name} ({result.os_identity.id})")

    deps = result.dependencies
    if deps:
        for name, path in deps.found.items():
            click.secho(f"   ✓ {name}", fg="green", nl=False)
            click.echo(f"  → {path}")
        for name in deps.missing:
            click.secho(f"   ✗ {name}", fg="red")
        if deps.agent:
            click.echo(f"   Agent: {deps.agent.skill_command} skill ...")

    for warn in result.warnings:
        click.secho(f"⚠️  {warn}", fg="yellow")
    for err in result.errors:
        click.secho(f"❌ {err}", fg="red")

    if not result.ok:
        sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--w1-dir", type=_PathOption, default=None, help="1-Wire devices directory.")
@click.pass_context
def detect(ctx: click.Context, as_json: bool, w1_dir: Path | None) -> None:
    """Detect temperature sensors on the 1-Wire and I2C buses."""
    from src.core.config.settings import SetupSettings
    from src.core.services.sensors import detect_sensors
    from src.core.use_cases.setup import report_scan
    from src.ui.cli.console import ClickConsole

    settings = SetupSettings.from_env(w1_devices=w1_dir)
    scan = detect_sensors(settings.w1_devices, ctx.obj["registry"], settings.i2c_bus)

    if as_json:
        click.echo(json.dumps(scan.to_dict(), indent=2))
        return

    report_scan(scan, ClickConsole())


# ── Generated configuration ─────────────────────────────────────


def _resolve_config_path(path: Path | None, home: Path | None) -> Path:
    from src.core.config.loader import skill_config_path
    from src.core.config.settings import SetupSettings
    from src.core.services.dependencies import select_agent

    if path is not None:
        return path
    agent = select_agent()
    if agent is None:
        click.secho("❌ No claw agent found on PATH, pass --path", fg="red")
        sys.exit(1)
    settings = SetupSettings.from_env(home=home)
    return skill_config_path(settings.home, agent.name)


@cli.group()
def config() -> None:
    """Generated skill configuration commands."""


@config.command("show")
@click.option("--path", "path", type=_PathOption, default=None, help="Config file (default: agent's).")
@click.option("--home", type=_PathOption, default=None, help="Home directory for the agent config.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def config_show(path: Path | None, home: Path | None, as_json: bool) -> None:
    """Print the skill configuration (secrets masked)."""
    from src.core.config.loader import ConfigError, load_skill_config

    config_path = _resolve_config_path(path, home)
    try:
        skill_config = load_skill_config(config_path)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(skill_config.redacted(), indent=2))
        return

    click.secho(f"📄 {config_path}", fg="cyan", bold=True)
    click.echo(yaml.safe_dump(skill_config.redacted(), sort_keys=False, allow_unicode=True))


@config.command("check")
@click.option("--path", "path", type=_PathOption, default=None, help="Config file (default: agent's).")
@click.option("--home", type=_PathOption, default=None, help="Home directory for the agent config.")
def config_check(path: Path | None, home: Path | None) -> None:
    """Validate the skill configuration file."""
    from src.core.config.loader import ConfigError, load_skill_config

    config_path = _resolve_config_path(path, home)
    try:
        skill_config = load_skill_config(config_path)
    except ConfigError as e:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        click.echo(f"   • {e}")
        sys.exit(1)

    click.secho("✅ Configuration is valid", fg="green", bold=True)
    click.echo(f"   Sensor: {skill_config.config.sensor_id} ({skill_config.config.sensor_type})")
    click.echo(
        f"   Thresholds: high {skill_config.config.high_threshold}, "
        f"low {skill_config.config.low_threshold}"
    )
    channels = skill_config.notifications.channels
    click.echo(f"   Channels: {', '.join(channels) if channels else 'none'}")
    if skill_config.config.low_threshold >= skill_config.config.high_threshold:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        click.echo("   • low_threshold is not below high_threshold")


# ── Register sub-command groups from src/ui/cli/ ──────────────────

from src.ui.cli.skill import skill  # noqa: E402

cli.add_command(skill)


if __name__ == "__main__":
    cli()
