"""
CLI commands for the installed skill.

Thin wrappers over the claw agent's ``skill`` sub-commands for
temperature-alert. The agent's exit status is passed through.
"""

from __future__ import annotations

import sys

import click

from src.core.services.dependencies import select_agent
from src.core.services.skill_agent import SkillAgent


def _skill_agent(ctx: click.Context) -> SkillAgent:
    agent = select_agent()
    if agent is None:
        click.secho("❌ No claw agent found on PATH (picclaw, nanoclaw, microclaw, moltclaw)", fg="red")
        sys.exit(1)
    return SkillAgent(agent, ctx.obj["registry"])


def _passthrough(ctx: click.Context, subcommand: str) -> None:
    receipt = _skill_agent(ctx).passthrough(subcommand)
    if receipt.output:
        click.echo(receipt.output)
    if receipt.failed:
        if receipt.error:
            click.secho(receipt.error, fg="red", err=True)
        sys.exit(receipt.return_code or 1)


@click.group()
def skill() -> None:
    """Skill — status, logs, config, test (via the claw agent)."""


@skill.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show the skill status reported by the agent."""
    _passthrough(ctx, "status")


@skill.command()
@click.pass_context
def logs(ctx: click.Context) -> None:
    """Show the skill logs."""
    _passthrough(ctx, "logs")


@skill.command("config")
@click.pass_context
def skill_config(ctx: click.Context) -> None:
    """Open the skill configuration through the agent."""
    _passthrough(ctx, "config")


@skill.command("test")
@click.pass_context
def skill_test(ctx: click.Context) -> None:
    """Run the skill's own tests."""
    _passthrough(ctx, "test")
