"""
Click console — the terminal implementation of the Console port.

Status lines are tagged and color-coded like the classic installer
scripts ([INFO] green, [WARNING] yellow, [ERROR] red, [STEP] blue).
Colors are cosmetic; click strips them when output is not a TTY.
"""

from __future__ import annotations

import click

from src.core.console import Console

_TAGS: dict[str, tuple[str, str]] = {
    "step": ("[STEP]", "blue"),
    "info": ("[INFO]", "green"),
    "warning": ("[WARNING]", "yellow"),
    "error": ("[ERROR]", "red"),
}


class ClickConsole(Console):
    """Reads answers from stdin with ``click.prompt``/``click.confirm``."""

    def _line(self, kind: str, message: str, err: bool = False) -> None:
        tag, color = _TAGS[kind]
        click.echo(f"{click.style(tag, fg=color, bold=True)} {message}", err=err)

    def step(self, message: str) -> None:
        self._line("step", message)

    def info(self, message: str) -> None:
        self._line("info", message)

    def warning(self, message: str) -> None:
        self._line("warning", message)

    def error(self, message: str) -> None:
        self._line("error", message, err=True)

    def echo(self, message: str = "") -> None:
        click.echo(message)

    def banner(self, title: str) -> None:
        rule = "=" * 32
        click.secho(rule, fg="blue")
        click.secho(title, fg="blue", bold=True)
        click.secho(rule, fg="blue")
        click.echo()

    def prompt(
        self,
        text: str,
        default: str | None = None,
        hide_input: bool = False,
    ) -> str:
        if default is not None:
            value = click.prompt(
                text,
                default=default,
                hide_input=hide_input,
                show_default=bool(default) and not hide_input,
            )
            return str(value).strip()

        # Required answer: click already re-asks on empty input,
        # whitespace-only answers are re-asked here.
        while True:
            value = str(click.prompt(text, hide_input=hide_input)).strip()
            if value:
                return value

    def prompt_float(self, text: str, default: float) -> float:
        return click.prompt(text, default=default, type=float)

    def prompt_int(
        self,
        text: str,
        default: int,
        min_value: int | None = None,
        max_value: int | None = None,
    ) -> int:
        return click.prompt(text, default=default, type=click.IntRange(min_value, max_value))

    def confirm(self, text: str, default: bool) -> bool:
        return click.confirm(text, default=default)
