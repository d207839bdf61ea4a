"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from src.adapters.mock import MockAdapter
from src.adapters.registry import AdapterRegistry
from src.core.config.settings import SetupSettings
from src.core.console import Console

SENSOR_OK = textwrap.dedent("""\
    72 01 4b 46 7f ff 0e 10 57 : crc=57 YES
    72 01 4b 46 7f ff 0e 10 57 t={millis}
""")

SENSOR_CRC_FAIL = textwrap.dedent("""\
    72 01 4b 46 7f ff 0e 10 57 : crc=00 NO
    72 01 4b 46 7f ff 0e 10 57 t=85000
""")

OS_RELEASE_RASPBIAN = textwrap.dedent("""\
    PRETTY_NAME="Raspbian GNU/Linux 11 (bullseye)"
    NAME="Raspbian GNU/Linux"
    VERSION_ID="11"
    ID=raspbian
    ID_LIKE=debian
""")


class ScriptedConsole(Console):
    """Console double: answers prompts from a list, records every line.

    An exhausted script answers with empty input, which takes the
    default. A required prompt (no default) fed empty input fails the
    test instead of looping. Out-of-range integers are asked again,
    as ``click.IntRange`` does.
    """

    def __init__(self, answers: list[str] | None = None):
        self.answers = list(answers or [])
        self.lines: list[tuple[str, str]] = []
        self.prompts: list[str] = []

    # ── Recording ───────────────────────────────────────────────

    def step(self, message: str) -> None:
        self.lines.append(("step", message))

    def info(self, message: str) -> None:
        self.lines.append(("info", message))

    def warning(self, message: str) -> None:
        self.lines.append(("warning", message))

    def error(self, message: str) -> None:
        self.lines.append(("error", message))

    def echo(self, message: str = "") -> None:
        self.lines.append(("echo", message))

    def messages(self, kind: str) -> list[str]:
        return [msg for k, msg in self.lines if k == kind]

    def text(self) -> str:
        return "\n".join(msg for _, msg in self.lines)

    # ── Prompts ─────────────────────────────────────────────────

    def _next(self, text: str) -> str:
        self.prompts.append(text)
        return self.answers.pop(0) if self.answers else ""

    def prompt(self, text: str, default: str | None = None, hide_input: bool = False) -> str:
        answer = self._next(text).strip()
        if answer:
            return answer
        if default is None:
            raise AssertionError(f"Required prompt {text!r} got empty input")
        return default

    def prompt_float(self, text: str, default: float) -> float:
        answer = self._next(text).strip()
        return float(answer) if answer else default

    def prompt_int(
        self,
        text: str,
        default: int,
        min_value: int | None = None,
        max_value: int | None = None,
    ) -> int:
        while True:
            answer = self._next(text).strip()
            value = int(answer) if answer else default
            if min_value is not None and value < min_value:
                continue
            if max_value is not None and value > max_value:
                continue
            return value

    def confirm(self, text: str, default: bool) -> bool:
        answer = self._next(text).strip().lower()
        if not answer:
            return default
        return answer in ("y", "yes")


@pytest.fixture
def mock_adapter() -> MockAdapter:
    return MockAdapter()


@pytest.fixture
def registry(mock_adapter: MockAdapter) -> AdapterRegistry:
    """Registry routing every command to ``mock_adapter``."""
    return AdapterRegistry(mock_mode=True, mock_adapter=mock_adapter)


@pytest.fixture
def fake_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[..., Path]:
    """Replace PATH with an empty bin dir; call with names to add executables."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", str(bin_dir))

    def add(*names: str) -> Path:
        for name in names:
            exe = bin_dir / name
            exe.write_text("#!/bin/sh\nexit 0\n")
            exe.chmod(0o755)
        return bin_dir

    return add


@pytest.fixture
def w1_bus(tmp_path: Path) -> Callable[[str, str], Path]:
    """1-Wire devices dir; call with (device_id, w1_slave content) to add one."""
    bus = tmp_path / "sys" / "bus" / "w1" / "devices"
    bus.mkdir(parents=True)

    def add(device_id: str, content: str) -> Path:
        device = bus / device_id
        device.mkdir()
        (device / "w1_slave").write_text(content)
        return bus

    add.path = bus  # type: ignore[attr-defined]
    return add


@pytest.fixture
def host(tmp_path: Path, w1_bus) -> SetupSettings:
    """A fake Raspberry Pi: os-release, boot config, /proc/modules, home, skill dir."""
    etc = tmp_path / "etc"
    etc.mkdir()
    (etc / "os-release").write_text(OS_RELEASE_RASPBIAN)

    boot = tmp_path / "boot"
    boot.mkdir()
    (boot / "config.txt").write_text("# Raspberry Pi config\ndtparam=audio=on\n")

    proc = tmp_path / "proc"
    proc.mkdir()
    (proc / "modules").write_text("snd_bcm2835 24576 1 - Live 0x00000000\n")

    home = tmp_path / "home" / "pi"
    home.mkdir(parents=True)

    skill_dir = tmp_path / "skills" / "temperature-alert"
    skill_dir.mkdir(parents=True)
    (skill_dir / "skill.yaml").write_text("name: temperature-alert\n")

    return SetupSettings(
        os_release=etc / "os-release",
        boot_config=boot / "config.txt",
        w1_devices=w1_bus.path,
        proc_modules=proc / "modules",
        home=home,
        skill_dir=skill_dir,
        install_python_deps=False,
    )
