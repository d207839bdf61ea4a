"""
Tests for CLI commands — setup, check, detect, config, skill, and global options.

Commands receive a mock registry through ``obj`` so nothing real is
executed; PATH is replaced by ``fake_path``.
"""

import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from src.core.config.loader import save_skill_config, skill_config_path
from src.core.models.setup import (
    EmailChannel,
    Notifications,
    SkillConfiguration,
    ThresholdConfig,
)
from src.main import cli
from tests.conftest import SENSOR_OK


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _host_args(host) -> list[str]:
    return [
        "--os-release", str(host.os_release),
        "--boot-config", str(host.boot_config),
        "--w1-dir", str(host.w1_devices),
        "--home", str(host.home),
        "--skill-dir", str(host.skill_dir),
        "--skip-python-deps",
    ]


def _write_config(path: Path) -> None:
    save_skill_config(
        SkillConfiguration(
            config=ThresholdConfig(sensor_id="28-000005e3c1a8"),
            notifications=Notifications(
                email=EmailChannel(username="u", password="secret", from_email="a@x", to_email="b@x"),
            ),
        ),
        path,
    )


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self, runner: CliRunner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "--mock" in result.output

    def test_version(self, runner: CliRunner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "talert-setup" in result.output
        assert "0.1.0" in result.output


# ── setup ───────────────────────────────────────────────────────


class TestSetupCommand:
    def test_full_run(self, runner, host, registry, mock_adapter, fake_path, w1_bus, monkeypatch):
        fake_path("python3", "pip3", "picclaw", "gpio")
        monkeypatch.setenv("TAS_PROC_MODULES", str(host.proc_modules))
        w1_bus("28-000005e3c1a8", SENSOR_OK.format(millis=21875))

        result = runner.invoke(
            cli,
            ["setup", *_host_args(host)],
            input="\n\n\nn\nn\nn\nn\n",
            obj={"registry": registry},
        )

        assert result.exit_code == 0, result.output
        assert "Temperature Alert Skill Setup" in result.output
        assert "[INFO] Found 1 DS18B20 sensor(s):" in result.output
        assert "Setup complete!" in result.output
        assert "Please reboot manually to complete setup" in result.output

        doc = yaml.safe_load(skill_config_path(host.home, "picclaw").read_text())
        assert doc["config"]["sensor_id"] == "28-000005e3c1a8"
        assert not doc["notifications"]
        assert mock_adapter.called("agent.enable")
        assert not mock_adapter.called("pip.install.schedule>=1.2.0")

    def test_missing_dependencies_exit_1(self, runner, host, registry, fake_path):
        fake_path("python3")

        result = runner.invoke(cli, ["setup", *_host_args(host)], obj={"registry": registry})

        assert result.exit_code == 1
        assert "[ERROR] Missing dependencies: pip3 claw-agent" in result.output
        assert "Please install missing dependencies and run setup again" in result.output
        assert "reboot" not in result.output

    def test_agent_enable_failure_exit_1(
        self, runner, host, registry, mock_adapter, fake_path, monkeypatch,
    ):
        fake_path("python3", "pip3", "nanoclaw")
        monkeypatch.setenv("TAS_PROC_MODULES", str(host.proc_modules))
        mock_adapter.set_failure("agent.enable", "skill failed to start")

        result = runner.invoke(
            cli,
            ["setup", *_host_args(host)],
            input="\n\n\nn\nn\nn\n",
            obj={"registry": registry},
        )

        assert result.exit_code == 1
        assert "skill failed to start" in result.output
        assert "nanoclaw skill enable temperature-alert" in result.output
        assert "A reboot is still required to activate 1-Wire" in result.output

    def test_no_reboot_reminder_when_already_enabled(
        self, runner, host, registry, mock_adapter, fake_path, monkeypatch,
    ):
        fake_path("python3", "pip3", "picclaw")
        host.boot_config.write_text("dtoverlay=w1-gpio\n")
        monkeypatch.setenv("TAS_PROC_MODULES", str(host.proc_modules))
        mock_adapter.set_failure("agent.enable", "skill failed to start")

        result = runner.invoke(
            cli,
            ["setup", *_host_args(host)],
            input="\n\n\nn\nn\nn\n",
            obj={"registry": registry},
        )

        assert result.exit_code == 1
        assert "A reboot is still required" not in result.output

    def test_out_of_range_smtp_port_is_asked_again(
        self, runner, host, registry, fake_path, monkeypatch,
    ):
        fake_path("python3", "pip3", "picclaw")
        monkeypatch.setenv("TAS_PROC_MODULES", str(host.proc_modules))
        answers = [
            "",                         # sensor id
            "", "",                     # thresholds
            "y", "smtp.example.com", "70000", "2525",
            "pi-alerts", "app-pass", "pi@example.com", "ops@example.com",
            "n",                        # telegram
            "n",                        # test notification
            "n",                        # reboot
        ]

        result = runner.invoke(
            cli,
            ["setup", *_host_args(host)],
            input="\n".join(answers) + "\n",
            obj={"registry": registry},
        )

        assert result.exit_code == 0, result.output
        assert "not in the range" in result.output
        doc = yaml.safe_load(skill_config_path(host.home, "picclaw").read_text())
        assert doc["notifications"]["email"]["smtp_port"] == 2525


# ── check / detect ──────────────────────────────────────────────


class TestCheckCommand:
    def test_ok_json(self, runner, host, fake_path):
        fake_path("python3", "pip3", "microclaw")

        result = runner.invoke(cli, ["check", "--json", "--os-release", str(host.os_release)])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["os"]["id"] == "raspbian"
        assert data["dependencies"]["agent"]["name"] == "microclaw"
        assert "gpio utility not found" in data["warnings"]

    def test_missing_exit_1(self, runner, host, fake_path):
        fake_path()

        result = runner.invoke(cli, ["check", "--os-release", str(host.os_release)])

        assert result.exit_code == 1
        assert "claw-agent" in result.output

    def test_unreadable_os_release(self, runner, tmp_path, fake_path):
        fake_path("python3", "pip3", "picclaw")
        result = runner.invoke(cli, ["check", "--json", "--os-release", str(tmp_path / "none")])
        assert result.exit_code == 1
        assert json.loads(result.output)["os"] is None


class TestDetectCommand:
    def test_json(self, runner, w1_bus, fake_path, registry):
        fake_path()
        w1_bus("28-000005e3c1a8", SENSOR_OK.format(millis=21875))

        result = runner.invoke(
            cli, ["detect", "--json", "--w1-dir", str(w1_bus.path)], obj={"registry": registry},
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["bus_present"] is True
        assert data["sensors"][0]["temperature_c"] == 21.875
        assert data["i2c_device_count"] is None

    def test_missing_bus(self, runner, tmp_path, fake_path, registry):
        fake_path()
        result = runner.invoke(
            cli, ["detect", "--w1-dir", str(tmp_path / "none")], obj={"registry": registry},
        )
        assert result.exit_code == 0
        assert "1-Wire interface not available" in result.output


# ── config ──────────────────────────────────────────────────────


class TestConfigCommands:
    def test_show_masks_password(self, runner, tmp_path):
        path = tmp_path / "config.yaml"
        _write_config(path)

        result = runner.invoke(cli, ["config", "show", "--path", str(path), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["notifications"]["email"]["password"] == "********"
        assert "secret" not in result.output

    def test_show_default_location(self, runner, tmp_path, fake_path):
        fake_path("picclaw")
        _write_config(skill_config_path(tmp_path, "picclaw"))

        result = runner.invoke(cli, ["config", "show", "--home", str(tmp_path)])

        assert result.exit_code == 0
        assert "28-000005e3c1a8" in result.output

    def test_show_without_agent(self, runner, fake_path):
        fake_path()
        result = runner.invoke(cli, ["config", "show"])
        assert result.exit_code == 1
        assert "No claw agent found" in result.output

    def test_check_valid(self, runner, tmp_path):
        path = tmp_path / "config.yaml"
        _write_config(path)

        result = runner.invoke(cli, ["config", "check", "--path", str(path)])

        assert result.exit_code == 0
        assert "Configuration is valid" in result.output
        assert "Channels: email" in result.output

    def test_check_inverted_thresholds_warns(self, runner, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("config:\n  sensor_id: temp_01\n  high_threshold: 5\n  low_threshold: 10\n")

        result = runner.invoke(cli, ["config", "check", "--path", str(path)])

        assert result.exit_code == 0
        assert "low_threshold is not below high_threshold" in result.output

    def test_check_invalid(self, runner, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("notifications: {}\n")

        result = runner.invoke(cli, ["config", "check", "--path", str(path)])

        assert result.exit_code == 1
        assert "Configuration errors" in result.output


# ── skill passthrough ───────────────────────────────────────────


class TestSkillCommands:
    def test_status(self, runner, fake_path, registry, mock_adapter):
        fake_path("picclaw")
        mock_adapter.set_output("agent.status", "temperature-alert: running")

        result = runner.invoke(cli, ["skill", "status"], obj={"registry": registry})

        assert result.exit_code == 0
        assert "temperature-alert: running" in result.output
        assert mock_adapter.commands == [["picclaw", "skill", "status", "temperature-alert"]]

    def test_moltclaw_prefix(self, runner, fake_path, registry, mock_adapter):
        fake_path("moltclaw")
        runner.invoke(cli, ["skill", "test"], obj={"registry": registry})
        assert mock_adapter.commands == [["moltclaw", "fleet", "skill", "test", "temperature-alert"]]

    def test_exit_code_passthrough(self, runner, fake_path, registry, mock_adapter):
        fake_path("picclaw")
        mock_adapter.set_failure("agent.logs", "no logs yet", return_code=3)

        result = runner.invoke(cli, ["skill", "logs"], obj={"registry": registry})

        assert result.exit_code == 3
        assert "no logs yet" in result.output

    def test_no_agent(self, runner, fake_path, registry):
        fake_path()
        result = runner.invoke(cli, ["skill", "config"], obj={"registry": registry})
        assert result.exit_code == 1
