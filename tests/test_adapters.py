"""
Tests for adapter protocol, registry, mock, and shell adapters.
"""

import sys

from src.adapters.base import ExecutionContext
from src.adapters.mock import MockAdapter
from src.adapters.registry import AdapterRegistry, default_registry
from src.adapters.shell import sudo
from src.adapters.shell.command import ShellCommandAdapter
from src.core.models.action import Action, Receipt

# ── Mock Adapter Tests ───────────────────────────────────────────────


class TestMockAdapter:
    def test_default_success(self):
        mock = MockAdapter(adapter_name="test-mock")
        ctx = ExecutionContext(action=Action.command("op-1", ["true"]))
        receipt = mock.execute(ctx)
        assert receipt.ok
        assert mock.call_count == 1
        assert mock.commands == [["true"]]

    def test_set_output(self):
        mock = MockAdapter()
        mock.set_output("i2c.detect", "00: --")
        receipt = mock.execute(ExecutionContext(action=Action(id="i2c.detect")))
        assert receipt.ok
        assert receipt.output == "00: --"

    def test_set_failure(self):
        mock = MockAdapter()
        mock.set_failure("op-fail", error="Intentional failure", return_code=3)
        receipt = mock.execute(ExecutionContext(action=Action(id="op-fail")))
        assert receipt.failed
        assert receipt.error == "Intentional failure"
        assert receipt.return_code == 3


# ── Registry Tests ───────────────────────────────────────────────────


class TestAdapterRegistry:
    def test_register_and_get(self):
        reg = AdapterRegistry()
        shell = ShellCommandAdapter()
        reg.register(shell)
        assert reg.get("shell") is shell
        assert reg.get("mock") is None

    def test_unknown_adapter_fails(self):
        receipt = AdapterRegistry().run("x", ["true"])
        assert receipt.failed
        assert "No adapter registered" in receipt.error

    def test_mock_mode_without_adapter(self):
        reg = AdapterRegistry(mock_mode=True)
        receipt = reg.run("agent.enable", ["picclaw", "skill", "enable", "temperature-alert"])
        assert receipt.ok
        assert receipt.metadata["mock"] is True
        assert "picclaw skill enable" in receipt.output

    def test_mock_mode_routes_to_mock(self, registry, mock_adapter):
        registry.run("w1.modprobe.w1-gpio", ["modprobe", "w1-gpio"])
        assert mock_adapter.called("w1.modprobe.w1-gpio")

    def test_validation_failure(self):
        reg = default_registry()
        receipt = reg.execute_action(Action(id="empty", params={}))
        assert receipt.failed
        assert "argv" in receipt.error


# ── Shell Adapter Tests ──────────────────────────────────────────────


class TestShellCommandAdapter:
    def _run(self, argv, **params) -> Receipt:
        return default_registry().run("test", argv, **params)

    def test_success_captures_stdout(self):
        receipt = self._run([sys.executable, "-c", "print('hello')"])
        assert receipt.ok
        assert receipt.output == "hello"
        assert receipt.return_code == 0

    def test_nonzero_exit(self):
        receipt = self._run([sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(4)"])
        assert receipt.failed
        assert receipt.error == "boom"
        assert receipt.return_code == 4

    def test_stdin_input(self):
        receipt = self._run(
            [sys.executable, "-c", "import sys; print(sys.stdin.read().upper())"],
            input="dtoverlay=w1-gpio\n",
        )
        assert receipt.output == "DTOVERLAY=W1-GPIO"

    def test_command_not_found(self):
        receipt = self._run(["definitely-not-a-real-command-xyz"])
        assert receipt.failed
        assert receipt.return_code == 127
        assert "Command not found" in receipt.error

    def test_timeout(self):
        receipt = self._run([sys.executable, "-c", "import time; time.sleep(5)"], timeout=0.2)
        assert receipt.failed
        assert "timed out" in receipt.error

    def test_missing_cwd_is_invalid(self, tmp_path):
        receipt = self._run(["true"], cwd=str(tmp_path / "nope"))
        assert receipt.failed
        assert "Working directory does not exist" in receipt.error


# ── Privilege Helper Tests ───────────────────────────────────────────


class TestPrivileged:
    def test_root_runs_directly(self, monkeypatch):
        monkeypatch.setattr(sudo, "is_root", lambda: True)
        assert sudo.privileged(["modprobe", "w1-gpio"]) == ["modprobe", "w1-gpio"]

    def test_user_goes_through_sudo(self, monkeypatch):
        monkeypatch.setattr(sudo, "is_root", lambda: False)
        assert sudo.privileged(["reboot"]) == ["sudo", "reboot"]
