"""
Check use case — host identity and dependencies, without changing anything.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from src.core.errors import SetupError
from src.core.models.setup import OsIdentity
from src.core.services.dependencies import DependencyReport, resolve_dependencies
from src.core.services.host_identity import detect_system


@dataclass
class CheckResult:
    """Result of the read-only preflight."""

    os_identity: OsIdentity | None = None
    dependencies: DependencyReport | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "os": self.os_identity.model_dump() if self.os_identity else None,
            "dependencies": self.dependencies.to_dict() if self.dependencies else None,
            "errors": self.errors,
            "warnings": self.warnings,
        }


def run_check(os_release: Path) -> CheckResult:
    """Probe the system and resolve dependencies; collect, never raise."""
    result = CheckResult()

    try:
        result.os_identity = detect_system(os_release)
    except SetupError as e:
        result.errors.append(str(e))
        return result

    if not result.os_identity.supported:
        result.warnings.append(
            f"{result.os_identity.pretty_name} may not be fully supported"
        )

    report = resolve_dependencies()
    result.dependencies = report
    if report.missing:
        result.errors.append(f"Missing dependencies: {' '.join(report.missing)}")
    if not report.gpio_available:
        result.warnings.append("gpio utility not found")

    return result
