"""
Fatal setup errors.

Raised by a stage when the run cannot continue (unreadable host
identity, unmet dependencies, missing skill manifest, agent refusing to
install or enable the skill). The CLI prints it and exits with status 1.
Everything else is reported as a warning and the run goes on.
"""

from __future__ import annotations


class SetupError(Exception):
    """A fatal precondition failure. Nothing downstream runs.

    Args:
        message: What failed, naming the file/dependency at fault.
        details: Individual items (e.g. every missing dependency).
        hint: What the user should do next.
    """

    def __init__(
        self,
        message: str,
        details: list[str] | None = None,
        hint: str | None = None,
    ):
        super().__init__(message)
        self.details = details or []
        self.hint = hint
