# errors.py
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class PluginError(Exception):
    """
    Structured plugin error with enough context for:
      - clean CLI output
      - debugging without full tracebacks
    """
    kind: str
    target: str
    message: str
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        lines = [f"{self.kind}: {self.message}", f"target={self.target}"]
        for k, v in self.details.items():
            lines.append(f"{k}={v}")
        return "\n".join(lines)


@dataclass
class MarkupError(PluginError):
    """A job definition that cannot be rendered (caller configuration bug)."""


@dataclass
class CompileError(PluginError):
    """A failed compiler precondition or a failed compiler run."""

    @property
    def exit_code(self) -> int | None:
        return self.details.get("exit_code")
