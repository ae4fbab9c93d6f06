"""Driver configuration.

The engines have no notion of time or limits. Everything a driver
needs to pace or bound a run lives here, validated once at
construction so a bad value fails before the first step.
"""
from __future__ import annotations

from dataclasses import dataclass

DEFAULT_DELAY_MS = 400
MAX_DELAY_MS = 10_000


@dataclass(slots=True)
class DriverConfig:
    """Pacing and bounds for a driver run."""
    delay_ms: int = DEFAULT_DELAY_MS     # pause between auto-play steps
    max_steps: int | None = None         # None = run until finished

    def __post_init__(self) -> None:
        """Validate: 0 <= delay_ms <= MAX_DELAY_MS, max_steps positive."""
        if not 0 <= self.delay_ms <= MAX_DELAY_MS:
            raise ValueError(
                f"delay_ms must be between 0 and {MAX_DELAY_MS}, got {self.delay_ms}"
            )
        if self.max_steps is not None and self.max_steps < 1:
            raise ValueError(f"max_steps must be positive, got {self.max_steps}")

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0
