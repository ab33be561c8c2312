"""Ordered compensations for multi-system operations.

Steps register an undo action once they complete. On failure the recorded
actions run newest first; each one is attempted and logged on its own, and
a failing undo never hides the error that started the rollback.
"""

from collections.abc import Awaitable, Callable

import logfire
from pydantic import BaseModel

Compensation = Callable[[], Awaitable[object]]


class CompensationOutcome(BaseModel):
    """Result of undoing one completed step."""

    step: str
    succeeded: bool
    error: str | None = None


class Saga:
    """Records completed steps and undoes them in reverse order."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._completed: list[tuple[str, Compensation]] = []

    @property
    def completed_steps(self) -> list[str]:
        return [step for step, _ in self._completed]

    def record(self, step: str, compensation: Compensation) -> None:
        """Register the undo action of a step that just succeeded."""
        self._completed.append((step, compensation))

    async def compensate(self) -> list[CompensationOutcome]:
        """Undo every recorded step, newest first, best effort.

        Returns:
            One outcome per recorded step, in the order they were undone
        """
        outcomes: list[CompensationOutcome] = []
        with logfire.span(
            "saga.compensate", saga=self.name, steps=self.completed_steps
        ):
            for step, compensation in reversed(self._completed):
                try:
                    await compensation()
                except Exception as e:
                    logfire.error(
                        "Compensation failed",
                        saga=self.name,
                        step=step,
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    outcomes.append(
                        CompensationOutcome(step=step, succeeded=False, error=str(e))
                    )
                else:
                    logfire.info("Compensation succeeded", saga=self.name, step=step)
                    outcomes.append(CompensationOutcome(step=step, succeeded=True))

        self._completed.clear()
        return outcomes
