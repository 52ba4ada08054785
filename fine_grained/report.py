"""Read-only snapshots of stopwatch state."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field, NonNegativeInt

from .clock import ns_to_ms


class StopwatchReport(BaseModel):
    """Point-in-time view of a stopwatch: recorded laps and total elapsed time."""

    laps_ns: List[NonNegativeInt] = Field(default_factory=list)
    total_ns: NonNegativeInt = 0
    running: bool = False

    @property
    def number_of_laps(self) -> int:
        return len(self.laps_ns)

    @property
    def total_ms(self) -> float:
        return ns_to_ms(self.total_ns)

    def lines(self) -> List[str]:
        """Human-readable lines, one per lap plus a closing total."""
        out = [f"Round {i}: {lap}ns" for i, lap in enumerate(self.laps_ns)]
        out.append(f"Total time: {self.total_ns}ns")
        return out


def report_dump(report: StopwatchReport) -> Dict[str, Any]:
    """Return a plain ``dict`` of ``report`` suitable for JSON serialisation,
    including the derived ``number_of_laps``.
    """

    data = report.model_dump()
    data["number_of_laps"] = report.number_of_laps
    return data


__all__ = ["StopwatchReport", "report_dump"]
