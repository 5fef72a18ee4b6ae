"""Named-check accumulator and the text sinks it writes to."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import IO, Any, Protocol

import click


class FailureKind(str, Enum):
    """Why a single check failed. Failures are recorded, never raised."""

    STATISTICAL_DEVIATION = "statistical_deviation"
    RANGE_VIOLATION = "range_violation"
    REPRODUCIBILITY_MISMATCH = "reproducibility_mismatch"
    BYTE_RUN_ANOMALY = "byte_run_anomaly"


Value = int | float | str


@dataclass(frozen=True)
class CheckFailure:
    """One failed assertion."""

    check: str
    kind: FailureKind
    message: str
    acquired: Value | None = None
    expected: Value | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "check": self.check,
            "kind": self.kind.value,
            "message": self.message,
            "acquired": self.acquired,
            "expected": self.expected,
        }


class ReportSink(Protocol):
    """Anything that accepts lines of report text."""

    def write(self, line: str) -> None:
        """Emit a single line (without trailing newline)."""
        ...


class EchoSink:
    """Writes lines through ``click.echo`` (stdout unless a file is given)."""

    def __init__(self, file: IO[str] | None = None) -> None:
        self._file = file

    def write(self, line: str) -> None:
        click.echo(line, file=self._file)


@dataclass
class MemorySink:
    """Collects lines in memory."""

    lines: list[str] = field(default_factory=list)

    def write(self, line: str) -> None:
        self.lines.append(line)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def format_value(value: Value) -> str:
    """Render an acquired/expected value the way the report prints it."""
    if isinstance(value, float):
        return f"{value:.6f}"
    return str(value)


class CheckReport:
    """Per-check error counts, a running check total and a failure log.

    Subclasses run the actual checks; this class only accumulates and
    prints their outcome.
    """

    def __init__(self, name: str = "", sink: ReportSink | None = None) -> None:
        self.name = name
        self.sink: ReportSink = sink if sink is not None else EchoSink()
        self.error_counts: dict[str, int] = {}
        self.check_count = 0
        self.failures: list[CheckFailure] = []

    def check(self, n: int = 1) -> None:
        """Count ``n`` evaluated assertions."""
        self.check_count += n

    def record(self, check: str, errors: int) -> None:
        """Store the error count for a named check, replacing any earlier one."""
        self.error_counts[check] = errors

    def emit(self, line: str) -> None:
        self.sink.write(line)

    def emit_error(
        self,
        check: str,
        kind: FailureKind,
        message: str,
        acquired: Value | None = None,
        expected: Value | None = None,
    ) -> CheckFailure:
        """Log a failed assertion to the sink and the failure list.

        With both values present the line reads
        ``<message>: acquired (<a>); expected (<e>)``.
        """
        failure = CheckFailure(check, kind, message, acquired, expected)
        self.failures.append(failure)
        if acquired is not None and expected is not None:
            message = (
                f"{message}: acquired ({format_value(acquired)}); "
                f"expected ({format_value(expected)})"
            )
        elif acquired is not None:
            message = f"{message} with value {format_value(acquired)}"
        self.emit(message)
        return failure

    @property
    def total_errors(self) -> int:
        return sum(self.error_counts.values())

    @property
    def passed(self) -> bool:
        return self.total_errors == 0

    def summary_lines(self) -> list[str]:
        lines = [f"{self.name} Error Report: "]
        for check, errors in self.error_counts.items():
            lines.append(f"\tTest {check}: {errors} errors.")
        lines.append(f"\tTotal number of checks: {self.check_count}")
        lines.append(f"\tTotal number of errors: {self.total_errors}")
        return lines

    def report(self) -> None:
        """Print the summary to the sink."""
        for line in self.summary_lines():
            self.emit(line)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "error_counts": dict(self.error_counts),
            "total_checks": self.check_count,
            "total_errors": self.total_errors,
            "passed": self.passed,
            "failures": [f.to_dict() for f in self.failures],
        }
