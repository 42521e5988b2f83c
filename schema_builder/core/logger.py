"""
Build Logger

Console logging and skip audit trail for schema builds.
"""

import json
from pathlib import Path
from typing import Any
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from rich.console import Console


class LogLevel(Enum):
    """Log level for entries."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    SUCCESS = "SUCCESS"


LEVEL_ORDER = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.SUCCESS: 25,
    LogLevel.WARNING: 30,
    LogLevel.ERROR: 40,
}


@dataclass
class SkipEntry:
    """An association or validator left out of the schema."""

    timestamp: str
    model: str
    subject: str                                  # Association or column name
    kind: str                                     # "association" or "validator"
    reason: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "timestamp": self.timestamp,
            "model": self.model,
            "subject": self.subject,
            "kind": self.kind,
            "reason": self.reason,
        }


@dataclass
class BuildSummary:
    """Summary of a schema build."""

    build_name: str
    started_at: datetime
    completed_at: datetime | None = None

    models_built: int = 0
    columns_built: int = 0
    associations_built: int = 0

    models: list[str] = field(default_factory=list)
    skip_summary: dict[str, int] = field(default_factory=dict)  # reason -> count

    @property
    def skipped(self) -> int:
        return sum(self.skip_summary.values())

    @property
    def duration(self) -> str:
        if not self.completed_at:
            return "In progress"
        delta = self.completed_at - self.started_at
        return f"{delta.total_seconds():.2f}s"

    def to_text(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "=" * 60,
            f"SCHEMA BUILD: {self.build_name}",
            "=" * 60,
            f"{'Started:':<20} {self.started_at.strftime('%Y-%m-%d %H:%M:%S')}",
            f"{'Duration:':<20} {self.duration}",
            "",
            "STATISTICS",
            "-" * 40,
            f"{'Models:':<20} {self.models_built:,}",
            f"{'Columns:':<20} {self.columns_built:,}",
            f"{'Associations:':<20} {self.associations_built:,}",
            f"{'Skipped:':<20} {self.skipped:,}",
        ]

        if self.skip_summary:
            lines.extend([
                "",
                "SKIP SUMMARY",
                "-" * 40,
            ])
            for reason, count in sorted(
                self.skip_summary.items(), key=lambda x: (-x[1], x[0])
            ):
                lines.append(f"  {reason}: {count}")

        lines.append("=" * 60)
        return "\n".join(lines)


class BuildLogger:
    """
    Logger for schema builds.

    Features:
    - Levelled console output with Rich (on stderr, so JSON on stdout stays clean)
    - Audit trail of skipped associations and validators
    - Build summary with JSON export

    Example:
        >>> logger = BuildLogger(level="DEBUG")
        >>> logger.start_build("shop")
        >>> logger.log_skip("Comment", "commentable", "association", "polymorphic_target")
        >>> summary = logger.end_build()
    """

    def __init__(
        self,
        level: str = "INFO",
        console_output: bool = True,
        console: Console | None = None,
    ):
        """
        Initialize logger.

        Args:
            level: Minimum level printed to the console
            console_output: Whether to print to console
            console: Optional Rich console (defaults to stderr)
        """
        self.level = LogLevel(level.upper())
        self.console_output = console_output
        self._console = console or Console(stderr=True)

        self._skips: list[SkipEntry] = []
        self._summary: BuildSummary | None = None

    def start_build(self, name: str) -> None:
        """
        Start a new build logging session.

        Args:
            name: Build name/identifier
        """
        self._skips = []
        self._summary = BuildSummary(build_name=name, started_at=datetime.now())
        self._log_message(LogLevel.INFO, f"Starting schema build: {name}")

    def log_model(self, name: str, columns: int, associations: int) -> None:
        """Record a built model schema."""
        if self._summary:
            self._summary.models_built += 1
            self._summary.columns_built += columns
            self._summary.associations_built += associations
            self._summary.models.append(name)

        self._log_message(
            LogLevel.DEBUG,
            f"Built {name}: {columns} columns, {associations} associations"
        )

    def log_skip(self, model: str, subject: str, kind: str, reason: str) -> None:
        """
        Record an association or validator left out of the schema.

        Args:
            model: Model name
            subject: Association or column name
            kind: "association" or "validator"
            reason: Why it was skipped
        """
        self._skips.append(SkipEntry(
            timestamp=datetime.now().isoformat(),
            model=model,
            subject=subject,
            kind=kind,
            reason=reason,
        ))

        if self._summary:
            self._summary.skip_summary[reason] = (
                self._summary.skip_summary.get(reason, 0) + 1
            )

        self._log_message(LogLevel.DEBUG, f"Skipped {kind} {model}.{subject}: {reason}")

    def log_error(self, message: str) -> None:
        """Log an error message."""
        self._log_message(LogLevel.ERROR, message)

    def log_warning(self, message: str) -> None:
        """Log a warning message."""
        self._log_message(LogLevel.WARNING, message)

    def log_info(self, message: str) -> None:
        """Log an info message."""
        self._log_message(LogLevel.INFO, message)

    def log_debug(self, message: str) -> None:
        """Log a debug message."""
        self._log_message(LogLevel.DEBUG, message)

    def end_build(self) -> BuildSummary:
        """
        End the build session.

        Returns:
            Summary report
        """
        if not self._summary:
            raise RuntimeError("No build in progress")

        self._summary.completed_at = datetime.now()
        self._log_message(
            LogLevel.SUCCESS,
            f"Built {self._summary.models_built} models in {self._summary.duration}"
        )
        return self._summary

    def export_json(self, filepath: str | Path) -> Path:
        """
        Export the skip audit trail to a JSON file.

        Args:
            filepath: Output path

        Returns:
            Path to exported file
        """
        output_path = Path(filepath)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "build": self._summary.build_name if self._summary else None,
            "started_at": self._summary.started_at.isoformat() if self._summary else None,
            "completed_at": self._summary.completed_at.isoformat() if self._summary and self._summary.completed_at else None,
            "skipped": [s.to_dict() for s in self._skips],
        }

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        return output_path

    def get_skips(self, model: str | None = None) -> list[SkipEntry]:
        """Get skip entries, optionally for one model."""
        if model is None:
            return list(self._skips)
        return [s for s in self._skips if s.model == model]

    @property
    def summary(self) -> BuildSummary | None:
        return self._summary

    def _log_message(self, level: LogLevel, message: str) -> None:
        """Log a message to console."""
        if not self.console_output or LEVEL_ORDER[level] < LEVEL_ORDER[self.level]:
            return

        timestamp = datetime.now().strftime("%H:%M:%S")
        colors = {
            LogLevel.DEBUG: "dim",
            LogLevel.INFO: "blue",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red bold",
            LogLevel.SUCCESS: "green bold",
        }
        color = colors.get(level, "white")
        self._console.print(f"[dim]{timestamp}[/] [{color}]{level.value}[/] {message}")
