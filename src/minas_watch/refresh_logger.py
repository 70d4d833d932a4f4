"""Refresh logger for recording each refresh cycle's stages to JSON files."""

import dataclasses
import enum
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from minas_watch.data import FeedConfig, FeedError, FetchReport, Item, Snapshot


class StageRecord(BaseModel):
    """Record of a single refresh stage."""

    stage: str
    component: str
    input: Any = None
    output: Any = None
    timestamp: str = ""
    duration_seconds: float = 0.0


class CycleRecord(BaseModel):
    """Record of a complete refresh cycle."""

    cycle_id: str
    trigger: str
    started_at: str
    completed_at: str | None = None
    stages: list[StageRecord] = []
    published_count: int = 0
    error_count: int = 0
    changed: bool = False


def _serialize(obj: Any) -> Any:
    """Serialize an object to JSON-compatible format.

    Handles the pipeline's dataclasses (using their external dict shape),
    other dataclasses, Pydantic models, lists, tuples, dicts and primitives.
    """
    if obj is None:
        return None
    if isinstance(obj, FeedConfig | FeedError | Item | Snapshot):
        return obj.to_dict()
    if isinstance(obj, FetchReport):
        return {
            "item_count": len(obj.items),
            "errors": [error.to_dict() for error in obj.errors],
        }
    if isinstance(obj, enum.Enum):
        return obj.value
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, BaseModel):
        return obj.model_dump()
    if isinstance(obj, list | tuple):
        return [_serialize(item) for item in obj]
    if isinstance(obj, dict):
        return {k: _serialize(v) for k, v in obj.items()}
    if isinstance(obj, Path):
        return str(obj)
    return obj


class RefreshLogger:
    """Accumulates refresh stage records and writes a JSON log file per cycle.

    When ``enabled=False``, all methods are no-ops.

    Args:
        log_dir: Directory to write JSON log files.
        enabled: If False, all methods become no-ops.
    """

    def __init__(self, log_dir: Path, *, enabled: bool = True) -> None:
        self._log_dir = log_dir
        self._enabled = enabled
        self._record: CycleRecord | None = None
        self._last_log_path: Path | None = None

    @property
    def enabled(self) -> bool:
        """Whether logging is active."""
        return self._enabled

    @property
    def last_log_path(self) -> Path | None:
        """Path to the last written log file, or None."""
        return self._last_log_path

    def start_cycle(self, trigger: str) -> None:
        """Initialize a new cycle record.

        Args:
            trigger: What started the refresh (e.g. "timer", "read").
        """
        if not self._enabled:
            return

        self._record = CycleRecord(
            cycle_id=str(uuid.uuid4()),
            trigger=trigger,
            started_at=datetime.now(tz=UTC).isoformat(),
        )

    def log_stage(
        self,
        stage: str,
        component: str,
        input_data: Any,
        output_data: Any,
        duration_seconds: float,
    ) -> None:
        """Append a stage record to the current cycle.

        Args:
            stage: Stage name (e.g. "fetch", "rank").
            component: Component class name.
            input_data: Stage input (will be serialized).
            output_data: Stage output (will be serialized).
            duration_seconds: Wall-clock time for this stage.
        """
        if not self._enabled or self._record is None:
            return

        self._record.stages.append(
            StageRecord(
                stage=stage,
                component=component,
                input=_serialize(input_data),
                output=_serialize(output_data),
                timestamp=datetime.now(tz=UTC).isoformat(),
                duration_seconds=round(duration_seconds, 4),
            )
        )

    def finish_cycle(self, snapshot: Snapshot, *, changed: bool) -> Path | None:
        """Write the cycle record to a JSON file.

        Args:
            snapshot: Snapshot held by the service after the cycle.
            changed: Whether the published identity list changed.

        Returns:
            Path to the written JSON file, or None if logging is disabled.
        """
        if not self._enabled or self._record is None:
            return None

        self._record.completed_at = datetime.now(tz=UTC).isoformat()
        self._record.published_count = len(snapshot.items)
        self._record.error_count = len(snapshot.errors)
        self._record.changed = changed

        self._log_dir.mkdir(parents=True, exist_ok=True)

        # refresh_2026-02-12T14-30-00_<short id>.json; cycles can start within the same second
        ts = self._record.started_at.replace(":", "-")
        ts = ts.split(".")[0].split("+")[0]
        filename = f"refresh_{ts}_{self._record.cycle_id[:8]}.json"
        filepath = self._log_dir / filename

        filepath.write_text(self._record.model_dump_json(indent=2))
        self._last_log_path = filepath
        self._record = None
        return filepath
