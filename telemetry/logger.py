from __future__ import annotations

import json
import os
import threading
from typing import Any, Dict, List, Optional, Sequence, TextIO

import pandas as pd

from rover_lab.evaluator import Outcome
from rover_lab.primitives import PoseSample, Primitive


class TelemetryLogger:
    """Structured JSONL logger for rover runs.

    Thread-safe, append-only logging of dict records, one JSON object per line.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        self._lock = threading.Lock()
        self._fp: Optional[TextIO] = open(self.path, "a", encoding="utf-8")

    def log_step(self, record: Dict[str, Any]) -> None:
        """Append a single telemetry record to the JSONL file."""
        if self._fp is None:
            return
        line = json.dumps(record, separators=(",", ":"))
        with self._lock:
            self._fp.write(line + "\n")
            self._fp.flush()

    def log_run(
        self,
        mission_id: str,
        primitives: Sequence[Primitive],
        trajectory: Sequence[PoseSample],
        outcome: Outcome,
        metrics: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Append one record describing a complete run."""
        final = trajectory[-1]
        self.log_step(
            {
                "mission_id": mission_id,
                "outcome": outcome.as_dict(),
                "final": final.to_dict(),
                "primitives": [p.to_dict() for p in primitives],
                "samples": [s.to_dict() for s in trajectory],
                "metrics": metrics or {},
            }
        )

    def close(self) -> None:
        if self._fp is not None:
            self._fp.close()
            self._fp = None

    def __enter__(self) -> "TelemetryLogger":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


def load_telemetry(path: str, max_rows: int = 2000) -> pd.DataFrame:
    """Read a JSONL telemetry log, flattening nested fields.

    Lines that are not valid JSON are skipped. ``samples`` and ``primitives``
    stay as list columns.
    """
    if not os.path.exists(path):
        return pd.DataFrame()
    records: List[Dict[str, Any]] = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                rec = json.loads(line)
                records.append(rec)
            except json.JSONDecodeError:
                continue
    if not records:
        return pd.DataFrame()
    df = pd.json_normalize(records)
    return df.tail(max_rows)
