"""
Insight dumps - diagnostic records of locate calls.

Records are kept per log id; emitting again under the same id replaces the
record in place, so a call can be dumped once when it starts and again with
its result. The store is an explicit object handed to whatever emits into
it; there is no module-level buffer.

Usage:
    with InsightDumpStore(log_dir="./logs") as store:
        insight = Insight(context, call_ai=caller, dump_store=store)
        await insight.locate("the login button")
    # records flushed to ./logs/insight-dump.json and cleared
"""

import json
import logging
import time
import uuid
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

DumpSubscriber = Callable[[Dict[str, Any]], None]

DEFAULT_DUMP_FILE = "insight-dump.json"


class InsightDumpStore:
    """
    In-memory store of dump records keyed by log id.

    Attributes:
        log_dir: Where flush() writes; None keeps records in memory only
        model_name: Recorded in every record's metadata
    """

    def __init__(
        self,
        log_dir: Optional[Union[str, Path]] = None,
        model_name: str = "",
        file_name: str = DEFAULT_DUMP_FILE,
    ):
        self.log_dir = Path(log_dir) if log_dir else None
        self.model_name = model_name
        self.file_name = file_name
        self._records: List[Dict[str, Any]] = []
        self._positions: Dict[str, int] = {}

    def emit(
        self,
        data: Dict[str, Any],
        log_id: Optional[str] = None,
        subscriber: Optional[DumpSubscriber] = None,
    ) -> str:
        """
        Record a dump.

        Args:
            data: Record payload
            log_id: Id to store under; a new one is generated when omitted
            subscriber: Called with the final record before it is stored

        Returns:
            The log id used
        """
        from llm_web_inspector import __version__

        log_id = log_id or uuid.uuid4().hex
        record: Dict[str, Any] = {
            "log_id": log_id,
            "sdk_version": __version__,
            "log_time": int(time.time() * 1000),
            "model_name": self.model_name,
            **data,
        }

        if subscriber is not None:
            subscriber(record)

        position = self._positions.get(log_id)
        if position is not None:
            self._records[position] = record
        else:
            self._positions[log_id] = len(self._records)
            self._records.append(record)
        return log_id

    def get(self, log_id: str) -> Optional[Dict[str, Any]]:
        position = self._positions.get(log_id)
        return self._records[position] if position is not None else None

    def records(self) -> List[Dict[str, Any]]:
        """Records in first-emitted order."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Optional[Path]:
        """
        Write all records as a JSON array under log_dir.

        Returns:
            The file written, or None without a log_dir
        """
        if self.log_dir is None:
            return None
        self.log_dir.mkdir(parents=True, exist_ok=True)
        path = self.log_dir / self.file_name
        path.write_text(json.dumps(self._records, indent=2, default=str, ensure_ascii=False))
        logger.debug(f"Flushed {len(self._records)} insight dumps to {path}")
        return path

    def clear(self) -> None:
        self._records.clear()
        self._positions.clear()

    def __enter__(self) -> "InsightDumpStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.flush()
        self.clear()
