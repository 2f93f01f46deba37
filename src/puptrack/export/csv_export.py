# src/puptrack/export/csv_export.py

"""
CSV export of logs.

Default format is the historical one: "Timestamp,Task" header and one
"<ISO 8601 UTC>,<task name>" line per log, in the order given, with no
quoting. Task names containing commas, quotes or newlines therefore break
the columns; pass quote=True to get RFC 4180 quoting instead.
"""

from __future__ import annotations

import contextlib
import csv
import io
import logging
import os
import tempfile
import time
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

from ..core.errors import StorageIOError
from ..logs.log_models import LogEntry

logger = logging.getLogger(__name__)

CSV_HEADER = ("Timestamp", "Task")
EXPORT_PREFIX = "PupTrackExport"


def iso8601_utc(ts: datetime) -> str:
    """Second-precision UTC instant, e.g. 2026-10-19T09:30:00Z."""
    if ts.tzinfo is None:
        ts = ts.astimezone()
    return ts.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def render_csv(logs: Iterable[LogEntry], *, quote: bool = False) -> str:
    if quote:
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for entry in logs:
            writer.writerow((iso8601_utc(entry.timestamp), entry.task_name))
        return buf.getvalue()

    lines = [",".join(CSV_HEADER)]
    lines.extend(f"{iso8601_utc(e.timestamp)},{e.task_name}" for e in logs)
    return "\n".join(lines) + "\n"


def export_logs_csv(
    logs: Iterable[LogEntry],
    *,
    export_dir: str | Path | None = None,
    quote: bool = False,
) -> Path:
    """
    Write logs to a fresh, uniquely named file and return its path.

    A finished export is never cleaned up here; that is up to the caller/OS.
    """
    entries = list(logs)
    content = render_csv(entries, quote=quote)
    directory = Path(export_dir) if export_dir is not None else Path(tempfile.gettempdir())

    try:
        payload = content.encode("utf-8")
    except UnicodeEncodeError as e:
        logger.exception("CSV export has text that is not UTF-8 encodable")
        raise StorageIOError(f"could not encode CSV export: {e}") from e

    name: str | None = None
    try:
        directory.mkdir(parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(
            prefix=f"{EXPORT_PREFIX}-{int(time.time())}-",
            suffix=".csv",
            dir=directory,
        )
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
    except OSError as e:
        logger.exception("CSV export failed dir=%s", directory)
        if name is not None:
            with contextlib.suppress(OSError):
                os.unlink(name)
        raise StorageIOError(f"could not write CSV export in {directory}: {e}") from e

    path = Path(name)
    logger.info("Exported %d log(s) to %s", len(entries), path)
    return path
