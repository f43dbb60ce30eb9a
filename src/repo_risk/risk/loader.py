"""Parse upstream metric records into validated FileMetrics."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..exceptions import InvalidPathError, InvariantViolationError
from ..logging_config import get_logger
from .models import FileMetrics

logger = get_logger(__name__)


def load_file_metrics(
    records: Iterable[dict[str, Any]], strict: bool = False
) -> list[FileMetrics]:
    """Validate a batch of metric records.

    By default a malformed record is logged and skipped so the rest of the
    batch still gets scored. With strict=True the first bad record raises.

    Raises:
        InvariantViolationError: In strict mode, on the first bad record.
    """
    result: list[FileMetrics] = []
    seen: set[str] = set()
    for index, record in enumerate(records):
        try:
            if not isinstance(record, dict):
                raise InvariantViolationError("", f"record #{index} is not an object")
            metrics = FileMetrics.from_dict(record)
            if metrics.file_path in seen:
                raise InvariantViolationError(metrics.file_path, "duplicate file path")
        except (InvariantViolationError, TypeError) as e:
            if strict:
                if isinstance(e, TypeError):
                    raise InvariantViolationError("", f"record #{index}: {e}") from e
                raise
            logger.warning("Skipping metrics record #%d: %s", index, e)
            continue
        seen.add(metrics.file_path)
        result.append(metrics)
    return result


def read_metrics_file(path: Path, strict: bool = False) -> list[FileMetrics]:
    """Read a JSON array of metric records from disk."""
    if not path.is_file():
        raise InvalidPathError(path, "metrics file does not exist")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidPathError(path, f"unreadable metrics JSON: {e}")
    if isinstance(data, dict) and "fileMetrics" in data:
        data = data["fileMetrics"]
    if not isinstance(data, list):
        raise InvalidPathError(path, "expected a JSON array of metric records")
    return load_file_metrics(data, strict=strict)
