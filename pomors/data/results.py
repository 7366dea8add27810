from __future__ import annotations

"""Flat-file save of the final task records."""

import csv
import logging
from pathlib import Path
from typing import Iterable

from pomors.core.tasks import TaskRecord

logger = logging.getLogger(__name__)

HEADER = ("name", "completed", "elapsed_seconds", "pomodoros")
_YES = "yes"
_NO = "no"


def write_results(path: str | Path, records: Iterable[TaskRecord]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, delimiter="\t", lineterminator="\n")
        writer.writerow(HEADER)
        count = 0
        for record in records:
            writer.writerow(
                (
                    record.name,
                    _YES if record.completed else _NO,
                    repr(float(record.elapsed)),
                    record.pomodoros,
                )
            )
            count += 1
    logger.info("Wrote %d task records to %s", count, path)
    return path


def read_results(path: str | Path) -> list[TaskRecord]:
    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.reader(f, delimiter="\t")
        header = next(reader, None)
        if header is None:
            return []
        if tuple(header) != HEADER:
            raise ValueError(f"Unexpected results header in {path}: {header!r}")
        records: list[TaskRecord] = []
        for lineno, row in enumerate(reader, start=2):
            if not row:
                continue
            if len(row) != len(HEADER) or row[1] not in (_YES, _NO):
                raise ValueError(f"Malformed results line {lineno} in {path}")
            name, completed, elapsed, pomodoros = row
            records.append(
                TaskRecord(
                    name=name,
                    completed=completed == _YES,
                    elapsed=float(elapsed),
                    pomodoros=int(pomodoros),
                )
            )
    return records
