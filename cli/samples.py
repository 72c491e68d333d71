"""CSV parsing for sample series submitted from the command line."""

from __future__ import annotations

import csv
import logging
import math
from dataclasses import dataclass, field
from typing import List, TextIO

from models.records import WaterSample

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("hour", "turbidity", "ph", "dissolved_oxygen", "bod")


@dataclass
class RowError:
    row_number: int
    reason: str


@dataclass
class ParsedSamples:
    samples: List[WaterSample] = field(default_factory=list)
    errors: List[RowError] = field(default_factory=list)


def parse_samples(stream: TextIO, source: str = "<stream>") -> ParsedSamples:
    """Read samples from CSV text, collecting per-row problems instead of failing.

    Raises ``ValueError`` when the header row is absent or incomplete.
    """
    reader = csv.DictReader(stream)
    if not reader.fieldnames:
        raise ValueError("CSV file is missing a header row.")

    normalized = {name.lower().strip(): name for name in reader.fieldnames}
    missing = [column for column in REQUIRED_COLUMNS if column not in normalized]
    if missing:
        raise ValueError(f"CSV missing required columns: {', '.join(missing)}")

    parsed = ParsedSamples()
    for row_number, row in enumerate(reader, start=2):
        values: dict[str, float] = {}
        reason = None
        for column in REQUIRED_COLUMNS:
            raw = (row.get(normalized[column]) or "").strip()
            if not raw:
                reason = f"missing {column}"
                break
            try:
                value = float(raw)
            except ValueError:
                reason = f"invalid {column}"
                break
            if not math.isfinite(value):
                reason = f"invalid {column}"
                break
            values[column] = value

        if reason is None:
            hour = values["hour"]
            if not hour.is_integer() or not 0 <= hour <= 23:
                reason = "hour out of range"

        if reason is not None:
            logger.warning(
                "Skipping row: %s",
                reason,
                extra={"object_key": source, "row_number": row_number, "reason": reason},
            )
            parsed.errors.append(RowError(row_number=row_number, reason=reason))
            continue

        parsed.samples.append(
            WaterSample(
                hour=int(values["hour"]),
                turbidity=values["turbidity"],
                ph=values["ph"],
                dissolved_oxygen=values["dissolved_oxygen"],
                bod=values["bod"],
            )
        )

    return parsed
