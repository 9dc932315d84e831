"""
JSON summary export.

Builds the one-way snapshot a user downloads to send to a specialist later
(by email, WhatsApp or a back-office). There is no import path.
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional, Sequence

from .models.applicant import ApplicantProfile, LineageFacts
from .models.document import ClassifiedDocument
from .models.evaluation import EvaluationResult

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "italian-citizenship-check"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """UTC ISO-8601 with millisecond precision and a trailing Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def epoch_millis(now: Optional[datetime] = None) -> int:
    """Whole milliseconds since the Unix epoch (floored)."""
    now = now or datetime.now(timezone.utc)
    return (now.astimezone(timezone.utc) - _EPOCH) // timedelta(milliseconds=1)


def summary_filename(now: Optional[datetime] = None, prefix: str = DEFAULT_PREFIX) -> str:
    """Download name, e.g. ``italian-citizenship-check-1760789000123.json``."""
    return f"{prefix}-{epoch_millis(now)}.json"


def build_summary(
    applicant: ApplicantProfile,
    lineage: LineageFacts,
    documents: Sequence[ClassifiedDocument],
    result: EvaluationResult,
    created_at: Optional[datetime] = None,
) -> dict:
    """
    Assemble the exported snapshot.

    Returns:
        Dict with ``applicant``, ``lineage``, ``docs``, ``score``, ``label``,
        ``flags`` and ``createdAt``. Document content is never included.
    """
    return {
        "applicant": applicant.to_dict(),
        "lineage": lineage.to_dict(),
        "docs": [d.to_dict() for d in documents],
        "score": result.score,
        "label": result.label,
        "flags": list(result.flags),
        "createdAt": iso_timestamp(created_at),
    }


def render_summary(payload: dict, indent: int = 2) -> str:
    return json.dumps(payload, indent=indent, ensure_ascii=False)


def write_summary(
    payload: dict,
    output_dir: Path,
    filename: str,
    indent: int = 2,
) -> Path:
    """Write a summary into ``output_dir`` (created if needed) and return its path."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / filename

    with open(path, "w", encoding="utf-8") as f:
        f.write(render_summary(payload, indent=indent))

    logger.info(f"Summary written to {path}")
    return path
