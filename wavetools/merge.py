"""wavetools - Merge planning for short audio segments.

Groups consecutive segment durations into merge sets whose total stays at or
below a ceiling (WAVETOOLS_MERGE_MAX_SEC, default 10s).

Walk rule:
- Append each duration to the open set
- When the running total exceeds the ceiling, close the open set without its
  last member and start a new set holding only that member
- A single duration longer than the ceiling becomes its own set, marked
  oversized
- The trailing open set is emitted at the end

Plan documents (merge_plan.v1) carry a schema_version. Loading accepts the
same major version up to MERGE_PLAN_VERSION and rejects anything else.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from wavetools import config
from wavetools.durations import Duration
from wavetools.revision import VersionNumber
from wavetools.schemas import MergePlan, MergeSetModel, validate_document
from wavetools.utils.atomic_io import atomic_write_text

logger = logging.getLogger(__name__)

MERGE_PLAN_SCHEMA_ID = "merge_plan.v1"
MERGE_PLAN_VERSION = VersionNumber("1.1.0")


class IncompatiblePlanError(Exception):
    """Raised when a stored plan cannot be read by this version."""

    error_code = "PLAN_INCOMPATIBLE"

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{self.error_code}: {path}: {reason}")


@dataclass(frozen=True)
class MergeSet:
    """Consecutive durations to be merged into one file."""

    members: tuple[Duration, ...]
    oversized: bool = False

    @property
    def total(self) -> Duration:
        return sum(self.members, Duration())

    def to_model(self) -> MergeSetModel:
        return MergeSetModel(
            members=[str(d) for d in self.members],
            total_seconds=self.total.to_seconds(),
            oversized=self.oversized,
        )


def plan_merge_sets(
    durations: Iterable[Duration],
    max_seconds: float | None = None,
) -> list[MergeSet]:
    """Group durations into merge sets under a ceiling.

    Args:
        durations: Segment durations in playback order.
        max_seconds: Ceiling per set (default: config.MERGE_MAX_SEC).

    Returns:
        Merge sets in order. Every input duration appears in exactly one set.

    Raises:
        ValueError: If max_seconds is not positive.
    """
    ceiling = config.MERGE_MAX_SEC if max_seconds is None else max_seconds
    if ceiling <= 0:
        raise ValueError(f"max_seconds must be positive, got {ceiling}")

    sets: list[MergeSet] = []
    open_set: list[Duration] = []
    running = Duration()

    def close(members: list[Duration]) -> None:
        if not members:
            return
        merge_set = MergeSet(
            members=tuple(members),
            oversized=len(members) == 1 and members[0].to_seconds() > ceiling,
        )
        logger.info("merge(%s): %s", merge_set.total, [str(d) for d in members])
        sets.append(merge_set)

    for duration in durations:
        logger.debug("segment %s", duration)
        open_set.append(duration)
        running = running + duration

        if running.to_seconds() > ceiling:
            last = open_set.pop()
            close(open_set)
            open_set = [last]
            running = last

    close(open_set)
    return sets


def build_merge_plan(sets: list[MergeSet], max_seconds: float) -> MergePlan:
    """Wrap merge sets in a versioned plan document."""
    return MergePlan(
        schema_id=MERGE_PLAN_SCHEMA_ID,
        schema_version=MERGE_PLAN_VERSION,
        computed_at=datetime.now(UTC),
        max_seconds=max_seconds,
        sets=[s.to_model() for s in sets],
    )


def write_merge_plan(plan: MergePlan, path: str | Path) -> Path:
    """Validate and atomically publish a plan as JSON.

    Returns:
        The path written.
    """
    path = Path(path)
    data = json.loads(plan.model_dump_json())
    validate_document(data, "merge_plan")
    atomic_write_text(path, json.dumps(data, indent=2) + "\n")
    logger.info("Wrote merge plan with %d set(s) to %s", len(plan.sets), path)
    return path


def check_plan_version(version: VersionNumber, path: str = "<plan>") -> None:
    """Reject plans from another major version or a newer version.

    Raises:
        IncompatiblePlanError: If the plan cannot be read.
    """
    if version.components[0] != MERGE_PLAN_VERSION.components[0]:
        raise IncompatiblePlanError(
            path, f"major version {version} differs from supported {MERGE_PLAN_VERSION}"
        )
    if version > MERGE_PLAN_VERSION:
        raise IncompatiblePlanError(
            path, f"plan version {version} is newer than supported {MERGE_PLAN_VERSION}"
        )


def load_merge_plan(path: str | Path) -> MergePlan:
    """Load, validate and version-check a plan document.

    Raises:
        FileNotFoundError: If the plan does not exist.
        IncompatiblePlanError: If the plan is invalid or has an unsupported version.
    """
    path = Path(path)
    # json.JSONDecodeError and pydantic.ValidationError are ValueErrors too
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        validate_document(data, "merge_plan")
        version = VersionNumber(data["schema_version"], mode="strict")
        check_plan_version(version, str(path))
        return MergePlan.model_validate(data)
    except ValueError as e:
        raise IncompatiblePlanError(str(path), str(e)) from e


__all__ = [
    "IncompatiblePlanError",
    "MERGE_PLAN_SCHEMA_ID",
    "MERGE_PLAN_VERSION",
    "MergeSet",
    "build_merge_plan",
    "check_plan_version",
    "load_merge_plan",
    "plan_merge_sets",
    "write_merge_plan",
]
