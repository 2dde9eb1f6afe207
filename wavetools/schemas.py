"""wavetools - Pydantic models for published documents.

Models mirror the JSON schemas in /specs. Documents are validated against
the schema with jsonschema before they are written and after they are read.
"""

import json
from datetime import datetime
from functools import lru_cache
from typing import Any

import jsonschema
from pydantic import BaseModel, ConfigDict, Field

from wavetools.config import SPECS_DIR
from wavetools.revision import VersionNumber


class DocumentInvalidError(ValueError):
    """Raised when a document does not match its JSON schema."""

    error_code = "DOCUMENT_INVALID"

    def __init__(self, schema_name: str, reason: str):
        self.schema_name = schema_name
        super().__init__(f"{self.error_code}: {schema_name}: {reason}")


@lru_cache(maxsize=None)
def load_schema(schema_name: str) -> dict[str, Any]:
    """Load specs/{schema_name}.schema.json.

    Raises:
        FileNotFoundError: If the schema file does not exist.
    """
    schema_path = SPECS_DIR / f"{schema_name}.schema.json"
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found at {schema_path}")
    with open(schema_path, encoding="utf-8") as f:
        return json.load(f)


def validate_document(data: Any, schema_name: str) -> None:
    """Validate a decoded JSON document against a named schema.

    Raises:
        DocumentInvalidError: If validation fails.
    """
    try:
        jsonschema.validate(data, load_schema(schema_name))
    except jsonschema.ValidationError as e:
        raise DocumentInvalidError(schema_name, e.message) from e


# --- Merge Plan ---


class MergeSetModel(BaseModel):
    """One group of segments to merge into a single file."""

    model_config = ConfigDict(extra="forbid")

    members: list[str] = Field(..., min_length=1, description="Segment durations HH:MM:SS.ff")
    total_seconds: float = Field(..., ge=0, description="Sum of member durations")
    oversized: bool = Field(default=False, description="Single member above the ceiling")


class MergePlan(BaseModel):
    """Merge plan document.

    Corresponds to specs/merge_plan.schema.json.
    """

    model_config = ConfigDict(extra="forbid")

    schema_id: str = Field(default="merge_plan.v1", description="Schema identifier")
    schema_version: VersionNumber = Field(..., description="Dotted plan format version")
    computed_at: datetime = Field(..., description="When this plan was created")
    max_seconds: float = Field(..., gt=0, description="Ceiling per merge set in seconds")
    sets: list[MergeSetModel] = Field(default_factory=list, description="Merge sets in order")


# --- Waveform Peaks ---


class WaveformPeaks(BaseModel):
    """Downsampled min/max envelope of a sample stream.

    Corresponds to specs/waveform_peaks.schema.json.
    """

    model_config = ConfigDict(extra="forbid")

    schema_id: str = Field(default="waveform_peaks.v1", description="Schema identifier")
    version: str = Field(default="1.0.0", description="Schema version")
    computed_at: datetime = Field(..., description="When this summary was created")
    sample_count: int = Field(..., ge=0, description="Number of input samples")
    bucket_size: int = Field(..., ge=0, description="Samples per bucket (last may be shorter)")
    mins: list[int] = Field(default_factory=list, description="Per-bucket minimum")
    maxs: list[int] = Field(default_factory=list, description="Per-bucket maximum")


__all__ = [
    "DocumentInvalidError",
    "MergePlan",
    "MergeSetModel",
    "WaveformPeaks",
    "load_schema",
    "validate_document",
]
