"""wavetools - Canonical output paths.

Returns canonical Paths under OUTPUT_DIR. Does NOT create directories;
atomic writers create parents when publishing.
"""

from pathlib import Path

from wavetools.config import OUTPUT_DIR


def merge_plan_path(name: str) -> Path:
    """Get canonical path for a merge plan.

    Args:
        name: Plan name, usually the recording's base name.

    Returns:
        Path: data/out/{name}.merge_plan.v1.json
    """
    return OUTPUT_DIR / f"{name}.merge_plan.v1.json"


def waveform_json_path(name: str) -> Path:
    """Get canonical path for a waveform peak summary.

    Args:
        name: Base name of the sampled stream or file.

    Returns:
        Path: data/out/{name}.waveform.v1.json
    """
    return OUTPUT_DIR / f"{name}.waveform.v1.json"
