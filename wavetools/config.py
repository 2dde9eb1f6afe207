"""wavetools - Configuration constants.

Module-level constants with environment overrides. No external config libraries.
All paths are relative to the repository root by default.
"""

import os
from pathlib import Path

# Repository root (parent of wavetools/)
REPO_ROOT = Path(__file__).parent.parent.resolve()

# Output directory for plans and waveform summaries
DATA_DIR = REPO_ROOT / "data"
OUTPUT_DIR = DATA_DIR / "out"

# JSON schemas for published documents
SPECS_DIR = REPO_ROOT / "specs"

PARSE_MODE_LENIENT = "lenient"
PARSE_MODE_STRICT = "strict"

DEFAULT_MERGE_MAX_SEC = 10.0
DEFAULT_WAVEFORM_BUCKETS = 512
DEFAULT_SILENCE_THRESHOLD = 70.0

# Frames per silence detection block
SILENCE_BLOCK_FRAMES = 1024


def _get_parse_mode() -> str:
    """Get the default version parse mode from environment.

    Environment variable WAVETOOLS_VERSION_PARSE_MODE selects "lenient"
    (leading-digits coercion) or "strict". Unknown values fall back
    to lenient.

    Returns:
        "lenient" or "strict".
    """
    env_val = os.environ.get("WAVETOOLS_VERSION_PARSE_MODE", "").strip().lower()
    if env_val in (PARSE_MODE_LENIENT, PARSE_MODE_STRICT):
        return env_val
    return PARSE_MODE_LENIENT


def _get_merge_max_sec() -> float:
    """Get the merge ceiling in seconds from environment or use default.

    Environment variable WAVETOOLS_MERGE_MAX_SEC allows override.

    Returns:
        Positive ceiling in seconds.
    """
    env_val = os.environ.get("WAVETOOLS_MERGE_MAX_SEC")
    if env_val:
        try:
            ceiling = float(env_val)
            if ceiling > 0:
                return ceiling
        except ValueError:
            pass
    return DEFAULT_MERGE_MAX_SEC


def _get_waveform_buckets() -> int:
    """Get the waveform bucket count from environment or use default."""
    env_val = os.environ.get("WAVETOOLS_WAVEFORM_BUCKETS")
    if env_val:
        try:
            buckets = int(env_val)
            if buckets > 0:
                return buckets
        except ValueError:
            pass
    return DEFAULT_WAVEFORM_BUCKETS


def _get_silence_threshold() -> float:
    """Get the silence level threshold from environment or use default.

    Environment variable WAVETOOLS_SILENCE_THRESHOLD allows override. Blocks
    whose level is below it are silent.
    """
    env_val = os.environ.get("WAVETOOLS_SILENCE_THRESHOLD")
    if env_val:
        try:
            threshold = float(env_val)
            if threshold > 0:
                return threshold
        except ValueError:
            pass
    return DEFAULT_SILENCE_THRESHOLD


# Read per call, unlike the constants below
def default_parse_mode() -> str:
    return _get_parse_mode()


# Merge ceiling in seconds per merged file
MERGE_MAX_SEC = _get_merge_max_sec()

# Number of min/max buckets in a waveform summary
WAVEFORM_BUCKETS = _get_waveform_buckets()

# Level below which a block of frames counts as silence
SILENCE_THRESHOLD = _get_silence_threshold()
