"""wavetools - Utility modules."""

from wavetools.utils.atomic_io import atomic_write_bytes, atomic_write_text
from wavetools.utils.audio_meta import extract_audio_metadata, wav_duration_seconds
from wavetools.utils.parsing import is_digits, lenient_int
from wavetools.utils.paths import merge_plan_path, waveform_json_path

__all__ = [
    # atomic_io
    "atomic_write_bytes",
    "atomic_write_text",
    # audio_meta
    "extract_audio_metadata",
    "wav_duration_seconds",
    # parsing
    "is_digits",
    "lenient_int",
    # paths
    "merge_plan_path",
    "waveform_json_path",
]
