"""wavetools - Small audio utilities built around a dotted version type.

Provides:
- VersionNumber: numeric comparison of dotted version strings
- Merge planning for short audio segments
- Chunk file renaming and waveform peak summaries
"""

from wavetools.revision import InvalidInput, ParseMode, VersionNumber, compare

__version__ = "0.1.0"

__all__ = [
    "InvalidInput",
    "ParseMode",
    "VersionNumber",
    "compare",
]
