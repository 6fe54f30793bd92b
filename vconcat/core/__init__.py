"""Subtitle conversion core.

WHY: The SRT -> ASS conversion is the only part of vconcat with real
parsing logic; everything else drives ffmpeg. Keeping it in its own
package keeps it free of subprocess and filesystem-discovery concerns.

HOW: ir.py defines the data structures, srt_parser.py reads cues,
dates.py and text.py clean cue text, converter.py emits the ASS file.

RULES:
- Nothing in this package starts a process or reads ambient state
  (working directory, environment) beyond config.py constants
- Every path is passed in explicitly by the caller
"""

from vconcat.core.converter import convert_srt_text, srt_to_ass
from vconcat.core.errors import (
    DestinationWriteError,
    MalformedCueError,
    TranscodeError,
    VconcatError,
)

__all__ = [
    "convert_srt_text",
    "srt_to_ass",
    "DestinationWriteError",
    "MalformedCueError",
    "TranscodeError",
    "VconcatError",
]
