"""Configuration constants, file conventions, and .env loading.

WHY: The subtitle converter and the ffmpeg wrappers share a handful of
fixed values (file extensions, the ASS header, the playlist name) and a
few machine-specific ones (ffmpeg path, locale name). Keeping them in one
module makes them easy to find and override without touching logic.

HOW: python-dotenv loads a .env file on import. Machine-specific values
are read with os.getenv and fall back to sensible defaults. Everything
else is a plain module-level constant.

RULES:
- VCONCAT_FFMPEG overrides the ffmpeg executable (name or full path)
- VCONCAT_DEFAULT_RESIZE is used when --resize is not given
- VCONCAT_LOCALE names the locale used to format dashcam dates
- ASS_HEADER is emitted verbatim; there is exactly one "Default" style
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# External tools
# ---------------------------------------------------------------------------

FFMPEG_BINARY = os.getenv("VCONCAT_FFMPEG", "ffmpeg")
DEFAULT_RESIZE = os.getenv("VCONCAT_DEFAULT_RESIZE", "w320")

# ---------------------------------------------------------------------------
# Date formatting
# ---------------------------------------------------------------------------

DATE_LOCALE = os.getenv("VCONCAT_LOCALE", "ro_RO.UTF-8")

# Fallback names, lowercase, indexed Sunday-first / January-first.
WEEKDAY_NAMES: tuple[str, ...] = (
    "duminică", "luni", "marți", "miercuri", "joi", "vineri", "sîmbătă",
)
MONTH_NAMES: tuple[str, ...] = (
    "ianuarie", "februarie", "martie", "aprilie", "mai", "iunie",
    "iulie", "august", "septembrie", "octombrie", "noiembrie", "decembrie",
)

# ---------------------------------------------------------------------------
# File conventions
# ---------------------------------------------------------------------------

VIDEO_EXTENSION = ".mp4"
SUBTITLE_EXTENSION = ".srt"
STYLED_SUBTITLE_EXTENSION = ".ass"
INTERMEDIATE_EXTENSION = ".mkv"
CONCAT_PLAYLIST_NAME = "concat-playlist.txt"
COMBINED_STEM = "combined"

# ---------------------------------------------------------------------------
# ASS output
# ---------------------------------------------------------------------------

ASS_HEADER = """[Script Info]
Title: Default subtitle
ScriptType: v4.00+
WrapStyle: 0
ScaledBorderAndShadow: yes
YCbCr Matrix: None

[V4+ Styles]
Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, OutlineColour, BackColour, Bold, Italic, Underline, StrikeOut, ScaleX, ScaleY, Spacing, Angle, BorderStyle, Outline, Shadow, Alignment, MarginL, MarginR, MarginV, Encoding
Style: Default,Roboto,16,&H00FFFFFF,&H000000FF,&H00000000,&H5A000000,-1,0,0,0,100,100,0,0,1,1,1,3,10,10,10,1

[Events]
Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text"""

ASS_STYLE_NAME = "Default"
ASS_LINE_BREAK = "\\N"
