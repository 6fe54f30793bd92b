"""Output file names derived from dashcam clip names.

Dashcams name clips after their start time, e.g. "2020_01_07_08_56_45.mp4".
When every clip of a run comes from the same day the combined video is
named after the day and the first/last start times; otherwise it falls
back to "combined".
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Sequence

from vconcat.config import COMBINED_STEM, INTERMEDIATE_EXTENSION

CLIP_NAME_RE = re.compile(r"^(\d{4})\D(\d{2})\D(\d{2})\D(\d{2})\D(\d{2})")

RATIO_COLON = "∶"
ELLIPSIS = "…"


def extract_date(file_name: str) -> Optional[str]:
    """Date part of a clip name: "2020_01_07_08_56_45.mp4" -> "2020-01-07"."""
    match = CLIP_NAME_RE.match(Path(file_name).name)
    if match is None:
        return None
    return "-".join(match.group(1, 2, 3))


def extract_time(file_name: str) -> Optional[str]:
    """Start time of a clip name: "2020_01_07_08_56_45.mp4" -> "08∶56".

    Uses the ratio sign instead of a colon so the result is a valid file name.
    """
    match = CLIP_NAME_RE.match(Path(file_name).name)
    if match is None:
        return None
    return "{}{}{}".format(match.group(4), RATIO_COLON, match.group(5))


def intermediate_path(video_path: Path, destination_dir: Path, label: str) -> Path:
    return destination_dir / "{}{}{}".format(video_path.stem, label, INTERMEDIATE_EXTENSION)


def combined_path(clips: Sequence[Path], destination_dir: Path, label: str) -> Path:
    """Name of the concatenated video for ``clips`` (in playback order)."""
    if clips:
        first, last = clips[0].name, clips[-1].name
        date = extract_date(first)
        if date is not None and date == extract_date(last):
            name = "{} {}{}{}{}{}".format(
                date, extract_time(first), ELLIPSIS, extract_time(last),
                label, INTERMEDIATE_EXTENSION,
            )
            return destination_dir / name
    return destination_dir / "{}{}{}".format(COMBINED_STEM, label, INTERMEDIATE_EXTENSION)


def format_duration(seconds: float) -> str:
    """Human-readable elapsed time: "1 hour, 2 minutes and 5 seconds"."""
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)

    def plural(count: int, unit: str) -> str:
        return "{} {}{}".format(count, unit, "s" if count != 1 else "")

    parts = []
    if hours:
        parts.append(plural(hours, "hour"))
    if minutes:
        parts.append(plural(minutes, "minute"))
    if secs or not parts:
        parts.append(plural(secs, "second"))

    if len(parts) == 1:
        return parts[0]
    return "{} and {}".format(", ".join(parts[:-1]), parts[-1])
