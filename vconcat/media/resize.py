"""Resize settings for the transcode step.

Accepted spellings:
    "w320"          scale to 320 px wide, keep aspect ratio
    "h240"          scale to 240 px high, keep aspect ratio
    "25" / "25%"    25 percent of the source size
    "0.25"          ratio; bare numbers up to 1 are ratios, above 1 percentages
"""

from __future__ import annotations

import re
from dataclasses import dataclass

RESIZE_RE = re.compile(r"^\s*(?:(?P<axis>[wh])\s*(?P<pixels>\d+)|(?P<number>\d+(?:\.\d+)?|\.\d+)\s*(?P<percent>%)?)\s*$", re.IGNORECASE)

MODE_RATIO = "ratio"
MODE_WIDTH = "width"
MODE_HEIGHT = "height"


@dataclass(frozen=True)
class ResizeSpec:
    """How the transcoder should scale the video.

    value is a ratio (0.25) in ratio mode and a pixel count otherwise.
    """

    mode: str
    value: float

    @property
    def is_identity(self) -> bool:
        return self.mode == MODE_RATIO and self.value == 1.0

    def scale_filter(self) -> str:
        """ffmpeg scale arguments; -2 keeps the aspect ratio with an even size."""
        if self.mode == MODE_WIDTH:
            return "{}:-2".format(int(self.value))
        if self.mode == MODE_HEIGHT:
            return "-2:{}".format(int(self.value))
        return "iw*{:g}:-2".format(self.value)

    @property
    def label(self) -> str:
        """Suffix used in output file names, e.g. "-25%" or "-w320"."""
        if self.mode == MODE_WIDTH:
            return "-w{}".format(int(self.value))
        if self.mode == MODE_HEIGHT:
            return "-h{}".format(int(self.value))
        return "-{:.0f}%".format(self.value * 100)

    def __str__(self) -> str:
        return self.label.lstrip("-")


def parse_resize(value: str) -> ResizeSpec:
    """Parse a resize setting.

    Raises:
        ValueError: If the value is malformed or not positive.
    """
    match = RESIZE_RE.match(str(value))
    if match is None:
        raise ValueError(
            "Invalid resize value {!r}; use a percentage (25%), a ratio (0.25), "
            "w<pixels> or h<pixels>".format(value)
        )

    if match.group("axis"):
        pixels = int(match.group("pixels"))
        if pixels <= 0:
            raise ValueError("Resize size must be positive: {!r}".format(value))
        mode = MODE_WIDTH if match.group("axis").lower() == "w" else MODE_HEIGHT
        return ResizeSpec(mode, float(pixels))

    number = float(match.group("number"))
    if number <= 0:
        raise ValueError("Resize value must be positive: {!r}".format(value))
    if match.group("percent") or number > 1:
        number = number / 100
    return ResizeSpec(MODE_RATIO, number)
