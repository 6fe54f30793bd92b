"""Cleanup of dashcam overlay tokens in cue text."""

from __future__ import annotations

import re

# " 0MPH", " 0KM/H", " MPH", " kmh" ... together with the whitespace before them.
SPEED_ARTIFACT_RE = re.compile(r"\s+0?K?MP?/?H", re.IGNORECASE)


def strip_speed_artifacts(text: str) -> str:
    """Remove speed overlay tokens (and their leading whitespace) from text."""
    return SPEED_ARTIFACT_RE.sub("", text)
