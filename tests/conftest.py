"""Shared test fixtures for the vconcat test suite.

WHY: Parser, converter and CLI tests all need the same small dashcam SRT
samples and a date formatter whose output does not depend on the locales
installed on the test machine.

HOW: Module-level sample texts are exposed through fixtures. The
fallback_formatter fixture pins the fixed-table formatter, and
clip_folder builds a folder of fake dashcam clips on tmp_path.

RULES:
- Sample clip names follow the dashcam convention YYYY_MM_DD_HH_MM_SS
- Video files are empty placeholders; ffmpeg is never run by the tests
"""

from pathlib import Path

import pytest

from vconcat.core.dates import FallbackDateFormatter


# ---------------------------------------------------------------------------
# Sample SRT content
# ---------------------------------------------------------------------------

INDEXED_SRT = (
    "1\n"
    "00:00:00,000 --> 00:00:01,000\n"
    "[2020-01-07 08:56:45] 0KM/H\n"
    "\n"
    "2\n"
    "00:00:01,000 --> 00:00:02,000\n"
    "[07.01.2020 08:56:46] 12KM/H\n"
    "\n"
    "3\n"
    "00:00:02,000 --> 00:00:03,000\n"
    "line one\n"
    "line two\n"
)

UNINDEXED_SRT = (
    "00:00:00,000 --> 00:00:01,000\n"
    "[2020-01-07 08:56:45] 0MPH\n"
    "\n"
    "00:00:01,000 --> 00:00:02,000\n"
    "plain text\n"
)

EXPECTED_INDEXED_EVENTS = [
    "Dialogue: 0,0:00:00.00,0:00:01.00,Default,,0,0,0,,marți, 7 ianuarie 2020, 8:56:45",
    "Dialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,marți, 7 ianuarie 2020, 8:56:46 12KM/H",
    "Dialogue: 0,0:00:02.00,0:00:03.00,Default,,0,0,0,,line one\\Nline two",
]


@pytest.fixture
def indexed_srt():
    """Three cues with index lines: ISO date, day-first date, two text lines."""
    return INDEXED_SRT


@pytest.fixture
def expected_indexed_events():
    """Dialogue lines INDEXED_SRT converts to with the fallback formatter."""
    return list(EXPECTED_INDEXED_EVENTS)


@pytest.fixture
def unindexed_srt():
    """Two cues written without index lines."""
    return UNINDEXED_SRT


@pytest.fixture
def fallback_formatter():
    """The fixed-table Romanian date formatter."""
    return FallbackDateFormatter()


@pytest.fixture
def clip_folder(tmp_path) -> Path:
    """A folder with two same-day dashcam clips; only the first has an SRT."""
    (tmp_path / "2020_01_07_08_56_45.mp4").touch()
    (tmp_path / "2020_01_07_08_57_45.mp4").touch()
    (tmp_path / "2020_01_07_08_56_45.srt").write_text(INDEXED_SRT, encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    return tmp_path
