"""SRT cue parsing and timestamp re-encoding.

WHY: Dashcam SRT files are simple but not uniform: some recorders write
the numeric index line before each cue, others skip it. The parser has
to accept both and hand the emitter a clean sequence of cues.

HOW: The file text is split on blank lines. For every non-empty block an
optional digits-only first line is dropped, the next line is the times
line, and the remaining lines are the cue text. The first two runs of
digits, colons and commas in the times line are the start and end tokens.

RULES:
- Blocks that are empty after stripping are skipped, never reported
- A times line with fewer than two timestamp tokens raises MalformedCueError
- A block with no text lines yields a cue with empty text
- Each call matches afresh; no regex state is shared between calls
- reencode_timestamp is positional: swap the decimal comma for a period,
  then drop the first and last character ("00:00:01,000" -> "0:00:01.00")
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator, List, Optional

from vconcat.core.errors import MalformedCueError
from vconcat.core.ir import Cue

BLOCK_SEPARATOR_RE = re.compile(r"\n[ \t]*\n")
INDEX_LINE_RE = re.compile(r"^\d+$")
TIMECODE_RE = re.compile(r"[\d:,]+")


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_blocks(text: str) -> List[str]:
    """Split SRT text into stripped, non-empty cue blocks."""
    blocks = BLOCK_SEPARATOR_RE.split(_normalize_newlines(text))
    return [block.strip() for block in blocks if block.strip()]


def extract_timecodes(times_line: str) -> Optional[tuple[str, str]]:
    """Return the first two timestamp tokens of a times line, or None."""
    matches = TIMECODE_RE.findall(times_line)
    if len(matches) < 2:
        return None
    return matches[0], matches[1]


def parse_block(block: str, block_number: int = 1, source: Optional[Path] = None) -> Cue:
    """Parse one stripped SRT block into a Cue.

    Args:
        block: Block text with no surrounding blank lines.
        block_number: 1-based position of the block, used in error messages.
        source: Source file, used in error messages.

    Raises:
        MalformedCueError: If the times line lacks two timestamp tokens.
    """
    lines = [line for line in block.split("\n") if line.strip()]

    sequence_index: Optional[int] = None
    if lines and INDEX_LINE_RE.match(lines[0].strip()):
        sequence_index = int(lines[0].strip())
        lines = lines[1:]

    if not lines:
        raise MalformedCueError(block_number, "", source)

    times_line, text_lines = lines[0], lines[1:]
    timecodes = extract_timecodes(times_line)
    if timecodes is None:
        raise MalformedCueError(block_number, times_line, source)

    start, end = timecodes
    return Cue(
        start=start,
        end=end,
        text_lines=tuple(text_lines),
        sequence_index=sequence_index,
    )


def iter_cues(text: str, source: Optional[Path] = None) -> Iterator[Cue]:
    """Yield cues from SRT text in file order (single pass)."""
    for number, block in enumerate(split_blocks(text), start=1):
        yield parse_block(block, number, source)


def parse_cues(text: str, source: Optional[Path] = None) -> List[Cue]:
    """Parse all cues from SRT text.

    Raises MalformedCueError on the first bad block; no partial list is
    returned.
    """
    return list(iter_cues(text, source))


def reencode_timestamp(token: str) -> str:
    """Convert an SRT timestamp token to the ASS event timestamp shape.

    >>> reencode_timestamp("00:00:01,000")
    '0:00:01.00'
    """
    return token.replace(",", ".", 1)[1:-1]
