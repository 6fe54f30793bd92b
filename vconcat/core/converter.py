"""SRT to ASS conversion: the document emitter and the per-file entry point.

WHY: ffmpeg muxes an ASS track with a fixed style far more predictably
than a bare SRT, and the dashcam text needs cleaning before it is burnt
into a small video. This module turns one .srt file into one .ass file.

HOW: srt_to_ass() reads the source, parses it into cues, runs every cue
through transform_cue() (timestamp re-encoding, date normalisation,
speed-token stripping) and writes the rendered StyledSubtitleDocument to
<destination_dir>/<stem>.ass in a single write.

RULES:
- A missing or non-regular source is a no-op: returns None, writes nothing
- MalformedCueError propagates and no output is written for that file
- Write failures are raised as DestinationWriteError, never retried
- An existing destination file is replaced, never appended to
- The output depends only on the input text and the date formatter,
  so converting the same file twice gives identical bytes
- Files share no state; callers may convert several files in parallel
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from vconcat.config import STYLED_SUBTITLE_EXTENSION
from vconcat.core.dates import BaseDateFormatter, normalize_annotation, select_date_formatter
from vconcat.core.errors import DestinationWriteError
from vconcat.core.ir import Cue, DialogueLine, StyledSubtitleDocument
from vconcat.core.srt_parser import parse_cues, reencode_timestamp
from vconcat.core.text import strip_speed_artifacts

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def transform_text(text: str, formatter: BaseDateFormatter) -> str:
    """Normalise the date annotation, then strip speed tokens."""
    return strip_speed_artifacts(normalize_annotation(text, formatter))


def transform_cue(cue: Cue, formatter: BaseDateFormatter) -> DialogueLine:
    return DialogueLine(
        start=reencode_timestamp(cue.start),
        end=reencode_timestamp(cue.end),
        text=transform_text(cue.text, formatter),
    )


def build_document(
    cues: Iterable[Cue],
    formatter: Optional[BaseDateFormatter] = None,
) -> StyledSubtitleDocument:
    """Build the ASS document for a sequence of cues, preserving their order."""
    if formatter is None:
        formatter = select_date_formatter()
    document = StyledSubtitleDocument()
    for cue in cues:
        document.append(transform_cue(cue, formatter))
    return document


def convert_srt_text(text: str, formatter: Optional[BaseDateFormatter] = None) -> str:
    """Convert SRT file content to ASS file content."""
    return build_document(parse_cues(text), formatter).render()


def ass_path_for(srt_path: PathLike, destination_dir: PathLike) -> Path:
    """Destination of the converted subtitle: same stem, .ass extension."""
    return Path(destination_dir) / (Path(srt_path).stem + STYLED_SUBTITLE_EXTENSION)


def srt_to_ass(
    srt_path: PathLike,
    destination_dir: PathLike,
    formatter: Optional[BaseDateFormatter] = None,
) -> Optional[Path]:
    """Convert one SRT file into an ASS file inside ``destination_dir``.

    Args:
        srt_path: Source subtitle file.
        destination_dir: Directory that receives ``<stem>.ass``.
        formatter: Date formatter; defaults to the process-wide selection.

    Returns:
        Path of the written file, or None if the source does not exist or
        is not a regular file.

    Raises:
        MalformedCueError: If a cue has no start/end timestamps.
        DestinationWriteError: If the output cannot be written.
    """
    source = Path(srt_path)
    if not source.is_file():
        logger.debug("No subtitle at %s, skipping", source)
        return None

    text = source.read_text(encoding="utf-8-sig", errors="replace")
    content = build_document(parse_cues(text, source), formatter).render()

    destination = ass_path_for(source, destination_dir)
    try:
        destination.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise DestinationWriteError(destination, str(exc)) from exc

    logger.info("Converted %s -> %s", source.name, destination.name)
    return destination
