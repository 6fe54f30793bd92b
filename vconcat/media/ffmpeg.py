"""ffmpeg wrappers: scale-and-mux, concat, and executable lookup.

WHY: vconcat does no media processing itself. Each clip is rescaled and
given its ASS track by one ffmpeg run, and the resulting clips are joined
losslessly by a second run using the concat demuxer.

HOW: Commands are built as argument lists by pure functions
(build_transcode_command, build_concat_command) so they can be tested
without ffmpeg, then executed with subprocess.run. A non-zero exit status
becomes a TranscodeError carrying the command and ffmpeg's stderr.

RULES:
- Never build a shell string; paths with spaces or quotes need no escaping
- Identity resize copies every stream; any other resize re-encodes video
  only and copies audio (if present) and the subtitle track
- The concat playlist holds absolute paths with single quotes escaped
- The playlist is written by the caller-visible write_concat_playlist so
  the CLI can remove it afterwards
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from vconcat.config import FFMPEG_BINARY
from vconcat.core.errors import TranscodeError
from vconcat.media.resize import ResizeSpec

logger = logging.getLogger(__name__)


def is_command_present(name: str) -> bool:
    """True if ``name`` resolves to an executable file (PATH lookup or full path)."""
    found = shutil.which(name)
    if not found:
        logger.warning("%s not found on PATH", name)
        return False
    return os.access(found, os.X_OK)


def build_transcode_command(
    video_path: Path,
    output_path: Path,
    resize: ResizeSpec,
    subtitle_path: Optional[Path] = None,
    ffmpeg: str = FFMPEG_BINARY,
) -> List[str]:
    """Build the ffmpeg command that rescales ``video_path`` and muxes a subtitle track."""
    cmd = [ffmpeg, "-y", "-hide_banner", "-loglevel", "error", "-i", str(video_path)]
    if subtitle_path is not None:
        cmd += ["-i", str(subtitle_path)]

    if resize.is_identity:
        cmd += ["-codec", "copy", "-map", "0"]
        if subtitle_path is not None:
            cmd += ["-map", "1"]
    else:
        cmd += [
            "-filter_complex",
            "[0:v]scale={}:flags=lanczos[video]".format(resize.scale_filter()),
            "-map", "[video]",
            "-map", "0:a?",
            "-c:a", "copy",
        ]
        if subtitle_path is not None:
            cmd += ["-map", "1", "-c:s", "copy"]

    cmd.append(str(output_path))
    return cmd


def build_concat_command(
    playlist_path: Path,
    output_path: Path,
    ffmpeg: str = FFMPEG_BINARY,
) -> List[str]:
    return [
        ffmpeg, "-y", "-hide_banner", "-loglevel", "fatal",
        "-f", "concat", "-safe", "0",
        "-i", str(playlist_path),
        "-c", "copy",
        str(output_path),
    ]


def _run(cmd: List[str]) -> None:
    logger.debug("Running: %s", " ".join(cmd))
    proc = subprocess.run(cmd, capture_output=True, text=True, encoding="utf-8", errors="replace")
    if proc.returncode != 0:
        raise TranscodeError(cmd, proc.returncode, proc.stderr or "")


def transcode(
    video_path: Path,
    output_path: Path,
    resize: ResizeSpec,
    subtitle_path: Optional[Path] = None,
    ffmpeg: str = FFMPEG_BINARY,
) -> Path:
    """Rescale one clip and mux its subtitle track (if any) into ``output_path``.

    Raises:
        TranscodeError: If ffmpeg fails.
    """
    _run(build_transcode_command(video_path, output_path, resize, subtitle_path, ffmpeg))
    logger.info("Transcoded %s -> %s", video_path.name, output_path.name)
    return output_path


def write_concat_playlist(files: Sequence[Path], playlist_path: Path) -> Path:
    """Write a concat-demuxer playlist, one ``file '<absolute path>'`` per line."""
    lines = []
    for path in files:
        escaped = str(Path(path).resolve()).replace("'", r"'\''")
        lines.append("file '{}'".format(escaped))
    playlist_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return playlist_path


def concat(
    files: Sequence[Path],
    output_path: Path,
    playlist_path: Path,
    ffmpeg: str = FFMPEG_BINARY,
) -> Path:
    """Join ``files`` in order into ``output_path`` without re-encoding.

    Raises:
        ValueError: If ``files`` is empty.
        TranscodeError: If ffmpeg fails.
    """
    if not files:
        raise ValueError("Nothing to concatenate")
    write_concat_playlist(files, playlist_path)
    _run(build_concat_command(playlist_path, output_path, ffmpeg))
    logger.info("Concatenated %d files -> %s", len(files), output_path.name)
    return output_path
