"""Command-line interface for vconcat.

WHY: A day of dashcam driving is dozens of one-minute clips, each with an
SRT file of overlay text. Users want one small video with readable
subtitles. The CLI runs the whole job with a single command.

HOW: argparse collects the options, RunOptions validates them, then the
pipeline runs in four steps: convert every SRT to ASS, rescale each clip
with its ASS track into an .mkv, concatenate the .mkv clips, and remove
the intermediate files. Status messages go to stderr.

RULES:
- Positional SOURCE: folder of clips or a single .mp4 (default: CWD)
- --target defaults to the source folder; a .mkv file name there sets
  the combined video's name and its folder receives everything else
- Single-file mode never concatenates
- Concatenation needs at least two successfully transcoded clips
- A failed clip is reported and skipped; the remaining clips still run
- Intermediate files are removed only after a successful concat,
  and never with --keep
- Exit codes: 0 success, 1 usage or tool error, 130 on Ctrl-C
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import ValidationError

from vconcat import __version__
from vconcat.config import (
    CONCAT_PLAYLIST_NAME,
    DEFAULT_RESIZE,
    FFMPEG_BINARY,
    SUBTITLE_EXTENSION,
    VIDEO_EXTENSION,
)
from vconcat.core.converter import ass_path_for, srt_to_ass
from vconcat.core.errors import TranscodeError, VconcatError
from vconcat.media.ffmpeg import concat, is_command_present, transcode
from vconcat.media.naming import combined_path, format_duration, intermediate_path
from vconcat.options import RunOptions

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr."""
    print(msg, file=sys.stderr, flush=True)


def _plural(count: int, noun: str) -> str:
    return "{} {}{}".format(count, noun, "s" if count != 1 else "")


def discover_files(options: RunOptions) -> Tuple[List[Path], List[Path]]:
    """Return (video files, subtitle files) to process, sorted by name.

    In single-file mode the only subtitle considered is the clip's
    sibling ``<stem>.srt``.
    """
    if options.single_file:
        srt = options.source.with_suffix(SUBTITLE_EXTENSION)
        return [options.source], [srt] if srt.is_file() else []

    entries = sorted(p for p in options.source_dir.iterdir() if p.is_file())
    videos = [p for p in entries if p.suffix.lower() == VIDEO_EXTENSION]
    subtitles = [p for p in entries if p.suffix.lower() == SUBTITLE_EXTENSION]
    return videos, subtitles


def convert_subtitles(subtitles: List[Path], options: RunOptions) -> List[Path]:
    """Convert every SRT into the target folder; returns the written ASS files."""
    written: List[Path] = []
    if not subtitles:
        if not options.single_file:
            _status("No subtitle files found.")
        return written

    _status("Converting {}...".format(_plural(len(subtitles), "subtitle file")))
    for srt in subtitles:
        ass = srt_to_ass(srt, options.destination_dir)
        if ass is not None:
            written.append(ass)
    _status("  Converted {}".format(_plural(len(written), "subtitle file")))
    return written


def transcode_videos(videos: List[Path], options: RunOptions) -> List[Path]:
    """Rescale each clip and mux its ASS track; returns the clips that succeeded."""
    produced: List[Path] = []
    total = len(videos)
    for index, video in enumerate(videos, start=1):
        ass = ass_path_for(video, options.destination_dir)
        subtitle = ass if ass.is_file() else None
        output = intermediate_path(video, options.destination_dir, options.resize.label)

        _status("Resizing {} of {}: {}".format(index, total, video.name))
        try:
            produced.append(transcode(video, output, options.resize, subtitle))
        except TranscodeError as e:
            _status("  Failed: {}".format(e))
            logger.debug("ffmpeg stderr for %s:\n%s", video.name, e.stderr)
    return produced


def concat_videos(clips: List[Path], options: RunOptions) -> Optional[Path]:
    """Join the processed clips into one file, or return None if not applicable."""
    if options.single_file or not options.concat or len(clips) < 2:
        return None

    output = options.combined_output or combined_path(
        clips, options.destination_dir, options.resize.label
    )
    playlist = options.destination_dir / CONCAT_PLAYLIST_NAME
    _status("Concatenating {}...".format(_plural(len(clips), "file")))
    concat(clips, output, playlist)
    _status("  Saved: {}".format(output.name))
    return output


def _remove(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        _status("  Failed to remove {}: {}".format(path.name, e))


def cleanup(
    clips: List[Path],
    subtitles: List[Path],
    options: RunOptions,
    combined: Optional[Path],
) -> None:
    """Remove intermediate files.

    ASS files are always temporary. Intermediate clips and the playlist
    are only removed once they have been joined into ``combined``.
    """
    if options.keep:
        return

    if subtitles:
        _status("Removing temp subtitles...")
        for ass in subtitles:
            _remove(ass)

    if combined is not None:
        _status("Removing temp videos...")
        for clip in clips:
            _remove(clip)
        _remove(options.destination_dir / CONCAT_PLAYLIST_NAME)


def run(options: RunOptions) -> None:
    """Run the full pipeline for validated options.

    Raises:
        VconcatError: On malformed subtitles, write failures, or a failed concat.
    """
    started = time.monotonic()

    videos, subtitles = discover_files(options)
    logger.debug(
        "Found %d videos and %d subtitles in %s", len(videos), len(subtitles), options.source_dir
    )

    written = convert_subtitles(subtitles, options)

    clips: List[Path] = []
    if videos:
        clips = transcode_videos(videos, options)
        _status("  Resized {} ({})".format(_plural(len(clips), "file"), options.resize))
    else:
        _status("No {} files found.".format(VIDEO_EXTENSION))

    combined = concat_videos(clips, options)
    cleanup(clips, written, options, combined)

    _status("")
    _status("Done in {}.".format(format_duration(time.monotonic() - started)))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vconcat",
        description="Resize dashcam clips, embed their subtitles as styled ASS "
                    "tracks, and join the clips into a single video.",
    )

    parser.add_argument(
        "source",
        nargs="?",
        default=".",
        help="Folder containing .mp4 and .srt files, or a single .mp4 file "
             "(default: current directory).",
    )

    parser.add_argument(
        "-t", "--target",
        default=None,
        help="Folder where files are saved, or the .mkv file name of the "
             "combined video (default: the source folder).",
    )

    parser.add_argument(
        "-r", "--resize",
        default=DEFAULT_RESIZE,
        help="Resize as a percentage (25 or 25%%), a ratio (0.25), "
             "w<pixels> or h<pixels> (default: %(default)s).",
    )

    parser.add_argument(
        "-n", "--no-concat",
        dest="concat",
        action="store_false",
        help="Do not combine the resulting clips.",
    )

    parser.add_argument(
        "-k", "--keep",
        action="store_true",
        help="Do not remove temporary files created during processing.",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print diagnostic messages.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``vconcat`` command and ``python -m vconcat``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        options = RunOptions(
            source=Path(args.source),
            target=Path(args.target) if args.target else None,
            resize=args.resize,
            concat=args.concat,
            keep=args.keep,
        )
    except ValidationError as e:
        for err in e.errors():
            _status("Error: {}".format(err["msg"]))
        _status("Use -h or --help for more info.")
        sys.exit(1)

    if not is_command_present(FFMPEG_BINARY):
        _status("Error: {} not found or not executable.".format(FFMPEG_BINARY))
        sys.exit(1)

    try:
        run(options)
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)
    except VconcatError as e:
        _status("Error: {}".format(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
