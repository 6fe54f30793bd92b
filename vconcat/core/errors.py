"""Exception hierarchy for vconcat.

All errors raised by library code derive from VconcatError so the CLI can
catch them in one place. An unparseable date annotation is deliberately
not an error and has no exception type.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class VconcatError(Exception):
    """Base class for all vconcat errors."""


class MalformedCueError(VconcatError):
    """A cue's times line does not hold two timestamp tokens.

    Processing of the whole file stops: skipping the cue would silently
    shift every following cue.
    """

    def __init__(self, block_number: int, times_line: str, source: Optional[Path] = None):
        self.block_number = block_number
        self.times_line = times_line
        self.source = source
        where = " in {}".format(source) if source is not None else ""
        super().__init__(
            "Cue block {}{} has no start/end timestamps: {!r}".format(
                block_number, where, times_line
            )
        )


class DestinationWriteError(VconcatError):
    """The converted subtitle could not be written."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__("Cannot write {}: {}".format(path, reason))


class TranscodeError(VconcatError):
    """An ffmpeg invocation exited with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        tail = stderr.strip().splitlines()[-1] if stderr.strip() else "no output"
        super().__init__(
            "{} exited with status {}: {}".format(command[0], returncode, tail)
        )
