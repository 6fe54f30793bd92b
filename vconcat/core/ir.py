"""Intermediate representation for subtitle conversion.

WHY: The SRT parser and the ASS emitter should not know about each
other's text formats. A small set of dataclasses sits between them so
each stage can be tested on its own.

HOW: Three dataclasses:
  Cue                    — one parsed SRT entry (raw timestamp tokens + text lines)
  DialogueLine           — one transformed ASS event, ready to render
  StyledSubtitleDocument — the fixed header plus the ordered dialogue lines

RULES:
- Cue and DialogueLine are frozen; a cue is never mutated after parsing
- Cue.start / Cue.end keep the source tokens verbatim; re-encoding happens
  in the emitter so the positional slicing sees the original characters
- start <= end is not verified
- Dialogue lines are kept in source order; nothing sorts them
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from vconcat.config import ASS_HEADER, ASS_LINE_BREAK, ASS_STYLE_NAME


@dataclass(frozen=True)
class Cue:
    """One timed-text entry from an SRT file.

    Attributes:
        start: Start timestamp token as matched in the times line, e.g. "00:00:01,000".
        end: End timestamp token, same shape as start.
        text_lines: Display lines in order. May be empty.
        sequence_index: The numeric index line, if the block had one. Never emitted.
    """

    start: str
    end: str
    text_lines: tuple[str, ...] = ()
    sequence_index: Optional[int] = None

    @property
    def text(self) -> str:
        """Text lines joined with the ASS hard line break."""
        return ASS_LINE_BREAK.join(self.text_lines)


@dataclass(frozen=True)
class DialogueLine:
    """One ASS ``Dialogue:`` event."""

    start: str
    end: str
    text: str
    layer: int = 0
    style: str = ASS_STYLE_NAME

    def render(self) -> str:
        return "Dialogue: {},{},{},{},,0,0,0,,{}".format(
            self.layer, self.start, self.end, self.style, self.text
        )


@dataclass
class StyledSubtitleDocument:
    """An ASS document: constant header followed by dialogue lines."""

    header: str = ASS_HEADER
    lines: list[DialogueLine] = field(default_factory=list)

    def append(self, line: DialogueLine) -> None:
        self.lines.append(line)

    def render(self) -> str:
        """Serialize the whole document, one event per line, trailing newline included."""
        out = [self.header]
        out.extend(line.render() for line in self.lines)
        return "\n".join(out) + "\n"
