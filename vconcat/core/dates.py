"""Recognition and reformatting of dashcam date/time overlays.

WHY: Dashcams stamp each subtitle cue with the recording time in square
brackets, e.g. "[07.01.2020 08:56:45]". The raw stamp is hard to read on
a small video and its field order depends on the camera's region
setting. The converter replaces it with a spelled-out Romanian date.

HOW: The first bracketed span is parsed as strict ISO-8601 with
dateutil's isoparse. If that fails, the date part is split on its
separators and retried twice: first rejoined with "-" in the same
order (YYYY/MM/DD -> YYYY-MM-DD), then with the field order reversed
(DD.MM.YYYY -> YYYY-MM-DD). A successful parse is rendered by a date
formatter chosen once per process: LocaleDateFormatter when the
platform can activate the configured locale, FallbackDateFormatter
(fixed name tables) otherwise.

RULES:
- Only the first bracketed span is considered and only it is replaced
- Unparseable content is left untouched; this is not an error
- Timezone-aware results are shown in local time
- Both formatters produce "<weekday>, <day> <month> <year>, <h>:<mm>:<ss>"
- setlocale is process-global: it is only ever switched under _LOCALE_LOCK
  and always restored
"""

from __future__ import annotations

import locale
import logging
import re
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime
from functools import lru_cache
from typing import Iterator, Optional

from dateutil.parser import isoparse

from vconcat.config import DATE_LOCALE, MONTH_NAMES, WEEKDAY_NAMES

logger = logging.getLogger(__name__)

ANNOTATION_RE = re.compile(r"\[([^\]]+)\]")
NON_DIGIT_RE = re.compile(r"\D")

_LOCALE_LOCK = threading.Lock()


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _try_parse(value: str) -> Optional[datetime]:
    try:
        moment = isoparse(value.strip())
    except (ValueError, OverflowError):
        return None
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment


def _split_stamp(value: str) -> Optional[tuple[list[str], str]]:
    # Only the date token and the first token after it are kept.
    parts = value.split()
    if not parts:
        return None
    return NON_DIGIT_RE.split(parts[0]), " ".join(parts[1:2])


def _join_stamp(fields: list[str], time_token: str) -> str:
    date_token = "-".join(fields)
    return "{} {}".format(date_token, time_token) if time_token else date_token


def normalize_date_separators(value: str) -> str:
    """Rewrite the date token with "-" separators, keeping the field order.

    "2020/01/07 08:56:45" -> "2020-01-07 08:56:45".
    """
    stamp = _split_stamp(value)
    if stamp is None:
        return value
    return _join_stamp(*stamp)


def reverse_date_fields(value: str) -> str:
    """Reverse the field order of the leading date token.

    "07.01.2020 08:56:45" -> "2020-01-07 08:56:45". Only the first token
    after the date is re-attached; anything past it is dropped.
    """
    stamp = _split_stamp(value)
    if stamp is None:
        return value
    fields, time_token = stamp
    return _join_stamp(list(reversed(fields)), time_token)


def parse_annotation(value: str) -> Optional[datetime]:
    """Parse annotation content.

    Candidates are tried in order: the content as is, the content with
    "-" date separators, and the content with reversed date fields.
    """
    for candidate in (value, normalize_date_separators(value), reverse_date_fields(value)):
        moment = _try_parse(candidate)
        if moment is not None:
            return moment
    return None


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


class BaseDateFormatter(ABC):
    """Renders a datetime as human-readable overlay text."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier, used in log messages."""

    @abstractmethod
    def format(self, moment: datetime) -> str:
        """Return the display text for ``moment``."""


class FallbackDateFormatter(BaseDateFormatter):
    """Romanian date text from fixed name tables.

    Used when the platform has no Romanian locale. Day and hour are not
    padded; minutes and seconds are.
    """

    @property
    def name(self) -> str:
        return "fallback"

    def format(self, moment: datetime) -> str:
        # isoweekday: Monday=1 .. Sunday=7; the table starts on Sunday.
        weekday = WEEKDAY_NAMES[moment.isoweekday() % 7]
        month = MONTH_NAMES[moment.month - 1]
        return "{}, {} {} {}, {}:{:02d}:{:02d}".format(
            weekday, moment.day, month, moment.year,
            moment.hour, moment.minute, moment.second,
        )


@contextmanager
def _time_locale(name: str) -> Iterator[None]:
    with _LOCALE_LOCK:
        previous = locale.setlocale(locale.LC_TIME)
        try:
            locale.setlocale(locale.LC_TIME, name)
            yield
        finally:
            locale.setlocale(locale.LC_TIME, previous)


def locale_available(name: str) -> bool:
    """True if LC_TIME can be switched to ``name`` on this platform."""
    try:
        with _time_locale(name):
            return True
    except locale.Error:
        return False


class LocaleDateFormatter(BaseDateFormatter):
    """Date text with weekday and month names taken from a platform locale."""

    def __init__(self, locale_name: str = DATE_LOCALE):
        self.locale_name = locale_name

    @property
    def name(self) -> str:
        return "locale:{}".format(self.locale_name)

    def format(self, moment: datetime) -> str:
        with _time_locale(self.locale_name):
            weekday = moment.strftime("%A")
            month = moment.strftime("%B")
        return "{}, {} {} {}, {:02d}:{:02d}:{:02d}".format(
            weekday, moment.day, month, moment.year,
            moment.hour, moment.minute, moment.second,
        )


@lru_cache(maxsize=None)
def select_date_formatter(locale_name: str = DATE_LOCALE) -> BaseDateFormatter:
    """Pick the formatter for this process.

    The locale check runs once per locale name; later calls return the
    same formatter instance.
    """
    if locale_available(locale_name):
        formatter: BaseDateFormatter = LocaleDateFormatter(locale_name)
    else:
        formatter = FallbackDateFormatter()
    logger.debug("Using %s date formatter", formatter.name)
    return formatter


# ---------------------------------------------------------------------------
# Replacement
# ---------------------------------------------------------------------------


def normalize_annotation(text: str, formatter: Optional[BaseDateFormatter] = None) -> str:
    """Replace the first bracketed date/time in ``text`` with formatted text.

    Returns ``text`` unchanged when there is no bracketed span or its
    content is not a recognisable date.
    """
    match = ANNOTATION_RE.search(text)
    if match is None:
        return text

    moment = parse_annotation(match.group(1))
    if moment is None:
        logger.debug("Leaving unrecognised annotation as is: %r", match.group(0))
        return text

    if formatter is None:
        formatter = select_date_formatter()
    return text[:match.start()] + formatter.format(moment) + text[match.end():]
