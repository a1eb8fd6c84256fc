"""Parsing of day, month and year from a date string laid out by a format."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntFlag, auto

_NUL = "\0"


class _State(Enum):
    DEFAULT = auto()
    SPECIFIER = auto()
    DONE = auto()
    DAY_OF_MONTH = auto()
    MONTH = auto()
    YEAR = auto()


class _Flag(IntFlag):
    NONE = 0
    MDAY = auto()
    MON = auto()
    YEAR = auto()
    FOUR_DIGIT_YEAR = auto()


@dataclass
class DateFields:
    """Result of :func:`parse_date`.

    ``month`` counts from 0 (January) and ``year`` counts the years since
    1900, as in a C ``struct tm``. ``valid`` tells whether the values passed
    the range checks; ``remainder`` is the part of the text left unread.
    """

    day: int = 0
    month: int = 0
    year: int = 0
    valid: bool = True
    remainder: str = ""


def _at(text: str, pos: int) -> str:
    return text[pos] if pos < len(text) else _NUL


def _mentions(fmt: str, *specifiers: str) -> bool:
    return any(spec in fmt for spec in specifiers)


def parse_date(text: str, fmt: str) -> DateFields:
    """Read day, month and year from ``text`` according to ``fmt``.

    Only the specifiers %d, %e, %m, %y and %Y are understood, optionally
    written with a '-' as in %-d. Literal separators between them must match.
    """
    values = {_State.DAY_OF_MONTH: 0, _State.MONTH: 0, _State.YEAR: 0}
    flags = _Flag.NONE
    state = _State.DEFAULT

    fc, fpos = _at(fmt, 0), 1
    sc, spos = _at(text, 0), 1

    while state is not _State.DONE:
        if fc == _NUL and sc == _NUL:
            state = _State.DONE

        if state is _State.DEFAULT:
            if fc == "%":
                state = _State.SPECIFIER
                fc, fpos = _at(fmt, fpos), fpos + 1
            else:
                state = _State.DONE
        elif state is _State.SPECIFIER:
            if fc in ("d", "e"):
                flags |= _Flag.MDAY
                state = _State.DAY_OF_MONTH
                fc, fpos = _at(fmt, fpos), fpos + 1
            elif fc == "m":
                flags |= _Flag.MON
                state = _State.MONTH
                fc, fpos = _at(fmt, fpos), fpos + 1
            elif fc in ("Y", "y"):
                if fc == "Y":
                    flags |= _Flag.FOUR_DIGIT_YEAR
                flags |= _Flag.YEAR
                state = _State.YEAR
                fc, fpos = _at(fmt, fpos), fpos + 1
            elif fc == "-":
                fc, fpos = _at(fmt, fpos), fpos + 1
            else:
                state = _State.DONE
        elif state in values:
            if sc == fc:
                state = _State.DEFAULT
                fc, fpos = _at(fmt, fpos), fpos + 1
                sc, spos = _at(text, spos), spos + 1
            elif "0" <= sc <= "9":
                values[state] = values[state] * 10 + int(sc)
                sc, spos = _at(text, spos), spos + 1
            else:
                state = _State.DONE

    rest_fmt = fmt[fpos:]
    day = values[_State.DAY_OF_MONTH]
    month = values[_State.MONTH]
    year = values[_State.YEAR]
    valid = True

    if flags & _Flag.MDAY or _mentions(rest_fmt, "%d", "%-d", "%e"):
        if not 1 <= day <= 31:
            valid = False

    if flags & _Flag.MON or _mentions(rest_fmt, "%m", "%-m"):
        if 1 <= month <= 12:
            month -= 1
        else:
            valid = False

    if flags & _Flag.YEAR or _mentions(rest_fmt, "%y", "%-y", "%Y", "%-Y"):
        if flags & _Flag.FOUR_DIGIT_YEAR or _mentions(rest_fmt, "%Y", "%-Y"):
            if year >= 1900:
                year -= 1900
            else:
                valid = False
        elif year < 100:
            if year < 40:
                year += 100
        elif year >= 1900:
            year -= 1900
        else:
            valid = False

    if valid and flags & _Flag.MDAY:
        if month == 1:
            if day > 29:
                valid = False
        elif month in (3, 5, 8, 10):
            if day > 30:
                valid = False

    return DateFields(day, month, year, valid, text[spos:])