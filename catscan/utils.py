"""Line reading, escape decoding, string comparison and file-name helpers."""

from __future__ import annotations

import codecs
import errno
import os
import platform
from itertools import islice, zip_longest
from typing import Iterator, TextIO

from catscan.diagnostics import Message, Reporter

PROGRAM_NAME = "catscan"
EXE_VERSION = 2
EXE_REVISION = 18
EXE_DATE = "27.04.2016"

_HEX_DIGITS = "0123456789abcdefABCDEF"
_OCTAL_DIGITS = "01234567"

_SIMPLE_ESCAPES = {
    "b": "\b",
    "c": "\x9b",
    "e": "\x1b",
    "f": "\f",
    "g": "\x07",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\x0b",
}


def _fold(char: str | None) -> int:
    """Case-fold one character the way the catalog tools compare names."""
    if char is None:
        return 0
    code = ord(char)
    if 0x41 <= code <= 0x5A or 0xC1 <= code <= 0xDA:
        return code + 0x20
    return code


def _compare_pairs(pairs: Iterator[tuple[str | None, str | None]]) -> int:
    for left, right in pairs:
        folded_left, folded_right = _fold(left), _fold(right)
        if folded_left != folded_right:
            return folded_left - folded_right
        if left is None:
            return 0
    return 0


def stricmp(first: str, second: str) -> int:
    """Compare two strings ignoring case; negative, zero or positive."""
    return _compare_pairs(zip_longest(first, second))


def strnicmp(first: str, second: str, length: int) -> int:
    """Compare at most ``length`` characters ignoring case.

    A negative length compares the whole strings.
    """
    limit = None if length < 0 else length
    return _compare_pairs(islice(zip_longest(first, second), limit))


def utf8_strlen(data: bytes | str) -> int:
    """Count the characters of UTF-8 data; 0 if a lead byte is invalid."""
    raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    raw = raw.split(b"\0", 1)[0]
    count = 0
    remaining = iter(raw)
    for byte in remaining:
        if byte <= 0x7F:
            follow = 0
        elif byte & 0xE0 == 0xC0:
            follow = 1
        elif byte & 0xF0 == 0xE0:
            follow = 2
        elif byte & 0xF8 == 0xF0:
            follow = 3
        else:
            return 0
        for _ in islice(remaining, follow):
            pass
        count += 1
    return count


def convert_string(
    text: bytes, from_charset: str, to_charset: str, reporter: Reporter
) -> bytes | None:
    """Convert ``text`` from one charset to another.

    The result may not be longer than the input. On failure a warning is
    reported and None is returned.
    """
    try:
        source = codecs.lookup(from_charset)
        target = codecs.lookup(to_charset)
    except LookupError:
        reporter.warn(Message.ERR_ICONV_OPEN_FAILED, os.strerror(errno.EINVAL))
        return None

    raw = bytes(text).split(b"\0", 1)[0]
    try:
        converted = target.encode(source.decode(raw)[0])[0]
    except (UnicodeDecodeError, UnicodeEncodeError):
        reporter.warn(Message.ERR_ICONV_FAILED, os.strerror(errno.EILSEQ))
        return None

    if len(converted) > len(raw):
        reporter.warn(Message.ERR_ICONV_FAILED, os.strerror(errno.E2BIG))
        return None
    return converted


def _is_hex(char: str) -> bool:
    return len(char) == 1 and char in _HEX_DIGITS


def _is_octal(char: str) -> bool:
    return len(char) == 1 and char in _OCTAL_DIGITS


def gethex(char: str, reporter: Reporter) -> int:
    """Return the value of a hex digit; report an error otherwise."""
    if _is_hex(char):
        return int(char, 16)
    reporter.error(Message.ERR_EXPECTEDHEX)
    return 0


def getoctal(char: str, reporter: Reporter) -> int:
    """Return the value of an octal digit; report an error otherwise."""
    if _is_octal(char):
        return int(char, 8)
    reporter.error(Message.ERR_EXPECTEDOCTAL)
    return 0


def over_space(text: str) -> str:
    """Return ``text`` without its leading blanks and tabs."""
    return text.lstrip(" \t")


def _char_at(text: str, pos: int) -> str:
    return text[pos] if pos < len(text) else ""


def _ascii_lower(char: str) -> str:
    return char.lower() if "A" <= char <= "Z" else char


def read_char(text: str, pos: int, reporter: Reporter) -> tuple[str, int]:
    """Decode one possibly escaped character of ``text`` starting at ``pos``.

    Returns the decoded characters (none, one, or two for an escaped
    backslash or bracket) and the position after what was read.
    """
    char = _char_at(text, pos)
    pos += 1
    if char != "\\":
        return char, pos

    escaped = _ascii_lower(_char_at(text, pos))
    pos += 1

    if escaped == "":
        return "\0", len(text)
    if escaped == "\n":
        return "", pos
    if escaped in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[escaped], pos
    if escaped == "x":
        value = gethex(_char_at(text, pos), reporter)
        pos += 1
        following = _char_at(text, pos)
        if _is_hex(following):
            value = (value << 4) + gethex(following, reporter)
            pos += 1
        return chr(value & 0xFF), pos
    if _is_octal(escaped):
        value = getoctal(escaped, reporter)
        for _ in range(2):
            following = _char_at(text, pos)
            if _is_octal(following):
                value = (value << 3) + getoctal(following, reporter)
                pos += 1
        return chr(value & 0xFF), pos
    if escaped in (")", "\\"):
        return "\\" + escaped, pos
    return escaped, pos


def strip_file_name(filename: str, remove_ending: bool, remove_path: bool) -> str:
    """Copy a file name, optionally without its directory and its ending."""
    result = filename
    if remove_path:
        _, colon, rest = result.partition(":")
        if colon:
            result = rest
        result = result.rpartition("/")[2]
    if remove_ending:
        stem, dot, _ = result.rpartition(".")
        if dot:
            result = stem
    return result


def add_file_name(pathname: str, filename: str) -> str:
    """Join a directory name and a file name."""
    return f"{pathname}/{filename}"


def _system_short() -> str:
    return {"Linux": "linux", "Windows": "WIN", "Darwin": "OSX"}.get(
        platform.system(), "???"
    )


def _cpu() -> str:
    machine = platform.machine().lower()
    if machine in ("x86_64", "amd64"):
        return "x86_64"
    if machine in ("i386", "i486", "i586", "i686", "x86"):
        return "x86"
    if machine.startswith(("ppc", "powerpc")):
        return "PPC"
    return "???"


def version_string() -> str:
    """Name, version, system and date of this program."""
    return (
        f"{PROGRAM_NAME} {EXE_VERSION}.{EXE_REVISION} "
        f"[{_system_short()}/{_cpu()}] ({EXE_DATE})"
    )


def usage_text() -> str:
    """The text printed to describe the calling syntax."""
    return (
        f"{version_string()}\n"
        "\n"
        f"{Message.USAGE_HEAD.template}\n"
        f"     {PROGRAM_NAME} CDFILE/A,CTFILE,POFILE,CATALOG/K,NEWCTFILE/K,SOURCES/M,\n"
        "             WARNCTGAPS/S,NOOPTIM/S,FILL/S,FLUSH/S,NOBEEP/S,\n"
        "             QUIET/S,NOLANGTOLOWER/S,NOBUFFEREDIO/S,MODIFIED/S,\n"
        "             CODESET/K,VERSION/N,REVISION/N,COPYMSGNEW/S,OLDMSGNEW/K\n"
        "\n"
        f"{Message.USAGE.template}\n"
    )


class LineReader:
    """Reads logical lines from a text stream.

    Carriage returns are dropped. A line ending in a single backslash is
    continued on the next physical line; the backslash and newline stay in
    the result. Lines starting with ';' are never continued. Every newline
    read advances the line counter, and the reporter's one if given.
    """

    def __init__(self, stream: TextIO, reporter: Reporter | None = None) -> None:
        self._stream = stream
        self._reporter = reporter
        self.line = 0

    def _count_newline(self) -> None:
        self.line += 1
        if self._reporter is not None:
            self._reporter.line += 1

    def read_line(self) -> str | None:
        """Return the next logical line, or None at end of input."""
        char = self._stream.read(1)
        if not char:
            return None

        comment = char == ";"
        chars: list[str] = []
        backslash_seen = False
        backslash_pos = 0

        while char:
            if char == "\n":
                self._count_newline()
                if not backslash_seen:
                    break
                chars.append(char)
                backslash_seen = False
            elif char == "\\":
                if comment:
                    pass
                elif backslash_seen and backslash_pos == len(chars) - 1:
                    backslash_seen = False
                else:
                    backslash_seen = True
                    backslash_pos = len(chars)
                chars.append(char)
            elif char != "\r":
                backslash_seen = False
                chars.append(char)
            char = self._stream.read(1)

        return "".join(chars)

    def __iter__(self) -> Iterator[str]:
        while (line := self.read_line()) is not None:
            yield line