"""Scanning of catalog description files."""

from __future__ import annotations

import os
import re
import string

from catscan.diagnostics import Message, Reporter
from catscan.model import Catalog, CatString, ScanOptions
from catscan.utils import LineReader, over_space, read_char, strnicmp

_SPACE = "[ \t\n\v\f\r]*"
_NUMBER_ANY = re.compile(
    _SPACE + r"([+-]?)(?:0[xX]([0-9a-fA-F]+)|(0[0-7]*)|([1-9][0-9]*))"
)
_NUMBER_HEX = re.compile(_SPACE + r"([+-]?)(?:0[xX])?([0-9a-fA-F]+)")
_NUMBER_DEC = re.compile(_SPACE + r"([+-]?)([0-9]+)")
_IDENTIFIER = re.compile(r"[A-Za-z0-9_]*")
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _strtol(text: str, base: int = 0) -> tuple[int, str]:
    """Read a leading integer the way C's strtol does; return value and rest."""
    if base == 16:
        match = _NUMBER_HEX.match(text)
        if not match:
            return 0, text
        value = int(match.group(2), 16)
    elif base == 10:
        match = _NUMBER_DEC.match(text)
        if not match:
            return 0, text
        value = int(match.group(2))
    else:
        match = _NUMBER_ANY.match(text)
        if not match:
            return 0, text
        hex_digits, octal_digits, decimal_digits = match.group(2, 3, 4)
        if hex_digits is not None:
            value = int(hex_digits, 16)
        elif octal_digits is not None:
            value = int(octal_digits, 8)
        else:
            value = int(decimal_digits)
    if match.group(1) == "-":
        value = -value
    return value, text[match.end():]


def _string_length(text: str, reporter: Reporter) -> int:
    """Length of a catalog string after escapes; an escaped '\\' or ')' counts once."""
    length = 0
    pos = 0
    while pos < len(text):
        decoded, pos = read_char(text, pos, reporter)
        length += 1 if len(decoded) == 2 else len(decoded)
    return length


def _command(line: str, catalog: Catalog, reporter: Reporter,
             options: ScanOptions, state: dict) -> bool:
    """Handle one '#' command line; return False if it was not understood."""
    line = line.lstrip("# \t")
    check_extra = False

    if strnicmp(line, "language", 8) == 0:
        language = over_space(line[9:])
        if options.lang_to_lower:
            language = language.translate(_ASCII_LOWER)
        catalog.language = language
    elif strnicmp(line, "version", 7) == 0:
        catalog.version, line = _strtol(over_space(line[8:]), 0)
        check_extra = True
    elif strnicmp(line, "basename", 8) == 0:
        catalog.basename = over_space(line[9:])
    elif any(strnicmp(line, word, len(word)) == 0 for word in ("ifdef", "endif", "array")):
        return True
    elif strnicmp(line, "header", 6) == 0:
        catalog.header_name = over_space(line[7:])
    elif strnicmp(line, "lengthbytes", 11) == 0:
        state["lenbytes"], _ = _strtol(over_space(line[12:]), 10)
    elif any(strnicmp(line, word, len(word)) == 0
             for word in ("printf_check_off", "printf_check_on")):
        return True
    else:
        reporter.warn(Message.ERR_UNKNOWNCDCOMMAND)
        return False

    if check_extra and over_space(line):
        reporter.error(Message.ERR_EXTRA_CHARACTERS)
    return True


def _definition(line: str, reader: LineReader, catalog: Catalog,
                reporter: Reporter, state: dict) -> bool:
    """Handle one identifier definition and the string line after it."""
    result = True

    if line[:1] in (" ", "\t"):
        reporter.error(Message.ERR_UNEXPECTEDBLANKS)

    identifier = _IDENTIFIER.match(line).group()
    if not identifier:
        reporter.error(Message.ERR_NOIDENTIFIER)
    line = over_space(line[len(identifier):])

    used_ids = {cs.id for cs in catalog.strings}
    while state["next_id"] in used_ids:
        state["next_id"] += 1

    cs = CatString(identifier, id=state["next_id"])

    if not line.startswith("("):
        reporter.error(Message.ERR_NO_LEADING_BRACKET, identifier)

    line = over_space(line[1:])

    if not line.startswith("/"):
        if line.startswith("+"):
            offset, line = _strtol(line, 0)
            state["next_id"] += offset
        elif line.startswith("$"):
            state["next_id"], line = _strtol(line[1:], 16)
        else:
            state["next_id"], line = _strtol(line, 0)
        cs.id = state["next_id"]
        line = over_space(line)

    for other in catalog.strings:
        if other.id == cs.id:
            reporter.error(Message.ERR_DOUBLE_ID, identifier)
        if other.identifier == identifier:
            reporter.error(Message.ERR_DOUBLE_IDENTIFIER, identifier)

    if not line.startswith("/"):
        reporter.warn(Message.ERR_NO_MIN_LEN, identifier)
        result = False
    else:
        line = over_space(line[1:])
        if not line.startswith("/"):
            cs.min_len, line = _strtol(line, 0)
            line = over_space(line)
        if not line.startswith("/"):
            reporter.warn(Message.ERR_NO_MAX_LEN, identifier)
            result = False
        else:
            line = over_space(line[1:])
            if not line.startswith(")"):
                cs.max_len, line = _strtol(line, 0)
                line = over_space(line)
            if not line.startswith(")"):
                reporter.error(Message.ERR_NO_TRAILING_BRACKET, identifier)
            if over_space(line[1:]):
                reporter.error(Message.ERR_EXTRA_CHARACTERS_ID, identifier)

    text = reader.read_line()
    if text is None:
        reporter.warn(Message.ERR_MISSINGSTRING)
        result = False
        cs.cd_str = ""
    else:
        non_ascii = next((char for char in text if ord(char) > 127), None)
        if non_ascii is not None:
            reporter.warn(Message.ERR_NON_ASCII_CHARACTER, ord(non_ascii) & 0xFF, identifier)
        cs.cd_str = text

    length = _string_length(cs.cd_str, reporter)
    if cs.min_len > 0 and length < cs.min_len:
        reporter.warn(Message.ERR_STRING_TOO_SHORT, identifier)
    if cs.max_len > 0 and length > cs.max_len:
        reporter.warn(Message.ERR_STRING_TOO_LONG, identifier)

    cs.nr = catalog.num_strings
    cs.len_bytes = state["lenbytes"]
    catalog.strings.append(cs)
    return result


def scan_cd_file(
    cdfile: str | os.PathLike,
    catalog: Catalog,
    reporter: Reporter | None = None,
    options: ScanOptions | None = None,
) -> bool:
    """Read a catalog description file into ``catalog``.

    Returns True if no problem was found and False if a warning made the
    description doubtful. Errors raise :class:`FatalError`.
    """
    reporter = reporter if reporter is not None else Reporter()
    options = options if options is not None else ScanOptions()
    path = os.fspath(cdfile)
    reporter.begin_file(path)

    try:
        stream = open(path, encoding="latin-1", newline="")
    except OSError:
        reporter.error_quick(Message.ERR_NOCATALOGDESCRIPTION, path)
        raise

    result = True
    state = {"next_id": 0, "lenbytes": 0}
    with stream:
        reader = LineReader(stream, reporter)
        for line in reader:
            catalog.cd_lines.append(line)
            if line.startswith(";"):
                continue
            if line.startswith("#"):
                ok = _command(line, catalog, reporter, options, state)
            else:
                ok = _definition(line, reader, catalog, reporter, state)
            result = result and ok
    return result