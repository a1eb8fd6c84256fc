"""Scanning of catalog translation files."""

from __future__ import annotations

import os
import re
import string

from catscan.diagnostics import Message, Reporter
from catscan.model import Catalog, CatString, ScanOptions
from catscan.utils import LineReader, over_space, strnicmp

_IDENTIFIER = re.compile(r"[A-Za-z0-9_]*")
_OCTAL_PREFIX = re.compile(r"0[0-7]*")
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_ALNUM = frozenset(string.ascii_letters + string.digits)
_DIGITS = frozenset(string.digits)
_ULONG_MAX = 0xFFFFFFFFFFFFFFFF


def _is_placeholder(char: str) -> bool:
    return char in _ALNUM or char == "%"


def _char_at(text: str, pos: int) -> str:
    return text[pos] if pos < len(text) else ""


def _check_placeholders(cd: str, ct: str, identifier: str, reporter: Reporter) -> None:
    """Warn when the '%' placeholders of description and translation differ."""
    cd_pos = ct_pos = 0
    while True:
        cd_found = cd.find("%", cd_pos)
        ct_found = ct.find("%", ct_pos)

        if cd_found < 0 and ct_found < 0:
            return
        if cd_found >= 0 and ct_found >= 0:
            cd_pos, ct_pos = cd_found + 1, ct_found + 1
            cd_char, ct_char = _char_at(cd, cd_pos), _char_at(ct, ct_pos)
            if _is_placeholder(cd_char):
                if cd_char != ct_char:
                    reporter.warn(Message.ERR_MISMATCHING_PLACEHOLDERS, identifier)
                    return
                if cd_char == "%":
                    cd_pos += 1
                if ct_char == "%":
                    ct_pos += 1
            elif _is_placeholder(ct_char):
                reporter.warn(Message.ERR_EXCESSIVE_PLACEHOLDERS, identifier)
                return
        elif cd_found >= 0:
            if _is_placeholder(_char_at(cd, cd_found + 1)):
                reporter.warn(Message.ERR_MISSING_PLACEHOLDERS, identifier)
            return
        else:
            if _is_placeholder(_char_at(ct, ct_found + 1)):
                reporter.warn(Message.ERR_EXCESSIVE_PLACEHOLDERS, identifier)
            return


def _check_translation(cs: CatString, reporter: Reporter) -> None:
    """Compare a fresh translation with its description string."""
    ct = cs.ct_str or ""
    cd = cs.cd_str
    identifier = cs.identifier

    if cs.min_len > 0 and len(ct) < cs.min_len:
        reporter.warn(Message.ERR_STRING_TOO_SHORT, identifier)
    if cs.max_len > 0 and len(ct) > cs.max_len:
        reporter.warn(Message.ERR_STRING_TOO_LONG, identifier)

    if cd and not ct:
        reporter.warn(Message.ERR_EMPTYTRANSLATION, identifier)

    if len(ct) >= 3 and len(cd) >= 3:
        cd_dots, ct_dots = cd.endswith("..."), ct.endswith("...")
        if cd_dots and not ct_dots:
            reporter.warn(Message.ERR_TRAILING_ELLIPSIS, identifier)
        if not cd_dots and ct_dots:
            reporter.warn(Message.ERR_NO_TRAILING_ELLIPSIS, identifier)

    if ct and cd:
        cd_blank, ct_blank = cd.endswith(" "), ct.endswith(" ")
        if cd_blank and not ct_blank:
            reporter.warn(Message.ERR_TRAILING_BLANKS, identifier)
        if not cd_blank and ct_blank:
            reporter.warn(Message.ERR_NO_TRAILING_BLANKS, identifier)
        _check_placeholders(cd, ct, identifier, reporter)


def _parse_codeset(text: str) -> int:
    """Read a codeset number of decimal digits; a leading 0 means octal."""
    if text.startswith("0"):
        return int(_OCTAL_PREFIX.match(text).group(), 8)
    return int(text)


class _TranslationScanner:
    """State kept while the lines of one translation file are read."""

    def __init__(self, catalog: Catalog, reporter: Reporter, options: ScanOptions) -> None:
        self.catalog = catalog
        self.reporter = reporter
        self.options = options
        self.current: CatString | None = None
        self.codeset_checked = False
        self.result = True

    def comment(self, line: str) -> None:
        marker = self.options.old_msg_new
        if (
            self.options.copy_news
            and self.current is not None
            and strnicmp(line, marker, len(marker)) == 0
        ):
            self.current.not_in_ct = True

    def command(self, line: str) -> None:
        catalog, reporter = self.catalog, self.reporter
        line = line.lstrip("# \t")

        if strnicmp(line, "version", 7) == 0:
            if (
                catalog.cat_version_string is not None
                or catalog.cat_rcs_id is not None
                or catalog.cat_name is not None
            ):
                reporter.error(Message.ERR_DOUBLECTVERSION)
            line = over_space(line[7:])
            if line.startswith("$") and strnicmp(line[1:], "VER:", 4) == 0:
                catalog.cat_version_string = line
            else:
                reporter.error(Message.ERR_BADCTVERSION)
        elif strnicmp(line, "codeset", 7) == 0:
            if self.codeset_checked:
                reporter.error(Message.ERR_DOUBLECTCODESET)
            line = over_space(line[7:])
            if not line or any(char not in _DIGITS for char in line):
                reporter.error(Message.ERR_BADCTCODESET)
            value = _parse_codeset(line)
            if value > _ULONG_MAX:
                reporter.error(Message.ERR_BADCTCODESET)
            catalog.code_set = value
            self.codeset_checked = True
        elif strnicmp(line, "language", 8) == 0:
            if catalog.cat_language is not None:
                reporter.error(Message.ERR_DOUBLECTLANGUAGE)
            language = over_space(line[8:])
            if self.options.lang_to_lower:
                language = language.translate(_ASCII_LOWER)
            catalog.cat_language = catalog.add_chunk("LANG", language)
        elif strnicmp(line, "chunk", 5) == 0:
            line = over_space(line[5:])
            chunk_id = line[:4]
            catalog.add_chunk(chunk_id, over_space(line[4:]))
        elif strnicmp(line, "rcsid", 5) == 0:
            if catalog.cat_version_string is not None or catalog.cat_rcs_id is not None:
                reporter.error(Message.ERR_DOUBLECTVERSION)
            catalog.cat_rcs_id = over_space(line[5:])
        elif strnicmp(line, "name", 5) == 0:
            if catalog.cat_version_string is not None or catalog.cat_name is not None:
                reporter.error(Message.ERR_DOUBLECTVERSION)
            catalog.cat_name = over_space(line[4:])
        else:
            reporter.warn(Message.ERR_UNKNOWNCTCOMMAND)

    def definition(self, line: str, reader: LineReader) -> None:
        reporter = self.reporter
        if line[:1] in (" ", "\t"):
            reporter.error(Message.ERR_UNEXPECTEDBLANKS)
            line = over_space(line)

        identifier = _IDENTIFIER.match(line).group()
        if not identifier:
            reporter.error(Message.ERR_NOIDENTIFIER)
            return
        if over_space(line[len(identifier):]):
            reporter.error(Message.ERR_EXTRA_CHARACTERS_ID, identifier)

        text = reader.read_line()
        if text is None:
            reporter.warn(Message.ERR_MISSINGSTRING)
            if self.current is not None:
                self.current.ct_str = ""
            return

        self.current = self.catalog.find_string(identifier)
        if self.current is None:
            reporter.warn(Message.ERR_UNKNOWNIDENTIFIER, identifier)
            return

        cs = self.current
        if cs.ct_str is not None:
            self.result = False
            reporter.error(Message.ERR_DOUBLE_IDENTIFIER, cs.identifier)
        cs.ct_str = text
        cs.not_in_ct = False
        _check_translation(cs, reporter)

    def finish(self) -> bool:
        catalog, reporter = self.catalog, self.reporter
        if not self.codeset_checked:
            reporter.error_quick(Message.ERR_NOCTCODESET)
        if not (
            catalog.cat_version_string is not None
            or (catalog.cat_rcs_id is not None and catalog.cat_name is not None)
        ):
            reporter.error_quick(Message.ERR_NOCTVERSION)

        missing = [cs for cs in catalog.strings if cs.ct_str is None]
        for cs in missing:
            reporter.warn_quick(Message.ERR_MISSINGTRANSLATION, cs.identifier)
        if self.options.warn_ct_gaps:
            for cs in missing:
                reporter.warn(Message.ERR_CTGAP, cs.identifier)

        if self.result:
            catalog.ct_scanned = True
        return self.result


def scan_ct_file(
    ctfile: str | os.PathLike,
    catalog: Catalog,
    reporter: Reporter | None = None,
    options: ScanOptions | None = None,
) -> bool:
    """Read a catalog translation file into the strings of ``catalog``.

    Returns True on success. Errors raise :class:`FatalError`; doubtful
    translations are reported as warnings.
    """
    reporter = reporter if reporter is not None else Reporter()
    options = options if options is not None else ScanOptions()
    path = os.fspath(ctfile)
    reporter.begin_file(path)

    try:
        stream = open(path, encoding="latin-1", newline="")
    except OSError:
        reporter.error_quick(Message.ERR_NOCATALOGTRANSLATION, path)
        raise

    scanner = _TranslationScanner(catalog, reporter, options)
    with stream:
        reader = LineReader(stream, reporter)
        for line in reader:
            if line.startswith(";"):
                scanner.comment(line)
            elif line.startswith("#"):
                scanner.command(line)
            else:
                scanner.definition(line, reader)
    return scanner.finish()