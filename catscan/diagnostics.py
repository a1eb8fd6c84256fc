"""Diagnostic messages and the reporter that prints warnings and errors."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

_MAX_PART = 255


class Message(Enum):
    """Every message the scanners can print, with its number and template."""

    USAGE_HEAD = (0, "Usage:")
    USAGE = (
        1,
        "  CDFILE          catalog description file to scan\n"
        "  CTFILE          catalog translation file to scan\n"
        "  POFILE          catalog translation in PO format\n"
        "  CATALOG         catalog file to create\n"
        "  NEWCTFILE       catalog translation file to create\n"
        "  SOURCES         sources to create; must be something like sfile=sdfile,\n"
        "                  where sfile is a source file and sdfile is a source\n"
        "                  description file\n"
        "  WARNCTGAPS      warn about identifiers missing in translation\n"
        "  NOOPTIM         do not skip unchanged strings in translation\n"
        "  FILL            fill missing identifiers with original text\n"
        "  FLUSH           flush memory after the catalog is created\n"
        "  NOBEEP          no beep on errors\n"
        "  QUIET           do not show warnings\n"
        "  NOLANGTOLOWER   prevent #language name from being lowercased\n"
        "  NOBUFFEREDIO    disable buffered I/O\n"
        "  MODIFIED        create catalog only if the translation was changed\n"
        "  CODESET         codeset to force in the output file\n"
        "  VERSION         version number to force in the output file\n"
        "  REVISION        revision number to force in the output file\n"
        "  COPYMSGNEW      turn on copying of the new-message marker\n"
        "  OLDMSGNEW       old-style new-message marker",
    )
    FILEUPTODATE = (2, "File %s is up to date")
    ERR_WARNING = (3, "%s, line %d - warning:")
    ERR_ERROR = (4, "%s, line %d - ERROR:")
    ERR_EXPECTEDHEX = (5, "Expected hex character (one of [0-9a-fA-F]).")
    ERR_EXPECTEDOCTAL = (6, "Expected octal character (one of [0-7]).")
    ERR_NOLENGTHBYTES = (7, "Lengthbytes cannot be larger than %d.")
    ERR_UNKNOWNCDCOMMAND = (8, "Unknown catalog description command.")
    ERR_UNEXPECTEDBLANKS = (9, "Unexpected blanks.")
    ERR_NOIDENTIFIER = (10, "Missing identifier.")
    ERR_MISSINGSTRING = (11, "Unexpected end of file (missing catalog string).")
    ERR_UNKNOWNCTCOMMAND = (12, "Unknown catalog translation command.")
    ERR_UNKNOWNIDENTIFIER = (13, "%s missing in catalog description.")
    ERR_UNKNOWNSTRINGTYPE = (14, "Unknown string type.")
    ERR_NOTERMINATEBRACKET = (15, "Unexpected end of line (missing ')').")
    ERR_NOBINCHARS = (16, "Binary characters in string type None.")
    ERR_CTGAP = (17, "%s missing in catalog translation.")
    ERR_DOUBLECTLANGUAGE = (18, "Catalog language declared twice.")
    ERR_DOUBLECTVERSION = (19, "Catalog version declared twice.")
    ERR_WRONGRCSID = (20, "Incorrect RCS Id.")
    ERR_NOMEMORY = (21, "Out of memory!")
    ERR_NOCATALOGDESCRIPTION = (22, "Cannot open catalog description %s.")
    ERR_NOCATALOGTRANSLATION = (23, "Cannot open catalog translation file %s.")
    ERR_NOCTVERSION = (
        24,
        "Missing catalog translation version. "
        "Use either '## version' or '## rcsid' and '## name'.",
    )
    ERR_NOCATALOG = (25, "Cannot open catalog file %s.")
    ERR_NONEWCTFILE = (26, "Cannot create catalog translation file %s.")
    ERR_NOCTLANGUAGE = (27, "Missing catalog translation language.")
    ERR_NOSOURCE = (28, "Cannot open source file %s.")
    ERR_NOSOURCEDESCRIPTION = (29, "Cannot open source description file %s.")
    ERR_NOCTARGUMENT = (30, "Creating a catalog needs a catalog translation file as argument.")
    ERR_CANTCHECKDATE = (31, "Cannot get the datestamp of %s.")
    ERR_NOCTFILENAME = (32, "Creating a catalog translation needs a file name as argument.")
    ERR_NOCATFILENAME = (33, "Creating a catalog needs a catalog file name as argument.")
    ERR_BADPREFS = (34, "Error processing the preferences, falling back to defaults.")
    ERR_BADCTLANGUAGE = (35, "Invalid catalog translation language.")
    ERR_DOUBLECTCODESET = (36, "Catalog codeset declared twice.")
    ERR_BADCTCODESET = (37, "Invalid catalog codeset.")
    ERR_NOCTCODESET = (38, "Missing catalog translation codeset.")
    ERR_ERROR_QUICK = (39, "%s - ERROR:")
    ERR_BADCTVERSION = (
        40,
        "Wrong version string format in translation file. "
        "Use '## version $VER: name version.revision (date)'.",
    )
    ERR_WARNING_QUICK = (41, "%s - warning:")
    ERR_MISSINGTRANSLATION = (42, "Identifier '%s' is missing a translation.")
    ERR_EMPTYTRANSLATION = (43, "Empty translation for identifier '%s'.")
    ERR_MISMATCHINGCONTROLCHARACTERS = (
        44,
        "Mismatching trailing control characters for identifier '%s'.",
    )
    ERR_DOUBLE_IDENTIFIER = (45, "Identifier '%s' declared twice.")
    ERR_STRING_TOO_SHORT = (46, "String too short for identifier '%s'.")
    ERR_STRING_TOO_LONG = (47, "String too long for identifier '%s'.")
    ERR_TRAILING_ELLIPSIS = (
        48,
        "Original string has a trailing ellipsis ('...') for identifier '%s'.",
    )
    ERR_NO_TRAILING_ELLIPSIS = (
        49,
        "Original string has no trailing ellipsis ('...') for identifier '%s'.",
    )
    ERR_TRAILING_BLANKS = (50, "Original string has trailing blanks for identifier '%s'.")
    ERR_NO_TRAILING_BLANKS = (51, "Original string has no trailing blanks for identifier '%s'.")
    ERR_MISMATCHING_PLACEHOLDERS = (52, "Mismatching placeholders for identifier '%s'.")
    ERR_MISSING_PLACEHOLDERS = (53, "Missing placeholders for identifier '%s'.")
    ERR_EXCESSIVE_PLACEHOLDERS = (54, "Excessive placeholders for identifier '%s'.")
    ERR_NO_LEADING_BRACKET = (55, "Missing '(' after identifier '%s'.")
    ERR_NO_TRAILING_BRACKET = (56, "Missing ')' after identifier '%s'.")
    ERR_DOUBLE_ID = (57, "ID number used twice for identifier '%s'.")
    ERR_NO_MIN_LEN = (58, "Missing minimum length (or '/') for identifier '%s'.")
    ERR_NO_MAX_LEN = (59, "Missing maximum length (or '/') for identifier '%s'.")
    ERR_EXTRA_CHARACTERS = (60, "Extra characters at the end of the line.")
    ERR_EXTRA_CHARACTERS_ID = (61, "Extra characters at the end of the line after identifier '%s'.")
    ERR_NON_ASCII_CHARACTER = (
        62,
        "Non-ASCII character 0x%02x found in original string for identifier '%s'.",
    )
    ERR_NO_CAT_REVISION = (63, "Missing catalog revision.")
    ERR_CONVERSION_FAILED = (64, "Conversion of the string for identifier '%s' failed.")
    ERR_UNKNOWN_SOURCE_CHARSET = (65, "Unknown source charset '%s'.")
    ERR_UNKNOWN_DESTINATION_CHARSET = (66, "Unknown destination charset '%s'.")
    ERR_INVALID_CHARS_FOUND = (67, "%d invalid characters found during conversion.")
    ERR_ICONV_FAILED = (68, "Charset conversion failed: %s")
    ERR_ICONV_OPEN_FAILED = (69, "Opening a charset converter failed: %s")
    ERR_NO_CAT_VERSION = (70, "Missing catalog version.")

    def __init__(self, number: int, template: str) -> None:
        self.number = number
        self.template = template

    def format(self, *args: object) -> str:
        """Fill the template with ``args`` in printf style."""
        return self.template % args


class FatalError(Exception):
    """An error that ends the run; ``exit_code`` is the status to exit with."""

    def __init__(self, text: str, exit_code: int = 10) -> None:
        super().__init__(text)
        self.text = text
        self.exit_code = exit_code


def _render(message: Message | str, args: tuple) -> str:
    template = message.template if isinstance(message, Message) else message
    return (template % args)[:_MAX_PART]


@dataclass
class Reporter:
    """Prints warnings and errors for the file being scanned.

    Errors raise :class:`FatalError`; warnings are counted and set the
    return code to 5.
    """

    stream: TextIO | None = None
    quiet: bool = False
    file: str | None = None
    line: int = 0
    warnings: int = 0
    return_code: int = 0

    def begin_file(self, path: str) -> None:
        """Start reporting for ``path`` at line 0."""
        self.file = str(path)
        self.line = 0

    def _emit(self, header: str, text: str) -> None:
        out = self.stream if self.stream is not None else sys.stderr
        out.write(f"{header} {text}\n")

    def _fail(self, header: str, message: Message | str, args: tuple) -> None:
        text = _render(message, args)
        self._emit(header, text)
        raise FatalError(f"{header} {text}", 10)

    def error(self, message: Message | str, *args: object) -> None:
        """Print an error with file and line, then raise FatalError."""
        header = _render(Message.ERR_ERROR, (str(self.file), self.line))
        self._fail(header, message, args)

    def error_quick(self, message: Message | str, *args: object) -> None:
        """Print an error with the file name only, then raise FatalError."""
        header = _render(Message.ERR_ERROR_QUICK, (str(self.file),))
        self._fail(header, message, args)

    def _count_warning(self) -> None:
        self.warnings += 1
        self.return_code = 5

    def warn(self, message: Message | str, *args: object) -> None:
        """Print a warning with file and line unless quiet; always count it."""
        if not self.quiet:
            header = _render(Message.ERR_WARNING, (str(self.file), self.line))
            self._emit(header, _render(message, args))
        self._count_warning()

    def warn_quick(self, message: Message | str, *args: object) -> None:
        """Print a warning with the file name only unless quiet; always count it."""
        if not self.quiet:
            header = _render(Message.ERR_WARNING_QUICK, (str(self.file),))
            self._emit(header, _render(message, args))
        self._count_warning()