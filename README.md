# catscan

`catscan` reads and checks localization catalogs made of two kinds of
plain-text files:

* a **catalog description** (`.cd`) file, which declares every string of a
  program: its identifier, its numeric ID, optional minimum and maximum
  lengths, and the built-in (default language) text on the following line;
* a **catalog translation** (`.ct`) file, which gives the translated text for
  each identifier together with the catalog's version, codeset and language.

While scanning, `catscan` reports problems such as unknown commands,
duplicate identifiers or IDs, missing or empty translations, strings that are
too short or too long, mismatching trailing ellipses or blanks, and
placeholders (`%s`, `%ld`, ...) that differ between the description and the
translation.

## Scanning a catalog

```python
from catscan.model import Catalog, ScanOptions
from catscan.diagnostics import Reporter, FatalError
from catscan.scancd import scan_cd_file
from catscan.scanct import scan_ct_file

catalog = Catalog()
reporter = Reporter()
options = ScanOptions()

try:
    scan_cd_file("myprog.cd", catalog, reporter, options)
    scan_ct_file("deutsch.ct", catalog, reporter, options)
except FatalError as exc:
    print("catalog rejected:", exc, "exit code", exc.exit_code)

for entry in catalog.strings:
    print(entry.identifier, entry.id, entry.cd_str, entry.ct_str)
```

`scan_cd_file` returns `False` when the description is doubtful (an unknown
`#` command, a missing minimum or maximum length, or a definition without a
string line) and `True` otherwise. `scan_ct_file` returns `True` and sets
`catalog.ct_scanned` when the translation was read without problems. Both
take an optional `Reporter` and `ScanOptions`; defaults are created when they
are left out.

### Description files

Lines starting with `;` are comments. Lines starting with `#` are commands:
`#language`, `#version`, `#basename`, `#header` and `#lengthbytes` are
stored in the `Catalog`; `#ifdef`, `#endif`, `#array`, `#printf_check_off`
and `#printf_check_on` are accepted and ignored. Any other line is a
definition such as

```
MSG_HELLO (10/2/40)
Hello, world!
```

The ID may be a number, `+n` (an offset from the next free ID), `$hex`, or
left empty (`(//)`) to take the next free ID.

### Translation files

Translations use `## version $VER: ...` (or `## rcsid` together with
`## name`), `## codeset`, `## language` and `## chunk`. A missing codeset or
version raises `FatalError`. `## language` is stored as a `LANG` chunk in
`Catalog.chunks`. Identifiers missing a translation are reported as warnings.

### Options

`ScanOptions` holds:

* `lang_to_lower` – lowercase the language names (default `True`);
* `copy_news` and `old_msg_new` – when set, a translation comment starting
  with the marker (default `"; ***NEW***"`) marks the preceding string as
  not translated;
* `warn_ct_gaps` – warn again, with line numbers, about every identifier
  without a translation.

## Diagnostics

`catscan.diagnostics.Reporter` writes messages to its `stream` (standard
error by default). `error` and `error_quick` print the message and raise
`FatalError`; `warn` and `warn_quick` print it unless `quiet` is set, and
always increase `warnings` and set `return_code` to 5. The `file` and `line`
members tell where the scan currently is. Every message text is a member of
the `Message` enum, which has a `number`, a `template` and a `format(*args)`
method.

## Helpers

* `catscan.model` – `Catalog`, `CatString`, `CatalogChunk` and `ScanOptions`.
  `Catalog.find_string(identifier)` looks up one string;
  `Catalog.add_chunk(chunk_id, text)` appends a chunk named by the first four
  characters of `chunk_id`.
* `catscan.utils` – `LineReader` (logical lines with backslash
  continuation), `read_char` (escape-sequence decoding), `stricmp` and
  `strnicmp` (case-insensitive comparison), `utf8_strlen`, `convert_string`
  (charset conversion of bytes, returning `None` with a warning on failure),
  `gethex`, `getoctal`, `over_space`, `strip_file_name`, `add_file_name`,
  `version_string` and `usage_text`.
* `catscan.byteorder` – 16- and 32-bit byte swappers and `choose_swappers`,
  which returns the `word` and `long` pair for `"little"` or `"big"` (the
  running machine's order by default).
* `catscan.dates` – `parse_date(text, fmt)`, which reads day, month and year
  using `%d`, `%e`, `%m`, `%y` and `%Y` and returns `DateFields` (`day`,
  zero-based `month`, `year` counted from 1900, `valid`, `remainder`).

## What the package does not do

`catscan` only reads and checks catalogs. It does not write binary catalog
files, new translation files or generated source files, and it has no
command-line program; `usage_text()` only returns a description text.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.