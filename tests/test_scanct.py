import io

import pytest

from catscan.diagnostics import FatalError, Message, Reporter
from catscan.model import Catalog, CatString, ScanOptions
from catscan.scanct import scan_ct_file

HEADER = (
    "## version $VER: test.catalog 1.0 (01.01.2020)\n"
    "## codeset 0\n"
    "## language deutsch\n"
)


def _scan(tmp_path, body, strings=None, options=None, header=HEADER):
    path = tmp_path / "test.ct"
    path.write_text(header + body, encoding="latin-1")
    catalog = Catalog(strings=list(strings or []))
    reporter = Reporter(stream=io.StringIO())
    result = scan_ct_file(path, catalog, reporter, options)
    return result, catalog, reporter


def _output(reporter):
    return reporter.stream.getvalue()


def test_basic_translation(tmp_path):
    strings = [CatString("MSG_HELLO", cd_str="Hello")]
    result, catalog, reporter = _scan(tmp_path, "MSG_HELLO\nHallo\n", strings)
    assert result is True
    assert catalog.ct_scanned is True
    cs = catalog.find_string("MSG_HELLO")
    assert cs.ct_str == "Hallo"
    assert cs.not_in_ct is False
    assert catalog.cat_version_string == "$VER: test.catalog 1.0 (01.01.2020)"
    assert catalog.cat_language == "deutsch"
    assert catalog.code_set == 0
    assert [(c.chunk_id, c.text) for c in catalog.chunks] == [("LANG", "deutsch")]
    assert reporter.warnings == 0


def test_language_lowercased(tmp_path):
    header = "## version $VER: x 1.0 (01.01.2020)\n## codeset 0\n## language Deutsch\n"
    _, catalog, _ = _scan(tmp_path, "", header=header)
    assert catalog.cat_language == "deutsch"
    assert catalog.chunks[0].text == "deutsch"


def test_language_case_kept(tmp_path):
    header = "## version $VER: x 1.0 (01.01.2020)\n## codeset 0\n## language Deutsch\n"
    _, catalog, _ = _scan(
        tmp_path, "", header=header, options=ScanOptions(lang_to_lower=False)
    )
    assert catalog.cat_language == "Deutsch"


def test_codeset_decimal(tmp_path):
    header = "## version $VER: x 1.0 (01.01.2020)\n## codeset 106\n"
    _, catalog, _ = _scan(tmp_path, "", header=header)
    assert catalog.code_set == 106


def test_codeset_leading_zero_is_octal(tmp_path):
    header = "## version $VER: x 1.0 (01.01.2020)\n## codeset 010\n"
    _, catalog, _ = _scan(tmp_path, "", header=header)
    assert catalog.code_set == 8


@pytest.mark.parametrize("value", ["abc", "12x", ""])
def test_codeset_invalid(tmp_path, value):
    header = f"## version $VER: x 1.0 (01.01.2020)\n## codeset {value}\n"
    with pytest.raises(FatalError) as info:
        _scan(tmp_path, "", header=header)
    assert Message.ERR_BADCTCODESET.template in info.value.text


def test_codeset_twice(tmp_path):
    header = "## version $VER: x 1.0 (01.01.2020)\n## codeset 0\n## codeset 0\n"
    with pytest.raises(FatalError) as info:
        _scan(tmp_path, "", header=header)
    assert Message.ERR_DOUBLECTCODESET.template in info.value.text


def test_missing_codeset(tmp_path):
    header = "## version $VER: x 1.0 (01.01.2020)\n"
    with pytest.raises(FatalError) as info:
        _scan(tmp_path, "", header=header)
    assert Message.ERR_NOCTCODESET.template in info.value.text


def test_missing_version(tmp_path):
    with pytest.raises(FatalError) as info:
        _scan(tmp_path, "", header="## codeset 0\n")
    assert Message.ERR_NOCTVERSION.template in info.value.text


def test_bad_version_format(tmp_path):
    with pytest.raises(FatalError) as info:
        _scan(tmp_path, "", header="## version 1.0\n## codeset 0\n")
    assert Message.ERR_BADCTVERSION.template in info.value.text


def test_version_twice(tmp_path):
    header = "## version $VER: a 1.0 (01.01.2020)\n## version $VER: b 1.0 (01.01.2020)\n"
    with pytest.raises(FatalError) as info:
        _scan(tmp_path, "", header=header)
    assert Message.ERR_DOUBLECTVERSION.template in info.value.text


def test_rcsid_and_name_replace_version(tmp_path):
    header = "## rcsid $Id: test.ct 1.0 $\n## name\n## codeset 0\n"
    result, catalog, _ = _scan(tmp_path, "", header=header)
    assert result is True
    assert catalog.cat_rcs_id == "$Id: test.ct 1.0 $"
    assert catalog.cat_name == ""


def test_name_with_argument_is_unknown_command(tmp_path):
    header = "## rcsid $Id: test.ct 1.0 $\n## name test\n## codeset 0\n"
    with pytest.raises(FatalError) as info:
        _scan(tmp_path, "", header=header)
    assert Message.ERR_NOCTVERSION.template in info.value.text


def test_language_twice(tmp_path):
    with pytest.raises(FatalError) as info:
        _scan(tmp_path, "## language english\n")
    assert Message.ERR_DOUBLECTLANGUAGE.template in info.value.text


def test_chunk_command(tmp_path):
    _, catalog, _ = _scan(tmp_path, "## chunk AUTH Someone Else\n")
    assert (catalog.chunks[-1].chunk_id, catalog.chunks[-1].text) == (
        "AUTH",
        "Someone Else",
    )


def test_unknown_command_warns(tmp_path):
    _, _, reporter = _scan(tmp_path, "## frobnicate\n")
    assert reporter.warnings == 1
    assert Message.ERR_UNKNOWNCTCOMMAND.template in _output(reporter)


def test_unknown_identifier(tmp_path):
    _, _, reporter = _scan(tmp_path, "MSG_OTHER\nAnders\n")
    assert reporter.warnings == 1
    assert Message.ERR_UNKNOWNIDENTIFIER.format("MSG_OTHER") in _output(reporter)


def test_double_identifier_is_fatal(tmp_path):
    strings = [CatString("MSG_A", cd_str="One")]
    with pytest.raises(FatalError) as info:
        _scan(tmp_path, "MSG_A\nEins\nMSG_A\nZwei\n", strings)
    assert Message.ERR_DOUBLE_IDENTIFIER.format("MSG_A") in info.value.text


def test_extra_characters_after_identifier(tmp_path):
    strings = [CatString("MSG_A", cd_str="One")]
    with pytest.raises(FatalError) as info:
        _scan(tmp_path, "MSG_A (1//)\nEins\n", strings)
    assert Message.ERR_EXTRA_CHARACTERS_ID.format("MSG_A") in info.value.text


def test_leading_blanks_are_fatal(tmp_path):
    strings = [CatString("MSG_A", cd_str="One")]
    with pytest.raises(FatalError) as info:
        _scan(tmp_path, "  MSG_A\nEins\n", strings)
    assert Message.ERR_UNEXPECTEDBLANKS.template in info.value.text


def test_missing_translation_reported(tmp_path):
    strings = [CatString("MSG_A", cd_str="One"), CatString("MSG_B", cd_str="Two")]
    _, catalog, reporter = _scan(tmp_path, "MSG_A\nEins\n", strings)
    assert catalog.find_string("MSG_B").ct_str is None
    assert reporter.warnings == 1
    assert Message.ERR_MISSINGTRANSLATION.format("MSG_B") in _output(reporter)


def test_warn_ct_gaps_adds_warnings(tmp_path):
    strings = [CatString("MSG_A", cd_str="One"), CatString("MSG_B", cd_str="Two")]
    _, _, reporter = _scan(
        tmp_path, "MSG_A\nEins\n", strings, options=ScanOptions(warn_ct_gaps=True)
    )
    assert reporter.warnings == 2
    assert Message.ERR_CTGAP.format("MSG_B") in _output(reporter)


def test_missing_string_at_end(tmp_path):
    strings = [CatString("MSG_A", cd_str="One")]
    _, catalog, reporter = _scan(tmp_path, "MSG_A\n", strings)
    assert Message.ERR_MISSINGSTRING.template in _output(reporter)
    assert catalog.find_string("MSG_A").ct_str is None
    assert reporter.return_code == 5


@pytest.mark.parametrize(
    "cd, ct, message",
    [
        ("Open...", "Oeffnen", Message.ERR_TRAILING_ELLIPSIS),
        ("Open", "Oeffnen...", Message.ERR_NO_TRAILING_ELLIPSIS),
        ("Name ", "Name", Message.ERR_TRAILING_BLANKS),
        ("Name", "Name ", Message.ERR_NO_TRAILING_BLANKS),
        ("%s files", "%ld Dateien", Message.ERR_MISMATCHING_PLACEHOLDERS),
        ("%s of %ld", "%s von", Message.ERR_MISSING_PLACEHOLDERS),
        ("Files", "%s Dateien", Message.ERR_EXCESSIVE_PLACEHOLDERS),
        ("One", "", Message.ERR_EMPTYTRANSLATION),
    ],
)
def test_translation_checks_warn(tmp_path, cd, ct, message):
    strings = [CatString("MSG_A", cd_str=cd)]
    _, catalog, reporter = _scan(tmp_path, f"MSG_A\n{ct}\n", strings)
    assert catalog.find_string("MSG_A").ct_str == ct
    assert reporter.warnings == 1
    assert message.format("MSG_A") in _output(reporter)


@pytest.mark.parametrize(
    "cd, ct",
    [
        ("100% done", "100% fertig"),
        ("%s", "%s"),
        ("50%%", "50%%"),
        ("%s and %d", "%s und %d"),
        ("Save...", "Sichern..."),
    ],
)
def test_translation_checks_pass(tmp_path, cd, ct):
    strings = [CatString("MSG_A", cd_str=cd)]
    _, _, reporter = _scan(tmp_path, f"MSG_A\n{ct}\n", strings)
    assert reporter.warnings == 0
    assert _output(reporter) == ""


def test_string_too_short(tmp_path):
    strings = [CatString("MSG_A", cd_str="Hello", min_len=5)]
    _, _, reporter = _scan(tmp_path, "MSG_A\nabc\n", strings)
    assert Message.ERR_STRING_TOO_SHORT.format("MSG_A") in _output(reporter)


def test_string_too_long(tmp_path):
    strings = [CatString("MSG_A", cd_str="abc", max_len=3)]
    _, _, reporter = _scan(tmp_path, "MSG_A\nabcdef\n", strings)
    assert Message.ERR_STRING_TOO_LONG.format("MSG_A") in _output(reporter)


def test_copy_news_marks_string(tmp_path):
    strings = [CatString("MSG_A", cd_str="One")]
    _, catalog, _ = _scan(
        tmp_path,
        "MSG_A\nEins\n; ***NEW***\n",
        strings,
        options=ScanOptions(copy_news=True),
    )
    assert catalog.find_string("MSG_A").not_in_ct is True


def test_new_marker_ignored_without_copy_news(tmp_path):
    strings = [CatString("MSG_A", cd_str="One")]
    _, catalog, _ = _scan(tmp_path, "MSG_A\nEins\n; ***NEW***\n", strings)
    assert catalog.find_string("MSG_A").not_in_ct is False


def test_missing_file(tmp_path):
    reporter = Reporter(stream=io.StringIO())
    path = tmp_path / "absent.ct"
    with pytest.raises(FatalError) as info:
        scan_ct_file(path, Catalog(), reporter)
    assert Message.ERR_NOCATALOGTRANSLATION.format(str(path)) in info.value.text
    assert info.value.exit_code == 10