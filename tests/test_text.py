import pytest

from region_points.text import parse_int, split, trim


def test_trim_keeps_field_separators():
    assert trim("  chr1\t1\t2 \r\n") == "chr1\t1\t2"
    assert trim("\t1\t2\n") == "\t1\t2"


def test_split_keeps_empty_fields():
    assert split("\t", "a\t\tb") == ["a", "", "b"]
    assert split("\t", "") == [""]


@pytest.mark.parametrize(("text", "expected"), [("0", 0), ("42", 42), ("-7", -7), ("+3", 3), ("007", 7)])
def test_parse_int(text, expected):
    assert parse_int(text, "field") == expected


@pytest.mark.parametrize("text", ["", " 1", "1 ", "1_000", "1.0", "0x10", "١", "-"])
def test_parse_int_rejects(text):
    with pytest.raises(ValueError, match="start: cannot parse"):
        parse_int(text, "start")
