import pytest

from scanner_registration.backend.scanner import Scanner
from scanner_registration.common.geometry import Point
from scanner_registration.config import InputConfig
from scanner_registration.frontend.scanner_io import (
    ScannerParseError,
    format_scanners,
    load_scanners,
    parse_point,
    parse_scanners,
)

TWO_SCANNERS = """\
--- scanner 0 ---
5,5,5
-1,0,1

--- scanner 1 ---
10,-20,30
"""


def test_example_block_sizes(example_path):
    scanners = load_scanners(example_path)
    assert [len(s) for s in scanners] == [25, 25, 26, 25, 26]


def test_beacons_sorted_by_taxicab_norm():
    scanners = parse_scanners(TWO_SCANNERS)
    assert scanners[0].beacons == [Point(-1, 0, 1), Point(5, 5, 5)]
    for scanner in parse_scanners(TWO_SCANNERS):
        norms = [b.abs_taxicab() for b in scanner]
        assert norms == sorted(norms)


def test_no_sort_keeps_input_order():
    scanners = parse_scanners(TWO_SCANNERS, InputConfig(sort_beacons=False))
    assert scanners[0].beacons == [Point(5, 5, 5), Point(-1, 0, 1)]
    assert scanners[1].beacons == [Point(10, -20, 30)]


def test_headers_optional_and_trailing_blank_optional():
    scanners = parse_scanners("1,2,3\n4,5,6\n\n7,8,9")
    assert [len(s) for s in scanners] == [2, 1]


def test_surrounding_whitespace_tolerated():
    scanners = parse_scanners("--- scanner 0 ---\n  1, 2, 3  \n\n\n")
    assert scanners[0].beacons == [Point(1, 2, 3)]


@pytest.mark.parametrize(
    "text, line_no",
    [
        ("--- scanner 0 ---\n1,2,3\n1,2\n", 3),
        ("--- scanner 0 ---\n1,2,x\n", 2),
        ("1,2,3\n--- scanner 1 ---\n4,5,6\n", 2),
        ("--- scanner 0 ---\n\n1,2,3\n", 1),
        ("1,2,3\n\n--- scanner 1 ---\n", 3),
        ("1,2,40000\n", 1),
    ],
    ids=["short", "non-integer", "missing-blank", "empty-block", "empty-last-block", "range"],
)
def test_errors_carry_line_number(text, line_no):
    with pytest.raises(ScannerParseError) as excinfo:
        parse_scanners(text)
    assert excinfo.value.line_no == line_no
    assert str(excinfo.value).startswith(f"line {line_no}: ")


def test_empty_input_rejected():
    with pytest.raises(ScannerParseError):
        parse_scanners("")
    with pytest.raises(ScannerParseError):
        parse_scanners("\n\n")


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_scanners("oops\n")


def test_parse_point_range():
    assert parse_point("-32767,0,32767") == Point(-32767, 0, 32767)
    assert parse_point("100,0,0", max_abs_coordinate=100) == Point(100, 0, 0)
    with pytest.raises(ValueError):
        parse_point("101,0,0", max_abs_coordinate=100)


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        load_scanners("/nonexistent/beacons.txt")


def test_format_parses_back(example_path):
    scanners = load_scanners(example_path)
    again = parse_scanners(format_scanners(scanners))
    assert [s.beacons for s in again] == [s.beacons for s in scanners]


def test_format_layout():
    text = format_scanners([Scanner([Point(1, 2, 3)]), Scanner([Point(-4, 5, 6)])])
    assert text == "--- scanner 0 ---\n1,2,3\n\n--- scanner 1 ---\n-4,5,6\n"
