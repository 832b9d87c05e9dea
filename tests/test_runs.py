import re

from ballot_parsers.runs import (
    CANVASS_MIN_TOKENS,
    PRECINCT_RE,
    Token,
    group_runs,
    iter_page_groups,
    page_tokens,
)

from conftest import FakePage


def tokens(*lines):
    out = []
    for line in lines:
        for i, text in enumerate(line):
            out.append(Token(text, i == len(line) - 1))
    return out


def test_groups_close_on_end_of_line():
    row = ["20470", "Vote by Mail", "41", "5", "12.20 %", "5", "0", "4", "1"]
    assert group_runs(tokens(row), CANVASS_MIN_TOKENS, PRECINCT_RE) == [row]


def test_short_groups_are_dropped():
    stream = tokens(["Page", "1"], ["20470", "Total", "0", "0"], ["A", "B", "C"])
    assert group_runs(stream, 2) == [["20470", "Total", "0", "0"], ["A", "B", "C"]]
    assert group_runs(stream, 3) == [["20470", "Total", "0", "0"]]


def test_groups_must_lead_with_precinct():
    stream = tokens(["Precinct", "Method", "Registered"], ["2047", "Total", "0", "0"], ["20470", "Total", "0", "0"])
    assert group_runs(stream, CANVASS_MIN_TOKENS, PRECINCT_RE) == [["20470", "Total", "0", "0"]]


def test_buffer_resets_after_rejected_group():
    stream = tokens(["x"], ["20470", "Total", "0", "0"])
    assert group_runs(stream, 2, re.compile(r'^\d{5}$')) == [["20470", "Total", "0", "0"]]


def test_trailing_tokens_without_end_of_line_are_dropped():
    stream = tokens(["20470", "Total", "0", "0"]) + [Token("30512", False), Token("Total", False)]
    assert group_runs(stream, 2) == [["20470", "Total", "0", "0"]]


def test_page_tokens_flags_line_ends():
    page = FakePage([["20470", "Total", "0", "0"], ["30512", "Total"]])
    assert [t.eol for t in page_tokens(page)] == [False, False, False, True, False, True]


def test_pages_are_grouped_independently():
    # A row cut off at the bottom of page 1 must not join page 2's first row
    first = FakePage([["20470", "Total", "0", "0"]])
    first.words.append({"text": "30512", "x0": 40.0, "top": 62.0})
    second = FakePage([["30512", "Total", "0", "0"]])

    class PDF:
        pages = [first, second]

    groups = list(iter_page_groups(PDF, CANVASS_MIN_TOKENS, PRECINCT_RE))
    assert groups == [(1, ["20470", "Total", "0", "0"]), (2, ["30512", "Total", "0", "0"])]
    assert first.flushed and second.flushed
