import pytest

from core.prefix_request import PrefixRequest


@pytest.mark.parametrize(
    "text, expected",
    [
        ("78", PrefixRequest("", 78)),
        ("AB3:78", PrefixRequest("AB3", 78)),
        ("S0:0", PrefixRequest("S0", 0)),
        (":5", PrefixRequest("", 5)),
    ],
)
def test_parse(text, expected):
    assert PrefixRequest.parse(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "A:", "A:x", "A:B:3", "A:-1", "A:+3", "A:1_000", "A:\u0663", "A: 3", "12 "])
def test_parse_rejects_bad_counts(text):
    with pytest.raises(ValueError):
        PrefixRequest.parse(text)


def test_str_matches_command_line_form():
    assert str(PrefixRequest("P1", 50)) == "P1:50"
    assert str(PrefixRequest("", 600)) == "600"
