import pytest

from conquest_map.models import MatchResult
from conquest_map.results import ResultFormatError, format_results, parse_results
from conquest_map.teams import TeamId


def test_parses_full_and_partial_rows() -> None:
    rows = parse_results(
        "week,winner,loser,margin,isPlayoff,isSuperBowl\n"
        "1,KC,CIN,7,false,false\n"
        "\n"
        "  1,SF,DAL,10,true,TRUE  \n"
        "2,GB,CHI\n"
    )
    assert rows == [
        MatchResult(week=1, winner=TeamId.KC, loser=TeamId.CIN, margin=7),
        MatchResult(week=1, winner=TeamId.SF, loser=TeamId.DAL, margin=10, is_playoff=True),
        MatchResult(week=2, winner=TeamId.GB, loser=TeamId.CHI),
    ]


def test_missing_or_garbage_margin_is_none() -> None:
    rows = parse_results("week,winner,loser,margin\n1,KC,CIN,\n1,SF,DAL,abc\n")
    assert [row.margin for row in rows] == [None, None]


def test_windows_line_endings() -> None:
    rows = parse_results("week,winner,loser\r\n3,KC,CIN\r\n")
    assert rows[0].week == 3


@pytest.mark.parametrize(
    "text, message",
    [
        ("", "empty"),
        ("   \n  ", "empty"),
        ("winner,loser,week\n1,KC,CIN", "Expected header"),
        ("week,winner,loser\none,KC,CIN", 'Invalid week value "one"'),
        ("week,winner,loser\n1,KC", "Winner and loser must be provided"),
        ("week,winner,loser\n1,,CIN", "Winner and loser must be provided"),
        ("week,winner,loser\n1,KC,XXX", 'Unknown team "XXX"'),
    ],
)
def test_format_errors(text, message) -> None:
    with pytest.raises(ResultFormatError, match=message):
        parse_results(text)


def test_format_results_is_parseable() -> None:
    rows = [
        MatchResult(week=4, winner=TeamId.NE, loser=TeamId.NYJ, margin=None, is_super_bowl=True),
        MatchResult(week=4, winner=TeamId.LAR, loser=TeamId.SEA, margin=3),
    ]
    text = format_results(rows)
    assert text.splitlines()[0] == "week,winner,loser,margin,isPlayoff,isSuperBowl"
    assert text.splitlines()[1] == "4,NE,NYJ,,false,true"
    assert parse_results(text) == rows
