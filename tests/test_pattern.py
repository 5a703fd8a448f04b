# File: tests/test_pattern.py
"""Тесты сопоставления шаблонов: подстановочный знак, якорь $, нормализация."""
import pytest

from site_robots.rules.pattern import Pattern

MATCHING = [
    ("/", ["/", "/fish", "//"], []),
    ("/*", ["/fish", "//"], []),
    ("/$", ["/"], ["/fish", "//", "/$"]),
    (
        "/fish",
        ["/fish", "/fish.html", "/fish/salmon.html", "/fishheads", "/fish.php?id=anything"],
        ["/Fish.asp", "/catfish", "/?id=fish", "/desert/fish"],
    ),
    (
        "/fish/",
        ["/fish/", "/fish/?id=anything", "/fish/salmon.htm"],
        ["/fish", "/fish.html", "/animals/fish/", "/Fish/Salmon.asp"],
    ),
    (
        "/fish*",
        ["/fish", "/fish.html", "/fishheads/yummy.html"],
        ["/Fish.asp", "/catfish", "/desert/fish"],
    ),
    (
        "/*.php",
        ["/index.php", "/folder/filename.php?parameters", "/folder/any.php.file.html", "/filename.php/"],
        ["/", "/windows.PHP"],
    ),
    ("/fish*.php", ["/fish.php", "/fishheads/catfish.php?parameters"], ["/Fish.PHP"]),
    (
        "/*.php$",
        ["/filename.php", "/folder/filename.php", "/a.php.php"],
        ["/filename.php?parameters", "/filename.php/", "/filename.php5", "/windows.PHP"],
    ),
    ("/a*b*c", ["/abc", "/a-b-c", "/aXbYcZ"], ["/acb", "/ab"]),
    ("/a**b", ["/ab", "/a/x/b"], ["/a"]),
]


@pytest.mark.parametrize(
    "raw,path,expected",
    [(raw, path, True) for raw, yes, _ in MATCHING for path in yes]
    + [(raw, path, False) for raw, _, no in MATCHING for path in no],
)
def test_matching_table(raw, path, expected):
    assert (Pattern(raw).matches(path) is not None) is expected


@pytest.mark.parametrize(
    "raw,length",
    [("/example/", 9), ("/example/nope.txt", 17), ("*", 1), ("", 1), ("/*.php$", 7)],
)
def test_length_counts_pattern_characters(raw, length):
    pattern = Pattern(raw)
    assert pattern.length == length
    assert pattern.matches("/example/nope.txt.php") in (None, length)


def test_empty_and_bare_wildcard_match_everything_with_length_one():
    for raw in ("", "*"):
        assert Pattern(raw).matches("/anything/at/all?q=1") == 1
        assert Pattern(raw).matches("/") == 1


def test_missing_leading_slash_is_implied():
    assert Pattern("fish").matches("/fish.html") == 4
    assert Pattern("*.gif").matches("/img/cat.gif") == 5


@pytest.mark.parametrize(
    "raw,path",
    [
        ("/%7Euser", "/~user/page"),
        ("/~user", "/%7euser/page"),
        ("/a%2fb", "/a%2Fb"),
        ("/café", "/caf%C3%A9"),
        ("/caf%c3%a9", "/café"),
        ("/with space", "/with%20space"),
    ],
)
def test_percent_encoding_is_normalized(raw, path):
    assert Pattern(raw).matches(path) == len(raw)


def test_reserved_escapes_stay_distinct():
    assert Pattern("/a%2Fb").matches("/a/b") is None
    assert Pattern("/a%3Fb").matches("/a?b") is None


def test_length_is_not_the_decoded_length():
    assert Pattern("/%7E").matches("/~") == 4


def test_end_anchor_after_normalized_segment():
    # The anchor applies to the normalized tail like any other segment.
    assert Pattern("/%7Euser$").matches("/~user") == 9
    assert Pattern("/~user$").matches("/%7Euser") == 7
    assert Pattern("/%7Euser$").matches("/~user/") is None


def test_encoded_dollar_is_a_literal_not_an_anchor():
    pattern = Pattern("/price%24")
    assert not pattern.anchored
    assert pattern.matches("/price%24/list") == 9
    assert pattern.matches("/price") is None


def test_dollar_inside_pattern_is_literal():
    pattern = Pattern("/a$b")
    assert not pattern.anchored
    assert pattern.matches("/a$b/c") == 4
    assert pattern.matches("/a") is None


@pytest.mark.parametrize("raw", ["/", "*", "/*", "**", ""])
def test_universal_patterns(raw):
    assert Pattern(raw).is_universal


@pytest.mark.parametrize("raw", ["/$", "/a", "/*a", "*$"])
def test_non_universal_patterns(raw):
    assert not Pattern(raw).is_universal


@pytest.mark.parametrize(
    "wide,narrow,expected",
    [
        ("/a", "/ab*c", True),
        ("/a", "/a$", True),
        ("/a", "/a", True),
        ("*", "/anything$", True),
        ("/a$", "/a", False),
        ("/ab", "/a", False),
        ("/a*", "/abc", False),
        ("/%61", "/a/b", True),
    ],
)
def test_covers_is_conservative(wide, narrow, expected):
    assert Pattern(wide).covers(Pattern(narrow)) is expected


def test_equality_uses_raw_text():
    assert Pattern("/a") == Pattern("/a")
    assert Pattern("/a") != Pattern("/%61")
    assert len({Pattern("/a"), Pattern("/a")}) == 1
