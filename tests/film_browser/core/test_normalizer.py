import math

from film_browser.core.normalizer import FIELD_ALIASES, normalize, normalize_rows, pick, to_number


def test_to_number_strips_currency_and_separators():
    assert to_number("$1,234") == 1234
    assert to_number("￥500") == 500
    assert to_number("¥2,000") == 2000
    assert to_number("  86 ") == 86
    assert to_number("8.1") == 8.1
    assert to_number(102) == 102


def test_to_number_unparseable_is_nan():
    for value in ["abc", "", "   ", None, "1.2.3", "12 min", "nan", "inf", "1_000", True]:
        assert math.isnan(to_number(value)), value


def test_pick_skips_blank_and_missing_values():
    row = {"title": "  ", "Title": None, "name": "Totoro", "film": "Other"}
    assert pick(row, FIELD_ALIASES["title"]) == "Totoro"
    assert pick({}, FIELD_ALIASES["title"]) is None


def test_alias_priority_earlier_alias_wins():
    # "Rating" comes before "score" in the alias list
    rec = normalize({"score": "5.0", "Rating": "7.5"})
    assert rec.rating == 7.5

    # "imdb_rating" beats everything else
    rec = normalize({"Score": "1", "rating": "2", "imdb_rating": "3"})
    assert rec.rating == 3


def test_aliases_are_case_sensitive():
    rec = normalize({"TITLE": "Nope", "RATING": "9"})
    assert rec.title is None
    assert math.isnan(rec.rating)


def test_later_alias_not_consulted_when_earlier_one_unparseable():
    # "runtime" is present but garbage: it still wins, yielding NaN
    rec = normalize({"runtime": "long", "minutes": "90"})
    assert math.isnan(rec.runtime)


def test_normalize_full_row():
    raw = {
        "film": "Spirited Away",
        "ReleaseYear": "2001",
        "Dir": "Hayao Miyazaki",
        "IMDb": "8.6",
        "RunningTime": "125",
        "BoxOffice": "$395,580,000",
    }
    rec = normalize(raw)

    assert rec.title == "Spirited Away"
    assert rec.year == 2001
    assert rec.director == "Hayao Miyazaki"
    assert rec.rating == 8.6
    assert rec.runtime == 125
    assert rec.gross == 395_580_000
    assert rec.raw is raw


def test_normalize_never_raises_on_malformed_rows():
    rec = normalize({"title": 42, "year": "unknown", "rating": "", "runtime": None, "junk": object()})

    assert rec.title == "42"
    assert rec.director is None
    for value in (rec.year, rec.rating, rec.runtime, rec.gross):
        assert math.isnan(value)


def test_normalize_is_idempotent_on_canonical_input():
    first = normalize({"title": "A", "year": "1988", "director": "D", "rating": "8.1", "runtime": "86"})
    second = normalize(first.to_dict())

    assert second.title == first.title
    assert second.director == first.director
    assert second.year == first.year
    assert second.rating == first.rating
    assert second.runtime == first.runtime
    assert math.isnan(first.gross) and math.isnan(second.gross)


def test_normalize_rows_preserves_order():
    records = normalize_rows([{"title": "B"}, {"title": "A"}])
    assert [r.title for r in records] == ["B", "A"]
