import pytest

from gawire.protocol.properties import classify_properties, normalize_key, parse_number


def test_classify_splits_numeric_and_string_values() -> None:
    out = classify_properties([("age", "30"), ("plan name", "gold")])
    assert out.numbers == {"age": 30.0}
    assert out.strings == {"plan_name": "gold"}
    assert not set(out.numbers) & set(out.strings)


def test_normalize_key_replaces_every_space() -> None:
    assert normalize_key("a b  c") == "a_b__c"


def test_last_write_wins_across_maps() -> None:
    out = classify_properties([("score", "1"), ("score", "high"), ("level", "low"), ("level", "2")])
    assert out.strings == {"score": "high"}
    assert out.numbers == {"level": 2.0}


def test_currency_is_diverted_for_event_properties() -> None:
    out = classify_properties([("currency", "USD"), ("value", "9.99")], divert_currency=True)
    assert out.currency == "USD"
    assert "currency" not in out.strings
    assert "currency" not in out.numbers
    assert out.numbers == {"value": 9.99}


def test_currency_is_regular_property_for_user_properties() -> None:
    out = classify_properties([("currency", "USD")])
    assert out.currency is None
    assert out.strings == {"currency": "USD"}


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("10", 10.0), ("-2.5", -2.5), ("+3", 3.0), (".5", 0.5), ("5.", 5.0), ("1e3", 1000.0), ("1E-2", 0.01)],
)
def test_parse_number_accepts_float_literals(raw: str, expected: float) -> None:
    assert parse_number(raw) == expected


@pytest.mark.parametrize("raw", ["", " 1", "1 ", "1_000", "0x10", "abc", "1,5", "1.2.3", "e5"])
def test_parse_number_rejects_other_strings(raw: str) -> None:
    assert parse_number(raw) is None


def test_parse_number_accepts_special_values() -> None:
    assert parse_number("inf") == float("inf")
    assert parse_number("-Infinity") == float("-inf")
    nan = parse_number("NaN")
    assert nan is not None and nan != nan
