import pytest

from merkledrop.coin import Coin, parse_coin_normalized, validate_denom


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1000000ubtsg", Coin("ubtsg", 1000000)),
        ("500000000ubtsg", Coin("ubtsg", 500000000)),
    ],
)
def test_parse_coin(text, expected):
    assert parse_coin_normalized(text) == expected


def test_parse_truncates_decimal_amount():
    assert parse_coin_normalized("1.5ubtsg") == Coin("ubtsg", 1)


def test_parse_allows_surrounding_and_inner_space():
    assert parse_coin_normalized(" 10 ubtsg ") == parse_coin_normalized("10ubtsg")


@pytest.mark.parametrize("amount", [0, 1, 123456789])
def test_string_round_trip(amount):
    coin = Coin("ubtsg", amount)
    assert str(coin) == f"{amount}ubtsg"
    assert parse_coin_normalized(str(coin)) == coin


@pytest.mark.parametrize(
    "text", ["ubtsg", "1000", "10u", "-5ubtsg", "1.0000000000000000001ubtsg", ""]
)
def test_parse_rejects_invalid(text):
    with pytest.raises(ValueError):
        parse_coin_normalized(text)


def test_validate_rejects_negative_amount():
    with pytest.raises(ValueError, match="negative"):
        Coin("ubtsg", -1).validate()


def test_validate_rejects_bad_denom():
    with pytest.raises(ValueError, match="invalid denom"):
        Coin("1bad", 5).validate()


@pytest.mark.parametrize("denom", ["ab", "9abc", "a" * 129, "ab cd"])
def test_validate_denom_rejects(denom):
    with pytest.raises(ValueError):
        validate_denom(denom)