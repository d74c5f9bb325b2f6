import pytest

from merkledrop.coin import Coin
from merkledrop.params import Params, default_params, validate_creation_fee


def test_default_params_fee():
    params = default_params()
    assert params.creation_fee.amount == 1_000_000_000
    assert params.creation_fee.denom == "stake"


def test_default_params_validate_and_str():
    params = default_params()
    params.validate()
    assert "stake" in str(params)
    assert "1000000000" in str(params)


def test_validate_creation_fee_wrong_type():
    with pytest.raises(ValueError, match="invalid parameter type"):
        validate_creation_fee("1000ubtsg")


def test_validate_creation_fee_bad_denom():
    with pytest.raises(ValueError, match="invalid creation fee"):
        validate_creation_fee(Coin("1x", 10))


def test_params_validate_negative_fee():
    with pytest.raises(ValueError, match="invalid creation fee"):
        Params(Coin("ubtsg", -1)).validate()


def test_zero_fee_is_valid():
    params = Params(Coin("ubtsg", 0))
    params.validate()
    assert params.creation_fee == Coin("ubtsg", 0)