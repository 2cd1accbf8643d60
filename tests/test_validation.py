import pytest

from transacto.errors import ValidationError
from transacto.validation import is_address, is_order_id, require_address, require_order_id


@pytest.mark.parametrize(
    "value",
    ["0x" + "a" * 40, "0x" + "AbCdEf0123" * 4],
)
def test_address_accepted(value):
    assert is_address(value)


@pytest.mark.parametrize(
    "value",
    [
        "0x" + "a" * 39,
        "0x" + "a" * 41,
        "a" * 42,
        "0x" + "g" * 40,
        "0x" + "a" * 40 + "\n",
        None,
        "",
    ],
)
def test_address_rejected(value):
    assert not is_address(value)


def test_order_id_accepted():
    assert is_order_id("0x" + "0" * 64)
    assert is_order_id("0x" + "aBcD" * 16)


@pytest.mark.parametrize(
    "value",
    [
        "0x" + "0" * 40,
        "0x" + "0" * 63,
        "0x" + "0" * 65,
        "0x" + "g" * 64,
        "ab" * 33,
        "0X" + "a" * 64,
        "0x" + "a" * 64 + "\n",
        None,
        "",
    ],
)
def test_order_id_rejected(value):
    assert not is_order_id(value)


def test_require_raises_value_error():
    with pytest.raises(ValidationError):
        require_address("0x1234")
    with pytest.raises(ValueError):
        require_order_id("nope")
    assert require_order_id("0x" + "f" * 64) == "0x" + "f" * 64
