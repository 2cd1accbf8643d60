import pytest

from transacto.abi.codec import (
    decode_address,
    decode_bool,
    decode_bytes32,
    decode_order_summaries,
    decode_order_view,
    decode_uint,
    encode_address,
    encode_bool,
    encode_bytes32,
    encode_call,
    encode_order_summary,
    encode_order_view,
    encode_uint,
    pad_to,
    split_words,
)
from transacto.errors import DecodeError, ValidationError
from transacto.models.order import AssetType, OrderStatus, OrderView

ADDR = "0x" + "Ab" * 20
OID = "0x" + "1f" * 32


def _view(**kw):
    base = dict(
        order_id=OID,
        maker=ADDR.lower(),
        asset_type=AssetType.RWA,
        asset_id="0x" + "7e" * 32,
        amount=1_000,
        price_per_unit=2 * 10**18,
        is_sell=True,
        filled_amount=250,
        status=OrderStatus.OPEN,
        created_at=1_700_000_000,
    )
    base.update(kw)
    return OrderView(**base)


def test_encode_uint_1000():
    assert encode_uint(1000) == "0" * 61 + "3e8"


def test_pad_to_pads_and_truncates_low_order():
    assert pad_to("0xABC", 2) == "0abc"
    assert pad_to("0x123456", 2) == "3456"
    assert len(pad_to("1")) == 64


def test_encode_uint_rejects_out_of_range():
    with pytest.raises(ValidationError):
        encode_uint(-1)
    with pytest.raises(ValidationError):
        encode_uint(2**256)
    assert decode_uint(encode_uint(2**256 - 1)) == 2**256 - 1


def test_roundtrip_address_id_uint():
    assert decode_address(encode_address(ADDR)) == ADDR.lower()
    assert decode_bytes32(encode_bytes32(OID)) == OID
    assert decode_uint(encode_uint(123456789)) == 123456789


def test_bool_words():
    assert encode_bool(True) == "0" * 63 + "1"
    assert decode_bool("0" * 62 + "20") is True
    assert decode_bool("0" * 64) is False


def test_address_taken_from_low_order_bytes():
    word = "ff" * 12 + "12" * 20
    assert decode_address(word) == "0x" + "12" * 20


def test_encode_bytes32_accepts_raw_bytes():
    assert encode_bytes32(b"\x01" * 32) == "01" * 32
    with pytest.raises(ValidationError):
        encode_bytes32(b"\x01" * 31)


def test_encode_call_concatenates_selector_and_words():
    data = encode_call("0x3D7E849A", encode_bytes32(OID), encode_uint(5))
    assert data == "0x3d7e849a" + "1f" * 32 + "0" * 63 + "5"
    with pytest.raises(ValidationError):
        encode_call("0x1234", encode_uint(1))


def test_split_words_rejects_misaligned_and_short():
    with pytest.raises(DecodeError):
        split_words("0x" + "0" * 63)
    with pytest.raises(DecodeError):
        split_words("0x" + "0" * 64, min_words=2)
    assert split_words("0x") == []


def test_decode_order_view_fixed_offsets():
    v = _view()
    assert decode_order_view("0x" + encode_order_view(v)) == v


def test_decode_order_view_short_result():
    with pytest.raises(DecodeError):
        decode_order_view("0x" + encode_order_view(_view())[:-64])


def test_decode_order_view_unknown_status():
    words = split_words(encode_order_view(_view()))
    words[8] = encode_uint(7)
    with pytest.raises(DecodeError):
        decode_order_view("".join(words))


def test_decode_order_summaries_flat_batch():
    a = _view()
    b = _view(order_id="0x" + "22" * 32, is_sell=False, status=OrderStatus.CANCELLED)
    data = "0x" + encode_order_summary(a) + encode_order_summary(b)
    out = decode_order_summaries(data)
    assert out == [a.summary(), b.summary()]
    assert out[1].side == "buy"

    with pytest.raises(DecodeError):
        decode_order_summaries(data + encode_uint(1))


def test_filled_above_amount_is_rejected():
    bad = _view(amount=100, filled_amount=101)
    with pytest.raises(DecodeError):
        decode_order_view("0x" + encode_order_view(bad))
    with pytest.raises(DecodeError):
        decode_order_summaries("0x" + encode_order_summary(bad))


def test_remaining_after_decode():
    v = decode_order_view("0x" + encode_order_view(_view(amount=100, filled_amount=100)))
    assert v.remaining == 0
    assert v.summary().remaining == 0
