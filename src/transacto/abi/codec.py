"""
Fixed-width hexadecimal codec for the OTC contract.

Call data is a 4-byte selector followed by 32-byte big-endian words. Results
are flat concatenations of 32-byte words read at fixed offsets; there is no
dynamic-length / offset-pointer handling.
"""
from __future__ import annotations

from typing import List

from transacto.errors import DecodeError, ValidationError
from transacto.models.order import AssetType, OrderStatus, OrderSummary, OrderView
from transacto.validation import require_address, require_order_id

WORD = 32
WORD_HEX = WORD * 2
UINT256_MAX = 2**256 - 1

ORDER_VIEW_WORDS = 10
ORDER_SUMMARY_WORDS = 7

_HEX_DIGITS = set("0123456789abcdef")


def _strip0x(value: str) -> str:
    return value[2:] if value[:2] in ("0x", "0X") else value


def pad_to(value: str, width: int = WORD) -> str:
    """Left-pad a hex string with zeros to `width` bytes.

    Inputs longer than `width` bytes keep only their low-order `width*2`
    characters (fixed-width wraparound).
    """
    h = _strip0x(value).lower()
    n = width * 2
    if len(h) > n:
        return h[-n:]
    return h.rjust(n, "0")


# --- encoders -------------------------------------------------------------


def encode_uint(value: int) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"expected int, got {type(value).__name__}")
    if value < 0 or value > UINT256_MAX:
        raise ValidationError(f"value out of uint256 range: {value}")
    return pad_to(format(value, "x"))


def encode_bool(value: bool) -> str:
    return encode_uint(1 if value else 0)


def encode_address(address: str) -> str:
    require_address(address)
    return pad_to(address)


def encode_bytes32(value: str | bytes) -> str:
    if isinstance(value, (bytes, bytearray)):
        if len(value) != WORD:
            raise ValidationError(f"expected 32 bytes, got {len(value)}")
        return bytes(value).hex()
    require_order_id(value, "bytes32 value")
    return _strip0x(value).lower()


def encode_call(selector: str, *words: str) -> str:
    sel = _strip0x(selector).lower()
    if len(sel) != 8:
        raise ValidationError(f"selector must be 4 bytes: {selector!r}")
    for w in words:
        if len(w) != WORD_HEX:
            raise ValidationError(f"argument word must be {WORD_HEX} hex chars")
    return "0x" + sel + "".join(words)


# --- decoders -------------------------------------------------------------


def split_words(data: str, min_words: int = 0) -> List[str]:
    h = _strip0x(data).lower()
    if len(h) % WORD_HEX:
        raise DecodeError(f"result is not word aligned ({len(h)} hex chars)")
    if not set(h) <= _HEX_DIGITS:
        raise DecodeError("result contains non-hex characters")
    words = [h[i : i + WORD_HEX] for i in range(0, len(h), WORD_HEX)]
    if len(words) < min_words:
        raise DecodeError(f"short result: {len(words)} words, need {min_words}")
    return words


def decode_uint(word: str) -> int:
    return int(word, 16) if word else 0


def decode_bool(word: str) -> bool:
    return decode_uint(word) != 0


def decode_address(word: str) -> str:
    return "0x" + pad_to(word)[-40:]


def decode_bytes32(word: str) -> str:
    return "0x" + pad_to(word)


def _decode_status(word: str) -> OrderStatus:
    raw = decode_uint(word)
    try:
        return OrderStatus(raw)
    except ValueError:
        raise DecodeError(f"unknown order status {raw}") from None


def _decode_asset_type(word: str) -> AssetType:
    raw = decode_uint(word)
    try:
        return AssetType(raw)
    except ValueError:
        raise DecodeError(f"unknown asset type {raw}") from None


def _check_filled(amount: int, filled: int) -> None:
    if filled > amount:
        raise DecodeError(f"filled amount {filled} exceeds order amount {amount}")


def decode_order_view(data: str) -> OrderView:
    w = split_words(data, ORDER_VIEW_WORDS)
    _check_filled(decode_uint(w[4]), decode_uint(w[7]))
    return OrderView(
        order_id=decode_bytes32(w[0]),
        maker=decode_address(w[1]),
        asset_type=_decode_asset_type(w[2]),
        asset_id=decode_bytes32(w[3]),
        amount=decode_uint(w[4]),
        price_per_unit=decode_uint(w[5]),
        is_sell=decode_bool(w[6]),
        filled_amount=decode_uint(w[7]),
        status=_decode_status(w[8]),
        created_at=decode_uint(w[9]),
    )


def _summary_from_words(w: List[str]) -> OrderSummary:
    _check_filled(decode_uint(w[2]), decode_uint(w[5]))
    return OrderSummary(
        order_id=decode_bytes32(w[0]),
        maker=decode_address(w[1]),
        amount=decode_uint(w[2]),
        price_per_unit=decode_uint(w[3]),
        is_sell=decode_bool(w[4]),
        filled_amount=decode_uint(w[5]),
        status=_decode_status(w[6]),
    )


def decode_order_summary(data: str) -> OrderSummary:
    return _summary_from_words(split_words(data, ORDER_SUMMARY_WORDS))


def decode_order_summaries(data: str) -> List[OrderSummary]:
    w = split_words(data)
    if len(w) % ORDER_SUMMARY_WORDS:
        raise DecodeError(
            f"batch result has {len(w)} words, not a multiple of {ORDER_SUMMARY_WORDS}"
        )
    return [
        _summary_from_words(w[i : i + ORDER_SUMMARY_WORDS])
        for i in range(0, len(w), ORDER_SUMMARY_WORDS)
    ]


def decode_bytes32_list(data: str) -> List[str]:
    return [decode_bytes32(x) for x in split_words(data)]


# --- encoders for whole records (used by the in-memory contract) -----------


def encode_order_summary(o: OrderSummary | OrderView) -> str:
    return "".join(
        [
            encode_bytes32(o.order_id),
            encode_address(o.maker),
            encode_uint(o.amount),
            encode_uint(o.price_per_unit),
            encode_bool(o.is_sell),
            encode_uint(o.filled_amount),
            encode_uint(int(o.status)),
        ]
    )


def encode_order_view(o: OrderView) -> str:
    return "".join(
        [
            encode_bytes32(o.order_id),
            encode_address(o.maker),
            encode_uint(int(o.asset_type)),
            encode_bytes32(o.asset_id),
            encode_uint(o.amount),
            encode_uint(o.price_per_unit),
            encode_bool(o.is_sell),
            encode_uint(o.filled_amount),
            encode_uint(int(o.status)),
            encode_uint(o.created_at),
        ]
    )
