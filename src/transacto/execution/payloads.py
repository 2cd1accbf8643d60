from transacto.abi import selectors as sel
from transacto.abi.codec import encode_bool, encode_bytes32, encode_call, encode_uint
from transacto.errors import ValidationError
from transacto.models.order import AssetType
from transacto.models.tx import TxPayload
from transacto.validation import require_address, require_order_id


def _positive(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{name} must be a positive integer, got {value!r}")
    return value


class TxBuilder:
    """Builds unsigned calldata for the contract's state-changing methods.

    Nothing here talks to the network or signs; the payloads are handed to
    whatever wallet or signer the caller uses.
    """

    def __init__(self, contract: str):
        self.contract = require_address(contract, "contract address")

    def _tx(self, selector: str, *words: str, value: int = 0) -> TxPayload:
        if value < 0:
            raise ValidationError(f"value must be >= 0, got {value}")
        return TxPayload(
            to=self.contract,
            data=encode_call(selector, *words),
            value=value,
            method=sel.NAMES[selector],
        )

    def post_order(
        self,
        asset_type: AssetType,
        asset_id: str,
        amount: int,
        price_per_unit: int,
        is_sell: bool,
    ) -> TxPayload:
        return self._tx(
            sel.POST_ORDER,
            encode_uint(int(AssetType(asset_type))),
            encode_bytes32(asset_id),
            encode_uint(_positive("amount", amount)),
            encode_uint(_positive("price_per_unit", price_per_unit)),
            encode_bool(is_sell),
        )

    def fill_order(self, order_id: str, fill_amount: int, value: int = 0) -> TxPayload:
        require_order_id(order_id)
        return self._tx(
            sel.FILL_ORDER,
            encode_bytes32(order_id),
            encode_uint(_positive("fill_amount", fill_amount)),
            value=value,
        )

    def cancel_order(self, order_id: str) -> TxPayload:
        require_order_id(order_id)
        return self._tx(sel.CANCEL_ORDER, encode_bytes32(order_id))
