import hashlib
import time
from dataclasses import replace
from typing import Callable, List, Optional

from transacto.abi import selectors as sel
from transacto.abi.codec import (
    decode_bool,
    decode_bytes32,
    decode_uint,
    encode_bool,
    encode_bytes32,
    encode_order_summary,
    encode_order_view,
    encode_uint,
    split_words,
)
from transacto.errors import RpcRemoteError
from transacto.models.order import AssetType, OrderStatus, OrderView
from transacto.models.tx import TxPayload
from transacto.rpc.base import IRpcTransport

FAKE_CONTRACT = "0x0000000000000000000000000000000000007c0c"
ZERO_ID = "0x" + "0" * 64
REVERT = 3  # JSON-RPC code geth uses for "execution reverted"


def _revert(reason: str):
    raise RpcRemoteError(REVERT, f"execution reverted: {reason}")


class FakeOtcChain(IRpcTransport):
    """In-memory stand-in for the OTC contract behind an RPC node.

    Answers `eth_call` with the same word layout as the deployed contract, and
    can `execute` post/fill/cancel payloads so built transactions can be
    checked end to end without a chain.
    """

    name = "fake"

    def __init__(
        self,
        address: str = FAKE_CONTRACT,
        min_order_size: int = 1,
        fee_bps: int = 25,
        paused: bool = False,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.address = address.lower()
        self.min_order_size = min_order_size
        self.fee_bps = fee_bps
        self.paused = paused
        self._clock = clock or (lambda: int(time.time()))
        self._orders: List[OrderView] = []
        self._seq = 0
        self.calls: List[str] = []  # selectors seen by eth_call

    # --- state ---------------------------------------------------------------

    def _new_id(self, maker: str) -> str:
        self._seq += 1
        digest = hashlib.sha256(f"{maker}:{self._seq}".encode()).hexdigest()
        return "0x" + digest

    def add_order(
        self,
        maker: str,
        amount: int,
        price_per_unit: int,
        is_sell: bool = True,
        asset_type: AssetType = AssetType.CRYPTO,
        asset_id: str = ZERO_ID,
        filled_amount: int = 0,
        status: OrderStatus = OrderStatus.OPEN,
    ) -> OrderView:
        o = OrderView(
            order_id=self._new_id(maker),
            maker=maker.lower(),
            asset_type=asset_type,
            asset_id=asset_id.lower(),
            amount=amount,
            price_per_unit=price_per_unit,
            is_sell=is_sell,
            filled_amount=filled_amount,
            status=status,
            created_at=self._clock(),
        )
        self._orders.append(o)
        return o

    def _find(self, order_id: str) -> Optional[int]:
        for i, o in enumerate(self._orders):
            if o.order_id == order_id:
                return i
        return None

    def orders(self) -> List[OrderView]:
        return list(self._orders)

    @classmethod
    def seeded(cls, **kwargs) -> "FakeOtcChain":
        """Chain with a handful of demo orders in every lifecycle state."""
        chain = cls(**kwargs)
        alice = "0x" + "a1" * 20
        bob = "0x" + "b2" * 20
        chain.add_order(alice, 1_000, 2 * 10**18, is_sell=True)
        chain.add_order(bob, 500, 3 * 10**17, is_sell=False, filled_amount=200)
        chain.add_order(
            alice,
            10,
            1_500 * 10**18,
            is_sell=True,
            asset_type=AssetType.RWA,
            asset_id="0x" + "7e" * 32,
        )
        chain.add_order(bob, 40, 10**18, filled_amount=40, status=OrderStatus.FILLED)
        chain.add_order(alice, 75, 10**18, status=OrderStatus.CANCELLED)
        return chain

    # --- eth_call ------------------------------------------------------------

    def eth_call(self, to: str, data: str) -> str:
        if to.lower() != self.address:
            return "0x"  # no code at address
        h = data[2:].lower()
        selector, args = "0x" + h[:8], split_words(h[8:])
        self.calls.append(selector)

        if selector == sel.GET_ORDER_IDS_LENGTH:
            return "0x" + encode_uint(len(self._orders))
        if selector == sel.GET_ORDER_IDS:
            return "0x" + "".join(encode_bytes32(o.order_id) for o in self._orders)
        if selector == sel.GET_ORDER_AT:
            return "0x" + encode_bytes32(self._at(args).order_id)
        if selector == sel.GET_ORDER_VIEW_BY_INDEX:
            return "0x" + encode_order_view(self._at(args))
        if selector == sel.GET_ORDER_VIEW:
            i = self._find(decode_bytes32(args[0]))
            if i is None:
                return "0x" + "0" * 64 * 10  # zeroed struct for unknown ids
            return "0x" + encode_order_view(self._orders[i])
        if selector == sel.GET_ORDER_SUMMARIES_BATCH:
            offset = decode_uint(args[0])
            limit = min(decode_uint(args[1]), sel.VIEW_BATCH)
            page = self._orders[offset : offset + limit]
            return "0x" + "".join(encode_order_summary(o) for o in page)
        if selector == sel.IS_PLATFORM_PAUSED:
            return "0x" + encode_bool(self.paused)
        if selector == sel.MIN_ORDER_SIZE:
            return "0x" + encode_uint(self.min_order_size)
        if selector == sel.FEE_PERCENT_BPS:
            return "0x" + encode_uint(self.fee_bps)
        _revert(f"unknown selector {selector}")

    def _at(self, args: List[str]) -> OrderView:
        index = decode_uint(args[0])
        if index >= len(self._orders):
            _revert("index out of bounds")
        return self._orders[index]

    # --- state-changing calls --------------------------------------------------

    def execute(self, tx: TxPayload, sender: str) -> Optional[str]:
        """Apply an unsigned payload as if `sender` had sent it.

        Returns the new order id for postOrder, None otherwise.
        """
        if tx.to.lower() != self.address:
            _revert("wrong contract")
        if self.paused:
            _revert("paused")
        h = tx.data[2:].lower()
        selector, args = "0x" + h[:8], split_words(h[8:])
        sender = sender.lower()

        if selector == sel.POST_ORDER:
            amount = decode_uint(args[2])
            if amount < self.min_order_size:
                _revert("below min order size")
            o = self.add_order(
                maker=sender,
                asset_type=AssetType(decode_uint(args[0])),
                asset_id=decode_bytes32(args[1]),
                amount=amount,
                price_per_unit=decode_uint(args[3]),
                is_sell=decode_bool(args[4]),
            )
            return o.order_id

        i = self._find(decode_bytes32(args[0]))
        if i is None:
            _revert("no such order")
        o = self._orders[i]
        if o.status != OrderStatus.OPEN:
            _revert("order not open")

        if selector == sel.FILL_ORDER:
            qty = decode_uint(args[1])
            if qty == 0 or qty > o.remaining:
                _revert("bad fill amount")
            filled = o.filled_amount + qty
            status = OrderStatus.FILLED if filled == o.amount else OrderStatus.OPEN
            self._orders[i] = replace(o, filled_amount=filled, status=status)
            return None
        if selector == sel.CANCEL_ORDER:
            if sender != o.maker:
                _revert("not maker")
            self._orders[i] = replace(o, status=OrderStatus.CANCELLED)
            return None
        _revert(f"unknown selector {selector}")
