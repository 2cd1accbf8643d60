# src/transacto/client.py
from __future__ import annotations
import logging
from typing import Iterator, List

from transacto.abi import selectors as sel
from transacto.abi.codec import (
    decode_bool,
    decode_bytes32,
    decode_bytes32_list,
    decode_order_summaries,
    decode_order_view,
    decode_uint,
    encode_bytes32,
    encode_call,
    encode_uint,
    split_words,
)
from transacto.errors import ConfigError, DecodeError, OrderNotFoundError, ValidationError
from transacto.models.order import OrderStatus, OrderSummary, OrderView
from transacto.models.platform import FillQuote, PlatformStats
from transacto.rpc.base import IRpcTransport
from transacto.settings import Settings
from transacto.validation import require_address, require_order_id

log = logging.getLogger("client")

ZERO_ADDRESS = "0x" + "0" * 40


def fill_value(price_per_unit: int, fill_amount: int) -> int:
    """Wei owed for `fill_amount` units at a 1e18-scaled price (floor)."""
    return price_per_unit * fill_amount // sel.PRICE_SCALE


def fee_for(value_wei: int, fee_bps: int) -> int:
    return value_wei * fee_bps // sel.BPS_DENOM


class OtcClient:
    """Read-only queries against the OTC contract.

    Every method issues `eth_call`s through the transport and decodes the
    fixed-layout result. Transport failures and short or malformed results
    raise; nothing falls back to a default value.
    """

    def __init__(
        self,
        transport: IRpcTransport,
        contract: str,
        batch_size: int = sel.VIEW_BATCH,
    ):
        self.transport = transport
        self.contract = require_address(contract, "contract address")
        self.batch_size = max(1, min(batch_size, sel.VIEW_BATCH))

    @classmethod
    def from_settings(cls, s: Settings, transport: IRpcTransport) -> "OtcClient":
        if not s.contract.address:
            raise ConfigError("contract.address is not configured")
        return cls(transport, s.contract.address, batch_size=s.contract.batch_size)

    def _call(self, selector: str, *words: str) -> str:
        data = encode_call(selector, *words)
        log.debug("%s(%d args)", sel.NAMES.get(selector, selector), len(words))
        return self.transport.eth_call(self.contract, data)

    def _word(self, selector: str, *words: str) -> str:
        return split_words(self._call(selector, *words), 1)[0]

    @staticmethod
    def _index(index: int) -> str:
        if index < 0:
            raise ValidationError(f"index must be >= 0, got {index}")
        return encode_uint(index)

    # --- orders ---------------------------------------------------------------

    def order_count(self) -> int:
        return decode_uint(self._word(sel.GET_ORDER_IDS_LENGTH))

    def order_id_at(self, index: int) -> str:
        return decode_bytes32(self._word(sel.GET_ORDER_AT, self._index(index)))

    def order_ids(self) -> List[str]:
        return decode_bytes32_list(self._call(sel.GET_ORDER_IDS))

    def get_order(self, order_id: str) -> OrderView:
        require_order_id(order_id)
        view = decode_order_view(self._call(sel.GET_ORDER_VIEW, encode_bytes32(order_id)))
        # unknown ids come back as a zeroed struct
        if view.maker == ZERO_ADDRESS:
            raise OrderNotFoundError(order_id)
        return view

    def get_order_by_index(self, index: int) -> OrderView:
        view = decode_order_view(
            self._call(sel.GET_ORDER_VIEW_BY_INDEX, self._index(index))
        )
        if view.maker == ZERO_ADDRESS:
            raise OrderNotFoundError(f"#{index}")
        return view

    def get_order_summaries(self, offset: int = 0, limit: int | None = None) -> List[OrderSummary]:
        """One page of summaries; `limit` is clamped to the contract batch size.

        An offset at or past the end of the order list yields an empty page.
        """
        start = self._index(offset)
        limit = self.batch_size if limit is None else min(limit, self.batch_size)
        if limit <= 0:
            return []
        if offset >= self.order_count():
            return []
        data = self._call(sel.GET_ORDER_SUMMARIES_BATCH, start, encode_uint(limit))
        return decode_order_summaries(data)

    def iter_order_summaries(self) -> Iterator[OrderSummary]:
        total = self.order_count()
        offset = 0
        while offset < total:
            data = self._call(
                sel.GET_ORDER_SUMMARIES_BATCH,
                encode_uint(offset),
                encode_uint(self.batch_size),
            )
            page = decode_order_summaries(data)
            if not page:
                raise DecodeError(f"empty batch at offset {offset} of {total}")
            yield from page
            offset += len(page)

    # --- platform ---------------------------------------------------------------

    def is_paused(self) -> bool:
        return decode_bool(self._word(sel.IS_PLATFORM_PAUSED))

    def min_order_size(self) -> int:
        return decode_uint(self._word(sel.MIN_ORDER_SIZE))

    def fee_bps(self) -> int:
        return decode_uint(self._word(sel.FEE_PERCENT_BPS))

    def platform_stats(self) -> PlatformStats:
        # open orders are tallied here, the contract has no aggregate for it
        total = 0
        open_orders = 0
        for o in self.iter_order_summaries():
            total += 1
            if o.status == OrderStatus.OPEN:
                open_orders += 1
        stats = PlatformStats(
            total_orders=total,
            open_orders=open_orders,
            min_order_size=self.min_order_size(),
            fee_bps=self.fee_bps(),
            paused=self.is_paused(),
        )
        log.info(
            "stats total=%d open=%d paused=%s", stats.total_orders, stats.open_orders, stats.paused
        )
        return stats

    # --- fills ------------------------------------------------------------------

    def fill_value_wei(self, order_id: str, fill_amount: int) -> int:
        if fill_amount < 0:
            raise ValidationError(f"fill amount must be >= 0, got {fill_amount}")
        view = self.get_order(order_id)
        return fill_value(view.price_per_unit, fill_amount)

    def quote_fill(self, order_id: str, fill_amount: int) -> FillQuote:
        value = self.fill_value_wei(order_id, fill_amount)
        return FillQuote(
            order_id=order_id,
            fill_amount=fill_amount,
            value_wei=value,
            fee_wei=fee_for(value, self.fee_bps()),
        )
