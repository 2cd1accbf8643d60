from dataclasses import dataclass


@dataclass(frozen=True)
class PlatformStats:
    total_orders: int
    open_orders: int
    min_order_size: int
    fee_bps: int
    paused: bool


@dataclass(frozen=True)
class FillQuote:
    order_id: str
    fill_amount: int
    value_wei: int
    fee_wei: int
