from dataclasses import dataclass
from enum import IntEnum


class AssetType(IntEnum):
    CRYPTO = 0
    RWA = 1  # real-world asset

    @classmethod
    def parse(cls, value: str) -> "AssetType":
        key = value.strip().upper()
        if key in ("REAL-WORLD-ASSET", "REAL_WORLD_ASSET"):
            key = "RWA"
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"unknown asset type: {value!r} (crypto|rwa)") from None


class OrderStatus(IntEnum):
    OPEN = 0
    FILLED = 1
    CANCELLED = 2

    @property
    def is_terminal(self) -> bool:
        return self is not OrderStatus.OPEN


@dataclass(frozen=True)
class OrderSummary:
    order_id: str
    maker: str
    amount: int
    price_per_unit: int  # 1e18 fixed point
    is_sell: bool
    filled_amount: int
    status: OrderStatus

    @property
    def side(self) -> str:
        return "sell" if self.is_sell else "buy"

    @property
    def remaining(self) -> int:
        return self.amount - self.filled_amount

    @property
    def is_open(self) -> bool:
        return self.status == OrderStatus.OPEN


@dataclass(frozen=True)
class OrderView:
    order_id: str
    maker: str
    asset_type: AssetType
    asset_id: str
    amount: int
    price_per_unit: int  # 1e18 fixed point
    is_sell: bool
    filled_amount: int
    status: OrderStatus
    created_at: int  # unix seconds

    @property
    def side(self) -> str:
        return "sell" if self.is_sell else "buy"

    @property
    def remaining(self) -> int:
        return self.amount - self.filled_amount

    @property
    def is_open(self) -> bool:
        return self.status == OrderStatus.OPEN

    def summary(self) -> OrderSummary:
        return OrderSummary(
            order_id=self.order_id,
            maker=self.maker,
            amount=self.amount,
            price_per_unit=self.price_per_unit,
            is_sell=self.is_sell,
            filled_amount=self.filled_amount,
            status=self.status,
        )
