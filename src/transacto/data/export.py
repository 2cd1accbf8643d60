# src/transacto/data/export.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable

import pandas as pd

from transacto.client import OtcClient
from transacto.models.order import OrderSummary

log = logging.getLogger("export")

COLUMNS = [
    "order_id",
    "maker",
    "side",
    "amount",
    "filled_amount",
    "remaining",
    "price_per_unit",
    "status",
]


def orders_frame(summaries: Iterable[OrderSummary]) -> pd.DataFrame:
    rows = [
        (
            o.order_id,
            o.maker,
            o.side,
            o.amount,
            o.filled_amount,
            o.remaining,
            o.price_per_unit,
            o.status.name,
        )
        for o in summaries
    ]
    # object dtype keeps uint256 values as exact python ints
    return pd.DataFrame(rows, columns=COLUMNS, dtype=object)


def export_orders(
    client: OtcClient,
    out_path: str = "data/orders.csv",
    open_only: bool = False,
) -> str:
    summaries = client.iter_order_summaries()
    if open_only:
        summaries = (o for o in summaries if o.is_open)
    df = orders_frame(summaries)

    path = Path(out_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    log.info("exported %d orders to %s", len(df), path)
    return str(path)
