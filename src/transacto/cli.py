import functools
import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

import typer
import yaml

from transacto.abi.selectors import PRICE_SCALE
from transacto.client import OtcClient
from transacto.data.export import export_orders
from transacto.errors import TransactoError
from transacto.execution.payloads import TxBuilder
from transacto.execution.preflight import Preflight
from transacto.logging_config import setup as setup_logging
from transacto.models.order import AssetType, OrderSummary, OrderView
from transacto.models.tx import TxPayload
from transacto.rpc.fake import FakeOtcChain
from transacto.rpc.http import HttpRpcTransport
from transacto.settings import DEFAULT_CONFIG, Settings

log = logging.getLogger("cli")

app = typer.Typer(help="Transacto: OTC contract client")


class Ctx:
    def __init__(self, config: str, use_fake: bool):
        self.config = config
        self.use_fake = use_fake
        self._client: Optional[OtcClient] = None

    @property
    def client(self) -> OtcClient:
        if self._client is None:
            if self.use_fake:
                chain = FakeOtcChain.seeded()
                self._client = OtcClient(chain, chain.address)
            else:
                s = Settings.load(self.config)
                self._client = OtcClient.from_settings(
                    s, HttpRpcTransport.from_settings(s.rpc)
                )
        return self._client

    @property
    def builder(self) -> TxBuilder:
        return TxBuilder(self.client.contract)


def _errors(fn):
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except (TransactoError, ValueError, FileNotFoundError, yaml.YAMLError) as e:
            log.debug("command failed", exc_info=True)
            typer.echo(f"error: {e}", err=True)
            raise typer.Exit(code=1)

    return wrapper


def parse_price(value: str) -> int:
    """Decimal price per unit ("1.5") to its 1e18 fixed-point integer."""
    try:
        d = Decimal(value)
    except InvalidOperation:
        raise ValueError(f"invalid price: {value!r}") from None
    if not d.is_finite():
        raise ValueError(f"invalid price: {value!r}")
    scaled = d * PRICE_SCALE
    if scaled != scaled.to_integral_value():
        raise ValueError(f"price has more than 18 decimals: {value}")
    return int(scaled)


def _fmt_summary(o: OrderSummary) -> str:
    return (
        f"{o.order_id} {o.side:<4} {o.status.name:<9} "
        f"filled={o.filled_amount}/{o.amount} price={o.price_per_unit} maker={o.maker}"
    )


def _fmt_view(o: OrderView) -> str:
    lines = [
        f"order_id       {o.order_id}",
        f"maker          {o.maker}",
        f"asset          {o.asset_type.name} {o.asset_id}",
        f"side           {o.side}",
        f"amount         {o.amount}",
        f"filled         {o.filled_amount} (remaining {o.remaining})",
        f"price_per_unit {o.price_per_unit}",
        f"status         {o.status.name}",
        f"created_at     {o.created_at}",
    ]
    return "\n".join(lines)


def _emit_tx(tx: TxPayload) -> None:
    typer.echo(json.dumps({"method": tx.method, **tx.as_dict()}, indent=2))


@app.callback()
def main(
    ctx: typer.Context,
    config: str = typer.Option(DEFAULT_CONFIG, help="YAML config file"),
    use_fake: bool = typer.Option(False, help="in-memory contract with demo orders"),
    log_dir: str = typer.Option("logs", help="log file directory ('' disables file logging)"),
):
    setup_logging(log_dir=log_dir or None)
    ctx.obj = Ctx(config=config, use_fake=use_fake)


@app.command()
@_errors
def count(ctx: typer.Context):
    typer.echo(ctx.obj.client.order_count())


@app.command()
@_errors
def order(
    ctx: typer.Context,
    order_id: Optional[str] = typer.Argument(None, help="0x + 64 hex"),
    index: Optional[int] = typer.Option(None, help="look up by position instead"),
):
    c: OtcClient = ctx.obj.client
    if index is not None:
        view = c.get_order_by_index(index)
    elif order_id is not None:
        view = c.get_order(order_id)
    else:
        raise ValueError("pass an ORDER_ID or --index")
    typer.echo(_fmt_view(view))


@app.command()
@_errors
def orders(
    ctx: typer.Context,
    offset: int = typer.Option(0, min=0),
    limit: int = typer.Option(48, min=1, help="clamped to the contract batch size"),
    open_only: bool = typer.Option(False, "--open", help="only OPEN orders"),
):
    page = ctx.obj.client.get_order_summaries(offset, limit)
    if open_only:
        page = [o for o in page if o.is_open]
    if not page:
        typer.echo("no orders")
    for o in page:
        typer.echo(_fmt_summary(o))


@app.command()
@_errors
def stats(ctx: typer.Context):
    s = ctx.obj.client.platform_stats()
    typer.echo(f"total_orders   {s.total_orders}")
    typer.echo(f"open_orders    {s.open_orders}")
    typer.echo(f"min_order_size {s.min_order_size}")
    typer.echo(f"fee_bps        {s.fee_bps}")
    typer.echo(f"paused         {str(s.paused).lower()}")


@app.command("fill-value")
@_errors
def fill_value(ctx: typer.Context, order_id: str, amount: int):
    typer.echo(ctx.obj.client.fill_value_wei(order_id, amount))


@app.command()
@_errors
def quote(ctx: typer.Context, order_id: str, amount: int):
    q = ctx.obj.client.quote_fill(order_id, amount)
    typer.echo(
        json.dumps(
            {
                "order_id": q.order_id,
                "fill_amount": q.fill_amount,
                "value_wei": str(q.value_wei),
                "fee_wei": str(q.fee_wei),
            },
            indent=2,
        )
    )


@app.command()
@_errors
def post(
    ctx: typer.Context,
    amount: int = typer.Option(..., help="order size in units"),
    price: str = typer.Option(..., help="price per unit, decimal (scaled by 1e18)"),
    asset_type: str = typer.Option("crypto", help="crypto | rwa"),
    asset_id: str = typer.Option("0x" + "0" * 64, help="32-byte asset id"),
    sell: bool = typer.Option(True, "--sell/--buy"),
    check: bool = typer.Option(False, help="run preflight against live state"),
):
    if check:
        pf = Preflight(ctx.obj.client)
        pf.require(pf.check_post(amount))
    tx = ctx.obj.builder.post_order(
        AssetType.parse(asset_type), asset_id, amount, parse_price(price), sell
    )
    _emit_tx(tx)


@app.command()
@_errors
def fill(
    ctx: typer.Context,
    order_id: str,
    amount: int,
    check: bool = typer.Option(False, help="run preflight against live state"),
    attach_value: bool = typer.Option(False, help="attach the quoted fill value as tx value"),
):
    c: OtcClient = ctx.obj.client
    if check:
        pf = Preflight(c)
        pf.require(pf.check_fill(order_id, amount))
    value = c.fill_value_wei(order_id, amount) if attach_value else 0
    _emit_tx(ctx.obj.builder.fill_order(order_id, amount, value=value))


@app.command()
@_errors
def cancel(
    ctx: typer.Context,
    order_id: str,
    check: bool = typer.Option(False, help="run preflight against live state"),
    sender: Optional[str] = typer.Option(None, help="maker address for the preflight check"),
):
    if check:
        pf = Preflight(ctx.obj.client)
        pf.require(pf.check_cancel(order_id, sender))
    _emit_tx(ctx.obj.builder.cancel_order(order_id))


@app.command("export")
@_errors
def export(
    ctx: typer.Context,
    out: str = typer.Option(..., help="output CSV path"),
    open_only: bool = typer.Option(False, "--open", help="only OPEN orders"),
) -> None:
    path = export_orders(ctx.obj.client, out_path=out, open_only=open_only)
    typer.echo(f"Saved: {Path(path)}")


if __name__ == "__main__":
    app()
